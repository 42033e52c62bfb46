from datetime import date, datetime

import pytest

from habitjournal.core.errors import InvalidWeekKeyError
from habitjournal.core.week_key import (
    format_week_label,
    is_week_key,
    parse_week_key,
    shift_week,
    week_dates,
    week_key_of,
)


def test_dates_in_same_week_share_key():
    assert week_key_of(date(2024, 6, 12)) == "2024-06-10"
    assert week_key_of(date(2024, 6, 14)) == "2024-06-10"
    assert week_key_of(date(2024, 6, 10)) == "2024-06-10"


def test_sunday_belongs_to_previous_monday():
    assert week_key_of(date(2024, 6, 16)) == "2024-06-10"
    assert week_key_of(date(2024, 6, 17)) == "2024-06-17"


def test_week_key_is_idempotent():
    key = week_key_of(date(2024, 6, 13))
    assert week_key_of(key) == key


def test_week_key_accepts_datetime():
    assert week_key_of(datetime(2024, 6, 15, 23, 59)) == "2024-06-10"


def test_shift_week_round_trip():
    key = "2024-06-10"
    assert shift_week(shift_week(key, 3), -3) == key


def test_shift_week_crosses_year_boundary():
    assert shift_week("2024-12-30", 1) == "2025-01-06"
    assert shift_week("2025-01-06", -1) == "2024-12-30"


def test_shift_week_normalizes_non_monday_key():
    assert shift_week("2024-06-12", 0) == "2024-06-10"
    assert shift_week("2024-06-12", 1) == "2024-06-17"


def test_keys_sort_chronologically():
    keys = [shift_week("2024-06-10", delta) for delta in (5, -40, 0, 60)]
    assert sorted(keys) == sorted(keys, key=parse_week_key)


def test_format_week_label():
    assert format_week_label("2024-06-10") == "Jun 10 – Jun 16"
    assert format_week_label("2024-07-29") == "Jul 29 – Aug 4"


def test_week_dates_are_monday_to_sunday():
    days = week_dates("2024-06-10")
    assert len(days) == 7
    assert days[0] == date(2024, 6, 10)
    assert days[-1] == date(2024, 6, 16)


def test_invalid_key_raises_value_error():
    with pytest.raises(InvalidWeekKeyError):
        parse_week_key("not-a-date")
    with pytest.raises(ValueError):
        shift_week("2024-13-01", 1)


def test_is_week_key():
    assert is_week_key("2024-06-10")
    assert not is_week_key("2024-06-11")
    assert not is_week_key("garbage")
    assert not is_week_key(None)


def test_is_week_key_requires_dashed_form():
    assert not is_week_key("20240610")
    assert not is_week_key("2024-W24-1")
    assert not is_week_key("2024-06-10T00:00")
