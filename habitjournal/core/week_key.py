# core/week_key.py

"""Week bucketing: every date maps to the ISO date of its week's Monday."""

from datetime import date, datetime, timedelta
from typing import List, Union

from habitjournal.core.errors import InvalidWeekKeyError

DAYS_IN_WEEK = 7

DateLike = Union[date, datetime, str]


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_week_key(value)


def week_key_of(value: DateLike) -> str:
    """Monday of the week containing ``value``; Sunday closes the prior week."""
    day = _to_date(value)
    monday = day - timedelta(days=day.weekday())
    return monday.isoformat()


def parse_week_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key. The result is not forced onto a Monday."""
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError):
        raise InvalidWeekKeyError(f"Invalid week key: {key!r}")


def is_week_key(key) -> bool:
    """True for a canonical ``YYYY-MM-DD`` string that falls on a Monday."""
    if not isinstance(key, str):
        return False
    try:
        day = parse_week_key(key)
    except InvalidWeekKeyError:
        return False
    # fromisoformat also takes compact and ISO-week forms on newer Pythons
    return day.isoformat() == key and day.weekday() == 0


def shift_week(key: str, delta: int) -> str:
    shifted = parse_week_key(key) + timedelta(weeks=delta)
    return week_key_of(shifted)


def week_dates(key: str) -> List[date]:
    """The seven dates of a week, Monday first."""
    monday = parse_week_key(week_key_of(key))
    return [monday + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]


def short_date_label(day: date) -> str:
    return f"{day.strftime('%b')} {day.day}"


def format_week_label(key: str) -> str:
    """Render ``"Jun 10 – Jun 16"`` for the Monday-Sunday span of ``key``."""
    days = week_dates(key)
    return f"{short_date_label(days[0])} – {short_date_label(days[-1])}"
