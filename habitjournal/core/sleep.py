# core/sleep.py

"""Sleep duration arithmetic for 12-hour clock entries."""

import math
from typing import Optional

AM = "AM"
PM = "PM"
MERIDIEMS = (AM, PM)


def format_hours(value: float) -> str:
    """Shortest decimal form: 8.0 -> "8", 7.5 -> "7.5"."""
    return "%g" % value


def parse_clock(text: str, meridiem: str) -> Optional[float]:
    """Parse ``"H"`` or ``"H:MM"`` into fractional hours on a 24h clock.

    Returns None when the hour or a given minute part is not a number.
    """
    if not text:
        return None

    parts = text.strip().split(":")
    try:
        hour = int(parts[0])
    except ValueError:
        return None

    minute = 0
    if len(parts) > 1 and parts[1].strip():
        try:
            minute = int(parts[1])
        except ValueError:
            return None

    if meridiem == PM and hour < 12:
        hour += 12
    if meridiem == AM and hour == 12:
        hour = 0

    return hour + minute / 60


def compute_sleep_hours(wake: str, wake_meridiem: str, bed: str, bed_meridiem: str) -> Optional[str]:
    """Hours between bed time and wake time, wrapping past midnight.

    Result is rounded to one decimal and rendered with ``format_hours``;
    None if either time is missing or unparseable.
    """
    if not wake or not bed:
        return None

    wake_hours = parse_clock(wake, wake_meridiem)
    bed_hours = parse_clock(bed, bed_meridiem)
    if wake_hours is None or bed_hours is None:
        return None

    diff = (wake_hours - bed_hours) % 24
    return format_hours(math.floor(diff * 10 + 0.5) / 10)
