from datetime import date, datetime
from typing import Optional

import pytz

DEFAULT_TZ = "UTC"


def get_timezone(tz_name: Optional[str] = None):
    return pytz.timezone(tz_name or DEFAULT_TZ)


def now_local(tz_name: Optional[str] = None) -> datetime:
    return datetime.now(get_timezone(tz_name))


def today_local(tz_name: Optional[str] = None) -> date:
    return now_local(tz_name).date()
