"""Date manipulation utilities"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Union
from zoneinfo import ZoneInfo

from credit_plans.config import settings

BUSINESS_TZ = ZoneInfo(settings.business_timezone)

DateLike = Union[date, datetime]


def to_business_date(value: DateLike, tz: ZoneInfo | None = None) -> date:
    """Local calendar date of a date or instant in the business timezone"""
    tz = tz or BUSINESS_TZ
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(tz).date()
    return value


def add_business_days(from_date: DateLike, days: int, tz: ZoneInfo | None = None) -> datetime:
    """
    Add calendar days in the business timezone and return the UTC instant
    of the resulting local midnight.

    The caller's own timezone never leaks in: 2025-01-01 plus 15 days is
    always 2025-01-16 00:00 in the business zone, whatever host ran it.
    """
    tz = tz or BUSINESS_TZ
    local_day = to_business_date(from_date, tz) + timedelta(days=days)
    local_midnight = datetime.combine(local_day, time.min, tzinfo=tz)
    return local_midnight.astimezone(timezone.utc)
