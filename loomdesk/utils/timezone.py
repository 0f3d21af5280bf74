# FILE: loomdesk/utils/timezone.py
from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from loomdesk.core.config import settings


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE or "Asia/Kolkata")


def now_local() -> datetime:
    """
    Aware "now" in the business timezone (IST unless overridden).
    This is the only wall-clock read in the challan finance code.
    """
    return datetime.now(local_tz())


def as_local_datetime(value: date | datetime) -> datetime:
    """
    Normalise a due date / "now" value to an aware datetime.

    - date      -> local midnight of that day
    - naive dt  -> same wall time, local timezone attached
    - aware dt  -> unchanged
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=local_tz())
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=local_tz())
    raise TypeError(f"expected date or datetime, got {type(value).__name__}")
