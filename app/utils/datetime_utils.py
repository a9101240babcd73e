"""
Common date/time helpers.

Storage: all timestamps are stored in UTC.
Display/grid: timestamps are converted to the shop's timezone before the
scheduler computes minutes-from-midnight or day boundaries.
"""

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo


def as_utc(dt: datetime) -> datetime:
    """
    Convert dt to tz-aware UTC.
    If dt is naive, we treat it as UTC (SQLite hands back naive datetimes).
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@lru_cache()
def get_zone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def to_local(dt: datetime, tz_name: str) -> datetime:
    """Stored timestamp -> wall-clock time in tz_name."""
    return as_utc(dt).astimezone(get_zone(tz_name))


def day_range_utc(start_date: date, end_date: date, tz_name: str) -> tuple[datetime, datetime]:
    """
    Inclusive calendar-date range -> UTC bounds.

    Covers [start_date 00:00:00.000, end_date 23:59:59.999] in the shop timezone.
    """
    zone = get_zone(tz_name)
    start_local = datetime.combine(start_date, time.min, tzinfo=zone)
    end_local = datetime.combine(end_date, time(23, 59, 59, 999000), tzinfo=zone)
    return start_local.astimezone(timezone.utc), end_local.astimezone(timezone.utc)


def days_between(start_date: date, end_date: date) -> int:
    """Number of calendar days covered by an inclusive range."""
    return (end_date - start_date) // timedelta(days=1) + 1
