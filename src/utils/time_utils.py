"""
Time utility functions for hour truncation and timestamp formatting.
All internal timestamps are timezone-aware UTC; local time is only used for display.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import pytz


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """
    Convert a datetime to aware UTC.

    Naive datetimes are assumed to already represent UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def truncate_to_hour(value: datetime) -> datetime:
    """
    Truncate a datetime to the start of its UTC hour.

    Examples:
        - 12:00:00 -> 12:00
        - 12:45:10 -> 12:00
    """
    return ensure_utc(value).replace(minute=0, second=0, microsecond=0)


def format_entsoe_date(value: datetime) -> str:
    """Format a datetime the way the ENTSO-E API expects it: YYYYMMDDHHmm in UTC."""
    return ensure_utc(value).strftime("%Y%m%d%H%M")


def fetch_window(reference_time: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Range of day-ahead data to request around a reference time.

    Starts at yesterday 00:00 UTC so past prices are available and ends at the
    day after tomorrow 00:00 UTC so tomorrow's auction results are included.
    """
    reference = ensure_utc(reference_time or utc_now())
    midnight = reference.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=1), midnight + timedelta(days=2)


def format_local_time(value: datetime, tz_name: str) -> str:
    """
    Format a timestamp as a 24h 'HH:MM' clock time in the given timezone.

    Args:
        value: Aware (or naive UTC) datetime
        tz_name: pytz timezone name, e.g. 'Europe/Amsterdam'
    """
    local_tz = pytz.timezone(tz_name)
    return ensure_utc(value).astimezone(local_tz).strftime("%H:%M")
