"""Time-related utility functions for Heat Capacitor.

Provides shared time conversions used across the engine and adapters.
"""

from datetime import datetime, timedelta
from typing import Optional

from homeassistant.util import dt as dt_util

SECONDS_PER_MINUTE = 60


def to_epoch(value: datetime) -> float:
    """Convert a datetime to UTC epoch seconds.

    Naive datetimes are interpreted in Home Assistant's default time zone
    (UTC unless configured otherwise), so naive and aware inputs compare
    consistently.
    """
    return dt_util.as_utc(value).timestamp()


def minutes_to_timedelta(minutes: float) -> timedelta:
    """Convert a (possibly fractional) number of minutes to a timedelta."""
    return timedelta(seconds=minutes * SECONDS_PER_MINUTE)


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse an ISO 8601 string or pass a datetime through.

    Args:
        value: ISO string (e.g. "2021-10-11T00:30:00.000+02:00") or datetime

    Returns:
        Datetime, or None if the value cannot be interpreted
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return dt_util.parse_datetime(value)
    return None
