"""Date manipulation utilities"""

import math
from datetime import datetime, timezone

SECONDS_PER_DAY = 24 * 60 * 60
DAYS_PER_MONTH = 30


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime (naive values are read as UTC)"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_epoch_millis(millis: int) -> datetime:
    """Convert a millisecond Unix timestamp to an aware UTC datetime"""
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def days_spanned(start: datetime, end: datetime) -> int:
    """Whole days between two instants, rounded up, never less than 1"""
    seconds = (as_utc(end) - as_utc(start)).total_seconds()
    return max(1, math.ceil(seconds / SECONDS_PER_DAY))


def months_spanned(start: datetime, end: datetime) -> int:
    """
    Calendar months covered by a date range, using 30-day months.

    Example:
        Nov 5 -> Jan 10 is 66 days -> 3 months
    """
    return max(1, math.ceil(days_spanned(start, end) / DAYS_PER_MONTH))
