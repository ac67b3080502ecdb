"""Date and time helpers."""
from datetime import date, datetime, time, timezone, tzinfo
from typing import Optional


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """
    Attach UTC to a naive datetime, leave aware datetimes untouched.

    Example:
        >>> ensure_aware(datetime(2025, 1, 1)).tzinfo
        datetime.timezone.utc
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def local_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar date of a moment in the given zone (system local zone by default).

    Args:
        value: Moment to convert; naive values are taken as UTC
        tz: Target zone, None for the system local zone

    Returns:
        The calendar date as seen in that zone
    """
    return ensure_aware(value).astimezone(tz).date()


def local_midnight(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """Start of a calendar day in the given zone, as an aware datetime."""
    naive = datetime.combine(day, time.min)
    if tz is None:
        return naive.astimezone()
    return naive.replace(tzinfo=tz)


def minutes_between(start: datetime, end: datetime) -> int:
    """
    Whole minutes from start to end, floored and never negative.

    Example:
        >>> minutes_between(datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 10, 30, 59))
        90
    """
    delta = ensure_aware(end) - ensure_aware(start)
    return max(0, int(delta.total_seconds() // 60))
