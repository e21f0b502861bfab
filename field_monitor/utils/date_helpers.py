"""
Calendar helpers for daily series and forecast bucketing.
"""
from datetime import date, datetime, timedelta, timezone


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(tz=timezone.utc).date()


def trailing_days(reference_date: date, days: int) -> list[date]:
    """
    Consecutive calendar days ending on the reference date.

    Args:
        reference_date: Last day of the window (inclusive)
        days: Window length

    Returns:
        Dates in ascending order, one per day
    """
    return [reference_date - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def local_calendar_date(timestamp: datetime, utc_offset_seconds: int = 0) -> date:
    """
    Calendar date of a timestamp at a fixed UTC offset.

    Naive timestamps are treated as UTC.

    Args:
        timestamp: Point in time
        utc_offset_seconds: Offset of the bucketing timezone from UTC

    Returns:
        The date the timestamp falls on in that timezone
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    local_tz = timezone(timedelta(seconds=utc_offset_seconds))
    return timestamp.astimezone(local_tz).date()


def from_unix_seconds(seconds: int) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)
