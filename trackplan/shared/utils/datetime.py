"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system are timezone-aware UTC. Analytics
date ranges are calendar dates (YYYY-MM-DD) computed from UTC "today".
"""

from datetime import UTC, date, datetime, timedelta


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def utc_today() -> date:
    return utc_now().date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone (SQLite returns naive values)
    - If aware, converts to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def days_ago(days: int, today: date | None = None) -> date:
    """Return the calendar date `days` before today (UTC)."""
    return (today or utc_today()) - timedelta(days=days)


def format_day(day: date) -> str:
    """Format a date as YYYY-MM-DD (the form the analytics API accepts)."""
    return day.isoformat()
