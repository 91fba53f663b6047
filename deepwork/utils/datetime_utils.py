"""
Date and time helpers.

Anything that needs "now" or "today" goes through here so that the pure
planner functions can take today as an argument instead.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc

DAY_ID_PREFIX = "day_"


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.
    """
    return datetime.now(UTC)


def get_user_today(user_timezone: str) -> date:
    """
    Get today's date in the user's timezone.

    Args:
        user_timezone: IANA timezone name (e.g., "Asia/Dubai", "America/New_York")

    Returns:
        date: Today's date in the user's timezone

    Example:
        >>> get_user_today("Asia/Dubai")  # When UTC is 2024-01-19 21:00
        date(2024, 1, 20)  # GST is 2024-01-20 01:00
    """
    tz = ZoneInfo(user_timezone)
    return datetime.now(UTC).astimezone(tz).date()


def day_id_for(day: date) -> str:
    """
    Identifier of the day record a scheduled task belongs to.

    >>> day_id_for(date(2025, 3, 7))
    'day_2025-03-07'
    """
    return f"{DAY_ID_PREFIX}{day.isoformat()}"
