"""
Due-date urgency classification.

Pure: callers pass today explicitly, nothing here reads the clock.
"""

from datetime import date
from typing import Optional

from deepwork.models.enums import UrgencyKind
from deepwork.models.schedule import UrgencyBadge

SOON_DAYS = 3
THIS_WEEK_DAYS = 7


def days_until(due_date: date, today: date) -> int:
    """Whole calendar days from today to due_date (negative when overdue)."""
    return (due_date - today).days


def classify_urgency(due_date: Optional[date], today: date) -> Optional[UrgencyBadge]:
    """
    Classify a due date into an urgency bucket.

    Returns None when there is no due date or it is more than a week out.
    """
    if due_date is None:
        return None

    days = days_until(due_date, today)
    if days < 0:
        return UrgencyBadge(
            kind=UrgencyKind.OVERDUE, days=days, label=f"{abs(days)}d overdue", urgent=True
        )
    if days == 0:
        return UrgencyBadge(kind=UrgencyKind.DUE_TODAY, days=0, label="Due today", urgent=True)
    if days == 1:
        return UrgencyBadge(
            kind=UrgencyKind.DUE_TOMORROW, days=1, label="Due tomorrow", urgent=True
        )
    if days <= SOON_DAYS:
        return UrgencyBadge(
            kind=UrgencyKind.DUE_SOON, days=days, label=f"Due in {days}d", urgent=False
        )
    if days <= THIS_WEEK_DAYS:
        return UrgencyBadge(
            kind=UrgencyKind.DUE_THIS_WEEK, days=days, label=f"Due in {days}d", urgent=False
        )
    return None


def is_urgent(due_date: Optional[date], today: date) -> bool:
    badge = classify_urgency(due_date, today)
    return badge is not None and badge.urgent
