"""
Unit tests for the due-date urgency classifier.
"""

from datetime import timedelta

import pytest

from deepwork.models.enums import UrgencyKind
from deepwork.services.urgency import classify_urgency, days_until, is_urgent


def test_no_due_date_has_no_badge(today):
    assert classify_urgency(None, today) is None
    assert not is_urgent(None, today)


@pytest.mark.parametrize(
    "offset,kind,label,urgent",
    [
        (-2, UrgencyKind.OVERDUE, "2d overdue", True),
        (0, UrgencyKind.DUE_TODAY, "Due today", True),
        (1, UrgencyKind.DUE_TOMORROW, "Due tomorrow", True),
        (2, UrgencyKind.DUE_SOON, "Due in 2d", False),
        (3, UrgencyKind.DUE_SOON, "Due in 3d", False),
        (4, UrgencyKind.DUE_THIS_WEEK, "Due in 4d", False),
        (7, UrgencyKind.DUE_THIS_WEEK, "Due in 7d", False),
    ],
)
def test_buckets(today, offset, kind, label, urgent):
    badge = classify_urgency(today + timedelta(days=offset), today)

    assert badge is not None
    assert badge.kind == kind
    assert badge.days == offset
    assert badge.label == label
    assert badge.urgent is urgent


def test_more_than_a_week_out_has_no_badge(today):
    assert classify_urgency(today + timedelta(days=8), today) is None


def test_days_until(today):
    assert days_until(today - timedelta(days=5), today) == -5
    assert days_until(today, today) == 0


def test_urgency_never_increases_as_due_date_moves_out(today):
    flags = [is_urgent(today + timedelta(days=offset), today) for offset in range(0, 15)]
    for nearer, further in zip(flags, flags[1:]):
        assert nearer >= further
