"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class TaskStatus(str, Enum):
    """Task status."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"

    @classmethod
    def normalize(cls, raw: "str | TaskStatus") -> "TaskStatus":
        """
        Map any stored or client-sent status string onto the canonical enum.

        "completed" and "done" both mean finished. Older rows may still carry
        the idea/next/waiting vocabulary.

        Raises:
            ValueError: If the value is not a known status or alias
        """
        if isinstance(raw, cls):
            return raw
        value = str(raw).strip().lower()
        value = STATUS_ALIASES.get(value, value)
        return cls(value)

    @property
    def is_finished(self) -> bool:
        return self is TaskStatus.DONE

    @property
    def is_closed(self) -> bool:
        """Finished or cancelled; closed tasks are never offered for scheduling."""
        return self in (TaskStatus.DONE, TaskStatus.CANCELLED)


STATUS_ALIASES: dict[str, str] = {
    "completed": "done",
    "complete": "done",
    "idea": "todo",
    "next": "todo",
    "waiting": "on_hold",
    "canceled": "cancelled",
}


class Priority(str, Enum):
    """Task priority. P0 is the most urgent."""

    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"

    @property
    def rank(self) -> int:
        return int(self.value[1])


# Rank used for tasks without a priority so they sort after P3
NO_PRIORITY_RANK = 4


def priority_rank(priority: "Priority | None") -> int:
    """Sort rank for an optional priority."""
    return priority.rank if priority is not None else NO_PRIORITY_RANK


class TaskType(str, Enum):
    """Kind of work a task represents."""

    BUSINESS = "business"
    DEEP_WORK = "deep_work"
    ADMIN = "admin"
    HEALTH = "health"
    LEARNING = "learning"
    PERSONAL = "personal"


class CapacityLevel(str, Enum):
    """Visual warning level for a slot cell."""

    OK = "ok"
    WARNING = "warning"
    OVER = "over"


class UrgencyKind(str, Enum):
    """Due-date urgency bucket."""

    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_TOMORROW = "due_tomorrow"
    DUE_SOON = "due_soon"
    DUE_THIS_WEEK = "due_this_week"


class QueueSort(str, Enum):
    """Ordering for the deep-work queue."""

    PRIORITY = "priority"
    EFFORT = "effort"
