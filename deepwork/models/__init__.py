"""Pydantic models (schemas) for the application."""

from deepwork.models.enums import (
    CapacityLevel,
    Priority,
    QueueSort,
    TaskStatus,
    TaskType,
    UrgencyKind,
)
from deepwork.models.schedule import (
    CalendarEvent,
    CapacityProjection,
    CapacityStatus,
    CapacityThresholds,
    CellUsage,
    CellView,
    ScheduleRequest,
    ScheduleResult,
    TodayFocus,
    UnscheduledFilters,
    UrgencyBadge,
    WeekGrid,
)
from deepwork.models.slot import Slot
from deepwork.models.task import Task, TaskCreate, TaskUpdate
from deepwork.models.venture import Venture, VentureCreate

__all__ = [
    # Enums
    "TaskStatus",
    "Priority",
    "TaskType",
    "CapacityLevel",
    "UrgencyKind",
    "QueueSort",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    # Venture
    "Venture",
    "VentureCreate",
    # Slot
    "Slot",
    # Schedule
    "ScheduleRequest",
    "ScheduleResult",
    "CapacityThresholds",
    "CellUsage",
    "CapacityStatus",
    "CapacityProjection",
    "UrgencyBadge",
    "UnscheduledFilters",
    "CalendarEvent",
    "CellView",
    "WeekGrid",
    "TodayFocus",
]
