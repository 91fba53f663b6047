"""
Schedule models: requests, results and derived (never persisted) views.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from deepwork.core.exceptions import DeepWorkError, ErrorKind, NotFoundError, PersistenceError
from deepwork.models.enums import CapacityLevel, Priority, TaskType, UrgencyKind
from deepwork.models.slot import Slot
from deepwork.models.task import Task


# ===========================================
# Scheduling requests / results
# ===========================================


class ScheduleRequest(BaseModel):
    """
    Bind a batch of tasks to one (date, slot) cell.

    focus_date and focus_slot are optional here so that a half-filled form
    reaches the service and is rejected with a ValidationError rather than
    a schema error.
    """

    task_ids: list[UUID] = Field(default_factory=list)
    focus_date: Optional[date] = None
    focus_slot: Optional[str] = None


class ScheduleResult(BaseModel):
    """Structured outcome the host renders as a toast."""

    ok: bool
    scheduled_count: int = Field(0, ge=0)
    task_ids: list[UUID] = Field(default_factory=list)
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    failed_task_ids: list[UUID] = Field(default_factory=list)

    @classmethod
    def success(cls, task_ids: list[UUID]) -> "ScheduleResult":
        return cls(ok=True, scheduled_count=len(task_ids), task_ids=list(task_ids))

    @classmethod
    def from_error(cls, exc: DeepWorkError) -> "ScheduleResult":
        failed: list[UUID] = []
        if isinstance(exc, PersistenceError):
            failed = exc.failed_task_ids
        elif isinstance(exc, NotFoundError):
            failed = exc.missing_ids
        return cls(
            ok=False,
            scheduled_count=0,
            error=exc.kind,
            message=exc.message,
            failed_task_ids=failed,
        )


# ===========================================
# Capacity accounting
# ===========================================


class CapacityThresholds(BaseModel):
    """
    Ratio thresholds for the cell warning level.

    Both comparisons are strict: a cell at exactly 70% is still "ok" and a
    cell at exactly 100% is "warning".
    """

    warning_ratio: float = Field(0.7, ge=0)
    over_ratio: float = Field(1.0, gt=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_order(self):
        if self.warning_ratio > self.over_ratio:
            raise ValueError("warning_ratio must not exceed over_ratio")
        return self


class CellUsage(BaseModel):
    """Committed effort in one cell."""

    used_hours: float = Field(..., ge=0)
    task_count: int = Field(..., ge=0)


class CapacityStatus(BaseModel):
    """
    Usage measured against a slot capacity.

    ratio is None only for a zero-capacity slot that holds effort.
    """

    capacity_hours: float
    used_hours: float
    ratio: Optional[float]
    level: CapacityLevel
    remaining_hours: float = Field(..., ge=0)
    overflow_hours: float = Field(..., ge=0)


class CapacityProjection(BaseModel):
    """Cell usage if the currently selected tasks were scheduled into it."""

    current_hours: float
    selected_hours: float
    projected_hours: float
    status: CapacityStatus
    is_over_capacity: bool


class ProjectionRequest(BaseModel):
    task_ids: list[UUID] = Field(default_factory=list)


# ===========================================
# Urgency
# ===========================================


class UrgencyBadge(BaseModel):
    """Due-date urgency bucket with its display weight."""

    kind: UrgencyKind
    days: int = Field(..., description="Days until due (negative when overdue)")
    label: str
    urgent: bool

    model_config = {"frozen": True}


# ===========================================
# Selection filters
# ===========================================


class UnscheduledFilters(BaseModel):
    """Optional narrowing applied on top of the eligibility predicate."""

    priority: Optional[Priority] = None
    venture_id: Optional[UUID] = None
    type: Optional[TaskType] = None
    search: Optional[str] = Field(None, description="Case-insensitive title substring")
    include_scheduled: bool = Field(
        False, description="Also offer tasks that already sit in a cell"
    )


# ===========================================
# Derived views
# ===========================================


class CalendarEvent(BaseModel):
    """External calendar event shown as a conflict inside a cell."""

    id: str
    summary: str = ""
    start: Optional[datetime] = Field(None, description="Start time for timed events")
    start_date: Optional[date] = Field(None, description="Date for all-day events")

    @property
    def event_date(self) -> Optional[date]:
        if self.start is not None:
            return self.start.date()
        return self.start_date


class CellView(BaseModel):
    """One (date, slot) cell of the weekly grid or the slot detail dialog."""

    focus_date: date
    slot_key: str
    slot_label: str
    tasks: list[Task] = Field(default_factory=list)
    usage: CellUsage
    status: CapacityStatus
    overflow_percent: float = Field(0.0, ge=0)
    events: list[CalendarEvent] = Field(default_factory=list)


class WeekGrid(BaseModel):
    """Monday-start week of cells."""

    week_start: date
    week_end: date
    days: list[date]
    slots: list[Slot]
    cells: list[CellView]

    def cell(self, focus_date: date, slot_key: str) -> Optional[CellView]:
        for cell in self.cells:
            if cell.focus_date == focus_date and cell.slot_key == slot_key:
                return cell
        return None


class TodayFocus(BaseModel):
    """Summary of the tasks focused on a given day."""

    focus_date: date
    tasks: list[Task] = Field(default_factory=list)
    total_scheduled_hours: float = 0.0
    completed_count: int = 0
    one_thing: Optional[Task] = None
    urgent_tasks: list[Task] = Field(default_factory=list)
    overdue_tasks: list[Task] = Field(default_factory=list)
