"""
Task model definitions.

Only the fields the time-blocking planner consumes are modelled here.
A task is scheduled when it carries a (focus_date, focus_slot) pair; the two
fields are always set or cleared together.
"""

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from deepwork.models.enums import Priority, TaskStatus, TaskType

SLOT_KEY_MAX_LENGTH = 50


def _check_focus_pair(focus_date: Optional[date], focus_slot: Optional[str]) -> None:
    if (focus_date is None) != (focus_slot is None):
        raise ValueError("focus_date and focus_slot must be set or cleared together")


class TaskBase(BaseModel):
    """Base task fields shared across create/read."""

    title: str = Field(..., min_length=1, max_length=500, description="Task title")
    priority: Optional[Priority] = Field(None, description="P0 (most urgent) to P3")
    type: Optional[TaskType] = Field(None, description="Kind of work")
    est_effort: Optional[float] = Field(
        None, ge=0, description="Estimated effort in hours"
    )
    due_date: Optional[date] = Field(None, description="Deadline (calendar date)")
    focus_date: Optional[date] = Field(None, description="Date the task is scheduled onto")
    focus_slot: Optional[str] = Field(
        None,
        min_length=1,
        max_length=SLOT_KEY_MAX_LENGTH,
        description="Slot key the task is scheduled into",
    )
    venture_id: Optional[UUID] = Field(None, description="Owning venture (display only)")
    project_id: Optional[UUID] = Field(None, description="Owning project (display only)")
    notes: Optional[str] = Field(None, max_length=5000)

    @model_validator(mode="after")
    def validate_focus_pair(self):
        """A task occupies exactly one cell, or none."""
        _check_focus_pair(self.focus_date, self.focus_slot)
        return self


class TaskCreate(TaskBase):
    """Schema for creating a new task."""

    status: TaskStatus = Field(TaskStatus.TODO)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return TaskStatus.normalize(value) if value is not None else value


class TaskUpdate(BaseModel):
    """
    Schema for a partial task update.

    Only explicitly provided fields are applied. Touching either focus
    field requires providing both.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    type: Optional[TaskType] = None
    est_effort: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    focus_date: Optional[date] = None
    focus_slot: Optional[str] = Field(None, min_length=1, max_length=SLOT_KEY_MAX_LENGTH)
    day_id: Optional[str] = Field(None, max_length=50)
    venture_id: Optional[UUID] = None
    project_id: Optional[UUID] = None
    notes: Optional[str] = Field(None, max_length=5000)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return TaskStatus.normalize(value) if value is not None else value

    @model_validator(mode="after")
    def validate_focus_pair(self):
        touched = {"focus_date", "focus_slot"} & self.model_fields_set
        if touched and touched != {"focus_date", "focus_slot"}:
            raise ValueError("focus_date and focus_slot must be updated together")
        _check_focus_pair(self.focus_date, self.focus_slot)
        return self

    @property
    def touches_schedule(self) -> bool:
        return "focus_date" in self.model_fields_set


class Task(TaskBase):
    """Complete task model with all fields."""

    id: UUID
    status: TaskStatus = Field(TaskStatus.TODO, description="Status")
    day_id: Optional[str] = Field(None, description="Back-reference to the day record")
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = Field(None, description="When the task became done")

    class Config:
        from_attributes = True

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: Any) -> Any:
        return TaskStatus.normalize(value)

    @property
    def is_scheduled(self) -> bool:
        return self.focus_date is not None

    @property
    def effort_hours(self) -> float:
        """Estimated effort with a missing estimate counted as zero."""
        return self.est_effort or 0.0
