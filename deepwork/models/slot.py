"""
Time slot model definitions.
"""

from pydantic import BaseModel, Field


class Slot(BaseModel):
    """A static slot catalog entry."""

    key: str
    label: str
    time_range: str = Field(..., description="Display-only time range")
    capacity_hours: float = Field(..., ge=0)
    start_hour: float = Field(..., ge=0, le=24)
    end_hour: float = Field(..., ge=0, le=24)
    flexible: bool = Field(
        False,
        description="Flexible slots have no fixed hours and never match an event start time",
    )

    model_config = {"frozen": True}
