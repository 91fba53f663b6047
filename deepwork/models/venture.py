"""
Venture model definitions.

Ventures are read-only lookups used to group and colour scheduled tasks.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class VentureBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    color: Optional[str] = Field(None, pattern=r"^#[0-9a-fA-F]{6}$", description="Hex colour")
    icon: Optional[str] = Field(None, max_length=10)


class VentureCreate(VentureBase):
    """Schema for creating a venture (seeding and tests)."""


class Venture(VentureBase):
    """Venture as returned by the lookup API."""

    id: UUID

    class Config:
        from_attributes = True
