"""
Venture repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from deepwork.models.venture import Venture, VentureCreate


class IVentureRepository(ABC):
    """Read-mostly venture lookup."""

    @abstractmethod
    async def create(self, venture: VentureCreate) -> Venture:
        pass

    @abstractmethod
    async def get(self, venture_id: UUID) -> Optional[Venture]:
        pass

    @abstractmethod
    async def list(self) -> list[Venture]:
        """List all ventures ordered by name."""
        pass
