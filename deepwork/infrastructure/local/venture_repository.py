"""
SQLite implementation of Venture repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select

from deepwork.infrastructure.local.database import VentureORM, get_session_factory
from deepwork.interfaces.venture_repository import IVentureRepository
from deepwork.models.venture import Venture, VentureCreate


class SqliteVentureRepository(IVentureRepository):
    """SQLite implementation of venture repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: VentureORM) -> Venture:
        return Venture(id=UUID(orm.id), name=orm.name, color=orm.color, icon=orm.icon)

    async def create(self, venture: VentureCreate) -> Venture:
        async with self._session_factory() as session:
            orm = VentureORM(
                id=str(uuid4()),
                name=venture.name,
                color=venture.color,
                icon=venture.icon,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, venture_id: UUID) -> Optional[Venture]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(VentureORM).where(VentureORM.id == str(venture_id))
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(self) -> list[Venture]:
        async with self._session_factory() as session:
            result = await session.execute(select(VentureORM).order_by(VentureORM.name))
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
