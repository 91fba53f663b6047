"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from functools import lru_cache
from uuid import uuid4

from sqlalchemy import Column, Date, DateTime, Float, String, Text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from deepwork.core.config import get_settings
from deepwork.models.task import SLOT_KEY_MAX_LENGTH
from deepwork.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class TaskORM(Base):
    """Task ORM model."""

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(500), nullable=False)
    status = Column(String(20), default="todo", nullable=False, index=True)
    priority = Column(String(2), nullable=True)
    type = Column(String(20), nullable=True, index=True)
    venture_id = Column(String(36), nullable=True, index=True)
    project_id = Column(String(36), nullable=True, index=True)
    day_id = Column(String(50), nullable=True)
    due_date = Column(Date, nullable=True)
    focus_date = Column(Date, nullable=True, index=True)
    focus_slot = Column(String(SLOT_KEY_MAX_LENGTH), nullable=True)
    est_effort = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)
    updated_at = Column(DateTime, default=now_utc, onupdate=now_utc, nullable=False)
    completed_at = Column(DateTime, nullable=True)


class VentureORM(Base):
    """Venture ORM model."""

    __tablename__ = "ventures"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    color = Column(String(7), nullable=True)
    icon = Column(String(10), nullable=True)
    created_at = Column(DateTime, default=now_utc, nullable=False)


# ===========================================
# Database Session Management
# ===========================================


@lru_cache()
def get_engine() -> AsyncEngine:
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory():
    """Get async session factory."""
    return sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine | None = None):
    """Initialize database tables."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
