"""
Shared fixtures: in-memory database, repositories and a Task builder.
"""

from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from deepwork.infrastructure.local.database import Base
from deepwork.infrastructure.local.task_repository import SqliteTaskRepository
from deepwork.infrastructure.local.venture_repository import SqliteVentureRepository
from deepwork.models.enums import Priority, TaskStatus, TaskType
from deepwork.models.task import Task

TODAY = date(2025, 3, 12)  # a Wednesday


def build_task(
    title: str = "Task",
    *,
    task_id: Optional[UUID] = None,
    status: TaskStatus = TaskStatus.TODO,
    priority: Optional[Priority] = None,
    type: Optional[TaskType] = None,
    est_effort: Optional[float] = None,
    due_date: Optional[date] = None,
    focus_date: Optional[date] = None,
    focus_slot: Optional[str] = None,
    venture_id: Optional[UUID] = None,
) -> Task:
    timestamp = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
    return Task(
        id=task_id or uuid4(),
        title=title,
        status=status,
        priority=priority,
        type=type,
        est_effort=est_effort,
        due_date=due_date,
        focus_date=focus_date,
        focus_slot=focus_slot,
        venture_id=venture_id,
        created_at=timestamp,
        updated_at=timestamp,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_task():
    """Builder for in-memory Task objects."""
    return build_task


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def task_repo(session_factory):
    return SqliteTaskRepository(session_factory=session_factory)


@pytest.fixture
def venture_repo(session_factory):
    return SqliteVentureRepository(session_factory=session_factory)
