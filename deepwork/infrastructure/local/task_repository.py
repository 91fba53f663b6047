"""
SQLite implementation of Task repository.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError

from deepwork.core.exceptions import NotFoundError, PersistenceError
from deepwork.core.logger import setup_logger
from deepwork.infrastructure.local.database import TaskORM, get_session_factory
from deepwork.interfaces.task_repository import ITaskRepository
from deepwork.models.enums import Priority, TaskStatus, TaskType
from deepwork.models.task import Task, TaskCreate, TaskUpdate
from deepwork.services.slot_catalog import migrate_legacy_slot
from deepwork.utils.datetime_utils import day_id_for, now_utc

logger = setup_logger(__name__)

_UUID_FIELDS = ("venture_id", "project_id")


class SqliteTaskRepository(ITaskRepository):
    """SQLite implementation of task repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TaskORM) -> Task:
        """Convert ORM object to Pydantic model."""
        focus_date = orm.focus_date
        focus_slot = migrate_legacy_slot(orm.focus_slot)
        if (focus_date is None) != (focus_slot is None):
            logger.warning(
                f"Task {orm.id} has a half-set focus pair "
                f"({focus_date!r}, {focus_slot!r}); reading it as unscheduled"
            )
            focus_date, focus_slot = None, None

        return Task(
            id=UUID(orm.id),
            title=orm.title,
            status=TaskStatus.normalize(orm.status),
            priority=Priority(orm.priority) if orm.priority else None,
            type=TaskType(orm.type) if orm.type else None,
            est_effort=orm.est_effort,
            due_date=orm.due_date,
            focus_date=focus_date,
            focus_slot=focus_slot,
            day_id=orm.day_id if focus_date else None,
            venture_id=UUID(orm.venture_id) if orm.venture_id else None,
            project_id=UUID(orm.project_id) if orm.project_id else None,
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
            completed_at=orm.completed_at,
        )

    @staticmethod
    def _to_column(field: str, value: Any) -> Any:
        if value is None:
            return None
        if field in _UUID_FIELDS:
            return str(value)
        if hasattr(value, "value"):  # Enum
            return value.value
        return value

    def _apply_update(self, orm: TaskORM, update: TaskUpdate) -> None:
        """Copy explicitly-set fields of update onto orm (None clears a column)."""
        update_data = update.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(orm, field, self._to_column(field, value))

        if "status" in update_data and update.status is not None:
            if update.status.is_finished and orm.completed_at is None:
                orm.completed_at = now_utc()
            elif not update.status.is_finished:
                orm.completed_at = None

        orm.updated_at = now_utc()

    async def create(self, task: TaskCreate) -> Task:
        """Create a new task."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = TaskORM(
                id=str(uuid4()),
                title=task.title,
                status=task.status.value,
                priority=task.priority.value if task.priority else None,
                type=task.type.value if task.type else None,
                venture_id=str(task.venture_id) if task.venture_id else None,
                project_id=str(task.project_id) if task.project_id else None,
                due_date=task.due_date,
                focus_date=task.focus_date,
                focus_slot=task.focus_slot,
                day_id=day_id_for(task.focus_date) if task.focus_date else None,
                est_effort=task.est_effort,
                notes=task.notes,
                created_at=now,
                updated_at=now,
                completed_at=now if task.status.is_finished else None,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, task_id: UUID) -> Optional[Task]:
        """Get a task by ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(TaskORM).where(TaskORM.id == str(task_id)))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_many(self, task_ids: list[UUID]) -> list[Task]:
        """Get several tasks by ID."""
        if not task_ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM).where(TaskORM.id.in_([str(task_id) for task_id in task_ids]))
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list(
        self,
        statuses: Optional[list[TaskStatus]] = None,
        venture_id: Optional[UUID] = None,
        task_type: Optional[TaskType] = None,
        focus_date: Optional[date] = None,
        focus_date_gte: Optional[date] = None,
        focus_date_lte: Optional[date] = None,
        unscheduled_only: bool = False,
        limit: Optional[int] = 500,
        offset: int = 0,
    ) -> list[Task]:
        """List tasks with optional filters."""
        async with self._session_factory() as session:
            query = select(TaskORM)

            if venture_id is not None:
                query = query.where(TaskORM.venture_id == str(venture_id))
            if task_type is not None:
                query = query.where(TaskORM.type == task_type.value)
            if focus_date is not None:
                query = query.where(TaskORM.focus_date == focus_date)
            if focus_date_gte is not None:
                query = query.where(TaskORM.focus_date >= focus_date_gte)
            if focus_date_lte is not None:
                query = query.where(TaskORM.focus_date <= focus_date_lte)
            if unscheduled_only:
                # Half-set rows read as unscheduled, so either column being NULL qualifies
                query = query.where(or_(TaskORM.focus_date.is_(None), TaskORM.focus_slot.is_(None)))

            query = query.order_by(TaskORM.created_at.desc())

            result = await session.execute(query)
            tasks = [self._orm_to_model(orm) for orm in result.scalars().all()]

        # Status is matched after normalisation so legacy values still match
        if statuses:
            wanted = set(statuses)
            tasks = [task for task in tasks if task.status in wanted]
        if limit is None:
            return tasks[offset:]
        return tasks[offset : offset + limit]

    async def update(self, task_id: UUID, update: TaskUpdate) -> Task:
        """Update an existing task."""
        async with self._session_factory() as session:
            result = await session.execute(select(TaskORM).where(TaskORM.id == str(task_id)))
            orm = result.scalar_one_or_none()

            if not orm:
                raise NotFoundError(f"Task {task_id} not found", missing_ids=[task_id])

            self._apply_update(orm, update)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def update_many(self, updates: dict[UUID, TaskUpdate]) -> list[Task]:
        """Apply all updates in one transaction; nothing is committed on failure."""
        if not updates:
            return []

        async with self._session_factory() as session:
            result = await session.execute(
                select(TaskORM).where(TaskORM.id.in_([str(task_id) for task_id in updates]))
            )
            rows = {orm.id: orm for orm in result.scalars().all()}

            failed: list[UUID] = []
            for task_id, update in updates.items():
                orm = rows.get(str(task_id))
                if orm is None:
                    failed.append(task_id)
                    continue
                try:
                    self._apply_update(orm, update)
                except (SQLAlchemyError, ValueError) as exc:
                    logger.error(f"Update of task {task_id} failed: {exc}")
                    failed.append(task_id)

            if failed:
                await session.rollback()
                raise PersistenceError(
                    f"{len(failed)} of {len(updates)} task update(s) failed; nothing was saved",
                    failed_task_ids=failed,
                )

            try:
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise PersistenceError(f"Batch update failed: {exc}") from exc

            ordered = []
            for task_id in updates:
                orm = rows[str(task_id)]
                await session.refresh(orm)
                ordered.append(self._orm_to_model(orm))
            return ordered
