"""
Task repository interface.

Defines the contract for task persistence operations.
Implementations: SQLite
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from deepwork.models.enums import TaskStatus, TaskType
from deepwork.models.task import Task, TaskCreate, TaskUpdate


class ITaskRepository(ABC):
    """Abstract interface for task persistence."""

    @abstractmethod
    async def create(self, task: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            task: Task creation data

        Returns:
            Created task with generated ID and timestamps
        """
        pass

    @abstractmethod
    async def get(self, task_id: UUID) -> Optional[Task]:
        """
        Get a task by ID.

        Returns:
            Task if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_many(self, task_ids: list[UUID]) -> list[Task]:
        """
        Get several tasks by ID.

        Missing IDs are skipped; callers compare against the requested IDs.
        """
        pass

    @abstractmethod
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
        """
        List tasks with optional filters.

        Args:
            statuses: Keep only these statuses (None = all)
            venture_id: Filter by venture
            task_type: Filter by task type
            focus_date: Exact focus date
            focus_date_gte: Focus date lower bound (inclusive)
            focus_date_lte: Focus date upper bound (inclusive)
            unscheduled_only: Keep only tasks that are not in any cell
            limit: Maximum number of results (None = no limit)
            offset: Pagination offset

        Returns:
            List of tasks matching filters
        """
        pass

    @abstractmethod
    async def update(self, task_id: UUID, update: TaskUpdate) -> Task:
        """
        Update an existing task.

        Raises:
            NotFoundError: If task not found
        """
        pass

    @abstractmethod
    async def update_many(self, updates: dict[UUID, TaskUpdate]) -> list[Task]:
        """
        Apply several updates as one unit.

        Either every update is committed or none is.

        Returns:
            Updated tasks in the iteration order of updates

        Raises:
            PersistenceError: If any task is missing or any write fails;
                failed_task_ids names the offending tasks when known
        """
        pass
