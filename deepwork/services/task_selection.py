"""
Selection of tasks that can still be put into a slot.

Eligibility: not finished, not cancelled and (unless include_scheduled is
set) not already in a cell. Ordering: tasks with a due date first, soonest
(most overdue) first, then by priority; tasks without a due date by
priority only.
"""

from datetime import date
from typing import Iterable, Iterator, Optional
from uuid import UUID

from deepwork.models.enums import Priority, QueueSort, TaskStatus, TaskType, priority_rank
from deepwork.models.schedule import UnscheduledFilters
from deepwork.models.task import Task
from deepwork.services.urgency import days_until

QUEUE_STATUSES = frozenset({TaskStatus.TODO, TaskStatus.IN_PROGRESS})


def is_eligible(task: Task, include_scheduled: bool = False) -> bool:
    """Closed tasks are never eligible, whatever the filters say."""
    if task.status.is_closed:
        return False
    if not include_scheduled and task.focus_date is not None:
        return False
    return True


def matches_filters(task: Task, filters: UnscheduledFilters) -> bool:
    if filters.priority is not None and task.priority != filters.priority:
        return False
    if filters.venture_id is not None and task.venture_id != filters.venture_id:
        return False
    if filters.type is not None and task.type != filters.type:
        return False
    if filters.search:
        if filters.search.strip().lower() not in task.title.lower():
            return False
    return True


def selection_sort_key(task: Task, today: date) -> tuple[int, int, int]:
    if task.due_date is not None:
        return (0, days_until(task.due_date, today), priority_rank(task.priority))
    return (1, 0, priority_rank(task.priority))


def unscheduled_tasks(
    tasks: Iterable[Task],
    today: date,
    filters: Optional[UnscheduledFilters] = None,
) -> Iterator[Task]:
    """
    Yield eligible tasks in scheduling order.

    Each call re-reads the given snapshot, so the result can be iterated
    again simply by calling the function again.
    """
    filters = filters or UnscheduledFilters()
    candidates = [
        task
        for task in tasks
        if is_eligible(task, filters.include_scheduled) and matches_filters(task, filters)
    ]
    candidates.sort(key=lambda task: selection_sort_key(task, today))
    yield from candidates


def deep_work_queue(
    tasks: Iterable[Task],
    venture_id: Optional[UUID] = None,
    sort_by: QueueSort = QueueSort.PRIORITY,
) -> list[Task]:
    """
    Unscheduled deep-work tasks that are ready to be worked on.

    Missing priority is treated as P3 here; sorting by effort puts the
    largest estimates first.
    """
    queue = [
        task
        for task in tasks
        if task.type == TaskType.DEEP_WORK
        and task.status in QUEUE_STATUSES
        and task.focus_date is None
        and (venture_id is None or task.venture_id == venture_id)
    ]
    if sort_by == QueueSort.EFFORT:
        queue.sort(key=lambda task: -task.effort_hours)
    else:
        queue.sort(key=lambda task: (task.priority or Priority.P3).rank)
    return queue
