"""
Tasks API endpoints.

CRUD for tasks plus the read-only selection views (scheduling candidates
and the deep-work queue).
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from deepwork.api.deps import TaskRepo, Today
from deepwork.core.exceptions import NotFoundError
from deepwork.models.enums import Priority, QueueSort, TaskStatus, TaskType
from deepwork.models.schedule import UnscheduledFilters
from deepwork.models.task import Task, TaskCreate, TaskUpdate
from deepwork.services.task_selection import deep_work_queue, unscheduled_tasks
from deepwork.utils.datetime_utils import day_id_for

router = APIRouter()


def parse_statuses(raw: Optional[str]) -> Optional[list[TaskStatus]]:
    """
    Parse a comma separated status filter.

    Unknown values are dropped; if nothing valid remains the filter matches
    no task.
    """
    if raw is None:
        return None
    statuses = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            statuses.append(TaskStatus.normalize(part))
        except ValueError:
            continue
    return statuses


@router.get("", response_model=list[Task])
async def list_tasks(
    repo: TaskRepo,
    status_filter: Optional[str] = Query(None, alias="status"),
    venture_id: Optional[UUID] = Query(None),
    type: Optional[TaskType] = Query(None),
    focus_date: Optional[date] = Query(None),
    focus_date_gte: Optional[date] = Query(None),
    focus_date_lte: Optional[date] = Query(None),
    limit: int = Query(500, ge=1, le=1000),
    offset: int = Query(0, ge=0),
):
    """List tasks with optional filters."""
    statuses = parse_statuses(status_filter)
    if statuses is not None and not statuses:
        return []
    return await repo.list(
        statuses=statuses,
        venture_id=venture_id,
        task_type=type,
        focus_date=focus_date,
        focus_date_gte=focus_date_gte,
        focus_date_lte=focus_date_lte,
        limit=limit,
        offset=offset,
    )


@router.get("/unscheduled", response_model=list[Task])
async def list_unscheduled_tasks(
    repo: TaskRepo,
    today: Today,
    priority: Optional[Priority] = Query(None),
    venture_id: Optional[UUID] = Query(None),
    type: Optional[TaskType] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    include_scheduled: bool = Query(False),
):
    """Tasks that can be put into a slot, most pressing first."""
    filters = UnscheduledFilters(
        priority=priority,
        venture_id=venture_id,
        type=type,
        search=search,
        include_scheduled=include_scheduled,
    )
    tasks = await repo.list(unscheduled_only=not include_scheduled, limit=None)
    return list(unscheduled_tasks(tasks, today, filters))


@router.get("/deep-work-queue", response_model=list[Task])
async def get_deep_work_queue(
    repo: TaskRepo,
    venture_id: Optional[UUID] = Query(None),
    sort_by: QueueSort = Query(QueueSort.PRIORITY),
):
    tasks = await repo.list(task_type=TaskType.DEEP_WORK, unscheduled_only=True, limit=None)
    return deep_work_queue(tasks, venture_id=venture_id, sort_by=sort_by)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(task: TaskCreate, repo: TaskRepo):
    return await repo.create(task)


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: UUID, repo: TaskRepo):
    task = await repo.get(task_id)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    return task


@router.patch("/{task_id}", response_model=Task)
async def update_task(task_id: UUID, update: TaskUpdate, repo: TaskRepo):
    """
    Partially update a task.

    Scheduling fields must be sent as a pair; the day back-reference is
    kept in step with focus_date.
    """
    if update.touches_schedule and "day_id" not in update.model_fields_set:
        data = update.model_dump(exclude_unset=True)
        data["day_id"] = day_id_for(update.focus_date) if update.focus_date else None
        update = TaskUpdate(**data)
    try:
        return await repo.update(task_id, update)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message,
        )
