"""
Schedule API endpoints.

Scheduling mutations answer with a ScheduleResult body in both the success
and the failure case so the host can render a single toast.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from deepwork.api.deps import Catalog, Scheduler, TaskRepo, Thresholds, Today
from deepwork.core.exceptions import DeepWorkError, ErrorKind
from deepwork.models.schedule import (
    CapacityProjection,
    CellView,
    ProjectionRequest,
    ScheduleRequest,
    ScheduleResult,
    TodayFocus,
    WeekGrid,
)
from deepwork.services.capacity import CellIndex, projected_usage
from deepwork.services.planner_views import build_week_grid, cell_detail, today_focus, week_bounds

router = APIRouter()

ERROR_STATUS_CODES = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PERSISTENCE: status.HTTP_502_BAD_GATEWAY,
}


def error_response(exc: DeepWorkError) -> JSONResponse:
    """Render a scheduling failure as a ScheduleResult with a matching status code."""
    result = ScheduleResult.from_error(exc)
    return JSONResponse(
        status_code=ERROR_STATUS_CODES.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content=result.model_dump(mode="json"),
    )


@router.post("", response_model=ScheduleResult)
async def schedule_tasks(request: ScheduleRequest, service: Scheduler):
    """Put the selected tasks into one (date, slot) cell."""
    try:
        return await service.schedule_tasks(
            request.task_ids, request.focus_date, request.focus_slot
        )
    except DeepWorkError as e:
        return error_response(e)


@router.delete("/tasks/{task_id}", response_model=ScheduleResult)
async def unschedule_task(task_id: UUID, service: Scheduler):
    try:
        return await service.unschedule_task(task_id)
    except DeepWorkError as e:
        return error_response(e)


@router.delete("/cells/{focus_date}/{slot_key}", response_model=ScheduleResult)
async def clear_slot(focus_date: date, slot_key: str, service: Scheduler):
    try:
        return await service.clear_slot(focus_date, slot_key)
    except DeepWorkError as e:
        return error_response(e)


@router.get("/cells/{focus_date}/{slot_key}", response_model=CellView)
async def get_cell(
    focus_date: date,
    slot_key: str,
    repo: TaskRepo,
    catalog: Catalog,
    thresholds: Thresholds,
):
    """Tasks and capacity for one cell."""
    tasks = await repo.list(focus_date=focus_date, limit=None)
    return cell_detail(tasks, focus_date, slot_key, catalog, thresholds)


@router.post("/cells/{focus_date}/{slot_key}/projection", response_model=CapacityProjection)
async def project_cell_usage(
    focus_date: date,
    slot_key: str,
    request: ProjectionRequest,
    repo: TaskRepo,
    catalog: Catalog,
    thresholds: Thresholds,
):
    """
    Preview the cell usage if the selected tasks were scheduled into it.

    Unknown ids are ignored; the preview only reflects tasks that exist.
    """
    in_day = await repo.list(focus_date=focus_date, limit=None)
    cell_tasks = CellIndex(in_day).tasks(focus_date, slot_key)
    selected = await repo.get_many(request.task_ids) if request.task_ids else []
    return projected_usage(
        cell_tasks, selected, catalog.capacity_hours(slot_key), thresholds
    )


@router.get("/week", response_model=WeekGrid)
async def get_week(
    repo: TaskRepo,
    catalog: Catalog,
    thresholds: Thresholds,
    today: Today,
    week_of: Optional[date] = Query(None, description="Any date inside the week (defaults to today)"),
):
    target = week_of or today
    week_start, week_end = week_bounds(target)
    tasks = await repo.list(focus_date_gte=week_start, focus_date_lte=week_end, limit=None)
    return build_week_grid(tasks, target, catalog, thresholds)


@router.get("/today", response_model=TodayFocus)
async def get_today_focus(repo: TaskRepo, today: Today):
    tasks = await repo.list(focus_date=today, limit=None)
    return today_focus(tasks, today)
