"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from datetime import date
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from deepwork.core.config import Settings, get_settings
from deepwork.interfaces.task_repository import ITaskRepository
from deepwork.interfaces.venture_repository import IVentureRepository
from deepwork.models.schedule import CapacityThresholds
from deepwork.services.scheduling_service import SchedulingService
from deepwork.services.slot_catalog import SlotCatalog
from deepwork.utils.datetime_utils import get_user_today


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_task_repository() -> ITaskRepository:
    """Get task repository instance."""
    from deepwork.infrastructure.local.task_repository import SqliteTaskRepository

    return SqliteTaskRepository()


@lru_cache()
def get_venture_repository() -> IVentureRepository:
    """Get venture repository instance."""
    from deepwork.infrastructure.local.venture_repository import SqliteVentureRepository

    return SqliteVentureRepository()


# ===========================================
# Planner Dependencies
# ===========================================


def get_slot_catalog(settings: Settings = Depends(get_settings)) -> SlotCatalog:
    """Canonical catalog with the configured fallback capacity."""
    return SlotCatalog(default_capacity_hours=settings.DEFAULT_SLOT_CAPACITY_HOURS)


def get_capacity_thresholds(settings: Settings = Depends(get_settings)) -> CapacityThresholds:
    return CapacityThresholds(
        warning_ratio=settings.CAPACITY_WARNING_RATIO,
        over_ratio=settings.CAPACITY_OVER_RATIO,
    )


def get_today(settings: Settings = Depends(get_settings)) -> date:
    """Today's date in the user's timezone, resolved once per request."""
    return get_user_today(settings.USER_TIMEZONE)


def get_scheduling_service(
    task_repo: ITaskRepository = Depends(get_task_repository),
    catalog: SlotCatalog = Depends(get_slot_catalog),
) -> SchedulingService:
    return SchedulingService(task_repo=task_repo, catalog=catalog)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

TaskRepo = Annotated[ITaskRepository, Depends(get_task_repository)]
VentureRepo = Annotated[IVentureRepository, Depends(get_venture_repository)]
Catalog = Annotated[SlotCatalog, Depends(get_slot_catalog)]
Thresholds = Annotated[CapacityThresholds, Depends(get_capacity_thresholds)]
Today = Annotated[date, Depends(get_today)]
Scheduler = Annotated[SchedulingService, Depends(get_scheduling_service)]
