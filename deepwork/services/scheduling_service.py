"""
Scheduling service: binds tasks to (date, slot) cells.

All three operations go through ITaskRepository.update_many so a batch is
committed as a whole or not at all. Successful mutations publish a refresh
message so open views refetch their task lists.
"""

from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from deepwork.core.exceptions import NotFoundError, PersistenceError, ValidationError
from deepwork.core.logger import setup_logger
from deepwork.interfaces.task_repository import ITaskRepository
from deepwork.models.schedule import ScheduleResult
from deepwork.models.task import SLOT_KEY_MAX_LENGTH, Task, TaskUpdate
from deepwork.services.realtime_service import RealtimeManager, realtime_manager
from deepwork.services.slot_catalog import SlotCatalog, default_catalog
from deepwork.utils.datetime_utils import day_id_for

logger = setup_logger(__name__)


def _unique(task_ids: Iterable[UUID]) -> list[UUID]:
    seen: set[UUID] = set()
    ordered = []
    for task_id in task_ids:
        if task_id not in seen:
            seen.add(task_id)
            ordered.append(task_id)
    return ordered


def schedule_update(focus_date: date, focus_slot: str) -> TaskUpdate:
    return TaskUpdate(
        focus_date=focus_date,
        focus_slot=focus_slot,
        day_id=day_id_for(focus_date),
    )


def unschedule_update() -> TaskUpdate:
    return TaskUpdate(focus_date=None, focus_slot=None, day_id=None)


class SchedulingService:
    """
    Service for placing tasks into slots and taking them out again.

    Methods raise ValidationError, NotFoundError or PersistenceError; the
    API layer turns those into a ScheduleResult for the host.
    """

    def __init__(
        self,
        task_repo: ITaskRepository,
        catalog: SlotCatalog = default_catalog,
        notifier: Optional[RealtimeManager] = None,
        strict_slots: bool = False,
    ):
        """
        Initialize scheduling service.

        Args:
            task_repo: Task persistence port
            catalog: Slot catalog used to validate slot keys
            notifier: Where refresh messages go (defaults to the process-wide manager)
            strict_slots: Reject slot keys the catalog does not know
        """
        self._task_repo = task_repo
        self._catalog = catalog
        self._notifier = notifier if notifier is not None else realtime_manager
        self._strict_slots = strict_slots

    async def _load(self, task_ids: list[UUID]) -> list[Task]:
        tasks = await self._task_repo.get_many(task_ids)
        found = {task.id for task in tasks}
        missing = [task_id for task_id in task_ids if task_id not in found]
        if missing:
            logger.warning(f"Scheduling rejected, unknown task ids: {missing}")
            raise NotFoundError(
                f"{len(missing)} task(s) not found",
                missing_ids=missing,
            )
        return tasks

    def _check_slot(self, focus_slot: Optional[str]) -> str:
        """Return the slot key or raise ValidationError if it cannot be stored."""
        if not (focus_slot and focus_slot.strip()):
            logger.warning("Scheduling rejected, no time slot selected")
            raise ValidationError("Please select a date and time slot")
        if len(focus_slot) > SLOT_KEY_MAX_LENGTH:
            logger.warning(f"Scheduling rejected, slot key longer than {SLOT_KEY_MAX_LENGTH}")
            raise ValidationError(
                f"Slot key must be at most {SLOT_KEY_MAX_LENGTH} characters"
            )
        if self._strict_slots and not self._catalog.is_valid_slot(focus_slot):
            logger.warning(f"Scheduling rejected, unknown slot: {focus_slot}")
            raise ValidationError(f"Unknown slot: {focus_slot}")
        return focus_slot

    async def _apply(self, updates: dict[UUID, TaskUpdate]) -> None:
        try:
            await self._task_repo.update_many(updates)
        except PersistenceError as e:
            logger.error(
                f"Batch of {len(updates)} task update(s) failed: {e.message} "
                f"(failed ids: {e.failed_task_ids})"
            )
            raise

    async def _notify(self) -> None:
        await self._notifier.publish_refresh()

    async def schedule_tasks(
        self,
        task_ids: Iterable[UUID],
        focus_date: Optional[date],
        focus_slot: Optional[str],
    ) -> ScheduleResult:
        """
        Put every task in task_ids into the (focus_date, focus_slot) cell.

        A task already sitting in another cell is moved. Validation happens
        before anything is written.

        Raises:
            ValidationError: Empty batch, or date/slot missing
            NotFoundError: Some ids do not exist
            PersistenceError: Storage rejected the batch (nothing saved)
        """
        ids = _unique(task_ids)
        if not ids:
            raise ValidationError("Select at least one task to schedule")
        if focus_date is None:
            logger.warning("Scheduling rejected, no date selected")
            raise ValidationError("Please select a date and time slot")
        focus_slot = self._check_slot(focus_slot)

        await self._load(ids)

        update = schedule_update(focus_date, focus_slot)
        await self._apply({task_id: update for task_id in ids})

        logger.info(f"Scheduled {len(ids)} task(s) into {focus_date.isoformat()}/{focus_slot}")
        await self._notify()
        return ScheduleResult.success(ids)

    async def unschedule_task(self, task_id: UUID) -> ScheduleResult:
        """
        Take a task out of its cell.

        Unscheduling a task that is not in any cell succeeds and leaves it
        unchanged.
        """
        await self._load([task_id])
        await self._apply({task_id: unschedule_update()})

        logger.info(f"Unscheduled task {task_id}")
        await self._notify()
        return ScheduleResult.success([task_id])

    async def clear_slot(self, focus_date: date, focus_slot: str) -> ScheduleResult:
        """Unschedule every task currently in the (focus_date, focus_slot) cell."""
        if not (focus_slot and focus_slot.strip()):
            raise ValidationError("Please select a date and time slot")

        in_day = await self._task_repo.list(focus_date=focus_date, limit=None)
        ids = [task.id for task in in_day if task.focus_slot == focus_slot]
        if not ids:
            return ScheduleResult.success([])

        update = unschedule_update()
        await self._apply({task_id: update for task_id in ids})

        logger.info(f"Cleared {len(ids)} task(s) from {focus_date.isoformat()}/{focus_slot}")
        await self._notify()
        return ScheduleResult.success(ids)
