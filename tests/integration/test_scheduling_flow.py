"""
Integration tests for scheduling against a real SQLite repository.
"""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy import update

from deepwork.core.exceptions import NotFoundError, PersistenceError, ValidationError
from deepwork.infrastructure.local.database import TaskORM
from deepwork.infrastructure.local.task_repository import SqliteTaskRepository
from deepwork.models.enums import CapacityLevel
from deepwork.models.task import TaskCreate
from deepwork.services.planner_views import cell_detail
from deepwork.services.realtime_service import RealtimeManager
from deepwork.services.scheduling_service import SchedulingService

FOCUS_DATE = date(2025, 3, 12)


class FailingSecondUpdateRepository(SqliteTaskRepository):
    """Rejects the second row of every batch."""

    def __init__(self, session_factory):
        super().__init__(session_factory)
        self._calls = 0

    def _apply_update(self, orm, update):
        self._calls += 1
        if self._calls == 2:
            raise ValueError("simulated write failure")
        super()._apply_update(orm, update)


@pytest.fixture
def notifier():
    return RealtimeManager()


@pytest.fixture
def scheduling_service(task_repo, notifier):
    return SchedulingService(task_repo=task_repo, notifier=notifier)


async def _create(repo, *titles, **fields):
    return [await repo.create(TaskCreate(title=title, **fields)) for title in titles]


def _pair_is_consistent(task) -> bool:
    return (task.focus_date is None) == (task.focus_slot is None)


@pytest.mark.asyncio
async def test_schedule_move_and_unschedule_keep_pair_consistent(task_repo, scheduling_service):
    first, second = await _create(task_repo, "First", "Second", est_effort=1)

    await scheduling_service.schedule_tasks([first.id, second.id], FOCUS_DATE, "deep_work_1")
    await scheduling_service.schedule_tasks([first.id], FOCUS_DATE, "afternoon")
    await scheduling_service.unschedule_task(second.id)

    moved = await task_repo.get(first.id)
    cleared = await task_repo.get(second.id)

    assert (moved.focus_date, moved.focus_slot) == (FOCUS_DATE, "afternoon")
    assert moved.day_id == "day_2025-03-12"
    assert cleared.focus_date is None and cleared.focus_slot is None
    assert all(_pair_is_consistent(task) for task in await task_repo.list())


@pytest.mark.asyncio
async def test_unschedule_is_idempotent(task_repo, scheduling_service):
    (task,) = await _create(task_repo, "Once", focus_date=FOCUS_DATE, focus_slot="gym")

    first = await scheduling_service.unschedule_task(task.id)
    after_once = await task_repo.get(task.id)
    second = await scheduling_service.unschedule_task(task.id)
    after_twice = await task_repo.get(task.id)

    assert first.ok and second.ok
    assert (after_once.focus_date, after_once.focus_slot, after_once.day_id) == (None, None, None)
    assert (after_twice.focus_date, after_twice.focus_slot, after_twice.day_id) == (None, None, None)


@pytest.mark.asyncio
async def test_clear_slot_leaves_other_cells(task_repo, scheduling_service):
    gym_a, gym_b = await _create(task_repo, "Gym A", "Gym B", focus_date=FOCUS_DATE, focus_slot="gym")
    (lunch,) = await _create(task_repo, "Lunch", focus_date=FOCUS_DATE, focus_slot="lunch")

    result = await scheduling_service.clear_slot(FOCUS_DATE, "gym")

    assert result.scheduled_count == 2
    assert set(result.task_ids) == {gym_a.id, gym_b.id}
    assert (await task_repo.get(gym_a.id)).focus_date is None
    assert (await task_repo.get(lunch.id)).focus_slot == "lunch"


@pytest.mark.asyncio
async def test_clear_slot_matches_legacy_keys(task_repo, scheduling_service, session_factory):
    (task,) = await _create(task_repo, "Old", focus_date=FOCUS_DATE, focus_slot="buffer")
    async with session_factory() as session:
        await session.execute(
            update(TaskORM).where(TaskORM.id == str(task.id)).values(focus_slot="anytime")
        )
        await session.commit()

    result = await scheduling_service.clear_slot(FOCUS_DATE, "buffer")

    assert result.task_ids == [task.id]
    assert (await task_repo.get(task.id)).focus_date is None


@pytest.mark.asyncio
async def test_batch_failure_on_second_task_commits_nothing(session_factory, notifier):
    repo = FailingSecondUpdateRepository(session_factory)
    tasks = await _create(repo, "One", "Two", "Three")
    service = SchedulingService(task_repo=repo, notifier=notifier)

    with pytest.raises(PersistenceError) as exc_info:
        await service.schedule_tasks([task.id for task in tasks], FOCUS_DATE, "deep_work_1")

    assert exc_info.value.failed_task_ids == [tasks[1].id]
    for task in await repo.get_many([task.id for task in tasks]):
        assert task.focus_date is None
        assert task.focus_slot is None


@pytest.mark.asyncio
async def test_schedule_rejections_leave_state_unchanged(task_repo, scheduling_service):
    (task,) = await _create(task_repo, "Untouched")

    with pytest.raises(ValidationError):
        await scheduling_service.schedule_tasks([task.id], FOCUS_DATE, None)
    with pytest.raises(NotFoundError):
        await scheduling_service.schedule_tasks([task.id, uuid4()], FOCUS_DATE, "gym")

    assert (await task_repo.get(task.id)).focus_date is None


@pytest.mark.asyncio
async def test_successful_mutation_publishes_refresh(task_repo, scheduling_service, notifier):
    (task,) = await _create(task_repo, "Notify")
    queue = await notifier.connect()

    await scheduling_service.schedule_tasks([task.id], FOCUS_DATE, "gym")

    assert '"type":"refresh"' in queue.get_nowait()


@pytest.mark.asyncio
async def test_capacity_over_persisted_cell(task_repo, scheduling_service):
    tasks = await _create(task_repo, "a", "b", "c", est_effort=1)
    (extra,) = await _create(task_repo, "d", est_effort=2)

    await scheduling_service.schedule_tasks([task.id for task in tasks], FOCUS_DATE, "meetings")
    cell = cell_detail(await task_repo.list(focus_date=FOCUS_DATE), FOCUS_DATE, "meetings")
    assert cell.usage.used_hours == 3
    assert cell.status.level == CapacityLevel.WARNING

    await scheduling_service.schedule_tasks([extra.id], FOCUS_DATE, "meetings")
    cell = cell_detail(await task_repo.list(focus_date=FOCUS_DATE), FOCUS_DATE, "meetings")
    assert cell.usage.used_hours == 5
    assert cell.status.level == CapacityLevel.OVER
