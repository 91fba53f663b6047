"""
Unit tests for SchedulingService with a mocked repository.
"""

from datetime import date
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from deepwork.core.exceptions import NotFoundError, PersistenceError, ValidationError
from deepwork.services.realtime_service import RealtimeManager
from deepwork.services.scheduling_service import (
    SchedulingService,
    schedule_update,
    unschedule_update,
)

FOCUS_DATE = date(2025, 3, 12)


@pytest.fixture
def repo():
    return AsyncMock()


@pytest.fixture
def notifier():
    return AsyncMock(spec=RealtimeManager)


@pytest.fixture
def service(repo, notifier):
    return SchedulingService(task_repo=repo, notifier=notifier)


def test_schedule_update_sets_pair_and_day_id():
    update = schedule_update(FOCUS_DATE, "gym")

    assert update.model_dump(exclude_unset=True) == {
        "focus_date": FOCUS_DATE,
        "focus_slot": "gym",
        "day_id": "day_2025-03-12",
    }


def test_unschedule_update_clears_everything():
    assert unschedule_update().model_dump(exclude_unset=True) == {
        "focus_date": None,
        "focus_slot": None,
        "day_id": None,
    }


@pytest.mark.asyncio
async def test_schedule_tasks_updates_batch(service, repo, notifier, make_task):
    tasks = [make_task("a"), make_task("b")]
    ids = [task.id for task in tasks]
    repo.get_many.return_value = tasks

    result = await service.schedule_tasks(ids + ids[:1], FOCUS_DATE, "deep_work_1")

    assert result.ok
    assert result.scheduled_count == 2
    assert result.task_ids == ids
    repo.get_many.assert_awaited_once_with(ids)
    updates = repo.update_many.await_args.args[0]
    assert list(updates) == ids
    assert all(update.focus_slot == "deep_work_1" for update in updates.values())
    notifier.publish_refresh.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "task_ids,focus_date,focus_slot",
    [
        ([], FOCUS_DATE, "gym"),
        ([uuid4()], None, "gym"),
        ([uuid4()], FOCUS_DATE, None),
        ([uuid4()], FOCUS_DATE, ""),
        ([uuid4()], FOCUS_DATE, "   "),
        ([uuid4()], FOCUS_DATE, "x" * 51),
    ],
)
async def test_schedule_tasks_validation(service, repo, notifier, task_ids, focus_date, focus_slot):
    with pytest.raises(ValidationError):
        await service.schedule_tasks(task_ids, focus_date, focus_slot)

    repo.get_many.assert_not_awaited()
    repo.update_many.assert_not_awaited()
    notifier.publish_refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_schedule_tasks_unknown_ids(service, repo, make_task):
    known = make_task("known")
    missing = uuid4()
    repo.get_many.return_value = [known]

    with pytest.raises(NotFoundError) as exc_info:
        await service.schedule_tasks([known.id, missing], FOCUS_DATE, "gym")

    assert exc_info.value.missing_ids == [missing]
    repo.update_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_schedule_tasks_persistence_failure_propagates(service, repo, notifier, make_task):
    tasks = [make_task("a"), make_task("b"), make_task("c")]
    repo.get_many.return_value = tasks
    repo.update_many.side_effect = PersistenceError("rejected", failed_task_ids=[tasks[1].id])

    with pytest.raises(PersistenceError) as exc_info:
        await service.schedule_tasks([task.id for task in tasks], FOCUS_DATE, "gym")

    assert exc_info.value.failed_task_ids == [tasks[1].id]
    notifier.publish_refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_slot_allowed_unless_strict(repo, notifier, make_task):
    task = make_task("a")
    repo.get_many.return_value = [task]

    lenient = SchedulingService(task_repo=repo, notifier=notifier)
    assert (await lenient.schedule_tasks([task.id], FOCUS_DATE, "siesta")).ok

    strict = SchedulingService(task_repo=repo, notifier=notifier, strict_slots=True)
    with pytest.raises(ValidationError):
        await strict.schedule_tasks([task.id], FOCUS_DATE, "siesta")


@pytest.mark.asyncio
async def test_unschedule_task(service, repo, notifier, make_task):
    task = make_task("a", focus_date=FOCUS_DATE, focus_slot="gym")
    repo.get_many.return_value = [task]

    result = await service.unschedule_task(task.id)

    assert result.ok
    assert result.task_ids == [task.id]
    update = repo.update_many.await_args.args[0][task.id]
    assert update.focus_date is None and update.focus_slot is None
    notifier.publish_refresh.assert_awaited_once()


@pytest.mark.asyncio
async def test_unschedule_missing_task(service, repo):
    repo.get_many.return_value = []

    with pytest.raises(NotFoundError):
        await service.unschedule_task(uuid4())


@pytest.mark.asyncio
async def test_clear_slot_only_touches_that_cell(service, repo, make_task):
    in_cell = [
        make_task("a", focus_date=FOCUS_DATE, focus_slot="gym"),
        make_task("b", focus_date=FOCUS_DATE, focus_slot="gym"),
    ]
    other = make_task("c", focus_date=FOCUS_DATE, focus_slot="lunch")
    repo.list.return_value = in_cell + [other]

    result = await service.clear_slot(FOCUS_DATE, "gym")

    repo.list.assert_awaited_once_with(focus_date=FOCUS_DATE, limit=None)
    assert result.scheduled_count == 2
    assert set(repo.update_many.await_args.args[0]) == {task.id for task in in_cell}


@pytest.mark.asyncio
async def test_clear_empty_slot_is_a_no_op(service, repo, notifier):
    repo.list.return_value = []

    result = await service.clear_slot(FOCUS_DATE, "gym")

    assert result.ok
    assert result.scheduled_count == 0
    repo.update_many.assert_not_awaited()
    notifier.publish_refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_slot_key_at_column_limit_is_accepted(service, repo, make_task):
    task = make_task("a")
    repo.get_many.return_value = [task]

    result = await service.schedule_tasks([task.id], FOCUS_DATE, "x" * 50)

    assert result.ok
    assert repo.update_many.await_args.args[0][task.id].focus_slot == "x" * 50


@pytest.mark.asyncio
async def test_clear_slot_rejects_blank_slot(service, repo):
    with pytest.raises(ValidationError):
        await service.clear_slot(FOCUS_DATE, "  ")

    repo.list.assert_not_awaited()


@pytest.mark.asyncio
async def test_persistence_failure_is_logged_as_error(service, repo, make_task):
    task = make_task("a", focus_date=FOCUS_DATE, focus_slot="gym")
    repo.get_many.return_value = [task]
    repo.update_many.side_effect = PersistenceError("rejected", failed_task_ids=[task.id])

    with patch("deepwork.services.scheduling_service.logger") as mock_logger:
        with pytest.raises(PersistenceError):
            await service.unschedule_task(task.id)

    mock_logger.error.assert_called_once()
    assert str(task.id) in mock_logger.error.call_args.args[0]
    mock_logger.info.assert_not_called()
