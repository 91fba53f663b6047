"""
Capacity accounting for (date, slot) cells.

Every figure here is a pure reduction over the task list it is given;
nothing is cached between calls.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from deepwork.models.enums import CapacityLevel
from deepwork.models.schedule import (
    CapacityProjection,
    CapacityStatus,
    CapacityThresholds,
    CellUsage,
)
from deepwork.models.task import Task

DEFAULT_THRESHOLDS = CapacityThresholds()

CellKey = tuple[date, str]


def cell_usage(tasks: Iterable[Task]) -> CellUsage:
    """Sum estimated effort (missing counts as zero) and count tasks."""
    used = 0.0
    count = 0
    for task in tasks:
        used += task.effort_hours
        count += 1
    return CellUsage(used_hours=used, task_count=count)


def capacity_status(
    used_hours: float,
    capacity_hours: float,
    thresholds: CapacityThresholds = DEFAULT_THRESHOLDS,
) -> CapacityStatus:
    """
    Measure usage against capacity.

    A zero-capacity slot is "over" as soon as it holds any effort and "ok"
    otherwise; its ratio is reported as None instead of infinity.
    """
    remaining = max(capacity_hours - used_hours, 0.0)
    overflow = max(used_hours - capacity_hours, 0.0)

    if capacity_hours <= 0:
        if used_hours > 0:
            return CapacityStatus(
                capacity_hours=capacity_hours,
                used_hours=used_hours,
                ratio=None,
                level=CapacityLevel.OVER,
                remaining_hours=0.0,
                overflow_hours=overflow,
            )
        return CapacityStatus(
            capacity_hours=capacity_hours,
            used_hours=used_hours,
            ratio=0.0,
            level=CapacityLevel.OK,
            remaining_hours=0.0,
            overflow_hours=0.0,
        )

    ratio = used_hours / capacity_hours
    if ratio > thresholds.over_ratio:
        level = CapacityLevel.OVER
    elif ratio > thresholds.warning_ratio:
        level = CapacityLevel.WARNING
    else:
        level = CapacityLevel.OK

    return CapacityStatus(
        capacity_hours=capacity_hours,
        used_hours=used_hours,
        ratio=ratio,
        level=level,
        remaining_hours=remaining,
        overflow_hours=overflow,
    )


def overflow_percent(status: CapacityStatus) -> float:
    """How far past 100% a cell is, in percent (0 when not over capacity)."""
    if status.ratio is None or status.ratio <= 1.0:
        return 0.0
    return status.ratio * 100 - 100


def projected_usage(
    cell_tasks: Iterable[Task],
    selected_tasks: Iterable[Task],
    capacity_hours: float,
    thresholds: CapacityThresholds = DEFAULT_THRESHOLDS,
) -> CapacityProjection:
    """
    Usage of a cell if the selected tasks were added to it.

    Selected tasks already sitting in the cell are counted once.
    """
    current = list(cell_tasks)
    current_ids = {task.id for task in current}
    extra = [task for task in selected_tasks if task.id not in current_ids]

    current_hours = cell_usage(current).used_hours
    selected_hours = cell_usage(extra).used_hours
    projected = current_hours + selected_hours
    status = capacity_status(projected, capacity_hours, thresholds)
    return CapacityProjection(
        current_hours=current_hours,
        selected_hours=selected_hours,
        projected_hours=projected,
        status=status,
        is_over_capacity=projected > capacity_hours,
    )


class CellIndex:
    """
    In-memory grouping of scheduled tasks by (focus_date, focus_slot).

    Built from one snapshot of the task list and discarded after use.
    Unscheduled tasks are ignored.
    """

    def __init__(self, tasks: Iterable[Task]):
        cells: dict[CellKey, list[Task]] = defaultdict(list)
        for task in tasks:
            if task.focus_date is None or task.focus_slot is None:
                continue
            cells[(task.focus_date, task.focus_slot)].append(task)
        self._cells = dict(cells)

    def __len__(self) -> int:
        return len(self._cells)

    def keys(self) -> list[CellKey]:
        return list(self._cells.keys())

    def tasks(self, focus_date: date, slot_key: str) -> list[Task]:
        return list(self._cells.get((focus_date, slot_key), []))

    def usage(self, focus_date: date, slot_key: str) -> CellUsage:
        return cell_usage(self._cells.get((focus_date, slot_key), []))

    def status(
        self,
        focus_date: date,
        slot_key: str,
        capacity_hours: float,
        thresholds: Optional[CapacityThresholds] = None,
    ) -> CapacityStatus:
        usage = self.usage(focus_date, slot_key)
        return capacity_status(usage.used_hours, capacity_hours, thresholds or DEFAULT_THRESHOLDS)
