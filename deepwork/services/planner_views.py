"""
Derived planner views: weekly grid, slot detail and today's focus.

These are recomputed from a task snapshot on every request.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

from deepwork.models.enums import TaskStatus, priority_rank
from deepwork.models.schedule import (
    CalendarEvent,
    CapacityThresholds,
    CellView,
    TodayFocus,
    WeekGrid,
)
from deepwork.models.task import Task
from deepwork.services.capacity import (
    DEFAULT_THRESHOLDS,
    CellIndex,
    capacity_status,
    cell_usage,
    overflow_percent,
)
from deepwork.services.slot_catalog import SlotCatalog, default_catalog
from deepwork.services.urgency import days_until

DAYS_IN_WEEK = 7
URGENT_WITHIN_DAYS = 2


def week_bounds(day: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing day."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=DAYS_IN_WEEK - 1)


def _build_cell(
    focus_date: date,
    slot_key: str,
    tasks: list[Task],
    catalog: SlotCatalog,
    thresholds: CapacityThresholds,
    events: Optional[list[CalendarEvent]] = None,
) -> CellView:
    usage = cell_usage(tasks)
    status = capacity_status(usage.used_hours, catalog.capacity_hours(slot_key), thresholds)
    return CellView(
        focus_date=focus_date,
        slot_key=slot_key,
        slot_label=catalog.label(slot_key),
        tasks=tasks,
        usage=usage,
        status=status,
        overflow_percent=overflow_percent(status),
        events=events or [],
    )


def group_events(
    events: Iterable[CalendarEvent],
    catalog: SlotCatalog = default_catalog,
) -> dict[tuple[date, str], list[CalendarEvent]]:
    """Bucket calendar events into cells by their start time."""
    grouped: dict[tuple[date, str], list[CalendarEvent]] = defaultdict(list)
    for event in events:
        event_date = event.event_date
        if event_date is None:
            continue
        grouped[(event_date, catalog.slot_for_time(event.start))].append(event)
    return grouped


def build_week_grid(
    tasks: Iterable[Task],
    week_of: date,
    catalog: SlotCatalog = default_catalog,
    thresholds: CapacityThresholds = DEFAULT_THRESHOLDS,
    events: Iterable[CalendarEvent] = (),
) -> WeekGrid:
    """
    Build the 7 x slots grid for the week containing week_of.

    Finished and cancelled tasks do not occupy capacity in the grid.
    """
    week_start, week_end = week_bounds(week_of)
    days = [week_start + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]

    index = CellIndex(task for task in tasks if not task.status.is_closed)
    events_by_cell = group_events(events, catalog)

    cells = [
        _build_cell(
            day,
            slot.key,
            index.tasks(day, slot.key),
            catalog,
            thresholds,
            events_by_cell.get((day, slot.key)),
        )
        for slot in catalog.slots()
        for day in days
    ]
    return WeekGrid(
        week_start=week_start,
        week_end=week_end,
        days=days,
        slots=catalog.slots(),
        cells=cells,
    )


def cell_detail(
    tasks: Iterable[Task],
    focus_date: date,
    slot_key: str,
    catalog: SlotCatalog = default_catalog,
    thresholds: CapacityThresholds = DEFAULT_THRESHOLDS,
    events: Iterable[CalendarEvent] = (),
) -> CellView:
    """Tasks and capacity for a single cell, as shown by the slot detail dialog."""
    cell_tasks = CellIndex(tasks).tasks(focus_date, slot_key)
    cell_events = group_events(events, catalog).get((focus_date, slot_key))
    return _build_cell(focus_date, slot_key, cell_tasks, catalog, thresholds, cell_events)


def today_focus(tasks: Iterable[Task], today: date) -> TodayFocus:
    """
    Summarise the tasks focused on today.

    The "one thing" is the highest-priority task that is not done yet.
    """
    todays = [
        task
        for task in tasks
        if task.focus_date == today and task.status != TaskStatus.CANCELLED
    ]
    ordered = sorted(todays, key=lambda task: priority_rank(task.priority))
    open_tasks = [task for task in ordered if not task.status.is_finished]

    urgent = [
        task
        for task in open_tasks
        if task.due_date is not None
        and 0 <= days_until(task.due_date, today) <= URGENT_WITHIN_DAYS
    ]
    overdue = [
        task
        for task in open_tasks
        if task.due_date is not None and days_until(task.due_date, today) < 0
    ]

    return TodayFocus(
        focus_date=today,
        tasks=ordered,
        total_scheduled_hours=cell_usage(todays).used_hours,
        completed_count=sum(1 for task in todays if task.status.is_finished),
        one_thing=open_tasks[0] if open_tasks else None,
        urgent_tasks=urgent,
        overdue_tasks=overdue,
    )
