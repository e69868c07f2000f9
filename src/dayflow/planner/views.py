# src/dayflow/planner/views.py

"""
Read-only projections over a PlannerSnapshot.

Everything here is a pure function of (snapshot, snapshot.today): no mutation,
safe to call on every re-render.

Rules shared by all views:
- undated tasks only show up in undated_view(), never in a dated day;
- a day view lists done tasks too, after the undone ones;
- the month grid dots only count undone tasks, the week strip counts any task.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .calendar_math import DateLike, add_days, as_date, days_in_month, month_start, to_date_key
from .models import Event, PlannerSnapshot, Task


@dataclass(slots=True, frozen=True)
class DayView:
    date: str
    events: tuple[Event, ...]
    tasks: tuple[Task, ...]
    done_count: int
    total_count: int


@dataclass(slots=True, frozen=True)
class TodayView:
    day: DayView
    visible_tasks: tuple[Task, ...]
    hidden_count: int
    show_all: bool


@dataclass(slots=True, frozen=True)
class DayCell:
    date: str
    has_event: bool
    has_task: bool
    is_selected: bool
    is_today: bool


@dataclass(slots=True, frozen=True)
class MonthCell:
    date: str
    day: int
    has_event: bool
    has_undone_task: bool
    is_selected: bool
    is_today: bool


@dataclass(slots=True, frozen=True)
class MonthGrid:
    month: date
    leading_blanks: int
    cells: tuple[MonthCell, ...]


def sort_events(events: list[Event] | tuple[Event, ...]) -> list[Event]:
    # untimed ("") collates before any HH:MM
    return sorted(events, key=lambda e: e.time or "")


def sort_tasks(tasks: list[Task] | tuple[Task, ...]) -> list[Task]:
    # sorted() is stable, so insertion order survives within each group
    return sorted(tasks, key=lambda t: t.done)


def events_on(snapshot: PlannerSnapshot, key: str) -> list[Event]:
    return [e for e in snapshot.events if e.date == key]


def tasks_on(snapshot: PlannerSnapshot, key: str) -> list[Task]:
    return [t for t in snapshot.tasks if t.date == key]


def day_view(snapshot: PlannerSnapshot, value: DateLike | None = None) -> DayView:
    """Events and tasks for one day (default: the selected date)."""
    key = to_date_key(value) if value is not None else snapshot.selected_date
    tasks = sort_tasks(tasks_on(snapshot, key))
    return DayView(
        date=key,
        events=tuple(sort_events(events_on(snapshot, key))),
        tasks=tuple(tasks),
        done_count=sum(1 for t in tasks if t.done),
        total_count=len(tasks),
    )


def undated_view(snapshot: PlannerSnapshot) -> tuple[Task, ...]:
    return tuple(sort_tasks([t for t in snapshot.tasks if not t.date]))


def today_view(snapshot: PlannerSnapshot, limit: int = 3) -> TodayView:
    """
    Today's day view plus the collapsed task list.

    The collapsed list shows undone tasks only, capped at `limit`
    unless the store's show-all toggle is on.
    """
    day = day_view(snapshot, snapshot.today)
    pending = [t for t in day.tasks if not t.done]
    visible = pending if snapshot.show_all_today_tasks else pending[: max(0, int(limit))]
    return TodayView(
        day=day,
        visible_tasks=tuple(visible),
        hidden_count=len(pending) - len(visible),
        show_all=snapshot.show_all_today_tasks,
    )


def week_grid(snapshot: PlannerSnapshot, window_start: DateLike | None = None) -> tuple[DayCell, ...]:
    start = as_date(window_start) if window_start is not None else snapshot.week_window_start
    event_days = {e.date for e in snapshot.events}
    task_days = {t.date for t in snapshot.tasks if t.date}

    cells: list[DayCell] = []
    for i in range(7):
        key = to_date_key(add_days(start, i))
        cells.append(
            DayCell(
                date=key,
                has_event=key in event_days,
                has_task=key in task_days,
                is_selected=key == snapshot.selected_date,
                is_today=key == snapshot.today,
            )
        )
    return tuple(cells)


def month_grid(snapshot: PlannerSnapshot, month: DateLike | None = None) -> MonthGrid:
    first = month_start(month) if month is not None else snapshot.visible_month
    event_days = {e.date for e in snapshot.events}
    undone_days = {t.date for t in snapshot.tasks if t.date and not t.done}

    cells: list[MonthCell] = []
    for day in range(1, days_in_month(first) + 1):
        key = to_date_key(first.replace(day=day))
        cells.append(
            MonthCell(
                date=key,
                day=day,
                has_event=key in event_days,
                has_undone_task=key in undone_days,
                is_selected=key == snapshot.selected_date,
                is_today=key == snapshot.today,
            )
        )

    return MonthGrid(
        month=first,
        leading_blanks=(first.weekday() - snapshot.week_start_day) % 7,
        cells=tuple(cells),
    )
