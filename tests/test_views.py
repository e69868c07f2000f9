# tests/test_views.py

from __future__ import annotations

from datetime import date

from dayflow.planner.store import PlannerStore
from dayflow.planner.views import day_view, month_grid, today_view, undated_view, week_grid

from .fakes import MemoryStorage


def test_day_view_orders_events_untimed_first(store: PlannerStore) -> None:
    store.add_event("Gym", "2024-06-10", "18:00")
    store.add_event("Holiday", "2024-06-10")
    store.add_event("MTG", "2024-06-10", "09:00")
    store.add_event("Other day", "2024-06-11", "08:00")

    view = day_view(store.snapshot(), "2024-06-10")

    assert [e.title for e in view.events] == ["Holiday", "MTG", "Gym"]


def test_day_view_tasks_done_last_and_stable(store: PlannerStore) -> None:
    a = store.add_task("A", date="2024-06-10")
    store.add_task("B", date="2024-06-10")
    c = store.add_task("C", date="2024-06-10")
    store.add_task("D", date="2024-06-10")
    store.toggle_task(a.id, True)
    store.toggle_task(c.id, True)

    view = day_view(store.snapshot(), "2024-06-10")

    assert [t.title for t in view.tasks] == ["B", "D", "A", "C"]
    assert view.done_count == 2
    assert view.total_count == 4


def test_day_view_undone_before_done_pair(store: PlannerStore) -> None:
    a = store.add_task("A", date="2024-06-12")
    store.toggle_task(a.id, True)
    store.add_task("B", date="2024-06-12")

    assert [t.title for t in day_view(store.snapshot(), "2024-06-12").tasks] == ["B", "A"]


def test_undated_tasks_only_in_undated_view(store: PlannerStore) -> None:
    store.add_task("Someday")
    store.add_task("Dated", date="2024-06-10")

    snapshot = store.snapshot()
    assert [t.title for t in day_view(snapshot, "2024-06-10").tasks] == ["Dated"]
    assert [t.title for t in day_view(snapshot, "2024-06-11").tasks] == []
    assert [t.title for t in undated_view(snapshot)] == ["Someday"]


def test_day_view_defaults_to_selected_date(store: PlannerStore) -> None:
    store.add_task("Later", date="2024-06-20")
    store.select_date("2024-06-20")
    assert day_view(store.snapshot()).date == "2024-06-20"
    assert [t.title for t in day_view(store.snapshot()).tasks] == ["Later"]


def test_today_view_limit_and_toggle(store: PlannerStore) -> None:
    tasks = [store.add_task(f"T{i}", date="2024-06-10") for i in range(5)]
    store.toggle_task(tasks[0].id, True)

    collapsed = today_view(store.snapshot(), limit=3)
    assert [t.title for t in collapsed.visible_tasks] == ["T1", "T2", "T3"]
    assert collapsed.hidden_count == 1
    assert collapsed.day.total_count == 5

    store.toggle_show_all_today_tasks()
    expanded = today_view(store.snapshot(), limit=3)
    assert [t.title for t in expanded.visible_tasks] == ["T1", "T2", "T3", "T4"]
    assert expanded.hidden_count == 0
    assert expanded.show_all


def test_today_view_ignores_selected_date(store: PlannerStore) -> None:
    store.add_task("Now", date="2024-06-10")
    store.select_date("2024-07-01")
    assert today_view(store.snapshot()).day.date == "2024-06-10"


def test_week_grid_cells(store: PlannerStore) -> None:
    store.add_event("MTG", "2024-06-11", "09:00")
    done = store.add_task("Done task", date="2024-06-13")
    store.toggle_task(done.id, True)
    store.add_task("Undated")
    store.select_date("2024-06-12")

    cells = week_grid(store.snapshot())

    assert [c.date for c in cells] == [f"2024-06-{d}" for d in range(10, 17)]
    by_date = {c.date: c for c in cells}
    assert by_date["2024-06-11"].has_event
    assert by_date["2024-06-13"].has_task
    assert by_date["2024-06-12"].is_selected
    assert by_date["2024-06-10"].is_today
    assert sum(c.is_selected for c in cells) == 1
    assert not any(c.has_task for c in cells if c.date != "2024-06-13")


def test_week_grid_follows_paged_window(store: PlannerStore) -> None:
    store.shift_week(1)
    cells = week_grid(store.snapshot())
    assert cells[0].date == "2024-06-17"
    assert not any(c.is_selected or c.is_today for c in cells)

    explicit = week_grid(store.snapshot(), date(2024, 12, 30))
    assert [c.date for c in explicit][-1] == "2025-01-05"


def test_month_grid_leading_blanks_monday_anchor(store: PlannerStore) -> None:
    # 2024-05-01 is a Wednesday: third position in a Monday-first week.
    grid = month_grid(store.snapshot(), date(2024, 5, 1))
    assert grid.leading_blanks == 2
    assert len(grid.cells) == 31
    assert grid.cells[0].date == "2024-05-01"

    # 2024-06-01 is a Saturday.
    assert month_grid(store.snapshot()).leading_blanks == 5


def test_month_grid_flags(store: PlannerStore) -> None:
    store.add_event("Trip", "2024-06-21")
    store.add_task("Open", date="2024-06-05")
    closed = store.add_task("Closed", date="2024-06-06")
    store.toggle_task(closed.id, True)
    store.select_date("2024-06-05")

    grid = month_grid(store.snapshot())
    by_day = {c.day: c for c in grid.cells}

    assert grid.month == date(2024, 6, 1)
    assert by_day[21].has_event
    assert by_day[5].has_undone_task
    assert not by_day[6].has_undone_task
    assert by_day[5].is_selected
    assert by_day[10].is_today


def test_month_grid_after_paging_keeps_selection(store: PlannerStore) -> None:
    store.shift_month(-1)
    grid = month_grid(store.snapshot())
    assert grid.month == date(2024, 5, 1)
    assert len(grid.cells) == 31
    assert not any(c.is_selected for c in grid.cells)


def test_sunday_anchor_month_blanks(clock, ids) -> None:
    store = PlannerStore(MemoryStorage({"tasks": [], "events": []}), clock=clock, id_supplier=ids, week_start_day=6)
    # 2024-06-01 is a Saturday: last slot in a Sunday-first week.
    assert month_grid(store.snapshot()).leading_blanks == 6


def test_projections_are_side_effect_free(store: PlannerStore) -> None:
    store.add_task("A", date="2024-06-10")
    snapshot = store.snapshot()
    first = (day_view(snapshot, "2024-06-10"), week_grid(snapshot), month_grid(snapshot))
    second = (day_view(snapshot, "2024-06-10"), week_grid(snapshot), month_grid(snapshot))
    assert first == second
    assert store.snapshot() == snapshot
