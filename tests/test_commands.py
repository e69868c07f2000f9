# tests/test_commands.py

from __future__ import annotations

from datetime import date

from dayflow.cli.commands import CommandArgs, CommandRegistry, registry
from dayflow.connectors.console_connector import handle_line


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a", aliases=["alpha"])
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x y") == "h2:x,y"
    assert reg.handle(state, "/ALPHA") == "h2:"
    assert reg.handle(state, "/b", emit=notes.append) == "h3"
    assert called == {"h2": 2, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_planner_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/today", "/week", "/month", "/task", "/event", "/undated"):
        assert name in text


def test_task_add_defaults_to_selected_day(state) -> None:
    state.store.select_date("2024-06-20")
    reply = registry.handle(state, "/task add Buy milk | on the way home")

    task = state.store.tasks[0]
    assert (task.title, task.note, task.date) == ("Buy milk", "on the way home", "2024-06-20")
    assert "Task added" in reply


def test_task_add_with_quick_pick_and_explicit_date(state) -> None:
    registry.handle(state, "/task add next-week Plan trip")
    registry.handle(state, "/task add none Read a book")
    registry.handle(state, "/task add 2024-07-02 Dentist")

    dates = {t.title: t.date for t in state.store.tasks}
    assert dates == {"Plan trip": "2024-06-17", "Read a book": None, "Dentist": "2024-07-02"}


def test_task_add_blank_title_reports_validation_error(state) -> None:
    reply = registry.handle(state, "/task add tomorrow")
    assert reply.startswith("Invalid input")
    assert state.store.tasks == ()


def test_task_lifecycle_by_id_prefix(state) -> None:
    registry.handle(state, "/task add 2024-06-10 Report")
    task = state.store.tasks[0]

    assert "Done" in registry.handle(state, f"/task done {task.id[:5]}")
    assert state.store.get_task(task.id).done

    registry.handle(state, f"/task edit {task.id} Report v2 | figures")
    edited = state.store.get_task(task.id)
    assert (edited.title, edited.note, edited.date) == ("Report v2", "figures", "2024-06-10")

    registry.handle(state, f"/task move {task.id} none")
    assert state.store.get_task(task.id).date is None

    registry.handle(state, f"/task rm {task.id}")
    assert state.store.tasks == ()


def test_task_unknown_or_ambiguous_id(state) -> None:
    registry.handle(state, "/task add a")
    registry.handle(state, "/task add b")
    assert "Nothing matches" in registry.handle(state, "/task done zzz")
    assert "ambiguous" in registry.handle(state, "/task done id-")


def test_event_add_time_and_memo(state) -> None:
    reply = registry.handle(state, "/event add tomorrow 09:30 Standup | room 4")
    event = state.store.events[0]
    assert (event.date, event.time, event.title, event.memo) == ("2024-06-11", "09:30", "Standup", "room 4")
    assert "Event added" in reply

    registry.handle(state, f"/event time {event.id} allday")
    assert state.store.get_event(event.id).time is None

    registry.handle(state, f"/event rm {event.id}")
    assert state.store.events == ()


def test_event_add_requires_date(state) -> None:
    reply = registry.handle(state, "/event add someday Party")
    assert reply.startswith("Invalid input")
    assert state.store.events == ()


def test_week_and_month_paging_keep_selection(state) -> None:
    reply = registry.handle(state, "/week next")
    assert state.store.week_window_start == date(2024, 6, 17)
    assert "Mon, Jun 17 - Sun, Jun 23" in reply

    reply = registry.handle(state, "/month prev")
    assert state.store.visible_month == date(2024, 5, 1)
    assert reply.startswith("May 2024")
    assert state.store.selected_date == "2024-06-10"

    assert "Usage" in registry.handle(state, "/week sideways")


def test_select_resyncs_views(state) -> None:
    registry.handle(state, "/week next")
    registry.handle(state, "/select 2024-08-15")
    store = state.store
    assert store.selected_date == "2024-08-15"
    assert store.week_window_start == date(2024, 8, 12)
    assert store.visible_month == date(2024, 8, 1)


def test_today_shows_limit_and_more_toggle(state) -> None:
    for i in range(4):
        registry.handle(state, f"/task add today Task {i}")
    registry.handle(state, "/event add today Holiday")

    collapsed = registry.handle(state, "/today")
    assert "all day" in collapsed
    assert "Task 3" not in collapsed
    assert "1 more" in collapsed

    expanded = registry.handle(state, "/more")
    assert "Task 3" in expanded


def test_undated_view_command(state) -> None:
    registry.handle(state, "/task add none Someday")
    assert "Someday" in registry.handle(state, "/undated")
    assert "Someday" not in registry.handle(state, "/day today")


def test_japanese_locale_labels(state) -> None:
    state.settings.locale = "ja"
    registry.handle(state, "/task add tomorrow 上司への返信")
    registry.handle(state, "/event add today ジム")
    reply = registry.handle(state, "/today")
    assert "今日" in reply
    assert "終日" in reply
    assert "明日" in registry.handle(state, "/day tomorrow")


def test_console_plain_text_adds_task(state) -> None:
    reply = handle_line(state, "Water the plants")
    assert "Task added" in reply
    assert state.store.tasks[0].date == "2024-06-10"
    assert handle_line(state, "   ") is None


def test_command_args_tail_keeps_spacing() -> None:
    args = CommandArgs("  add   tomorrow  Buy   milk |  two  cartons ")
    assert args == ["add", "tomorrow", "Buy", "milk", "|", "two", "cartons"]
    assert args.tail(2) == "Buy   milk |  two  cartons"
    assert args.tail(0) == "add   tomorrow  Buy   milk |  two  cartons"
    assert args.tail(9) == ""


def test_titles_and_notes_keep_inner_spacing(state) -> None:
    registry.handle(state, "/task add Buy   milk |  two  cartons")
    registry.handle(state, "/task add tomorrow Call   mom")
    handle_line(state, "Water   the plants")
    registry.handle(state, "/event add today 09:00 Stand   up | room  4")

    texts = [(t.title, t.note) for t in state.store.tasks]
    assert texts == [("Buy   milk", "two  cartons"), ("Call   mom", ""), ("Water   the plants", "")]
    event = state.store.events[0]
    assert (event.title, event.memo, event.time) == ("Stand   up", "room  4", "09:00")

    task = state.store.tasks[0]
    registry.handle(state, f"/task edit {task.id} Buy  oat  milk | one")
    assert state.store.get_task(task.id).title == "Buy  oat  milk"


def test_month_keeps_marks_on_selected_and_today_cells(state) -> None:
    registry.handle(state, "/event add 2024-06-12 Trip")
    registry.handle(state, "/task add 2024-06-10 Report")
    registry.handle(state, "/select 2024-06-12")

    reply = registry.handle(state, "/month")

    assert "> 12 * " in reply
    assert " (10) +" in reply
