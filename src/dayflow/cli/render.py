# src/dayflow/cli/render.py

"""Plain-text rendering of planner views for the console connector."""

from __future__ import annotations

from ..planner.calendar_math import (
    add_days,
    format_long,
    format_month,
    format_range,
    format_short,
    parse_date_key,
    weekday_labels,
)
from ..planner.models import Event, PlannerSnapshot, Task
from ..planner.relative import badge_label
from ..planner.views import DayView, day_view, month_grid, today_view, undated_view, week_grid

SHORT_ID_LEN = 8

_TEXT = {
    "en": {
        "all_day": "all day",
        "no_events": "No events",
        "no_tasks": "No tasks",
        "events": "Events",
        "tasks": "Tasks",
        "undated": "Undated tasks",
        "more": "{n} more (use /more to show all)",
        "showing_all": "showing all (use /more to collapse)",
        "today": "Today",
    },
    "ja": {
        "all_day": "終日",
        "no_events": "予定はありません",
        "no_tasks": "タスクはありません",
        "events": "予定",
        "tasks": "タスク",
        "undated": "期限なしのタスク",
        "more": "ほか{n}件（/more で全て表示）",
        "showing_all": "全て表示中（/more で3件表示）",
        "today": "今日",
    },
}


def text(key: str, locale: str = "en") -> str:
    return _TEXT.get(locale, _TEXT["en"]).get(key, _TEXT["en"][key])


def short_id(record_id: str) -> str:
    return record_id[:SHORT_ID_LEN]


def event_line(event: Event, locale: str = "en") -> str:
    when = event.time or text("all_day", locale)
    line = f"[{short_id(event.id)}] {when:>7}  {event.title}"
    if event.memo:
        line += f"  ({event.memo})"
    return line


def task_line(task: Task, snapshot: PlannerSnapshot, locale: str = "en") -> str:
    box = "[x]" if task.done else "[ ]"
    badge = badge_label(task.date, snapshot.today, snapshot.week_start_day, locale)
    line = f"[{short_id(task.id)}] {box} {task.title}  <{badge}>"
    if task.note:
        line += f"  ({task.note})"
    return line


def _section(title: str, lines: list[str], empty: str) -> list[str]:
    if not lines:
        return [f"{title}:", f"  {empty}"]
    return [f"{title}:"] + [f"  {ln}" for ln in lines]


def render_day(snapshot: PlannerSnapshot, view: DayView, locale: str = "en") -> str:
    lines = [f"{format_long(view.date, locale)}  ({view.done_count}/{view.total_count})"]
    lines += _section(
        text("events", locale),
        [event_line(e, locale) for e in view.events],
        text("no_events", locale),
    )
    lines += _section(
        text("tasks", locale),
        [task_line(t, snapshot, locale) for t in view.tasks],
        text("no_tasks", locale),
    )
    return "\n".join(lines)


def render_selected_day(snapshot: PlannerSnapshot, locale: str = "en") -> str:
    return render_day(snapshot, day_view(snapshot), locale)


def render_today(snapshot: PlannerSnapshot, limit: int = 3, locale: str = "en") -> str:
    view = today_view(snapshot, limit)
    lines = [f"{text('today', locale)} - {format_long(view.day.date, locale)}"]
    lines += _section(
        text("events", locale),
        [event_line(e, locale) for e in view.day.events],
        text("no_events", locale),
    )
    lines += _section(
        text("tasks", locale),
        [task_line(t, snapshot, locale) for t in view.visible_tasks],
        text("no_tasks", locale),
    )
    if view.hidden_count:
        lines.append("  " + text("more", locale).format(n=view.hidden_count))
    elif view.show_all and view.visible_tasks:
        lines.append("  " + text("showing_all", locale))
    return "\n".join(lines)


def render_week(snapshot: PlannerSnapshot, locale: str = "en") -> str:
    cells = week_grid(snapshot)
    start = snapshot.week_window_start
    lines = [format_range(start, add_days(start, 6), locale)]
    for cell, label in zip(cells, weekday_labels(snapshot.week_start_day, locale)):
        marks = ("*" if cell.has_event else " ") + ("+" if cell.has_task else " ")
        cursor = ">" if cell.is_selected else " "
        today_mark = " (today)" if cell.is_today else ""
        day = parse_date_key(cell.date).day
        lines.append(f"{cursor} {label} {day:>2} {marks}{today_mark}")
    lines.append("")
    lines.append(render_selected_day(snapshot, locale))
    return "\n".join(lines)


def render_month(snapshot: PlannerSnapshot, locale: str = "en") -> str:
    grid = month_grid(snapshot)
    lines = [format_month(grid.month, locale)]
    lines.append(" ".join(f"{lbl:^7}" for lbl in weekday_labels(snapshot.week_start_day, locale)))

    # ">" selected, "(dd)" today, "*" event, "+" open task
    slots = [" " * 7] * grid.leading_blanks
    for cell in grid.cells:
        cursor = ">" if cell.is_selected else " "
        left, right = ("(", ")") if cell.is_today else (" ", " ")
        marks = ("*" if cell.has_event else " ") + ("+" if cell.has_undone_task else " ")
        slots.append(f"{cursor}{left}{cell.day:>2}{right}{marks}")
    for i in range(0, len(slots), 7):
        lines.append(" ".join(slots[i : i + 7]))

    lines.append("")
    lines.append(render_selected_day(snapshot, locale))
    return "\n".join(lines)


def render_undated(snapshot: PlannerSnapshot, locale: str = "en") -> str:
    tasks = undated_view(snapshot)
    return "\n".join(
        _section(
            text("undated", locale),
            [task_line(t, snapshot, locale) for t in tasks],
            text("no_tasks", locale),
        )
    )


def render_task_created(task: Task, snapshot: PlannerSnapshot, locale: str = "en") -> str:
    when = format_short(task.date, locale) if task.date else badge_label(None, snapshot.today, locale=locale)
    return f"Task added [{short_id(task.id)}]: {task.title} ({when})"
