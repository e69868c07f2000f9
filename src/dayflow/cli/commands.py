# src/dayflow/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import re
from collections.abc import Callable, Sequence
from typing import cast

from ..core.state import AppState
from ..planner.calendar_math import format_long, format_month, is_date_key, to_date_key
from ..planner.errors import ValidationError
from ..planner.models import Event, RelativeBucket, Task
from ..planner.relative import bucket_label, date_key_for_bucket, parse_bucket
from ..planner.views import day_view
from . import render

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandArgs(list[str]):
    """Whitespace-split arguments that remember the raw text they came from."""

    def __init__(self, raw: str = "") -> None:
        self.raw = raw.strip()
        super().__init__(self.raw.split())

    def tail(self, n: int) -> str:
        """Raw text after the first `n` arguments, inner spacing kept."""
        if n <= 0:
            return self.raw
        pieces = re.split(r"\s+", self.raw, maxsplit=n)
        return pieces[n] if len(pieces) > n else ""


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /today, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Validation errors come back as a reply so the user can retry.
        """
        if not line.startswith("/"):
            return None

        body = line[1:].strip()
        if not body:
            return "Empty command. Use /help to list available commands."

        head, *rest = re.split(r"\s+", body, maxsplit=1)
        name = head.lower()
        args = CommandArgs(rest[0] if rest else "")

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except ValidationError as exc:
            logger.debug("Command /%s rejected: %s", name, exc)
            return f"Invalid input: {exc}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_text(args: Sequence[str], skip: int = 0) -> tuple[str, str]:
    """'Buy milk | on the way home' -> ('Buy milk', 'on the way home'), after `skip` arguments."""
    joined = args.tail(skip) if isinstance(args, CommandArgs) else " ".join(args[skip:])
    title, _, extra = joined.partition("|")
    return title.strip(), extra.strip()


def _date_arg(state: AppState, arg: str) -> str | None:
    """A YYYY-MM-DD key or a relative word (today, tomorrow, next-week). None if neither."""
    if is_date_key(arg):
        return to_date_key(arg)
    bucket = parse_bucket(arg)
    if bucket is None or bucket == RelativeBucket.NONE:
        return None
    store = state.store
    return date_key_for_bucket(bucket, store.today(), store.week_start_day)


def _resolve_id(records: Sequence[Task] | Sequence[Event], prefix: str) -> tuple[str | None, str]:
    """Full id for a unique prefix. Returns (id, error)."""
    exact = [r.id for r in records if r.id == prefix]
    if exact:
        return exact[0], ""
    matches = [r.id for r in records if r.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0], ""
    if not matches:
        return None, f"Nothing matches id '{prefix}'."
    return None, f"Id '{prefix}' is ambiguous ({len(matches)} matches)."


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    settings = state.settings
    backend = getattr(settings, "storage_backend", "?")
    path = getattr(settings, "storage_path", "?")
    return (
        "Status:\n"
        f"  Storage: {backend} ({path})\n"
        f"  Week starts on weekday {store.week_start_day} (Monday=0)\n"
        f"  Locale: {state.locale}\n"
        f"  Tasks: {len(store.tasks)}  Events: {len(store.events)}\n"
        f"  Selected: {format_long(store.selected_date, state.locale)}\n"
        f"  Month: {format_month(store.visible_month, state.locale)}"
    )


def cmd_today(state: AppState, args: list[str]) -> str:
    return render.render_today(state.store.snapshot(), state.today_task_limit, state.locale)


def cmd_more(state: AppState, args: list[str]) -> str:
    state.store.toggle_show_all_today_tasks()
    return cmd_today(state, args)


def cmd_day(state: AppState, args: list[str]) -> str:
    """
    /day          -> selected day
    /day DATE     -> any day, without moving the cursor
    """
    snapshot = state.store.snapshot()
    if not args:
        return render.render_selected_day(snapshot, state.locale)
    key = _date_arg(state, args[0])
    if key is None:
        return "Usage: /day [YYYY-MM-DD|today|tomorrow]"
    return render.render_day(snapshot, day_view(snapshot, key), state.locale)


def cmd_select(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /select YYYY-MM-DD|today|tomorrow"
    key = _date_arg(state, args[0])
    if key is None:
        return f"Not a date: {args[0]}"
    state.store.select_date(key)
    return render.render_week(state.store.snapshot(), state.locale)


def _step(args: list[str]) -> int | None:
    if not args:
        return 0
    word = args[0].lower()
    if word in ("next", "+", "n"):
        return 1
    if word in ("prev", "previous", "-", "p"):
        return -1
    with contextlib.suppress(ValueError):
        return int(word)
    return None


def cmd_week(state: AppState, args: list[str]) -> str:
    """
    /week         -> current week window
    /week next    -> page forward (selected day stays put)
    /week prev    -> page back
    """
    step = _step(args)
    if step is None:
        return "Usage: /week [prev|next|N]"
    if step:
        state.store.shift_week(step)
    return render.render_week(state.store.snapshot(), state.locale)


def cmd_month(state: AppState, args: list[str]) -> str:
    step = _step(args)
    if step is None:
        return "Usage: /month [prev|next|N]"
    if step:
        state.store.shift_month(step)
    return render.render_month(state.store.snapshot(), state.locale)


def cmd_undated(state: AppState, args: list[str]) -> str:
    return render.render_undated(state.store.snapshot(), state.locale)


_TASK_USAGE = (
    "Usage:\n"
    "  /task add [today|tomorrow|this-week|next-week|none|YYYY-MM-DD] TITLE [| NOTE]\n"
    "  /task done ID | /task undo ID\n"
    "  /task edit ID TITLE [| NOTE]\n"
    "  /task move ID YYYY-MM-DD|none\n"
    "  /task rm ID"
)


def _task_add(state: AppState, args: list[str]) -> str:
    """`args` still holds the subcommand word at index 0."""
    store = state.store
    if len(args) < 2:
        return _TASK_USAGE

    first = args[1]
    bucket = parse_bucket(first)
    if bucket is not None:
        title, note = _split_text(args, 2)
        task = store.add_task_for_bucket(title, note, bucket)
    elif is_date_key(first):
        title, note = _split_text(args, 2)
        task = store.add_task(title, note, first)
    else:
        # No explicit due date: the task lands on the selected day.
        title, note = _split_text(args, 1)
        task = store.add_task(title, note, store.selected_date)
    return render.render_task_created(task, store.snapshot(), state.locale)


def cmd_task(state: AppState, args: list[str]) -> str:
    if not args:
        return _TASK_USAGE

    sub, rest = args[0].lower(), args[1:]
    store = state.store

    if sub in ("add", "new"):
        return _task_add(state, args)

    if not rest:
        return _TASK_USAGE

    task_id, err = _resolve_id(store.tasks, rest[0])
    if task_id is None:
        return err

    if sub in ("done", "undo"):
        task = store.toggle_task(task_id, sub == "done")
        if task is None:
            return "Task is gone."
        return f"{'Done' if task.done else 'Reopened'}: {task.title}"

    if sub == "edit":
        title, note = _split_text(args, 2)
        task = store.edit_task(task_id, title, note if "|" in " ".join(rest) else None)
        return f"Updated: {task.title}" if task else "Task is gone."

    if sub == "move":
        if len(rest) < 2:
            return _TASK_USAGE
        target = rest[1]
        if parse_bucket(target) == RelativeBucket.NONE:
            new_date = None
        else:
            new_date = _date_arg(state, target)
            if new_date is None:
                return f"Not a date: {target}"
        current = store.get_task(task_id)
        if current is None:
            return "Task is gone."
        task = store.edit_task(task_id, current.title, date=new_date)
        when = new_date or bucket_label(RelativeBucket.NONE, state.locale)
        return f"Moved: {task.title} -> {when}" if task else "Task is gone."

    if sub in ("rm", "del", "delete"):
        store.delete_task(task_id)
        return f"Deleted task {render.short_id(task_id)}."

    return _TASK_USAGE


_EVENT_USAGE = (
    "Usage:\n"
    "  /event add YYYY-MM-DD|today|tomorrow [HH:MM] TITLE [| MEMO]\n"
    "  /event edit ID TITLE [| MEMO]\n"
    "  /event time ID HH:MM|allday\n"
    "  /event rm ID"
)


def cmd_event(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return _EVENT_USAGE

    sub, rest = args[0].lower(), args[1:]
    store = state.store

    if sub in ("add", "new"):
        key = _date_arg(state, rest[0])
        if key is None:
            raise ValidationError(f"event date is required (got {rest[0]!r})")
        skip = 2
        time_str = None
        if len(args) > 2 and ":" in args[2] and args[2].replace(":", "").isdigit():
            time_str, skip = args[2], 3
        title, memo = _split_text(args, skip)
        event = store.add_event(title, key, time_str, memo)
        when = event.time or render.text("all_day", state.locale)
        return f"Event added [{render.short_id(event.id)}]: {event.title} ({event.date} {when})"

    event_id, err = _resolve_id(store.events, rest[0])
    if event_id is None:
        return err

    if sub == "edit":
        title, memo = _split_text(args, 2)
        has_memo = "|" in " ".join(rest)
        event = store.edit_event(event_id, title=title, memo=memo if has_memo else None)
        return f"Updated: {event.title}" if event else "Event is gone."

    if sub == "time":
        if len(rest) < 2:
            return _EVENT_USAGE
        raw = rest[1].lower()
        new_time = None if raw in ("allday", "all-day", "none") else rest[1]
        event = store.edit_event(event_id, time=new_time)
        if event is None:
            return "Event is gone."
        return f"Updated: {event.title} ({event.time or render.text('all_day', state.locale)})"

    if sub in ("rm", "del", "delete"):
        store.delete_event(event_id)
        return f"Deleted event {render.short_id(event_id)}."

    return _EVENT_USAGE


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show storage, locale and cursor.")
registry.register("today", cmd_today, help_text="Today's events and tasks.", aliases=["t"])
registry.register("more", cmd_more, help_text="Toggle showing all of today's tasks.")
registry.register("day", cmd_day, help_text="Show a day: /day [DATE].", aliases=["d"])
registry.register("select", cmd_select, help_text="Select a day: /select DATE|today.", aliases=["go"])
registry.register("week", cmd_week, help_text="Week strip: /week [prev|next].", aliases=["w"])
registry.register("month", cmd_month, help_text="Month grid: /month [prev|next].", aliases=["m"])
registry.register("undated", cmd_undated, help_text="Tasks without a due date.")
registry.register("task", cmd_task, help_text="Tasks: /task add|done|undo|edit|move|rm.")
registry.register("event", cmd_event, help_text="Events: /event add|edit|time|rm.")
