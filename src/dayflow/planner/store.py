# src/dayflow/planner/store.py

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime
from typing import Any

from ..core.ports import Clock, IdSupplier, PlannerBlob, PlannerStorage
from .calendar_math import DateLike, add_days, as_date, month_start, shift_month, to_date_key, week_start
from .errors import NotFoundError, StorageError, ValidationError
from .models import Event, PlannerSnapshot, RelativeBucket, Task, is_time
from .relative import date_for_bucket, quick_pick_for
from .seed import seed_events, seed_tasks

logger = logging.getLogger(__name__)

_KEEP: Any = object()


def _uuid_id() -> str:
    return uuid.uuid4().hex


def _require_title(title: str | None) -> str:
    clean = (title or "").strip()
    if not clean:
        raise ValidationError("title is required")
    return clean


def _clean_date(value: DateLike | None, *, required: bool) -> str | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError("date is required")
        return None
    try:
        return to_date_key(value)
    except ValueError as exc:
        raise ValidationError(f"date must be YYYY-MM-DD, got {value!r}") from exc


def _clean_time(value: str | None) -> str | None:
    clean = (value or "").strip()
    if not clean:
        return None
    if not is_time(clean):
        raise ValidationError(f"time must be HH:MM, got {value!r}")
    return clean


def _decode_records(raw: Any, factory: Callable[[dict[str, Any]], Any], kind: str) -> list[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise StorageError(f"'{kind}' must be a list")

    out: list[Any] = []
    seen: set[str] = set()
    for item in raw:
        record = factory(item) if isinstance(item, dict) else None
        if record is None:
            logger.warning("Dropping malformed %s record: %r", kind, item)
            continue
        if record.id in seen:
            logger.warning("Dropping duplicate %s id=%s", kind, record.id)
            continue
        seen.add(record.id)
        out.append(record)
    return out


def decode_blob(blob: Any) -> tuple[list[Task], list[Event]]:
    """Turn a stored blob into record lists. Raises StorageError if the shape is wrong."""
    if not isinstance(blob, dict):
        raise StorageError("planner blob must be an object")
    tasks = _decode_records(blob.get("tasks"), Task.from_dict, "tasks")
    events = _decode_records(blob.get("events"), Event.from_dict, "events")
    return tasks, events


def encode_blob(tasks: Iterable[Task], events: Iterable[Event]) -> PlannerBlob:
    return {
        "tasks": [t.to_dict() for t in tasks],
        "events": [e.to_dict() for e in events],
    }


class PlannerStore:
    """
    Owns tasks, events and the navigation cursor.

    Every mutator persists before returning. Storage failures are logged and
    swallowed: the in-memory state stays authoritative for the session.
    Unknown ids are silent no-ops (the caller just closes its editor).

    Cursor invariants:
    - week_window_start is always normalized to week_start_day
    - visible_month always has day == 1
    """

    def __init__(
        self,
        storage: PlannerStorage,
        *,
        clock: Clock | None = None,
        id_supplier: IdSupplier | None = None,
        week_start_day: int = 0,
        seed_on_empty: bool = True,
    ) -> None:
        self._storage = storage
        self._clock: Clock = clock or datetime.now
        self._new_id: IdSupplier = id_supplier or _uuid_id
        self._week_start_day = int(week_start_day) % 7
        self._lock = threading.RLock()

        self._tasks: list[Task] = []
        self._events: list[Event] = []

        today = self.today()
        self._selected_date = to_date_key(today)
        self._week_window_start = week_start(today, self._week_start_day)
        self._visible_month = month_start(today)
        self._show_all_today_tasks = False

        self._load(seed_on_empty=seed_on_empty)
        logger.info(
            "PlannerStore ready tasks=%d events=%d week_start_day=%d",
            len(self._tasks),
            len(self._events),
            self._week_start_day,
        )

    # ---- loading / persistence ----

    def _load(self, *, seed_on_empty: bool) -> None:
        try:
            blob = self._storage.load()
            if blob is not None:
                self._tasks, self._events = decode_blob(blob)
                return
        except StorageError:
            logger.warning("Stored planner data is unreadable; falling back to seed data.", exc_info=True)

        if seed_on_empty:
            self._seed()

    def _seed(self) -> None:
        today = self.today()
        self._tasks = seed_tasks(today, self._new_id)
        self._events = seed_events(today, self._new_id)
        logger.info("Seeded planner with %d tasks and %d events.", len(self._tasks), len(self._events))
        self._persist()

    def _persist(self) -> None:
        try:
            self._storage.save(self.to_blob())
        except Exception:
            logger.exception("Failed to save planner data; keeping in-memory state.")

    def to_blob(self) -> PlannerBlob:
        with self._lock:
            return encode_blob(self._tasks, self._events)

    # ---- clock / cursor accessors ----

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return as_date(self._clock())

    @property
    def week_start_day(self) -> int:
        return self._week_start_day

    @property
    def selected_date(self) -> str:
        return self._selected_date

    @property
    def week_window_start(self) -> date:
        return self._week_window_start

    @property
    def visible_month(self) -> date:
        return self._visible_month

    @property
    def show_all_today_tasks(self) -> bool:
        return self._show_all_today_tasks

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    def snapshot(self) -> PlannerSnapshot:
        with self._lock:
            return PlannerSnapshot(
                tasks=tuple(self._tasks),
                events=tuple(self._events),
                selected_date=self._selected_date,
                week_window_start=self._week_window_start,
                visible_month=self._visible_month,
                show_all_today_tasks=self._show_all_today_tasks,
                today=to_date_key(self.today()),
                week_start_day=self._week_start_day,
            )

    # ---- lookups ----

    def get_task(self, task_id: str) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def get_event(self, event_id: str) -> Event | None:
        return next((e for e in self._events if e.id == event_id), None)

    def require_task(self, task_id: str) -> Task:
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(f"task {task_id} not found")
        return task

    def require_event(self, event_id: str) -> Event:
        event = self.get_event(event_id)
        if event is None:
            raise NotFoundError(f"event {event_id} not found")
        return event

    # ---- tasks ----

    def add_task(self, title: str, note: str | None = "", date: DateLike | None = None) -> Task:
        task = Task(
            id="",
            title=_require_title(title),
            note=(note or "").strip(),
            date=_clean_date(date, required=False),
        )
        with self._lock:
            task = replace(task, id=self._new_id())
            self._tasks.append(task)
            self._persist()
        logger.debug("Task added id=%s date=%s", task.id, task.date)
        return task

    def default_task_bucket(self, value: DateLike | None = _KEEP) -> RelativeBucket:
        """Quick-pick choice to pre-select when creating a task for `value` (default: selected date)."""
        target = self._selected_date if value is _KEEP else value
        return quick_pick_for(target, self.today(), self._week_start_day)

    def add_task_for_bucket(self, title: str, note: str | None, bucket: RelativeBucket) -> Task:
        due = date_for_bucket(bucket, self.today(), self._week_start_day)
        return self.add_task(title, note, due)

    def toggle_task(self, task_id: str, done: bool) -> Task | None:
        return self._update_task(task_id, lambda t: replace(t, done=bool(done)))

    def edit_task(
        self,
        task_id: str,
        title: str,
        note: str | None = None,
        date: DateLike | None = _KEEP,
    ) -> Task | None:
        with self._lock:
            if self.get_task(task_id) is None:
                logger.debug("Task edit ignored: unknown id=%s", task_id)
                return None
            changes: dict[str, Any] = {"title": _require_title(title)}
            if note is not None:
                changes["note"] = note.strip()
            if date is not _KEEP:
                changes["date"] = _clean_date(date, required=False)
            return self._update_task(task_id, lambda t: replace(t, **changes))

    def delete_task(self, task_id: str) -> bool:
        with self._lock:
            before = len(self._tasks)
            self._tasks = [t for t in self._tasks if t.id != task_id]
            removed = len(self._tasks) != before
            self._persist()
        logger.debug("Task delete id=%s removed=%s", task_id, removed)
        return removed

    def _update_task(self, task_id: str, change: Callable[[Task], Task]) -> Task | None:
        with self._lock:
            for i, task in enumerate(self._tasks):
                if task.id == task_id:
                    updated = change(task)
                    self._tasks[i] = updated
                    self._persist()
                    logger.debug("Task updated id=%s", task_id)
                    return updated
        logger.debug("Task update ignored: unknown id=%s", task_id)
        return None

    # ---- events ----

    def add_event(
        self,
        title: str,
        date: DateLike | None,
        time: str | None = None,
        memo: str | None = "",
    ) -> Event:
        event = Event(
            id="",
            title=_require_title(title),
            date=_clean_date(date, required=True) or "",
            time=_clean_time(time),
            memo=(memo or "").strip(),
        )
        with self._lock:
            event = replace(event, id=self._new_id())
            self._events.append(event)
            self._persist()
        logger.debug("Event added id=%s date=%s time=%s", event.id, event.date, event.time)
        return event

    def edit_event(
        self,
        event_id: str,
        *,
        title: str | None = None,
        date: DateLike | None = None,
        time: str | None = _KEEP,
        memo: str | None = None,
    ) -> Event | None:
        with self._lock:
            for i, event in enumerate(self._events):
                if event.id == event_id:
                    changes: dict[str, Any] = {}
                    if title is not None:
                        changes["title"] = _require_title(title)
                    if date is not None:
                        changes["date"] = _clean_date(date, required=True)
                    if time is not _KEEP:
                        changes["time"] = _clean_time(time)
                    if memo is not None:
                        changes["memo"] = memo.strip()
                    updated = replace(event, **changes)
                    self._events[i] = updated
                    self._persist()
                    logger.debug("Event updated id=%s", event_id)
                    return updated
        logger.debug("Event edit ignored: unknown id=%s", event_id)
        return None

    def delete_event(self, event_id: str) -> bool:
        with self._lock:
            before = len(self._events)
            self._events = [e for e in self._events if e.id != event_id]
            removed = len(self._events) != before
            self._persist()
        logger.debug("Event delete id=%s removed=%s", event_id, removed)
        return removed

    # ---- navigation ----

    def select_date(self, value: DateLike) -> str:
        """Select a day and move the week window and visible month onto it."""
        key = _clean_date(value, required=True) or ""
        with self._lock:
            self._selected_date = key
            self._week_window_start = week_start(key, self._week_start_day)
            self._visible_month = month_start(key)
        return key

    def go_today(self) -> str:
        return self.select_date(self.today())

    def shift_week(self, step: int = 1) -> date:
        with self._lock:
            self._week_window_start = add_days(self._week_window_start, 7 * int(step))
            return self._week_window_start

    def shift_month(self, step: int = 1) -> date:
        with self._lock:
            self._visible_month = shift_month(self._visible_month, int(step))
            return self._visible_month

    def toggle_show_all_today_tasks(self) -> bool:
        with self._lock:
            self._show_all_today_tasks = not self._show_all_today_tasks
            return self._show_all_today_tasks
