# src/dayflow/planner/models.py

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from .calendar_math import is_date_key

logger = logging.getLogger(__name__)

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class RelativeBucket(StrEnum):
    """
    Where a date falls relative to "now".

    NONE is only used as a quick-pick value ("no due date") when creating a task;
    classify() never returns it.
    """

    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"
    NEXT_WEEK = "next_week"
    OTHER = "other"
    NONE = "none"


def is_time(value: str | None) -> bool:
    return bool(value) and bool(TIME_RE.match(value or ""))


def _opt_str(raw: Any) -> str | None:
    if raw is None:
        return None
    s = str(raw).strip()
    return s or None


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})


def _as_bool(raw: Any) -> bool:
    """Stored flag -> bool. Strings are parsed, so "false" and "0" stay False."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw != 0
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUE_WORDS
    return False


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    title: str
    note: str = ""
    date: str | None = None
    done: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "note": self.note,
            "date": self.date,
            "done": self.done,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task | None:
        """Build a Task from a stored record; None if the record is unusable."""
        task_id = _opt_str(raw.get("id"))
        title = _opt_str(raw.get("title"))
        if not task_id or not title:
            return None

        task_date = _opt_str(raw.get("date"))
        if task_date is not None and not is_date_key(task_date):
            logger.warning("Task %s has malformed date %r; treating as undated.", task_id, task_date)
            task_date = None

        return cls(
            id=task_id,
            title=title,
            note=str(raw.get("note") or ""),
            date=task_date,
            done=_as_bool(raw.get("done", False)),
        )


@dataclass(slots=True, frozen=True)
class Event:
    id: str
    title: str
    date: str
    time: str | None = None
    memo: str = ""

    @property
    def all_day(self) -> bool:
        return not self.time

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "memo": self.memo,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Event | None:
        event_id = _opt_str(raw.get("id"))
        title = _opt_str(raw.get("title"))
        event_date = _opt_str(raw.get("date"))
        if not event_id or not title or not event_date or not is_date_key(event_date):
            return None

        event_time = _opt_str(raw.get("time"))
        if event_time is not None and not is_time(event_time):
            logger.warning("Event %s has malformed time %r; treating as all-day.", event_id, event_time)
            event_time = None

        return cls(
            id=event_id,
            title=title,
            date=event_date,
            time=event_time,
            memo=str(raw.get("memo") or ""),
        )


@dataclass(slots=True, frozen=True)
class PlannerSnapshot:
    """Immutable view of the store that projections read from."""

    tasks: tuple[Task, ...]
    events: tuple[Event, ...]
    selected_date: str
    week_window_start: date
    visible_month: date
    show_all_today_tasks: bool
    today: str
    week_start_day: int = 0
