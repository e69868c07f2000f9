# src/dayflow/planner/seed.py

"""First-run fixture data, dated relative to the current day."""

from __future__ import annotations

from datetime import date

from ..core.ports import IdSupplier
from .calendar_math import add_days, to_date_key
from .models import Event, Task


def seed_tasks(today: date, new_id: IdSupplier) -> list[Task]:
    today_key = to_date_key(today)
    tomorrow_key = to_date_key(add_days(today, 1))
    return [
        Task(id=new_id(), title="Draft the report", note="Only the figures are left", date=today_key),
        Task(id=new_id(), title="Buy milk", note="On the way home", date=today_key),
        Task(id=new_id(), title="Reply to manager", note="Attach the slides", date=tomorrow_key),
    ]


def seed_events(today: date, new_id: IdSupplier) -> list[Event]:
    today_key = to_date_key(today)
    return [
        Event(id=new_id(), title="Team meeting (Zoom)", date=today_key, time="09:00", memo="Link is bookmarked"),
        Event(id=new_id(), title="Client review", date=today_key, time="13:00"),
        Event(id=new_id(), title="Gym", date=today_key, time="18:00", memo="Back day"),
    ]
