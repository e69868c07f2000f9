# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from dayflow.core.state import AppState
from dayflow.planner.store import PlannerStore

from .fakes import FixedClock, MemoryStorage, SequentialIds

# Monday
NOW = datetime(2024, 6, 10, 9, 30)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="dayflow-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_backend="json",
        storage_path=tmp_path / "dayflow.json",
        week_start_day=0,
        locale="en",
        today_task_limit=3,
        seed_on_empty=False,
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture()
def storage() -> MemoryStorage:
    # Empty but present: no seeding.
    return MemoryStorage({"tasks": [], "events": []})


@pytest.fixture()
def store(storage: MemoryStorage, clock: FixedClock, ids: SequentialIds) -> PlannerStore:
    return PlannerStore(storage, clock=clock, id_supplier=ids, week_start_day=0)


@pytest.fixture()
def state(settings: SimpleNamespace, store: PlannerStore) -> AppState:
    return AppState(settings=settings, store=store)
