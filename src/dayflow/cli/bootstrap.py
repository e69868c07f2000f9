# src/dayflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the storage back-end,
- wires storage, clock and id supplier into a PlannerStore inside AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock, IdSupplier, PlannerStorage
from ..core.state import AppState
from ..planner.store import PlannerStore
from ..storage.json_storage import JsonFileStorage
from ..storage.sqlite_storage import SqliteBlobStorage

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> PlannerStorage:
    backend = str(getattr(settings, "storage_backend", "json")).lower()
    if backend == "sqlite":
        return SqliteBlobStorage(settings.storage_path)
    if backend != "json":
        logger.warning("Unknown storage backend %r; using json.", backend)
    return JsonFileStorage(settings.storage_path)


def create_initial_state(
    *,
    settings=None,
    storage: PlannerStorage | None = None,
    clock: Clock | None = None,
    id_supplier: IdSupplier | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store's collaborators) injectable makes the app
    easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = create_storage(settings)

    store = PlannerStore(
        storage,
        clock=clock,
        id_supplier=id_supplier,
        week_start_day=settings.week_start_day,
        seed_on_empty=settings.seed_on_empty,
    )
    return AppState(settings=settings, store=store)
