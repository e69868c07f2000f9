# src/dayflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the planner core.

The store depends on Protocols instead of concrete implementations.
This keeps storage back-ends swappable and makes testing easier.
"""

from datetime import datetime
from typing import Any, Callable, Protocol

PlannerBlob = dict[str, Any]
# {"tasks": [...], "events": [...]} as written to durable storage.

Clock = Callable[[], datetime]
IdSupplier = Callable[[], str]


class PlannerStorage(Protocol):
    """
    Persistence bridge for the two planner collections.

    - load() returns None when nothing was stored yet,
      and raises StorageError when stored data cannot be read or parsed.
    - save() raises StorageError on failure; the store logs it and moves on.
    """

    def load(self) -> PlannerBlob | None: ...

    def save(self, blob: PlannerBlob) -> None: ...
