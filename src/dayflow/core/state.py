# src/dayflow/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..planner.store import PlannerStore


@dataclass
class AppState:
    # Settings are kept on the state so handlers don't re-read config.
    settings: Any
    store: PlannerStore

    # Held around command handling by connectors.
    lock: threading.RLock = field(default_factory=threading.RLock)

    @property
    def locale(self) -> str:
        return str(getattr(self.settings, "locale", "en"))

    @property
    def today_task_limit(self) -> int:
        return int(getattr(self.settings, "today_task_limit", 3))
