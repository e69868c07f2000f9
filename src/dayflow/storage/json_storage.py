# src/dayflow/storage/json_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..core.ports import PlannerBlob
from ..planner.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """
    Planner blob stored as a single pretty-printed JSON file.

    Writes go through a temp file + os.replace so a crash never leaves half a file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> PlannerBlob | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read planner data from {self._path}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Planner data in {self._path} is not a JSON object")
        logger.debug("Loaded planner data from %s", self._path)
        return data

    def save(self, blob: PlannerBlob) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            payload = json.dumps(blob, ensure_ascii=False, indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError) as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(f"Failed to write planner data to {self._path}") from exc

        with contextlib.suppress(Exception):
            # Best-effort: keep personal notes private on disk.
            os.chmod(self._path, 0o600)
        logger.debug(
            "Saved planner data: %d tasks, %d events to %s",
            len(blob.get("tasks", [])),
            len(blob.get("events", [])),
            self._path,
        )
