# src/dayflow/storage/sqlite_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
import time
from pathlib import Path

from ..core.ports import PlannerBlob
from ..planner.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_KEY = "dayflow-data"


class SqliteBlobStorage:
    """
    SQLite key-value store holding the planner blob under one key.

    The schema is a single table:
      kv(key TEXT PRIMARY KEY, value TEXT NOT NULL, updated_at REAL NOT NULL)

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "dayflow.sqlite3", *, key: str = DEFAULT_KEY) -> None:
        self._db_path = Path(db_path)
        self._key = key
        self._schema_ready = False
        logger.info("SqliteBlobStorage created db=%s key=%s", self._db_path, self._key)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        """Create the kv table on first use. Raises StorageError if the database cannot be opened."""
        if self._schema_ready:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._create_table()
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"Failed to open planner database {self._db_path}") from exc
        self._schema_ready = True

    def _create_table(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def load(self) -> PlannerBlob | None:
        self._ensure_schema()
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (self._key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read planner data from {self._db_path}") from exc

        if row is None:
            return None
        try:
            data = json.loads(row[0])
        except (TypeError, json.JSONDecodeError) as exc:
            raise StorageError(f"Planner data under key {self._key!r} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Planner data under key {self._key!r} is not a JSON object")
        return data

    def save(self, blob: PlannerBlob) -> None:
        try:
            payload = json.dumps(blob, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageError("Planner data is not JSON-serializable") from exc

        self._ensure_schema()
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (self._key, payload, time.time()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to write planner data to {self._db_path}") from exc
        logger.debug("Saved planner data under key=%s (%d bytes)", self._key, len(payload))

    def raw_value(self) -> str | None:
        """Stored JSON text as-is (diagnostics)."""
        self._ensure_schema()
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (self._key,)).fetchone()
            return row[0] if row else None
        finally:
            conn.close()
