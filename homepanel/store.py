"""Key/value persistence for the panel's collections."""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Optional

from . import settings
from .db import MEMORY, init_db, utc_now_iso

logger = logging.getLogger(__name__)

DEVICES = "smarthome_devices_v2"
LOGS = "smarthome_logs_v2"
SCHEDULES = "smarthome_schedules_v2"
USER = "smarthome_user_v2"
THEME = "smarthome_theme_v2"

KEYS = (DEVICES, LOGS, SCHEDULES, USER, THEME)


def _same_shape(value: Any, fallback: Any) -> bool:
    if fallback is None:
        return True
    if isinstance(fallback, dict):
        return isinstance(value, dict)
    if isinstance(fallback, list):
        return isinstance(value, list)
    if isinstance(fallback, str):
        return isinstance(value, str)
    return True


class Store:
    """Whole-value reads and writes over the ``kv`` table.

    Every key is independent: ``save`` replaces the full prior value and
    there is no transaction spanning two keys.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @classmethod
    def open(cls, db_path: Optional[str] = None) -> "Store":
        path = db_path or str(settings.db_path())
        return cls(init_db(path, str(settings.schema_path())))

    @classmethod
    def in_memory(cls) -> "Store":
        return cls.open(MEMORY)

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn

    def has(self, key: str) -> bool:
        row = self._conn.execute("SELECT 1 FROM kv WHERE key = ?", (key,)).fetchone()
        return row is not None

    def load(self, key: str, fallback: Any = None) -> Any:
        row = self._conn.execute("SELECT value_json FROM kv WHERE key = ?", (key,)).fetchone()
        if not row:
            return fallback
        try:
            value = json.loads(row[0])
        except (TypeError, ValueError):
            logger.warning("stored value for %s is not valid JSON; using fallback", key)
            return fallback
        if not _same_shape(value, fallback):
            logger.warning(
                "stored value for %s has type %s; using fallback", key, type(value).__name__
            )
            return fallback
        return value

    def save(self, key: str, value: Any) -> None:
        self.save_raw(key, json.dumps(value, ensure_ascii=True))

    def save_raw(self, key: str, raw: str) -> None:
        """Store an already-serialized blob verbatim."""
        self._conn.execute(
            """
            INSERT INTO kv (key, value_json, ts_updated)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value_json = excluded.value_json, ts_updated = excluded.ts_updated
            """,
            (key, raw, utc_now_iso()),
        )
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
