"""SQLite connection and kv schema bootstrap."""

from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from .errors import SchemaError

MEMORY = ":memory:"

# Bumped together with schema.sql.
SCHEMA_VERSION = 1


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def connect(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def schema_version(conn: sqlite3.Connection) -> int:
    return int(conn.execute("PRAGMA user_version").fetchone()[0])


def ensure_schema(conn: sqlite3.Connection, schema_path: str) -> bool:
    """Create the kv table on a fresh database; returns True if it did."""
    current = schema_version(conn)
    if current > SCHEMA_VERSION:
        raise SchemaError(
            f"database schema version {current} is newer than supported {SCHEMA_VERSION}"
        )
    if current == SCHEMA_VERSION:
        return False
    conn.executescript(Path(schema_path).read_text(encoding="utf-8"))
    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    conn.commit()
    return True


def init_db(db_path: str, schema_path: str) -> sqlite3.Connection:
    if db_path != MEMORY:
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
    conn = connect(db_path)
    try:
        ensure_schema(conn, schema_path)
    except SchemaError:
        conn.close()
        raise
    return conn
