"""Runtime settings and paths."""

from __future__ import annotations

import os
from pathlib import Path


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def package_root() -> Path:
    return Path(__file__).resolve().parent


def data_dir() -> Path:
    root = repo_root()
    return Path(os.getenv("HOMEPANEL_DATA_DIR", str(root / "data")))


def db_path() -> Path:
    return Path(os.getenv("HOMEPANEL_DB_PATH", str(data_dir() / "homepanel.db")))


def schema_path() -> Path:
    return package_root() / "schema.sql"


def config_path() -> Path:
    return Path(os.getenv("HOMEPANEL_CONFIG_PATH", str(repo_root() / "panel.yaml")))


def export_dir() -> Path:
    return Path(os.getenv("HOMEPANEL_EXPORT_DIR", str(data_dir() / "exports")))


def notify_capacity() -> int:
    value = os.getenv("HOMEPANEL_NOTIFY_CAPACITY", "50")
    try:
        return max(1, int(value))
    except ValueError:
        return 50


def log_display_limit() -> int:
    value = os.getenv("HOMEPANEL_LOG_DISPLAY_LIMIT", "200")
    try:
        return max(1, int(value))
    except ValueError:
        return 200
