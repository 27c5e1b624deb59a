"""CSV export of the action log."""

from __future__ import annotations

import csv
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from .audit import AuditLog, LogEntry
from .errors import NothingToExport

logger = logging.getLogger(__name__)

HEADER = ("Time", "Device", "Action", "User")


def logs_to_csv(entries: Iterable[LogEntry]) -> str:
    buffer = io.StringIO()
    buffer.write(",".join(HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for entry in entries:
        writer.writerow([entry.time, entry.device, entry.action, entry.user])
    return buffer.getvalue()


def export_filename(now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d%H%M%S")
    return f"smarthome_logs_{stamp}.csv"


def export_logs(audit: AuditLog, directory: str, now: Optional[datetime] = None) -> Path:
    entries = audit.entries()
    if not entries:
        raise NothingToExport("No logs to export")
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(now)
    path.write_text(logs_to_csv(entries), encoding="utf-8")
    logger.info("exported %d log entries to %s", len(entries), path)
    return path
