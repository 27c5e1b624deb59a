"""Wall-clock stamps for log entries, notifications and lastSeen."""

from __future__ import annotations

from datetime import datetime


def now_stamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")
