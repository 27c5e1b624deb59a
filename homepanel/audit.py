"""Append-only action log persisted as a single collection."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

from . import store as store_keys
from .clock import now_stamp
from .events import EventBus, LogAppended
from .store import Store

logger = logging.getLogger(__name__)

OWNER = "Owner"


@dataclass(frozen=True)
class LogEntry:
    time: str
    device: str
    action: str
    user: str = OWNER

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEntry":
        return cls(
            time=str(data.get("time", "")),
            device=str(data.get("device", "")),
            action=str(data.get("action", "")),
            user=str(data.get("user", OWNER)),
        )


class AuditLog:
    """Most-recent-first history of every mutation.

    ``device`` holds the display name rather than the id so entries stay
    readable after a device is renamed or removed. Persisted history is never
    trimmed; ``recent`` only caps what gets displayed.
    """

    def __init__(
        self,
        store: Store,
        bus: EventBus,
        clock: Callable[[], str] = now_stamp,
        user: str = OWNER,
        display_limit: int = 200,
    ) -> None:
        self._store = store
        self._bus = bus
        self._clock = clock
        self._user = user
        self._display_limit = display_limit
        raw = store.load(store_keys.LOGS, [])
        self._entries: List[LogEntry] = [
            LogEntry.from_dict(item) for item in raw if isinstance(item, dict)
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, device: str, action: str, ts: Optional[str] = None) -> LogEntry:
        entry = LogEntry(time=ts or self._clock(), device=device, action=action, user=self._user)
        entries = [entry, *self._entries]
        self._store.save(store_keys.LOGS, [item.to_dict() for item in entries])
        self._entries = entries
        logger.info("log %s: %s", device, action)
        self._bus.publish(LogAppended(time=entry.time, device=entry.device, action=entry.action))
        return entry

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        return self._entries[: self._display_limit if limit is None else limit]
