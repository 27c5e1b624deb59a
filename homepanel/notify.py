"""Session-scoped notification queue."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional

from .audit import AuditLog
from .clock import now_stamp
from .events import EventBus, NotificationPushed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    t: str
    text: str


class NotificationQueue:
    """Newest-first ring buffer; pushing past ``capacity`` drops the oldest item."""

    def __init__(
        self,
        audit: AuditLog,
        bus: EventBus,
        capacity: int = 50,
        clock: Callable[[], str] = now_stamp,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._audit = audit
        self._bus = bus
        self._clock = clock
        self._items: Deque[Notification] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._items.maxlen or 0

    def __len__(self) -> int:
        return len(self._items)

    def push(self, text: str, ts: Optional[str] = None, log: bool = True) -> Notification:
        """Queue ``text``.

        With ``log`` set the notification is also written to the audit log as
        a ``Notification`` entry. Mutations that have already written their
        own entry pass ``log=False`` and the entry's timestamp as ``ts``.
        """
        item = Notification(t=ts or self._clock(), text=text)
        self._items.appendleft(item)
        if log:
            self._audit.append("Notification", text, ts=item.t)
        logger.debug("notify: %s", text)
        self._bus.publish(NotificationPushed(t=item.t, text=item.text))
        return item

    def items(self) -> List[Notification]:
        return list(self._items)

    def unread_count(self) -> int:
        # No read tracking: the badge shows whatever is displayed.
        return len(self._items)
