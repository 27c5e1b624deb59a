"""Typed mutation events and a synchronous publish/subscribe bus."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceChanged:
    device_id: str


@dataclass(frozen=True)
class DeviceAdded:
    device_id: str


@dataclass(frozen=True)
class ScheduleAdded:
    time: str
    device_id: str
    action: str


@dataclass(frozen=True)
class LogAppended:
    time: str
    device: str
    action: str


@dataclass(frozen=True)
class NotificationPushed:
    t: str
    text: str


@dataclass(frozen=True)
class ProfileSaved:
    name: str


@dataclass(frozen=True)
class ThemeChanged:
    theme: str


Handler = Callable[[Any], None]


class EventBus:
    """Delivers events to handlers in subscription order, on the caller's thread."""

    def __init__(self) -> None:
        self._handlers: Dict[Type[Any], List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type[Any], handler: Handler) -> Callable[[], None]:
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def publish(self, event: Any) -> None:
        handlers = list(self._handlers.get(type(event), []))
        logger.debug("publish %s to %d handler(s)", type(event).__name__, len(handlers))
        for handler in handlers:
            handler(event)
