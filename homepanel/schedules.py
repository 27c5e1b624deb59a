"""Schedule list: creation and display only, nothing executes it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from . import store as store_keys
from .audit import AuditLog
from .clock import now_stamp
from .devices import DeviceRegistry
from .errors import ValidationError
from .events import EventBus, ScheduleAdded
from .notify import NotificationQueue
from .store import Store

logger = logging.getLogger(__name__)

ACTIONS = ("turn_on", "turn_off", "lock", "unlock")

_ACTION_LABELS = {
    "turn_on": "TURN ON",
    "turn_off": "TURN OFF",
    "lock": "LOCK",
    "unlock": "UNLOCK",
}


def action_label(action: str) -> str:
    return _ACTION_LABELS.get(action, action.upper())


@dataclass(frozen=True)
class Schedule:
    time: str
    device_id: str
    action: str
    action_label: str
    created: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "deviceId": self.device_id,
            "action": self.action,
            "actionLabel": self.action_label,
            "created": self.created,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Schedule":
        action = str(data.get("action", ""))
        return cls(
            time=str(data.get("time", "")),
            device_id=str(data.get("deviceId", "")),
            action=action,
            action_label=str(data.get("actionLabel") or action_label(action)),
            created=str(data.get("created", "")),
        )


class ScheduleRegistry:
    """Most-recent-first schedule list.

    ``device_id`` is a weak reference: deleting or never having had the
    device leaves the schedule in place, displayed with the raw id.
    """

    def __init__(
        self,
        store: Store,
        devices: DeviceRegistry,
        audit: AuditLog,
        notifications: NotificationQueue,
        bus: EventBus,
        clock: Callable[[], str] = now_stamp,
    ) -> None:
        self._store = store
        self._devices = devices
        self._audit = audit
        self._notifications = notifications
        self._bus = bus
        self._clock = clock
        raw = store.load(store_keys.SCHEDULES, [])
        self._schedules: List[Schedule] = [
            Schedule.from_dict(item) for item in raw if isinstance(item, dict)
        ]

    def all(self) -> List[Schedule]:
        return list(self._schedules)

    def device_name(self, schedule: Schedule) -> str:
        device = self._devices.get(schedule.device_id)
        return device.name if device else schedule.device_id

    def create(self, time: str, device_id: str, action: str) -> Schedule:
        time = (time or "").strip()
        device_id = (device_id or "").strip()
        action = (action or "").strip()
        if not time or not device_id or not action:
            raise ValidationError("Fill all fields")

        device = self._devices.get(device_id)
        device_name = device.name if device else device_id
        label = action_label(action)
        schedule = Schedule(
            time=time,
            device_id=device_id,
            action=action,
            action_label=label,
            created=self._clock(),
        )
        schedules = [schedule, *self._schedules]
        self._store.save(store_keys.SCHEDULES, [item.to_dict() for item in schedules])
        self._schedules = schedules

        logger.info("schedule %s %s for %s", time, action, device_id)
        summary = f"{time} - {device_name} - {label}"
        entry = self._audit.append("Schedule", f"Created: {summary}")
        self._notifications.push(f"Created schedule: {summary}", ts=entry.time, log=False)
        self._bus.publish(ScheduleAdded(time=time, device_id=device_id, action=action))
        return schedule
