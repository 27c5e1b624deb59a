"""Device registry, mutations and card reconciliation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional

from . import store as store_keys
from .audit import AuditLog
from .clock import now_stamp
from .errors import NotFoundRejection, ValidationError
from .events import DeviceAdded, DeviceChanged, EventBus
from .notify import NotificationQueue
from .store import Store

logger = logging.getLogger(__name__)

DEVICE_TYPES = ("Light", "Thermostat", "Lock", "Camera", "Other")
VOICE = "voice"


def slugify(name: str) -> str:
    return re.sub(r"\s+", "_", name.strip().lower())


def _last_seen(stamp: str) -> str:
    return f"Last seen {stamp}"


def _suffix(source: Optional[str]) -> str:
    return f" ({source})" if source else ""


@dataclass
class Device:
    id: str
    name: str
    type: str = "Other"
    room: str = ""
    on: bool = False
    temp: Optional[float] = None
    last_seen: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "room": self.room,
            "on": self.on,
            "lastSeen": self.last_seen,
        }
        if self.temp is not None:
            data["temp"] = self.temp
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], fallback_id: str = "") -> "Device":
        temp = data.get("temp")
        return cls(
            id=str(data.get("id") or fallback_id),
            name=str(data.get("name") or data.get("id") or fallback_id),
            type=str(data.get("type") or ""),
            room=str(data.get("room") or ""),
            on=bool(data.get("on", False)),
            temp=temp if isinstance(temp, (int, float)) and not isinstance(temp, bool) else None,
            last_seen=str(data.get("lastSeen") or ""),
        )


class DeviceRegistry:
    """Authoritative map of device id to record.

    Each mutation runs as one unit: persist, log, notify, then publish the
    change so bound views re-read the record.
    """

    def __init__(
        self,
        store: Store,
        audit: AuditLog,
        notifications: NotificationQueue,
        bus: EventBus,
        clock: Callable[[], str] = now_stamp,
    ) -> None:
        self._store = store
        self._audit = audit
        self._notifications = notifications
        self._bus = bus
        self._clock = clock
        self._devices: Dict[str, Device] = {}
        self.reload()

    def reload(self) -> None:
        raw = self._store.load(store_keys.DEVICES, {})
        self._devices = {
            key: Device.from_dict(value, fallback_id=key)
            for key, value in raw.items()
            if isinstance(value, dict)
        }

    def seed(self, records: List[Dict[str, Any]]) -> bool:
        """Install ``records`` unless a readable device collection is stored.

        A missing key and an undecodable blob are treated alike.
        """
        if isinstance(self._store.load(store_keys.DEVICES, None), dict):
            return False
        devices: Dict[str, Device] = {}
        for record in records:
            device = Device.from_dict(record)
            devices[device.id] = device
        self._save(devices)
        logger.info("seeded %d device(s)", len(devices))
        return True

    def _save(self, devices: Dict[str, Device]) -> None:
        self._store.save(
            store_keys.DEVICES, {key: device.to_dict() for key, device in devices.items()}
        )
        self._devices = devices

    def _commit(self, updated: Device, device: str, action: str, text: str) -> None:
        devices = dict(self._devices)
        devices[updated.id] = updated
        self._save(devices)
        entry = self._audit.append(device, action)
        self._notifications.push(text, ts=entry.time, log=False)

    def all(self) -> Dict[str, Device]:
        return {key: replace(device) for key, device in self._devices.items()}

    def get(self, device_id: str) -> Optional[Device]:
        device = self._devices.get(device_id)
        return replace(device) if device else None

    def in_room(self, room: str) -> Dict[str, Device]:
        devices = self.all()
        if not room:
            return devices
        return {key: device for key, device in devices.items() if device.room == room}

    def toggle(
        self,
        device_id: str,
        on: bool,
        display_name: Optional[str] = None,
        source: Optional[str] = None,
    ) -> Device:
        device = self._devices.get(device_id)
        if device is None:
            if not display_name:
                raise NotFoundRejection(f"device not found: {device_id}")
            logger.warning("toggle on unknown id %s; creating placeholder", device_id)
            device = Device(id=device_id, name=display_name, type="")

        updated = replace(device, on=bool(on), last_seen=_last_seen(self._clock()))
        state = "on" if on else "off"
        self._commit(
            updated,
            updated.name,
            ("Turned On" if on else "Turned Off") + _suffix(source),
            f"{updated.name} turned {state}{_suffix(source)}",
        )
        self._bus.publish(DeviceChanged(device_id=updated.id))
        return replace(updated)

    def set_locked(self, device_id: str, locked: bool, source: Optional[str] = None) -> Device:
        device = self._devices.get(device_id)
        if device is None:
            raise NotFoundRejection(f"lock device not found: {device_id}")

        updated = replace(device, on=not locked, last_seen=_last_seen(self._clock()))
        self._commit(
            updated,
            updated.name,
            ("Locked" if locked else "Unlocked") + _suffix(source),
            f"{updated.name} {'locked' if locked else 'unlocked'}{_suffix(source)}",
        )
        self._bus.publish(DeviceChanged(device_id=updated.id))
        return replace(updated)

    def create(self, name: str, device_type: str = "Other", room: str = "") -> Device:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Provide a device name")
        device_type = device_type if device_type in DEVICE_TYPES else "Other"

        device_id = slugify(cleaned)
        if device_id in self._devices:
            logger.info("device %s already exists; overwriting", device_id)
        device = Device(
            id=device_id,
            name=cleaned,
            type=device_type,
            room=(room or "").strip(),
            on=False,
            last_seen=_last_seen(self._clock()),
        )
        self._commit(device, "Device", f"Added {cleaned}", f"Device added: {cleaned}")
        self._bus.publish(DeviceAdded(device_id=device_id))
        return replace(device)


def card_state(device: Device) -> Dict[str, Any]:
    return {
        "checked": device.on,
        "power_label": "On" if device.on else "Off",
        "lock_label": "Unlocked" if device.on else "Locked",
        "last_seen": device.last_seen,
        "recording": device.type.lower() == "camera" and device.on,
    }


class Reconciler:
    """Re-applies authoritative device state to every bound card.

    Cards are any objects with a ``device_id`` attribute and an
    ``apply(state)`` method. Several cards may share one id.
    """

    def __init__(self, registry: DeviceRegistry, bus: EventBus) -> None:
        self._registry = registry
        self._cards: Dict[str, List[Any]] = {}
        bus.subscribe(DeviceChanged, lambda event: self.reconcile(event.device_id))
        bus.subscribe(DeviceAdded, lambda event: self.reconcile(event.device_id))

    def bind(self, card: Any) -> None:
        """Attach ``card`` and paint it once; cards already bound are untouched."""
        self._cards.setdefault(card.device_id, []).append(card)
        device = self._registry.get(card.device_id)
        if device is not None:
            card.apply(card_state(device))

    def reconcile(self, device_id: Optional[str] = None) -> int:
        ids = [device_id] if device_id else list(self._cards)
        applied = 0
        for key in ids:
            device = self._registry.get(key)
            if device is None:
                continue
            state = card_state(device)
            for card in self._cards.get(key, []):
                card.apply(state)
                applied += 1
        return applied
