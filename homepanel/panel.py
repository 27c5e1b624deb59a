"""Explicit state holder wiring the store to every registry."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .audit import AuditLog
from .config import PanelConfig, load_config
from .clock import now_stamp
from .devices import DeviceRegistry, Reconciler
from .events import EventBus
from .notify import NotificationQueue
from .profile import ProfileService, ThemeService
from .schedules import ScheduleRegistry
from .store import Store
from .voice import VoiceController

WELCOME = "Welcome back - UI enhanced"


class Panel:
    """One panel session: a store plus the components that mutate it.

    Notifications live only as long as this object; everything else is
    read back from the store on construction.
    """

    def __init__(
        self,
        store: Store,
        config: Optional[PanelConfig] = None,
        clock: Callable[[], str] = now_stamp,
    ) -> None:
        self.store = store
        self.config = config or PanelConfig()
        self.bus = EventBus()
        self.audit = AuditLog(
            store,
            self.bus,
            clock=clock,
            user=self.config.owner,
            display_limit=self.config.log_display_limit,
        )
        self.notifications = NotificationQueue(
            self.audit, self.bus, capacity=self.config.notify_capacity, clock=clock
        )
        self.devices = DeviceRegistry(store, self.audit, self.notifications, self.bus, clock=clock)
        self.schedules = ScheduleRegistry(
            store, self.devices, self.audit, self.notifications, self.bus, clock=clock
        )
        self.profile = ProfileService(store, self.notifications, self.bus)
        self.theme = ThemeService(store, self.bus)
        self.voice = VoiceController(self.devices, self.notifications)
        self.reconciler = Reconciler(self.devices, self.bus)

    @classmethod
    def open(
        cls,
        db_path: Optional[str] = None,
        config_path: Optional[str] = None,
        welcome: bool = True,
    ) -> "Panel":
        panel = cls(Store.open(db_path), load_config(config_path))
        panel.init(welcome=welcome)
        return panel

    def init(self, welcome: bool = True) -> "Panel":
        """Seed default devices when none are readable, then greet the session."""
        self.devices.seed(self.config.seed_devices)
        if welcome:
            self.notifications.push(WELCOME)
        return self

    def close(self) -> None:
        self.store.close()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "devices": {key: device.to_dict() for key, device in self.devices.all().items()},
            "schedules": [item.to_dict() for item in self.schedules.all()],
            "logs": [entry.to_dict() for entry in self.audit.recent()],
            "notifications": [
                {"t": item.t, "text": item.text} for item in self.notifications.items()
            ],
            "profile": self.profile.get().to_dict(),
            "theme": self.theme.get(),
        }
