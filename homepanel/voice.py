"""Voice command dispatch.

Capture happens elsewhere; this module receives the final transcript and
replays the interpreted command through the device registry.
"""

from __future__ import annotations

import logging
from typing import Optional

from .devices import VOICE, Device, DeviceRegistry
from .errors import NotFoundRejection, ParseRejection
from .interpreter import LOCK, TURN_OFF, TURN_ON, interpret
from .notify import NotificationQueue

logger = logging.getLogger(__name__)


class VoiceController:
    def __init__(self, devices: DeviceRegistry, notifications: NotificationQueue) -> None:
        self._devices = devices
        self._notifications = notifications

    def listening(self) -> None:
        self._notifications.push("Listening for voice command...")

    def error(self, code: Optional[str]) -> None:
        self._notifications.push(f"Voice error: {code or 'unknown'}")

    def handle(self, transcript: str) -> Optional[Device]:
        """Interpret and apply ``transcript``; returns the updated device or None."""
        text = transcript.strip().lower()
        self._notifications.push(f"Voice recognized: {text}")
        try:
            command = interpret(text, self._devices.all())
            if command.action in (TURN_ON, TURN_OFF):
                return self._devices.toggle(
                    command.device_id, command.action == TURN_ON, source=VOICE
                )
            return self._devices.set_locked(
                command.device_id, command.action == LOCK, source=VOICE
            )
        except NotFoundRejection as exc:
            logger.info("voice rejected (%s): %s", exc.reason, text)
            self._notifications.push("Device not found in voice command.")
        except ParseRejection as exc:
            logger.info("voice rejected (%s): %s", exc.reason, text)
            self._notifications.push("Could not parse voice action.")
        return None
