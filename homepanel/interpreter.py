"""Map a free-text utterance to a device and an action."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Pattern, Tuple

from .devices import Device
from .errors import NotFoundRejection, ParseRejection

TURN_ON = "turn_on"
TURN_OFF = "turn_off"
LOCK = "lock"
UNLOCK = "unlock"

DEVICE_NOT_FOUND = "device not found"
UNPARSED_ACTION = "could not parse action"

# Checked in order; the first pattern that matches wins. Unlock must come
# before lock.
_ACTION_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = (
    (TURN_ON, re.compile(r"turn on|switch on|on the")),
    (TURN_OFF, re.compile(r"turn off|switch off|off the")),
    (UNLOCK, re.compile(r"\bunlock\b")),
    (LOCK, re.compile(r"\block\b")),
)


@dataclass(frozen=True)
class Command:
    device_id: str
    action: str


def _normalize(text: str) -> str:
    return " ".join(text.strip().lower().split())


def classify_action(text: str) -> str:
    normalized = _normalize(text)
    for action, pattern in _ACTION_PATTERNS:
        if pattern.search(normalized):
            return action
    raise ParseRejection(UNPARSED_ACTION)


def interpret(utterance: str, devices: Mapping[str, Device]) -> Command:
    """Resolve ``utterance`` against ``devices``.

    The first device, in mapping order, whose full name occurs in the
    utterance is selected; there is no best-match scoring. The action is
    read from what remains once that name is cut out, so a device called
    "Front Door Lock" does not by itself imply a lock command.
    """
    normalized = _normalize(utterance)
    for device_id, device in devices.items():
        name = _normalize(device.name)
        if not name or name not in normalized:
            continue
        remainder = normalized.replace(name, " ", 1)
        return Command(device_id=device_id, action=classify_action(remainder))
    raise NotFoundRejection(DEVICE_NOT_FOUND)
