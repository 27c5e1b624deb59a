"""Panel configuration loading."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from . import settings

DEFAULT_SEED_DEVICES: List[Dict[str, Any]] = [
    {
        "id": "living_room_light",
        "name": "Living Room Light",
        "type": "Light",
        "room": "living",
        "on": True,
        "lastSeen": "Last seen 2m",
    },
    {
        "id": "thermostat_hall",
        "name": "Thermostat • Hall",
        "type": "Thermostat",
        "room": "hall",
        "on": False,
        "temp": 22,
        "lastSeen": "Last seen 10m",
    },
    {
        "id": "front_door_lock",
        "name": "Front Door Lock",
        "type": "Lock",
        "room": "living",
        "on": False,
        "lastSeen": "Last seen 1m",
    },
]


@dataclass
class PanelConfig:
    owner: str = "Owner"
    notify_capacity: int = 50
    log_display_limit: int = 200
    seed_devices: List[Dict[str, Any]] = field(
        default_factory=lambda: copy.deepcopy(DEFAULT_SEED_DEVICES)
    )


def _positive_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        raise ValueError(f"{key} must be a positive integer")
    return value


def validate_seed_devices(devices: Any) -> List[Dict[str, Any]]:
    if not isinstance(devices, list):
        raise ValueError("seed_devices must be a list")
    for entry in devices:
        if not isinstance(entry, dict):
            raise ValueError("seed_devices entries must be mappings")
        for key in ("id", "name"):
            if not isinstance(entry.get(key), str) or not entry[key].strip():
                raise ValueError(f"seed_devices.{key} must be a non-empty string")
    return devices


def load_config(path: Optional[str] = None) -> PanelConfig:
    """Load ``panel.yaml``; a missing file yields the environment defaults."""
    config_path = Path(path) if path else settings.config_path()
    defaults = PanelConfig(
        notify_capacity=settings.notify_capacity(),
        log_display_limit=settings.log_display_limit(),
    )
    if not config_path.exists():
        return defaults

    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("panel config must be a mapping")
    if data.get("version") != 1:
        raise ValueError("panel config version must be 1")

    owner = data.get("owner", defaults.owner)
    if not isinstance(owner, str) or not owner.strip():
        raise ValueError("owner must be a non-empty string")

    seed = defaults.seed_devices
    if "seed_devices" in data:
        seed = validate_seed_devices(data["seed_devices"])

    return PanelConfig(
        owner=owner.strip(),
        notify_capacity=_positive_int(data, "notify_capacity", defaults.notify_capacity),
        log_display_limit=_positive_int(data, "log_display_limit", defaults.log_display_limit),
        seed_devices=seed,
    )
