from __future__ import annotations

import sqlite3

import pytest

from homepanel import store as keys
from homepanel.errors import ValidationError
from homepanel.panel import Panel
from homepanel.schedules import action_label


@pytest.mark.parametrize(
    "action, label",
    [
        ("turn_on", "TURN ON"),
        ("turn_off", "TURN OFF"),
        ("lock", "LOCK"),
        ("unlock", "UNLOCK"),
        ("dim_half", "DIM_HALF"),
    ],
)
def test_action_label(action: str, label: str) -> None:
    assert action_label(action) == label


def test_create_prepends_and_persists(panel: Panel) -> None:
    panel.schedules.create("07:00", "living_room_light", "turn_on")
    newest = panel.schedules.create("22:30", "front_door_lock", "lock")

    schedules = panel.schedules.all()
    assert schedules[0] == newest
    assert [s.time for s in schedules] == ["22:30", "07:00"]
    stored = panel.store.load(keys.SCHEDULES, [])
    assert stored[0]["deviceId"] == "front_door_lock"
    assert stored[0]["actionLabel"] == "LOCK"


def test_create_logs_and_notifies_with_device_name(panel: Panel) -> None:
    logged = len(panel.audit)

    panel.schedules.create("07:00", "living_room_light", "turn_on")

    entry = panel.audit.entries()[0]
    assert len(panel.audit) == logged + 1
    assert entry.device == "Schedule"
    assert entry.action == "Created: 07:00 - Living Room Light - TURN ON"
    note = panel.notifications.items()[0]
    assert note.text == "Created schedule: 07:00 - Living Room Light - TURN ON"
    assert note.t == entry.time


def test_create_allows_dangling_device(panel: Panel) -> None:
    schedule = panel.schedules.create("06:15", "sprinkler", "turn_on")

    assert schedule.device_id == "sprinkler"
    assert panel.schedules.device_name(schedule) == "sprinkler"
    assert "06:15 - sprinkler - TURN ON" in panel.audit.entries()[0].action


@pytest.mark.parametrize(
    "time, device_id, action",
    [
        ("", "living_room_light", "turn_on"),
        ("  ", "living_room_light", "turn_on"),
        ("07:00", "", "turn_on"),
        ("07:00", "living_room_light", ""),
    ],
)
def test_create_rejects_blank_fields(panel: Panel, time: str, device_id: str, action: str) -> None:
    logged = len(panel.audit)

    with pytest.raises(ValidationError):
        panel.schedules.create(time, device_id, action)

    assert panel.schedules.all() == []
    assert len(panel.audit) == logged
    assert panel.store.has(keys.SCHEDULES) is False


def test_schedules_reload_from_store(panel: Panel, store, clock) -> None:
    panel.schedules.create("07:00", "living_room_light", "turn_on")

    reopened = Panel(store, clock=clock).init()

    assert reopened.schedules.all() == panel.schedules.all()


def test_failed_save_keeps_schedules(panel: Panel, monkeypatch: pytest.MonkeyPatch) -> None:
    panel.schedules.create("07:00", "living_room_light", "turn_on")
    logged = len(panel.audit)

    def fail(key: str, value: object) -> None:
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(panel.store, "save", fail)
    with pytest.raises(sqlite3.OperationalError):
        panel.schedules.create("22:30", "front_door_lock", "lock")

    assert [s.time for s in panel.schedules.all()] == ["07:00"]
    assert len(panel.audit) == logged
