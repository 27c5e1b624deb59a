from __future__ import annotations

import pytest

from homepanel.config import DEFAULT_SEED_DEVICES, load_config
from homepanel.panel import Panel
from homepanel.store import Store


def test_missing_file_gives_defaults(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOMEPANEL_NOTIFY_CAPACITY", "7")
    monkeypatch.setenv("HOMEPANEL_LOG_DISPLAY_LIMIT", "not-a-number")

    config = load_config(str(tmp_path / "absent.yaml"))

    assert config.notify_capacity == 7
    assert config.log_display_limit == 200
    assert config.owner == "Owner"
    assert config.seed_devices == DEFAULT_SEED_DEVICES


def test_yaml_overrides(tmp_path, clock) -> None:
    path = tmp_path / "panel.yaml"
    path.write_text(
        "\n".join(
            [
                "version: 1",
                "owner: Resident",
                "notify_capacity: 2",
                "log_display_limit: 10",
                "seed_devices:",
                "  - id: porch_light",
                "    name: Porch Light",
                "    type: Light",
                "    room: outside",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(str(path))
    panel = Panel(Store.in_memory(), config, clock=clock).init()

    assert list(panel.devices.all()) == ["porch_light"]
    panel.devices.toggle("porch_light", True)
    panel.devices.toggle("porch_light", False)
    panel.devices.toggle("porch_light", True)
    assert len(panel.notifications.items()) == 2
    assert panel.audit.entries()[0].user == "Resident"


@pytest.mark.parametrize(
    "body, message",
    [
        ("- 1\n- 2\n", "mapping"),
        ("version: 2\n", "version"),
        ("version: 1\nnotify_capacity: 0\n", "notify_capacity"),
        ("version: 1\nseed_devices: {}\n", "seed_devices"),
        ("version: 1\nseed_devices:\n  - name: Lamp\n", "seed_devices.id"),
        ("version: 1\nowner: ''\n", "owner"),
    ],
)
def test_invalid_config(tmp_path, body: str, message: str) -> None:
    path = tmp_path / "panel.yaml"
    path.write_text(body, encoding="utf-8")

    with pytest.raises(ValueError) as excinfo:
        load_config(str(path))

    assert message in str(excinfo.value)
