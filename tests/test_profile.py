from __future__ import annotations

from typing import List

import pytest

from homepanel import store as keys
from homepanel.errors import ValidationError
from homepanel.events import ProfileSaved, ThemeChanged
from homepanel.panel import Panel
from homepanel.profile import DARK, LIGHT, Profile


def test_profile_defaults(panel: Panel) -> None:
    assert panel.profile.get() == Profile("Home Owner", "you@example.com", None)


def test_save_without_avatar(panel: Panel) -> None:
    logged = len(panel.audit)

    profile = panel.profile.save("Sam", "sam@example.com")

    assert panel.profile.get() == profile
    assert profile.avatar is None
    assert panel.notifications.items()[0].text == "Profile saved"
    assert len(panel.audit) == logged + 1


def test_save_with_avatar_then_keep_it(panel: Panel) -> None:
    saved: List[ProfileSaved] = []
    panel.bus.subscribe(ProfileSaved, saved.append)

    first = panel.profile.save("Sam", "sam@example.com", avatar=b"\x89PNG", mime="image/png")
    second = panel.profile.save("Sam B", "", avatar=None)

    assert first.avatar == "data:image/png;base64,iVBORw=="
    assert second.avatar == first.avatar
    assert second.email == "you@example.com"
    assert panel.notifications.items()[1].text == "Profile saved (avatar uploaded)"
    assert [event.name for event in saved] == ["Sam", "Sam B"]


def test_blank_name_uses_default(panel: Panel) -> None:
    assert panel.profile.save("  ", None).name == "Home Owner"


def test_theme_defaults_to_light(panel: Panel) -> None:
    assert panel.theme.get() == LIGHT


def test_theme_set_and_toggle(panel: Panel) -> None:
    changes: List[str] = []
    panel.bus.subscribe(ThemeChanged, lambda event: changes.append(event.theme))

    panel.theme.set(DARK)
    assert panel.theme.toggle() == LIGHT
    assert panel.theme.toggle() == DARK

    assert panel.store.load(keys.THEME, LIGHT) == DARK
    assert changes == [DARK, LIGHT, DARK]


def test_theme_rejects_unknown(panel: Panel) -> None:
    with pytest.raises(ValidationError):
        panel.theme.set("sepia")


def test_unknown_stored_theme_reads_as_light(panel: Panel) -> None:
    panel.store.save(keys.THEME, "neon")

    assert panel.theme.get() == LIGHT
