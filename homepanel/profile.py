"""User profile and theme preference."""

from __future__ import annotations

import base64
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from . import store as store_keys
from .errors import ValidationError
from .events import EventBus, ProfileSaved, ThemeChanged
from .notify import NotificationQueue
from .store import Store

DEFAULT_NAME = "Home Owner"
DEFAULT_EMAIL = "you@example.com"

LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)


@dataclass(frozen=True)
class Profile:
    name: str = DEFAULT_NAME
    email: str = DEFAULT_EMAIL
    avatar: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def avatar_data_url(payload: bytes, mime: str = "image/png") -> str:
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime};base64,{encoded}"


class ProfileService:
    def __init__(self, store: Store, notifications: NotificationQueue, bus: EventBus) -> None:
        self._store = store
        self._notifications = notifications
        self._bus = bus

    def get(self) -> Profile:
        data = self._store.load(store_keys.USER, {})
        avatar = data.get("avatar")
        return Profile(
            name=data.get("name") or DEFAULT_NAME,
            email=data.get("email") or DEFAULT_EMAIL,
            avatar=avatar if isinstance(avatar, str) else None,
        )

    def save(
        self,
        name: Optional[str],
        email: Optional[str],
        avatar: Optional[bytes] = None,
        mime: str = "image/png",
    ) -> Profile:
        """Replace the profile.

        ``avatar`` must be the fully read image payload; ``None`` keeps the
        current avatar.
        """
        current = self.get()
        profile = Profile(
            name=(name or "").strip() or DEFAULT_NAME,
            email=(email or "").strip() or DEFAULT_EMAIL,
            avatar=avatar_data_url(avatar, mime) if avatar is not None else current.avatar,
        )
        self._store.save(store_keys.USER, profile.to_dict())
        self._notifications.push(
            "Profile saved (avatar uploaded)" if avatar is not None else "Profile saved"
        )
        self._bus.publish(ProfileSaved(name=profile.name))
        return profile


class ThemeService:
    def __init__(self, store: Store, bus: EventBus) -> None:
        self._store = store
        self._bus = bus

    def get(self) -> str:
        theme = self._store.load(store_keys.THEME, LIGHT)
        return theme if theme in THEMES else LIGHT

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValidationError(f"theme must be one of: {', '.join(THEMES)}")
        self._store.save(store_keys.THEME, theme)
        self._bus.publish(ThemeChanged(theme=theme))
        return theme

    def toggle(self) -> str:
        return self.set(LIGHT if self.get() == DARK else DARK)
