"""homepanel core package."""

__all__ = [
    "audit",
    "clock",
    "config",
    "db",
    "devices",
    "events",
    "export",
    "interpreter",
    "notify",
    "panel",
    "profile",
    "schedules",
    "settings",
    "store",
    "voice",
]
