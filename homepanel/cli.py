"""Command-line interface for homepanel."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from . import settings
from .devices import DEVICE_TYPES
from .errors import PanelError
from .export import export_logs
from .panel import Panel
from .profile import THEMES
from .schedules import ACTIONS


def _print_notifications(panel: Panel) -> None:
    for item in panel.notifications.items():
        print(f"  [{item.t}] {item.text}")


def cmd_status(panel: Panel, args: argparse.Namespace) -> None:
    devices = panel.devices.all()
    print("homepanel status")
    print(f"  db: {args.db or settings.db_path()}")
    print(f"  devices: {len(devices)} ({sum(1 for d in devices.values() if d.on)} on)")
    print(f"  schedules: {len(panel.schedules.all())}")
    print(f"  log entries: {len(panel.audit)}")
    print(f"  theme: {panel.theme.get()}")
    print(f"  profile: {panel.profile.get().name}")


def cmd_devices_list(panel: Panel, args: argparse.Namespace) -> None:
    for device in panel.devices.in_room(args.room or "").values():
        state = "on" if device.on else "off"
        temp = f" {device.temp}C" if device.temp is not None else ""
        print(
            f"{device.id} [{device.type or '?'}] {device.name} "
            f"room={device.room or '-'} {state}{temp} ({device.last_seen})"
        )


def cmd_devices_add(panel: Panel, args: argparse.Namespace) -> None:
    device = panel.devices.create(args.name, args.type, args.room)
    print(f"added {device.id}")
    _print_notifications(panel)


def cmd_devices_switch(panel: Panel, args: argparse.Namespace) -> None:
    panel.devices.toggle(args.device_id, args.state == "on", display_name=args.name)
    _print_notifications(panel)


def cmd_devices_lock(panel: Panel, args: argparse.Namespace) -> None:
    panel.devices.set_locked(args.device_id, args.state == "lock")
    _print_notifications(panel)


def cmd_schedules_list(panel: Panel, args: argparse.Namespace) -> None:
    for schedule in panel.schedules.all():
        name = panel.schedules.device_name(schedule)
        print(f"{schedule.time} {name} {schedule.action_label} (created {schedule.created})")


def cmd_schedules_add(panel: Panel, args: argparse.Namespace) -> None:
    panel.schedules.create(args.time, args.device_id, args.action)
    _print_notifications(panel)


def cmd_logs_list(panel: Panel, args: argparse.Namespace) -> None:
    for entry in panel.audit.recent(args.limit):
        print(f"{entry.time} | {entry.device} | {entry.action} | {entry.user}")


def cmd_logs_export(panel: Panel, args: argparse.Namespace) -> None:
    path = export_logs(panel.audit, args.out or str(settings.export_dir()))
    print(f"exported: {path}")


def cmd_voice_send(panel: Panel, args: argparse.Namespace) -> None:
    device = panel.voice.handle(args.text)
    _print_notifications(panel)
    if device is None:
        raise SystemExit(1)


def cmd_profile_show(panel: Panel, args: argparse.Namespace) -> None:
    profile = panel.profile.get()
    print(f"name: {profile.name}")
    print(f"email: {profile.email}")
    print(f"avatar: {'set' if profile.avatar else 'none'}")


def cmd_profile_set(panel: Panel, args: argparse.Namespace) -> None:
    current = panel.profile.get()
    avatar = Path(args.avatar).read_bytes() if args.avatar else None
    panel.profile.save(
        args.name if args.name is not None else current.name,
        args.email if args.email is not None else current.email,
        avatar=avatar,
        mime=args.mime,
    )
    _print_notifications(panel)


def cmd_theme_show(panel: Panel, args: argparse.Namespace) -> None:
    print(panel.theme.get())


def cmd_theme_set(panel: Panel, args: argparse.Namespace) -> None:
    print(panel.theme.set(args.theme))


def cmd_theme_toggle(panel: Panel, args: argparse.Namespace) -> None:
    print(panel.theme.toggle())


def cmd_snapshot(panel: Panel, args: argparse.Namespace) -> None:
    print(json.dumps(panel.snapshot(), indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="homepanel")
    parser.add_argument("--db", default=None)
    parser.add_argument("--config", default=None)
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    status = sub.add_parser("status")
    status.set_defaults(func=cmd_status)

    snapshot = sub.add_parser("snapshot")
    snapshot.set_defaults(func=cmd_snapshot)

    devices = sub.add_parser("devices")
    devices_sub = devices.add_subparsers(dest="subcmd", required=True)

    devices_list = devices_sub.add_parser("list")
    devices_list.add_argument("--room", default=None)
    devices_list.set_defaults(func=cmd_devices_list)

    devices_add = devices_sub.add_parser("add")
    devices_add.add_argument("name")
    devices_add.add_argument("--type", choices=DEVICE_TYPES, default="Light")
    devices_add.add_argument("--room", default="")
    devices_add.set_defaults(func=cmd_devices_add)

    for state in ("on", "off"):
        devices_switch = devices_sub.add_parser(state)
        devices_switch.add_argument("device_id")
        devices_switch.add_argument("--name", default=None)
        devices_switch.set_defaults(func=cmd_devices_switch, state=state)

    for state in ("lock", "unlock"):
        devices_lock = devices_sub.add_parser(state)
        devices_lock.add_argument("device_id")
        devices_lock.set_defaults(func=cmd_devices_lock, state=state)

    schedules = sub.add_parser("schedules")
    schedules_sub = schedules.add_subparsers(dest="subcmd", required=True)

    schedules_list = schedules_sub.add_parser("list")
    schedules_list.set_defaults(func=cmd_schedules_list)

    schedules_add = schedules_sub.add_parser("add")
    schedules_add.add_argument("time")
    schedules_add.add_argument("device_id")
    schedules_add.add_argument("action", choices=ACTIONS)
    schedules_add.set_defaults(func=cmd_schedules_add)

    logs = sub.add_parser("logs")
    logs_sub = logs.add_subparsers(dest="subcmd", required=True)

    logs_list = logs_sub.add_parser("list")
    logs_list.add_argument("--limit", type=int, default=None)
    logs_list.set_defaults(func=cmd_logs_list)

    logs_export = logs_sub.add_parser("export")
    logs_export.add_argument("--out", default=None)
    logs_export.set_defaults(func=cmd_logs_export)

    voice = sub.add_parser("voice")
    voice_sub = voice.add_subparsers(dest="subcmd", required=True)

    voice_send = voice_sub.add_parser("send")
    voice_send.add_argument("text")
    voice_send.set_defaults(func=cmd_voice_send)

    profile = sub.add_parser("profile")
    profile_sub = profile.add_subparsers(dest="subcmd", required=True)

    profile_show = profile_sub.add_parser("show")
    profile_show.set_defaults(func=cmd_profile_show)

    profile_set = profile_sub.add_parser("set")
    profile_set.add_argument("--name", default=None)
    profile_set.add_argument("--email", default=None)
    profile_set.add_argument("--avatar", default=None)
    profile_set.add_argument("--mime", default="image/png")
    profile_set.set_defaults(func=cmd_profile_set)

    theme = sub.add_parser("theme")
    theme_sub = theme.add_subparsers(dest="subcmd", required=True)

    theme_show = theme_sub.add_parser("show")
    theme_show.set_defaults(func=cmd_theme_show)

    theme_set = theme_sub.add_parser("set")
    theme_set.add_argument("theme", choices=THEMES)
    theme_set.set_defaults(func=cmd_theme_set)

    theme_toggle = theme_sub.add_parser("toggle")
    theme_toggle.set_defaults(func=cmd_theme_toggle)

    return parser


def main(argv: Any = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        # One-shot commands are not UI sessions, so no welcome notification.
        panel = Panel.open(db_path=args.db, config_path=args.config, welcome=False)
    except PanelError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1)
    try:
        args.func(panel, args)
    except PanelError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1)
    finally:
        panel.close()


if __name__ == "__main__":
    main()
