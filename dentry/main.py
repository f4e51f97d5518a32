"""Entry point for the dentry command line tool."""

from __future__ import annotations

import argparse
import json
import sys

from dentry import __app_name__, __version__
from dentry.core.applications import find_application, load_applications
from dentry.core.config import Config
from dentry.core.desktop_entry import DesktopEntry
from dentry.core.discovery import discover_applications
from dentry.core.errors import ParseError
from dentry.core.locale_parser import Locale, parse_locale
from dentry.core.logger import get_logger, setup_logging

_log = get_logger("main")


class UsageError(Exception):
    """Bad command line input, reported with exit status 2."""


def _resolve_locale(arg: str | None, config: Config) -> Locale | None:
    text = arg or config.get("locale")
    if text:
        locale = parse_locale(text)
        if locale is None:
            raise UsageError(f"invalid locale: {text!r}")
        return locale
    return Locale.from_env()


def _load(path: str) -> DesktopEntry:
    try:
        return DesktopEntry.from_file(path)
    except OSError as e:
        raise UsageError(f"cannot read {path}: {e.strerror or e}") from e
    except ParseError as e:
        raise UsageError(f"{path}: {e}") from e


def _discovered(args: argparse.Namespace, config: Config):
    locale = _resolve_locale(args.locale, config)
    extra_dirs = list(config.get("extra_dirs")) + list(args.dir or [])
    include_hidden = args.all or bool(config.get("include_hidden"))
    paths = discover_applications(extra_dirs=extra_dirs)
    return load_applications(paths, locale, include_hidden=include_hidden)


# ── Subcommands ──
def cmd_list(args: argparse.Namespace, config: Config) -> int:
    apps = sorted(_discovered(args, config), key=lambda a: a.file_id)
    for app in apps:
        print(f"{app.file_id}\t{app.name}")
    return 0


def cmd_find(args: argparse.Namespace, config: Config) -> int:
    app = find_application(args.name, _discovered(args, config))
    if app is None:
        _log.info("No application matches %r", args.name)
        return 1
    print(app.file_path)
    return 0


def cmd_show(args: argparse.Namespace, config: Config) -> int:
    entry = _load(args.file)
    groups = [args.group] if args.group else entry.groups()
    for group in groups:
        print(f"[{group}]")
        for key in entry.group_keys(group):
            print(f"{key}={entry.group_get(group, key)}")
    return 0


def cmd_get(args: argparse.Namespace, config: Config) -> int:
    entry = _load(args.file)
    locale = _resolve_locale(args.locale, config)
    value = entry.group_localized_get(args.group, args.key, locale)
    if value is None:
        return 1
    print(value)
    return 0


def _setting_value(text: str):
    """JSON if it parses (true, ["/opt/apps"]), else the plain string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def cmd_config(args: argparse.Namespace, config: Config) -> int:
    if args.action == "reset":
        config.reset()
        return 0

    if args.action == "set":
        if args.key is None or args.value is None:
            raise UsageError("config set needs KEY and VALUE")
        try:
            config.set(args.key, _setting_value(args.value))
        except ValueError as e:
            raise UsageError(str(e)) from e
        return 0

    settings = config.as_dict()
    if args.key is None:
        for key, value in settings.items():
            print(f"{key}={json.dumps(value)}")
        return 0
    if args.key not in settings:
        raise UsageError(f"unknown setting: {args.key!r}")
    print(json.dumps(settings[args.key]))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Inspect XDG desktop entry files.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="list installed applications")
    p.add_argument("--locale", help="locale for names, e.g. de_DE")
    p.add_argument("--all", action="store_true", help="include NoDisplay/Hidden entries")
    p.add_argument("--dir", action="append", help="extra directory to search")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("find", help="print the file of a matching application")
    p.add_argument("name")
    p.add_argument("--locale")
    p.add_argument("--all", action="store_true")
    p.add_argument("--dir", action="append")
    p.set_defaults(func=cmd_find)

    p = sub.add_parser("show", help="print the groups and keys of a file")
    p.add_argument("file")
    p.add_argument("--group", help="only this group")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("get", help="print one (localized) value")
    p.add_argument("file")
    p.add_argument("key")
    p.add_argument("--group", default="Desktop Entry")
    p.add_argument("--locale")
    p.set_defaults(func=cmd_get)

    p = sub.add_parser("config", help="show or change settings")
    p.add_argument("action", choices=["get", "set", "reset"])
    p.add_argument("key", nargs="?")
    p.add_argument("value", nargs="?")
    p.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = Config()
    setup_logging("DEBUG" if args.verbose else config.get("log_level"))

    try:
        return args.func(args, config)
    except UsageError as e:
        print(f"{__app_name__}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
