"""Application summaries (name, icon, exec, categories) from .desktop files."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from dentry.core.desktop_entry import MAIN_GROUP, DesktopEntry, StandardKey
from dentry.core.discovery import desktop_file_id
from dentry.core.errors import ParseError
from dentry.core.locale_parser import Locale
from dentry.core.logger import get_logger

_log = get_logger("applications")

_MAX_WORKERS = 8


@dataclass
class AppInfo:
    """Fields of interest from a .desktop file, localized."""
    file_path: str = ""
    file_id: str = ""
    name: str = ""
    generic_name: str = ""
    comment: str = ""
    icon: str = ""
    exec_cmd: str = ""
    categories: list[str] = field(default_factory=list)
    no_display: bool = False
    hidden: bool = False
    terminal: bool = False
    type: str = "Application"


def file_id_for(path: str | Path) -> str:
    """Desktop file ID relative to the nearest `applications` directory."""
    path = Path(path)
    for parent in path.parents:
        if parent.name == "applications":
            return desktop_file_id(path, parent)
    return path.name


def to_app_info(
    entry: DesktopEntry,
    locale: Locale | None = None,
    file_path: str | Path = "",
    file_id: str = "",
) -> AppInfo | None:
    """Summarize `entry`, or None when it has no main group or no Name."""
    if MAIN_GROUP not in entry.groups():
        return None
    name = entry.localized_get_key(StandardKey.NAME, locale)
    if not name:
        return None

    return AppInfo(
        file_path=str(file_path),
        file_id=file_id,
        name=name,
        generic_name=entry.localized_get_key(StandardKey.GENERIC_NAME, locale) or "",
        comment=entry.localized_get_key(StandardKey.COMMENT, locale) or "",
        icon=entry.get_key(StandardKey.ICON) or "",
        exec_cmd=entry.get_key(StandardKey.EXEC) or "",
        categories=entry.get_list(StandardKey.CATEGORIES, locale),
        no_display=entry.get_bool(StandardKey.NO_DISPLAY) is True,
        hidden=entry.get_bool(StandardKey.HIDDEN) is True,
        terminal=entry.get_bool(StandardKey.TERMINAL) is True,
        type=entry.get_key(StandardKey.TYPE) or "",
    )


def load_entry(path: str | Path) -> DesktopEntry | None:
    """Read and parse one file, or None (logged) if it is unusable."""
    try:
        return DesktopEntry.from_file(path)
    except OSError as e:
        _log.warning("Cannot read %s: %s", path, e)
    except ParseError as e:
        _log.warning("Skipping %s: %s", path, e)
    return None


def load_applications(
    paths: Iterable[str | Path],
    locale: Locale | None = None,
    include_hidden: bool = False,
) -> list[AppInfo]:
    """Parse `paths` in parallel and return visible applications in input order."""
    paths = list(paths)
    with ThreadPoolExecutor(max_workers=_MAX_WORKERS) as pool:
        entries = list(pool.map(load_entry, paths))

    apps: list[AppInfo] = []
    for path, entry in zip(paths, entries):
        if entry is None:
            continue
        app = to_app_info(entry, locale, file_path=path, file_id=file_id_for(path))
        if app is None or app.type != "Application":
            continue
        if not include_hidden and (app.no_display or app.hidden):
            continue
        apps.append(app)

    _log.debug("Loaded %d applications from %d files", len(apps), len(paths))
    return apps


def find_application(name: str, apps: Iterable[AppInfo]) -> AppInfo | None:
    """Find an application by file ID or stem, then loosely by name."""
    apps = list(apps)

    for app in apps:
        if name in (app.file_id, Path(app.file_id).stem):
            return app

    name_lower = name.lower()
    for app in apps:
        if Path(app.file_id).stem.lower() == name_lower:
            return app

    for app in apps:
        if name_lower in Path(app.file_id).stem.lower() or name_lower in app.name.lower():
            return app

    return None
