"""Locate .desktop files under the XDG base directories.

Search order:
  1. <dir>/applications for each dir in $XDG_DATA_DIRS
     (default /usr/local/share:/usr/share)
  2. $XDG_DATA_HOME/applications (default ~/.local/share/applications)
  3. Any extra directories, walked as given

Symbolic links are never followed. Files sharing a desktop file ID are all
returned; no precedence is applied.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping

from dentry.core.logger import get_logger

_log = get_logger("discovery")

DEFAULT_DATA_DIRS = [Path("/usr/local/share"), Path("/usr/share")]
DESKTOP_SUFFIX = ".desktop"


def get_data_dirs(env: Mapping[str, str] | None = None) -> list[Path]:
    """Return $XDG_DATA_DIRS as paths, or the defaults when unset or empty."""
    if env is None:
        env = os.environ
    dirs = [Path(d) for d in env.get("XDG_DATA_DIRS", "").split(os.pathsep) if d]
    return dirs or list(DEFAULT_DATA_DIRS)


def get_data_home(env: Mapping[str, str] | None = None) -> Path | None:
    """Return $XDG_DATA_HOME, or ~/.local/share. None without a home directory."""
    if env is None:
        env = os.environ
    data_home = env.get("XDG_DATA_HOME", "")
    if data_home and os.path.isabs(data_home):
        return Path(data_home)
    try:
        return Path.home() / ".local" / "share"
    except RuntimeError:
        return None


def _collect(path: Path, result: list[Path]) -> None:
    try:
        with os.scandir(path) as it:
            dir_entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return

    for entry in dir_entries:
        try:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                _collect(Path(entry.path), result)
            elif entry.name.endswith(DESKTOP_SUFFIX):
                result.append(Path(entry.path))
        except OSError:
            continue


def discover_in_dirs(dirs: Iterable[str | Path]) -> list[Path]:
    """Recursively collect .desktop files under each of `dirs`."""
    result: list[Path] = []
    for d in dirs:
        _collect(Path(d), result)
    return result


def discover_applications(
    env: Mapping[str, str] | None = None,
    extra_dirs: Iterable[str | Path] = (),
) -> list[Path]:
    """Collect application .desktop files from the XDG data directories."""
    search = [d / "applications" for d in get_data_dirs(env)]
    data_home = get_data_home(env)
    if data_home is not None:
        search.append(data_home / "applications")
    search.extend(Path(d) for d in extra_dirs)

    found = discover_in_dirs(search)
    _log.debug("Found %d desktop files in %d directories", len(found), len(search))
    return found


def desktop_file_id(path: str | Path, base: str | Path) -> str:
    """Desktop file ID of `path` relative to `base`: kde/foo.desktop → kde-foo.desktop."""
    rel = Path(path).relative_to(base)
    return "-".join(rel.parts)
