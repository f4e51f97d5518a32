"""Parsed desktop entry with plain and locale-aware key lookup."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Mapping

from dentry.core.entry_parser import Document, parse_desktop_entry
from dentry.core.locale_parser import Locale

MAIN_GROUP = "Desktop Entry"


class StandardKey(Enum):
    """Well-known keys of the main group, valued by their canonical name."""
    TYPE = "Type"
    VERSION = "Version"
    NAME = "Name"
    GENERIC_NAME = "GenericName"
    NO_DISPLAY = "NoDisplay"
    COMMENT = "Comment"
    ICON = "Icon"
    HIDDEN = "Hidden"
    ONLY_SHOW_IN = "OnlyShowIn"
    NOT_SHOW_IN = "NotShowIn"
    DBUS_ACTIVATABLE = "DBusActivatable"
    TRY_EXEC = "TryExec"
    EXEC = "Exec"
    PATH = "Path"
    TERMINAL = "Terminal"
    ACTIONS = "Actions"
    MIME_TYPE = "MimeType"
    CATEGORIES = "Categories"
    IMPLEMENTS = "Implements"
    KEYWORDS = "Keywords"
    STARTUP_NOTIFY = "StartupNotify"
    STARTUP_WM_CLASS = "StartupWMClass"
    URL = "URL"

    @property
    def key_name(self) -> str:
        return self.value


def _locale_candidates(key: str, locale: Locale) -> list[str]:
    """Suffixed keys to try, most specific first."""
    lang, country, modifier = locale.language, locale.country, locale.modifier
    candidates = []
    if country and modifier:
        candidates.append(f"{key}[{lang}_{country}@{modifier}]")
    if country:
        candidates.append(f"{key}[{lang}_{country}]")
    if modifier:
        candidates.append(f"{key}[{lang}@{modifier}]")
    candidates.append(f"{key}[{lang}]")
    return candidates


class DesktopEntry:
    """Read-only view over a parsed desktop entry document."""

    def __init__(self, groups: Document) -> None:
        self._groups = groups

    @classmethod
    def parse_string(cls, text: str) -> DesktopEntry:
        """Parse desktop entry text. Raises InvalidLine."""
        return cls(parse_desktop_entry(text))

    @classmethod
    def from_file(cls, path: str | Path) -> DesktopEntry:
        """Read and parse a file. Raises OSError or InvalidLine."""
        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            return cls.parse_string(f.read())

    @classmethod
    def from_group_values(cls, groups: Mapping[str, Mapping[str, str]]) -> DesktopEntry:
        return cls({name: dict(body) for name, body in groups.items()})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DesktopEntry):
            return NotImplemented
        return self._groups == other._groups

    def __repr__(self) -> str:
        return f"DesktopEntry(groups={list(self._groups)!r})"

    def as_dict(self) -> Document:
        return {name: dict(body) for name, body in self._groups.items()}

    # ── Any group ──
    def groups(self) -> list[str]:
        return list(self._groups)

    def group_keys(self, group: str) -> list[str]:
        return list(self._groups.get(group, ()))

    def group_get(self, group: str, key: str) -> str | None:
        body = self._groups.get(group)
        if body is None:
            return None
        return body.get(key)

    def group_localized_get(self, group: str, key: str, locale: Locale | None) -> str | None:
        """Look up `key`, preferring the best suffixed variant for `locale`.

        Order: key[lang_COUNTRY@MODIFIER], key[lang_COUNTRY], key[lang@MODIFIER],
        key[lang], key. Parts missing from the locale are skipped.
        """
        body = self._groups.get(group)
        if body is None:
            return None
        if locale is not None:
            for candidate in _locale_candidates(key, locale):
                if candidate in body:
                    return body[candidate]
        return body.get(key)

    # ── Main group ──
    def keys(self) -> list[str]:
        return self.group_keys(MAIN_GROUP)

    def get(self, key: str) -> str | None:
        return self.group_get(MAIN_GROUP, key)

    def localized_get(self, key: str, locale: Locale | None) -> str | None:
        return self.group_localized_get(MAIN_GROUP, key, locale)

    def get_key(self, key: StandardKey) -> str | None:
        return self.get(key.key_name)

    def localized_get_key(self, key: StandardKey, locale: Locale | None) -> str | None:
        return self.localized_get(key.key_name, locale)

    def get_bool(self, key: str | StandardKey) -> bool | None:
        """True/False for the literal values "true"/"false", else None."""
        name = key.key_name if isinstance(key, StandardKey) else key
        value = self.get(name)
        if value == "true":
            return True
        if value == "false":
            return False
        return None

    def get_list(self, key: str | StandardKey, locale: Locale | None = None) -> list[str]:
        """Split a ;-separated value, dropping empty items."""
        name = key.key_name if isinstance(key, StandardKey) else key
        value = self.localized_get(name, locale)
        if not value:
            return []
        return [item for item in value.split(";") if item]
