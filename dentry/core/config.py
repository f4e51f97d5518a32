"""Settings for dentry. Persists to ~/.config/dentry/settings.json."""

import copy
import json
import logging
from pathlib import Path
from typing import Any

CONFIG_DIR = Path.home() / ".config" / "dentry"
SETTINGS_FILE = CONFIG_DIR / "settings.json"
CACHE_DIR = Path.home() / ".cache" / "dentry"

DEFAULTS: dict[str, Any] = {
    "locale": "",
    "extra_dirs": [],
    "include_hidden": False,
    "log_level": "WARNING",
}

# dentry.core.logger imports this module, so take the logger directly
_log = logging.getLogger("dentry.config")


def normalize(key: str, value: Any) -> Any:
    """Return `value` in its stored form, or raise ValueError if it is unusable."""
    if key not in DEFAULTS:
        raise ValueError(f"unknown setting: {key!r}")
    if key == "log_level":
        level = str(value).upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log_level: {value!r}")
        return level
    if key == "locale":
        if not isinstance(value, str):
            raise ValueError(f"locale must be a string, not {value!r}")
        return value
    if key == "extra_dirs":
        if not isinstance(value, list) or not all(isinstance(d, str) for d in value):
            raise ValueError(f"extra_dirs must be a list of paths, not {value!r}")
        return list(value)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, not {value!r}")
    return value


class Config:
    """Singleton settings manager with JSON persistence."""

    _instance: "Config | None" = None

    def __new__(cls) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._loaded = False
        return cls._instance

    def __init__(self) -> None:
        if self._loaded:
            return
        self._data: dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._load()
        self._loaded = True

    def _load(self) -> None:
        if not SETTINGS_FILE.exists():
            return
        try:
            with open(SETTINGS_FILE, "r", encoding="utf-8") as f:
                saved = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            _log.warning("Ignoring settings file %s: %s", SETTINGS_FILE, e)
            return
        if not isinstance(saved, dict):
            _log.warning("Ignoring settings file %s: not a JSON object", SETTINGS_FILE)
            return

        for key, value in saved.items():
            try:
                self._data[key] = normalize(key, value)
            except ValueError as e:
                _log.warning("Ignoring setting in %s: %s", SETTINGS_FILE, e)

    def save(self) -> None:
        try:
            CONFIG_DIR.mkdir(parents=True, exist_ok=True)
            with open(SETTINGS_FILE, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            _log.warning("Cannot save settings to %s: %s", SETTINGS_FILE, e)

    def as_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def get(self, key: str, fallback: Any = None) -> Any:
        return self._data.get(key, fallback if fallback is not None else DEFAULTS.get(key))

    def set(self, key: str, value: Any) -> None:
        """Store and save a setting. Raises ValueError for unknown keys or bad values."""
        self._data[key] = normalize(key, value)
        self.save()

    def reset(self) -> None:
        self._data = copy.deepcopy(DEFAULTS)
        self.save()
