"""dentry: XDG desktop entry parsing with locale-aware lookup."""

from dentry.core.desktop_entry import MAIN_GROUP, DesktopEntry, StandardKey
from dentry.core.entry_parser import parse_desktop_entry
from dentry.core.errors import InvalidLine, ParseError
from dentry.core.locale_parser import Locale, parse_locale

__app_name__ = "dentry"
__version__ = "1.0.0"

__all__ = [
    "MAIN_GROUP",
    "DesktopEntry",
    "InvalidLine",
    "Locale",
    "ParseError",
    "StandardKey",
    "parse_desktop_entry",
    "parse_locale",
]
