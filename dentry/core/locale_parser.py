"""POSIX locale strings: `lang_COUNTRY.ENCODING@MODIFIER` → Locale."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping

# language, country and modifier are captured; the encoding is matched and dropped
_LOCALE_RE = re.compile(
    r"(?P<language>[A-Za-z]+)"
    r"(?:_(?P<country>[A-Za-z]+))?"
    r"(?:\.[^@]+)?"
    r"(?:@(?P<modifier>[^@]+))?"
)


@dataclass(frozen=True)
class Locale:
    """Language with optional country and modifier, as used in key suffixes."""
    language: str
    country: str | None = None
    modifier: str | None = None

    @classmethod
    def parse(cls, text: str) -> Locale | None:
        return parse_locale(text)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Locale | None:
        """Locale from LC_MESSAGES, falling back to LC_ALL."""
        if env is None:
            env = os.environ
        if "LC_MESSAGES" in env:
            return parse_locale(env["LC_MESSAGES"])
        if "LC_ALL" in env:
            return parse_locale(env["LC_ALL"])
        return None

    def __str__(self) -> str:
        text = self.language
        if self.country:
            text += f"_{self.country}"
        if self.modifier:
            text += f"@{self.modifier}"
        return text


def parse_locale(text: str) -> Locale | None:
    """Parse a locale string, returning None unless the whole string matches."""
    match = _LOCALE_RE.fullmatch(text)
    if match is None:
        return None
    return Locale(match["language"], match["country"], match["modifier"])
