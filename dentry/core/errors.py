"""Parse errors raised by the desktop entry grammar."""

from __future__ import annotations


class ParseError(Exception):
    """Base class for desktop entry parse failures."""


class InvalidLine(ParseError):
    """A line (or the rest of the input from it) does not match the grammar."""

    def __init__(self, line: str, lineno: int, residual: str = "") -> None:
        super().__init__(f"invalid line {lineno}: {line!r}")
        self.line = line
        self.lineno = lineno
        self.residual = residual or line
