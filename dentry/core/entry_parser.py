"""Desktop entry grammar: text → {group: {raw key: value}}.

Each line is one of:
  blank     [ \\t]*
  comment   '#' ...
  entry     key['[' locale ']'] [ \\t]* '=' [ \\t]* value
  header    '[' name ']'          (committed once the '[' is seen)

Entries are only valid after a group header; inside a group a line is tried
as an entry before it is taken as a header, so `[de]=x` is the entry with
raw key `[de]`. A line starting with '[' that is not an entry must be a
complete header. Group names stop at newline as well as ']', so a header
never spans lines.

The first line that matches nothing fails the whole document with
InvalidLine; nothing is recovered.
"""

from __future__ import annotations

import re

from dentry.core.errors import InvalidLine
from dentry.core.logger import get_logger

_log = get_logger("parser")

_BLANK_RE = re.compile(r"[ \t]*")
_HEADER_RE = re.compile(r"\[(?P<name>[^\]\n]*)\]")
_ENTRY_RE = re.compile(
    r"(?P<key>[A-Za-z0-9-]*(?:\[[^\]\n]+\])?)[ \t]*=[ \t]*(?P<value>[^\n]*)"
)

GroupBody = dict[str, str]
Document = dict[str, GroupBody]


def parse_desktop_entry(text: str) -> Document:
    """Parse desktop entry text. Raises InvalidLine on the first bad line."""
    document: Document = {}
    group: GroupBody | None = None
    group_name = ""

    lines = text.split("\n")
    offset = 0
    for lineno, line in enumerate(lines, start=1):
        line_start = offset
        offset += len(line) + 1

        if line.startswith("#") or _BLANK_RE.fullmatch(line):
            continue

        entry = _ENTRY_RE.fullmatch(line) if group is not None else None
        if entry is None:
            if not line.startswith("["):
                raise InvalidLine(line, lineno, text[line_start:])
            header = _HEADER_RE.fullmatch(line)
            if header is None:
                raise InvalidLine(line, lineno, text[line_start:])
            group_name = header["name"]
            if group_name in document:
                _log.debug("Group [%s] redeclared on line %d, replacing it", group_name, lineno)
            group = {}
            document[group_name] = group
            continue

        key = entry["key"]
        if key in group:
            _log.debug("Duplicate key %r in [%s] on line %d, last one wins", key, group_name, lineno)
        group[key] = entry["value"]

    return document
