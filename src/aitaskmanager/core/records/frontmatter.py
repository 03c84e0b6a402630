"""Lenient front matter parsing for plan and task documents.

The header is read line by line rather than as YAML so that documents with
comments, mixed quoting, stray lines or broken values still yield whatever
fields can be recovered. Tolerated malformations:

- blank lines and lines starting with ``#`` are skipped
- lines without a ``:`` separator are skipped
- keys and values may be wrapped in matching single or double quotes
- a trailing ``# comment`` after a value is dropped
- a missing or unterminated header yields no fields and the full text as body
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from aitaskmanager.core.records.identity import normalize_id

FRONT_MATTER_DELIMITER = "---"
COMMENT_MARKER = "#"
NULL_VALUES = frozenset({"", "null", "~", "Null", "NULL"})

_INLINE_COMMENT_RE = re.compile(r"\s+#.*$")
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


@dataclass(frozen=True, slots=True)
class HeaderBounds:
    """Line indices of the start and end delimiters within a split document."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class FrontMatter:
    fields: dict[str, str] = field(default_factory=dict)
    body: str = ""
    has_header: bool = False

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.fields.get(key, default)


def _is_delimiter(line: str, *, first: bool = False) -> bool:
    candidate = line.lstrip("\ufeff") if first else line
    return candidate.rstrip() == FRONT_MATTER_DELIMITER


def split_lines(text: str) -> list[str]:
    """Split on "\\n" only, keeping line endings so joining restores the exact text."""
    return _LINE_RE.findall(text)


def locate_header(lines: list[str]) -> HeaderBounds | None:
    """
    Find the header delimiters in lines produced by ``split_lines``.

    The start delimiter must be the first non-blank line; the end delimiter is
    the next delimiter line after it.
    """
    start: int | None = None
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        if _is_delimiter(line, first=index == 0):
            start = index
        break
    if start is None:
        return None

    for index in range(start + 1, len(lines)):
        if _is_delimiter(lines[index]):
            return HeaderBounds(start=start, end=index)
    return None


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def split_value_and_comment(raw: str) -> tuple[str, str]:
    """
    Split a raw value into (value, trailing comment).

    A fully quoted value keeps any ``#`` inside the quotes; the comment must
    follow the closing quote after whitespace.
    """
    stripped = raw.strip()
    if stripped[:1] in {'"', "'"}:
        quote = stripped[0]
        closing = stripped.find(quote, 1)
        if closing != -1:
            rest = stripped[closing + 1 :]
            if not rest.strip():
                return stripped, ""
            if _INLINE_COMMENT_RE.match(rest):
                return stripped[: closing + 1], rest
        return stripped, ""

    match = _INLINE_COMMENT_RE.search(stripped)
    if match is None:
        return stripped, ""
    return stripped[: match.start()], stripped[match.start() :]


def parse_header_line(line: str) -> tuple[str, str] | None:
    """Return (key, value) for a header line, or None when the line is skipped."""
    text = line.strip()
    if not text or text.startswith(COMMENT_MARKER) or ":" not in text:
        return None
    raw_key, raw_value = text.split(":", 1)
    key = strip_quotes(raw_key.strip()).strip()
    if not key:
        return None
    value, _ = split_value_and_comment(raw_value)
    return key, strip_quotes(value)


def parse_header(text: str) -> FrontMatter:
    lines = split_lines(text)
    bounds = locate_header(lines)
    if bounds is None:
        return FrontMatter(fields={}, body=text, has_header=False)

    fields: dict[str, str] = {}
    for line in lines[bounds.start + 1 : bounds.end]:
        parsed = parse_header_line(line)
        if parsed is None:
            continue
        key, value = parsed
        fields.setdefault(key, value)

    body = "".join(lines[bounds.end + 1 :])
    return FrontMatter(fields=fields, body=body, has_header=True)


def parse_id_value(value: str | None) -> int | None:
    if value is None:
        return None
    cleaned = strip_quotes(value.strip()).strip()
    if cleaned in NULL_VALUES:
        return None
    return normalize_id(cleaned)


def extract_id(text: str) -> int | None:
    """Read the ``id`` header field as an integer, or None when unusable."""
    return parse_id_value(parse_header(text).get("id"))
