"""Update a single front matter field in place."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from aitaskmanager.core.records.frontmatter import locate_header, split_lines, split_value_and_comment, strip_quotes

FIELD_TOKENS: dict[str, tuple[str, ...]] = {
    "approval_method": ("auto", "manual"),
    "status": ("pending", "in-progress", "completed", "needs-clarification"),
}

_FIELD_LINE_RE = re.compile(r"^(?P<lead>\s*)(?P<key>[^:]+?)(?P<sep>\s*:)(?P<rest>.*)$", re.DOTALL)


class FieldMutationError(Exception):
    """Base class for header mutation failures."""


class DocumentNotFoundError(FieldMutationError, FileNotFoundError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class MissingFrontMatterError(FieldMutationError, ValueError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"No frontmatter found in {path}")
        self.path = path


class UnsupportedFieldError(FieldMutationError, ValueError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Field {key!r} cannot be updated. Supported fields: {', '.join(sorted(FIELD_TOKENS))}")
        self.key = key


class InvalidFieldValueError(FieldMutationError, ValueError):
    def __init__(self, key: str, value: str) -> None:
        super().__init__(f"{key} must be {describe_tokens(FIELD_TOKENS[key])} (got {value!r})")
        self.key = key
        self.value = value


def describe_tokens(tokens: tuple[str, ...]) -> str:
    quoted = [f'"{token}"' for token in tokens]
    if len(quoted) == 1:
        return quoted[0]
    return f"{', '.join(quoted[:-1])} or {quoted[-1]}"


def validate_field_value(key: str, value: str) -> str:
    if key not in FIELD_TOKENS:
        raise UnsupportedFieldError(key)
    normalized = value.strip()
    if normalized not in FIELD_TOKENS[key]:
        raise InvalidFieldValueError(key, value)
    return normalized


def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith("\n"):
        return "\n"
    return ""


def _rewrite_field_line(line: str, key: str, value: str) -> str | None:
    """Return line with its value replaced when it declares key, else None."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    ending = _line_ending(line)
    content = line[: len(line) - len(ending)] if ending else line
    match = _FIELD_LINE_RE.match(content)
    if match is None or strip_quotes(match.group("key").strip()) != key:
        return None
    _, comment = split_value_and_comment(match.group("rest"))
    return f"{match.group('lead')}{match.group('key')}{match.group('sep')} {value}{comment}{ending}"


def apply_field(text: str, key: str, value: str) -> str | None:
    """
    Return text with key set to value, or None when there is no header.

    An existing line for key keeps its position, indentation and inline
    comment; a missing key is appended just before the closing delimiter.
    Unindented lines are matched first, so a nested key of the same name is
    only rewritten when no top-level one exists.
    """
    lines = split_lines(text)
    bounds = locate_header(lines)
    if bounds is None:
        return None

    header = range(bounds.start + 1, bounds.end)
    top_level = [index for index in header if not lines[index][:1].isspace()]
    nested = [index for index in header if lines[index][:1].isspace()]
    for index in top_level + nested:
        rewritten = _rewrite_field_line(lines[index], key, value)
        if rewritten is not None:
            lines[index] = rewritten
            return "".join(lines)

    ending = _line_ending(lines[bounds.start]) or "\n"
    lines.insert(bounds.end, f"{key}: {value}{ending}")
    return "".join(lines)


def atomic_write_text(path: Path, text: str) -> None:
    file_descriptor, temporary_path = tempfile.mkstemp(
        prefix=f".{path.name}.",
        suffix=".tmp",
        dir=path.parent,
    )
    try:
        with os.fdopen(file_descriptor, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        try:
            os.chmod(temporary_path, path.stat().st_mode & 0o7777)
        except OSError:
            pass
        os.replace(temporary_path, path)
    finally:
        if os.path.exists(temporary_path):
            os.remove(temporary_path)


def read_text_exact(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def set_field(path: Path, key: str, value: str) -> bool:
    """
    Set one mutable header field of the document at path.

    Returns True when the file content changed. Raises a FieldMutationError
    subclass when the value is not accepted for key, the file is missing, or
    it has no front matter block.
    """
    normalized = validate_field_value(key, value)
    target = Path(path)
    if not target.is_file():
        raise DocumentNotFoundError(target)

    original = read_text_exact(target)
    updated = apply_field(original, key, normalized)
    if updated is None:
        raise MissingFrontMatterError(target)
    if updated == original:
        return False

    atomic_write_text(target, updated)
    return True
