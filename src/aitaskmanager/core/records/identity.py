"""Helpers for numeric record identity derived from directory and file names."""

from __future__ import annotations

import re

CONTAINER_NAME_RE = re.compile(r"^(?P<id>\d+)--(?P<name>.+)$")
PLAN_FILENAME_RE = re.compile(r"^plan-(?P<id>\d+)--(?P<name>.+)\.md$")
TASK_FILENAME_RE = re.compile(r"^(?P<id>\d+)--(?P<name>.+)\.md$")
NUMERIC_ID_RE = re.compile(r"^\+?(?P<digits>\d+)$")


def normalize_id(value: int | str) -> int | None:
    """
    Normalize an identifier to its numeric value.

    "2", "02", "002" and 2 all normalize to 2. Returns None for negative,
    empty or non-numeric input.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    match = NUMERIC_ID_RE.fullmatch(value.strip())
    if match is None:
        return None
    return int(match.group("digits"))


def parse_container_id(dirname: str) -> int | None:
    match = CONTAINER_NAME_RE.match(dirname)
    if match is None:
        return None
    return int(match.group("id"))


def parse_document_id(filename: str, *, file_prefix: str) -> int | None:
    """
    Parse the identifier embedded in a plan or task document filename.

    Plans use plan-<id>--<name>.md and tasks use <id>--<name>.md.
    """
    pattern = PLAN_FILENAME_RE if file_prefix else TASK_FILENAME_RE
    match = pattern.match(filename)
    if match is None:
        return None
    return int(match.group("id"))


def is_container_name(dirname: str) -> bool:
    return CONTAINER_NAME_RE.match(dirname) is not None


def is_document_name(filename: str, *, file_prefix: str) -> bool:
    return parse_document_id(filename, file_prefix=file_prefix) is not None
