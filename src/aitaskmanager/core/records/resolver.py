"""Resolve plan and task records by identifier or by document path."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from aitaskmanager.core.records.consistency import report_duplicate_identifier
from aitaskmanager.core.records.frontmatter import parse_header
from aitaskmanager.core.records.identity import normalize_id, parse_container_id
from aitaskmanager.core.records.paths import PLAN, TASK, plan_area_for_container
from aitaskmanager.core.records.roots import find_root, is_valid_root
from aitaskmanager.core.records.scanner import RecordDescriptor, list_records, read_document, resolve_record_id

logger = logging.getLogger(__name__)

REQUIRED_PLAN_FIELDS = ("created",)


def _precedence(record: RecordDescriptor) -> tuple[int, int, str]:
    # Active before archived, container layout before legacy, then path order.
    return (
        1 if record.is_archived else 0,
        1 if record.is_legacy else 0,
        record.document_path.as_posix(),
    )


def select_record(records: Sequence[RecordDescriptor], identifier: int) -> RecordDescriptor | None:
    """Pick the record for identifier; the active area wins over the archive."""
    matches = sorted((record for record in records if record.id == identifier), key=_precedence)
    if not matches:
        return None
    chosen = matches[0]
    if len(matches) > 1:
        report_duplicate_identifier(
            identifier,
            (record.document_path for record in matches),
            kept=chosen.document_path,
        )
    return chosen


def _looks_like_path(value: str | Path) -> bool:
    if isinstance(value, Path):
        return True
    candidate = Path(value)
    return candidate.is_absolute() or candidate.suffix == ".md" or len(candidate.parts) > 1


def _locate_root(start: Path) -> Path | None:
    if is_valid_root(start):
        return start.resolve()
    return find_root(start)


def describe_plan_document(document: Path) -> RecordDescriptor | None:
    """
    Build a plan descriptor straight from a document path.

    Returns None when the file is missing or binary, lacks a required header
    field, has no identifier, or no metadata root encloses it.
    """
    resolved = Path(document).expanduser().resolve()
    if not resolved.is_file():
        logger.debug("Plan document %s does not exist", resolved)
        return None

    content = read_document(resolved)
    if content is None:
        return None
    front_matter = parse_header(content)
    missing = [name for name in REQUIRED_PLAN_FIELDS if not front_matter.get(name)]
    if missing:
        logger.debug("Plan document %s is missing required fields %s", resolved, missing)
        return None

    if find_root(resolved) is None:
        logger.debug("No task manager root encloses %s", resolved)
        return None

    container = resolved.parent if parse_container_id(resolved.parent.name) is not None else None
    record_id = resolve_record_id(resolved, front_matter, kind=PLAN, container=container)
    if record_id is None:
        return None
    area = plan_area_for_container(container if container is not None else resolved)
    return RecordDescriptor(
        id=record_id,
        kind=PLAN,
        document_path=resolved,
        container_path=container,
        area=area,
    )


def resolve_plan(id_or_path: int | str | Path, start: Path | None = None) -> RecordDescriptor | None:
    """
    Resolve a plan by numeric identifier or by document path.

    Identifiers are compared numerically so "2", "02" and "002" all match a
    container named 02--name. start may be a metadata root or any directory
    inside a project; it defaults to the current working directory.
    """
    if not isinstance(id_or_path, int) and _looks_like_path(id_or_path):
        return describe_plan_document(Path(id_or_path))

    identifier = normalize_id(id_or_path)
    if identifier is None:
        logger.debug("Invalid plan ID %r; plan IDs must be numeric", id_or_path)
        return None

    root = _locate_root(Path(start) if start is not None else Path.cwd())
    if root is None:
        return None

    logger.debug("Searching for plan %s under %s", identifier, root)
    return select_record(list_records(root, PLAN), identifier)


def available_plans(root: Path) -> list[RecordDescriptor]:
    return sorted(list_records(root, PLAN), key=lambda record: (record.id, _precedence(record)))


def resolve_task(plan: RecordDescriptor, task_id: int | str) -> RecordDescriptor | None:
    identifier = normalize_id(task_id)
    if identifier is None or plan.container_path is None:
        return None
    return select_record(list_records(plan.container_path, TASK), identifier)


def list_plan_tasks(plan: RecordDescriptor) -> list[RecordDescriptor]:
    if plan.container_path is None:
        return []
    return sorted(list_records(plan.container_path, TASK), key=lambda record: record.id)
