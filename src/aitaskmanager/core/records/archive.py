"""Plan lifecycle operations: move a plan into archive/ or delete it."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from aitaskmanager.core.records.mutations import (
    MissingFrontMatterError,
    atomic_write_text,
    read_text_exact,
    set_field,
)
from aitaskmanager.core.records.paths import ARCHIVE_DIR
from aitaskmanager.core.records.resolver import resolve_plan
from aitaskmanager.core.records.scanner import RecordDescriptor, list_task_documents

logger = logging.getLogger(__name__)

ARCHIVE_NOTE_TEMPLATE = "{eol}---{eol}{eol}**Note**: Manually archived on {day}{eol}"


@dataclass(frozen=True, slots=True)
class PlanArchiveResult:
    plan_id: int
    source_path: Path
    archived_path: Path
    completed_tasks: int


def _append_archive_note(plan_file: Path, day: date) -> None:
    content = read_text_exact(plan_file)
    eol = "\r\n" if "\r\n" in content else "\n"
    atomic_write_text(plan_file, content + ARCHIVE_NOTE_TEMPLATE.format(eol=eol, day=day.isoformat()))


def _move_into_archive(source: Path, destination: Path) -> None:
    os.replace(source, destination)


def archive_plan(*, root: Path, plan_id: int | str, archived_on: date | None = None) -> PlanArchiveResult:
    """
    Archive an active plan.

    Every task is marked completed, a dated note is appended to the plan
    document and the plan container (or legacy file) is moved into archive/
    with a single rename, so either the original or the moved tree exists.
    """
    plan = resolve_plan(plan_id, root)
    if plan is None:
        raise FileNotFoundError(f"Plan ID {plan_id} not found under {root}")
    if plan.is_archived:
        raise ValueError(f"Plan {plan.id} is already archived.")

    source = plan.container_path if plan.container_path is not None else plan.document_path
    archive_dir = root / ARCHIVE_DIR
    destination = archive_dir / source.name
    if destination.exists():
        raise FileExistsError(f"Archive destination already exists: {destination.as_posix()}")

    completed = 0
    for task_file in list_task_documents(plan.container_path):
        try:
            if set_field(task_file, "status", "completed"):
                completed += 1
        except MissingFrontMatterError:
            logger.warning("Task %s has no front matter; status left unchanged", task_file)
        except UnicodeDecodeError:
            logger.warning("Task %s is not UTF-8 text; status left unchanged", task_file)

    _append_archive_note(plan.document_path, archived_on or date.today())

    archive_dir.mkdir(parents=True, exist_ok=True)
    try:
        _move_into_archive(source, destination)
    except OSError as error:
        raise RuntimeError(
            f"Plan {plan.id} was updated but could not be moved to {destination.as_posix()}; "
            f"its state is inconsistent: {error}"
        ) from error

    logger.info("Archived plan %s to %s", plan.id, destination)
    return PlanArchiveResult(
        plan_id=plan.id,
        source_path=source,
        archived_path=destination,
        completed_tasks=completed,
    )


def delete_plan(*, root: Path, plan_id: int | str) -> RecordDescriptor:
    """
    Permanently remove an active or archived plan and all of its tasks.

    Container plans are removed as a directory tree; legacy plans are a
    single file. Returns the descriptor of the removed plan.
    """
    plan = resolve_plan(plan_id, root)
    if plan is None:
        raise FileNotFoundError(f"Plan ID {plan_id} not found under {root}")

    if plan.container_path is not None:
        shutil.rmtree(plan.container_path)
    else:
        plan.document_path.unlink()

    logger.info("Deleted %s plan %s at %s", "archived" if plan.is_archived else "active", plan.id, plan.label)
    return plan
