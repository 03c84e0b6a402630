"""Allocate the next free plan or task identifier."""

from __future__ import annotations

import logging
from pathlib import Path

from aitaskmanager.core.records.paths import PLAN, TASK, RecordKind
from aitaskmanager.core.records.scanner import RecordDescriptor, list_records

logger = logging.getLogger(__name__)


def next_id(root: Path, kind: RecordKind) -> int:
    """
    Return max(existing ids) + 1 for kind under root, or 1 when none exist.

    Gaps and duplicate identifiers are tolerated. The result is not reserved:
    callers creating a record treat the filesystem write as the serialization
    point.
    """
    identifiers = [record.id for record in list_records(root, kind)]
    next_value = max(identifiers, default=0) + 1
    logger.debug("Next %s id under %s is %s (%s existing)", kind, root, next_value, len(identifiers))
    return next_value


def next_plan_id(root: Path) -> int:
    return next_id(root, PLAN)


def next_task_id(plan: RecordDescriptor) -> int:
    if plan.container_path is None:
        logger.debug("Plan %s uses the legacy layout and has no tasks directory", plan.id)
        return 1
    return next_id(plan.container_path, TASK)
