"""Layout constants and record kinds for the .ai/task-manager tree."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from aitaskmanager.core.records.identity import is_container_name, is_document_name

TASK_MANAGER_DIR = Path(".ai") / "task-manager"
ROOT_MARKER_FILENAME = ".init-metadata.json"
PLANS_DIR = "plans"
ARCHIVE_DIR = "archive"
TASKS_DIR = "tasks"

Area = Literal["active", "archived"]


@dataclass(frozen=True, slots=True)
class RecordKind:
    name: Literal["plan", "task"]
    file_prefix: str

    def __str__(self) -> str:
        return self.name


PLAN = RecordKind(name="plan", file_prefix="plan-")
TASK = RecordKind(name="task", file_prefix="")
RECORD_KINDS = {kind.name: kind for kind in (PLAN, TASK)}


@dataclass(frozen=True, slots=True)
class RecordArea:
    directory: Path
    area: Area


def plan_area_for_container(container: Path) -> Area:
    return "archived" if container.parent.name == ARCHIVE_DIR else "active"


def record_areas(root: Path, kind: RecordKind) -> tuple[RecordArea, ...]:
    """
    Return the directories scanned for one record kind.

    For plans, root is the metadata root and both plans/ and archive/ are
    returned. For tasks, root is a plan container directory and only its
    tasks/ directory is returned.
    """
    if kind == PLAN:
        return (
            RecordArea(directory=root / PLANS_DIR, area="active"),
            RecordArea(directory=root / ARCHIVE_DIR, area="archived"),
        )
    return (RecordArea(directory=root / TASKS_DIR, area=plan_area_for_container(root)),)


def root_from_document_path(path: Path) -> Path | None:
    """
    Derive the metadata root lexically from a conventionally placed document.

    Supported layouts:
    - Container plan: <root>/(plans|archive)/<id>--<name>/plan-<id>--<name>.md
    - Legacy plan: <root>/(plans|archive)/plan-<id>--<name>.md
    - Task: <root>/(plans|archive)/<id>--<name>/tasks/<id>--<name>.md
    """
    parents = path.parents
    if is_document_name(path.name, file_prefix=PLAN.file_prefix):
        if len(parents) >= 3 and parents[1].name in {PLANS_DIR, ARCHIVE_DIR} and is_container_name(parents[0].name):
            return parents[2]
        if len(parents) >= 2 and parents[0].name in {PLANS_DIR, ARCHIVE_DIR}:
            return parents[1]
        return None

    if (
        is_document_name(path.name, file_prefix=TASK.file_prefix)
        and len(parents) >= 4
        and parents[0].name == TASKS_DIR
        and is_container_name(parents[1].name)
        and parents[2].name in {PLANS_DIR, ARCHIVE_DIR}
    ):
        return parents[3]
    return None
