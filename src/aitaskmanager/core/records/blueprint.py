"""Summarize a plan's files and execution blueprint state."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from aitaskmanager.core.records.scanner import RecordDescriptor, list_task_documents, read_document

BLUEPRINT_HEADING_RE = re.compile(r"^## Execution Blueprint", re.MULTILINE)
BLUEPRINT_FIELDS = ("planFile", "planDir", "taskCount", "blueprintExists")


@dataclass(frozen=True, slots=True)
class PlanBlueprint:
    plan_file: Path
    plan_dir: Path | None
    task_count: int
    blueprint_exists: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "planFile": self.plan_file.as_posix(),
            "planDir": self.plan_dir.as_posix() if self.plan_dir is not None else None,
            "taskCount": self.task_count,
            "blueprintExists": "yes" if self.blueprint_exists else "no",
        }

    def field(self, name: str) -> str:
        if name not in BLUEPRINT_FIELDS:
            raise ValueError(f"Invalid field name: {name}. Valid fields: {', '.join(BLUEPRINT_FIELDS)}")
        value = self.to_dict()[name]
        return "" if value is None else str(value)


def count_task_files(plan_dir: Path | None) -> int:
    """Count Markdown files directly inside the plan's tasks directory."""
    return len(list_task_documents(plan_dir))


def has_execution_blueprint(plan_file: Path) -> bool:
    content = read_document(plan_file)
    if content is None:
        return False
    return BLUEPRINT_HEADING_RE.search(content) is not None


def describe_blueprint(plan: RecordDescriptor) -> PlanBlueprint:
    return PlanBlueprint(
        plan_file=plan.document_path,
        plan_dir=plan.container_path,
        task_count=count_task_files(plan.container_path),
        blueprint_exists=has_execution_blueprint(plan.document_path),
    )
