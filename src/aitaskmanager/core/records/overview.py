"""Plan progress summaries for the `plan show` and `status` views."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from aitaskmanager.core.records.frontmatter import parse_header, parse_id_value
from aitaskmanager.core.records.resolver import available_plans
from aitaskmanager.core.records.scanner import RecordDescriptor, list_task_documents, read_document

logger = logging.getLogger(__name__)

COMPLETED_STATUS = "completed"
PENDING_STATUS = "pending"
MISSING_EXECUTIVE_SUMMARY = "No Executive Summary found."

_EXECUTIVE_SUMMARY_RE = re.compile(r"## Executive Summary\n+(.*?)(?=\n## |\Z)", re.DOTALL)

PlanStatus = Literal["noTasks", "notStarted", "inProgress", "completed"]


@dataclass(frozen=True, slots=True)
class TaskProgress:
    document_path: Path
    id: int | None
    status: str | None


@dataclass(frozen=True, slots=True)
class PlanOverview:
    record: RecordDescriptor
    summary: str
    created: str
    approval_method: str | None
    executive_summary: str
    tasks: tuple[TaskProgress, ...] = ()

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self.tasks if task.status == COMPLETED_STATUS)

    @property
    def completion_percentage(self) -> int:
        return percentage(self.completed_count, self.task_count)


@dataclass(frozen=True, slots=True)
class DashboardStatistics:
    total_plans: int
    active_plans: int
    archived_plans: int
    task_completion_rate: int
    plans_by_status: dict[str, int] = field(default_factory=dict)


def percentage(part: int, total: int) -> int:
    if total == 0:
        return 0
    return int(part * 100 / total + 0.5)


def extract_executive_summary(body: str) -> str:
    """Return the text under "## Executive Summary" up to the next level-2 heading."""
    match = _EXECUTIVE_SUMMARY_RE.search(body.replace("\r\n", "\n"))
    if match is None or not match.group(1).strip():
        return MISSING_EXECUTIVE_SUMMARY
    return match.group(1).strip()


def load_task_progress(plan: RecordDescriptor) -> tuple[TaskProgress, ...]:
    tasks: list[TaskProgress] = []
    for document in list_task_documents(plan.container_path):
        content = read_document(document)
        if content is None:
            logger.warning("Skipping unreadable task file %s in %s", document.name, plan.label)
            continue
        front_matter = parse_header(content)
        tasks.append(
            TaskProgress(
                document_path=document,
                id=parse_id_value(front_matter.get("id")),
                status=front_matter.get("status"),
            )
        )
    return tuple(sorted(tasks, key=lambda task: (task.id is None, task.id or 0, task.document_path.name)))


def load_plan_overview(plan: RecordDescriptor) -> PlanOverview | None:
    """Read a plan's header, executive summary and task statuses."""
    content = read_document(plan.document_path)
    if content is None:
        logger.warning("Skipping unreadable plan document %s", plan.document_path)
        return None
    front_matter = parse_header(content)
    return PlanOverview(
        record=plan,
        summary=front_matter.get("summary") or "",
        created=front_matter.get("created") or "",
        approval_method=front_matter.get("approval_method") or None,
        executive_summary=extract_executive_summary(front_matter.body),
        tasks=load_task_progress(plan),
    )


def collect_plan_overviews(root: Path) -> list[PlanOverview]:
    overviews = [load_plan_overview(plan) for plan in available_plans(root)]
    return [overview for overview in overviews if overview is not None]


def categorize_plan_status(overview: PlanOverview) -> PlanStatus:
    if not overview.tasks:
        return "noTasks"
    if overview.completed_count == overview.task_count:
        return "completed"
    if all(task.status == PENDING_STATUS for task in overview.tasks):
        return "notStarted"
    return "inProgress"


def calculate_statistics(overviews: Sequence[PlanOverview]) -> DashboardStatistics:
    """
    Aggregate plan counts and task completion across every plan.

    The completion rate covers active and archived plans; the status
    distribution covers active plans only.
    """
    total_tasks = sum(overview.task_count for overview in overviews)
    completed_tasks = sum(overview.completed_count for overview in overviews)
    distribution: dict[str, int] = {"noTasks": 0, "notStarted": 0, "inProgress": 0, "completed": 0}
    for overview in overviews:
        if not overview.record.is_archived:
            distribution[categorize_plan_status(overview)] += 1

    archived = sum(1 for overview in overviews if overview.record.is_archived)
    return DashboardStatistics(
        total_plans=len(overviews),
        active_plans=len(overviews) - archived,
        archived_plans=archived,
        task_completion_rate=percentage(completed_tasks, total_tasks),
        plans_by_status=distribution,
    )
