"""Shared console renderers for plan listings, plan details and the dashboard."""

from __future__ import annotations

import textwrap
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from aitaskmanager.core.records.overview import DashboardStatistics, PlanOverview
from aitaskmanager.core.records.paths import TASK_MANAGER_DIR
from aitaskmanager.core.records.resolver import available_plans
from aitaskmanager.core.records.scanner import RecordDescriptor

DIVIDER_WIDTH = 80


def print_missing_root(console: Console, start: Path) -> None:
    console.print(
        f"[red]No {TASK_MANAGER_DIR.as_posix()} directory found in current directory or any parent directory.[/]"
    )
    console.print("")
    console.print("Please ensure you are in a project with task manager initialized, or navigate to the correct")
    console.print("project directory. The root is searched for from the current working directory upward.")
    console.print("")
    console.print(f"Current working directory: {escape(start.as_posix())}")


def format_plan_line(record: RecordDescriptor) -> str:
    status = "archived" if record.is_archived else "active"
    return f"{record.id} ({status}) {record.label}"


def print_plan_not_found(console: Console, plan: str, plans: Sequence[RecordDescriptor]) -> None:
    console.print(f"[red]Plan ID {escape(plan)} not found[/]")
    console.print("")
    if not plans:
        console.print(f"No plans found in {TASK_MANAGER_DIR.as_posix()}/{{plans,archive}}/")
        return
    console.print("Available plans:")
    for record in plans:
        console.print(f"  {escape(format_plan_line(record))}")


def print_unresolved_plan(console: Console, plan: str, start: Path, root: Path | None) -> None:
    """Explain why plan did not resolve: no metadata root at all, or no such plan."""
    if root is None:
        print_missing_root(console, start)
        return
    print_plan_not_found(console, plan, available_plans(root))


def progress_bar(percent: int, width: int = 20) -> str:
    filled = round(percent / 100 * width)
    return f"[{'█' * filled}{'░' * (width - filled)}] {percent}%"


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def _section(console: Console, title: str) -> None:
    console.print("")
    console.print(f"[bold cyan]{escape(title)}[/]")
    console.print("─" * DIVIDER_WIDTH, style="cyan")


def render_plan_overview(console: Console, overview: PlanOverview) -> None:
    record = overview.record
    console.print("")
    console.print(f"[bold]Plan {record.id}[/]")
    console.print("─" * DIVIDER_WIDTH, style="dim")

    _section(console, "Metadata")
    console.print(f"  ● ID: {record.id}")
    console.print(f"  ● Created: {escape(overview.created)}")
    console.print(f"  ● Status: {'[blue]Archived[/]' if record.is_archived else '[green]Active[/]'}")
    console.print(f"  ● Summary: {escape(overview.summary)}")
    console.print(f"  ● Approval: {escape(overview.approval_method or 'unset')}")
    console.print(f"  ● Location: {escape(record.document_path.as_posix())}")

    _section(console, "Task Progress")
    if overview.task_count:
        console.print(
            f"  {escape(progress_bar(overview.completion_percentage))} "
            f"{overview.completed_count}/{overview.task_count} tasks completed"
        )
    else:
        console.print("  [dim]No tasks generated yet[/]")

    _section(console, "Executive Summary")
    for paragraph in overview.executive_summary.splitlines():
        wrapped = textwrap.wrap(paragraph, width=DIVIDER_WIDTH - 4) or [""]
        for line in wrapped:
            console.print(f"  {escape(line)}")
    console.print("")
    console.print("─" * DIVIDER_WIDTH, style="dim")


def render_dashboard(console: Console, stats: DashboardStatistics, overviews: Sequence[PlanOverview]) -> None:
    console.print("")
    console.print("[bold]AI Task Manager Dashboard[/]")
    console.print("─" * DIVIDER_WIDTH, style="dim")

    _section(console, "Summary")
    console.print(f"  ● Total Plans: {stats.total_plans}")
    console.print(f"  ● Active Plans: {stats.active_plans}")
    console.print(f"  ● Archived Plans: {stats.archived_plans}")
    console.print(
        f"  ● Task Progress: {escape(progress_bar(stats.task_completion_rate))} "
        f"({stats.task_completion_rate}% complete)"
    )

    active = [overview for overview in overviews if not overview.record.is_archived]
    archived = [overview for overview in overviews if overview.record.is_archived]

    _section(console, "Active Plans")
    if not active:
        console.print("  No active plans")
    for overview in active:
        console.print(f"  ● [bold]Plan {overview.record.id}[/]: {escape(_truncate(overview.summary, 50))}")
        if overview.task_count:
            console.print(
                f"      {escape(progress_bar(overview.completion_percentage))} "
                f"{overview.completed_count}/{overview.task_count} tasks"
            )
        else:
            console.print("      [dim]No tasks generated[/]")

    unfinished = [overview for overview in archived if overview.completed_count < overview.task_count]
    if unfinished:
        _section(console, "Unfinished Tasks in Archived Plans")
        for overview in unfinished:
            remaining = overview.task_count - overview.completed_count
            summary = escape(_truncate(overview.summary, 50))
            console.print(f"  [red]⚠[/] [bold]Plan {overview.record.id}[/]: {summary}")
            console.print(
                f"      {escape(progress_bar(overview.completion_percentage))} "
                f"{remaining} incomplete task{'' if remaining == 1 else 's'}"
            )

    _section(console, "Archived Plans")
    if not archived:
        console.print("  No archived plans")
    for overview in archived:
        console.print(f"  [green]✓[/] [bold]Plan {overview.record.id}[/]: {escape(_truncate(overview.summary, 60))}")
    console.print("")
    console.print("─" * DIVIDER_WIDTH, style="dim")
