"""Implementation of the top-level `status` dashboard command."""

from __future__ import annotations

from pathlib import Path

import typer

from aitaskmanager.core.records.overview import calculate_statistics, collect_plan_overviews
from aitaskmanager.core.records.roots import find_root

from ..bootstrap import bootstrap_runtime
from ..rendering import print_missing_root, render_dashboard

ROOT_OPTION = typer.Option(
    None,
    "--root",
    help="Directory to start the task manager root search from. Defaults to current working directory.",
)


def register(app: typer.Typer) -> None:
    """Register the `status` command."""

    @app.command("status")
    def show_status(  # type: ignore[func-returns-value]
        root: Path | None = ROOT_OPTION,
    ) -> None:
        """Show plan counts, task completion and the active and archived plans."""
        context = bootstrap_runtime()
        start = (root or Path.cwd()).resolve()

        task_manager_root = find_root(start)
        if task_manager_root is None:
            print_missing_root(context.error_console, start)
            raise typer.Exit(1)

        overviews = collect_plan_overviews(task_manager_root)
        render_dashboard(context.console, calculate_statistics(overviews), overviews)
        raise typer.Exit(0)
