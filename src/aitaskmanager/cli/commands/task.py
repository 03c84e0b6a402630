"""Implementation of the `task` command group."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from aitaskmanager.core.records.allocator import next_task_id
from aitaskmanager.core.records.mutations import FieldMutationError, set_field
from aitaskmanager.core.records.resolver import resolve_plan
from aitaskmanager.core.records.roots import find_root

from ..bootstrap import bootstrap_runtime
from ..rendering import print_unresolved_plan

PLAN_ARGUMENT = typer.Argument(..., help="Plan ID (2, 02 and 002 are equivalent) or path to a plan document.")
DOCUMENT_ARGUMENT = typer.Argument(..., help="Path to the task document to update.")
STATUS_ARGUMENT = typer.Argument(
    ...,
    help='Task status: "pending", "in-progress", "completed" or "needs-clarification".',
)
ROOT_OPTION = typer.Option(
    None,
    "--root",
    help="Directory to start the task manager root search from. Defaults to current working directory.",
)


def register(app: typer.Typer) -> None:
    """Register the `task` command group."""

    task_app = typer.Typer(help="Allocate task identifiers and update task documents.")
    app.add_typer(task_app, name="task")

    @task_app.command("next-id")
    def print_next_task_id(  # type: ignore[func-returns-value]
        plan: str = PLAN_ARGUMENT,
        root: Path | None = ROOT_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        start = (root or Path.cwd()).resolve()

        record = resolve_plan(plan.strip(), start)
        if record is None:
            print_unresolved_plan(context.error_console, plan.strip(), start, find_root(start))
            raise typer.Exit(1)

        typer.echo(next_task_id(record))
        raise typer.Exit(0)

    @task_app.command("set-status")
    def set_status(  # type: ignore[func-returns-value]
        document: Path = DOCUMENT_ARGUMENT,
        status: str = STATUS_ARGUMENT,
    ) -> None:
        context = bootstrap_runtime()
        console = context.error_console

        try:
            set_field(document, "status", status)
        except FieldMutationError as error:
            console.print(f"[red]Error: {escape(str(error))}[/]")
            raise typer.Exit(1) from error
        except (OSError, UnicodeDecodeError) as error:
            console.print(f"[red]Failed to update {escape(document.as_posix())}: {escape(str(error))}[/]")
            raise typer.Exit(1) from error

        typer.echo(f'Successfully set status to "{status.strip()}" in {document.as_posix()}')
        raise typer.Exit(0)
