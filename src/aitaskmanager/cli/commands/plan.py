"""Implementation of the `plan` command group."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import typer
from rich.markup import escape

from aitaskmanager.core.records.allocator import next_plan_id
from aitaskmanager.core.records.archive import archive_plan, delete_plan
from aitaskmanager.core.records.blueprint import BLUEPRINT_FIELDS, describe_blueprint
from aitaskmanager.core.records.mutations import FieldMutationError, set_field
from aitaskmanager.core.records.overview import load_plan_overview
from aitaskmanager.core.records.resolver import available_plans, resolve_plan
from aitaskmanager.core.records.roots import find_root

from ..bootstrap import bootstrap_runtime
from ..rendering import (
    format_plan_line,
    print_missing_root,
    print_plan_not_found,
    print_unresolved_plan,
    render_plan_overview,
)

PLAN_ARGUMENT = typer.Argument(..., help="Plan ID (2, 02 and 002 are equivalent) or path to a plan document.")
FIELD_ARGUMENT = typer.Argument(
    None,
    help=f"Optional field to print instead of the full JSON object: {', '.join(BLUEPRINT_FIELDS)}.",
)
DOCUMENT_ARGUMENT = typer.Argument(..., help="Path to the plan document to update.")
APPROVAL_METHOD_ARGUMENT = typer.Argument(..., help='Approval method: "auto" or "manual".')
ROOT_OPTION = typer.Option(
    None,
    "--root",
    help="Directory to start the task manager root search from. Defaults to current working directory.",
)
ARCHIVE_DATE_OPTION = typer.Option(
    None,
    "--date",
    metavar="YYYY-MM-DD",
    help="Override the date written in the archive note.",
)
YES_OPTION = typer.Option(False, "--yes", "-y", help="Delete without asking for confirmation.")


def _start_directory(root: Path | None) -> Path:
    return (root or Path.cwd()).resolve()


def _parse_iso_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as error:
        raise typer.BadParameter(f"Date must use YYYY-MM-DD format (got {value!r}).") from error


def register(app: typer.Typer) -> None:
    """Register the `plan` command group."""

    plan_app = typer.Typer(help="Inspect, allocate and update plan documents.")
    app.add_typer(plan_app, name="plan")

    @plan_app.command("next-id")
    def print_next_plan_id(  # type: ignore[func-returns-value]
        root: Path | None = ROOT_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        start = _start_directory(root)

        task_manager_root = find_root(start)
        if task_manager_root is None:
            print_missing_root(context.error_console, start)
            raise typer.Exit(1)

        typer.echo(next_plan_id(task_manager_root))
        raise typer.Exit(0)

    @plan_app.command("blueprint")
    def print_blueprint(  # type: ignore[func-returns-value]
        plan: str = PLAN_ARGUMENT,
        field_name: str | None = FIELD_ARGUMENT,
        root: Path | None = ROOT_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        console = context.error_console
        start = _start_directory(root)

        if field_name is not None and field_name not in BLUEPRINT_FIELDS:
            console.print(f"[red]Invalid field name: {escape(field_name)}[/]")
            console.print(f"Valid fields: {', '.join(BLUEPRINT_FIELDS)}")
            raise typer.Exit(1)

        record = resolve_plan(plan.strip(), start)
        if record is None:
            print_unresolved_plan(console, plan.strip(), start, find_root(start))
            raise typer.Exit(1)

        blueprint = describe_blueprint(record)
        if field_name is not None:
            typer.echo(blueprint.field(field_name))
        else:
            typer.echo(json.dumps(blueprint.to_dict(), indent=2))
        raise typer.Exit(0)

    @plan_app.command("list")
    def list_plans(  # type: ignore[func-returns-value]
        root: Path | None = ROOT_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        start = _start_directory(root)

        task_manager_root = find_root(start)
        if task_manager_root is None:
            print_missing_root(context.error_console, start)
            raise typer.Exit(1)

        plans = available_plans(task_manager_root)
        if not plans:
            context.error_console.print("[yellow]No plans found.[/]")
            raise typer.Exit(0)

        for record in plans:
            typer.echo(f"{format_plan_line(record)} -> {record.document_path.as_posix()}")
        raise typer.Exit(0)

    @plan_app.command("archive")
    def archive_existing_plan(  # type: ignore[func-returns-value]
        plan: str = PLAN_ARGUMENT,
        root: Path | None = ROOT_OPTION,
        archive_date: str | None = ARCHIVE_DATE_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        console = context.error_console
        start = _start_directory(root)
        archived_on = _parse_iso_date(archive_date)

        task_manager_root = find_root(start)
        if task_manager_root is None:
            print_missing_root(console, start)
            raise typer.Exit(1)

        try:
            result = archive_plan(root=task_manager_root, plan_id=plan.strip(), archived_on=archived_on)
        except FileNotFoundError:
            print_plan_not_found(console, plan.strip(), available_plans(task_manager_root))
            raise typer.Exit(1) from None
        except (ValueError, FileExistsError) as error:
            console.print(f"[red]{escape(str(error))}[/]")
            raise typer.Exit(1) from error
        except (RuntimeError, OSError) as error:
            console.print(f"[red]Plan archive failed due to filesystem error: {escape(str(error))}[/]")
            raise typer.Exit(2) from error

        typer.echo(f"Archived plan {result.plan_id} to {result.archived_path.as_posix()}")
        raise typer.Exit(0)

    @plan_app.command("set-approval-method")
    def set_approval_method(  # type: ignore[func-returns-value]
        document: Path = DOCUMENT_ARGUMENT,
        approval_method: str = APPROVAL_METHOD_ARGUMENT,
    ) -> None:
        context = bootstrap_runtime()
        console = context.error_console

        try:
            set_field(document, "approval_method", approval_method)
        except FieldMutationError as error:
            console.print(f"[red]Error: {escape(str(error))}[/]")
            raise typer.Exit(1) from error
        except (OSError, UnicodeDecodeError) as error:
            console.print(f"[red]Failed to update {escape(document.as_posix())}: {escape(str(error))}[/]")
            raise typer.Exit(1) from error

        typer.echo(f'Successfully set approval_method to "{approval_method.strip()}" in {document.as_posix()}')
        raise typer.Exit(0)

    @plan_app.command("show")
    def show_plan(  # type: ignore[func-returns-value]
        plan: str = PLAN_ARGUMENT,
        root: Path | None = ROOT_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        start = _start_directory(root)

        record = resolve_plan(plan.strip(), start)
        if record is None:
            print_unresolved_plan(context.error_console, plan.strip(), start, find_root(start))
            raise typer.Exit(1)

        overview = load_plan_overview(record)
        if overview is None:
            context.error_console.print(f"[red]Could not read {escape(record.document_path.as_posix())}[/]")
            raise typer.Exit(1)

        render_plan_overview(context.console, overview)
        raise typer.Exit(0)

    @plan_app.command("delete")
    def delete_existing_plan(  # type: ignore[func-returns-value]
        plan: str = PLAN_ARGUMENT,
        root: Path | None = ROOT_OPTION,
        yes: bool = YES_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        console = context.error_console
        start = _start_directory(root)

        task_manager_root = find_root(start)
        if task_manager_root is None:
            print_missing_root(console, start)
            raise typer.Exit(1)

        record = resolve_plan(plan.strip(), task_manager_root)
        if record is None:
            print_plan_not_found(console, plan.strip(), available_plans(task_manager_root))
            raise typer.Exit(1)

        if not yes:
            target = record.container_path or record.document_path
            console.print(f"Plan {record.id} will be permanently removed: {escape(target.as_posix())}")
            if not typer.confirm("Delete plan?", default=False):
                console.print("[yellow]Deletion cancelled by user.[/]")
                raise typer.Exit(1)

        try:
            deleted = delete_plan(root=task_manager_root, plan_id=record.id)
        except FileNotFoundError:
            print_plan_not_found(console, plan.strip(), available_plans(task_manager_root))
            raise typer.Exit(1) from None
        except OSError as error:
            console.print(f"[red]Plan deletion failed due to filesystem error: {escape(str(error))}[/]")
            raise typer.Exit(2) from error

        typer.echo(f"Plan {deleted.id} successfully deleted.")
        raise typer.Exit(0)
