"""Implementation of the `config` command group."""

from __future__ import annotations

import typer
from rich.markup import escape

from aitaskmanager.core.configuration.constants import VERBOSITY_PRESETS
from aitaskmanager.core.configuration.repository import TomlConfigRepository
from aitaskmanager.core.configuration.services.logging import (
    clear_logging_verbosity,
    describe_logging_verbosity,
    set_logging_verbosity,
)

from ..bootstrap import bootstrap_runtime

LEVEL_ARGUMENT = typer.Argument(
    None,
    help=f"Default log verbosity to persist: {', '.join(VERBOSITY_PRESETS)}. Omit to show the current value.",
)
RESET_OPTION = typer.Option(False, "--reset", help="Clear the persisted verbosity and use the default.")


def register(app: typer.Typer) -> None:
    """Register the `config` command group."""

    config_app = typer.Typer(help="Show or update persisted CLI preferences.")
    app.add_typer(config_app, name="config")

    @config_app.command("verbosity")
    def verbosity(  # type: ignore[func-returns-value]
        level: str | None = LEVEL_ARGUMENT,
        reset: bool = RESET_OPTION,
    ) -> None:
        context = bootstrap_runtime()
        repository = TomlConfigRepository()
        config = context.config

        if level is None and not reset:
            report = describe_logging_verbosity(config, context.environment)
            typer.echo(f"configured: {report.configured or 'default'}")
            typer.echo(f"effective: {report.effective} (from {report.source})")
            raise typer.Exit(0)

        if reset:
            clear_logging_verbosity(config)
            repository.save(config)
            typer.echo(f"Verbosity reset to default in {repository.path.as_posix()}")
            raise typer.Exit(0)

        try:
            label = set_logging_verbosity(config, level)
        except ValueError as error:
            context.error_console.print(f"[red]{escape(str(error))}[/]")
            raise typer.Exit(1) from error

        repository.save(config)
        typer.echo(f"Verbosity set to {label} in {repository.path.as_posix()}")
        raise typer.Exit(0)
