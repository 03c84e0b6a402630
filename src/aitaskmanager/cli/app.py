"""Typer application for the ai-task-manager CLI."""

from __future__ import annotations

import typer

from .commands import config, plan, status, task

app = typer.Typer(
    name="ai-task-manager",
    help="Locate, allocate and update plan and task documents under .ai/task-manager.",
    no_args_is_help=True,
    add_completion=False,
)

plan.register(app)
task.register(app)
config.register(app)
status.register(app)
