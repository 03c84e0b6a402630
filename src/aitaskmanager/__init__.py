"""Plan and task metadata engine for the ai-task-manager CLI."""

__version__ = "1.0.0"
