"""Command-line interface for ai-task-manager."""

from .app import app

__all__ = ["app"]
