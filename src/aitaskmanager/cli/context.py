"""Runtime context shared by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console

from aitaskmanager.core.configuration.environment import EnvironmentManager
from aitaskmanager.core.configuration.models import CLIConfig


@dataclass
class CliContext:
    console: Console
    error_console: Console = field(default_factory=lambda: Console(stderr=True, soft_wrap=True))
    config: CLIConfig = field(default_factory=CLIConfig)
    environment: EnvironmentManager = field(default_factory=EnvironmentManager)
