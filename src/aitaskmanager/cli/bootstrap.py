"""Build the runtime context for a CLI invocation."""

from __future__ import annotations

import logging

from rich.console import Console

from aitaskmanager.core.configuration.environment import EnvironmentManager
from aitaskmanager.core.configuration.models import CLIConfig
from aitaskmanager.core.configuration.repository import ConfigFileError, TomlConfigRepository
from aitaskmanager.logging_setup import configure_logging

from .context import CliContext

logger = logging.getLogger(__name__)


def bootstrap_runtime() -> CliContext:
    """Load configuration, configure logging and return a fresh CliContext.

    A broken preferences file never stops a command; defaults are used and a
    warning names the file.
    """
    config_error: ConfigFileError | None = None
    try:
        config = TomlConfigRepository().load()
    except ConfigFileError as error:
        config, config_error = CLIConfig(), error

    environment = EnvironmentManager()
    error_console = Console(stderr=True, soft_wrap=True)
    configure_logging(environment.resolve_log_level(config), console=error_console)
    if config_error is not None:
        logger.warning("%s; using default preferences", config_error)

    return CliContext(
        console=Console(soft_wrap=True),
        error_console=error_console,
        config=config,
        environment=environment,
    )
