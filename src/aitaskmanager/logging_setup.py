"""Configure process-wide logging for CLI runs."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "aitaskmanager-rich"


def configure_logging(level: int = logging.WARNING, *, console: Console | None = None) -> None:
    """
    Route log records to stderr through rich.

    Safe to call more than once; the previous handler installed here is
    replaced so repeated CLI invocations in one process do not duplicate output.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True, soft_wrap=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.getLogger("aitaskmanager").setLevel(level)
