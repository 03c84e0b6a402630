"""Non-fatal diagnostics for records whose identifier sources disagree."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def identifier_sources_agree(*identifiers: int | None) -> bool:
    present = {identifier for identifier in identifiers if identifier is not None}
    return len(present) <= 1


def report_identifier_mismatch(
    document: Path,
    *,
    container_id: int | None,
    filename_id: int | None,
    header_id: int | None,
) -> bool:
    """
    Log a warning when the container, filename and header identifiers differ.

    Returns True when a mismatch was reported.
    """
    if identifier_sources_agree(container_id, filename_id, header_id):
        return False

    sources = [
        f"{label}={value}"
        for label, value in (
            ("directory", container_id),
            ("filename", filename_id),
            ("header", header_id),
        )
        if value is not None
    ]
    logger.warning("Identifier mismatch for %s: %s", document.as_posix(), ", ".join(sources))
    return True


def report_duplicate_identifier(identifier: int, documents: Iterable[Path], *, kept: Path) -> None:
    joined = ", ".join(path.as_posix() for path in documents)
    logger.warning("Duplicate identifier %s found in %s; using %s", identifier, joined, kept.as_posix())
