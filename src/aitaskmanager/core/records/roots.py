"""Locate the .ai/task-manager metadata root for a working directory."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from aitaskmanager.core.records.paths import ROOT_MARKER_FILENAME, TASK_MANAGER_DIR, root_from_document_path

logger = logging.getLogger(__name__)


def load_root_metadata(root: Path) -> dict[str, Any] | None:
    """
    Load the root marker file, or None when it is missing or invalid.

    A valid marker is a JSON object with a non-empty string ``version``.
    """
    marker = root / ROOT_MARKER_FILENAME
    try:
        if not marker.is_file():
            return None
        payload = json.loads(marker.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as error:
        logger.debug("Ignoring unreadable root marker %s: %s", marker, error)
        return None

    if not isinstance(payload, dict):
        return None
    version = payload.get("version")
    if not isinstance(version, str) or not version.strip():
        return None
    return payload


def is_valid_root(root: Path) -> bool:
    return load_root_metadata(root) is not None


def _marker_exists(root: Path) -> bool:
    try:
        return (root / ROOT_MARKER_FILENAME).is_file()
    except OSError:
        return False


def find_root(start: Path) -> Path | None:
    """
    Return the nearest metadata root at or above start.

    When start is a plan or task document in its conventional place the root
    is derived from the path directly. Otherwise each directory from start up
    to the filesystem root is checked for a valid .ai/task-manager root; the
    closest one wins.
    """
    candidate = Path(start).expanduser().resolve()

    if candidate.suffix == ".md":
        shortcut = root_from_document_path(candidate)
        if shortcut is not None and _marker_exists(shortcut):
            logger.debug("Resolved root %s from document path %s", shortcut, candidate)
            return shortcut

    try:
        current = candidate if candidate.is_dir() else candidate.parent
    except OSError:
        current = candidate.parent

    while True:
        candidate_root = current / TASK_MANAGER_DIR
        logger.debug("Checking for task manager root at %s", candidate_root)
        if is_valid_root(candidate_root):
            logger.debug("Found task manager root at %s", candidate_root)
            return candidate_root
        parent = current.parent
        if parent == current:
            break
        current = parent

    logger.debug("No task manager root found above %s", candidate)
    return None
