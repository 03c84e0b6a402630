"""Enumerate plan and task records across areas and on-disk layouts."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from aitaskmanager.core.records.consistency import report_identifier_mismatch
from aitaskmanager.core.records.frontmatter import FrontMatter, parse_header, parse_id_value
from aitaskmanager.core.records.identity import is_document_name, parse_container_id, parse_document_id
from aitaskmanager.core.records.paths import TASKS_DIR, Area, RecordKind, record_areas

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RecordDescriptor:
    id: int
    kind: RecordKind
    document_path: Path
    container_path: Path | None
    area: Area

    @property
    def is_archived(self) -> bool:
        return self.area == "archived"

    @property
    def is_legacy(self) -> bool:
        return self.container_path is None

    @property
    def label(self) -> str:
        target = self.container_path if self.container_path is not None else self.document_path
        return target.name


def read_document(path: Path) -> str | None:
    """
    Read a document as text, or None when it is unreadable or binary.

    Content with NUL bytes or invalid UTF-8 is treated as binary.
    """
    try:
        raw = path.read_bytes()
    except OSError as error:
        logger.debug("Skipping unreadable document %s: %s", path, error)
        return None
    if b"\x00" in raw:
        logger.debug("Skipping binary document %s", path)
        return None
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Skipping non UTF-8 document %s", path)
        return None


def _iter_entries(directory: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as entries:
            return sorted(entries, key=lambda entry: entry.name)
    except FileNotFoundError:
        return []
    except OSError as error:
        logger.debug("Skipping unreadable directory %s: %s", directory, error)
        return []


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _iter_candidates(directory: Path, kind: RecordKind) -> Iterator[tuple[Path, Path | None]]:
    """Yield (document, container) pairs for both layouts in one area directory."""
    for entry in _iter_entries(directory):
        if _is_dir(entry):
            container_id = parse_container_id(entry.name)
            if container_id is None:
                continue
            container = Path(entry.path)
            for child in _iter_entries(container):
                if _is_file(child) and is_document_name(child.name, file_prefix=kind.file_prefix):
                    yield Path(child.path), container
        elif _is_file(entry) and is_document_name(entry.name, file_prefix=kind.file_prefix):
            yield Path(entry.path), None


def resolve_record_id(
    document: Path,
    front_matter: FrontMatter,
    *,
    kind: RecordKind,
    container: Path | None,
) -> int | None:
    """
    Pick the identifier for one document.

    Sources are the container name, the filename and the header id. A
    disagreement is reported; the header wins, then the filename, then the
    container.
    """
    container_id = parse_container_id(container.name) if container is not None else None
    filename_id = parse_document_id(document.name, file_prefix=kind.file_prefix)
    header_id = parse_id_value(front_matter.get("id"))
    logger.debug(
        "Extracted ids for %s: directory=%s filename=%s header=%s",
        document,
        container_id,
        filename_id,
        header_id,
    )

    report_identifier_mismatch(
        document,
        container_id=container_id,
        filename_id=filename_id,
        header_id=header_id,
    )
    for candidate in (header_id, filename_id, container_id):
        if candidate is not None:
            return candidate
    return None


def describe_document(
    document: Path,
    *,
    kind: RecordKind,
    container: Path | None,
    area: Area,
) -> RecordDescriptor | None:
    content = read_document(document)
    if content is None:
        return None
    record_id = resolve_record_id(document, parse_header(content), kind=kind, container=container)
    if record_id is None:
        logger.debug("Skipping %s: no identifier in directory, filename or header", document)
        return None
    return RecordDescriptor(
        id=record_id,
        kind=kind,
        document_path=document,
        container_path=container,
        area=area,
    )


def list_records(root: Path, kind: RecordKind) -> list[RecordDescriptor]:
    """
    List every record of one kind under root.

    For plans root is the metadata root and both plans/ and archive/ are
    scanned. For tasks root is a plan container and its tasks/ directory is
    scanned. Container and legacy layouts are both included. Unreadable,
    binary and unidentifiable documents are skipped.
    """
    records: list[RecordDescriptor] = []
    for area in record_areas(root, kind):
        logger.debug("Scanning %s records in %s", kind, area.directory)
        for document, container in _iter_candidates(area.directory, kind):
            descriptor = describe_document(document, kind=kind, container=container, area=area.area)
            if descriptor is not None:
                records.append(descriptor)
    return records


def list_task_documents(container: Path | None) -> list[Path]:
    """
    Return every Markdown file directly inside a plan's tasks/ directory.

    Unlike ``list_records`` this does not require an identifier or a
    conventional filename, so it is the file set used for task counts,
    progress and archiving.
    """
    if container is None:
        return []
    tasks_dir = container / TASKS_DIR
    return [
        Path(entry.path)
        for entry in _iter_entries(tasks_dir)
        if entry.name.endswith(".md") and _is_file(entry)
    ]
