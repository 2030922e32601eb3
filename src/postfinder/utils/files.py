"""Utility helpers for discovering post files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from postfinder.config import DEFAULT_EXCLUDE_DIRS, DEFAULT_EXTENSIONS

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanResult:
    paths: List[Path] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def iter_document_paths(
    root: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> Iterator[Path]:
    """Yield matching files under root, pruning excluded directories.

    Directory entries are visited in sorted order so the discovery order is stable
    between runs. Unreadable subdirectories are logged and skipped.
    """
    suffixes = {ext.lower() for ext in extensions}
    excluded = set(exclude_dirs)

    def _on_error(exc: OSError) -> None:
        LOGGER.warning("Skipping unreadable directory %s: %s", exc.filename, exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        for name in sorted(filenames):
            if Path(name).suffix.lower() in suffixes:
                yield Path(dirpath) / name


def scan_documents(
    root: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
) -> ScanResult:
    """Enumerate candidate documents under root without ever raising."""
    root = Path(root)
    if not root.exists():
        LOGGER.error("Root directory not found: %s", root)
        return ScanResult(error=f"Root directory not found: {root}")
    if not root.is_dir():
        LOGGER.error("Root is not a directory: %s", root)
        return ScanResult(error=f"Root is not a directory: {root}")
    try:
        os.scandir(root).close()
    except OSError as exc:
        LOGGER.error("Cannot read root directory %s: %s", root, exc)
        return ScanResult(error=f"Cannot read root directory {root}: {exc}")

    paths = list(
        iter_document_paths(root, extensions=extensions, exclude_dirs=exclude_dirs)
    )
    return ScanResult(paths=paths)
