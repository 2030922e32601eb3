"""Collection building pipeline."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from postfinder.config import AppConfig
from postfinder.index.search import sort_documents
from postfinder.ingestion.loader import load_document
from postfinder.models import Document
from postfinder.utils.files import scan_documents

LOGGER = logging.getLogger(__name__)


class BuildCancelled(Exception):
    """Raised inside a build when a newer rebuild has superseded it."""


@dataclass(slots=True)
class IndexStats:
    loaded: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "loaded":
            self.loaded += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


@dataclass(slots=True)
class BuildResult:
    documents: List[Document] = field(default_factory=list)
    stats: IndexStats = field(default_factory=IndexStats)
    error: Optional[str] = None
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.cancelled


class Indexer:
    """Coordinates discovery, parsing and ordering of one collection."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()

    def build(
        self, root: Path | None = None, *, cancel: threading.Event | None = None
    ) -> BuildResult:
        """Scan root and load every post found there.

        The returned collection is complete or absent: cancellation discards
        everything loaded so far.
        """
        root = Path(root) if root is not None else self.config.resolve_root(Path.cwd())
        scan = scan_documents(
            root,
            extensions=self.config.extensions,
            exclude_dirs=self.config.exclude_dirs,
        )
        if not scan.ok:
            return BuildResult(error=scan.error)
        if not scan.paths:
            LOGGER.warning("No posts found under %s", root)
            return BuildResult()

        try:
            return self.load(scan.paths, cancel=cancel)
        except BuildCancelled:
            LOGGER.info("Rebuild of %s superseded, discarding partial results", root)
            return BuildResult(cancelled=True)

    def load(
        self, paths: Sequence[Path], *, cancel: threading.Event | None = None
    ) -> BuildResult:
        """Load paths concurrently, keeping discovery order and unique paths."""
        stats = IndexStats()
        documents: List[Document] = []
        seen: set[Path] = set()

        def _load(path: Path) -> Document | Exception:
            if cancel is not None and cancel.is_set():
                raise BuildCancelled()
            try:
                return load_document(path)
            except Exception as exc:
                return exc

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            outcomes = list(pool.map(_load, paths))

        if cancel is not None and cancel.is_set():
            raise BuildCancelled()

        for path, outcome in zip(paths, outcomes):
            if isinstance(outcome, Exception):
                LOGGER.error("Failed to parse %s: %s", path, outcome)
                stats.increment("failed", path)
                continue
            if outcome.path in seen:
                LOGGER.debug("Skipping duplicate path %s", outcome.path)
                stats.increment("skipped", path)
                continue
            seen.add(outcome.path)
            documents.append(outcome)
            stats.increment("loaded", path)

        LOGGER.info(
            "Loaded %d posts (%d skipped, %d failed)",
            stats.loaded,
            stats.skipped,
            stats.failed,
        )
        return BuildResult(documents=sort_documents(documents), stats=stats)
