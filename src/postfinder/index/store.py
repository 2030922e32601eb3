"""In-memory owner of the current post collection."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Literal, Optional

from postfinder.config import AppConfig
from postfinder.index.indexer import BuildResult, IndexStats, Indexer
from postfinder.index.mutations import MutationResult, demote, promote
from postfinder.index.search import Query, apply_query
from postfinder.index.statistics import compute_statistics
from postfinder.models import Document, Statistics

LOGGER = logging.getLogger(__name__)

EventKind = Literal["collection_replaced", "query_changed"]
FileEventKind = Literal["created", "modified", "deleted"]


@dataclass(frozen=True, slots=True)
class StoreEvent:
    kind: EventKind
    generation: int


@dataclass(frozen=True, slots=True)
class FileEvent:
    kind: FileEventKind
    path: Path


@dataclass(slots=True)
class RebuildResult:
    generation: int
    documents: List[Document] = field(default_factory=list)
    stats: IndexStats = field(default_factory=IndexStats)
    error: Optional[str] = None
    superseded: bool = False

    @property
    def installed(self) -> bool:
        return not self.superseded

    @property
    def ok(self) -> bool:
        return self.installed and self.error is None


Listener = Callable[[StoreEvent], None]


class CollectionStore:
    """Holds one generation of documents plus the active query.

    Every rebuild replaces the whole collection. A rebuild started while another
    is in flight supersedes it: the older one is cancelled and its result is never
    installed, so the collection always comes from the most recently started rebuild.
    """

    def __init__(
        self,
        root: Path,
        *,
        config: AppConfig | None = None,
        indexer: Indexer | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config or AppConfig(root=self.root)
        self.indexer = indexer or Indexer(self.config)
        self._lock = threading.Lock()
        self._documents: List[Document] = []
        self._query = Query()
        self._started = 0
        self._installed = 0
        self._cancel: threading.Event | None = None
        self._listeners: List[Listener] = []

    @property
    def generation(self) -> int:
        return self._installed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, event: StoreEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                LOGGER.exception("Listener failed handling %s", event.kind)

    def rebuild(self) -> RebuildResult:
        """Rescan the root and install the new collection if still current."""
        cancel = threading.Event()
        with self._lock:
            self._started += 1
            generation = self._started
            if self._cancel is not None:
                self._cancel.set()
            self._cancel = cancel

        LOGGER.info("Rebuilding collection from %s (generation %d)", self.root, generation)
        result: BuildResult = self.indexer.build(self.root, cancel=cancel)

        with self._lock:
            if generation != self._started or result.cancelled:
                LOGGER.info("Generation %d superseded, result discarded", generation)
                return RebuildResult(generation=generation, superseded=True)
            self._cancel = None
            # A failed scan still replaces the collection: posts under an
            # unreadable root are gone.
            self._documents = result.documents
            self._installed = generation

        if result.error is not None:
            LOGGER.warning("Installed empty collection: %s", result.error)
        self._publish(StoreEvent("collection_replaced", generation))
        return RebuildResult(
            generation=generation,
            documents=result.documents,
            stats=result.stats,
            error=result.error,
        )

    def notify(self, event: FileEvent) -> Optional[RebuildResult]:
        """Treat a file-system change as a rebuild trigger."""
        if Path(event.path).suffix.lower() not in self.config.extensions:
            return None
        LOGGER.debug("File %s: %s", event.kind, event.path)
        return self.rebuild()

    def current_collection(self) -> List[Document]:
        with self._lock:
            return list(self._documents)

    @property
    def query(self) -> Query:
        return self._query

    def set_query(self, query: Query | None) -> None:
        self._query = query or Query()
        self._publish(StoreEvent("query_changed", self._installed))

    def clear_query(self) -> None:
        self.set_query(None)

    def apply_query(self, query: Query | None = None) -> List[Document]:
        """Filter the current collection with query, or with the active query."""
        return apply_query(self.current_collection(), query or self._query)

    def statistics(self) -> Statistics:
        return compute_statistics(self.current_collection())

    def promote(self, path: Path) -> MutationResult:
        result = promote(path)
        if result.ok:
            self.rebuild()
        return result

    def demote(self, path: Path) -> MutationResult:
        result = demote(path)
        if result.ok:
            self.rebuild()
        return result
