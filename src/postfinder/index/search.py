"""Query evaluation over a post collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Sequence, Tuple

from postfinder.index.classifier import draft_freshness
from postfinder.models import CONTENT_TYPES, STATUSES, Document

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Query:
    """Conjunction of optional predicates. Empty fields impose no constraint."""

    text: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @classmethod
    def from_strings(
        cls,
        text: str | None = None,
        status: str | None = None,
        content_type: str | None = None,
        since: str | None = None,
        until: str | None = None,
    ) -> "Query":
        """Build a query from loose user input.

        Dates are ISO strings; a bare ``until`` date covers that whole day.
        Unparseable dates leave the bound unset.
        """
        return cls(
            text=(text or "").strip() or None,
            status=(status or "").strip().lower() or None,
            type=(content_type or "").strip().lower() or None,
            start=_parse_bound(since, end_of_day=False),
            end=_parse_bound(until, end_of_day=True),
        )

    @property
    def text_active(self) -> bool:
        return bool(self.text and self.text.strip())

    @property
    def status_active(self) -> bool:
        return self.status in STATUSES

    @property
    def type_active(self) -> bool:
        return self.type in CONTENT_TYPES

    @property
    def range_active(self) -> bool:
        if self.start is None and self.end is None:
            return False
        if self.start is not None and self.end is not None:
            return self.start <= self.end
        return True

    def is_empty(self) -> bool:
        return not (
            self.text_active or self.status_active or self.type_active or self.range_active
        )

    def describe(self) -> List[Tuple[str, str]]:
        """Active predicates as (label, value) pairs for display."""
        active: List[Tuple[str, str]] = []
        if self.text_active:
            active.append(("Search", self.text or ""))
        if self.status_active:
            active.append(("Status", self.status or ""))
        if self.type_active:
            active.append(("Type", self.type or ""))
        if self.range_active:
            start = self.start.date().isoformat() if self.start else "..."
            end = self.end.date().isoformat() if self.end else "..."
            active.append(("Date", f"{start} → {end}"))
        return active


def _parse_bound(value: str | None, *, end_of_day: bool) -> Optional[datetime]:
    if not value or not value.strip():
        return None
    raw = value.strip()
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            return datetime.combine(day, time.max if end_of_day else time.min)
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        LOGGER.warning("Ignoring unparseable date %r", value)
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def matches_text(document: Document, text: str) -> bool:
    needle = text.lower()
    if needle in document.title.lower() or needle in document.type.lower():
        return True
    if document.description and needle in document.description.lower():
        return True
    return any(needle in tag.lower() for tag in document.tags or ())


def matches(document: Document, query: Query) -> bool:
    if query.text_active and not matches_text(document, query.text or ""):
        return False
    if query.status_active and document.status != query.status:
        return False
    if query.type_active and document.type != query.type:
        return False
    if query.range_active:
        moment = document.effective_date
        if query.start is not None and moment < query.start:
            return False
        if query.end is not None and moment > query.end:
            return False
    return True


def apply_query(documents: Sequence[Document], query: Query | None) -> List[Document]:
    """Return the documents matching every active predicate, in input order."""
    if query is None or query.is_empty():
        return list(documents)
    return [document for document in documents if matches(document, query)]


def sort_documents(documents: Iterable[Document]) -> List[Document]:
    """Drafts first, then most recently modified first.

    The sort is stable, so equal timestamps keep their discovery order.
    """
    return sorted(
        documents,
        key=lambda doc: (not doc.is_draft, -doc.last_modified.timestamp()),
    )


def available_types(documents: Iterable[Document]) -> List[str]:
    return sorted({document.type for document in documents})


def draft_entries(
    documents: Iterable[Document], now: datetime | None = None
) -> List[Tuple[Document, str]]:
    """Drafts paired with their freshness at the given moment."""
    now = now or datetime.now()
    return [
        (document, draft_freshness(document.last_modified, document.word_count, now))
        for document in documents
        if document.is_draft
    ]
