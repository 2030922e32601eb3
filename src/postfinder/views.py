"""Renderer-agnostic list rows.

A listing is a sequence of rows of four kinds. Front ends switch on ``row.kind``
through :func:`render_row` instead of subclassing per row type.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Literal, Optional, Sequence, Tuple, Union

from postfinder.index.classifier import days_since, draft_freshness
from postfinder.models import Document

TITLE_LIMIT = 28


@dataclass(frozen=True, slots=True)
class DocumentRow:
    document: Document
    freshness: Optional[str] = None
    kind: Literal["document"] = "document"


@dataclass(frozen=True, slots=True)
class LoadingRow:
    message: str = "Loading posts..."
    kind: Literal["loading"] = "loading"


@dataclass(frozen=True, slots=True)
class ErrorRow:
    message: str
    kind: Literal["error"] = "error"


@dataclass(frozen=True, slots=True)
class SectionRow:
    label: str
    count: int
    kind: Literal["section"] = "section"


Row = Union[DocumentRow, LoadingRow, ErrorRow, SectionRow]


def truncate_title(title: str, limit: int = TITLE_LIMIT) -> str:
    return title if len(title) <= limit else title[:limit] + "..."


def age_label(moment: datetime, now: datetime | None = None) -> str:
    """Compact age such as ``3d``, ``2w``, ``5mo`` or ``1y``."""
    days = days_since(moment, now)
    if days < 1:
        return "today"
    if days < 14:
        return f"{days}d"
    if days < 60:
        return f"{days // 7}w"
    if days < 365:
        return f"{days // 30}mo"
    return f"{days // 365}y"


def build_rows(
    documents: Sequence[Document],
    *,
    grouped: bool = False,
    error: str | None = None,
    loading: bool = False,
    now: datetime | None = None,
) -> List[Row]:
    """Rows for a listing; drafts carry their freshness."""
    if loading:
        return [LoadingRow()]
    if error is not None:
        return [ErrorRow(error)]

    now = now or datetime.now()

    def _row(document: Document) -> DocumentRow:
        freshness = None
        if document.is_draft:
            freshness = draft_freshness(document.last_modified, document.word_count, now)
        return DocumentRow(document, freshness)

    if not grouped:
        return [_row(document) for document in documents]

    rows: List[Row] = []
    for label, status in (("Drafts", "draft"), ("Published", "published")):
        section = [document for document in documents if document.status == status]
        if section:
            rows.append(SectionRow(label, len(section)))
            rows.extend(_row(document) for document in section)
    return rows


def render_row(row: Row, now: datetime | None = None) -> Tuple[str, ...]:
    """Flatten a row into (marker, title, type, words, age) cells."""
    if row.kind == "loading":
        return ("…", row.message, "", "", "")
    if row.kind == "error":
        return ("!", row.message, "", "", "")
    if row.kind == "section":
        return ("", f"{row.label} ({row.count})", "", "", "")

    document = row.document
    marker = row.freshness or ("draft" if document.is_draft else "published")
    return (
        marker,
        truncate_title(document.title),
        document.type.capitalize(),
        f"{document.word_count}w",
        age_label(document.last_modified, now),
    )
