"""Core PostFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

ContentType = Literal["note", "essay", "smidgeon", "now", "pattern", "talk"]
Status = Literal["draft", "published"]
DraftFreshness = Literal["fresh", "stale", "default"]

CONTENT_TYPES: Tuple[str, ...] = ("note", "essay", "smidgeon", "now", "pattern", "talk")
DEFAULT_CONTENT_TYPE = "note"
STATUSES: Tuple[str, ...] = ("draft", "published")


@dataclass(slots=True)
class Document:
    """A single post as seen by the most recent rebuild."""

    path: Path
    title: str
    word_count: int
    last_modified: datetime
    created: datetime
    type: str = DEFAULT_CONTENT_TYPE
    status: str = "published"
    slug: Optional[str] = None
    tags: Optional[List[str]] = None
    description: Optional[str] = None
    published_date: Optional[datetime] = None

    @property
    def is_draft(self) -> bool:
        return self.status == "draft"

    @property
    def effective_date(self) -> datetime:
        """Date used for range filtering."""
        return self.published_date or self.last_modified


@dataclass(slots=True)
class WordCountDistribution:
    short: int = 0
    medium: int = 0
    long: int = 0

    def total(self) -> int:
        return self.short + self.medium + self.long


@dataclass(slots=True)
class Statistics:
    """Corpus-level metrics derived from one collection."""

    total_posts: int = 0
    total_words: int = 0
    draft_count: int = 0
    published_count: int = 0
    posts_this_month: int = 0
    posts_this_year: int = 0
    average_posts_per_month: float = 0.0
    type_breakdown: Dict[str, int] = field(
        default_factory=lambda: {name: 0 for name in CONTENT_TYPES}
    )
    word_count_distribution: WordCountDistribution = field(
        default_factory=WordCountDistribution
    )
