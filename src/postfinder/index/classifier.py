"""Content type, status and draft freshness rules."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from postfinder.models import CONTENT_TYPES, DEFAULT_CONTENT_TYPE

FRESH_DAYS = 30
STALE_DAYS = 180
MIN_WORDS = 300


def resolve_type(value: Any) -> str:
    """Return the declared content type, or the baseline one when unknown."""
    if value in CONTENT_TYPES:
        return value
    return DEFAULT_CONTENT_TYPE


def resolve_status(draft_flag: Any) -> str:
    return "draft" if draft_flag is True else "published"


def days_since(moment: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed since moment."""
    now = now or datetime.now()
    return (now - moment).days


def draft_freshness(
    last_modified: datetime, word_count: int, now: datetime | None = None
) -> str:
    """Classify a draft as fresh, stale or default.

    fresh: modified less than 30 days ago, regardless of length.
    stale: modified more than 180 days ago, or shorter than 300 words.
    default: everything else.
    """
    elapsed = days_since(last_modified, now)
    if elapsed < FRESH_DAYS:
        return "fresh"
    if elapsed > STALE_DAYS or word_count < MIN_WORDS:
        return "stale"
    return "default"
