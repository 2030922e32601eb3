"""Corpus statistics."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from postfinder.models import CONTENT_TYPES, Document, Statistics, WordCountDistribution

SHORT_LIMIT = 300
LONG_LIMIT = 1000


def compute_statistics(
    documents: Iterable[Document], now: datetime | None = None
) -> Statistics:
    """Aggregate metrics for a collection. An empty collection gives all zeros."""
    now = now or datetime.now()
    month_start = datetime(now.year, now.month, 1)
    year_start = datetime(now.year, 1, 1)

    posts = list(documents)
    type_breakdown = {name: 0 for name in CONTENT_TYPES}
    distribution = WordCountDistribution()
    for post in posts:
        type_breakdown[post.type] = type_breakdown.get(post.type, 0) + 1
        if post.word_count < SHORT_LIMIT:
            distribution.short += 1
        elif post.word_count <= LONG_LIMIT:
            distribution.medium += 1
        else:
            distribution.long += 1

    posts_this_year = sum(1 for post in posts if post.last_modified >= year_start)

    # Rough 30-day months since January 1st.
    elapsed_days = (now - year_start).total_seconds() / 86400
    months_active = max(1, math.ceil(elapsed_days / 30))

    return Statistics(
        total_posts=len(posts),
        total_words=sum(post.word_count for post in posts),
        draft_count=sum(1 for post in posts if post.is_draft),
        published_count=sum(1 for post in posts if not post.is_draft),
        posts_this_month=sum(1 for post in posts if post.last_modified >= month_start),
        posts_this_year=posts_this_year,
        average_posts_per_month=round(posts_this_year / months_active, 1),
        type_breakdown=type_breakdown,
        word_count_distribution=distribution,
    )


def format_count(value: int) -> str:
    """Compact display for large counts, e.g. 12500 -> 12.5k."""
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return str(value)
