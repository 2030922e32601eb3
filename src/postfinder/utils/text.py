"""Text helpers for measuring the prose in MDX bodies."""

from __future__ import annotations

import re
from typing import List, Pattern, Tuple

# Each step assumes the previous ones already ran.
_CLEANUP_STEPS: List[Tuple[Pattern[str], str]] = [
    # import/export declarations
    (re.compile(r"^import\s+.*?from\s+.*?;?$", re.MULTILINE), ""),
    (re.compile(r"^export\s+.*?;?$", re.MULTILINE), ""),
    # components: keep the inner text, drop self-closing and empty ones
    (re.compile(r"<([A-Z][A-Za-z0-9]*)[^>]*>(.*?)</\1>", re.DOTALL), r"\2"),
    (re.compile(r"<([A-Z][A-Za-z0-9]*)[^>]*/>"), ""),
    (re.compile(r"<([A-Z][A-Za-z0-9]*)[^>]*></\1>"), ""),
    # JSX expressions
    (re.compile(r"\{[^}]*\}"), ""),
    # markdown
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"#{1,6}\s+"), ""),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
]


def strip_markup(content: str) -> str:
    """Remove MDX and Markdown syntax, keeping only readable text."""
    for pattern, replacement in _CLEANUP_STEPS:
        content = pattern.sub(replacement, content)
    return content.strip()


def count_words(content: str) -> int:
    """Count prose words in an MDX body.

    Code blocks and image references are not prose and do not count.
    """
    if not content or not content.strip():
        return 0

    clean = strip_markup(content)
    if not clean:
        return 0
    return len([word for word in re.split(r"\s+", clean) if word])
