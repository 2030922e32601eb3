"""Shared fixtures for PostFinder tests."""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable

import pytest

from postfinder.models import Document

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Factory for in-memory documents."""

    def _make(
        name: str = "post",
        *,
        status: str = "published",
        words: int = 100,
        age_days: float = 1,
        type: str = "note",
        **extra,
    ) -> Document:
        modified = NOW - timedelta(days=age_days)
        return Document(
            path=Path(f"/posts/{name}.mdx"),
            title=extra.pop("title", name),
            word_count=words,
            last_modified=modified,
            created=modified,
            type=type,
            status=status,
            **extra,
        )

    return _make


@pytest.fixture
def write_post() -> Callable[..., Path]:
    """Write an MDX file and optionally backdate its modification time."""

    def _write(path: Path, content: str, *, mtime: float | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _write
