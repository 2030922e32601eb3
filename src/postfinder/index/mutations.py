"""Header rewrites that flip a post between draft and published."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from postfinder.ingestion.frontmatter import (
    FrontmatterError,
    detect_newline,
    parse_frontmatter,
    render_frontmatter,
)

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class MutationResult:
    path: Path
    ok: bool
    error: Optional[str] = None


def _atomic_write(path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        # mkstemp creates 0600 files; keep the post's own permissions.
        shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _rewrite_header(
    path: Path, action: str, edit: Callable[[Dict[Any, Any]], None]
) -> MutationResult:
    path = Path(path)
    try:
        raw = path.read_bytes()
        header, body = parse_frontmatter(raw)
    except (OSError, FrontmatterError) as exc:
        LOGGER.error("Cannot %s %s: %s", action, path, exc)
        return MutationResult(path=path, ok=False, error=str(exc))

    edit(header)

    try:
        _atomic_write(path, render_frontmatter(header, body, detect_newline(raw)))
    except OSError as exc:
        LOGGER.error("Failed to write %s: %s", path, exc)
        return MutationResult(path=path, ok=False, error=str(exc))

    LOGGER.info("%s: %s", action.capitalize(), path.name)
    return MutationResult(path=path, ok=True)


def promote(path: Path, *, today: date | None = None) -> MutationResult:
    """Publish a draft: drop the draft flag and stamp a publication date if missing."""
    stamp = today or date.today()

    def _edit(header: Dict[Any, Any]) -> None:
        header.pop("draft", None)
        if not header.get("publishedDate") and not header.get("date"):
            header["publishedDate"] = stamp

    return _rewrite_header(path, "promote", _edit)


def demote(path: Path) -> MutationResult:
    """Turn a post back into a draft. Any publication date is kept."""

    def _edit(header: Dict[Any, Any]) -> None:
        header["draft"] = True

    return _rewrite_header(path, "demote", _edit)
