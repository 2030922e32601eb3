"""Turn a single post file into a Document."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from postfinder.index.classifier import resolve_status, resolve_type
from postfinder.ingestion.frontmatter import PostFrontmatter, parse_frontmatter
from postfinder.models import Document
from postfinder.utils.text import count_words

LOGGER = logging.getLogger(__name__)


def _created_time(stat: os.stat_result) -> float:
    return getattr(stat, "st_birthtime", stat.st_ctime)


def load_document(path: Path) -> Document:
    """Read, parse and classify one post.

    Raises OSError when the file cannot be read and FrontmatterError when its
    header is malformed.
    """
    path = Path(path).resolve()
    raw = path.read_bytes()
    stat = path.stat()

    header, body = parse_frontmatter(raw)
    meta = PostFrontmatter.model_validate(header)
    LOGGER.debug("Parsed %s (%d header fields)", path, len(header))

    return Document(
        path=path,
        title=meta.title or path.stem,
        word_count=count_words(body),
        last_modified=datetime.fromtimestamp(stat.st_mtime),
        created=datetime.fromtimestamp(_created_time(stat)),
        type=resolve_type(meta.type),
        status=resolve_status(meta.draft),
        slug=meta.slug,
        tags=meta.tags,
        description=meta.description,
        published_date=meta.published_date,
    )
