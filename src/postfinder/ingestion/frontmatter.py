"""YAML front matter parsing and rendering.

Posts open with a ``---`` delimited YAML header. The header is first decoded into an
open mapping (unknown keys survive, so the file can be written back faithfully) and
then projected onto :class:`PostFrontmatter`, which applies a default rule per field and
never rejects a value.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, model_validator

from postfinder.models import CONTENT_TYPES, DEFAULT_CONTENT_TYPE

DELIMITER = "---"
_CLOSING_DELIMITERS = ("---", "...")


class FrontmatterError(ValueError):
    """Raised when a post header cannot be decoded."""


def split_frontmatter(text: str) -> Tuple[Dict[Any, Any], str]:
    """Split raw post text into (header mapping, body).

    Text without an opening delimiter is all body. An opening delimiter without a
    closing one, invalid YAML, or a non-mapping header raise FrontmatterError.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    for index in range(1, len(lines)):
        if lines[index].strip() in _CLOSING_DELIMITERS:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        raise FrontmatterError("Unterminated front matter header")

    try:
        data = yaml.safe_load(header)
    except (yaml.YAMLError, ValueError) as exc:
        # Out-of-range timestamps surface from the constructor as ValueError.
        raise FrontmatterError(f"Invalid YAML header: {exc}") from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data, body


def parse_frontmatter(raw: bytes) -> Tuple[Dict[Any, Any], str]:
    """Decode UTF-8 bytes and split them into header and body."""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FrontmatterError(f"File is not valid UTF-8: {exc}") from exc
    return split_frontmatter(text)


def detect_newline(raw: bytes) -> str:
    """Line ending used by the first line of raw post bytes."""
    first_break = raw.find(b"\n")
    if first_break > 0 and raw[first_break - 1 : first_break] == b"\r":
        return "\r\n"
    return "\n"


def render_frontmatter(data: Dict[Any, Any], body: str, newline: str = "\n") -> str:
    """Serialize a header mapping and body back into post text."""
    header = ""
    if data:
        header = yaml.safe_dump(
            data,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            line_break=newline,
        )
    return f"{DELIMITER}{newline}{header}{DELIMITER}{newline}{body}"


def coerce_datetime(value: Any) -> Optional[datetime]:
    """Normalise a header date into a naive local datetime, or None."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            return coerce_datetime(datetime.fromisoformat(raw))
        except ValueError:
            return None
    return None


def _coerce_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, (bool, int, float, date)):
        return str(value)
    return None


def _coerce_tags(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        return [value] if value.strip() else None
    if isinstance(value, (list, tuple)):
        return [str(tag) for tag in value if tag is not None]
    return None


class PostFrontmatter(BaseModel):
    """Typed view of the header fields the engine understands."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: Optional[str] = None
    type: str = DEFAULT_CONTENT_TYPE
    draft: bool = False
    slug: Optional[str] = None
    tags: Optional[List[str]] = None
    description: Optional[str] = None
    published_date: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _project(cls, data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return {}

        title = _coerce_text(data.get("title")) or _coerce_text(data.get("name"))
        content_type = data.get("type")
        if content_type not in CONTENT_TYPES:
            content_type = DEFAULT_CONTENT_TYPE

        published = coerce_datetime(data.get("publishedDate"))
        if published is None:
            published = coerce_datetime(data.get("date"))

        return {
            "title": title,
            "type": content_type,
            # Only a real boolean true marks a draft; "true" strings do not.
            "draft": data.get("draft") is True,
            "slug": _coerce_text(data.get("slug")),
            "tags": _coerce_tags(data.get("tags")),
            "description": _coerce_text(data.get("description")),
            "published_date": published,
        }
