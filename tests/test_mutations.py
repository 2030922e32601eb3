"""Tests for promote and demote."""

from __future__ import annotations

import stat
from datetime import date, datetime
from pathlib import Path
from unittest.mock import patch

from postfinder.index.mutations import demote, promote
from postfinder.ingestion.frontmatter import split_frontmatter
from postfinder.ingestion.loader import load_document


def _header(path: Path) -> dict:
    return split_frontmatter(path.read_text(encoding="utf-8"))[0]


class TestPromote:
    """Test promote function."""

    def test_removes_draft_and_stamps_date(self, tmp_path: Path, write_post) -> None:
        path = write_post(tmp_path / "a.mdx", "---\ntitle: A\ndraft: true\n---\nBody\n")

        result = promote(path, today=date(2026, 10, 19))

        assert result.ok
        assert _header(path) == {"title": "A", "publishedDate": date(2026, 10, 19)}
        assert load_document(path).status == "published"

    def test_keeps_existing_published_date(self, tmp_path: Path, write_post) -> None:
        path = write_post(
            tmp_path / "a.mdx", "---\ndraft: true\npublishedDate: 2025-01-01\n---\nBody"
        )

        promote(path, today=date(2026, 10, 19))

        assert _header(path) == {"publishedDate": date(2025, 1, 1)}

    def test_generic_date_counts_as_published_date(self, tmp_path: Path, write_post) -> None:
        path = write_post(tmp_path / "a.mdx", "---\ndraft: true\ndate: 2025-01-01\n---\nBody")

        promote(path, today=date(2026, 10, 19))

        assert "publishedDate" not in _header(path)

    def test_preserves_body_and_unknown_fields(self, tmp_path: Path, write_post) -> None:
        body = "# Heading\n\n<Note>Keep me</Note>\n"
        path = write_post(tmp_path / "a.mdx", f"---\nlayout: wide\ndraft: true\n---\n{body}")

        promote(path, today=date(2026, 10, 19))

        header, new_body = split_frontmatter(path.read_text(encoding="utf-8"))
        assert header["layout"] == "wide"
        assert new_body == body

    def test_file_without_header(self, tmp_path: Path, write_post) -> None:
        path = write_post(tmp_path / "a.mdx", "Only body")

        result = promote(path, today=date(2026, 10, 19))

        assert result.ok
        assert _header(path) == {"publishedDate": date(2026, 10, 19)}

    def test_missing_file(self, tmp_path: Path) -> None:
        result = promote(tmp_path / "missing.mdx")

        assert not result.ok
        assert result.error

    def test_malformed_header_leaves_file_untouched(self, tmp_path: Path, write_post) -> None:
        original = "---\ntitle: [broken\n---\nBody"
        path = write_post(tmp_path / "a.mdx", original)

        result = promote(path)

        assert not result.ok
        assert path.read_text(encoding="utf-8") == original

    def test_write_failure_is_reported(self, tmp_path: Path, write_post) -> None:
        original = "---\ndraft: true\n---\nBody"
        path = write_post(tmp_path / "a.mdx", original)

        with patch("postfinder.index.mutations.os.replace", side_effect=OSError("disk full")):
            result = promote(path)

        assert not result.ok
        assert "disk full" in result.error
        assert path.read_text(encoding="utf-8") == original
        assert list(tmp_path.iterdir()) == [path]

    def test_keeps_file_permissions(self, tmp_path: Path, write_post) -> None:
        path = write_post(tmp_path / "a.mdx", "---\ndraft: true\n---\nBody")
        path.chmod(0o644)

        promote(path, today=date(2026, 10, 19))

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_keeps_crlf_line_endings(self, tmp_path: Path) -> None:
        path = tmp_path / "a.mdx"
        path.write_bytes(b"---\r\ntitle: A\r\ndraft: true\r\n---\r\nLine one\r\nLine two\r\n")

        promote(path, today=date(2026, 10, 19))

        assert path.read_bytes() == (
            b"---\r\ntitle: A\r\npublishedDate: 2026-10-19\r\n---\r\nLine one\r\nLine two\r\n"
        )


class TestDemote:
    """Test demote function."""

    def test_sets_draft_flag(self, tmp_path: Path, write_post) -> None:
        path = write_post(tmp_path / "a.mdx", "---\ntitle: A\n---\nBody")

        result = demote(path)

        assert result.ok
        assert _header(path) == {"title": "A", "draft": True}
        assert load_document(path).status == "draft"

    def test_overwrites_non_boolean_draft(self, tmp_path: Path, write_post) -> None:
        path = write_post(tmp_path / "a.mdx", '---\ndraft: "yes"\n---\nBody')

        demote(path)

        assert _header(path)["draft"] is True

    def test_promote_then_demote_keeps_published_date(self, tmp_path: Path, write_post) -> None:
        """Demote restores draft status but not the missing publication date."""
        path = write_post(tmp_path / "a.mdx", "---\ntitle: A\ndraft: true\n---\nBody")

        promote(path, today=date(2026, 10, 19))
        demote(path)

        document = load_document(path)
        assert document.status == "draft"
        assert document.published_date == datetime(2026, 10, 19)

    def test_missing_file(self, tmp_path: Path) -> None:
        assert not demote(tmp_path / "missing.mdx").ok

    def test_out_of_range_date_is_reported(self, tmp_path: Path, write_post) -> None:
        original = "---\ndate: 2024-13-45\n---\nBody"
        path = write_post(tmp_path / "a.mdx", original)

        result = demote(path)

        assert not result.ok
        assert "month" in result.error
        assert path.read_text(encoding="utf-8") == original
