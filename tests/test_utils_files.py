"""Tests for file discovery helpers."""

from __future__ import annotations

from pathlib import Path

from postfinder.utils.files import iter_document_paths, scan_documents


class TestIterDocumentPaths:
    """Test iter_document_paths function."""

    def test_directory_with_posts(self, tmp_path: Path) -> None:
        """Should find only MDX files."""
        (tmp_path / "a.mdx").write_text("a")
        (tmp_path / "b.mdx").write_text("b")
        (tmp_path / "notes.md").write_text("md")
        (tmp_path / "readme.txt").write_text("text")

        paths = list(iter_document_paths(tmp_path))

        assert [p.name for p in paths] == ["a.mdx", "b.mdx"]

    def test_nested_directories(self, tmp_path: Path) -> None:
        """Should descend into subdirectories."""
        nested = tmp_path / "essays" / "2026"
        nested.mkdir(parents=True)
        (tmp_path / "root.mdx").write_text("root")
        (nested / "deep.mdx").write_text("deep")

        names = {p.name for p in iter_document_paths(tmp_path)}

        assert names == {"root.mdx", "deep.mdx"}

    def test_excludes_dependency_directories(self, tmp_path: Path) -> None:
        """Should prune node_modules and build output at any depth."""
        for excluded in ("node_modules/pkg", "site/node_modules", ".next/cache", "dist"):
            directory = tmp_path / excluded
            directory.mkdir(parents=True)
            (directory / "vendored.mdx").write_text("x")
        (tmp_path / "site").mkdir(exist_ok=True)
        (tmp_path / "site" / "kept.mdx").write_text("kept")

        paths = list(iter_document_paths(tmp_path))

        assert [p.name for p in paths] == ["kept.mdx"]

    def test_case_insensitive_extension(self, tmp_path: Path) -> None:
        """Should match extensions regardless of case."""
        (tmp_path / "upper.MDX").write_text("x")

        paths = list(iter_document_paths(tmp_path))

        assert len(paths) == 1

    def test_custom_extensions_and_excludes(self, tmp_path: Path) -> None:
        """Extensions and exclusions are configurable."""
        (tmp_path / "vendor").mkdir()
        (tmp_path / "vendor" / "skip.md").write_text("x")
        (tmp_path / "keep.md").write_text("x")
        (tmp_path / "other.mdx").write_text("x")

        paths = list(
            iter_document_paths(tmp_path, extensions=(".md",), exclude_dirs=("vendor",))
        )

        assert [p.name for p in paths] == ["keep.md"]

    def test_stable_order(self, tmp_path: Path) -> None:
        """Files are yielded in sorted order."""
        for name in ("c.mdx", "a.mdx", "b.mdx"):
            (tmp_path / name).write_text(name)

        assert [p.name for p in iter_document_paths(tmp_path)] == ["a.mdx", "b.mdx", "c.mdx"]


class TestScanDocuments:
    """Test scan_documents function."""

    def test_scan_success(self, tmp_path: Path) -> None:
        """Returns paths and no error."""
        (tmp_path / "a.mdx").write_text("a")

        result = scan_documents(tmp_path)

        assert result.ok
        assert result.paths == [tmp_path / "a.mdx"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty directory is not an error."""
        result = scan_documents(tmp_path)

        assert result.ok
        assert result.paths == []

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root is reported, not raised."""
        result = scan_documents(tmp_path / "missing")

        assert not result.ok
        assert result.paths == []
        assert "not found" in result.error

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        """A file root is reported as an error."""
        file_root = tmp_path / "post.mdx"
        file_root.write_text("x")

        result = scan_documents(file_root)

        assert not result.ok
        assert "not a directory" in result.error
