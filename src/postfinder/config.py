"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".mdx",)
DEFAULT_EXCLUDE_DIRS: Tuple[str, ...] = (
    "node_modules",
    ".git",
    ".next",
    "dist",
    "build",
    ".cache",
    ".venv",
)


@dataclass(slots=True)
class AppConfig:
    root: Path | None = None
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    max_workers: int = 8

    def __post_init__(self) -> None:
        if self.root is None:
            self.root = Path(".")
        self.extensions = tuple(ext.lower() for ext in self.extensions)
        if self.max_workers < 1:
            self.max_workers = 1

    def resolve_root(self, base_dir: Path | None = None) -> Path:
        if self.root is None:
            self.root = Path(".")
        if Path(self.root).is_absolute() or base_dir is None:
            return Path(self.root)
        return base_dir / self.root
