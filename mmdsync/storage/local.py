"""Local filesystem storage."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Directories never searched for Markdown or diagram sources
IGNORED_DIRS = {".git", "node_modules", "__pycache__", ".venv", "venv", ".tox", "dist", "build"}


class LocalStorage:
    """Storage backed by pathlib, resolving relative paths against ``root``.

    Glob results are returned relative to the glob root, using forward
    slashes, sorted for stable output.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def _path(self, path: str) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    def read_text(self, path: str) -> str:
        return self._path(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        dest = self._path(path)
        dest.write_text(content, encoding="utf-8")
        logger.debug("wrote %s (%d bytes)", dest, len(content))

    def exists(self, path: str) -> bool:
        return self._path(path).is_file()

    def mtime(self, path: str) -> int:
        return self._path(path).stat().st_mtime_ns // 1_000_000

    def glob(self, pattern: str, root: str = ".") -> list[str]:
        base = self._path(root)
        if not base.is_dir():
            return []
        matches = []
        for p in base.glob(pattern):
            rel = p.relative_to(base)
            if any(part in IGNORED_DIRS for part in rel.parts[:-1]):
                continue
            if p.is_file():
                matches.append(rel.as_posix())
        return sorted(matches)

    def mkdir(self, path: str) -> None:
        self._path(path).mkdir(parents=True, exist_ok=True)

    def delete(self, path: str) -> None:
        self._path(path).unlink(missing_ok=True)
