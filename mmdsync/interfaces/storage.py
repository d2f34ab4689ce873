"""Storage interface used by the pipeline phases."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Storage(Protocol):
    """Minimal file access the engine needs. Paths are POSIX-style strings."""

    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, content: str) -> None: ...

    def exists(self, path: str) -> bool: ...

    def mtime(self, path: str) -> int:
        """Modification time in milliseconds since the epoch."""
        ...

    def glob(self, pattern: str, root: str = ".") -> list[str]: ...

    def mkdir(self, path: str) -> None: ...

    def delete(self, path: str) -> None:
        """Remove a file; a missing file is not an error."""
        ...
