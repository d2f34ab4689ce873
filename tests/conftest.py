"""Shared test fixtures for mmd-sync."""

from __future__ import annotations

import fnmatch

import pytest

from mmdsync.config.models import ThemeConfig
from mmdsync.domain.models import DiagramType
from mmdsync.errors import RenderError


class MemoryStorage:
    """In-memory Storage with explicit mtimes.

    Writes stamp a monotonically increasing clock so anything written later
    is strictly newer than anything set up before it.
    """

    def __init__(self) -> None:
        self.files: dict[str, tuple[str, int]] = {}
        self.clock = 1_000_000
        self.deleted: list[str] = []

    def set_file(self, path: str, content: str, mtime: int | None = None) -> None:
        if mtime is None:
            self.clock += 1
            mtime = self.clock
        self.files[path] = (content, mtime)

    def read_text(self, path: str) -> str:
        if path not in self.files:
            raise FileNotFoundError(2, "No such file", path)
        return self.files[path][0]

    def write_text(self, path: str, content: str) -> None:
        self.set_file(path, content)

    def exists(self, path: str) -> bool:
        return path in self.files

    def mtime(self, path: str) -> int:
        if path not in self.files:
            raise FileNotFoundError(2, "No such file", path)
        return self.files[path][1]

    def glob(self, pattern: str, root: str = ".") -> list[str]:
        prefix = "" if root in ("", ".") else root.rstrip("/") + "/"
        matches = []
        for path in self.files:
            if not path.startswith(prefix):
                continue
            rel = path[len(prefix):]
            if pattern.startswith("**/"):
                ok = fnmatch.fnmatch(rel.rsplit("/", 1)[-1], pattern[3:])
            else:
                ok = "/" not in rel and fnmatch.fnmatch(rel, pattern)
            if ok:
                matches.append(rel)
        return sorted(matches)

    def mkdir(self, path: str) -> None:
        pass

    def delete(self, path: str) -> None:
        if self.files.pop(path, None) is not None:
            self.deleted.append(path)


class FakeRenderer:
    """Renderer double that records every call."""

    def __init__(self, types: list[DiagramType] | None = None, name: str = "fake") -> None:
        self.name = name
        self.supported_types = frozenset(types if types is not None else DiagramType)
        self.calls: list[str] = []

    def render(self, content: str) -> str:
        self.calls.append(content)
        return f"<svg>{content}</svg>"


class FailingRenderer(FakeRenderer):
    """Renderer double that fails whenever the source contains ``trigger``."""

    def __init__(self, trigger: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.trigger = trigger

    def render(self, content: str) -> str:
        self.calls.append(content)
        if self.trigger in content:
            raise RenderError(self.name, "syntax error", "Parse error on line 2")
        return f"<svg>{content}</svg>"


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def dual_config() -> ThemeConfig:
    return ThemeConfig.model_validate({
        "outputDir": "docs/mmd",
        "themes": {
            "light": {"theme": "base", "themeVariables": {"background": "#ffffff", "primaryColor": "#ddf4ff"}},
            "dark": {"theme": "base", "themeVariables": {"background": "#0d1117", "primaryColor": "#1f3a5f"}},
        },
    })


@pytest.fixture
def single_config(dual_config: ThemeConfig) -> ThemeConfig:
    return dual_config.model_copy(update={"mode": "light"})
