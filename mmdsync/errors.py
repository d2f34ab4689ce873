"""Exceptions raised by the mmd-sync engine."""

from __future__ import annotations


class MmdError(Exception):
    """Base class for all mmd-sync failures."""


class RenderError(MmdError):
    """A renderer backend failed to produce output for one diagram."""

    def __init__(self, renderer: str, message: str, diagnostics: str = "") -> None:
        self.renderer = renderer
        self.diagnostics = diagnostics
        detail = f"{renderer} render failed: {message}"
        if diagnostics:
            detail = f"{detail}\n{diagnostics.strip()}"
        super().__init__(detail)


class DiagramSourceNotFound(MmdError):
    """An explicitly named .mmd file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Diagram source not found: {path}")


class ConfigError(MmdError):
    """Raised by strict config loading when .mermaid.json is unusable."""
