"""Renderer interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from mmdsync.domain.models import DiagramType


@runtime_checkable
class Renderer(Protocol):
    """Turns themed mermaid text into SVG.

    The scheduler routes on ``supported_types`` membership only; any object
    with this shape is interchangeable, test doubles included.
    """

    name: str
    supported_types: frozenset[DiagramType]

    def render(self, content: str) -> str: ...
