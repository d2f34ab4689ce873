"""Core types and diagram classification."""

from mmdsync.domain.classifier import DIAGRAM_PATTERNS, classify
from mmdsync.domain.models import AnchorRef, DiagramBlock, DiagramType, RenderResult

__all__ = [
    "AnchorRef",
    "DIAGRAM_PATTERNS",
    "DiagramBlock",
    "DiagramType",
    "RenderResult",
    "classify",
]
