"""First-line keyword classification of Mermaid source text."""

from __future__ import annotations

import re

from mmdsync.domain.models import DiagramType

COMMENT_PREFIX = "%%"

# Order matters: more specific patterns must come before generic ones.
DIAGRAM_PATTERNS: tuple[tuple[re.Pattern[str], DiagramType], ...] = (
    (re.compile(r"^C4(Context|Container|Component|Deployment|Dynamic)\b"), DiagramType.c4),
    (re.compile(r"^architecture-beta\b"), DiagramType.architecture),
    (re.compile(r"^sequenceDiagram\b"), DiagramType.sequence),
    (re.compile(r"^classDiagram\b"), DiagramType.class_),
    (re.compile(r"^stateDiagram(-v2)?\b"), DiagramType.state),
    (re.compile(r"^erDiagram\b"), DiagramType.er),
    (re.compile(r"^(flowchart|graph)\b"), DiagramType.flowchart),
    (re.compile(r"^gantt\b"), DiagramType.gantt),
    (re.compile(r"^pie\b"), DiagramType.pie),
    (re.compile(r"^gitGraph\b"), DiagramType.gitgraph),
    (re.compile(r"^mindmap\b"), DiagramType.mindmap),
    (re.compile(r"^timeline\b"), DiagramType.timeline),
    (re.compile(r"^quadrantChart\b"), DiagramType.quadrant),
    (re.compile(r"^kanban\b"), DiagramType.kanban),
    (re.compile(r"^requirementDiagram\b"), DiagramType.requirement),
)


def classify(content: str) -> DiagramType:
    """Detect the diagram type from the first substantive line.

    Blank lines and ``%%`` comment lines (including init directives) are
    skipped. Only the first remaining line is tested; if it matches nothing
    the result is ``unknown`` without looking further.
    """
    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith(COMMENT_PREFIX):
            continue
        for pattern, diagram_type in DIAGRAM_PATTERNS:
            if pattern.match(trimmed):
                return diagram_type
        return DiagramType.unknown
    return DiagramType.unknown
