"""Pydantic models shared by the scanner, scheduler and injector."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DiagramType(str, Enum):
    """Mermaid diagram families recognised by the classifier."""

    flowchart = "flowchart"
    sequence = "sequence"
    class_ = "class"
    state = "state"
    er = "er"
    c4 = "c4"
    gantt = "gantt"
    pie = "pie"
    gitgraph = "gitgraph"
    mindmap = "mindmap"
    timeline = "timeline"
    quadrant = "quadrant"
    kanban = "kanban"
    requirement = "requirement"
    architecture = "architecture"
    unknown = "unknown"


class DiagramBlock(BaseModel):
    """One fenced mermaid block found in a Markdown document."""

    model_config = ConfigDict(frozen=True)

    content: str
    source_file: str
    start_line: int
    end_line: int
    name: str
    diagram_type: DiagramType


class AnchorRef(BaseModel):
    """A parsed ``<!-- mmd:name -->`` marker."""

    model_config = ConfigDict(frozen=True)

    name: str
    line: int
    source_file: str


class RenderResult(BaseModel):
    """Artifacts written for one re-rendered .mmd file."""

    source_path: str
    artifact_paths: list[str] = Field(default_factory=list)
    diagram_type: DiagramType = DiagramType.unknown
    renderer: str = ""
