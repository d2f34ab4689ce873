"""Fence-aware extraction of mermaid blocks from Markdown."""

from __future__ import annotations

import re
from enum import Enum

from mmdsync.domain.classifier import classify
from mmdsync.domain.models import DiagramBlock
from mmdsync.naming import anchor_line, diagram_name, image_block

MERMAID_FENCE_RE = re.compile(r"^```mermaid\s*$")
FENCE_CLOSE_RE = re.compile(r"^```\s*$")
TICK_RUN_RE = re.compile(r"^(`{3,})")
BARE_TICK_RUN_RE = re.compile(r"^(`{3,})\s*$")


class FenceState(Enum):
    OUTSIDE = "outside"
    IN_DIAGRAM = "in_diagram"
    IN_OTHER = "in_other"


class _Scanner:
    """Two-mode fence state machine.

    ``other_len`` is only meaningful in IN_OTHER: the tick-run length that
    opened the unrelated fence, which a closing run must reach.
    """

    def __init__(self, source_file: str) -> None:
        self.source_file = source_file
        self.state = FenceState.OUTSIDE
        self.other_len = 0
        self.start_line = 0
        self.content: list[str] = []
        self.blocks: list[DiagramBlock] = []

    def feed(self, lineno: int, line: str) -> None:
        trimmed = line.strip()

        if self.state is FenceState.OUTSIDE:
            if MERMAID_FENCE_RE.match(trimmed):
                self.state = FenceState.IN_DIAGRAM
                self.start_line = lineno
                self.content = []
                return
            run = TICK_RUN_RE.match(trimmed)
            if run:
                self.state = FenceState.IN_OTHER
                self.other_len = len(run.group(1))
            return

        if self.state is FenceState.IN_OTHER:
            run = BARE_TICK_RUN_RE.match(trimmed)
            if run and len(run.group(1)) >= self.other_len:
                self.state = FenceState.OUTSIDE
                self.other_len = 0
            return

        if FENCE_CLOSE_RE.match(trimmed):
            self._emit(lineno)
            self.state = FenceState.OUTSIDE
            return
        self.content.append(line)

    def _emit(self, end_line: int) -> None:
        content = "\n".join(self.content)
        self.blocks.append(
            DiagramBlock(
                content=content,
                source_file=self.source_file,
                start_line=self.start_line,
                end_line=end_line,
                name=diagram_name(self.source_file, len(self.blocks)),
                diagram_type=classify(content),
            )
        )
        self.content = []


def scan(markdown: str, source_file: str) -> list[DiagramBlock]:
    """Extract every closed ```mermaid fence, in document order.

    Fences nested inside an unrelated fence (e.g. a ````markdown example)
    are skipped. An opener without a closer yields no block.
    """
    scanner = _Scanner(source_file)
    for lineno, line in enumerate(markdown.split("\n"), start=1):
        scanner.feed(lineno, line)
    return scanner.blocks


def replace_blocks_with_anchors(
    markdown: str,
    blocks: list[DiagramBlock],
    output_dir: str,
    *,
    dual: bool = True,
) -> str:
    """Swap each fenced block for its anchor and image reference.

    Blocks are applied bottom-up so earlier line numbers stay valid. A blank
    line is inserted after the replacement when the fence was directly
    followed by text, otherwise the injector would swallow that text.
    """
    if not blocks:
        return markdown

    lines = markdown.split("\n")
    for block in sorted(blocks, key=lambda b: b.start_line, reverse=True):
        start = block.start_line - 1
        end = block.end_line
        replacement = [anchor_line(block.name), *image_block(block.name, output_dir, dual)]
        if end < len(lines) and lines[end].strip():
            replacement.append("")
        lines[start:end] = replacement

    return "\n".join(lines)
