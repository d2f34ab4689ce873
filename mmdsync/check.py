"""Lint for inline mermaid blocks left in documents that already use anchors."""

from __future__ import annotations

from pydantic import BaseModel

from mmdsync.extract.scanner import scan
from mmdsync.naming import parse_anchor


class CheckWarning(BaseModel):
    source_file: str
    line: int
    message: str


def check_orphaned_blocks(markdown: str, source_file: str) -> list[CheckWarning]:
    """Warn about each inline mermaid block in a file that has anchors.

    Files without any anchor are left alone: they have simply not been
    extracted yet.
    """
    if not any(parse_anchor(line) for line in markdown.split("\n")):
        return []

    return [
        CheckWarning(
            source_file=source_file,
            line=block.start_line,
            message=(
                f"Found inline Mermaid block at line {block.start_line}. "
                "Run 'mmd extract' to convert to .mmd file."
            ),
        )
        for block in scan(markdown, source_file)
    ]
