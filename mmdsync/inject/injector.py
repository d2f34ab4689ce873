"""Rewrite the content that follows each ``<!-- mmd:name -->`` anchor."""

from __future__ import annotations

from mmdsync.domain.models import AnchorRef
from mmdsync.naming import image_block, parse_anchor


def find_anchors(markdown: str, source_file: str) -> list[AnchorRef]:
    """All anchor markers in document order with 1-based line numbers."""
    anchors: list[AnchorRef] = []
    for lineno, line in enumerate(markdown.split("\n"), start=1):
        name = parse_anchor(line)
        if name is not None:
            anchors.append(AnchorRef(name=name, line=lineno, source_file=source_file))
    return anchors


def inject(markdown: str, output_dir: str, *, dual: bool = False) -> str:
    """Replace the block after every anchor with a fresh image reference.

    After a marker, all lines up to the first blank line or the next marker
    are discarded and replaced. Lines elsewhere pass through untouched, so
    running this twice gives the same result.
    """
    lines = markdown.split("\n")
    result: list[str] = []
    i = 0

    while i < len(lines):
        name = parse_anchor(lines[i])
        if name is None:
            result.append(lines[i])
            i += 1
            continue

        result.append(lines[i])
        result.extend(image_block(name, output_dir, dual))
        i += 1
        while i < len(lines):
            following = lines[i]
            if not following.strip() or parse_anchor(following) is not None:
                break
            i += 1

    return "\n".join(result)
