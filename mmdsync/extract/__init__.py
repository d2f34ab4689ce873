"""Markdown scanning and anchor replacement."""

from mmdsync.extract.scanner import FenceState, replace_blocks_with_anchors, scan

__all__ = ["FenceState", "replace_blocks_with_anchors", "scan"]
