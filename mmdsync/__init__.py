"""mmd-sync: keep Mermaid diagrams in Markdown rendered and in sync."""

__version__ = "0.1.0"
