"""Staleness checks and renderer routing."""

from mmdsync.render.scheduler import (
    config_mtime,
    is_stale,
    planned_artifacts,
    prepend_theme_init,
    render_diagrams,
    render_one,
    select_renderer,
)

__all__ = [
    "config_mtime",
    "is_stale",
    "planned_artifacts",
    "prepend_theme_init",
    "render_diagrams",
    "render_one",
    "select_renderer",
]
