"""Renderer backends and the factory that builds them from config."""

from __future__ import annotations

import logging

from mmdsync.config.models import KNOWN_RENDERERS, ThemeConfig
from mmdsync.interfaces.renderer import Renderer
from mmdsync.render.renderers.kroki import CORE_TYPES, KrokiRenderer
from mmdsync.render.renderers.mmdc import ALL_TYPES, MmdcRenderer

logger = logging.getLogger(__name__)


def create_renderer(name: str, config: ThemeConfig, *, default: str = "kroki") -> Renderer:
    """Build a renderer by its config name ("kroki" or "mmdc").

    Unknown names log a warning and build ``default`` instead.
    """
    if name not in KNOWN_RENDERERS:
        logger.warning("Unknown renderer %r; using %s", name, default)
        name = default
    if name == "kroki":
        return KrokiRenderer(base_url=config.kroki.url, timeout=config.kroki.timeout)
    if name == "mmdc":
        return MmdcRenderer(command=config.mmdc.command, timeout=config.mmdc.timeout)
    raise ValueError(f"Unknown renderer: {name}")


def create_renderers(config: ThemeConfig) -> tuple[Renderer, Renderer]:
    """(primary, fallback) pair as selected by the config."""
    return (
        create_renderer(config.renderer, config, default="kroki"),
        create_renderer(config.fallback_renderer, config, default="mmdc"),
    )


__all__ = [
    "ALL_TYPES",
    "CORE_TYPES",
    "KrokiRenderer",
    "MmdcRenderer",
    "create_renderer",
    "create_renderers",
]
