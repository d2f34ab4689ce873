"""Incremental rendering of .mmd sources into SVG artifacts."""

from __future__ import annotations

import json
import logging

from mmdsync.config.models import ThemeConfig, ThemeDef
from mmdsync.domain.classifier import classify
from mmdsync.domain.models import DiagramType, RenderResult
from mmdsync.errors import DiagramSourceNotFound
from mmdsync.interfaces.renderer import Renderer
from mmdsync.interfaces.storage import Storage
from mmdsync.naming import single_artifact_path, variant_artifact_path

logger = logging.getLogger(__name__)


def prepend_theme_init(content: str, theme: ThemeDef) -> str:
    """Prefix mermaid text with a ``%%{init: ...}%%`` theme directive."""
    init = {
        "theme": theme.theme or "default",
        "themeVariables": dict(theme.theme_variables),
    }
    return f"%%{{init: {json.dumps(init, separators=(',', ':'))}}}%%\n{content}"


def planned_artifacts(mmd_path: str, config: ThemeConfig) -> list[tuple[str, ThemeDef]]:
    """(artifact path, theme) for every artifact the current mode expects."""
    if config.dual:
        return [
            (variant_artifact_path(mmd_path, variant), theme)
            for variant, theme in config.active_themes()
        ]
    [(_, theme)] = config.active_themes()
    return [(single_artifact_path(mmd_path), theme)]


def obsolete_artifacts(mmd_path: str, config: ThemeConfig) -> list[str]:
    """Artifacts the *other* output mode would have produced."""
    if config.dual:
        return [single_artifact_path(mmd_path)]
    return [variant_artifact_path(mmd_path, "light"), variant_artifact_path(mmd_path, "dark")]


def config_mtime(storage: Storage, config_path: str | None) -> int:
    if config_path and storage.exists(config_path):
        return storage.mtime(config_path)
    return 0


def is_stale(storage: Storage, artifacts: list[str], newest_input: int) -> bool:
    """True unless every artifact exists and none predates ``newest_input``."""
    for artifact in artifacts:
        if not storage.exists(artifact):
            return True
        if storage.mtime(artifact) < newest_input:
            return True
    return False


def select_renderer(diagram_type: DiagramType, primary: Renderer, fallback: Renderer) -> Renderer:
    if diagram_type in primary.supported_types:
        return primary
    return fallback


def render_one(
    config: ThemeConfig,
    mmd_path: str,
    *,
    renderer: Renderer,
    fallback_renderer: Renderer,
    storage: Storage,
    force: bool = False,
    shared_mtime: int = 0,
) -> RenderResult | None:
    """Render a single .mmd file if stale. Returns None on a cache hit.

    All artifacts are rendered before any is written, so a renderer
    failure (RenderError) leaves the previous artifacts untouched.
    """
    if not storage.exists(mmd_path):
        raise DiagramSourceNotFound(mmd_path)

    plan = planned_artifacts(mmd_path, config)
    if not force:
        newest_input = max(storage.mtime(mmd_path), shared_mtime)
        if not is_stale(storage, [path for path, _ in plan], newest_input):
            logger.debug("up to date: %s", mmd_path)
            return None

    content = storage.read_text(mmd_path)
    diagram_type = classify(content)
    active = select_renderer(diagram_type, renderer, fallback_renderer)
    logger.debug("rendering %s (%s) with %s", mmd_path, diagram_type.value, active.name)

    rendered = [(path, active.render(prepend_theme_init(content, theme))) for path, theme in plan]
    for path, svg in rendered:
        storage.write_text(path, svg)
        logger.info("rendered %s", path)

    for path in obsolete_artifacts(mmd_path, config):
        try:
            storage.delete(path)
        except OSError as e:
            logger.warning("could not remove obsolete artifact %s: %s", path, e)

    return RenderResult(
        source_path=mmd_path,
        artifact_paths=[path for path, _ in rendered],
        diagram_type=diagram_type,
        renderer=active.name,
    )


def render_diagrams(
    config: ThemeConfig,
    *,
    renderer: Renderer,
    fallback_renderer: Renderer,
    storage: Storage,
    mmd_files: list[str],
    force: bool = False,
    config_path: str | None = None,
) -> list[RenderResult]:
    """Re-render every stale file in ``mmd_files``, one at a time.

    The first failure propagates; files already rendered stay rendered.
    Use ``mmdsync.pipeline.render_batch`` to keep going past failures.
    """
    shared = config_mtime(storage, config_path)
    results: list[RenderResult] = []
    for mmd_path in mmd_files:
        result = render_one(
            config,
            mmd_path,
            renderer=renderer,
            fallback_renderer=fallback_renderer,
            storage=storage,
            force=force,
            shared_mtime=shared,
        )
        if result is not None:
            results.append(result)
    return results
