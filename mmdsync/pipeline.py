"""Extract → render → inject, individually or chained as a sync run."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from mmdsync.config.models import ThemeConfig
from mmdsync.domain.models import RenderResult
from mmdsync.errors import MmdError
from mmdsync.extract.scanner import replace_blocks_with_anchors, scan
from mmdsync.inject.injector import inject
from mmdsync.interfaces.renderer import Renderer
from mmdsync.interfaces.storage import Storage
from mmdsync.naming import source_path
from mmdsync.render.scheduler import config_mtime, render_one

logger = logging.getLogger(__name__)


class ExtractReport(BaseModel):
    """Outcome of the extract phase."""

    extracted: int = 0
    mmd_files: list[str] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)


class RenderReport(BaseModel):
    """Outcome of a render batch."""

    rendered: list[RenderResult] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: list[tuple[str, str]] = Field(default_factory=list)


class SyncReport(BaseModel):
    """Outcome of a full sync run."""

    extracted: int = 0
    rendered: int = 0
    failed: list[tuple[str, str]] = Field(default_factory=list)
    injected: list[str] = Field(default_factory=list)


def discover_markdown(storage: Storage, root: str = ".") -> list[str]:
    return storage.glob("**/*.md", root)


def discover_sources(storage: Storage, output_dir: str) -> list[str]:
    return [f"{output_dir}/{name}" for name in storage.glob("*.mmd", output_dir)]


def extract_documents(config: ThemeConfig, storage: Storage, md_files: list[str]) -> ExtractReport:
    """Move fenced mermaid blocks into .mmd files and leave anchors behind."""
    report = ExtractReport()
    for md_file in md_files:
        content = storage.read_text(md_file)
        blocks = scan(content, md_file)
        if not blocks:
            continue

        storage.mkdir(config.output_dir)
        for block in blocks:
            mmd_path = source_path(config.output_dir, block.name)
            storage.write_text(mmd_path, block.content)
            report.mmd_files.append(mmd_path)
            logger.info("extracted %s from %s:%d", mmd_path, md_file, block.start_line)

        updated = replace_blocks_with_anchors(content, blocks, config.output_dir, dual=config.dual)
        storage.write_text(md_file, updated)
        report.documents.append(md_file)
        report.extracted += len(blocks)
    return report


def render_batch(
    config: ThemeConfig,
    *,
    renderer: Renderer,
    fallback_renderer: Renderer,
    storage: Storage,
    mmd_files: list[str],
    force: bool = False,
    config_path: str | None = None,
) -> RenderReport:
    """Render stale files, recording per-file failures instead of stopping."""
    shared = config_mtime(storage, config_path)
    report = RenderReport()
    for mmd_path in mmd_files:
        try:
            result = render_one(
                config,
                mmd_path,
                renderer=renderer,
                fallback_renderer=fallback_renderer,
                storage=storage,
                force=force,
                shared_mtime=shared,
            )
        except MmdError as e:
            logger.error("%s", e)
            report.failed.append((mmd_path, str(e)))
            continue

        if result is None:
            report.skipped.append(mmd_path)
        else:
            report.rendered.append(result)
    return report


def inject_documents(config: ThemeConfig, storage: Storage, md_files: list[str]) -> list[str]:
    """Rewrite anchors in each document; returns the documents that changed."""
    changed: list[str] = []
    for md_file in md_files:
        content = storage.read_text(md_file)
        injected = inject(content, config.output_dir, dual=config.dual)
        if injected != content:
            storage.write_text(md_file, injected)
            logger.info("injected %s", md_file)
            changed.append(md_file)
    return changed


def sync(
    config: ThemeConfig,
    *,
    storage: Storage,
    md_files: list[str],
    renderer: Renderer,
    fallback_renderer: Renderer,
    force: bool = False,
    config_path: str | None = None,
) -> SyncReport:
    """Run the full pipeline.

    The render phase covers every .mmd file in the output directory, not
    only the ones extracted in this run.
    """
    extracted = extract_documents(config, storage, md_files)

    mmd_files = discover_sources(storage, config.output_dir)
    for path in extracted.mmd_files:
        if path not in mmd_files:
            mmd_files.append(path)

    rendered = render_batch(
        config,
        renderer=renderer,
        fallback_renderer=fallback_renderer,
        storage=storage,
        mmd_files=mmd_files,
        force=force,
        config_path=config_path,
    )
    injected = inject_documents(config, storage, md_files)

    return SyncReport(
        extracted=extracted.extracted,
        rendered=len(rendered.rendered),
        failed=rendered.failed,
        injected=injected,
    )
