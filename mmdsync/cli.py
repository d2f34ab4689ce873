"""CLI entry point for mmd-sync."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from mmdsync.check import check_orphaned_blocks
from mmdsync.config import ThemeConfig, default_config_json, load_config
from mmdsync.config.loader import CONFIG_FILENAME, resolve_config_path
from mmdsync.errors import ConfigError
from mmdsync.pipeline import (
    RenderReport,
    SyncReport,
    discover_markdown,
    discover_sources,
    extract_documents,
    inject_documents,
    render_batch,
    sync,
)
from mmdsync.render.renderers import create_renderers
from mmdsync.storage import LocalStorage

app = typer.Typer(
    name="mmd",
    help="Extract Mermaid diagrams to source files and inject themed SVGs.",
)

config_app = typer.Typer(help="Manage .mermaid.json.")
app.add_typer(config_app, name="config")

# Global state
_config: ThemeConfig | None = None
_config_path: str | None = None

FilesArg = Annotated[
    list[str] | None,
    typer.Argument(help="Specific files to process (default: discover)"),
]
ForceOpt = Annotated[
    bool, typer.Option("--force", help="Re-render all diagrams regardless of timestamps")
]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, markup=False)],
        force=True,
    )


def _get_config() -> ThemeConfig:
    if _config is None:
        return load_config(_config_path)
    return _config


def _shared_config_path() -> str:
    return str(resolve_config_path(_config_path))


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help=f"Path to {CONFIG_FILENAME}")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Global options."""
    global _config, _config_path
    _config_path = config
    _setup_logging("info")
    _config = load_config(config)
    _setup_logging("debug" if verbose else _config.log_level)


def _markdown_files(storage: LocalStorage, files: list[str] | None) -> list[str]:
    return list(files) if files else discover_markdown(storage)


def _print_failures(failed: list[tuple[str, str]]) -> None:
    for path, message in failed:
        rprint(f"  [red]failed:[/red] {escape(path)}: {escape(message)}")


@app.command()
def extract(files: FilesArg = None) -> None:
    """Scan .md files and move mermaid blocks into <outputDir>/*.mmd."""
    cfg = _get_config()
    storage = LocalStorage()
    try:
        report = extract_documents(cfg, storage, _markdown_files(storage, files))
    except FileNotFoundError as e:
        rprint(f"[red]Error:[/red] file not found: {e.filename}")
        raise typer.Exit(1)

    for path in report.mmd_files:
        rprint(f"  [green]extracted:[/green] {path}")
    rprint(f"\nExtracted {report.extracted} diagram(s)")


def _display_render_report(report: RenderReport) -> None:
    if report.rendered:
        table = Table(title=f"Rendered ({len(report.rendered)})")
        table.add_column("Source", style="cyan")
        table.add_column("Type")
        table.add_column("Renderer", style="magenta")
        table.add_column("Artifacts", style="green")
        for r in report.rendered:
            table.add_row(r.source_path, r.diagram_type.value, r.renderer, "\n".join(r.artifact_paths))
        rprint(table)
    if report.skipped:
        rprint(f"[dim]{len(report.skipped)} diagram(s) up to date[/dim]")
    _print_failures(report.failed)


@app.command()
def render(files: FilesArg = None, force: ForceOpt = False) -> None:
    """Render stale <outputDir>/*.mmd files to SVG."""
    cfg = _get_config()
    storage = LocalStorage()
    mmd_files = list(files) if files else discover_sources(storage, cfg.output_dir)
    renderer, fallback = create_renderers(cfg)

    report = render_batch(
        cfg,
        renderer=renderer,
        fallback_renderer=fallback,
        storage=storage,
        mmd_files=mmd_files,
        force=force,
        config_path=_shared_config_path(),
    )
    _display_render_report(report)
    rprint(f"\nRendered {len(report.rendered)} diagram(s)")
    if report.failed:
        raise typer.Exit(1)


@app.command()
def inject(files: FilesArg = None) -> None:
    """Rewrite anchor comments in .md files to reference current SVGs."""
    cfg = _get_config()
    storage = LocalStorage()
    try:
        changed = inject_documents(cfg, storage, _markdown_files(storage, files))
    except FileNotFoundError as e:
        rprint(f"[red]Error:[/red] file not found: {e.filename}")
        raise typer.Exit(1)

    for path in changed:
        rprint(f"  [green]injected:[/green] {path}")
    rprint(f"\nInjected {len(changed)} file(s)")


def _run_sync(
    cfg: ThemeConfig, storage: LocalStorage, files: list[str] | None, force: bool
) -> SyncReport:
    renderer, fallback = create_renderers(cfg)
    return sync(
        cfg,
        storage=storage,
        md_files=_markdown_files(storage, files),
        renderer=renderer,
        fallback_renderer=fallback,
        force=force,
        config_path=_shared_config_path(),
    )


@app.command(name="sync")
def sync_cmd(files: FilesArg = None, force: ForceOpt = False) -> None:
    """Run extract + render + inject in sequence."""
    cfg = _get_config()
    storage = LocalStorage()
    try:
        report = _run_sync(cfg, storage, files, force)
    except FileNotFoundError as e:
        rprint(f"[red]Error:[/red] file not found: {e.filename}")
        raise typer.Exit(1)

    _print_failures(report.failed)
    rprint(
        f"Extracted {report.extracted} diagram(s), rendered {report.rendered} diagram(s), "
        f"injected {len(report.injected)} file(s)"
    )
    if report.failed:
        raise typer.Exit(1)


@app.command()
def check(files: FilesArg = None) -> None:
    """Warn on inline mermaid blocks in files that already use anchors."""
    storage = LocalStorage()
    total = 0
    for md_file in _markdown_files(storage, files):
        try:
            content = storage.read_text(md_file)
        except FileNotFoundError:
            rprint(f"[red]Error:[/red] file not found: {md_file}")
            raise typer.Exit(1)
        for w in check_orphaned_blocks(content, md_file):
            rprint(f"  [yellow]{escape(w.source_file)}:{w.line}:[/yellow] {escape(w.message)}")
            total += 1

    if total:
        rprint(f"\n[red]{total} warning(s) found[/red]")
        raise typer.Exit(1)
    rprint("[green]No warnings found[/green]")


@app.command()
def watch(
    debounce: Annotated[
        float, typer.Option("--debounce", help="Seconds of quiet before syncing")
    ] = 1.0,
) -> None:
    """Watch the project and sync whenever Markdown, .mmd or config changes."""
    from mmdsync.watcher import SyncWatcher

    storage = LocalStorage()

    def on_change(paths: set[str]) -> None:
        cfg = load_config(_config_path)
        rprint(f"[dim]{len(paths)} change(s) detected, syncing...[/dim]")
        report = _run_sync(cfg, storage, None, False)
        _print_failures(report.failed)
        rprint(f"Extracted {report.extracted}, rendered {report.rendered}, injected {len(report.injected)}")

    watcher = SyncWatcher(Path("."), on_change, debounce_seconds=debounce)
    rprint("[bold]Watching[/bold] for changes (Ctrl+C to stop)")
    try:
        watcher.run_forever()
    except KeyboardInterrupt:
        rprint("\nStopped.")


@config_app.command("show")
def config_show(
    as_json: Annotated[bool, typer.Option("--json", help="Print raw JSON")] = False,
    strict: Annotated[bool, typer.Option("--strict", help="Fail on an invalid config file")] = False,
) -> None:
    """Show current resolved configuration."""
    try:
        cfg = load_config(_config_path, strict=True) if strict else _get_config()
    except ConfigError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    data = cfg.model_dump(by_alias=True, exclude_none=True)
    if as_json:
        typer.echo(json.dumps(data, indent=2))
    else:
        rprint(Syntax(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default .mermaid.json in current directory."""
    target = Path(CONFIG_FILENAME)
    if target.exists() and not force:
        rprint(f"[yellow]{CONFIG_FILENAME} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(default_config_json(), encoding="utf-8")
    rprint(f"[green]Created[/green] {target}")
