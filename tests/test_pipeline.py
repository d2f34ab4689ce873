"""Integration tests: extract → render → inject over in-memory storage."""

from __future__ import annotations

from mmdsync.pipeline import (
    discover_markdown,
    discover_sources,
    extract_documents,
    inject_documents,
    render_batch,
    sync,
)

from tests.conftest import FailingRenderer

README = "# Title\n\n```mermaid\nflowchart TD\n  A --> B\n```\n"


def _sync(config, storage, renderer, md_files, **kwargs):
    return sync(
        config,
        storage=storage,
        md_files=md_files,
        renderer=renderer,
        fallback_renderer=renderer,
        **kwargs,
    )


class TestExtract:
    def test_writes_sources_and_anchors(self, dual_config, storage):
        storage.set_file("README.md", README)
        report = extract_documents(dual_config, storage, ["README.md"])

        assert report.extracted == 1
        assert report.mmd_files == ["docs/mmd/readme-0.mmd"]
        assert report.documents == ["README.md"]
        assert storage.read_text("docs/mmd/readme-0.mmd") == "flowchart TD\n  A --> B"

        updated = storage.read_text("README.md")
        assert "<!-- mmd:readme-0 -->" in updated
        assert "```mermaid" not in updated

    def test_second_run_is_noop(self, dual_config, storage):
        storage.set_file("README.md", README)
        extract_documents(dual_config, storage, ["README.md"])
        before = storage.read_text("README.md")

        report = extract_documents(dual_config, storage, ["README.md"])
        assert report.extracted == 0
        assert storage.read_text("README.md") == before

    def test_document_without_blocks_untouched(self, dual_config, storage):
        storage.set_file("notes.md", "# Notes\n", mtime=5)
        report = extract_documents(dual_config, storage, ["notes.md"])
        assert report.extracted == 0
        assert storage.mtime("notes.md") == 5


class TestRenderBatch:
    def test_continues_after_failure(self, single_config, storage):
        storage.set_file("docs/mmd/a.mmd", "flowchart TD\n  BROKEN")
        storage.set_file("docs/mmd/b.mmd", "flowchart TD\n  A --> B")
        failing = FailingRenderer(trigger="BROKEN")

        report = render_batch(
            single_config,
            renderer=failing,
            fallback_renderer=failing,
            storage=storage,
            mmd_files=["docs/mmd/a.mmd", "docs/mmd/b.mmd"],
        )

        assert [r.source_path for r in report.rendered] == ["docs/mmd/b.mmd"]
        assert [path for path, _ in report.failed] == ["docs/mmd/a.mmd"]
        assert "syntax error" in report.failed[0][1]
        assert storage.exists("docs/mmd/b.svg")

    def test_missing_file_reported_per_item(self, single_config, storage, renderer):
        storage.set_file("docs/mmd/b.mmd", "pie")
        report = render_batch(
            single_config,
            renderer=renderer,
            fallback_renderer=renderer,
            storage=storage,
            mmd_files=["docs/mmd/gone.mmd", "docs/mmd/b.mmd"],
        )
        assert report.failed[0][0] == "docs/mmd/gone.mmd"
        assert len(report.rendered) == 1

    def test_up_to_date_files_are_skipped(self, single_config, storage, renderer):
        storage.set_file("docs/mmd/a.mmd", "pie", mtime=10)
        storage.set_file("docs/mmd/a.svg", "<svg/>", mtime=11)
        report = render_batch(
            single_config,
            renderer=renderer,
            fallback_renderer=renderer,
            storage=storage,
            mmd_files=["docs/mmd/a.mmd"],
        )
        assert report.skipped == ["docs/mmd/a.mmd"]
        assert report.rendered == []


class TestInject:
    def test_reports_only_changed_documents(self, single_config, storage):
        storage.set_file("a.md", "<!-- mmd:a-0 -->\n![A 0](docs/mmd/a-0.svg)\n")
        storage.set_file("b.md", "<!-- mmd:b-0 -->\n![old](x.svg)\n")
        assert inject_documents(single_config, storage, ["a.md", "b.md"]) == ["b.md"]


class TestSync:
    def test_full_pipeline(self, dual_config, storage, renderer):
        storage.set_file("README.md", README)
        report = _sync(dual_config, storage, renderer, ["README.md"])

        assert storage.exists("docs/mmd/readme-0.mmd")
        assert storage.exists("docs/mmd/readme-0.light.svg")
        assert storage.exists("docs/mmd/readme-0.dark.svg")

        updated = storage.read_text("README.md")
        assert "<!-- mmd:readme-0 -->" in updated
        assert "<picture>" in updated
        assert "```mermaid" not in updated
        assert report.extracted == 1
        assert report.rendered == 1
        assert report.failed == []

    def test_no_diagrams(self, dual_config, storage, renderer):
        storage.set_file("README.md", "# Title\n\nNo diagrams.\n")
        report = _sync(dual_config, storage, renderer, ["README.md"])
        assert report.extracted == 0
        assert report.rendered == 0
        assert report.injected == []

    def test_renders_existing_sources_too(self, single_config, storage, renderer):
        storage.set_file("docs/mmd/old-0.mmd", "sequenceDiagram")
        storage.set_file("README.md", README)

        report = _sync(single_config, storage, renderer, ["README.md"])
        assert report.rendered == 2
        assert storage.exists("docs/mmd/old-0.svg")
        assert storage.exists("docs/mmd/readme-0.svg")

    def test_second_sync_is_stable(self, single_config, storage, renderer):
        storage.set_file("README.md", README)
        _sync(single_config, storage, renderer, ["README.md"])
        first = storage.read_text("README.md")

        report = _sync(single_config, storage, renderer, ["README.md"])
        assert report.extracted == 0
        assert report.rendered == 0
        assert report.injected == []
        assert storage.read_text("README.md") == first

    def test_config_change_rerenders_everything(self, single_config, storage, renderer):
        storage.set_file("README.md", README)
        _sync(single_config, storage, renderer, ["README.md"], config_path=".mermaid.json")
        storage.set_file(".mermaid.json", "{}")

        report = _sync(single_config, storage, renderer, ["README.md"], config_path=".mermaid.json")
        assert report.rendered == 1


def test_discovery(storage):
    storage.set_file("README.md", "")
    storage.set_file("docs/guide.md", "")
    storage.set_file("docs/mmd/a.mmd", "")
    storage.set_file("docs/mmd/a.svg", "")
    assert discover_markdown(storage) == ["README.md", "docs/guide.md"]
    assert discover_sources(storage, "docs/mmd") == ["docs/mmd/a.mmd"]
