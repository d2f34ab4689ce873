"""Tests for anchor discovery and image injection."""

from __future__ import annotations

from mmdsync.inject import find_anchors, inject
from mmdsync.naming import alt_text


# ── find_anchors ─────────────────────────────────────────────────────


def test_find_anchors_with_line_numbers():
    md = "# T\n<!-- mmd:arch-0 -->\ntext\n  <!-- mmd:flow -->  \n<!-- mmd:Bad_Name -->"
    anchors = find_anchors(md, "README.md")
    assert [(a.name, a.line) for a in anchors] == [("arch-0", 2), ("flow", 4)]
    assert all(a.source_file == "README.md" for a in anchors)


def test_find_anchors_requires_exact_prefix():
    md = "<!--mmd:x -->\n<!-- MMD:x -->\nbefore <!-- mmd:x -->"
    assert find_anchors(md, "a.md") == []


# ── inject ───────────────────────────────────────────────────────────


def test_replaces_old_reference_and_keeps_prose():
    md = "<!-- mmd:x -->\n![X](old.svg)\n\nY"
    result = inject(md, "out")
    lines = result.split("\n")
    assert lines[0] == "<!-- mmd:x -->"
    assert lines[1] == "![X](out/x.svg)"
    assert "old.svg" not in result
    assert lines[-1] == "Y"


def test_dual_mode_emits_picture_block():
    md = "<!-- mmd:x -->\n![X](old.svg)\n\nY"
    result = inject(md, "out", dual=True)
    lines = result.split("\n")
    assert lines[1] == "<picture>"
    assert 'srcset="out/x.dark.svg"' in lines[2]
    assert 'srcset="out/x.light.svg"' in lines[3]
    assert lines[4] == '  <img alt="X" src="out/x.light.svg">'
    assert lines[5] == "</picture>"
    assert lines[-1] == "Y"


def test_consumes_until_blank_line():
    md = "<!-- mmd:a -->\n<picture>\n  <img src='x'>\n</picture>\nstill same block\n\nafter"
    assert inject(md, "out") == "<!-- mmd:a -->\n![A](out/a.svg)\n\nafter"


def test_stops_at_next_anchor():
    md = "<!-- mmd:a -->\nold a\n<!-- mmd:b -->\nold b"
    assert inject(md, "out") == "<!-- mmd:a -->\n![A](out/a.svg)\n<!-- mmd:b -->\n![B](out/b.svg)"


def test_nothing_consumed_when_followed_by_blank_line():
    md = "<!-- mmd:a -->\n\nkeep me"
    assert inject(md, "out") == "<!-- mmd:a -->\n![A](out/a.svg)\n\nkeep me"


def test_anchor_at_end_of_document():
    assert inject("intro\n<!-- mmd:end-0 -->", "d") == "intro\n<!-- mmd:end-0 -->\n![End 0](d/end-0.svg)"


def test_marker_line_left_untouched():
    md = "  <!-- mmd:a -->\nold\n"
    assert inject(md, "out").split("\n")[0] == "  <!-- mmd:a -->"


def test_document_without_anchors_unchanged():
    md = "# Title\n\n![pic](a.png)\n"
    assert inject(md, "out") == md


def test_idempotent_single_and_dual():
    md = "# Doc\n\n<!-- mmd:a -->\n![A](old.svg)\n\ntext\n<!-- mmd:b -->\n<!-- mmd:c -->\nstale\n\nend\n"
    for dual in (False, True):
        once = inject(md, "docs/mmd", dual=dual)
        twice = inject(once, "docs/mmd", dual=dual)
        assert once == twice


def test_switching_mode_replaces_previous_block():
    md = "<!-- mmd:a -->\n\nend"
    dual = inject(md, "out", dual=True)
    single = inject(dual, "out", dual=False)
    assert single == "<!-- mmd:a -->\n![A](out/a.svg)\n\nend"


def test_alt_text_capitalises_words():
    assert alt_text("system-overview-2") == "System Overview 2"
    assert alt_text("readme-0") == "Readme 0"
