"""Naming conventions shared by extraction, rendering and injection.

A diagram name links three things: the anchor in Markdown
(``<!-- mmd:<name> -->``), the source file ``<outputDir>/<name>.mmd`` and
the rendered artifact(s) next to it.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

ANCHOR_RE = re.compile(r"^<!-- mmd:([a-z0-9-]+) -->$")
NAME_RE = re.compile(r"^[a-z0-9-]+$")

SOURCE_SUFFIX = ".mmd"


def diagram_name(source_file: str, index: int) -> str:
    """``docs/Guide.md`` + 2 -> ``guide-2``."""
    filename = PurePosixPath(source_file.replace("\\", "/")).name
    stem = re.sub(r"\.md$", "", filename, flags=re.IGNORECASE).lower()
    return f"{stem}-{index}"


def anchor_line(name: str) -> str:
    return f"<!-- mmd:{name} -->"


def parse_anchor(line: str) -> str | None:
    """Return the anchor name if the (trimmed) line is a marker."""
    match = ANCHOR_RE.match(line.strip())
    return match.group(1) if match else None


def source_path(output_dir: str, name: str) -> str:
    return f"{output_dir}/{name}{SOURCE_SUFFIX}"


def _stem(mmd_path: str) -> str:
    if mmd_path.endswith(SOURCE_SUFFIX):
        return mmd_path[: -len(SOURCE_SUFFIX)]
    return mmd_path


def single_artifact_path(mmd_path: str) -> str:
    return f"{_stem(mmd_path)}.svg"


def variant_artifact_path(mmd_path: str, variant: str) -> str:
    return f"{_stem(mmd_path)}.{variant}.svg"


def alt_text(name: str) -> str:
    """``guide-2`` -> ``Guide 2``."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def image_block(name: str, output_dir: str, dual: bool) -> list[str]:
    """Lines that reference the current artifact(s) for a diagram.

    Never contains a blank line, so the injector always consumes the
    whole block on its next pass.
    """
    alt = alt_text(name)
    if not dual:
        return [f"![{alt}]({output_dir}/{name}.svg)"]
    light = f"{output_dir}/{name}.light.svg"
    dark = f"{output_dir}/{name}.dark.svg"
    return [
        "<picture>",
        f'  <source media="(prefers-color-scheme: dark)" srcset="{dark}">',
        f'  <source media="(prefers-color-scheme: light)" srcset="{light}">',
        f'  <img alt="{alt}" src="{light}">',
        "</picture>",
    ]
