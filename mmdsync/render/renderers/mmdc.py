"""Renderer that shells out to the mermaid-cli ``mmdc`` binary."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path

from mmdsync.domain.models import DiagramType
from mmdsync.errors import RenderError

logger = logging.getLogger(__name__)

ALL_TYPES: frozenset[DiagramType] = frozenset(DiagramType)


class MmdcRenderer:
    """Universal fallback: mermaid-cli handles every diagram type.

    Each call gets its own temporary directory, so input/output names never
    collide between renders.
    """

    name = "mmdc"
    supported_types = ALL_TYPES

    def __init__(self, command: list[str] | None = None, timeout: float | None = None) -> None:
        self._command = list(command) if command else ["npx", "mmdc"]
        self._timeout = timeout

    def render(self, content: str) -> str:
        with tempfile.TemporaryDirectory(prefix="mmd-") as tmp:
            input_path = Path(tmp) / "input.mmd"
            output_path = Path(tmp) / "output.svg"
            input_path.write_text(content, encoding="utf-8")
            cmd = [*self._command, "-i", str(input_path), "-o", str(output_path), "-e", "svg"]
            logger.debug("running %s", " ".join(cmd))

            try:
                proc = subprocess.run(
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=self._timeout,
                    check=False,
                )
            except FileNotFoundError as e:
                raise RenderError(self.name, f"command not found: {self._command[0]}") from e
            except subprocess.TimeoutExpired as e:
                raise RenderError(self.name, f"timed out after {self._timeout}s") from e

            if proc.returncode != 0:
                raise RenderError(self.name, f"exit {proc.returncode}", proc.stderr or proc.stdout)
            if not output_path.is_file():
                raise RenderError(self.name, "no output produced", proc.stderr or proc.stdout)
            return output_path.read_text(encoding="utf-8")
