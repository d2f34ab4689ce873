"""Kroki HTTP renderer."""

from __future__ import annotations

import logging

import httpx

from mmdsync.domain.models import DiagramType
from mmdsync.errors import RenderError

logger = logging.getLogger(__name__)

CORE_TYPES: frozenset[DiagramType] = frozenset({
    DiagramType.flowchart,
    DiagramType.state,
    DiagramType.sequence,
    DiagramType.class_,
    DiagramType.er,
})


class KrokiRenderer:
    """Posts mermaid source to a Kroki server and returns the SVG body.

    Only the core diagram families are claimed by default; newer types are
    left to the fallback renderer, which tracks mermaid releases more
    closely than most Kroki deployments.
    """

    name = "kroki"

    def __init__(
        self,
        base_url: str = "https://kroki.io",
        timeout: float = 30.0,
        supported_types: frozenset[DiagramType] = CORE_TYPES,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self.supported_types = supported_types
        self._client = client

    def render(self, content: str) -> str:
        url = f"{self._base_url}/mermaid/svg"
        client = self._client or httpx.Client(timeout=self._timeout)
        try:
            resp = client.post(
                url,
                content=content.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
            )
        except httpx.HTTPError as e:
            raise RenderError(self.name, f"request to {url} failed", str(e)) from e
        finally:
            if self._client is None:
                client.close()

        if resp.status_code != 200:
            raise RenderError(self.name, f"HTTP {resp.status_code}", resp.text[:500])
        logger.debug("kroki returned %d bytes", len(resp.content))
        return resp.text
