"""JSON config loading with silent fallback to built-in defaults."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from mmdsync.errors import ConfigError

from .models import ThemeConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".mermaid.json"

_DEFAULT_RAW: dict = {
    "outputDir": "docs/mmd",
    "themes": {
        "light": {
            "theme": "base",
            "themeVariables": {
                "background": "#ffffff",
                "primaryColor": "#ddf4ff",
                "primaryTextColor": "#1f2328",
                "primaryBorderColor": "#218bff",
                "lineColor": "#656d76",
                "secondaryColor": "#dafbe1",
                "tertiaryColor": "#fff8c5",
                "noteBkgColor": "#f6f8fa",
                "noteTextColor": "#1f2328",
                "fontSize": "14px",
            },
        },
        "dark": {
            "theme": "base",
            "themeVariables": {
                "background": "#0d1117",
                "primaryColor": "#1f3a5f",
                "primaryTextColor": "#e6edf3",
                "primaryBorderColor": "#58a6ff",
                "lineColor": "#8b949e",
                "secondaryColor": "#1a3d2e",
                "tertiaryColor": "#3d2e00",
                "noteBkgColor": "#161b22",
                "noteTextColor": "#e6edf3",
                "fontSize": "14px",
            },
        },
    },
    "renderer": "kroki",
    "fallbackRenderer": "mmdc",
}

DEFAULT_CONFIG = ThemeConfig.model_validate(_DEFAULT_RAW)


def default_config_json() -> str:
    """Default config as written by `mmd config init`."""
    return json.dumps(_DEFAULT_RAW, indent=2) + "\n"


def resolve_config_path(cli_path: str | None = None) -> Path:
    """CLI path if given, otherwise .mermaid.json in the working directory."""
    return Path(cli_path) if cli_path else Path(CONFIG_FILENAME)


def load_config(cli_path: str | None = None, *, strict: bool = False) -> ThemeConfig:
    """Load .mermaid.json, falling back to DEFAULT_CONFIG.

    A missing file yields the defaults silently. Unparseable JSON or a
    shape that fails validation logs a warning and yields the defaults,
    unless ``strict`` is set, in which case ConfigError is raised.
    """
    path = resolve_config_path(cli_path)
    if not path.is_file():
        if cli_path and strict:
            raise ConfigError(f"Config file not found: {path}")
        return DEFAULT_CONFIG

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return ThemeConfig.model_validate(raw)
    except json.JSONDecodeError as e:
        problem = f"Invalid JSON in {path}: {e}"
    except ValidationError as e:
        problem = f"Invalid config in {path}: {e}"
    except OSError as e:
        problem = f"Cannot read {path}: {e}"

    if strict:
        raise ConfigError(problem)
    logger.warning("%s; using defaults", problem)
    return DEFAULT_CONFIG
