from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Backends known to the renderer factory; other names fall back with a warning
KNOWN_RENDERERS = ("kroki", "mmdc")


class ThemeDef(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    theme: str | None = None
    theme_variables: dict[str, str] = Field(default_factory=dict, alias="themeVariables")


class ThemeSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    light: ThemeDef
    dark: ThemeDef


class KrokiSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = "https://kroki.io"
    timeout: float = Field(default=30.0, gt=0)


class MmdcSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: list[str] = Field(default_factory=lambda: ["npx", "mmdc"], min_length=1)
    timeout: float | None = Field(default=None, gt=0)


class ThemeConfig(BaseModel):
    """Parsed .mermaid.json.

    ``mode`` selects single-artifact output with that theme; when it is
    unset every diagram is rendered as a light/dark pair.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    output_dir: str = Field(alias="outputDir", min_length=1)
    themes: ThemeSet
    mode: Literal["light", "dark"] | None = None
    renderer: str = "kroki"
    fallback_renderer: str = Field(default="mmdc", alias="fallbackRenderer")
    kroki: KrokiSettings = Field(default_factory=KrokiSettings)
    mmdc: MmdcSettings = Field(default_factory=MmdcSettings)
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info", alias="logLevel"
    )

    @property
    def dual(self) -> bool:
        return self.mode is None

    def active_themes(self) -> list[tuple[str, ThemeDef]]:
        """(variant, theme) pairs to render, in artifact order."""
        if self.mode is None:
            return [("light", self.themes.light), ("dark", self.themes.dark)]
        return [(self.mode, getattr(self.themes, self.mode))]
