from .loader import CONFIG_FILENAME, DEFAULT_CONFIG, default_config_json, load_config
from .models import KrokiSettings, MmdcSettings, ThemeConfig, ThemeDef, ThemeSet

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "KrokiSettings",
    "MmdcSettings",
    "ThemeConfig",
    "ThemeDef",
    "ThemeSet",
    "default_config_json",
    "load_config",
]
