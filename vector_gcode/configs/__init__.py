"""Conversion settings loading and validation."""

from vector_gcode.configs.loader import (
    ConfigError,
    Settings,
    load_settings,
    settings_from_dict,
)

__all__ = ["ConfigError", "Settings", "load_settings", "settings_from_dict"]
