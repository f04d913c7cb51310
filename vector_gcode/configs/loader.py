"""Settings loader for the converter.

Loads and validates ``settings.yaml`` into a frozen :class:`Settings`.
Everything the emitter needs that is not geometry -- units, scale, feed
rate, pen commands -- comes from here.

``scale`` is document units per machine unit: every emitted coordinate is
divided by it, so it is validated (> 0, finite) before any division can
happen.

Usage::

    from vector_gcode.configs.loader import load_settings
    settings = load_settings()                          # shipped defaults
    settings = load_settings("/custom/settings.yaml")   # explicit path
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from vector_gcode.utils.fs import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

# Host-style camelCase aliases accepted in settings files.
_ALIASES = {
    "feedRate": "feed_rate",
    "penUpCmd": "pen_up_cmd",
    "penDownCmd": "pen_down_cmd",
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when settings validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    """Validated conversion settings.

    Parameters
    ----------
    units : ``"mm"`` | ``"inch"``
        Machine units; selects ``G21`` or ``G20``.
    scale : float
        Document units per machine unit (> 0).
    feed_rate : float
        Drawing feed rate in machine units per minute (> 0).
    pen_up_cmd, pen_down_cmd : str
        Device commands emitted verbatim to raise / lower the pen.

    Raises
    ------
    ConfigError
        On construction with any invalid field.
    """

    units: Literal["mm", "inch"] = "mm"
    scale: float = 1.0
    feed_rate: float = 1000.0
    pen_up_cmd: str = "G0 Z5"
    pen_down_cmd: str = "G0 Z0"

    def __post_init__(self) -> None:
        if self.units not in ("mm", "inch"):
            raise ConfigError(f"units must be 'mm' or 'inch', got {self.units!r}")
        for name in ("scale", "feed_rate"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a finite number > 0, got {value}")
        for name in ("pen_up_cmd", "pen_down_cmd"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{name} must be a non-empty string, got {value!r}")

    def with_overrides(self, **overrides: Any) -> Settings:
        """Copy with *overrides* applied (``None`` values are ignored)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def settings_from_dict(data: dict[str, Any], base: Settings | None = None) -> Settings:
    """Build :class:`Settings` from a mapping, filling gaps from *base*.

    Raises
    ------
    ConfigError
        On unknown keys or invalid values.
    """
    base = base or Settings()
    known = {f.name for f in dataclasses.fields(Settings)}
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _ALIASES.get(raw_key, raw_key)
        if key not in known:
            raise ConfigError(f"Unknown settings key: {raw_key!r}")
        values[key] = value

    if "scale" in values and isinstance(values["scale"], str):
        values["scale"] = _to_float("scale", values["scale"])
    if "feed_rate" in values and isinstance(values["feed_rate"], str):
        values["feed_rate"] = _to_float("feed_rate", values["feed_rate"])

    return dataclasses.replace(base, **values)


def _to_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_settings(path: str | Path | None = None) -> Settings:
    """Load and validate settings from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to a settings file.  ``None`` loads the default shipped
        alongside this module.  Keys missing from a custom file take the
        shipped defaults.

    Returns
    -------
    Settings
        Validated, frozen settings.

    Raises
    ------
    ConfigError
        If the file is not UTF-8, is empty, lacks a ``settings`` section,
        or any value fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_SETTINGS_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    logger.info("Loading settings from %s", path)

    try:
        data = load_yaml(path)
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Settings file {path} is not valid UTF-8: {exc}") from exc
    if data is None:
        raise ConfigError(f"Empty settings file: {path}")

    base = Settings()
    if path != DEFAULT_SETTINGS_PATH and DEFAULT_SETTINGS_PATH.exists():
        base = load_settings(DEFAULT_SETTINGS_PATH)

    try:
        section = data["settings"]
        if not isinstance(section, dict):
            raise ConfigError(
                f"'settings' must be a mapping, got {type(section).__name__}"
            )
        settings = settings_from_dict(section, base)
    except KeyError as exc:
        raise ConfigError(
            f"Missing required configuration key: {exc}"
        ) from exc
    except TypeError as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc

    logger.info("Settings loaded successfully")
    return settings
