"""Tests for settings loading and validation."""

from __future__ import annotations

import math
from pathlib import Path

import pytest

from vector_gcode.configs.loader import (
    DEFAULT_SETTINGS_PATH,
    ConfigError,
    Settings,
    load_settings,
    settings_from_dict,
)


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "settings.yaml"
    p.write_text(text, encoding="utf-8")
    return p


class TestDefaults:
    def test_shipped_defaults(self) -> None:
        s = load_settings()
        assert s.units == "mm"
        assert s.scale == 1.0
        assert s.feed_rate == 1000
        assert s.pen_up_cmd == "G0 Z5"
        assert s.pen_down_cmd == "G0 Z0"

    def test_shipped_file_exists(self) -> None:
        assert DEFAULT_SETTINGS_PATH.exists()

    def test_dataclass_defaults_match_file(self) -> None:
        assert load_settings() == Settings()


class TestValidation:
    @pytest.mark.parametrize("field", ["scale", "feed_rate"])
    @pytest.mark.parametrize("value", [0, -1.0, math.inf, math.nan])
    def test_non_positive_or_non_finite_rejected(self, field: str, value: float) -> None:
        with pytest.raises(ConfigError, match=field):
            Settings(**{field: value})

    def test_bad_units(self) -> None:
        with pytest.raises(ConfigError, match="units"):
            Settings(units="cm")  # type: ignore[arg-type]

    def test_empty_pen_command(self) -> None:
        with pytest.raises(ConfigError, match="pen_up_cmd"):
            Settings(pen_up_cmd="  ")

    def test_bool_is_not_a_number(self) -> None:
        with pytest.raises(ConfigError):
            Settings(scale=True)  # type: ignore[arg-type]

    def test_config_error_is_value_error(self) -> None:
        assert issubclass(ConfigError, ValueError)

    def test_frozen(self) -> None:
        s = Settings()
        with pytest.raises(AttributeError):
            s.scale = 2.0  # type: ignore[misc]


class TestOverrides:
    def test_none_ignored(self) -> None:
        s = Settings().with_overrides(scale=None, units="inch")
        assert s.units == "inch"
        assert s.scale == 1.0

    def test_overrides_revalidated(self) -> None:
        with pytest.raises(ConfigError):
            Settings().with_overrides(feed_rate=0)


class TestFromDict:
    def test_camel_case_aliases(self) -> None:
        s = settings_from_dict({"feedRate": 2400, "penUpCmd": "M5", "penDownCmd": "M3"})
        assert (s.feed_rate, s.pen_up_cmd, s.pen_down_cmd) == (2400, "M5", "M3")

    def test_numeric_strings_accepted(self) -> None:
        s = settings_from_dict({"scale": "3.7795", "feed_rate": "800"})
        assert s.scale == pytest.approx(3.7795)
        assert s.feed_rate == 800.0

    def test_non_numeric_string_rejected(self) -> None:
        with pytest.raises(ConfigError, match="scale"):
            settings_from_dict({"scale": "big"})

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Unknown"):
            settings_from_dict({"speed": 3})


class TestLoadFile:
    def test_partial_file_filled_from_defaults(self, tmp_path: Path) -> None:
        p = _write(tmp_path, "settings:\n  units: inch\n  scale: 96\n")
        s = load_settings(p)
        assert s.units == "inch"
        assert s.scale == 96
        assert s.feed_rate == 1000
        assert s.pen_down_cmd == "G0 Z0"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Empty"):
            load_settings(_write(tmp_path, ""))

    def test_missing_section(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Missing"):
            load_settings(_write(tmp_path, "other: 1\n"))

    def test_section_not_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(_write(tmp_path, "settings: [1, 2]\n"))

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        p = tmp_path / "settings.yaml"
        p.write_bytes(b"settings:\n  pen_up_cmd: \xff\xfe\n")
        with pytest.raises(ConfigError, match="UTF-8"):
            load_settings(p)

    def test_invalid_value_in_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="feed_rate"):
            load_settings(_write(tmp_path, "settings:\n  feed_rate: -5\n"))
