"""Tests for color grouping."""

from __future__ import annotations

import pytest

from vector_gcode.geometry.types import Path, Point, StrokeColor
from vector_gcode.toolpath.grouping import DEFAULT_KEY, color_key, group_by_color

A = StrokeColor(1.0, 0.0, 0.0)
B = StrokeColor(0.0, 0.5, 1.0)


def _path(tag: int, color: StrokeColor | None) -> Path:
    return Path(points=(Point(tag, 0), Point(tag, 1)), color=color)


class TestColorKey:
    def test_hex_uppercase(self) -> None:
        assert color_key(A) == "#FF0000"

    def test_half_rounds_up(self) -> None:
        assert color_key(B) == "#0080FF"

    def test_alpha_ignored(self) -> None:
        assert color_key(StrokeColor(1, 0, 0, 0.25)) == color_key(A)

    def test_no_color_is_default(self) -> None:
        assert color_key(None) == DEFAULT_KEY == "DEFAULT"

    @pytest.mark.parametrize(
        "value, expected",
        [(0.0, "00"), (1.0, "FF"), (0.2, "33"), (0.5019607843137255, "80")],
    )
    def test_channel_rounding(self, value: float, expected: str) -> None:
        assert color_key(StrokeColor(value, value, value)) == "#" + expected * 3


class TestGroupByColor:
    def test_first_encounter_order_and_stable_members(self) -> None:
        colors = [A, A, B, A, B]
        paths = [_path(i, c) for i, c in enumerate(colors)]
        buckets = group_by_color(paths)
        assert [b.key for b in buckets] == ["#FF0000", "#0080FF"]
        assert [len(b) for b in buckets] == [3, 2]
        assert [p.points[0].x for p in buckets[0].paths] == [0, 1, 3]
        assert [p.points[0].x for p in buckets[1].paths] == [2, 4]

    def test_opacity_variants_share_bucket(self) -> None:
        paths = [_path(0, StrokeColor(0, 0, 1, 1.0)), _path(1, StrokeColor(0, 0, 1, 0.3))]
        (bucket,) = group_by_color(paths)
        assert len(bucket) == 2

    def test_uncolored_paths_share_default_bucket(self) -> None:
        buckets = group_by_color([_path(0, None), _path(1, A), _path(2, None)])
        assert [(b.key, len(b)) for b in buckets] == [("DEFAULT", 2), ("#FF0000", 1)]

    def test_empty_input(self) -> None:
        assert group_by_color([]) == []
