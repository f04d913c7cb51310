"""Tests for the stroke font engine."""

from __future__ import annotations

import pytest

from vector_gcode.errors import DegenerateText
from vector_gcode.geometry.transform import translation
from vector_gcode.geometry.types import StrokeColor
from vector_gcode.text.glyphs import DEFAULT_ADVANCE, GLYPHS, LINE_PITCH, advance_of
from vector_gcode.text.stroke_font import fit_scale, measure_text, split_lines, text_to_paths


# ---------------------------------------------------------------------------
# Glyph table
# ---------------------------------------------------------------------------


class TestGlyphTable:
    def test_covers_printable_ascii(self) -> None:
        for code in range(32, 127):
            assert chr(code) in GLYPHS

    def test_space_has_no_strokes(self) -> None:
        assert GLYPHS[" "].strokes == ()
        assert GLYPHS[" "].advance == DEFAULT_ADVANCE

    def test_strokes_are_coordinate_pairs(self) -> None:
        assert GLYPHS["I"].advance == 8
        assert GLYPHS["I"].strokes == (((4.0, 2.0), (4.0, 23.0)),)

    def test_missing_character_uses_space_advance(self) -> None:
        assert advance_of("é") == GLYPHS[" "].advance

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            GLYPHS["?"] = GLYPHS["!"]  # type: ignore[index]


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------


class TestMeasure:
    def test_single_line(self) -> None:
        assert measure_text("IL") == (8 + 17, LINE_PITCH)

    def test_widest_line_wins(self) -> None:
        assert measure_text("I\nLL") == (34, 2 * LINE_PITCH)

    def test_carriage_return_kept_in_line(self) -> None:
        assert split_lines("a\r\nb") == ["a\r", "b"]

    def test_carriage_return_advances_like_space(self) -> None:
        width, height = measure_text("I\r\nI")
        assert width == GLYPHS["I"].advance + GLYPHS[" "].advance
        assert height == 2 * LINE_PITCH

    def test_fit_scale_is_independent_per_axis(self) -> None:
        sx, sy = fit_scale("I", 16, 100)
        assert sx == pytest.approx(2.0)
        assert sy == pytest.approx(4.0)

    @pytest.mark.parametrize("w, h", [(0, 10), (10, 0), (0, 0)])
    def test_zero_target_is_degenerate(self, w: float, h: float) -> None:
        with pytest.raises(DegenerateText):
            fit_scale("I", w, h)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestTextToPaths:
    def test_single_glyph_fills_box(self) -> None:
        (path,) = text_to_paths("I", 8, 25)
        assert [(p.x, p.y) for p in path.points] == [(4, 2), (4, 23)]
        assert path.closed is False

    def test_one_path_per_stroke(self) -> None:
        assert len(text_to_paths("A", 18, 25)) == 3
        assert len(text_to_paths("AH", 40, 25)) == 6

    def test_cursor_advances_between_glyphs(self) -> None:
        paths = text_to_paths("II", 16, 25)
        assert [p.points[0].x for p in paths] == [4, 12]

    def test_second_line_offset_by_pitch(self) -> None:
        paths = text_to_paths("I\nI", 8, 50)
        assert [p.points[0].y for p in paths] == [2, 27]

    def test_non_uniform_scale_and_transform(self) -> None:
        (path,) = text_to_paths("I", 16, 50, translation(100, 200))
        assert [(p.x, p.y) for p in path.points] == [(108, 204), (108, 246)]

    def test_color_applied_to_every_stroke(self) -> None:
        red = StrokeColor(1, 0, 0)
        paths = text_to_paths("AH", 40, 25, color=red)
        assert all(p.color == red for p in paths)

    def test_space_draws_nothing_but_advances(self) -> None:
        paths = text_to_paths(" I", 24, 25)
        assert len(paths) == 1
        assert paths[0].points[0].x == 16 + 4

    def test_missing_character_advances_like_space(self) -> None:
        paths = text_to_paths("éI", 24, 25)
        assert len(paths) == 1
        assert paths[0].points[0].x == 16 + 4

    def test_empty_text(self) -> None:
        assert text_to_paths("", 10, 10) == []

    @pytest.mark.parametrize("w, h", [(0, 10), (10, 0)])
    def test_degenerate_box_yields_no_paths(self, w: float, h: float) -> None:
        assert text_to_paths("Hello", w, h) == []

    def test_whitespace_only_text_yields_no_paths(self) -> None:
        assert text_to_paths("   ", 10, 10) == []
