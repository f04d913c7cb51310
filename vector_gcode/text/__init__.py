"""
Single-stroke text rendering.

Hershey simplex glyph table and the engine that fits laid-out text into a
host-reported box.
"""

from vector_gcode.text.glyphs import DEFAULT_ADVANCE, GLYPHS, LINE_PITCH, Glyph
from vector_gcode.text.stroke_font import fit_scale, measure_text, text_to_paths

__all__ = [
    "DEFAULT_ADVANCE",
    "GLYPHS",
    "LINE_PITCH",
    "Glyph",
    "fit_scale",
    "measure_text",
    "text_to_paths",
]
