"""Stroke font engine -- text to single-stroke pen paths.

Text is laid out in glyph design units (see :mod:`vector_gcode.text.glyphs`)
and then stretched independently in X and Y so the block exactly fills the
box the host reported for the text node.  Aspect ratio is not preserved.

Every glyph stroke becomes its own open :class:`Path`, so the pen lifts
between strokes even inside one character.

Font resources needed by the host to report an accurate box are the
caller's concern; nothing here loads or waits for anything.
"""

from __future__ import annotations

import logging

import numpy as np

from vector_gcode.errors import DegenerateText
from vector_gcode.geometry.transform import IDENTITY, to_points, transform_points
from vector_gcode.geometry.types import Path, StrokeColor
from vector_gcode.text.glyphs import GLYPHS, LINE_PITCH, advance_of

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Explicit lines; a trailing newline yields a trailing empty line.

    Only ``\\n`` splits.  A ``\\r`` stays in its line and advances like any
    missing glyph.
    """
    return text.split("\n")


def measure_text(text: str) -> tuple[float, float]:
    """Design-unit extent of *text*.

    Returns
    -------
    tuple[float, float]
        ``(width, height)`` where width is the widest line's summed
        advances and height is ``line_count * LINE_PITCH``.
    """
    lines = split_lines(text)
    width = max((sum(advance_of(ch) for ch in line) for line in lines), default=0.0)
    return float(width), float(len(lines) * LINE_PITCH)


def fit_scale(text: str, target_width: float, target_height: float) -> tuple[float, float]:
    """Per-axis factors mapping the design extent onto the target box.

    Raises
    ------
    DegenerateText
        If the design or target extent is zero in either axis.
    """
    design_w, design_h = measure_text(text)
    if design_w == 0 or design_h == 0:
        raise DegenerateText(f"text {text!r} has zero design extent")
    if target_width == 0 or target_height == 0:
        raise DegenerateText(
            f"target box {target_width} x {target_height} has zero extent"
        )
    return target_width / design_w, target_height / design_h


def text_to_paths(
    text: str,
    target_width: float,
    target_height: float,
    transform: np.ndarray = IDENTITY,
    color: StrokeColor | None = None,
) -> list[Path]:
    """Render *text* as open stroke paths in absolute space.

    Parameters
    ----------
    text : str
        Literal characters; ``"\\n"`` starts a new line.
    target_width, target_height : float
        Post-layout size of the text box (local units).
    transform : np.ndarray
        Absolute 2x3 transform of the text node.
    color : StrokeColor | None
        Stroke color given to every produced path.

    Returns
    -------
    list[Path]
        One path per glyph stroke.  Empty for degenerate text.
    """
    if not text:
        return []
    try:
        scale_x, scale_y = fit_scale(text, target_width, target_height)
    except DegenerateText as exc:
        logger.debug("Skipping text: %s", exc)
        return []

    paths: list[Path] = []
    for line_index, line in enumerate(split_lines(text)):
        cursor_x = 0.0
        baseline = line_index * LINE_PITCH
        for char in line:
            glyph = GLYPHS.get(char)
            if glyph is None:
                cursor_x += advance_of(char)
                continue

            for stroke in glyph.strokes:
                if len(stroke) < 2:
                    continue
                raw = np.array(stroke, dtype=np.float64)
                local = np.column_stack(
                    [(cursor_x + raw[:, 0]) * scale_x, (baseline + raw[:, 1]) * scale_y]
                )
                points = to_points(transform_points(local, transform))
                paths.append(Path(points=tuple(points), closed=False, color=color))

            cursor_x += glyph.advance

    return paths
