"""G-code emitter -- color buckets to a plotter program.

All coordinate transforms (origin offset, Y flip, unit scale) are applied
**here**.  The program uses absolute positioning only.

Coordinate transform::

    out_x = (x - origin.x) / scale
    out_y = (origin.height - (y - origin.y)) / scale

Document +Y points down; machine +Y points up.  The flip puts machine
``Y = 0`` on the bottom edge of the origin frame and the frame's top edge
at ``Y = height / scale``.

Program layout::

    header comments, units (G21/G20), G90, G17, pen up
    per bucket:  banner comment
                 per path: G0 to start, pen down, G1 per point, pen up
                 between buckets: pen up, G0 X0 Y0, M0 (change pen)
    footer:      G0 X0 Y0, M2

Coordinates always carry exactly three decimals.  Empty paths are skipped
entirely and never counted.
"""

from __future__ import annotations

import logging
import math
from io import StringIO
from typing import Sequence

import numpy as np

from vector_gcode.configs.loader import Settings
from vector_gcode.geometry.types import Path
from vector_gcode.toolpath.grouping import ColorBucket
from vector_gcode.toolpath.origin import Origin, OriginSource

logger = logging.getLogger(__name__)

BANNER = "; Generated by vector_gcode"
RULE = "; " + "=" * 40
PAUSE_CMD = "M0 ; Pause - change to next pen, then resume"
END_CMD = "M2"
HOME_RAPID = "G0 X0 Y0"


class GCodeError(Exception):
    """Raised when G-code generation fails due to invalid input."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_coord(value: float) -> str:
    """Fixed three-decimal rendering; never ``-0.000``."""
    text = f"{value:.3f}"
    return "0.000" if text == "-0.000" else text


def format_number(value: float) -> str:
    """Shortest plain rendering: ``1000`` not ``1000.0``; ``1500.5`` as is."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


# ---------------------------------------------------------------------------
# Emitter
# ---------------------------------------------------------------------------


class GCodeEmitter:
    """Serialize color buckets into a G-code program.

    Parameters
    ----------
    settings : Settings
        Validated settings (units, scale, feed rate, pen commands).

    Notes
    -----
    ``Settings`` cannot be constructed with ``scale <= 0`` or
    ``feed_rate <= 0``, so the divisions below are always defined.
    """

    def __init__(self, settings: Settings) -> None:
        self._cfg = settings
        self._feed = format_number(settings.feed_rate)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def to_machine(self, path: Path, origin: Origin) -> np.ndarray:
        """Machine-space ``(N, 2)`` coordinates of *path*'s points."""
        scale = self._cfg.scale
        coords = np.array([(p.x, p.y) for p in path.points], dtype=np.float64).reshape(-1, 2)
        out = np.empty_like(coords)
        out[:, 0] = (coords[:, 0] - origin.x) / scale
        out[:, 1] = (origin.height - (coords[:, 1] - origin.y)) / scale
        return out

    def emit(self, buckets: Sequence[ColorBucket], origin: Origin) -> str:
        """Generate the complete program.

        Parameters
        ----------
        buckets : Sequence[ColorBucket]
            Ordered color buckets; each becomes one tool section.
        origin : Origin
            Reference frame for the coordinate transform.

        Returns
        -------
        str
            Program text, one command or comment per line.

        Raises
        ------
        GCodeError
            If the origin is not finite.
        """
        self._validate_origin(origin)

        sections = [
            (bucket.key, [p for p in bucket.paths if p.points])
            for bucket in buckets
        ]
        sections = [(key, paths) for key, paths in sections if paths]
        path_total = sum(len(paths) for _, paths in sections)

        buf = StringIO()
        self._write_header(buf, path_total, len(sections), origin)

        index = 0
        for section_no, (key, paths) in enumerate(sections):
            self._line(buf, "")
            self._line(buf, RULE)
            self._line(buf, f"; Color: {key} ({_plural(len(paths), 'path')})")
            self._line(buf, RULE)

            for path in paths:
                index += 1
                self._write_path(buf, index, path, origin)

            if section_no < len(sections) - 1:
                self._write_tool_change(buf)

        self._write_footer(buf)
        logger.info(
            "Emitted %d paths in %d color groups", path_total, len(sections)
        )
        return buf.getvalue()

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    @staticmethod
    def _line(buf: StringIO, text: str) -> None:
        buf.write(text)
        buf.write("\n")

    def _write_header(
        self, buf: StringIO, path_total: int, group_total: int, origin: Origin
    ) -> None:
        source = (
            "existing frame"
            if origin.source == OriginSource.EXISTING
            else "auto-generated frame"
        )
        self._line(buf, BANNER)
        self._line(buf, f"; Units: {self._cfg.units}")
        self._line(buf, f"; Paths: {path_total}")
        self._line(buf, f"; Color groups: {group_total}")
        self._line(buf, f"; Origin: {source}")
        self._line(buf, "")
        self._line(buf, "G21" if self._cfg.units == "mm" else "G20")
        self._line(buf, "G90")
        self._line(buf, "G17")
        self._line(buf, "")
        self._line(buf, self._cfg.pen_up_cmd)

    def _write_path(self, buf: StringIO, index: int, path: Path, origin: Origin) -> None:
        coords = self.to_machine(path, origin)
        self._line(buf, "")
        self._line(buf, f"; Path {index}")
        x0, y0 = coords[0]
        self._line(buf, f"G0 X{format_coord(x0)} Y{format_coord(y0)}")
        self._line(buf, self._cfg.pen_down_cmd)
        for x, y in coords[1:]:
            self._line(buf, f"G1 X{format_coord(x)} Y{format_coord(y)} F{self._feed}")
        self._line(buf, self._cfg.pen_up_cmd)

    def _write_tool_change(self, buf: StringIO) -> None:
        self._line(buf, "")
        self._line(buf, "; Return to origin for pen change")
        self._line(buf, self._cfg.pen_up_cmd)
        self._line(buf, HOME_RAPID)
        self._line(buf, PAUSE_CMD)

    def _write_footer(self, buf: StringIO) -> None:
        self._line(buf, "")
        self._line(buf, "; End")
        self._line(buf, HOME_RAPID)
        self._line(buf, END_CMD)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_origin(origin: Origin) -> None:
        for name in ("x", "y", "height"):
            value = getattr(origin, name)
            if not math.isfinite(value):
                raise GCodeError(f"Origin {name}={value} is not finite")


def emit_program(
    buckets: Sequence[ColorBucket],
    origin: Origin,
    settings: Settings,
) -> str:
    """Convenience wrapper: ``GCodeEmitter(settings).emit(buckets, origin)``."""
    return GCodeEmitter(settings).emit(buckets, origin)
