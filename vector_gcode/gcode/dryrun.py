"""Offline dry run of an emitted program.

Parses the program text without any hardware and reports what a plotter
would do: how many command lines it executes, how many rapid and feed
moves, how many pen changes, and where the pen actually touches paper.

Tracks:
    - Current XY position (absolute, G90 assumed)
    - Pen state, toggled by lines matching the configured pen commands
    - Tool sections, split at ``M0`` pauses

Usage::

    stats = inspect_program(program, settings)
    print(stats.command_lines, stats.draw_bounds)
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field

from vector_gcode.configs.loader import Settings

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"([A-Za-z])\s*([-+]?(?:\d+\.?\d*|\.\d+))")


def count_program_lines(program: str) -> int:
    """Non-blank lines that are not ``;`` comments."""
    return sum(
        1 for line in program.split("\n")
        if line.strip() and not line.startswith(";")
    )


@dataclass
class ProgramStats:
    """Result of :func:`inspect_program`.

    Attributes
    ----------
    command_lines : int
        Same count as :func:`count_program_lines`.
    rapid_moves, feed_moves : int
        ``G0`` / ``G1`` lines carrying X or Y words.
    pen_downs : int
        Pen-down commands executed.
    sections : int
        Tool sections (``M0`` pauses + 1).
    strokes_per_section : list[int]
        Pen-downs counted per section.
    draw_bounds : tuple[float, float, float, float] | None
        ``(min_x, min_y, max_x, max_y)`` over positions touched with the
        pen down, ``None`` if nothing was drawn.
    draw_length : float
        Total pen-down travel in machine units.
    ended : bool
        ``M2`` was reached.
    """

    command_lines: int = 0
    rapid_moves: int = 0
    feed_moves: int = 0
    pen_downs: int = 0
    sections: int = 1
    strokes_per_section: list[int] = field(default_factory=lambda: [0])
    draw_bounds: tuple[float, float, float, float] | None = None
    draw_length: float = 0.0
    ended: bool = False

    def _touch(self, x: float, y: float) -> None:
        if self.draw_bounds is None:
            self.draw_bounds = (x, y, x, y)
            return
        x0, y0, x1, y1 = self.draw_bounds
        self.draw_bounds = (min(x0, x), min(y0, y), max(x1, x), max(y1, y))


def _first_line(cmd: str) -> str:
    return cmd.strip().split("\n")[0].strip()


def inspect_program(program: str, settings: Settings) -> ProgramStats:
    """Dry-run *program* and collect :class:`ProgramStats`.

    Parameters
    ----------
    program : str
        Program text as produced by the emitter.
    settings : Settings
        Supplies the pen commands used to track pen state.
    """
    pen_down = _first_line(settings.pen_down_cmd)
    pen_up = _first_line(settings.pen_up_cmd)

    stats = ProgramStats(command_lines=count_program_lines(program))
    x = y = 0.0
    is_down = False

    for raw in program.split("\n"):
        line = raw.strip()
        if not line or line.startswith(";"):
            continue

        if line == pen_down:
            is_down = True
            stats.pen_downs += 1
            stats.strokes_per_section[-1] += 1
            stats._touch(x, y)
            continue
        if line == pen_up:
            is_down = False
            continue

        code = line.split(";", 1)[0].strip()
        words = {k.upper(): float(v) for k, v in _WORD_RE.findall(code)}
        head = code.split()[0].upper() if code else ""

        if head in ("G0", "G00", "G1", "G01") and ("X" in words or "Y" in words):
            nx = words.get("X", x)
            ny = words.get("Y", y)
            if head in ("G0", "G00"):
                stats.rapid_moves += 1
            else:
                stats.feed_moves += 1
            if is_down:
                stats.draw_length += math.hypot(nx - x, ny - y)
                stats._touch(nx, ny)
            x, y = nx, ny
        elif head in ("M0", "M00"):
            stats.sections += 1
            stats.strokes_per_section.append(0)
        elif head in ("M2", "M02", "M30"):
            stats.ended = True

    logger.debug(
        "Dry run: %d command lines, %d pen-downs, %d sections",
        stats.command_lines, stats.pen_downs, stats.sections,
    )
    return stats
