"""Hershey simplex single-stroke glyph table.

Design space: a 21-unit nominal em on a 21 x 33 grid, +Y down, cap line
near y=2 and baseline near y=23; lines are pitched 25 units apart.  Each
raw entry is ``advance_width, [stroke, ...]`` where a stroke is a flat
``[x1, y1, x2, y2, ...]`` list.  The table covers printable ASCII; any
other character advances by the space width and draws nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class Glyph:
    """One character: advance width plus open polyline strokes."""

    advance: float
    strokes: tuple[tuple[tuple[float, float], ...], ...]


LINE_PITCH = 25
"""Vertical advance between text lines, in design units."""

DEFAULT_ADVANCE = 16
"""Advance for characters missing from the table (and for space)."""


_RAW: dict[str, tuple[int, list[list[int]]]] = {
    ' ': (16, []),
    '!': (10, [
        [5, 2, 5, 14],
        [5, 19, 4, 20, 5, 21, 6, 20, 5, 19],
    ]),
    '"': (16, [
        [4, 2, 4, 9],
        [12, 2, 12, 9],
    ]),
    '#': (21, [
        [11, 4, 4, 25],
        [17, 4, 10, 25],
        [4, 12, 18, 12],
        [3, 18, 17, 18],
    ]),
    '$': (20, [
        [8, 1, 8, 26],
        [12, 1, 12, 26],
        [17, 6, 15, 4, 12, 3, 8, 3, 5, 4, 3, 6, 3, 8, 4, 10, 5, 11, 7, 12, 13, 14, 15, 15, 16, 16, 17, 18, 17, 20, 15, 22, 12, 23, 8, 23, 5, 22, 3, 20],
    ]),
    '%': (24, [
        [21, 2, 3, 23],
        [8, 2, 10, 4, 10, 6, 9, 8, 7, 9, 5, 9, 3, 7, 3, 5, 4, 3, 6, 2, 8, 2, 10, 3, 13, 4, 16, 4, 19, 3, 21, 2],
        [17, 16, 15, 17, 14, 19, 14, 21, 16, 23, 18, 23, 20, 22, 21, 20, 21, 18, 19, 16, 17, 16],
    ]),
    '&': (26, [
        [23, 9, 23, 10, 22, 11, 21, 11, 20, 10, 19, 8, 17, 4, 15, 2, 13, 1, 10, 1, 7, 2, 5, 4, 4, 6, 4, 8, 5, 10, 14, 19, 15, 21, 15, 23, 14, 24, 12, 24, 10, 22, 7, 16, 5, 13, 3, 11, 1, 10, 0, 10],
    ]),
    '\'': (10, [
        [5, 3, 4, 2, 5, 1, 6, 2, 6, 4, 5, 6, 4, 7],
    ]),
    '(': (14, [
        [11, 1, 9, 3, 7, 6, 5, 10, 4, 15, 4, 19, 5, 23, 7, 26, 9, 28, 11, 30],
    ]),
    ')': (14, [
        [3, 1, 5, 3, 7, 6, 9, 10, 10, 15, 10, 19, 9, 23, 7, 26, 5, 28, 3, 30],
    ]),
    '*': (16, [
        [8, 7, 8, 19],
        [3, 10, 13, 16],
        [13, 10, 3, 16],
    ]),
    '+': (26, [
        [13, 4, 13, 22],
        [4, 13, 22, 13],
    ]),
    ',': (10, [
        [6, 18, 5, 19, 4, 18, 5, 17, 6, 18, 6, 20, 5, 22, 4, 23],
    ]),
    '-': (26, [
        [4, 13, 22, 13],
    ]),
    '.': (10, [
        [5, 18, 4, 19, 5, 20, 6, 19, 5, 18],
    ]),
    '/': (22, [
        [20, 1, 2, 30],
    ]),
    '0': (20, [
        [9, 2, 6, 3, 4, 6, 3, 10, 3, 15, 4, 19, 6, 22, 9, 23, 11, 23, 14, 22, 16, 19, 17, 15, 17, 10, 16, 6, 14, 3, 11, 2, 9, 2],
    ]),
    '1': (20, [
        [6, 6, 8, 5, 11, 2, 11, 23],
    ]),
    '2': (20, [
        [4, 7, 4, 6, 5, 4, 6, 3, 8, 2, 12, 2, 14, 3, 15, 4, 16, 6, 16, 8, 15, 10, 13, 13, 3, 23, 17, 23],
    ]),
    '3': (20, [
        [5, 2, 16, 2, 10, 11, 13, 11, 15, 12, 16, 13, 17, 16, 17, 17, 16, 20, 14, 22, 11, 23, 8, 23, 5, 22, 4, 21, 3, 19],
    ]),
    '4': (20, [
        [13, 2, 3, 15, 18, 15],
        [13, 2, 13, 23],
    ]),
    '5': (20, [
        [15, 2, 5, 2, 4, 11, 5, 10, 8, 9, 11, 9, 14, 10, 16, 12, 17, 15, 17, 17, 16, 20, 14, 22, 11, 23, 8, 23, 5, 22, 4, 21, 3, 19],
    ]),
    '6': (20, [
        [16, 5, 15, 3, 12, 2, 10, 2, 7, 3, 5, 6, 4, 10, 4, 15, 5, 19, 7, 22, 10, 23, 11, 23, 14, 22, 16, 20, 17, 17, 17, 16, 16, 13, 14, 11, 11, 10, 10, 10, 7, 11, 5, 13, 4, 15],
    ]),
    '7': (20, [
        [17, 2, 7, 23],
        [3, 2, 17, 2],
    ]),
    '8': (20, [
        [8, 2, 5, 3, 4, 5, 4, 7, 5, 9, 7, 11, 11, 13, 14, 15, 16, 17, 17, 19, 17, 21, 16, 22, 14, 23, 6, 23, 4, 22, 3, 21, 3, 19, 4, 17, 6, 15, 9, 13, 13, 11, 15, 9, 16, 7, 16, 5, 15, 3, 12, 2, 8, 2],
    ]),
    '9': (20, [
        [16, 10, 15, 13, 13, 15, 10, 16, 9, 16, 6, 15, 4, 13, 3, 10, 3, 9, 4, 6, 6, 4, 9, 2, 10, 2, 13, 3, 15, 5, 16, 10, 16, 15, 15, 20, 13, 22, 10, 23, 8, 23, 5, 22, 4, 20],
    ]),
    ':': (10, [
        [5, 8, 4, 9, 5, 10, 6, 9, 5, 8],
        [5, 18, 4, 19, 5, 20, 6, 19, 5, 18],
    ]),
    ';': (10, [
        [5, 8, 4, 9, 5, 10, 6, 9, 5, 8],
        [6, 18, 5, 19, 4, 18, 5, 17, 6, 18, 6, 20, 5, 22, 4, 23],
    ]),
    '<': (24, [
        [20, 4, 4, 13, 20, 22],
    ]),
    '=': (26, [
        [4, 10, 22, 10],
        [4, 16, 22, 16],
    ]),
    '>': (24, [
        [4, 4, 20, 13, 4, 22],
    ]),
    '?': (18, [
        [3, 6, 3, 5, 4, 3, 5, 2, 8, 1, 11, 1, 14, 2, 15, 3, 16, 5, 16, 7, 15, 9, 14, 10, 9, 12, 9, 15],
        [9, 19, 8, 20, 9, 21, 10, 20, 9, 19],
    ]),
    '@': (27, [
        [18, 9, 17, 7, 15, 6, 12, 6, 10, 7, 9, 8, 8, 11, 8, 14, 9, 16, 11, 17, 14, 17, 16, 16, 17, 14],
        [12, 6, 10, 8, 9, 11, 9, 14, 10, 16, 11, 17],
        [18, 6, 17, 14, 17, 16, 19, 17, 21, 17, 23, 15, 24, 12, 24, 10, 23, 7, 22, 5, 20, 3, 18, 2, 15, 1, 12, 1, 9, 2, 7, 3, 5, 5, 4, 7, 3, 10, 3, 13, 4, 16, 5, 18, 7, 20, 9, 21, 12, 22, 15, 22, 18, 21, 20, 20, 21, 19],
        [17, 6, 18, 14, 18, 16, 19, 17],
    ]),
    'A': (18, [
        [9, 2, 1, 23],
        [9, 2, 17, 23],
        [4, 16, 14, 16],
    ]),
    'B': (21, [
        [4, 2, 4, 23],
        [4, 2, 13, 2, 16, 3, 17, 4, 18, 6, 18, 8, 17, 10, 16, 11, 13, 12],
        [4, 12, 13, 12, 16, 13, 17, 14, 18, 16, 18, 19, 17, 21, 16, 22, 13, 23, 4, 23],
    ]),
    'C': (21, [
        [18, 7, 17, 4, 15, 2, 12, 1, 9, 1, 6, 2, 4, 4, 3, 7, 3, 18, 4, 21, 6, 23, 9, 24, 12, 24, 15, 23, 17, 21, 18, 18],
    ]),
    'D': (21, [
        [4, 2, 4, 23],
        [4, 2, 11, 2, 14, 3, 16, 5, 17, 7, 18, 10, 18, 15, 17, 18, 16, 20, 14, 22, 11, 23, 4, 23],
    ]),
    'E': (19, [
        [4, 2, 4, 23],
        [4, 2, 17, 2],
        [4, 12, 12, 12],
        [4, 23, 17, 23],
    ]),
    'F': (18, [
        [4, 2, 4, 23],
        [4, 2, 17, 2],
        [4, 12, 12, 12],
    ]),
    'G': (21, [
        [18, 7, 17, 4, 15, 2, 12, 1, 9, 1, 6, 2, 4, 4, 3, 7, 3, 18, 4, 21, 6, 23, 9, 24, 12, 24, 15, 23, 17, 21, 18, 18, 18, 12, 12, 12],
    ]),
    'H': (22, [
        [4, 2, 4, 23],
        [18, 2, 18, 23],
        [4, 12, 18, 12],
    ]),
    'I': (8, [
        [4, 2, 4, 23],
    ]),
    'J': (16, [
        [12, 2, 12, 18, 11, 21, 10, 22, 8, 23, 6, 23, 4, 22, 3, 21, 2, 18, 2, 16],
    ]),
    'K': (21, [
        [4, 2, 4, 23],
        [18, 2, 4, 15],
        [9, 10, 18, 23],
    ]),
    'L': (17, [
        [4, 2, 4, 23],
        [4, 23, 16, 23],
    ]),
    'M': (24, [
        [4, 2, 4, 23],
        [4, 2, 12, 23],
        [20, 2, 12, 23],
        [20, 2, 20, 23],
    ]),
    'N': (22, [
        [4, 2, 4, 23],
        [4, 2, 18, 23],
        [18, 2, 18, 23],
    ]),
    'O': (22, [
        [9, 1, 6, 2, 4, 4, 3, 7, 3, 18, 4, 21, 6, 23, 9, 24, 13, 24, 16, 23, 18, 21, 19, 18, 19, 7, 18, 4, 16, 2, 13, 1, 9, 1],
    ]),
    'P': (21, [
        [4, 2, 4, 23],
        [4, 2, 13, 2, 16, 3, 17, 4, 18, 6, 18, 9, 17, 11, 16, 12, 13, 13, 4, 13],
    ]),
    'Q': (22, [
        [9, 1, 6, 2, 4, 4, 3, 7, 3, 18, 4, 21, 6, 23, 9, 24, 13, 24, 16, 23, 18, 21, 19, 18, 19, 7, 18, 4, 16, 2, 13, 1, 9, 1],
        [13, 19, 18, 24],
    ]),
    'R': (21, [
        [4, 2, 4, 23],
        [4, 2, 13, 2, 16, 3, 17, 4, 18, 6, 18, 8, 17, 10, 16, 11, 13, 12, 4, 12],
        [11, 12, 18, 23],
    ]),
    'S': (20, [
        [17, 5, 15, 3, 12, 2, 8, 2, 5, 3, 3, 5, 3, 7, 4, 9, 5, 10, 7, 11, 13, 13, 15, 14, 16, 15, 17, 17, 17, 20, 15, 22, 12, 23, 8, 23, 5, 22, 3, 20],
    ]),
    'T': (16, [
        [8, 2, 8, 23],
        [1, 2, 15, 2],
    ]),
    'U': (22, [
        [4, 2, 4, 17, 5, 20, 7, 22, 10, 23, 12, 23, 15, 22, 17, 20, 18, 17, 18, 2],
    ]),
    'V': (18, [
        [1, 2, 9, 23],
        [17, 2, 9, 23],
    ]),
    'W': (24, [
        [2, 2, 6, 23],
        [10, 2, 6, 23],
        [10, 2, 14, 23],
        [18, 2, 14, 23],
    ]),
    'X': (20, [
        [3, 2, 17, 23],
        [17, 2, 3, 23],
    ]),
    'Y': (18, [
        [1, 2, 9, 13, 9, 23],
        [17, 2, 9, 13],
    ]),
    'Z': (20, [
        [17, 2, 3, 23],
        [3, 2, 17, 2],
        [3, 23, 17, 23],
    ]),
    '[': (14, [
        [4, 1, 4, 30],
        [5, 1, 5, 30],
        [4, 1, 11, 1],
        [4, 30, 11, 30],
    ]),
    '\\': (14, [
        [0, 1, 14, 30],
    ]),
    ']': (14, [
        [9, 1, 9, 30],
        [10, 1, 10, 30],
        [3, 1, 10, 1],
        [3, 30, 10, 30],
    ]),
    '^': (16, [
        [8, 4, 0, 18],
        [8, 4, 16, 18],
    ]),
    '_': (18, [
        [0, 30, 18, 30],
    ]),
    '`': (10, [
        [6, 1, 5, 2, 4, 1, 5, 0, 6, 1, 6, 3, 5, 5, 4, 6],
    ]),
    'a': (19, [
        [15, 8, 15, 23],
        [15, 11, 13, 9, 11, 8, 8, 8, 5, 9, 3, 11, 2, 14, 2, 17, 3, 20, 5, 22, 8, 23, 11, 23, 13, 22, 15, 20],
    ]),
    'b': (19, [
        [4, 2, 4, 23],
        [4, 11, 6, 9, 8, 8, 11, 8, 14, 9, 16, 11, 17, 14, 17, 17, 16, 20, 14, 22, 11, 23, 8, 23, 6, 22, 4, 20],
    ]),
    'c': (18, [
        [17, 11, 15, 9, 13, 8, 10, 8, 7, 9, 5, 11, 4, 14, 4, 17, 5, 20, 7, 22, 10, 23, 13, 23, 15, 22, 17, 20],
    ]),
    'd': (19, [
        [15, 2, 15, 23],
        [15, 11, 13, 9, 11, 8, 8, 8, 5, 9, 3, 11, 2, 14, 2, 17, 3, 20, 5, 22, 8, 23, 11, 23, 13, 22, 15, 20],
    ]),
    'e': (18, [
        [4, 15, 17, 15, 17, 13, 16, 10, 15, 9, 13, 8, 10, 8, 7, 9, 5, 11, 4, 14, 4, 17, 5, 20, 7, 22, 10, 23, 13, 23, 15, 22, 17, 20],
    ]),
    'f': (12, [
        [10, 2, 8, 2, 6, 3, 5, 6, 5, 23],
        [2, 9, 9, 9],
    ]),
    'g': (19, [
        [15, 8, 15, 27, 14, 30, 13, 31, 10, 32, 8, 32],
        [15, 11, 13, 9, 11, 8, 8, 8, 5, 9, 3, 11, 2, 14, 2, 17, 3, 20, 5, 22, 8, 23, 11, 23, 13, 22, 15, 20],
    ]),
    'h': (19, [
        [4, 2, 4, 23],
        [4, 12, 7, 9, 9, 8, 12, 8, 15, 9, 16, 12, 16, 23],
    ]),
    'i': (8, [
        [3, 2, 4, 3, 5, 2, 4, 1, 3, 2],
        [4, 8, 4, 23],
    ]),
    'j': (10, [
        [5, 2, 6, 3, 7, 2, 6, 1, 5, 2],
        [6, 8, 6, 27, 5, 30, 3, 31, 1, 31],
    ]),
    'k': (17, [
        [4, 2, 4, 23],
        [14, 8, 4, 18],
        [8, 14, 15, 23],
    ]),
    'l': (8, [
        [4, 2, 4, 23],
    ]),
    'm': (30, [
        [4, 8, 4, 23],
        [4, 12, 7, 9, 9, 8, 12, 8, 15, 9, 16, 12, 16, 23],
        [16, 12, 19, 9, 21, 8, 24, 8, 27, 9, 28, 12, 28, 23],
    ]),
    'n': (19, [
        [4, 8, 4, 23],
        [4, 12, 7, 9, 9, 8, 12, 8, 15, 9, 16, 12, 16, 23],
    ]),
    'o': (19, [
        [10, 8, 7, 9, 5, 11, 4, 14, 4, 17, 5, 20, 7, 22, 10, 23, 12, 23, 15, 22, 17, 20, 18, 17, 18, 14, 17, 11, 15, 9, 12, 8, 10, 8],
    ]),
    'p': (19, [
        [4, 8, 4, 32],
        [4, 11, 6, 9, 8, 8, 11, 8, 14, 9, 16, 11, 17, 14, 17, 17, 16, 20, 14, 22, 11, 23, 8, 23, 6, 22, 4, 20],
    ]),
    'q': (19, [
        [15, 8, 15, 32],
        [15, 11, 13, 9, 11, 8, 8, 8, 5, 9, 3, 11, 2, 14, 2, 17, 3, 20, 5, 22, 8, 23, 11, 23, 13, 22, 15, 20],
    ]),
    'r': (13, [
        [4, 8, 4, 23],
        [4, 14, 5, 11, 7, 9, 9, 8, 12, 8],
    ]),
    's': (17, [
        [15, 10, 14, 9, 11, 8, 7, 8, 4, 9, 3, 11, 4, 13, 7, 14, 11, 15, 14, 16, 15, 18, 15, 20, 14, 22, 11, 23, 7, 23, 4, 22, 3, 21],
    ]),
    't': (12, [
        [5, 2, 5, 19, 6, 22, 8, 23, 10, 23],
        [2, 8, 9, 8],
    ]),
    'u': (19, [
        [4, 8, 4, 19, 5, 22, 8, 23, 11, 23, 13, 22, 15, 19],
        [15, 8, 15, 23],
    ]),
    'v': (16, [
        [2, 8, 8, 23],
        [14, 8, 8, 23],
    ]),
    'w': (22, [
        [3, 8, 6, 23],
        [9, 8, 6, 23],
        [9, 8, 12, 23],
        [15, 8, 12, 23],
    ]),
    'x': (17, [
        [3, 8, 14, 23],
        [14, 8, 3, 23],
    ]),
    'y': (16, [
        [2, 8, 8, 23],
        [14, 8, 8, 23, 6, 27, 4, 30, 2, 31, 1, 31],
    ]),
    'z': (17, [
        [14, 8, 3, 23],
        [3, 8, 14, 8],
        [3, 23, 14, 23],
    ]),
    '{': (14, [
        [9, 1, 7, 2, 6, 3, 5, 5, 5, 7, 6, 9, 7, 10, 8, 12, 8, 14, 6, 16],
        [7, 2, 6, 4, 6, 6, 7, 8, 8, 9, 9, 11, 9, 13, 8, 15, 4, 17, 8, 19, 9, 21, 9, 23, 8, 25, 7, 26, 6, 28, 6, 30, 7, 32],
        [6, 18, 8, 20, 8, 22, 7, 24, 6, 25, 5, 27, 5, 29, 6, 31, 7, 32, 9, 33],
    ]),
    '|': (8, [
        [4, 1, 4, 33],
    ]),
    '}': (14, [
        [5, 1, 7, 2, 8, 3, 9, 5, 9, 7, 8, 9, 7, 10, 6, 12, 6, 14, 8, 16],
        [7, 2, 8, 4, 8, 6, 7, 8, 6, 9, 5, 11, 5, 13, 6, 15, 10, 17, 6, 19, 5, 21, 5, 23, 6, 25, 7, 26, 8, 28, 8, 30, 7, 32],
        [8, 18, 6, 20, 6, 22, 7, 24, 8, 25, 9, 27, 9, 29, 8, 31, 7, 32, 5, 33],
    ]),
    '~': (24, [
        [3, 16, 3, 14, 4, 11, 6, 10, 8, 10, 10, 11, 14, 14, 16, 15, 18, 15, 20, 14, 21, 12],
        [21, 16, 21, 12, 20, 9, 18, 8, 16, 8, 14, 9, 10, 12, 8, 13, 6, 13, 4, 12, 3, 10],
    ]),
}


def _build(raw: dict[str, tuple[int, list[list[int]]]]) -> Mapping[str, Glyph]:
    table = {}
    for char, (advance, strokes) in raw.items():
        table[char] = Glyph(
            advance=float(advance),
            strokes=tuple(
                tuple(
                    (float(flat[i]), float(flat[i + 1]))
                    for i in range(0, len(flat) - 1, 2)
                )
                for flat in strokes
            ),
        )
    return MappingProxyType(table)


GLYPHS: Mapping[str, Glyph] = _build(_RAW)


def advance_of(char: str) -> float:
    """Advance width of *char*, falling back to the space width."""
    glyph = GLYPHS.get(char)
    if glyph is not None:
        return glyph.advance
    space = GLYPHS.get(" ")
    return space.advance if space is not None else float(DEFAULT_ADVANCE)
