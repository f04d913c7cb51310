"""Parser for the host's freeform path-data strings.

Grammar (a subset of SVG path data)::

    path    := command*
    command := letter number*
    letter  := M | L | C | Q | Z        (case-insensitive, always absolute)
    number  := float, separated by whitespace and/or commas

Argument counts: ``M``/``L`` take 2, ``Q`` takes 4, ``C`` takes 6, ``Z``
takes none.  Extra trailing numbers are ignored.  A command with too few
numbers, or with a token that is not a number, is skipped and parsing
continues with the next command.

Every coordinate is pushed through the node's absolute transform before it
is stored.  Curves are flattened in absolute space so the flattening
tolerance is measured in document units regardless of node scaling.
"""

from __future__ import annotations

import logging
import math
import re

import numpy as np

from vector_gcode.errors import MalformedCommand
from vector_gcode.geometry.bezier import flatten_cubic, flatten_quadratic
from vector_gcode.geometry.transform import IDENTITY, transform_point
from vector_gcode.geometry.types import Path, Point

logger = logging.getLogger(__name__)

_COMMAND_RE = re.compile(r"[MLCQZ][^MLCQZ]*", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[\s,]+")

_ARITY = {"M": 2, "L": 2, "C": 6, "Q": 4, "Z": 0}


def tokenize_path_data(data: str) -> list[str]:
    """Split path data into raw command chunks (letter + argument text)."""
    return _COMMAND_RE.findall(data or "")


def decode_command(chunk: str) -> tuple[str, list[float]]:
    """Decode one command chunk into ``(letter, args)``.

    Raises
    ------
    MalformedCommand
        If an argument is not a number or there are too few arguments.
    """
    letter = chunk[0].upper()
    raw = [tok for tok in _SEPARATOR_RE.split(chunk[1:].strip()) if tok]
    try:
        args = [float(tok) for tok in raw]
    except ValueError as exc:
        raise MalformedCommand(chunk, f"non-numeric argument ({exc})") from exc
    if not all(math.isfinite(v) for v in args):
        raise MalformedCommand(chunk, "non-finite argument")

    needed = _ARITY[letter]
    if len(args) < needed:
        raise MalformedCommand(
            chunk, f"expected {needed} arguments, got {len(args)}"
        )
    return letter, args


def parse_path_data(
    data: str,
    transform: np.ndarray = IDENTITY,
) -> Path:
    """Parse path data into a single absolute-space :class:`Path`.

    Parameters
    ----------
    data : str
        Path-data string, e.g. ``"M 0 0 L 10 0 C 10 5 5 10 0 10 Z"``.
    transform : np.ndarray
        Absolute 2x3 node transform.

    Returns
    -------
    Path
        Uncolored path.  ``closed`` is ``True`` if any ``Z`` was seen.
        Subsequent ``M`` commands do not start a new path; they append a
        vertex like ``L``.
    """
    points: list[Point] = []
    closed = False
    cur_x = 0.0
    cur_y = 0.0

    for chunk in tokenize_path_data(data):
        try:
            letter, args = decode_command(chunk)
        except MalformedCommand as exc:
            logger.debug("Skipping %s", exc)
            continue

        if letter in ("M", "L"):
            cur_x, cur_y = args[0], args[1]
            points.append(transform_point(cur_x, cur_y, transform))

        elif letter == "C":
            p0 = transform_point(cur_x, cur_y, transform)
            p1 = transform_point(args[0], args[1], transform)
            p2 = transform_point(args[2], args[3], transform)
            p3 = transform_point(args[4], args[5], transform)
            points.extend(flatten_cubic(p0, p1, p2, p3))
            cur_x, cur_y = args[4], args[5]

        elif letter == "Q":
            p0 = transform_point(cur_x, cur_y, transform)
            p1 = transform_point(args[0], args[1], transform)
            p2 = transform_point(args[2], args[3], transform)
            points.extend(flatten_quadratic(p0, p1, p2))
            cur_x, cur_y = args[2], args[3]

        else:  # Z
            closed = True
            # Exact comparison: a rounding difference leaves a duplicate
            # (zero-length) closing segment.
            if points and points[-1] != points[0]:
                points.append(points[0])

    return Path(points=tuple(points), closed=closed)
