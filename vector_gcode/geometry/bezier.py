"""Adaptive Bezier flattening.

Curves are approximated by polylines through recursive De Casteljau
subdivision at ``t = 0.5``.  A segment is accepted once both inner control
points lie within ``tolerance`` of the chord; the curve is contained in the
control polygon's convex hull, so the polyline never deviates from the true
curve by more than the tolerance.

Quadratic segments are degree-elevated to cubic (2/3 rule) and flattened
by the same routine.

All coordinates are absolute document units; the single tolerance constant
applies uniformly.  Recursion is capped at ``MAX_DEPTH`` levels so
coincident or degenerate control points can never recurse without bound
(at the cap the remaining segment is emitted as a straight chord).
"""

from __future__ import annotations

import math

from vector_gcode.geometry.types import Point

BEZIER_TOLERANCE = 0.5
"""Maximum chord deviation in document units."""

MAX_DEPTH = 24
"""Subdivision depth cap (2**24 segments worst case per curve)."""


def _midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def point_to_line_distance(p: Point, a: Point, b: Point) -> float:
    """Perpendicular distance from *p* to the infinite line through *a*, *b*.

    Uses the 2-D cross product magnitude divided by chord length.  When
    *a* and *b* coincide, falls back to the Euclidean distance ``|p - a|``.
    """
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return math.hypot(p.x - a.x, p.y - a.y)
    cross = abs((p.x - a.x) * dy - (p.y - a.y) * dx)
    return cross / math.sqrt(length_sq)


def cubic_flatness(p0: Point, p1: Point, p2: Point, p3: Point) -> float:
    """Max distance of the inner control points from chord ``p0 -> p3``."""
    return max(
        point_to_line_distance(p1, p0, p3),
        point_to_line_distance(p2, p0, p3),
    )


def flatten_cubic(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    tolerance: float = BEZIER_TOLERANCE,
    max_depth: int = MAX_DEPTH,
) -> list[Point]:
    """Flatten a cubic Bezier to a polyline.

    Parameters
    ----------
    p0, p1, p2, p3 : Point
        Start, first control, second control, end (absolute space).
    tolerance : float
        Maximum allowed chord deviation, default ``BEZIER_TOLERANCE``.
    max_depth : int
        Subdivision depth cap, default ``MAX_DEPTH``.

    Returns
    -------
    list[Point]
        Polyline vertices **excluding** ``p0`` (the caller already holds
        the current point).  Always ends with ``p3``.

    Raises
    ------
    ValueError
        If *tolerance* is negative or *max_depth* is negative.
    """
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    out: list[Point] = []

    def subdivide(q0: Point, q1: Point, q2: Point, q3: Point, depth: int) -> None:
        if depth >= max_depth or cubic_flatness(q0, q1, q2, q3) <= tolerance:
            out.append(q3)
            return

        # De Casteljau at t = 0.5
        q01 = _midpoint(q0, q1)
        q12 = _midpoint(q1, q2)
        q23 = _midpoint(q2, q3)
        q012 = _midpoint(q01, q12)
        q123 = _midpoint(q12, q23)
        mid = _midpoint(q012, q123)

        subdivide(q0, q01, q012, mid, depth + 1)
        subdivide(mid, q123, q23, q3, depth + 1)

    subdivide(p0, p1, p2, p3, 0)
    return out


def quadratic_to_cubic(p0: Point, p1: Point, p2: Point) -> tuple[Point, Point, Point, Point]:
    """Degree-elevate a quadratic Bezier to the equivalent cubic."""
    cp1 = Point(p0.x + (2.0 / 3.0) * (p1.x - p0.x), p0.y + (2.0 / 3.0) * (p1.y - p0.y))
    cp2 = Point(p2.x + (2.0 / 3.0) * (p1.x - p2.x), p2.y + (2.0 / 3.0) * (p1.y - p2.y))
    return p0, cp1, cp2, p2


def flatten_quadratic(
    p0: Point,
    p1: Point,
    p2: Point,
    tolerance: float = BEZIER_TOLERANCE,
    max_depth: int = MAX_DEPTH,
) -> list[Point]:
    """Flatten a quadratic Bezier (start, control, end); excludes ``p0``."""
    return flatten_cubic(*quadratic_to_cubic(p0, p1, p2), tolerance, max_depth)


def cubic_eval(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bezier at parameter *t* (Bernstein form)."""
    u = 1.0 - t
    b0 = u * u * u
    b1 = 3.0 * u * u * t
    b2 = 3.0 * u * t * t
    b3 = t * t * t
    return Point(
        b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
        b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
    )
