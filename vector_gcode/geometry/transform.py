"""2-D affine transforms in the host's ``[[a, c, e], [b, d, f]]`` layout.

A transform maps local coordinates to absolute document space::

    x' = a*x + c*y + e
    y' = b*x + d*y + f

Transforms are stored as ``(2, 3)`` float64 numpy arrays.  Point-wise
evaluation is written out term by term (no matmul) so a scalar and a
vectorised evaluation of the same point produce bit-identical results;
closed-path detection compares transformed coordinates exactly.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from vector_gcode.geometry.types import Point

IDENTITY = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], dtype=np.float64)
IDENTITY.setflags(write=False)


def as_transform(matrix: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    """Validate and copy a 2x3 affine matrix.

    Raises
    ------
    ValueError
        If the matrix is not 2x3 or contains non-finite values.
    """
    arr = np.array(matrix, dtype=np.float64)
    if arr.shape != (2, 3):
        raise ValueError(f"Affine transform must be 2x3, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Affine transform contains non-finite values")
    return arr


def translation(x: float, y: float) -> np.ndarray:
    """Pure translation transform."""
    return np.array([[1.0, 0.0, x], [0.0, 1.0, y]], dtype=np.float64)


def compose(outer: np.ndarray, inner: np.ndarray) -> np.ndarray:
    """Return ``outer ∘ inner`` (apply *inner* first)."""
    o = np.vstack([outer, [0.0, 0.0, 1.0]])
    i = np.vstack([inner, [0.0, 0.0, 1.0]])
    return (o @ i)[:2]


def transform_point(x: float, y: float, transform: np.ndarray) -> Point:
    """Map one local coordinate into absolute space."""
    a, c, e = (float(v) for v in transform[0])
    b, d, f = (float(v) for v in transform[1])
    return Point(a * x + c * y + e, b * x + d * y + f)


def transform_points(coords: np.ndarray, transform: np.ndarray) -> np.ndarray:
    """Vectorised :func:`transform_point` over an ``(N, 2)`` array."""
    coords = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
    xs = coords[:, 0]
    ys = coords[:, 1]
    out = np.empty_like(coords)
    out[:, 0] = transform[0, 0] * xs + transform[0, 1] * ys + transform[0, 2]
    out[:, 1] = transform[1, 0] * xs + transform[1, 1] * ys + transform[1, 2]
    return out


def to_points(coords: np.ndarray) -> list[Point]:
    """Convert an ``(N, 2)`` array into :class:`Point` values."""
    return [Point(float(x), float(y)) for x, y in coords]


def origin_of(transform: np.ndarray) -> tuple[float, float]:
    """Absolute position of the local origin (the ``e, f`` column)."""
    return float(transform[0, 2]), float(transform[1, 2])
