"""Geometry value types shared by every pipeline stage.

All coordinates are **absolute document units** (the host's pixel space)
until the G-code emitter maps them into machine units.  Every type here is
an immutable, slotted dataclass; stages build new values rather than
mutating shared ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Point:
    """A single position in absolute document space."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class StrokeColor:
    """Resolved solid stroke color.

    Parameters
    ----------
    r, g, b : float
        Channel intensities in [0, 1].
    a : float
        Stroke opacity in [0, 1].  Kept on the path but never used for
        grouping.
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self) -> None:
        for ch, val in (("r", self.r), ("g", self.g), ("b", self.b), ("a", self.a)):
            if not 0.0 <= val <= 1.0:
                raise ValueError(
                    f"StrokeColor {ch} must be in [0, 1], got {val}"
                )

    @classmethod
    def from_hex(cls, text: str) -> StrokeColor:
        """Parse ``#RRGGBB`` or ``#RRGGBBAA``."""
        digits = text.strip().lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Expected #RRGGBB or #RRGGBBAA, got {text!r}")
        try:
            channels = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
        except ValueError as exc:
            raise ValueError(f"Invalid hex color {text!r}") from exc
        return cls(*channels)


@dataclass(frozen=True, slots=True)
class Path:
    """One unit of pen travel.

    Parameters
    ----------
    points : tuple[Point, ...]
        Ordered vertices.  May be empty; empty paths are inert and never
        emitted.
    closed : bool
        ``True`` when the source geometry was closed.  The normalizer makes
        the last point equal to the first in that case.
    color : StrokeColor | None
        Stroke color used for tool grouping.  ``None`` falls into the
        default bucket.
    """

    points: tuple[Point, ...] = field(default_factory=tuple)
    closed: bool = False
    color: StrokeColor | None = None

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points
