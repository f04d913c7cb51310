"""Color grouping -- one bucket per physical pen.

Paths are partitioned by the hex of their stroke's RGB channels.  Opacity
is ignored, so two strokes differing only in alpha share a pen.  Paths
without a color go to the ``DEFAULT`` bucket.  Buckets appear in order of
first encounter, and each bucket keeps its paths in input order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from vector_gcode.geometry.types import Path, StrokeColor

DEFAULT_KEY = "DEFAULT"


@dataclass(frozen=True, slots=True)
class ColorBucket:
    """Paths sharing one canonical stroke color."""

    key: str
    paths: tuple[Path, ...]

    def __len__(self) -> int:
        return len(self.paths)


def _channel_hex(value: float) -> str:
    # Half-up rounding to 0..255, then two uppercase hex digits.
    return f"{int(math.floor(value * 255.0 + 0.5)):02X}"


def color_key(color: StrokeColor | None) -> str:
    """Canonical bucket key: ``#RRGGBB`` or ``DEFAULT``."""
    if color is None:
        return DEFAULT_KEY
    return "#" + "".join(_channel_hex(v) for v in (color.r, color.g, color.b))


def group_by_color(paths: Iterable[Path]) -> list[ColorBucket]:
    """Partition *paths* into insertion-ordered color buckets."""
    groups: dict[str, list[Path]] = {}
    for path in paths:
        groups.setdefault(color_key(path.color), []).append(path)
    return [ColorBucket(key=key, paths=tuple(members)) for key, members in groups.items()]
