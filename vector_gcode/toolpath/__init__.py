"""
Toolpath planning.

Origin resolution (document -> machine reference frame) and color
grouping (one bucket per pen).
"""

from vector_gcode.toolpath.grouping import (
    DEFAULT_KEY,
    ColorBucket,
    color_key,
    group_by_color,
)
from vector_gcode.toolpath.origin import (
    Origin,
    OriginSource,
    resolve_origin,
    selection_bounds,
)

__all__ = [
    "DEFAULT_KEY",
    "ColorBucket",
    "Origin",
    "OriginSource",
    "color_key",
    "group_by_color",
    "resolve_origin",
    "selection_bounds",
]
