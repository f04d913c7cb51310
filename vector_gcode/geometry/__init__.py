"""
Geometry primitives.

Value types, affine transforms, adaptive Bezier flattening, and the
path-data parser.  All coordinates are absolute document units.
"""

from vector_gcode.geometry.bezier import (
    BEZIER_TOLERANCE,
    MAX_DEPTH,
    cubic_flatness,
    flatten_cubic,
    flatten_quadratic,
    point_to_line_distance,
)
from vector_gcode.geometry.path_data import parse_path_data, tokenize_path_data
from vector_gcode.geometry.transform import (
    IDENTITY,
    as_transform,
    compose,
    transform_point,
    transform_points,
    translation,
)
from vector_gcode.geometry.types import Path, Point, StrokeColor

__all__ = [
    "BEZIER_TOLERANCE",
    "MAX_DEPTH",
    "IDENTITY",
    "Path",
    "Point",
    "StrokeColor",
    "as_transform",
    "compose",
    "cubic_flatness",
    "flatten_cubic",
    "flatten_quadratic",
    "parse_path_data",
    "point_to_line_distance",
    "tokenize_path_data",
    "transform_point",
    "transform_points",
    "translation",
]
