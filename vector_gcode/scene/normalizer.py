"""Shape normalizer -- document nodes to absolute-space paths.

Each supported kind becomes zero or more :class:`Path` values whose points
are already in the shared absolute coordinate space:

    VECTOR/POLYGON/STAR  one path per path-data string (empty ones dropped)
    RECTANGLE            closed 5-point outline
    ELLIPSE              closed 33-point outline (32 segments)
    LINE                 open 2-point segment
    FRAME/GROUP          children, depth-first in document order
    TEXT                 nothing here; see :func:`collect_text_nodes`

Paths inherit the stroke color of the node that produced them.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Iterable

import numpy as np

from vector_gcode.geometry.path_data import parse_path_data
from vector_gcode.geometry.transform import to_points, transform_points
from vector_gcode.geometry.types import Path
from vector_gcode.scene.nodes import (
    PATH_BEARING,
    Box,
    LineSpan,
    Node,
    NodeKind,
    SceneGraph,
    VectorData,
)

logger = logging.getLogger(__name__)

ELLIPSE_SEGMENTS = 32


# ---------------------------------------------------------------------------
# Primitive shapes
# ---------------------------------------------------------------------------


def rectangle_to_path(width: float, height: float, transform: np.ndarray) -> Path:
    """Closed outline over local corners, starting and ending at ``(0, 0)``."""
    corners = np.array(
        [[0.0, 0.0], [width, 0.0], [width, height], [0.0, height], [0.0, 0.0]]
    )
    return Path(points=tuple(to_points(transform_points(corners, transform))), closed=True)


def ellipse_to_path(
    width: float,
    height: float,
    transform: np.ndarray,
    segments: int = ELLIPSE_SEGMENTS,
) -> Path:
    """Closed polygon sampling the inscribed ellipse at ``segments + 1`` angles.

    Angles run ``0 .. 2*pi`` inclusive; the local centre is ``(rx, ry)``.
    """
    rx = width / 2.0
    ry = height / 2.0
    angles = [(i / segments) * math.pi * 2.0 for i in range(segments + 1)]
    local = np.array([[rx + rx * math.cos(t), ry + ry * math.sin(t)] for t in angles])
    return Path(points=tuple(to_points(transform_points(local, transform))), closed=True)


def line_to_path(length: float, transform: np.ndarray) -> Path:
    """Open segment from local ``(0, 0)`` to ``(length, 0)``."""
    local = np.array([[0.0, 0.0], [length, 0.0]])
    return Path(points=tuple(to_points(transform_points(local, transform))), closed=False)


# ---------------------------------------------------------------------------
# Node dispatch
# ---------------------------------------------------------------------------


def node_to_paths(node: Node) -> list[Path]:
    """Paths contributed by *node* itself (children are not visited)."""
    paths: list[Path] = []

    if node.kind in PATH_BEARING and isinstance(node.shape, VectorData):
        for data in node.shape.paths:
            path = parse_path_data(data, node.transform)
            if path.points:
                paths.append(path)
            else:
                logger.debug("Node %d: path data %r yielded no points", node.id, data)
    elif node.kind == NodeKind.RECTANGLE and isinstance(node.shape, Box):
        paths.append(rectangle_to_path(node.shape.width, node.shape.height, node.transform))
    elif node.kind == NodeKind.ELLIPSE and isinstance(node.shape, Box):
        paths.append(ellipse_to_path(node.shape.width, node.shape.height, node.transform))
    elif node.kind == NodeKind.LINE and isinstance(node.shape, LineSpan):
        paths.append(line_to_path(node.shape.length, node.transform))

    if node.stroke is not None:
        paths = [dataclasses.replace(p, color=node.stroke) for p in paths]
    return paths


def extract_paths(scene: SceneGraph, node_ids: Iterable[int]) -> list[Path]:
    """Normalize the subtrees rooted at *node_ids* into paths.

    Each selected root is traversed depth-first in document order over an
    explicit stack; results are concatenated without de-duplication, so a
    node selected together with its container contributes twice.  Text
    nodes are skipped (they need font preparation first).
    """
    paths: list[Path] = []
    for root_id in node_ids:
        for node_id in scene.iter_subtree([root_id]):
            paths.extend(node_to_paths(scene[node_id]))
    return paths


def collect_text_nodes(scene: SceneGraph, node_ids: Iterable[int]) -> list[Node]:
    """All TEXT nodes under *node_ids*, depth-first in document order."""
    found: list[Node] = []
    for root_id in node_ids:
        found.extend(
            scene[node_id]
            for node_id in scene.iter_subtree([root_id])
            if scene[node_id].kind == NodeKind.TEXT
        )
    return found
