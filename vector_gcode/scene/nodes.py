"""Host document model -- a node-index arena.

The conversion core only needs a narrow view of the host document: a kind
tag, an absolute transform, the handful of fields each kind carries, an
optional stroke color, and parent/child links.  Nodes live in a flat
``dict[int, Node]`` keyed by id; links are ids, never object references,
so traversal is a worklist over integers and a visited set is enough to
survive accidental cycles.

Shape payloads form a tagged union keyed by :class:`NodeKind`:

    VECTOR, POLYGON, STAR -> VectorData
    RECTANGLE, ELLIPSE, FRAME -> Box
    LINE -> LineSpan
    TEXT -> TextBlock
    GROUP -> None
    OTHER -> Box | None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Union

import numpy as np

from vector_gcode.geometry.path_data import parse_path_data
from vector_gcode.geometry.transform import (
    IDENTITY,
    as_transform,
    transform_points,
    translation,
)
from vector_gcode.geometry.types import StrokeColor

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    VECTOR = "VECTOR"
    POLYGON = "POLYGON"
    STAR = "STAR"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    LINE = "LINE"
    TEXT = "TEXT"
    FRAME = "FRAME"
    GROUP = "GROUP"
    OTHER = "OTHER"


PATH_BEARING = frozenset({NodeKind.VECTOR, NodeKind.POLYGON, NodeKind.STAR})
CONTAINERS = frozenset({NodeKind.FRAME, NodeKind.GROUP})
FRAME_LIKE = frozenset({NodeKind.FRAME})


# ---------------------------------------------------------------------------
# Shape payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class VectorData:
    """Freeform geometry: one or more path-data strings plus layout size."""

    paths: tuple[str, ...]
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True, slots=True)
class Box:
    """Width/height of a rectangle, ellipse, or frame."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Box dimensions must be >= 0, got {self.width} x {self.height}"
            )


@dataclass(frozen=True, slots=True)
class LineSpan:
    """A straight line from local ``(0, 0)`` to ``(length, 0)``."""

    length: float


@dataclass(frozen=True, slots=True)
class TextBlock:
    """Literal characters plus the post-layout box the host reports."""

    characters: str
    width: float
    height: float


Shape = Union[VectorData, Box, LineSpan, TextBlock, None]

_SHAPE_FOR_KIND: dict[NodeKind, tuple[type, ...]] = {
    NodeKind.VECTOR: (VectorData,),
    NodeKind.POLYGON: (VectorData,),
    NodeKind.STAR: (VectorData,),
    NodeKind.RECTANGLE: (Box,),
    NodeKind.ELLIPSE: (Box,),
    NodeKind.FRAME: (Box,),
    NodeKind.LINE: (LineSpan,),
    NodeKind.TEXT: (TextBlock,),
    NodeKind.GROUP: (type(None),),
    NodeKind.OTHER: (Box, type(None)),
}


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned box in absolute document space."""

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def union(self, other: Bounds) -> Bounds:
        x0 = min(self.x, other.x)
        y0 = min(self.y, other.y)
        x1 = max(self.max_x, other.max_x)
        y1 = max(self.max_y, other.max_y)
        return Bounds(x0, y0, x1 - x0, y1 - y0)

    @classmethod
    def of_points(cls, coords: np.ndarray) -> Bounds:
        lo = coords.min(axis=0)
        hi = coords.max(axis=0)
        return cls(float(lo[0]), float(lo[1]), float(hi[0] - lo[0]), float(hi[1] - lo[1]))


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class Node:
    """One document node.

    Parameters
    ----------
    id : int
        Arena key.
    kind : NodeKind
        Variant tag; selects the ``shape`` payload type.
    transform : np.ndarray
        Absolute 2x3 affine transform (local -> document space).
    shape : Shape
        Kind-specific payload.
    name : str
        Display name (used for selection by name).
    stroke : StrokeColor | None
        First solid stroke, if any.
    parent : int | None
        Parent id, ``None`` for page-level nodes.
    children : list[int]
        Child ids in document order (containers only).
    x, y : float
        Position relative to the parent.
    """

    id: int
    kind: NodeKind
    transform: np.ndarray
    shape: Shape = None
    name: str = ""
    stroke: StrokeColor | None = None
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        allowed = _SHAPE_FOR_KIND[self.kind]
        if not isinstance(self.shape, allowed):
            names = " | ".join(t.__name__ for t in allowed)
            raise TypeError(
                f"{self.kind.value} node requires shape {names}, "
                f"got {type(self.shape).__name__}"
            )

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINERS

    @property
    def is_frame(self) -> bool:
        return self.kind in FRAME_LIKE

    @property
    def height(self) -> float:
        """Layout height (0 for kinds without one)."""
        if isinstance(self.shape, (Box, VectorData, TextBlock)):
            return self.shape.height
        return 0.0

    @property
    def width(self) -> float:
        if isinstance(self.shape, (Box, VectorData, TextBlock)):
            return self.shape.width
        if isinstance(self.shape, LineSpan):
            return self.shape.length
        return 0.0


# ---------------------------------------------------------------------------
# Arena
# ---------------------------------------------------------------------------


class SceneGraph:
    """Flat store of :class:`Node` records with parent/child id links."""

    def __init__(self) -> None:
        self.nodes: dict[int, Node] = {}
        self.roots: list[int] = []
        self._next_id = 1

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self.nodes

    def __getitem__(self, node_id: int) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise KeyError(f"No node with id {node_id}") from None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add(
        self,
        kind: NodeKind,
        shape: Shape = None,
        *,
        transform: np.ndarray | None = None,
        name: str = "",
        stroke: StrokeColor | None = None,
        parent: int | None = None,
    ) -> Node:
        """Append a node (as the last child of *parent*, or as a root).

        *transform* is absolute; ``None`` means identity.
        """
        if parent is not None and not self[parent].is_container:
            raise ValueError(
                f"Node {parent} ({self[parent].kind.value}) cannot hold children"
            )
        abs_tf = IDENTITY.copy() if transform is None else as_transform(transform)
        node = Node(
            id=self._next_id,
            kind=NodeKind(kind),
            transform=abs_tf,
            shape=shape,
            name=name,
            stroke=stroke,
        )
        self._next_id += 1
        self.nodes[node.id] = node
        self._attach(node, parent)
        return node

    def _attach(self, node: Node, parent: int | None) -> None:
        if parent is None:
            self.roots.append(node.id)
            node.parent = None
            node.x, node.y = float(node.transform[0, 2]), float(node.transform[1, 2])
            return
        container = self[parent]
        if not container.is_container:
            raise ValueError(
                f"Node {parent} ({container.kind.value}) cannot hold children"
            )
        container.children.append(node.id)
        node.parent = parent
        node.x = float(node.transform[0, 2] - container.transform[0, 2])
        node.y = float(node.transform[1, 2] - container.transform[1, 2])

    def _detach(self, node: Node) -> None:
        if node.parent is None:
            self.roots.remove(node.id)
        else:
            self[node.parent].children.remove(node.id)

    def create_frame(
        self,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        stroke: StrokeColor | None = None,
    ) -> Node:
        """Create a page-level frame at absolute ``(x, y)``."""
        return self.add(
            NodeKind.FRAME,
            Box(width, height),
            transform=translation(x, y),
            name=name,
            stroke=stroke,
        )

    def reparent(self, node_id: int, frame_id: int) -> None:
        """Move *node_id* under *frame_id* keeping its absolute placement.

        The node's local position becomes
        ``absolute - container absolute``; its absolute transform is
        unchanged.

        Raises
        ------
        ValueError
            If the target is not a container or lies inside the node.
        """
        node = self[node_id]
        if frame_id == node_id or frame_id in set(self.iter_subtree([node_id])):
            raise ValueError(f"Cannot move node {node_id} into its own subtree")
        self._detach(node)
        self._attach(node, frame_id)
        logger.debug(
            "Moved node %d into %d at local (%.3f, %.3f)",
            node_id, frame_id, node.x, node.y,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def parent_of(self, node_id: int) -> Node | None:
        parent = self[node_id].parent
        return None if parent is None else self[parent]

    def find(self, name: str) -> list[Node]:
        """All nodes with display name *name*, in id order."""
        return [n for n in self.nodes.values() if n.name == name]

    def iter_subtree(self, start: Iterable[int]) -> Iterator[int]:
        """Depth-first, document-order ids under (and including) *start*.

        Explicit stack with a visited set; each id is yielded once even if
        the links contain a cycle.
        """
        stack = list(reversed(list(start)))
        visited: set[int] = set()
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                logger.warning("Node %d reached twice; skipping", node_id)
                continue
            visited.add(node_id)
            yield node_id
            node = self[node_id]
            if node.children:
                stack.extend(reversed(node.children))

    def absolute_bounds(self, node_id: int) -> Bounds | None:
        """Axis-aligned absolute bounding box, ``None`` without extent.

        Box-like nodes use their transformed local rectangle, lines their
        transformed segment, groups the union of descendant bounds.
        """
        node = self[node_id]
        if node.kind == NodeKind.GROUP:
            result: Bounds | None = None
            for child_id in self.iter_subtree(node.children):
                child = self[child_id]
                if child.kind == NodeKind.GROUP:
                    continue
                b = self._own_bounds(child)
                if b is not None:
                    result = b if result is None else result.union(b)
            return result
        return self._own_bounds(node)

    @staticmethod
    def _own_bounds(node: Node) -> Bounds | None:
        if isinstance(node.shape, VectorData):
            return _vector_bounds(node)
        if isinstance(node.shape, LineSpan):
            local = np.array([[0.0, 0.0], [node.shape.length, 0.0]])
        elif isinstance(node.shape, (Box, TextBlock)):
            local = _box_corners(node.shape.width, node.shape.height)
        else:
            return None
        return Bounds.of_points(transform_points(local, node.transform))


def _box_corners(w: float, h: float) -> np.ndarray:
    return np.array([[0.0, 0.0], [w, 0.0], [w, h], [0.0, h]])


def _vector_bounds(node: Node) -> Bounds:
    """Bounds of the parsed geometry, widened by any declared layout box.

    Documents may omit width/height for path-bearing nodes; the layout box
    alone would then collapse to the node origin.
    """
    shape = node.shape
    parts = [
        np.array([(p.x, p.y) for p in parse_path_data(d, node.transform).points])
        for d in shape.paths
    ]
    parts = [a for a in parts if len(a)]
    if shape.width > 0 or shape.height > 0 or not parts:
        parts.append(
            transform_points(_box_corners(shape.width, shape.height), node.transform)
        )
    return Bounds.of_points(np.concatenate(parts))
