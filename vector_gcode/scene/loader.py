"""Scene document loading and schema validation.

A scene file (YAML or JSON, schema ``scene.v1``) describes a snapshot of
the host document: a tree of nodes plus an optional default selection.

Example::

    schema: scene.v1
    selection: [Artboard]
    nodes:
      - kind: FRAME
        name: Artboard
        x: 0
        y: 0
        width: 200
        height: 100
        children:
          - kind: RECTANGLE
            x: 10
            y: 10
            width: 50
            height: 20
            stroke: "#FF0000"
          - kind: TEXT
            characters: "Hello"
            x: 10
            y: 50
            width: 60
            height: 15

Node transforms in the file are **parent-relative** (either ``x``/``y``
shorthand or a full ``transform: [[a, c, e], [b, d, f]]``) and are composed
into absolute transforms while building the :class:`SceneGraph`.  Node ids
are assigned in document (pre-)order starting at 1.

Validation uses pydantic so errors point at the offending node and field.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from vector_gcode.geometry.transform import as_transform, compose, translation
from vector_gcode.geometry.types import StrokeColor
from vector_gcode.scene.nodes import (
    CONTAINERS,
    PATH_BEARING,
    Box,
    LineSpan,
    NodeKind,
    SceneGraph,
    TextBlock,
    VectorData,
)
from vector_gcode.utils import fs

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "scene.v1"


class SceneError(ValueError):
    """Raised when a scene document fails to load or validate."""

    pass


# ============================================================================
# SCHEMA
# ============================================================================

class ColorSpec(BaseModel):
    """RGBA stroke color, channels in [0, 1]."""
    model_config = ConfigDict(extra="forbid")

    r: float = Field(..., ge=0.0, le=1.0)
    g: float = Field(..., ge=0.0, le=1.0)
    b: float = Field(..., ge=0.0, le=1.0)
    a: float = Field(1.0, ge=0.0, le=1.0, description="Stroke opacity")


class NodeSpec(BaseModel):
    """One node of the scene tree (parent-relative placement)."""
    model_config = ConfigDict(extra="forbid")

    kind: NodeKind
    name: str = ""
    x: float = 0.0
    y: float = 0.0
    transform: Optional[List[List[float]]] = Field(
        None, description="Parent-relative [[a, c, e], [b, d, f]]"
    )
    width: Optional[float] = Field(None, ge=0.0)
    height: Optional[float] = Field(None, ge=0.0)
    paths: List[str] = Field(default_factory=list, description="Path-data strings")
    characters: Optional[str] = None
    stroke: Optional[Union[str, ColorSpec]] = None
    children: List["NodeSpec"] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("transform")
    @classmethod
    def validate_transform(cls, v: Optional[List[List[float]]]) -> Optional[List[List[float]]]:
        if v is not None and (len(v) != 2 or any(len(row) != 3 for row in v)):
            raise ValueError("transform must be 2 rows of 3 numbers [[a, c, e], [b, d, f]]")
        return v

    @field_validator("stroke")
    @classmethod
    def validate_stroke(cls, v: Optional[Union[str, ColorSpec]]) -> Optional[Union[str, ColorSpec]]:
        if isinstance(v, str):
            StrokeColor.from_hex(v)
        return v

    @model_validator(mode="after")
    def validate_kind_fields(self) -> "NodeSpec":
        kind = self.kind
        if self.transform is not None and (self.x != 0.0 or self.y != 0.0):
            raise ValueError("give either transform or x/y, not both")
        if self.children and kind not in CONTAINERS:
            raise ValueError(f"{kind.value} nodes cannot have children")
        if self.paths and kind not in PATH_BEARING:
            raise ValueError(f"{kind.value} nodes cannot carry path data")
        if kind in (NodeKind.RECTANGLE, NodeKind.ELLIPSE, NodeKind.FRAME, NodeKind.TEXT):
            if self.width is None or self.height is None:
                raise ValueError(f"{kind.value} nodes require width and height")
        if kind == NodeKind.LINE and self.width is None:
            raise ValueError("LINE nodes require width (the line length)")
        if kind == NodeKind.TEXT and self.characters is None:
            raise ValueError("TEXT nodes require characters")
        if self.characters is not None and kind != NodeKind.TEXT:
            raise ValueError(f"{kind.value} nodes cannot carry characters")
        return self


NodeSpec.model_rebuild()


class SceneV1(BaseModel):
    """Scene document (scene.v1 schema)."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field(SCHEMA_VERSION, alias="schema")
    selection: Optional[List[Union[int, str]]] = Field(
        None, description="Node names or ids; omitted selects every top-level node"
    )
    nodes: List[NodeSpec] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != SCHEMA_VERSION:
            raise ValueError(f"Expected schema '{SCHEMA_VERSION}', got '{v}'")
        return v


# ============================================================================
# BUILD
# ============================================================================

@dataclass
class LoadedScene:
    """A built scene plus its resolved default selection (node ids)."""

    graph: SceneGraph
    selection: list[int]


def _stroke_of(spec: NodeSpec) -> StrokeColor | None:
    if spec.stroke is None:
        return None
    if isinstance(spec.stroke, str):
        return StrokeColor.from_hex(spec.stroke)
    return StrokeColor(spec.stroke.r, spec.stroke.g, spec.stroke.b, spec.stroke.a)


def _shape_of(spec: NodeSpec):
    width = spec.width or 0.0
    height = spec.height or 0.0
    if spec.kind in PATH_BEARING:
        return VectorData(paths=tuple(spec.paths), width=width, height=height)
    if spec.kind in (NodeKind.RECTANGLE, NodeKind.ELLIPSE, NodeKind.FRAME):
        return Box(width, height)
    if spec.kind == NodeKind.LINE:
        return LineSpan(width)
    if spec.kind == NodeKind.TEXT:
        return TextBlock(characters=spec.characters or "", width=width, height=height)
    if spec.kind == NodeKind.OTHER and spec.width is not None and spec.height is not None:
        return Box(width, height)
    return None


def build_graph(doc: SceneV1) -> SceneGraph:
    """Build the arena from a validated document (pre-order ids)."""
    graph = SceneGraph()
    # (spec, parent id, parent absolute transform); explicit stack, pre-order
    stack: list[tuple[NodeSpec, int | None, Any]] = [
        (spec, None, None) for spec in reversed(doc.nodes)
    ]
    while stack:
        spec, parent_id, parent_tf = stack.pop()
        local = (
            as_transform(spec.transform)
            if spec.transform is not None
            else translation(spec.x, spec.y)
        )
        absolute = local if parent_tf is None else compose(parent_tf, local)
        node = graph.add(
            spec.kind,
            _shape_of(spec),
            transform=absolute,
            name=spec.name,
            stroke=_stroke_of(spec),
            parent=parent_id,
        )
        stack.extend((child, node.id, absolute) for child in reversed(spec.children))
    return graph


def resolve_selection(graph: SceneGraph, refs: list[int | str] | None) -> list[int]:
    """Map selection references (ids or unique names) to node ids.

    ``None`` selects every top-level node.

    Raises
    ------
    SceneError
        For an unknown id, an unknown name, or a name shared by several
        nodes.
    """
    if refs is None:
        return list(graph.roots)
    ids: list[int] = []
    for ref in refs:
        if isinstance(ref, int):
            if ref not in graph:
                raise SceneError(f"Selection refers to unknown node id {ref}")
            ids.append(ref)
            continue
        matches = graph.find(ref)
        if not matches:
            raise SceneError(f"Selection refers to unknown node name {ref!r}")
        if len(matches) > 1:
            raise SceneError(
                f"Selection name {ref!r} is ambiguous ({len(matches)} nodes)"
            )
        ids.append(matches[0].id)
    return ids


# ============================================================================
# PUBLIC API
# ============================================================================

def scene_from_dict(data: dict[str, Any]) -> LoadedScene:
    """Validate a scene mapping and build it.

    Raises
    ------
    SceneError
        If validation fails (message includes pydantic's field path).
    """
    if not isinstance(data, dict):
        raise SceneError(f"Scene document must be a mapping, got {type(data).__name__}")
    try:
        doc = SceneV1(**data)
    except ValidationError as e:
        raise SceneError(f"Scene validation failed: {e}") from e
    graph = build_graph(doc)
    return LoadedScene(graph=graph, selection=resolve_selection(graph, doc.selection))


def load_scene(path: Union[str, Path]) -> LoadedScene:
    """Load and validate a scene file (``.json`` or YAML).

    Raises
    ------
    FileNotFoundError
        If *path* doesn't exist.
    SceneError
        If the document is empty or cannot be parsed and validated.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scene file not found: {path}")

    try:
        data = fs.load_document(path)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SceneError(f"Failed to parse scene file {path}: {e}") from e
    if data is None:
        raise SceneError(f"Empty scene file: {path}")
    try:
        loaded = scene_from_dict(data)
    except SceneError as e:
        raise SceneError(f"{path}: {e}") from e

    logger.info(
        "Loaded scene %s: %d nodes, %d selected",
        path, len(loaded.graph), len(loaded.selection),
    )
    return loaded
