"""
Host document model.

Node-index arena, shape normalizer, and scene-file loader.
"""

from vector_gcode.scene.loader import (
    LoadedScene,
    SceneError,
    load_scene,
    resolve_selection,
    scene_from_dict,
)
from vector_gcode.scene.nodes import (
    Bounds,
    Box,
    LineSpan,
    Node,
    NodeKind,
    SceneGraph,
    TextBlock,
    VectorData,
)
from vector_gcode.scene.normalizer import (
    collect_text_nodes,
    ellipse_to_path,
    extract_paths,
    line_to_path,
    node_to_paths,
    rectangle_to_path,
)

__all__ = [
    "Bounds",
    "Box",
    "LineSpan",
    "LoadedScene",
    "Node",
    "NodeKind",
    "SceneError",
    "SceneGraph",
    "TextBlock",
    "VectorData",
    "collect_text_nodes",
    "ellipse_to_path",
    "extract_paths",
    "line_to_path",
    "load_scene",
    "node_to_paths",
    "rectangle_to_path",
    "resolve_selection",
    "scene_from_dict",
]
