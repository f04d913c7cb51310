"""Origin resolution -- where machine ``(0, 0)`` sits in the document.

Policy, first match wins:

1. The selection is exactly one frame: use that frame.
2. Every selected node has the same frame as its immediate parent: use
   that parent.
3. Otherwise wrap the selection in a new frame (``G-Code Bounds``) that
   covers the union of the selected nodes' absolute bounds plus a margin
   of ``5 * scale`` on every side, and move the selected nodes into it
   without changing their absolute placement.

The origin is the chosen frame's absolute top-left; its height is the
Y-flip reference for the emitter.  Whether the frame already existed is
reported for the program header only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from vector_gcode.configs.loader import Settings
from vector_gcode.errors import InputEmpty, NoGeometry
from vector_gcode.geometry.transform import origin_of
from vector_gcode.geometry.types import StrokeColor
from vector_gcode.scene.nodes import Bounds, Node, SceneGraph

logger = logging.getLogger(__name__)

BOUNDS_FRAME_NAME = "G-Code Bounds"
BOUNDS_FRAME_STROKE = StrokeColor(0.5, 0.5, 1.0, 0.5)
MARGIN_MACHINE_UNITS = 5.0


class OriginSource(str, Enum):
    EXISTING = "existing"
    CREATED = "created"


@dataclass(frozen=True, slots=True)
class Origin:
    """Document-space reference for the machine coordinate system.

    Parameters
    ----------
    x, y : float
        Absolute top-left of the reference frame.
    height : float
        Frame height; document ``y == origin.y + height`` maps to machine
        ``Y = 0``.
    source : OriginSource
        Whether the frame existed or was synthesized.
    frame_id : int | None
        Arena id of the reference frame.
    """

    x: float
    y: float
    height: float
    source: OriginSource = OriginSource.EXISTING
    frame_id: int | None = None


def _from_frame(frame: Node, source: OriginSource) -> Origin:
    x, y = origin_of(frame.transform)
    return Origin(x=x, y=y, height=frame.height, source=source, frame_id=frame.id)


def selection_bounds(scene: SceneGraph, selection: Sequence[int]) -> Bounds | None:
    """Union of the absolute bounds of *selection* (``None`` if empty)."""
    result: Bounds | None = None
    for node_id in selection:
        b = scene.absolute_bounds(node_id)
        if b is not None:
            result = b if result is None else result.union(b)
    return result


def resolve_origin(
    scene: SceneGraph,
    selection: Sequence[int],
    settings: Settings,
) -> Origin:
    """Pick (or create) the reference frame for *selection*.

    Raises
    ------
    InputEmpty
        If *selection* is empty.
    NoGeometry
        If a bounds frame is needed but no selected node has extent.
    """
    if not selection:
        raise InputEmpty()

    if len(selection) == 1 and scene[selection[0]].is_frame:
        return _from_frame(scene[selection[0]], OriginSource.EXISTING)

    first_parent = scene.parent_of(selection[0])
    if first_parent is not None and first_parent.is_frame:
        if all(scene[n].parent == first_parent.id for n in selection):
            return _from_frame(first_parent, OriginSource.EXISTING)

    bounds = selection_bounds(scene, selection)
    if bounds is None:
        raise NoGeometry("selection has no measurable bounds")

    margin = MARGIN_MACHINE_UNITS * settings.scale
    frame = scene.create_frame(
        BOUNDS_FRAME_NAME,
        bounds.x - margin,
        bounds.y - margin,
        bounds.width + 2.0 * margin,
        bounds.height + 2.0 * margin,
        stroke=BOUNDS_FRAME_STROKE,
    )
    for node_id in selection:
        scene.reparent(node_id, frame.id)

    logger.info(
        "Created bounds frame %d at (%.3f, %.3f) size %.3f x %.3f",
        frame.id, frame.x, frame.y, frame.width, frame.height,
    )
    return _from_frame(frame, OriginSource.CREATED)
