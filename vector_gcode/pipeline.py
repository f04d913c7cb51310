"""End-to-end conversion: selection -> paths -> origin -> buckets -> program.

Stage order::

    extract_paths (non-text geometry, per selected node)
    text_to_paths (every TEXT node under the selection, after all shapes)
    NoGeometry check
    resolve_origin (may add a bounds frame to the scene)
    group_by_color
    GCodeEmitter.emit

Usage::

    from vector_gcode.pipeline import convert
    result = convert(scene, selection, settings)
    print(result.program)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from vector_gcode.configs.loader import Settings
from vector_gcode.errors import InputEmpty, NoGeometry
from vector_gcode.gcode.dryrun import count_program_lines
from vector_gcode.gcode.emitter import GCodeEmitter
from vector_gcode.geometry.types import Path
from vector_gcode.scene.nodes import Node, SceneGraph, TextBlock
from vector_gcode.scene.normalizer import collect_text_nodes, extract_paths
from vector_gcode.text.stroke_font import text_to_paths
from vector_gcode.toolpath.grouping import ColorBucket, group_by_color
from vector_gcode.toolpath.origin import Origin, resolve_origin

logger = logging.getLogger(__name__)

TextHook = Callable[[Node], None]


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of one :func:`convert` run.

    Attributes
    ----------
    program : str
        Complete G-code program text.
    path_count : int
        Non-empty paths emitted.
    line_count : int
        Non-blank, non-comment program lines.
    origin : Origin
        Reference frame used for the coordinate transform.
    buckets : tuple[ColorBucket, ...]
        Color buckets in emission order.
    """

    program: str
    path_count: int
    line_count: int
    origin: Origin
    buckets: tuple[ColorBucket, ...]


def text_paths(
    scene: SceneGraph,
    selection: Sequence[int],
    prepare_text: TextHook | None = None,
) -> list[Path]:
    """Stroke-font paths for every TEXT node under *selection*.

    *prepare_text* runs before each node is rendered (the host's font
    loading step).  A node whose hook raises is skipped and logged.
    """
    paths: list[Path] = []
    for node in collect_text_nodes(scene, selection):
        if prepare_text is not None:
            try:
                prepare_text(node)
            except Exception:
                logger.exception("Font preparation failed for text node %d; skipping", node.id)
                continue
        if not isinstance(node.shape, TextBlock):
            continue
        block = node.shape
        paths.extend(
            text_to_paths(block.characters, block.width, block.height, node.transform, node.stroke)
        )
    return paths


def convert(
    scene: SceneGraph,
    selection: Sequence[int],
    settings: Settings,
    *,
    prepare_text: TextHook | None = None,
) -> ConversionResult:
    """Convert the selected nodes of *scene* into a plotter program.

    Parameters
    ----------
    scene : SceneGraph
        Host document.  May gain a ``G-Code Bounds`` frame (see
        :func:`~vector_gcode.toolpath.origin.resolve_origin`).
    selection : Sequence[int]
        Selected node ids, in selection order.
    settings : Settings
        Validated settings.
    prepare_text : callable, optional
        Called with each TEXT node before it is rendered.

    Raises
    ------
    InputEmpty
        If *selection* is empty.
    NoGeometry
        If the selection yields no non-empty path.
    """
    if not selection:
        raise InputEmpty()

    paths = extract_paths(scene, selection)
    paths.extend(text_paths(scene, selection, prepare_text))
    paths = [p for p in paths if p.points]
    if not paths:
        raise NoGeometry()

    origin = resolve_origin(scene, selection, settings)
    buckets = group_by_color(paths)
    program = GCodeEmitter(settings).emit(buckets, origin)
    line_count = count_program_lines(program)

    logger.info(
        "Converted %d paths into %d color groups (%d lines, origin %s)",
        len(paths), len(buckets), line_count, origin.source.value,
    )
    return ConversionResult(
        program=program,
        path_count=len(paths),
        line_count=line_count,
        origin=origin,
        buckets=tuple(buckets),
    )
