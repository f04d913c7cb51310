"""
Vector to G-code package.

Converts a snapshot of 2D vector artwork (freeform paths, primitive shapes,
and text) into a textual toolpath program for a pen plotter or light CNC.

Subpackages:
    geometry: Point/Path value types, affine transforms, Bezier flattening,
        path-data parsing
    scene: Host document arena, shape normalizer, document loader
    text: Single-stroke (Hershey simplex) font engine
    toolpath: Origin resolution and color grouping
    gcode: G-code emission and program inspection
    configs: Settings loading and validation
    pipeline: End-to-end convert() orchestration
    scripts: Command-line entry point (vector-gcode)
"""

__version__ = "0.3.0"

__all__ = [
    "configs",
    "errors",
    "gcode",
    "geometry",
    "pipeline",
    "scene",
    "text",
    "toolpath",
]
