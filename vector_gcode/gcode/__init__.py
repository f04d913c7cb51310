"""
G-code generation module.

Serializes color buckets into a plotter program with origin offset,
Y flip and unit scaling, and dry-runs emitted programs for statistics.
"""

from vector_gcode.gcode.dryrun import ProgramStats, count_program_lines, inspect_program
from vector_gcode.gcode.emitter import GCodeEmitter, GCodeError, emit_program

__all__ = [
    "GCodeEmitter",
    "GCodeError",
    "ProgramStats",
    "count_program_lines",
    "emit_program",
    "inspect_program",
]
