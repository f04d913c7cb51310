"""Error taxonomy for the conversion pipeline.

Terminal outcomes (surfaced to the caller, retryable after the user fixes
the selection):

    InputEmpty   -- nothing selected
    NoGeometry   -- normalization yielded no usable paths

Locally recovered conditions (raised and caught inside the pipeline, never
visible to the caller):

    MalformedCommand -- a path-data command with bad or missing arguments
    DegenerateText   -- a text block with zero design or target extent

Configuration errors live in :mod:`vector_gcode.configs.loader`
(``ConfigError``) and G-code emission errors in
:mod:`vector_gcode.gcode.emitter` (``GCodeError``).
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for terminal conversion outcomes."""

    pass


class InputEmpty(ConversionError):
    """Raised when the selection contains no nodes."""

    def __init__(self, message: str = "no nodes selected") -> None:
        super().__init__(message)


class NoGeometry(ConversionError):
    """Raised when the selection produced no drawable paths."""

    def __init__(self, message: str = "no extractable geometry found") -> None:
        super().__init__(message)


class MalformedCommand(ValueError):
    """A path-data command that cannot be decoded."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(f"malformed path command {command!r}: {reason}")
        self.command = command
        self.reason = reason


class DegenerateText(ValueError):
    """Text whose measured or target extent is zero."""

    pass
