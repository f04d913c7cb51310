"""Logging configuration for command-line entry points.

Library modules only ever call ``logging.getLogger(__name__)``; the CLI
calls :func:`setup_logging` once to attach handlers to the root logger.

Features:
    - Human-readable or JSON-lines output on stderr
    - Optional log file, optionally size-rotated
    - Contextual fields (e.g. ``scene=drawing.yaml``) via contextvars
    - Python warnings routed into logging

Format examples:
    Human: 2026-10-19T13:45:12.345Z | INFO     | app=convert | Wrote 412 lines
    JSON:  {"t": "2026-10-19T13:45:12.345+00:00", "lvl": "INFO", "app": "convert", "msg": "..."}

Idempotent: repeated ``setup_logging()`` calls replace handlers rather
than stacking them.
"""

from __future__ import annotations

import contextvars
import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_context_var: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar(
    "vector_gcode_logging_context", default={}
)

_configured = False


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields.

    Parameters
    ----------
    fmt_mode : ``"human"`` | ``"json"``
        Output layout.
    use_color : bool
        ANSI-color the level name (only when stderr is a TTY).
    """

    _COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    _RESET = "\033[0m"

    def __init__(self, fmt_mode: str = "human", use_color: bool = True) -> None:
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"fmt_mode must be 'human' or 'json', got {fmt_mode!r}")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(
        self, record: logging.LogRecord, ts: datetime, context: dict[str, Any]
    ) -> str:
        payload: dict[str, Any] = {
            "t": ts.isoformat(),
            "lvl": record.levelname,
            "name": record.name,
            **context,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)

    def _format_human(
        self, record: logging.LogRecord, ts: datetime, context: dict[str, Any]
    ) -> str:
        ts_str = ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self._COLORS.get(record.levelname, '')}{level}{self._RESET}"

        parts = [ts_str, "|", level, "|"]
        if context:
            parts.append(" ".join(f"{k}={v}" for k, v in context.items()) + " |")
        parts.append(record.getMessage())

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: str | Path | None = None,
    *,
    json_lines: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    max_bytes: int | None = None,
    backup_count: int = 3,
    context: dict[str, Any] | None = None,
) -> list[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        ``"DEBUG"``, ``"INFO"``, ``"WARNING"``, ``"ERROR"`` or ``"CRITICAL"``.
    log_file : str | Path | None
        Optional log file; parent directories are created.
    json_lines : bool
        Emit JSON lines instead of the human format.
    color : bool
        Color level names on a TTY.
    to_stderr : bool
        Attach a stderr handler.
    max_bytes : int | None
        Rotate *log_file* at this size; ``None`` disables rotation.
    backup_count : int
        Rotated files to keep.
    context : dict | None
        Initial contextual fields, e.g. ``{"app": "convert"}``.

    Returns
    -------
    list[logging.Handler]
        Handlers attached to the root logger.

    Raises
    ------
    ValueError
        If *log_level* is not a logging level name.
    """
    global _configured

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    root = logging.getLogger()
    if _configured:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)

    fmt_mode = "json" if json_lines else "human"
    handlers: list[logging.Handler] = []

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter(fmt_mode, use_color=color))
        handlers.append(console)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if max_bytes:
            file_handler: logging.Handler = logging.handlers.RotatingFileHandler(
                log_path, maxBytes=max_bytes, backupCount=backup_count
            )
        else:
            file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(ContextFormatter(fmt_mode, use_color=False))
        handlers.append(file_handler)

    for handler in handlers:
        root.addHandler(handler)

    if context:
        push_context(**context)

    logging.captureWarnings(True)
    _configured = True
    return handlers


def push_context(**kwargs: Any) -> None:
    """Add contextual fields to every subsequent record."""
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: list[str] | None = None) -> None:
    """Remove the named contextual fields, or all of them."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get())
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


def current_context() -> dict[str, Any]:
    """Snapshot of the active contextual fields."""
    return dict(_context_var.get())
