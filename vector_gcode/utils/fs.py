"""Filesystem helpers: YAML/JSON loading and atomic text writes.

Programs are written tmp file -> fsync -> rename so a plotter sender
watching the output directory never picks up a half-written file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import yaml


def ensure_dir(p: str | Path) -> Path:
    """Create directory *p* (and parents) if missing; return it."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def load_yaml(path: str | Path) -> Any:
    """Load a YAML file with ``safe_load``.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    yaml.YAMLError
        If parsing fails (message includes the path).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e


def load_document(path: str | Path) -> Any:
    """Load ``.json`` with :mod:`json`, anything else as YAML."""
    path = Path(path)
    if path.suffix.lower() != ".json":
        return load_yaml(path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def atomic_write_text(path: str | Path, text: str, encoding: str = "utf-8") -> None:
    """Write *text* to *path* atomically.

    Raises
    ------
    OSError
        If the write or rename fails; the temporary file is removed.
    """
    path = Path(path)
    ensure_dir(path.parent)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp_path, "wb") as f:
            f.write(text.encode(encoding))
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError:
        if tmp_path.exists():
            tmp_path.unlink()
        raise
