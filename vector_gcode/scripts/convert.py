"""Convert a scene document into a pen-plotter G-code program.

Loads a ``scene.v1`` YAML/JSON document, selects nodes (the document's
default selection, or ``--select``), and writes the program to ``-o`` or
stdout.

CLI:
    vector-gcode artwork.yaml -o artwork.gcode
    vector-gcode artwork.yaml --select Logo Caption --scale 3.7795 -o out.gcode
    vector-gcode artwork.json --settings plotter.yaml --units inch

Exit status is 0 on success and 1 when nothing was selected, the selection
had no drawable geometry, or an input file is missing or invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import yaml

from vector_gcode import __version__
from vector_gcode.configs.loader import ConfigError, load_settings
from vector_gcode.errors import ConversionError
from vector_gcode.gcode.dryrun import inspect_program
from vector_gcode.gcode.emitter import GCodeError
from vector_gcode.pipeline import convert
from vector_gcode.scene.loader import SceneError, load_scene, resolve_selection
from vector_gcode.utils import fs, logging_config

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="vector-gcode",
        description="Convert vector artwork into pen-plotter G-code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("scene", type=Path, help="Scene document (.yaml or .json)")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings YAML (default: shipped settings.yaml)",
    )
    parser.add_argument(
        "--select",
        nargs="+",
        metavar="NODE",
        default=None,
        help="Node names or ids to convert (default: the document's selection)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output program path (default: stdout)",
    )
    parser.add_argument("--units", choices=["mm", "inch"], default=None)
    parser.add_argument("--scale", type=float, default=None, help="Document units per machine unit")
    parser.add_argument("--feed-rate", type=float, default=None, help="Drawing feed rate")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-json", action="store_true", help="Log JSON lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _selection_refs(raw: Sequence[str]) -> list[int | str]:
    return [int(ref) if ref.isdigit() else ref for ref in raw]


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging_config.setup_logging(
        log_level=args.log_level,
        json_lines=args.log_json,
        context={"app": "vector-gcode"},
    )

    try:
        settings = load_settings(args.settings).with_overrides(
            units=args.units, scale=args.scale, feed_rate=args.feed_rate
        )
        loaded = load_scene(args.scene)
        selection = loaded.selection
        if args.select is not None:
            selection = resolve_selection(loaded.graph, _selection_refs(args.select))

        result = convert(loaded.graph, selection, settings)
    except (
        ConversionError, ConfigError, SceneError, GCodeError,
        FileNotFoundError, yaml.YAMLError,
    ) as exc:
        logger.error("%s", exc)
        return 1

    stats = inspect_program(result.program, settings)
    logger.info(
        "%d paths, %d lines, %d pen sections, draw length %.3f %s",
        result.path_count, result.line_count, stats.sections,
        stats.draw_length, settings.units,
    )

    if args.output is None:
        sys.stdout.write(result.program)
    else:
        fs.atomic_write_text(args.output, result.program)
        logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
