"""Tests for the ``vector-gcode`` command line."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest
import yaml

from vector_gcode.scripts.convert import main
from vector_gcode.utils import logging_config

SCENE = {
    "schema": "scene.v1",
    "selection": ["Page"],
    "nodes": [
        {
            "kind": "FRAME",
            "name": "Page",
            "width": 20,
            "height": 10,
            "children": [
                {"kind": "LINE", "name": "Rule", "width": 10},
                {"kind": "RECTANGLE", "name": "Box", "x": 2, "y": 2,
                 "width": 4, "height": 4, "stroke": "#00FF00"},
            ],
        },
        {"kind": "GROUP", "name": "Empty"},
    ],
}


@pytest.fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    logging_config.pop_context()


@pytest.fixture()
def scene_file(tmp_path: Path) -> Path:
    p = tmp_path / "scene.yaml"
    p.write_text(yaml.safe_dump(SCENE), encoding="utf-8")
    return p


class TestMain:
    def test_writes_program_file(self, scene_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out" / "page.gcode"
        assert main([str(scene_file), "-o", str(out)]) == 0
        program = out.read_text(encoding="utf-8")
        assert program.startswith("; Generated by vector_gcode\n")
        assert "G1 X10.000 Y10.000 F1000\n" in program
        assert "; Color: #00FF00 (1 path)\n" in program
        assert not out.with_suffix(".gcode.tmp").exists()

    def test_stdout(self, scene_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(scene_file)]) == 0
        assert capsys.readouterr().out.endswith("G0 X0 Y0\nM2\n")

    def test_select_and_overrides(
        self, scene_file: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main([
            str(scene_file), "--select", "Rule", "--units", "inch",
            "--scale", "2", "--feed-rate", "600",
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "G20\n" in out
        assert "G1 X5.000 Y5.000 F600\n" in out
        assert "; Paths: 1\n" in out

    def test_select_by_id(self, scene_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(scene_file), "--select", "3"]) == 0
        assert "; Color: #00FF00 (1 path)" in capsys.readouterr().out

    def test_settings_file(
        self, scene_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        cfg = tmp_path / "plotter.yaml"
        cfg.write_text("settings:\n  penUpCmd: M5\n  penDownCmd: M3 S90\n", encoding="utf-8")
        assert main([str(scene_file), "--settings", str(cfg)]) == 0
        out = capsys.readouterr().out
        assert "M3 S90\n" in out
        assert "G0 Z0" not in out


class TestFailures:
    def test_no_geometry(self, scene_file: Path) -> None:
        assert main([str(scene_file), "--select", "Empty"]) == 1

    def test_unknown_selection(self, scene_file: Path) -> None:
        assert main([str(scene_file), "--select", "Nope"]) == 1

    def test_empty_selection(self, tmp_path: Path) -> None:
        p = tmp_path / "scene.yaml"
        p.write_text(yaml.safe_dump({**SCENE, "selection": []}), encoding="utf-8")
        assert main([str(p)]) == 1

    def test_missing_scene(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "nope.yaml")]) == 1

    def test_invalid_scale(self, scene_file: Path) -> None:
        assert main([str(scene_file), "--scale", "0"]) == 1

    def test_invalid_scene(self, tmp_path: Path) -> None:
        p = tmp_path / "scene.yaml"
        p.write_text("schema: scene.v1\nnodes:\n  - kind: LINE\n", encoding="utf-8")
        assert main([str(p)]) == 1

    def test_non_utf8_scene(self, tmp_path: Path) -> None:
        p = tmp_path / "scene.yaml"
        p.write_bytes(b"schema: scene.v1\nnodes: []\n# \xff\n")
        assert main([str(p)]) == 1

    def test_bad_units_rejected_by_argparse(self, scene_file: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([str(scene_file), "--units", "cm"])
        assert excinfo.value.code == 2
