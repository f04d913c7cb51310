"""Tests for scene document loading (scene.v1)."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
import yaml

from vector_gcode.geometry.types import StrokeColor
from vector_gcode.scene.loader import SceneError, load_scene, resolve_selection, scene_from_dict
from vector_gcode.scene.nodes import Box, LineSpan, NodeKind, TextBlock, VectorData


@pytest.fixture()
def doc() -> dict:
    return {
        "schema": "scene.v1",
        "selection": ["Artboard"],
        "nodes": [
            {
                "kind": "FRAME",
                "name": "Artboard",
                "x": 100,
                "y": 50,
                "width": 200,
                "height": 100,
                "children": [
                    {
                        "kind": "rectangle",
                        "name": "Box",
                        "x": 10,
                        "y": 10,
                        "width": 50,
                        "height": 20,
                        "stroke": "#FF0000",
                    },
                    {
                        "kind": "GROUP",
                        "name": "Group",
                        "x": 20,
                        "y": 30,
                        "children": [
                            {
                                "kind": "VECTOR",
                                "name": "Squiggle",
                                "paths": ["M 0 0 L 5 5"],
                                "stroke": {"r": 0, "g": 0, "b": 1, "a": 0.5},
                            },
                            {"kind": "LINE", "name": "Rule", "y": 5, "width": 40},
                        ],
                    },
                    {
                        "kind": "TEXT",
                        "name": "Caption",
                        "characters": "Hi",
                        "x": 5,
                        "y": 80,
                        "width": 30,
                        "height": 10,
                    },
                ],
            },
            {
                "kind": "ELLIPSE",
                "name": "Dot",
                "transform": [[2, 0, 400], [0, 2, 0]],
                "width": 10,
                "height": 10,
            },
        ],
    }


class TestBuild:
    def test_preorder_ids_and_links(self, doc: dict) -> None:
        loaded = scene_from_dict(doc)
        g = loaded.graph
        assert [g[i].name for i in sorted(g.nodes)] == [
            "Artboard", "Box", "Group", "Squiggle", "Rule", "Caption", "Dot",
        ]
        assert g.roots == [1, 7]
        assert g[1].children == [2, 3, 6]
        assert g[3].children == [4, 5]

    def test_shapes(self, doc: dict) -> None:
        g = scene_from_dict(doc).graph
        assert g[1].shape == Box(200, 100)
        assert g[4].shape == VectorData(("M 0 0 L 5 5",), 0.0, 0.0)
        assert g[5].shape == LineSpan(40)
        assert g[6].shape == TextBlock("Hi", 30, 10)
        assert g[3].kind == NodeKind.GROUP and g[3].shape is None

    def test_relative_positions_composed(self, doc: dict) -> None:
        g = scene_from_dict(doc).graph
        assert tuple(g[2].transform[:, 2]) == (110, 60)
        assert tuple(g[4].transform[:, 2]) == (120, 80)
        assert tuple(g[5].transform[:, 2]) == (120, 85)
        assert (g[5].x, g[5].y) == (0.0, 5.0)

    def test_full_transform(self, doc: dict) -> None:
        g = scene_from_dict(doc).graph
        assert np.array_equal(g[7].transform, [[2, 0, 400], [0, 2, 0]])

    def test_stroke_colors(self, doc: dict) -> None:
        g = scene_from_dict(doc).graph
        assert g[2].stroke == StrokeColor(1.0, 0.0, 0.0, 1.0)
        assert g[4].stroke == StrokeColor(0.0, 0.0, 1.0, 0.5)
        assert g[5].stroke is None

    def test_default_selection_by_name(self, doc: dict) -> None:
        assert scene_from_dict(doc).selection == [1]

    def test_omitted_selection_is_all_roots(self, doc: dict) -> None:
        del doc["selection"]
        assert scene_from_dict(doc).selection == [1, 7]

    def test_explicit_empty_selection(self, doc: dict) -> None:
        doc["selection"] = []
        assert scene_from_dict(doc).selection == []


class TestSelection:
    def test_ids_and_names(self, doc: dict) -> None:
        g = scene_from_dict(doc).graph
        assert resolve_selection(g, [7, "Box"]) == [7, 2]

    def test_unknown_name(self, doc: dict) -> None:
        g = scene_from_dict(doc).graph
        with pytest.raises(SceneError, match="unknown node name"):
            resolve_selection(g, ["Missing"])

    def test_unknown_id(self, doc: dict) -> None:
        g = scene_from_dict(doc).graph
        with pytest.raises(SceneError, match="unknown node id"):
            resolve_selection(g, [42])

    def test_ambiguous_name(self, doc: dict) -> None:
        doc["nodes"][1]["name"] = "Box"
        g = scene_from_dict(doc).graph
        with pytest.raises(SceneError, match="ambiguous"):
            resolve_selection(g, ["Box"])


class TestValidation:
    @pytest.mark.parametrize(
        "node, message",
        [
            ({"kind": "RECTANGLE", "width": 5}, "width and height"),
            ({"kind": "LINE"}, "LINE nodes require width"),
            ({"kind": "TEXT", "width": 5, "height": 5}, "characters"),
            ({"kind": "RECTANGLE", "width": 1, "height": 1, "children": [{"kind": "GROUP"}]},
             "cannot have children"),
            ({"kind": "GROUP", "paths": ["M 0 0"]}, "cannot carry path data"),
            ({"kind": "GROUP", "x": 1, "transform": [[1, 0, 0], [0, 1, 0]]}, "not both"),
            ({"kind": "GROUP", "transform": [[1, 0], [0, 1]]}, "2 rows of 3"),
            ({"kind": "GROUP", "stroke": "#12"}, "RRGGBB"),
            ({"kind": "GROUP", "stroke": {"r": 2, "g": 0, "b": 0}}, "less than or equal"),
            ({"kind": "RECTANGLE", "width": -1, "height": 1}, "greater than or equal"),
            ({"kind": "BLOB"}, "kind"),
            ({"kind": "GROUP", "colour": "#FFFFFF"}, "colour"),
        ],
    )
    def test_invalid_nodes(self, node: dict, message: str) -> None:
        with pytest.raises(SceneError, match=message):
            scene_from_dict({"schema": "scene.v1", "nodes": [node]})

    def test_wrong_schema(self) -> None:
        with pytest.raises(SceneError, match="scene.v1"):
            scene_from_dict({"schema": "scene.v0", "nodes": []})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(SceneError, match="mapping"):
            scene_from_dict([1, 2])  # type: ignore[arg-type]

    def test_scene_error_is_value_error(self) -> None:
        assert issubclass(SceneError, ValueError)


class TestLoadFile:
    def test_yaml(self, tmp_path: Path, doc: dict) -> None:
        p = tmp_path / "scene.yaml"
        p.write_text(yaml.safe_dump(doc), encoding="utf-8")
        loaded = load_scene(p)
        assert len(loaded.graph) == 7
        assert loaded.selection == [1]

    def test_json(self, tmp_path: Path, doc: dict) -> None:
        p = tmp_path / "scene.json"
        p.write_text(json.dumps(doc), encoding="utf-8")
        assert len(load_scene(p).graph) == 7

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_scene(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        p = tmp_path / "scene.yaml"
        p.write_text("", encoding="utf-8")
        with pytest.raises(SceneError, match="Empty"):
            load_scene(p)

    def test_unparseable_json(self, tmp_path: Path) -> None:
        p = tmp_path / "scene.json"
        p.write_text("{nope", encoding="utf-8")
        with pytest.raises(SceneError, match="Failed to parse"):
            load_scene(p)

    @pytest.mark.parametrize("name", ["scene.yaml", "scene.json"])
    def test_non_utf8_file(self, tmp_path: Path, name: str) -> None:
        p = tmp_path / name
        p.write_bytes(b"schema: scene.v1\n# \xff\xfe\n")
        with pytest.raises(SceneError, match="Failed to parse"):
            load_scene(p)

    def test_validation_error_names_file(self, tmp_path: Path) -> None:
        p = tmp_path / "bad.yaml"
        p.write_text("schema: scene.v1\nnodes:\n  - kind: LINE\n", encoding="utf-8")
        with pytest.raises(SceneError, match="bad.yaml"):
            load_scene(p)
