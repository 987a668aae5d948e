# tests/test_io.py
"""
Preset and gesture-script loading from JSON; malformed input is rejected with clear errors.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from zoomwheel.core.error_codes import ZoomConfigError
from zoomwheel.core.io import (
    load_gesture_script,
    load_presets,
    load_presets_json,
    preset_from_obj,
    step_from_obj,
)
from zoomwheel.core.presets import DEFAULT_PRESETS, preset_zooms


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_presets_json_objects_and_numbers(tmp_path: Path) -> None:
    _write(
        tmp_path / "presets.json",
        [{"zoom": 2.0}, 0.5, {"zoom": 1.0, "label": "24 MM", "display_kind": "labeled_value"}],
    )
    presets = load_presets_json("presets.json", repo_root=tmp_path)
    assert preset_zooms(presets) == [0.5, 1.0, 2.0]
    assert presets[1].label == "24 MM"
    assert presets[1].display_kind == "labeled_value"
    assert presets[0].display_kind == "value"


def test_load_presets_dispatches_on_suffix(tmp_path: Path) -> None:
    _write(tmp_path / "p.json", [1, 3])
    assert preset_zooms(load_presets("p.json", repo_root=tmp_path)) == [1.0, 3.0]
    assert preset_zooms(load_presets("0.5, 2")) == [0.5, 2.0]
    assert load_presets("") == DEFAULT_PRESETS


def test_load_presets_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_presets_json("nope.json", repo_root=tmp_path)


def test_load_presets_empty_list(tmp_path: Path) -> None:
    _write(tmp_path / "empty.json", [])
    with pytest.raises(ZoomConfigError):
        load_presets_json("empty.json", repo_root=tmp_path)


def test_load_presets_not_a_list(tmp_path: Path) -> None:
    _write(tmp_path / "obj.json", {"zoom": 1})
    with pytest.raises(ValueError, match="JSON list"):
        load_presets_json("obj.json", repo_root=tmp_path)


def test_preset_from_obj_rejects_bad_shapes() -> None:
    with pytest.raises(ValueError, match="display_kind"):
        preset_from_obj({"zoom": 1.0, "display_kind": "sparkle"})
    with pytest.raises(ValueError):
        preset_from_obj({"label": "no zoom"})
    with pytest.raises(ValueError):
        preset_from_obj(True)
    with pytest.raises(ValueError, match="numeric"):
        preset_from_obj({"zoom": None})
    with pytest.raises(ValueError, match="numeric"):
        preset_from_obj({"zoom": "wide"})
    with pytest.raises(ZoomConfigError):
        preset_from_obj(-2)


def test_load_gesture_script(tmp_path: Path) -> None:
    _write(
        tmp_path / "script.json",
        [
            {"t": 0, "kind": "down", "x": 10},
            {"t": 0.6, "kind": "move", "x": 20, "y": 1},
            {"t": 0.7, "kind": "up"},
            {"t": 2, "kind": "tap", "group": 1},
            {"t": 3, "kind": "set_zoom", "zoom": 2.5},
        ],
    )
    steps = load_gesture_script("script.json", repo_root=tmp_path)
    assert [s.kind for s in steps] == ["down", "move", "up", "tap", "set_zoom"]
    assert steps[1].x == 20.0 and steps[1].y == 1.0
    assert steps[3].group_index == 1
    assert steps[4].zoom == 2.5


def test_step_validation() -> None:
    with pytest.raises(ValueError, match="kind"):
        step_from_obj({"t": 0, "kind": "pinch"})
    with pytest.raises(ValueError, match="'t'"):
        step_from_obj({"kind": "down"})
    with pytest.raises(ValueError, match="group"):
        step_from_obj({"t": 0, "kind": "tap"})
    with pytest.raises(ValueError, match="zoom"):
        step_from_obj({"t": 0, "kind": "set_zoom"})
    with pytest.raises(ValueError):
        step_from_obj([0, "down"])
