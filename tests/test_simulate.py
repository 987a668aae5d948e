# tests/test_simulate.py
"""
Gesture replay on the virtual clock: the built-in demo, custom scripts, and the events.json contract.
"""

from __future__ import annotations

import json

import pytest

from zoomwheel.core.reporting import simulation_to_dict
from zoomwheel.core.simulate import demo_script, run_script
from zoomwheel.core.types import ScriptStep, ZoomPreset


def test_demo_script_opens_wheel_then_returns_to_buttons() -> None:
    result = run_script(demo_script())
    assert [e.event.mode for e in result.mode_changes] == ["wheel", "buttons"]
    assert result.mode_changes[0].t == pytest.approx(0.5)
    assert result.snap_count >= 1
    # two taps on the 1x group after the wheel hid: base, then next preset
    assert result.final_zoom == 1.2
    assert result.final_mode == "buttons"


def test_trace_has_row_per_step_plus_end() -> None:
    steps = demo_script()
    result = run_script(steps)
    assert len(result.trace) == len(steps) + 1
    assert result.trace[-1].step == "end"
    assert all(0.5 <= row.zoom <= 10.0 for row in result.trace)


def test_steps_run_in_time_order() -> None:
    steps = [
        ScriptStep(t=1.0, kind="set_zoom", zoom=3.0),
        ScriptStep(t=0.5, kind="set_zoom", zoom=2.0),
    ]
    result = run_script(steps)
    assert [e.event.zoom for e in result.events] == [2.0, 3.0]
    assert result.final_zoom == 3.0


def test_unreleased_press_opens_wheel_and_stays() -> None:
    result = run_script([ScriptStep(t=0.0, kind="down")], settle_s=5.0)
    assert result.final_mode == "wheel"
    assert [e.event.mode for e in result.mode_changes] == ["wheel"]


def test_custom_presets_and_initial_zoom() -> None:
    presets = (ZoomPreset(zoom=1.0), ZoomPreset(zoom=4.0))
    result = run_script([ScriptStep(t=0.1, kind="wait")], presets=presets, initial_zoom=8.0)
    assert result.final_zoom == 4.0
    assert result.events == []


def test_events_json_shape() -> None:
    result = run_script(demo_script())
    data = simulation_to_dict(result)
    assert data["schema_version"] == "1.0"
    assert set(data["summary"]) == {"final_zoom", "final_mode", "event_count", "snap_count", "mode_change_count"}
    assert data["summary"]["mode_change_count"] == 2
    first = data["events"][0]
    assert set(first) == {"t", "kind", "zoom", "mode"}
    assert set(data["trace"][0]) == {"t", "step", "zoom", "angle_deg", "rotation_deg", "mode", "gesture"}
    loaded = json.loads(json.dumps(data))
    assert loaded["summary"]["final_zoom"] == result.final_zoom
