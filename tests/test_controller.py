# tests/test_controller.py
"""
ZoomController state machine: long press, drag, snapping, auto-hide, taps,
external writes, preset changes and timer hygiene. Deterministic (ManualScheduler).
"""

from __future__ import annotations

import logging
import math

import pytest

from zoomwheel.core.config import ZOOM_SUFFIX
from zoomwheel.core.controller import ZoomController
from zoomwheel.core.error_codes import ZoomConfigError
from zoomwheel.core.mapper import angle_to_zoom, zoom_to_angle
from zoomwheel.core.scheduler import ManualScheduler
from zoomwheel.core.types import ControlEvent, ControlSettings, PointerEvent, ZoomPreset


def _presets(*zooms: float) -> tuple[ZoomPreset, ...]:
    return tuple(ZoomPreset(zoom=z) for z in zooms)


def _make(
    presets: tuple[ZoomPreset, ...] | None = None,
    initial_zoom: float | None = None,
    settings: ControlSettings | None = None,
) -> tuple[ZoomController, ManualScheduler, list[ControlEvent]]:
    s = ManualScheduler()
    c = ZoomController(presets, scheduler=s, settings=settings, initial_zoom=initial_zoom)
    events: list[ControlEvent] = []
    c.add_listener(events.append)
    return c, s, events


def _down(x: float = 0.0, t: float | None = None, group: int | None = None) -> PointerEvent:
    return PointerEvent(kind="down", x=x, timestamp=t, group_index=group)


def _move(x: float, t: float | None = None) -> PointerEvent:
    return PointerEvent(kind="move", x=x, timestamp=t)


def _up(x: float = 0.0, group: int | None = None) -> PointerEvent:
    return PointerEvent(kind="up", x=x, group_index=group)


def _open_wheel(c: ZoomController, s: ManualScheduler) -> None:
    c.pointer_down(_down())
    s.advance(c.settings.long_press_delay_s)


def _kinds(events: list[ControlEvent]) -> list[str]:
    return [e.kind for e in events]


def test_initial_state() -> None:
    c, s, events = _make()
    assert c.mode == "buttons"
    assert c.gesture == "idle"
    assert c.current_zoom == 1.0
    assert len(c.state.cycle_cursors) == len(c.groups)
    assert (c.min_zoom, c.max_zoom) == (0.5, 10.0)
    assert events == []


def test_initial_zoom_is_clamped() -> None:
    c, _, _ = _make(initial_zoom=50.0)
    assert c.current_zoom == 10.0
    c, _, _ = _make(presets=_presets(1.0, 2.0))
    assert c.current_zoom == 1.0
    c, _, _ = _make(presets=_presets(2.0, 4.0))
    assert c.current_zoom == 2.0


def test_construction_config_errors() -> None:
    with pytest.raises(ZoomConfigError):
        ZoomController([])
    with pytest.raises(ZoomConfigError):
        ZoomController([ZoomPreset(zoom=0.0)])


def test_short_press_never_switches_mode() -> None:
    c, s, events = _make()
    c.pointer_down(_down())
    assert c.gesture == "pending_long_press"
    assert c.state.pending_long_press is True
    s.advance(0.3)
    c.pointer_up(_up())
    assert c.gesture == "idle"
    assert c.mode == "buttons"
    assert s.pending() == 0
    s.advance(5.0)
    assert c.mode == "buttons"
    assert "mode_changed" not in _kinds(events)


def test_short_press_over_button_is_a_tap() -> None:
    c, s, events = _make()
    c.pointer_down(_down(group=3))
    c.pointer_up(_up(group=3))
    assert c.current_zoom == 3.0
    assert _kinds(events) == ["zoom_changed"]
    assert events[0].zoom == 3.0


def test_long_press_opens_wheel() -> None:
    c, s, events = _make()
    c.pointer_down(_down())
    s.advance(0.49)
    assert c.mode == "buttons"
    s.advance(0.02)
    assert c.mode == "wheel"
    assert c.gesture == "wheel_active"
    assert c.state.last_drag_position is None
    assert len(events) == 1
    assert events[0].kind == "mode_changed" and events[0].mode == "wheel"


def test_first_move_only_sets_baseline() -> None:
    c, s, events = _make()
    _open_wheel(c, s)
    events.clear()
    c.pointer_move(_move(100.0))
    assert c.gesture == "dragging"
    assert c.state.is_dragging is True
    assert c.state.last_drag_position == (100.0, 0.0)
    assert c.current_zoom == 1.0
    assert events == []


def test_drag_right_by_eighteen_degrees_from_min() -> None:
    c, s, events = _make(initial_zoom=0.5)
    _open_wheel(c, s)
    c.pointer_move(_move(100.0))
    c.pointer_move(_move(136.0))  # 36 units * 0.5 = +18 degrees
    assert c.current_angle == pytest.approx(63.0)
    assert c.current_zoom == pytest.approx(0.5 * 20 ** 0.2)
    assert "snap" not in _kinds(events)


def test_drag_soft_snaps_toward_nearby_preset() -> None:
    c, s, events = _make(presets=_presets(0.5, 0.92, 10.0), initial_zoom=0.5)
    _open_wheel(c, s)
    c.pointer_move(_move(100.0))
    c.pointer_move(_move(136.0))
    raw = 0.5 * 20 ** 0.2
    assert c.current_zoom == pytest.approx(raw + (0.92 - raw) * 0.2)
    snaps = [e for e in events if e.kind == "snap"]
    assert [e.zoom for e in snaps] == [0.92]


def test_deltas_are_relative_to_previous_move() -> None:
    c, s, _ = _make(initial_zoom=0.5)
    _open_wheel(c, s)
    c.pointer_move(_move(100.0))
    c.pointer_move(_move(110.0))
    c.pointer_move(_move(120.0))
    assert c.current_angle == pytest.approx(55.0)


def test_inverted_drag_direction() -> None:
    c, s, _ = _make(settings=ControlSettings(invert_drag=True))
    _open_wheel(c, s)
    c.pointer_move(_move(100.0))
    c.pointer_move(_move(120.0))
    expected = angle_to_zoom(zoom_to_angle(1.0, 0.5, 10.0) - 10.0, 0.5, 10.0)
    assert c.current_zoom == pytest.approx(expected)
    assert c.current_zoom < 1.0


def test_drag_angle_clamped_to_arc() -> None:
    c, s, events = _make()
    _open_wheel(c, s)
    c.pointer_move(_move(0.0))
    c.pointer_move(_move(10000.0))
    assert c.current_zoom <= 10.0
    assert c.current_zoom == pytest.approx(10.0)
    c.pointer_up(_up())
    assert c.current_zoom == 10.0
    c.pointer_down(_down())
    c.pointer_move(_move(0.0))
    c.pointer_move(_move(-10000.0))
    assert c.current_zoom >= 0.5
    assert c.current_zoom == pytest.approx(0.5)


def test_release_hard_snaps_then_auto_hides() -> None:
    c, s, events = _make(initial_zoom=1.97)
    _open_wheel(c, s)
    c.pointer_move(_move(50.0))
    c.pointer_move(_move(50.0))  # zero delta still runs the soft snap
    # drag started inside 2.0's zone, so no zone was entered
    assert "snap" not in _kinds(events)
    assert 1.97 < c.current_zoom < 2.0
    c.pointer_up(_up())
    assert c.current_zoom == 2.0
    assert c.gesture == "wheel_active"
    assert c.state.is_dragging is False
    assert c.state.last_drag_position is None
    s.advance(0.99)
    assert c.mode == "wheel"
    s.advance(0.02)
    assert c.mode == "buttons"
    assert c.gesture == "idle"
    assert events[-1].kind == "mode_changed" and events[-1].mode == "buttons"


def test_hard_snap_boundary_is_strict() -> None:
    settings = ControlSettings(hard_snap_threshold=0.25)
    c, s, _ = _make(presets=_presets(1.0, 2.0), initial_zoom=1.75, settings=settings)
    _open_wheel(c, s)
    c.pointer_up(_up())
    assert c.current_zoom == 1.75


def test_release_without_drag_arms_auto_hide() -> None:
    c, s, events = _make(initial_zoom=1.97)
    _open_wheel(c, s)
    c.pointer_up(_up())
    assert c.current_zoom == 2.0
    assert c.gesture == "wheel_active"
    s.advance(1.0)
    assert c.mode == "buttons"


def test_new_touch_cancels_auto_hide() -> None:
    c, s, _ = _make()
    _open_wheel(c, s)
    c.pointer_move(_move(0.0))
    c.pointer_move(_move(10.0))
    c.pointer_up(_up())
    s.advance(0.5)
    c.pointer_down(_down(x=30.0))
    assert c.state.last_drag_position is None
    s.advance(3.0)
    assert c.mode == "wheel"
    c.pointer_move(_move(30.0))
    c.pointer_move(_move(40.0))
    c.pointer_up(_up())
    s.advance(0.9)
    assert c.mode == "wheel"
    s.advance(0.2)
    assert c.mode == "buttons"


def test_stale_long_press_timer_does_not_fire() -> None:
    c, s, events = _make()
    c.pointer_down(_down())
    s.advance(0.2)
    c.pointer_up(_up())
    s.advance(0.1)
    c.pointer_down(_down())  # t = 0.3; first timer would have fired at 0.5
    s.advance(0.3)
    assert c.mode == "buttons"
    assert c.gesture == "pending_long_press"
    s.advance(0.25)
    assert c.mode == "wheel"
    assert _kinds(events) == ["mode_changed"]


def test_snap_events_only_on_entering_a_preset_zone() -> None:
    c, s, events = _make(initial_zoom=1.9)
    _open_wheel(c, s)
    x = 0.0
    c.pointer_move(_move(x))
    for _ in range(20):
        x += 1.0
        c.pointer_move(_move(x))
    assert c.current_zoom > 2.3
    assert [e.zoom for e in events if e.kind == "snap"] == [2.0]
    assert sum(1 for e in events if e.kind == "zoom_changed") == 20


def test_regrab_on_preset_emits_no_snap() -> None:
    c, s, events = _make(initial_zoom=2.0)
    _open_wheel(c, s)
    c.pointer_move(_move(0.0))
    c.pointer_move(_move(0.2))
    assert c.current_zoom > 2.0
    assert "zoom_changed" in _kinds(events)
    assert "snap" not in _kinds(events)


def test_regrab_after_hard_snap_then_return_emits_snap() -> None:
    c, s, events = _make(initial_zoom=1.97)
    _open_wheel(c, s)
    c.pointer_up(_up())
    assert c.current_zoom == 2.0
    c.pointer_down(_down())
    c.pointer_move(_move(0.0))
    c.pointer_move(_move(20.0))  # +10 degrees, out of every zone
    assert c.state.snap_target is None
    assert "snap" not in _kinds(events)
    c.pointer_move(_move(0.0))  # back into 2.0's zone
    assert [e.zoom for e in events if e.kind == "snap"] == [2.0]


def test_non_finite_move_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    c, s, events = _make()
    _open_wheel(c, s)
    c.pointer_move(_move(0.0))
    with caplog.at_level(logging.WARNING, logger="zoomwheel.core.controller"):
        c.pointer_move(_move(float("nan")))
        c.pointer_move(_move(float("inf")))
    assert c.current_zoom == 1.0
    assert c.state.last_drag_position == (0.0, 0.0)
    assert "non-finite" in caplog.text
    start = c.current_angle
    c.pointer_move(_move(4.0))
    assert c.current_angle == pytest.approx(start + 2.0)


def test_out_of_order_move_is_dropped(caplog: pytest.LogCaptureFixture) -> None:
    c, s, _ = _make(initial_zoom=0.5)
    _open_wheel(c, s)
    c.pointer_move(_move(100.0, t=1.0))
    c.pointer_move(_move(110.0, t=1.1))
    before = c.current_zoom
    with caplog.at_level(logging.WARNING, logger="zoomwheel.core.controller"):
        c.pointer_move(_move(200.0, t=1.05))
    assert c.current_zoom == before
    assert c.state.last_drag_position == (110.0, 0.0)
    assert "out-of-order" in caplog.text


def test_moves_ignored_while_buttons_shown() -> None:
    c, s, events = _make()
    c.pointer_move(_move(10.0))
    c.pointer_down(_down())
    c.pointer_move(_move(50.0))
    c.pointer_move(_move(90.0))
    assert c.current_zoom == 1.0
    assert c.gesture == "pending_long_press"
    assert events == []


def test_tap_cycles_active_group() -> None:
    c, _, events = _make()
    c.tap_group(1)
    assert c.current_zoom == 1.2
    c.tap_group(1)
    assert c.current_zoom == 1.5
    c.tap_group(1)
    assert c.current_zoom == 1.0
    c.tap_group(3)
    assert c.current_zoom == 3.0
    assert [e.zoom for e in events] == [1.2, 1.5, 1.0, 3.0]


def test_tap_lands_on_base_when_zoom_in_omitted_group() -> None:
    # 1.5 falls in the 1x range, which has no presets here
    c, _, _ = _make(presets=_presets(0.5, 0.7, 3.0), initial_zoom=1.5)
    assert [g.name for g in c.groups] == ["ultra_wide", "3x+"]
    c.tap_group(0)
    assert c.current_zoom == 0.5
    c.tap_group(0)
    assert c.current_zoom == 0.7


def test_tap_unknown_group_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    c, _, events = _make()
    with caplog.at_level(logging.WARNING, logger="zoomwheel.core.controller"):
        c.tap_group(7)
    assert c.current_zoom == 1.0
    assert events == []
    assert "unknown button group" in caplog.text


def test_tap_ignored_while_wheel_shown() -> None:
    c, s, _ = _make()
    _open_wheel(c, s)
    c.tap_group(3)
    assert c.current_zoom == 1.0


def test_set_zoom_clamps_and_resyncs() -> None:
    c, _, events = _make()
    c.set_zoom(50.0)
    assert c.current_zoom == 10.0
    c.set_zoom(0.1)
    assert c.current_zoom == 0.5
    c.set_zoom(float("nan"))
    assert c.current_zoom == 0.5
    c.set_zoom(1.5)
    assert c.state.cycle_cursors[1] == 2
    displays = c.group_displays()
    assert displays[1].is_active and displays[1].text == f"1.5{ZOOM_SUFFIX}"
    assert [e.zoom for e in events] == [10.0, 0.5, 1.5]
    c.set_zoom(1.5)
    assert len(events) == 3


def test_display_shows_intermediate_zoom() -> None:
    c, _, _ = _make()
    c.set_zoom(9.6)
    d = c.group_displays()[3]
    assert d.is_active is True
    assert d.text == f"9.6{ZOOM_SUFFIX}"
    assert c.group_displays()[1].text == "1"


def test_tap_after_drag_uses_resynced_cursor() -> None:
    c, _, _ = _make()
    c.set_zoom(1.2)  # as if a drag had ended here
    c.tap_group(1)
    assert c.current_zoom == 1.5


def test_set_presets_returns_to_idle_and_clamps() -> None:
    c, s, events = _make(initial_zoom=3.0)
    _open_wheel(c, s)
    c.pointer_move(_move(0.0))
    c.pointer_move(_move(10.0))
    events.clear()
    c.set_presets(_presets(1.0, 1.5, 2.0))
    assert c.gesture == "idle"
    assert c.mode == "buttons"
    assert c.current_zoom == 2.0
    assert s.pending() == 0
    assert [g.name for g in c.groups] == ["1x", "2x"]
    assert set(c.state.cycle_cursors) == {0, 1}
    assert _kinds(events) == ["mode_changed", "zoom_changed"]
    assert c.state.is_dragging is False


def test_set_presets_cancels_pending_long_press() -> None:
    c, s, events = _make()
    c.pointer_down(_down())
    c.set_presets(_presets(0.5, 1.0, 2.0))
    s.advance(2.0)
    assert c.mode == "buttons"
    assert events == []


def test_set_presets_empty_leaves_state_untouched() -> None:
    c, s, _ = _make()
    _open_wheel(c, s)
    with pytest.raises(ZoomConfigError):
        c.set_presets([])
    assert c.mode == "wheel"
    assert c.max_zoom == 10.0


def test_state_is_a_snapshot() -> None:
    c, _, _ = _make()
    st = c.state
    st.current_zoom = 5.0
    st.cycle_cursors[1] = 2
    assert c.current_zoom == 1.0
    assert c.state.cycle_cursors[1] == 0


def test_wheel_rotation_follows_zoom() -> None:
    c, _, _ = _make()
    start = c.wheel_rotation
    assert start == pytest.approx(-c.current_angle)
    c.set_zoom(3.0)
    target = -c.current_angle
    assert c.wheel_rotation == pytest.approx(start + (target - start) * 0.6)


def test_remove_listener_and_close() -> None:
    c, s, events = _make()
    c.remove_listener(events.append)
    c.set_zoom(2.0)
    assert events == []
    c.pointer_down(_down())
    c.close()
    assert s.pending() == 0
    s.advance(1.0)
    assert c.mode == "buttons"


def test_current_zoom_always_within_bounds() -> None:
    c, s, _ = _make()
    _open_wheel(c, s)
    c.pointer_move(_move(0.0))
    for dx in (300.0, -50.0, 1000.0, -2000.0, 7.0, 3.0, -1.0):
        c.pointer_move(_move(c.state.last_drag_position[0] + dx))
        assert c.min_zoom <= c.current_zoom <= c.max_zoom
        assert not math.isnan(c.current_zoom)
