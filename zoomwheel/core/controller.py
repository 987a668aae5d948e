# zoomwheel/core/controller.py
"""
Zoom control state machine. Owns the current zoom, the gesture state and both timers;
the only producer of zoom_changed / mode_changed / snap events.

Gestures:
  idle --down--> pending_long_press --(LONG_PRESS_DELAY_S)--> wheel_active
  pending_long_press --up--> idle (a tap on the button under the pointer, if any)
  wheel_active --move--> dragging --up--> wheel_active (hard snap, auto-hide armed)
  wheel_active --(AUTO_HIDE_DELAY_S)--> idle
  any --set_presets--> idle

Every path that supersedes a timer cancels it; a callback from a superseded timer is ignored.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Callable, Iterable

from zoomwheel.core import cycler
from zoomwheel.core.config import DEFAULT_INITIAL_ZOOM, ZOOM_DEBUG
from zoomwheel.core.mapper import angle_to_zoom, clamp_angle, clamp_zoom, zoom_to_angle
from zoomwheel.core.presets import DEFAULT_PRESETS, validate_presets, zoom_bounds
from zoomwheel.core.scheduler import ManualScheduler, Scheduler, TimerHandle
from zoomwheel.core.snap import apply_hard_snap, apply_soft_snap, snap_zone_target
from zoomwheel.core.types import (
    ButtonGroup,
    ControlEvent,
    ControlSettings,
    DisplayMode,
    EventKind,
    GestureState,
    GroupDisplay,
    InteractionState,
    PointerEvent,
    ZoomPreset,
)
from zoomwheel.core.wheel import smooth_rotation, wheel_rotation_for_zoom

logger = logging.getLogger(__name__)

Listener = Callable[[ControlEvent], None]

_WHEEL_GESTURES: tuple[GestureState, ...] = ("wheel_active", "dragging")


def _trace(msg: str, *args: object) -> None:
    """Transition log: INFO when ZOOM_DEBUG is set, DEBUG otherwise."""
    logger.log(logging.INFO if ZOOM_DEBUG else logging.DEBUG, msg, *args)


class ZoomController:
    """
    Single-owner controller for one zoom control instance.
    All methods must be called from the same thread/event loop as the scheduler.
    """

    def __init__(
        self,
        presets: Iterable[ZoomPreset] | None = None,
        scheduler: Scheduler | None = None,
        settings: ControlSettings | None = None,
        initial_zoom: float | None = None,
    ) -> None:
        self._settings = settings or ControlSettings()
        self._scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._listeners: list[Listener] = []
        self._long_press_timer: TimerHandle | None = None
        self._long_press_gen = 0
        self._hide_timer: TimerHandle | None = None
        self._hide_gen = 0

        self._presets = validate_presets(presets if presets is not None else DEFAULT_PRESETS)
        self._min_zoom, self._max_zoom = zoom_bounds(self._presets)
        self._groups = cycler.partition_presets(self._presets)

        start = DEFAULT_INITIAL_ZOOM if initial_zoom is None or not math.isfinite(initial_zoom) else initial_zoom
        zoom = clamp_zoom(start, self._min_zoom, self._max_zoom)
        cursors = cycler.resync_cursors(self._groups, cycler.initial_cursors(self._groups), zoom)
        self._state = InteractionState(current_zoom=zoom, cycle_cursors=cursors)
        self._rotation = self._target_rotation(zoom)

    # ----- Read-only views -----

    @property
    def state(self) -> InteractionState:
        """Snapshot copy; mutating it does not affect the controller."""
        return dataclasses.replace(self._state, cycle_cursors=dict(self._state.cycle_cursors))

    @property
    def current_zoom(self) -> float:
        return self._state.current_zoom

    @property
    def mode(self) -> DisplayMode:
        return self._state.mode

    @property
    def gesture(self) -> GestureState:
        return self._state.gesture

    @property
    def presets(self) -> tuple[ZoomPreset, ...]:
        return self._presets

    @property
    def groups(self) -> list[ButtonGroup]:
        return list(self._groups)

    @property
    def settings(self) -> ControlSettings:
        return self._settings

    @property
    def min_zoom(self) -> float:
        return self._min_zoom

    @property
    def max_zoom(self) -> float:
        return self._max_zoom

    @property
    def current_angle(self) -> float:
        return zoom_to_angle(self._state.current_zoom, self._min_zoom, self._max_zoom, self._settings.arc)

    @property
    def wheel_rotation(self) -> float:
        """Smoothed wheel rotation (degrees); approaches -current_angle as zoom settles."""
        return self._rotation

    def group_displays(self) -> list[GroupDisplay]:
        return cycler.group_displays(self._groups, self._state.cycle_cursors, self._state.current_zoom)

    # ----- Listeners -----

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: EventKind, zoom: float) -> None:
        event = ControlEvent(kind=kind, zoom=zoom, mode=self._state.mode)
        for listener in list(self._listeners):
            listener(event)

    # ----- Pointer input -----

    def pointer_down(self, event: PointerEvent) -> None:
        st = self._state
        st.pointer_down = True
        if st.gesture == "idle":
            self._cancel_hide()
            self._arm_long_press()
            st.gesture = "pending_long_press"
            st.pending_long_press = True
            _trace("idle -> pending_long_press at (%.1f, %.1f)", event.x, event.y)
        elif st.gesture in _WHEEL_GESTURES:
            # New touch on the visible wheel: keep it open, start a fresh delta baseline.
            self._cancel_hide()
            st.last_drag_position = None
            st.last_move_timestamp = None

    def pointer_move(self, event: PointerEvent) -> None:
        st = self._state
        if not st.pointer_down or st.gesture not in _WHEEL_GESTURES:
            return
        if not (math.isfinite(event.x) and math.isfinite(event.y)):
            logger.warning("Dropping pointer move with non-finite position (%r, %r)", event.x, event.y)
            return
        if (
            event.timestamp is not None
            and st.last_move_timestamp is not None
            and event.timestamp < st.last_move_timestamp
        ):
            logger.warning(
                "Dropping out-of-order pointer move (t=%s < last t=%s)",
                event.timestamp,
                st.last_move_timestamp,
            )
            return
        self._cancel_hide()
        if st.gesture == "wheel_active":
            st.gesture = "dragging"
            st.is_dragging = True
            # Starting inside a zone does not count as entering it.
            st.snap_target = snap_zone_target(st.current_zoom, self._presets, self._settings.soft_snap_threshold)
            _trace("wheel_active -> dragging")

        previous = st.last_drag_position
        st.last_drag_position = (event.x, event.y)
        if event.timestamp is not None:
            st.last_move_timestamp = event.timestamp
        if previous is None:
            return
        self._drag_by(event.x - previous[0])

    def pointer_up(self, event: PointerEvent) -> None:
        st = self._state
        st.pointer_down = False
        if st.gesture == "pending_long_press":
            self._cancel_long_press()
            st.pending_long_press = False
            st.gesture = "idle"
            _trace("pending_long_press -> idle (short press)")
            if event.group_index is not None:
                self.tap_group(event.group_index)
        elif st.gesture in _WHEEL_GESTURES:
            if st.gesture == "dragging":
                _trace("dragging -> wheel_active")
            st.gesture = "wheel_active"
            st.is_dragging = False
            st.last_drag_position = None
            st.last_move_timestamp = None
            st.snap_target = None
            self._set_zoom(
                apply_hard_snap(st.current_zoom, self._presets, self._settings.hard_snap_threshold)
            )
            self._arm_hide()

    def handle(self, event: PointerEvent) -> None:
        """Dispatch a pointer event by kind."""
        if event.kind == "down":
            self.pointer_down(event)
        elif event.kind == "move":
            self.pointer_move(event)
        elif event.kind == "up":
            self.pointer_up(event)
        else:
            logger.warning("Ignoring pointer event of unknown kind %r", event.kind)

    def _drag_by(self, delta_x: float) -> None:
        s = self._settings
        st = self._state
        sign = -1.0 if s.invert_drag else 1.0
        angle = self.current_angle + sign * delta_x * s.drag_sensitivity
        angle = clamp_angle(angle, s.arc)
        zoom = angle_to_zoom(angle, self._min_zoom, self._max_zoom, s.arc)
        snapped = apply_soft_snap(
            zoom,
            self._presets,
            s.soft_snap_threshold,
            s.soft_snap_strength,
            previous_target=st.snap_target,
        )
        st.snap_target = snapped.snap_target
        self._set_zoom(snapped.zoom)
        if snapped.changed and snapped.snap_target is not None:
            self._emit("snap", snapped.snap_target)

    # ----- Buttons and external writes -----

    def tap_group(self, group_index: int) -> None:
        """Tap on a rendered button. Unknown groups and taps while the wheel is shown are ignored."""
        st = self._state
        if not 0 <= group_index < len(self._groups):
            logger.warning("Ignoring tap on unknown button group %d (have %d)", group_index, len(self._groups))
            return
        if st.mode != "buttons":
            _trace("Ignoring tap on group %d while wheel is shown", group_index)
            return
        cursors, zoom = cycler.tap_group(self._groups, st.cycle_cursors, group_index, st.current_zoom)
        st.cycle_cursors = cursors
        self._set_zoom(zoom, resync=False)

    def set_zoom(self, zoom: float) -> None:
        """External write (e.g. programmatic reset). Clamped into bounds; non-finite values ignored."""
        if not math.isfinite(zoom):
            logger.warning("Ignoring non-finite zoom %r", zoom)
            return
        self._set_zoom(zoom)

    def set_presets(self, presets: Iterable[ZoomPreset]) -> None:
        """
        Replace the preset list. Raises ZoomConfigError (state untouched) if empty.
        Otherwise cancels timers, returns to idle/buttons and clamps zoom into the new bounds.
        """
        validated = validate_presets(presets)
        self._cancel_long_press()
        self._cancel_hide()
        self._presets = validated
        self._min_zoom, self._max_zoom = zoom_bounds(validated)
        self._groups = cycler.partition_presets(validated)

        st = self._state
        st.gesture = "idle"
        st.pointer_down = False
        st.pending_long_press = False
        st.is_dragging = False
        st.last_drag_position = None
        st.last_move_timestamp = None
        st.snap_target = None
        old_zoom = st.current_zoom
        zoom = clamp_zoom(old_zoom, self._min_zoom, self._max_zoom)
        st.cycle_cursors = cycler.resync_cursors(self._groups, cycler.initial_cursors(self._groups), zoom)
        st.current_zoom = zoom
        self._rotation = self._target_rotation(zoom)
        _trace("presets changed: %d presets, bounds [%.2f, %.2f]", len(validated), self._min_zoom, self._max_zoom)
        self._set_mode("buttons")
        if zoom != old_zoom:
            self._emit("zoom_changed", zoom)

    def close(self) -> None:
        """Cancel both timers. The controller stays usable."""
        self._cancel_long_press()
        self._cancel_hide()

    # ----- Internals -----

    def _target_rotation(self, zoom: float) -> float:
        return wheel_rotation_for_zoom(zoom, self._min_zoom, self._max_zoom, self._settings.arc)

    def _set_zoom(self, zoom: float, resync: bool = True) -> None:
        st = self._state
        zoom = clamp_zoom(zoom, self._min_zoom, self._max_zoom)
        if zoom == st.current_zoom:
            return
        st.current_zoom = zoom
        self._rotation = smooth_rotation(self._rotation, self._target_rotation(zoom))
        if resync:
            st.cycle_cursors = cycler.resync_cursors(self._groups, st.cycle_cursors, zoom)
        self._emit("zoom_changed", zoom)

    def _set_mode(self, mode: DisplayMode) -> None:
        if self._state.mode == mode:
            return
        self._state.mode = mode
        _trace("mode -> %s", mode)
        self._emit("mode_changed", self._state.current_zoom)

    def _arm_long_press(self) -> None:
        self._cancel_long_press()
        self._long_press_gen += 1
        gen = self._long_press_gen
        self._long_press_timer = self._scheduler.call_later(
            self._settings.long_press_delay_s, lambda: self._on_long_press(gen)
        )

    def _cancel_long_press(self) -> None:
        if self._long_press_timer is not None:
            self._long_press_timer.cancel()
            self._long_press_timer = None
        self._long_press_gen += 1

    def _on_long_press(self, gen: int) -> None:
        if gen != self._long_press_gen or self._long_press_timer is None:
            return
        self._long_press_timer = None
        st = self._state
        if st.gesture != "pending_long_press":
            return
        st.pending_long_press = False
        st.gesture = "wheel_active"
        st.last_drag_position = None
        st.last_move_timestamp = None
        _trace("pending_long_press -> wheel_active")
        self._set_mode("wheel")

    def _arm_hide(self) -> None:
        self._cancel_hide()
        self._hide_gen += 1
        gen = self._hide_gen
        self._hide_timer = self._scheduler.call_later(
            self._settings.auto_hide_delay_s, lambda: self._on_hide(gen)
        )

    def _cancel_hide(self) -> None:
        if self._hide_timer is not None:
            self._hide_timer.cancel()
            self._hide_timer = None
        self._hide_gen += 1

    def _on_hide(self, gen: int) -> None:
        if gen != self._hide_gen or self._hide_timer is None:
            return
        self._hide_timer = None
        st = self._state
        if st.gesture != "wheel_active" or st.pointer_down:
            return
        st.gesture = "idle"
        st.cycle_cursors = cycler.resync_cursors(self._groups, st.cycle_cursors, st.current_zoom)
        _trace("wheel_active -> idle (auto-hide)")
        self._set_mode("buttons")
