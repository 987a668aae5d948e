# zoomwheel/core/types.py
"""
Dataclasses for presets, button groups, pointer input, emitted events and controller state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

from zoomwheel.core.config import (
    ARC_SPAN_DEG,
    ARC_START_DEG,
    AUTO_HIDE_DELAY_S,
    DRAG_SENSITIVITY,
    HARD_SNAP_THRESHOLD,
    LONG_PRESS_DELAY_S,
    SOFT_SNAP_STRENGTH,
    SOFT_SNAP_THRESHOLD,
)
from zoomwheel.core.error_codes import INVALID_ARC, NON_POSITIVE_ZOOM, ZoomConfigError


DisplayKind = Literal["dot", "value", "labeled_value"]
DisplayMode = Literal["buttons", "wheel"]
GestureState = Literal["idle", "pending_long_press", "wheel_active", "dragging"]
PointerKind = Literal["down", "move", "up"]
EventKind = Literal["zoom_changed", "mode_changed", "snap"]


@dataclass(frozen=True)
class ZoomPreset:
    """A curated zoom level. label is free text shown with labeled_value presets (e.g. '24 MM')."""
    zoom: float
    label: str | None = None
    display_kind: DisplayKind = "value"

    def __post_init__(self) -> None:
        if not math.isfinite(self.zoom) or self.zoom <= 0:
            raise ZoomConfigError(NON_POSITIVE_ZOOM, f"zoom={self.zoom!r}")


@dataclass(frozen=True)
class ButtonGroup:
    """Presets sharing one button. range_high is exclusive; the top group uses inf."""
    name: str
    range_low: float
    range_high: float
    presets: tuple[ZoomPreset, ...]
    base_value: float

    def contains(self, zoom: float) -> bool:
        return self.range_low <= zoom < self.range_high


@dataclass(frozen=True)
class GroupDisplay:
    """What a button shows. Pulled by the host; never pushed."""
    group_index: int
    name: str
    value: float
    text: str
    is_active: bool


@dataclass(frozen=True)
class PointerEvent:
    """
    Raw pointer input. group_index names the button under the pointer, if any;
    a short press released over a button counts as a tap on it.
    """
    kind: PointerKind
    x: float
    y: float = 0.0
    timestamp: float | None = None
    group_index: int | None = None


@dataclass(frozen=True)
class ControlEvent:
    """Emitted to listeners. For snap events, zoom is the preset being attracted to."""
    kind: EventKind
    zoom: float
    mode: DisplayMode


@dataclass(frozen=True)
class SoftSnapResult:
    zoom: float
    snap_target: float | None
    changed: bool


@dataclass(frozen=True)
class ArcSettings:
    """Wheel arc in degrees. min_zoom maps to start_deg, max_zoom to start_deg + span_deg."""
    start_deg: float = ARC_START_DEG
    span_deg: float = ARC_SPAN_DEG

    def __post_init__(self) -> None:
        if not math.isfinite(self.span_deg) or self.span_deg <= 0:
            raise ZoomConfigError(INVALID_ARC, f"span_deg={self.span_deg!r}")

    @property
    def end_deg(self) -> float:
        return self.start_deg + self.span_deg


@dataclass(frozen=True)
class ControlSettings:
    """Per-controller overrides. Defaults come from zoomwheel/core/config.py."""
    arc: ArcSettings = field(default_factory=ArcSettings)
    drag_sensitivity: float = DRAG_SENSITIVITY
    invert_drag: bool = False
    soft_snap_threshold: float = SOFT_SNAP_THRESHOLD
    soft_snap_strength: float = SOFT_SNAP_STRENGTH
    hard_snap_threshold: float = HARD_SNAP_THRESHOLD
    long_press_delay_s: float = LONG_PRESS_DELAY_S
    auto_hide_delay_s: float = AUTO_HIDE_DELAY_S


@dataclass
class InteractionState:
    """
    Everything the controller knows about the current gesture.
    Only ZoomController mutates this; callers get copies via ZoomController.state.
    """
    current_zoom: float
    cycle_cursors: dict[int, int]
    mode: DisplayMode = "buttons"
    gesture: GestureState = "idle"
    is_dragging: bool = False
    pointer_down: bool = False
    pending_long_press: bool = False
    last_drag_position: tuple[float, float] | None = None
    last_move_timestamp: float | None = None
    snap_target: float | None = None


ScriptStepKind = Literal["down", "move", "up", "tap", "set_zoom", "wait"]


@dataclass(frozen=True)
class ScriptStep:
    """One step of a recorded or hand-written gesture script, at time t (seconds)."""
    t: float
    kind: ScriptStepKind
    x: float = 0.0
    y: float = 0.0
    group_index: int | None = None
    zoom: float | None = None
