# zoomwheel/core/wheel.py
"""
Wheel geometry: the visible circular segment, wheel rotation for a zoom,
screen positions of markings, tick marks, and zoom value text.
Screen coordinates: x right, y down; angles in degrees, clockwise from 12 o'clock.
"""

from __future__ import annotations

import math

import numpy as np

from zoomwheel.core.config import (
    MARKING_ACTIVE_TOLERANCE,
    ROTATION_SMOOTHING,
    TICK_COARSE_FROM,
    TICK_STEP_COARSE,
    TICK_STEP_FINE,
    WHEEL_HEIGHT,
    WHEEL_WIDTH,
    ZOOM_SUFFIX,
)
from zoomwheel.core.mapper import DEFAULT_ARC, zoom_to_angle
from zoomwheel.core.types import ArcSettings, ZoomPreset


def segment_radius(chord: float = WHEEL_WIDTH, height: float = WHEEL_HEIGHT) -> float:
    """Radius of the circle whose segment has the given chord (visible width) and height."""
    if chord <= 0 or height <= 0:
        raise ValueError("Segment chord and height must be positive")
    return (chord * chord) / (8.0 * height) + height / 2.0


def segment_center_y(chord: float = WHEEL_WIDTH, height: float = WHEEL_HEIGHT) -> float:
    """Distance from the chord down to the circle center."""
    return segment_radius(chord, height) - height


def segment_half_angle_deg(chord: float = WHEEL_WIDTH, height: float = WHEEL_HEIGHT) -> float:
    """Half the angle subtended by the visible segment: acos((r - h) / r)."""
    r = segment_radius(chord, height)
    return math.degrees(math.acos((r - height) / r))


def wheel_rotation_for_zoom(
    zoom: float,
    min_zoom: float,
    max_zoom: float,
    arc: ArcSettings = DEFAULT_ARC,
) -> float:
    """Rotation that brings zoom's marking under the fixed top-center indicator."""
    return -zoom_to_angle(zoom, min_zoom, max_zoom, arc)


def rotation_bounds(
    min_zoom: float,
    max_zoom: float,
    arc: ArcSettings = DEFAULT_ARC,
) -> tuple[float, float]:
    """(min_rotation, max_rotation): max_zoom and min_zoom under the indicator respectively."""
    return (
        wheel_rotation_for_zoom(max_zoom, min_zoom, max_zoom, arc),
        wheel_rotation_for_zoom(min_zoom, min_zoom, max_zoom, arc),
    )


def smooth_rotation(current: float, target: float, factor: float = ROTATION_SMOOTHING) -> float:
    return current + (target - current) * factor


def marking_position(
    angle_deg: float,
    rotation_deg: float,
    radius: float,
    center: tuple[float, float],
    inset: float = 0.0,
) -> tuple[float, float]:
    """
    Screen point of a marking at angle_deg on a wheel rotated by rotation_deg.
    inset moves the marking toward the center (labels sit inside the rim).
    """
    theta = math.radians(angle_deg + rotation_deg)
    r = radius - inset
    cx, cy = center
    return (cx + r * math.sin(theta), cy - r * math.cos(theta))


def is_marking_visible(
    angle_deg: float,
    rotation_deg: float,
    chord: float = WHEEL_WIDTH,
    height: float = WHEEL_HEIGHT,
) -> bool:
    """True if the marking falls inside the visible segment."""
    return abs(angle_deg + rotation_deg) <= segment_half_angle_deg(chord, height)


def _round_tenth(x: float) -> float:
    # Half away from zero; zoom values are positive.
    return math.floor(x * 10.0 + 0.5) / 10.0


def generate_tick_marks(min_zoom: float, max_zoom: float) -> list[float]:
    """
    Tick zoom values from min_zoom to max_zoom: TICK_STEP_FINE below TICK_COARSE_FROM,
    TICK_STEP_COARSE above. Each step is rounded to one decimal to stop float drift.
    """
    ticks: list[float] = []
    current = min_zoom
    while current <= max_zoom:
        ticks.append(current)
        step = TICK_STEP_FINE if current < TICK_COARSE_FROM else TICK_STEP_COARSE
        current = _round_tenth(current + step)
    return [t for t in ticks if min_zoom <= t <= max_zoom]


def tick_angles(
    ticks: list[float],
    min_zoom: float,
    max_zoom: float,
    arc: ArcSettings = DEFAULT_ARC,
) -> np.ndarray:
    """Vectorized zoom_to_angle over tick values."""
    if not ticks:
        return np.zeros(0)
    z = np.asarray(ticks, dtype=np.float64)
    log_min, log_max = math.log(min_zoom), math.log(max_zoom)
    if log_max == log_min:
        return np.full(z.shape, arc.start_deg)
    progress = (np.log(z) - log_min) / (log_max - log_min)
    return arc.start_deg + progress * arc.span_deg


def is_main_tick(tick_zoom: float, min_zoom: float) -> bool:
    """Whole-number ticks and the minimum are drawn emphasized."""
    return tick_zoom == min_zoom or tick_zoom % 1 == 0


def format_zoom_value(zoom: float, suffix: str = "") -> str:
    """'2', '1.5', '2.5×': no decimals for whole numbers, one otherwise."""
    if zoom % 1 == 0:
        return f"{zoom:.0f}{suffix}"
    return f"{zoom:.1f}{suffix}"


def marking_text(
    preset: ZoomPreset,
    current_zoom: float,
    show_label: bool = True,
) -> tuple[str, str | None]:
    """
    (value_text, label_text) for a preset's wheel marking.
    Dots carry no text unless they are the active marking.
    """
    active = abs(preset.zoom - current_zoom) < MARKING_ACTIVE_TOLERANCE
    if preset.display_kind == "dot" and not active:
        return ("", None)
    label = preset.label if show_label and preset.display_kind == "labeled_value" else None
    return (format_zoom_value(preset.zoom), label)


def active_zoom_text(zoom: float) -> str:
    """Central readout under the indicator."""
    return format_zoom_value(zoom, suffix=ZOOM_SUFFIX)
