# zoomwheel/core/mapper.py
"""
Logarithmic mapping between zoom factor and wheel angle.
Equal zoom ratios take equal arc length: 0.5->1 spans the same angle as 5->10.
"""

from __future__ import annotations

import math

from zoomwheel.core.error_codes import NON_POSITIVE_ZOOM, ZoomConfigError
from zoomwheel.core.types import ArcSettings

DEFAULT_ARC = ArcSettings()


def _log_bounds(min_zoom: float, max_zoom: float) -> tuple[float, float]:
    if min_zoom <= 0 or max_zoom <= 0:
        raise ZoomConfigError(NON_POSITIVE_ZOOM, f"bounds=({min_zoom!r}, {max_zoom!r})")
    return math.log(min_zoom), math.log(max_zoom)


def zoom_to_angle(
    zoom: float,
    min_zoom: float,
    max_zoom: float,
    arc: ArcSettings = DEFAULT_ARC,
) -> float:
    """
    angle = start + (ln z - ln min) / (ln max - ln min) * span.
    zoom must be > 0; it is not clamped here. Degenerate range (min == max) -> arc start.
    """
    log_min, log_max = _log_bounds(min_zoom, max_zoom)
    if log_max == log_min:
        return arc.start_deg
    progress = (math.log(zoom) - log_min) / (log_max - log_min)
    return arc.start_deg + progress * arc.span_deg


def angle_to_zoom(
    angle: float,
    min_zoom: float,
    max_zoom: float,
    arc: ArcSettings = DEFAULT_ARC,
) -> float:
    """Inverse of zoom_to_angle: exp(ln min + (angle - start) / span * (ln max - ln min))."""
    log_min, log_max = _log_bounds(min_zoom, max_zoom)
    progress = (angle - arc.start_deg) / arc.span_deg
    return math.exp(log_min + progress * (log_max - log_min))


def clamp_zoom(zoom: float, min_zoom: float, max_zoom: float) -> float:
    return max(min_zoom, min(max_zoom, zoom))


def clamp_angle(angle: float, arc: ArcSettings = DEFAULT_ARC) -> float:
    return max(arc.start_deg, min(arc.end_deg, angle))
