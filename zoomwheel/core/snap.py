# zoomwheel/core/snap.py
"""
Magnetic snapping toward presets.
Soft snap pulls a live drag value part of the way toward the nearest preset;
hard snap locks onto it once, when the drag ends.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from zoomwheel.core.config import SNAP_CHANGE_EPSILON
from zoomwheel.core.mapper import clamp_zoom
from zoomwheel.core.presets import zoom_bounds
from zoomwheel.core.types import SoftSnapResult, ZoomPreset


def nearest_preset_index(target: float, presets: Sequence[ZoomPreset]) -> int:
    """Index minimizing |preset.zoom - target|. np.argmin returns the first minimum, so ties go to the lower index."""
    zooms = np.fromiter((p.zoom for p in presets), dtype=np.float64, count=len(presets))
    return int(np.argmin(np.abs(zooms - target)))


def snap_zone_target(zoom: float, presets: Sequence[ZoomPreset], threshold: float) -> float | None:
    """Zoom of the preset whose soft-snap zone contains zoom, or None."""
    nearest = presets[nearest_preset_index(zoom, presets)].zoom
    return nearest if abs(nearest - zoom) < threshold else None


def apply_soft_snap(
    target_zoom: float,
    presets: Sequence[ZoomPreset],
    threshold: float,
    strength: float,
    previous_target: float | None = None,
) -> SoftSnapResult:
    """
    Pull target_zoom toward the nearest preset when closer than threshold:
    zoom = target + (nearest - target) * strength. Result clamped to preset bounds.
    snap_target is the attracting preset (None outside every threshold); changed is
    True when it differs from previous_target by more than SNAP_CHANGE_EPSILON.
    """
    min_zoom, max_zoom = zoom_bounds(presets)
    nearest = presets[nearest_preset_index(target_zoom, presets)].zoom
    distance = abs(nearest - target_zoom)
    if distance >= threshold:
        return SoftSnapResult(
            zoom=clamp_zoom(target_zoom, min_zoom, max_zoom),
            snap_target=None,
            changed=False,
        )
    zoom = target_zoom + (nearest - target_zoom) * strength
    changed = previous_target is None or abs(nearest - previous_target) > SNAP_CHANGE_EPSILON
    return SoftSnapResult(
        zoom=clamp_zoom(zoom, min_zoom, max_zoom),
        snap_target=nearest,
        changed=changed,
    )


def apply_hard_snap(
    current_zoom: float,
    presets: Sequence[ZoomPreset],
    threshold: float,
) -> float:
    """Exact preset zoom if |nearest - current| < threshold (strict), else current. Clamped; idempotent."""
    min_zoom, max_zoom = zoom_bounds(presets)
    nearest = presets[nearest_preset_index(current_zoom, presets)].zoom
    if abs(nearest - current_zoom) < threshold:
        return clamp_zoom(nearest, min_zoom, max_zoom)
    return clamp_zoom(current_zoom, min_zoom, max_zoom)
