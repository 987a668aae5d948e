# zoomwheel/core/presets.py
"""
Preset list helpers: validation and ordering, bounds, default sets, text parsing,
and derivation from a device's reported zoom range.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from zoomwheel.core.config import BUTTON_PRESET_ZOOMS, DEFAULT_PRESET_SPECS
from zoomwheel.core.error_codes import EMPTY_PRESETS, ZoomConfigError
from zoomwheel.core.types import ZoomPreset

DEFAULT_PRESETS: tuple[ZoomPreset, ...] = tuple(
    ZoomPreset(zoom=z, label=label, display_kind=kind)  # type: ignore[arg-type]
    for z, label, kind in DEFAULT_PRESET_SPECS
)

BUTTON_PRESETS: tuple[ZoomPreset, ...] = tuple(ZoomPreset(zoom=z) for z in BUTTON_PRESET_ZOOMS)


def validate_presets(presets: Iterable[ZoomPreset]) -> tuple[ZoomPreset, ...]:
    """
    Return presets sorted ascending by zoom (stable for equal zooms).
    Raises ZoomConfigError if the sequence is empty. Each ZoomPreset already
    rejects zoom <= 0 when constructed.
    """
    out = tuple(sorted(presets, key=lambda p: p.zoom))
    if not out:
        raise ZoomConfigError(EMPTY_PRESETS)
    return out


def zoom_bounds(presets: Sequence[ZoomPreset]) -> tuple[float, float]:
    """(min_zoom, max_zoom) from a validated, ascending preset sequence."""
    if not presets:
        raise ZoomConfigError(EMPTY_PRESETS)
    return (presets[0].zoom, presets[-1].zoom)


def preset_zooms(presets: Sequence[ZoomPreset]) -> list[float]:
    return [p.zoom for p in presets]


def parse_presets(s: str) -> tuple[ZoomPreset, ...]:
    """
    Parse comma-separated zoom levels, e.g. '0.5,1,2,3'.
    Non-numeric, non-finite and non-positive parts are skipped; nothing usable -> DEFAULT_PRESETS.
    """
    if not (s or "").strip():
        return DEFAULT_PRESETS
    out: list[ZoomPreset] = []
    for part in s.strip().split(","):
        part = part.strip()
        if part:
            try:
                z = float(part)
            except ValueError:
                continue
            if math.isfinite(z) and z > 0:
                out.append(ZoomPreset(zoom=z))
    return validate_presets(out) if out else DEFAULT_PRESETS


def presets_for_zoom_range(min_available: float, max_available: float) -> tuple[ZoomPreset, ...]:
    """
    Presets for a camera reporting [min_available, max_available] zoom.
    Ultra-wide only when min_available < 1; tele steps only when the device reaches them.
    """
    steps: list[ZoomPreset] = []
    if min_available < 1.0:
        steps.append(ZoomPreset(zoom=min_available, label="13mm", display_kind="labeled_value"))
    steps.append(ZoomPreset(zoom=1.0, label="24mm", display_kind="labeled_value"))
    if max_available >= 2.0:
        steps.append(ZoomPreset(zoom=2.0, label="48mm", display_kind="value"))
    if max_available >= 3.0:
        steps.append(ZoomPreset(zoom=3.0, label="77mm", display_kind="labeled_value"))
    if max_available >= 5.0:
        steps.append(ZoomPreset(zoom=5.0, label="120mm", display_kind="value"))
    if max_available > 10.0:
        steps.append(ZoomPreset(zoom=10.0, label="240mm", display_kind="value"))
    return validate_presets(steps)
