# zoomwheel/core/config.py
"""
Central configuration for the zoom control.
All tunable values live here; no magic numbers in other modules.
Per-instance overrides go through ControlSettings (zoomwheel/core/types.py).
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Wheel arc -----
ARC_START_DEG: float = 45.0
"""Angle at which min_zoom sits on the wheel."""

ARC_SPAN_DEG: float = 90.0
"""Angular width of the wheel; max_zoom sits at ARC_START_DEG + ARC_SPAN_DEG."""

# ----- Drag -----
DRAG_SENSITIVITY: float = 0.5
"""Angle units per horizontal position unit while dragging the wheel."""

# ----- Snapping -----
SOFT_SNAP_THRESHOLD: float = 0.05
"""Distance (zoom units) below which a live drag value is pulled toward the nearest preset."""

SOFT_SNAP_STRENGTH: float = 0.2
"""Fraction of the remaining distance covered by the magnetic pull, per move event."""

HARD_SNAP_THRESHOLD: float = 0.05
"""Distance (zoom units, strict <) below which a drag release locks onto the nearest preset."""

SNAP_CHANGE_EPSILON: float = 0.01
"""Two snap targets closer than this are the same target (no new snap event)."""

# ----- Button groups -----
GROUP_BOUNDARIES: tuple[float, ...] = (1.0, 2.0, 3.0)
"""Lower bounds of the 1x, 2x and 3x+ groups; presets below the first go to ultra_wide."""

GROUP_NAMES: tuple[str, ...] = ("ultra_wide", "1x", "2x", "3x+")
"""Group names, one more than GROUP_BOUNDARIES."""

CURSOR_MATCH_EPSILON: float = 0.01
"""Zoom within this distance of a preset counts as an exact match when resyncing cursors."""

# ----- Timers (seconds) -----
LONG_PRESS_DELAY_S: float = 0.5
"""Hold time before a press is promoted to the wheel."""

AUTO_HIDE_DELAY_S: float = 1.0
"""Inactivity after a drag before the wheel hides and the buttons come back."""

# ----- Wheel geometry -----
WHEEL_HEIGHT: float = 130.0
"""Visible height of the wheel segment (position units)."""

WHEEL_WIDTH: float = 390.0
"""Chord width of the wheel segment (position units)."""

MARKING_ACTIVE_TOLERANCE: float = 0.1
"""A wheel marking within this distance of the current zoom is highlighted."""

ROTATION_SMOOTHING: float = 0.6
"""Lerp factor applied to wheel rotation on each zoom change."""

TICK_STEP_FINE: float = 0.1
"""Tick spacing below TICK_COARSE_FROM."""

TICK_STEP_COARSE: float = 1.0
"""Tick spacing from TICK_COARSE_FROM upward."""

TICK_COARSE_FROM: float = 10.0
"""Zoom at which tick spacing switches from fine to coarse."""

# ----- Display -----
ZOOM_SUFFIX: str = "×"
"""Suffix shown after the active zoom value (e.g. '2.5×')."""

DEFAULT_INITIAL_ZOOM: float = 1.0
"""Zoom a controller starts at when the host does not pass one."""

# ----- Default presets: (zoom, label, display_kind) -----
DEFAULT_PRESET_SPECS: tuple[tuple[float, str | None, str], ...] = (
    (0.5, "13 MM", "labeled_value"),
    (1.0, "24 MM", "labeled_value"),
    (1.2, "28 MM", "dot"),
    (1.5, "35 MM", "dot"),
    (2.0, "48 MM", "value"),
    (3.0, "77 MM", "labeled_value"),
    (10.0, None, "value"),
)

BUTTON_PRESET_ZOOMS: tuple[float, ...] = (0.5, 1.0, 2.0, 3.0)
"""Zoom values of the compact button row."""

# ----- Debug flags -----
ZOOM_DEBUG: bool = os.environ.get("ZOOM_DEBUG", "").lower() in ("1", "true", "yes")
"""Log every controller transition. Set env ZOOM_DEBUG=1 to enable."""

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Root log level used by the CLI."""
