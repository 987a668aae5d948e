# zoomwheel/core/plots.py
"""
Trace plot for simulated gestures: zoom over time (log axis), preset levels,
snap events and the intervals where the wheel was shown.
Saves under reports/<run_name>/plots/.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from zoomwheel.core.simulate import SimulationResult
from zoomwheel.core.types import ZoomPreset
from zoomwheel.core.wheel import format_zoom_value


def _wheel_intervals(result: SimulationResult) -> list[tuple[float, float]]:
    """(start, end) times between mode_changed->wheel and the next mode_changed->buttons."""
    out: list[tuple[float, float]] = []
    start: float | None = None
    for e in result.mode_changes:
        if e.event.mode == "wheel" and start is None:
            start = e.t
        elif e.event.mode == "buttons" and start is not None:
            out.append((start, e.t))
            start = None
    if start is not None and result.trace:
        out.append((start, result.trace[-1].t))
    return out


def plot_zoom_trace(
    result: SimulationResult,
    presets: Sequence[ZoomPreset],
    report_dir: Path,
) -> Path:
    """Save plots/zoom_trace.png under report_dir. Returns path to saved figure."""
    plots_dir = report_dir / "plots"
    plots_dir.mkdir(parents=True, exist_ok=True)
    out = plots_dir / "zoom_trace.png"

    fig, ax = plt.subplots(figsize=(8, 4))
    for start, end in _wheel_intervals(result):
        ax.axvspan(start, end, color="#f1c40f", alpha=0.15, label="_wheel")
    for p in presets:
        ax.axhline(p.zoom, color="gray", linewidth=0.5, linestyle=":")
        ax.annotate(format_zoom_value(p.zoom), (0, p.zoom), fontsize=7, color="gray")

    if result.trace:
        ts = [row.t for row in result.trace]
        zs = [row.zoom for row in result.trace]
        ax.step(ts, zs, where="post", color="#2c3e50", linewidth=1.2, label="zoom")
    snaps = [e for e in result.events if e.event.kind == "snap"]
    if snaps:
        ax.scatter([e.t for e in snaps], [e.event.zoom for e in snaps], color="#e74c3c", s=18, zorder=3, label="snap")

    ax.set_yscale("log")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Zoom")
    ax.set_title("Zoom trace")
    ax.legend(loc="upper left", fontsize=8)
    plt.tight_layout()
    fig.savefig(out, dpi=120)
    plt.close(fig)
    return out
