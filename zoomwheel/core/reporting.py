# zoomwheel/core/reporting.py
"""
Create reports/<run_name>/ and write events.json (events + trace) and run_metadata.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from zoomwheel.core.config import (
    AUTO_HIDE_DELAY_S,
    DRAG_SENSITIVITY,
    HARD_SNAP_THRESHOLD,
    LONG_PRESS_DELAY_S,
    REPORTS_DIR,
    SOFT_SNAP_STRENGTH,
    SOFT_SNAP_THRESHOLD,
)
from zoomwheel.core.simulate import SimulationResult
from zoomwheel.core.types import ControlSettings, ZoomPreset


def simulation_to_dict(result: SimulationResult) -> dict:
    """Structure for events.json."""
    return {
        "schema_version": "1.0",
        "events": [
            {"t": e.t, "kind": e.event.kind, "zoom": e.event.zoom, "mode": e.event.mode}
            for e in result.events
        ],
        "trace": [asdict(row) for row in result.trace],
        "summary": {
            "final_zoom": result.final_zoom,
            "final_mode": result.final_mode,
            "event_count": len(result.events),
            "snap_count": result.snap_count,
            "mode_change_count": len(result.mode_changes),
        },
    }


def run_metadata_dict(
    run_name: str,
    presets: Sequence[ZoomPreset],
    script_source: str,
    settings: ControlSettings,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "script_source": script_source,
        "presets": [asdict(p) for p in presets],
        "settings": asdict(settings),
        "config": {
            "DRAG_SENSITIVITY": DRAG_SENSITIVITY,
            "SOFT_SNAP_THRESHOLD": SOFT_SNAP_THRESHOLD,
            "SOFT_SNAP_STRENGTH": SOFT_SNAP_STRENGTH,
            "HARD_SNAP_THRESHOLD": HARD_SNAP_THRESHOLD,
            "LONG_PRESS_DELAY_S": LONG_PRESS_DELAY_S,
            "AUTO_HIDE_DELAY_S": AUTO_HIDE_DELAY_S,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_events_json(report_dir: Path, result: SimulationResult) -> Path:
    """Write events.json to report_dir. Returns path to file."""
    path = report_dir / "events.json"
    path.write_text(json.dumps(simulation_to_dict(result), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    presets: Sequence[ZoomPreset],
    script_source: str,
    settings: ControlSettings,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, presets, script_source, settings)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return path
