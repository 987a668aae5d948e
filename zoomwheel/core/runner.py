# zoomwheel/core/runner.py
"""
CLI entrypoint: load presets and a gesture script, replay it through the controller,
write events.json and run_metadata.json, optionally plot the zoom trace.
Without --script a built-in long-press/drag/tap demo is replayed.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from zoomwheel.core.config import LOG_LEVEL, REPORTS_DIR
from zoomwheel.core.io import load_gesture_script, load_presets
from zoomwheel.core.reporting import (
    ensure_report_dir,
    write_events_json,
    write_run_metadata_json,
)
from zoomwheel.core.simulate import demo_script, run_script
from zoomwheel.core.types import ControlSettings


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Replay a gesture script through the zoom control.")
    p.add_argument("--presets", type=str, default="", help="Zoom presets: '0.5,1,2,3' or a .json file")
    p.add_argument("--script", type=str, default=None, help="Gesture script JSON (default: built-in demo)")
    p.add_argument("--initial-zoom", type=float, default=None, dest="initial_zoom", help="Starting zoom")
    p.add_argument("--invert-drag", action="store_true", dest="invert_drag", help="Leftward drag increases zoom")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--plot", action="store_true", help="Also write plots/zoom_trace.png")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> list[Path]:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    presets = load_presets(args.presets, repo_root=repo_root)
    if args.script:
        steps = load_gesture_script(args.script, repo_root=repo_root)
        script_source = args.script
    else:
        steps = demo_script()
        script_source = "builtin:demo"
    settings = ControlSettings(invert_drag=args.invert_drag)

    result = run_script(steps, presets=presets, settings=settings, initial_zoom=args.initial_zoom)

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    paths = [
        write_events_json(report_dir, result),
        write_run_metadata_json(report_dir, args.run_name, presets, script_source, settings),
    ]
    if args.plot:
        from zoomwheel.core.plots import plot_zoom_trace
        paths.append(plot_zoom_trace(result, presets, report_dir))

    for p in paths:
        print(p)
    print(f"Final zoom: {result.final_zoom:.3f} ({result.final_mode}), snaps: {result.snap_count}")
    return paths


if __name__ == "__main__":
    main()
