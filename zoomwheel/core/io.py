# zoomwheel/core/io.py
"""
Load preset lists and gesture scripts from JSON files.
Presets: a list of numbers, or of {"zoom", "label", "display_kind"} objects.
Scripts: a list of {"t", "kind", "x", "y", "group", "zoom"} objects.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import get_args

from zoomwheel.core.presets import parse_presets, validate_presets
from zoomwheel.core.types import DisplayKind, ScriptStep, ScriptStepKind, ZoomPreset

_DISPLAY_KINDS = set(get_args(DisplayKind))
_STEP_KINDS = set(get_args(ScriptStepKind))


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _read_json(path: str | Path, repo_root: Path | None) -> object:
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"File not found: {resolved}")
    return json.loads(resolved.read_text(encoding="utf-8"))


def preset_from_obj(obj: object) -> ZoomPreset:
    """Build a ZoomPreset from a number or a dict. Raises ValueError on bad shape."""
    if isinstance(obj, (int, float)) and not isinstance(obj, bool):
        return ZoomPreset(zoom=float(obj))
    if not isinstance(obj, dict) or "zoom" not in obj:
        raise ValueError(f"Preset must be a number or an object with 'zoom': {obj!r}")
    kind = obj.get("display_kind", "value")
    if kind not in _DISPLAY_KINDS:
        raise ValueError(f"Unknown display_kind {kind!r}; expected one of {sorted(_DISPLAY_KINDS)}")
    try:
        zoom = float(obj["zoom"])
    except (TypeError, ValueError):
        raise ValueError(f"Preset 'zoom' must be numeric: {obj!r}") from None
    label = obj.get("label")
    return ZoomPreset(
        zoom=zoom,
        label=str(label) if label is not None else None,
        display_kind=kind,
    )


def load_presets_json(path: str | Path, repo_root: Path | None = None) -> tuple[ZoomPreset, ...]:
    """
    Load and validate presets from a JSON file.
    Raises FileNotFoundError if missing, ValueError on malformed entries,
    ZoomConfigError if the list is empty or a zoom is not positive.
    """
    data = _read_json(path, repo_root)
    if not isinstance(data, list):
        raise ValueError("Preset file must contain a JSON list")
    return validate_presets(preset_from_obj(o) for o in data)


def load_presets(arg: str, repo_root: Path | None = None) -> tuple[ZoomPreset, ...]:
    """'*.json' -> load_presets_json; anything else -> comma-separated zooms (parse_presets)."""
    if arg.strip().lower().endswith(".json"):
        return load_presets_json(arg.strip(), repo_root)
    return parse_presets(arg)


def step_from_obj(obj: object) -> ScriptStep:
    if not isinstance(obj, dict):
        raise ValueError(f"Script step must be an object: {obj!r}")
    kind = obj.get("kind")
    if kind not in _STEP_KINDS:
        raise ValueError(f"Unknown step kind {kind!r}; expected one of {sorted(_STEP_KINDS)}")
    try:
        t = float(obj["t"])
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"Script step needs a numeric 't': {obj!r}") from None
    group = obj.get("group")
    zoom = obj.get("zoom")
    if kind == "tap" and group is None:
        raise ValueError(f"'tap' step needs 'group': {obj!r}")
    if kind == "set_zoom" and zoom is None:
        raise ValueError(f"'set_zoom' step needs 'zoom': {obj!r}")
    return ScriptStep(
        t=t,
        kind=kind,
        x=float(obj.get("x", 0.0)),
        y=float(obj.get("y", 0.0)),
        group_index=int(group) if group is not None else None,
        zoom=float(zoom) if zoom is not None else None,
    )


def load_gesture_script(path: str | Path, repo_root: Path | None = None) -> list[ScriptStep]:
    """Load a gesture script. Raises FileNotFoundError if missing, ValueError if malformed."""
    data = _read_json(path, repo_root)
    if not isinstance(data, list):
        raise ValueError("Gesture script must contain a JSON list")
    return [step_from_obj(o) for o in data]
