# zoomwheel/core/cycler.py
"""
Button groups: partition presets by zoom range and cycle through a group's presets on tap.

Tap rules:
  inactive group (range does not contain the zoom) -> every cursor back to its group's base preset; zoom = tapped group's base.
  active group   -> cursor advances (wrapping); zoom = preset at the cursor.
Cursors are plain {group_index: preset_index} dicts; every function returns a new dict.
"""

from __future__ import annotations

import bisect
import math
from typing import Sequence

from zoomwheel.core.config import (
    CURSOR_MATCH_EPSILON,
    GROUP_BOUNDARIES,
    GROUP_NAMES,
    ZOOM_SUFFIX,
)
from zoomwheel.core.snap import nearest_preset_index
from zoomwheel.core.types import ButtonGroup, GroupDisplay, ZoomPreset
from zoomwheel.core.wheel import format_zoom_value


def _group_range(bucket: int) -> tuple[float, float]:
    low = 0.0 if bucket == 0 else GROUP_BOUNDARIES[bucket - 1]
    high = GROUP_BOUNDARIES[bucket] if bucket < len(GROUP_BOUNDARIES) else math.inf
    return low, high


def partition_presets(presets: Sequence[ZoomPreset]) -> list[ButtonGroup]:
    """
    Split presets into ultra_wide (<1), 1x [1,2), 2x [2,3) and 3x+ (>=3).
    Empty groups are omitted; order stays ascending by range.
    """
    buckets: dict[int, list[ZoomPreset]] = {}
    for p in presets:
        buckets.setdefault(bisect.bisect_right(GROUP_BOUNDARIES, p.zoom), []).append(p)
    groups: list[ButtonGroup] = []
    for bucket in sorted(buckets):
        members = tuple(sorted(buckets[bucket], key=lambda p: p.zoom))
        low, high = _group_range(bucket)
        base = float(math.floor(low)) if low >= 1.0 else members[0].zoom
        groups.append(
            ButtonGroup(
                name=GROUP_NAMES[bucket],
                range_low=low,
                range_high=high,
                presets=members,
                base_value=base,
            )
        )
    return groups


def base_index(group: ButtonGroup) -> int:
    """Index of the preset equal to base_value; 0 if the group has no such preset."""
    for i, p in enumerate(group.presets):
        if abs(p.zoom - group.base_value) < CURSOR_MATCH_EPSILON:
            return i
    return 0


def initial_cursors(groups: Sequence[ButtonGroup]) -> dict[int, int]:
    return {i: base_index(g) for i, g in enumerate(groups)}


def containing_group_index(groups: Sequence[ButtonGroup], zoom: float) -> int | None:
    for i, g in enumerate(groups):
        if g.contains(zoom):
            return i
    return None


def active_group_index(groups: Sequence[ButtonGroup], zoom: float) -> int:
    """
    Group highlighted for zoom: the one containing it. If that range has no presets
    (group omitted), the highest group starting at or below zoom; 0 when zoom is below
    every group. Display only; tap_group decides cycling by containment.
    """
    idx = containing_group_index(groups, zoom)
    if idx is not None:
        return idx
    below = [i for i, g in enumerate(groups) if g.range_low <= zoom]
    return below[-1] if below else 0


def tap_group(
    groups: Sequence[ButtonGroup],
    cursors: dict[int, int],
    group_index: int,
    current_zoom: float,
) -> tuple[dict[int, int], float]:
    """
    Apply a tap on groups[group_index]. Returns (new_cursors, new_zoom). Raises IndexError for unknown groups.
    Only the group whose range contains current_zoom cycles; with no containing group every tap lands on a base.
    """
    if not 0 <= group_index < len(groups):
        raise IndexError(f"No button group at index {group_index}")
    group = groups[group_index]
    if group_index != containing_group_index(groups, current_zoom):
        out = initial_cursors(groups)
        cursor = out[group_index]
    else:
        out = dict(cursors)
        cursor = (out.get(group_index, base_index(group)) + 1) % len(group.presets)
        out[group_index] = cursor
    return out, group.presets[cursor].zoom


def resync_cursors(
    groups: Sequence[ButtonGroup],
    cursors: dict[int, int],
    zoom: float,
) -> dict[int, int]:
    """
    Point the cursor of the group containing zoom at its closest preset:
    a match within CURSOR_MATCH_EPSILON first, else nearest (ties -> lower index).
    Other groups keep their cursors.
    """
    out = {i: cursors.get(i, base_index(g)) for i, g in enumerate(groups)}
    idx = containing_group_index(groups, zoom)
    if idx is None:
        return out
    presets = groups[idx].presets
    for i, p in enumerate(presets):
        if abs(p.zoom - zoom) < CURSOR_MATCH_EPSILON:
            out[idx] = i
            return out
    out[idx] = nearest_preset_index(zoom, presets)
    return out


def group_display(
    groups: Sequence[ButtonGroup],
    cursors: dict[int, int],
    group_index: int,
    current_zoom: float,
) -> GroupDisplay:
    """Active group shows current_zoom itself (e.g. 9.6 mid-drag); others show their cursor preset."""
    group = groups[group_index]
    is_active = group_index == active_group_index(groups, current_zoom)
    if is_active:
        value = current_zoom
        text = format_zoom_value(value, suffix=ZOOM_SUFFIX)
    else:
        value = group.presets[cursors.get(group_index, base_index(group))].zoom
        text = format_zoom_value(value)
    return GroupDisplay(
        group_index=group_index,
        name=group.name,
        value=value,
        text=text,
        is_active=is_active,
    )


def group_displays(
    groups: Sequence[ButtonGroup],
    cursors: dict[int, int],
    current_zoom: float,
) -> list[GroupDisplay]:
    return [group_display(groups, cursors, i, current_zoom) for i in range(len(groups))]
