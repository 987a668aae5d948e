# zoomwheel/core/simulate.py
"""
Replay a gesture script through a ZoomController on a virtual clock.
Timers fire exactly when the clock passes them, so runs are deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from zoomwheel.core.controller import ZoomController
from zoomwheel.core.scheduler import ManualScheduler
from zoomwheel.core.types import (
    ControlEvent,
    ControlSettings,
    PointerEvent,
    ScriptStep,
    ZoomPreset,
)


@dataclass(frozen=True)
class TimedEvent:
    t: float
    event: ControlEvent


@dataclass(frozen=True)
class TraceRow:
    """Controller snapshot after a script step (or at the end of the run)."""
    t: float
    step: str
    zoom: float
    angle_deg: float
    rotation_deg: float
    mode: str
    gesture: str


@dataclass
class SimulationResult:
    events: list[TimedEvent] = field(default_factory=list)
    trace: list[TraceRow] = field(default_factory=list)
    final_zoom: float = 0.0
    final_mode: str = "buttons"

    @property
    def snap_count(self) -> int:
        return sum(1 for e in self.events if e.event.kind == "snap")

    @property
    def mode_changes(self) -> list[TimedEvent]:
        return [e for e in self.events if e.event.kind == "mode_changed"]


def demo_script(start_x: float = 200.0) -> list[ScriptStep]:
    """Long-press, drag right through several presets, release, let the wheel hide."""
    steps = [ScriptStep(t=0.0, kind="down", x=start_x)]
    x = start_x
    t = 0.6
    for _ in range(40):
        x += 2.0
        steps.append(ScriptStep(t=round(t, 3), kind="move", x=x))
        t += 0.02
    steps.append(ScriptStep(t=round(t, 3), kind="up", x=x))
    steps.append(ScriptStep(t=round(t + 1.5, 3), kind="wait"))
    steps.append(ScriptStep(t=round(t + 1.6, 3), kind="tap", group_index=1))
    steps.append(ScriptStep(t=round(t + 1.7, 3), kind="tap", group_index=1))
    return steps


def _apply_step(controller: ZoomController, step: ScriptStep) -> None:
    if step.kind in ("down", "move", "up"):
        controller.handle(
            PointerEvent(
                kind=step.kind,  # type: ignore[arg-type]
                x=step.x,
                y=step.y,
                timestamp=step.t,
                group_index=step.group_index,
            )
        )
    elif step.kind == "tap" and step.group_index is not None:
        controller.tap_group(step.group_index)
    elif step.kind == "set_zoom" and step.zoom is not None:
        controller.set_zoom(step.zoom)


def _snapshot(controller: ZoomController, t: float, step: str) -> TraceRow:
    return TraceRow(
        t=t,
        step=step,
        zoom=controller.current_zoom,
        angle_deg=controller.current_angle,
        rotation_deg=controller.wheel_rotation,
        mode=controller.mode,
        gesture=controller.gesture,
    )


def run_script(
    steps: Sequence[ScriptStep],
    presets: Sequence[ZoomPreset] | None = None,
    settings: ControlSettings | None = None,
    initial_zoom: float | None = None,
    settle_s: float | None = None,
) -> SimulationResult:
    """
    Run steps in time order (stable for equal t). After the last step the clock runs
    settle_s further (default: long-press + auto-hide delay) so pending timers fire.
    """
    scheduler = ManualScheduler()
    controller = ZoomController(presets, scheduler=scheduler, settings=settings, initial_zoom=initial_zoom)
    result = SimulationResult()
    controller.add_listener(lambda e: result.events.append(TimedEvent(t=scheduler.now, event=e)))

    ordered = sorted(steps, key=lambda s: s.t)
    for step in ordered:
        scheduler.run_until(step.t)
        _apply_step(controller, step)
        result.trace.append(_snapshot(controller, scheduler.now, step.kind))

    s = controller.settings
    settle = settle_s if settle_s is not None else s.long_press_delay_s + s.auto_hide_delay_s
    scheduler.advance(settle)
    result.trace.append(_snapshot(controller, scheduler.now, "end"))
    controller.close()
    result.final_zoom = controller.current_zoom
    result.final_mode = controller.mode
    return result
