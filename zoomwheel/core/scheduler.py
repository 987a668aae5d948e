# zoomwheel/core/scheduler.py
"""
Cancelable scheduled callbacks for the controller's two timers.

The controller needs only call_later(delay_s, callback) -> handle with handle.cancel().
asyncio event loops satisfy that interface directly; ManualScheduler is a virtual clock
for tests and gesture replay, advanced explicitly by the caller.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ManualTimer:
    """Handle returned by ManualScheduler.call_later."""

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic scheduler: nothing fires until advance() or run_until() moves the clock.
    Timers due at the same instant fire in scheduling order.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, ManualTimer]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (timer.when, next(self._seq), timer))
        return timer

    def pending(self) -> int:
        """Number of live (not cancelled, not fired) timers."""
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def run_until(self, t: float) -> int:
        """Fire every live timer due at or before t, then set the clock to t. Returns fired count."""
        fired = 0
        while self._queue and self._queue[0][0] <= t:
            when, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = when
            timer.fired = True
            timer.callback()
            fired += 1
        self._now = max(self._now, t)
        return fired

    def advance(self, dt: float) -> int:
        return self.run_until(self._now + dt)
