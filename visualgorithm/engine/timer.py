"""
timer.py — Cooperative Interval Timer
======================================
A repeating timer that never spawns a thread.  The host loop (the Flask
state poll, a test, a GUI idle handler) pumps it with `poll()`, and every
interval that has elapsed since the last fire invokes the callback once.

    timer = IntervalTimer(250, controller.tick)
    ...
    timer.poll()          # from your event loop
    timer.cancel()        # never fires again

Design decisions:
  - The clock is injectable (`time.monotonic` by default) so tests can
    drive time by hand.
  - Missed intervals are caught up on the next poll, one callback per
    interval, which keeps playback speed independent of poll frequency.
  - The callback may cancel the timer; the catch-up loop checks
    `active` before every fire.
"""

import time
from typing import Callable, Optional


Clock = Callable[[], float]


class IntervalTimer:
    """
    Attributes:
        interval_ms : Milliseconds between fires (at least 1).
        callback    : Zero-argument callable run on every fire.
        fired       : How many times the callback has run.
    """

    def __init__(self, interval_ms: float, callback: Callable[[], None], clock: Clock = time.monotonic):
        self.interval_ms: float = max(1.0, float(interval_ms))
        self.callback = callback
        self.fired:       int   = 0
        self._clock = clock
        self._active:     bool  = True
        self._next_due:   float = clock() + self.interval_ms / 1000.0

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False

    def poll(self, now: Optional[float] = None) -> int:
        """Fire every interval that is due.  Returns the number of fires."""
        if now is None:
            now = self._clock()
        fires = 0
        step = self.interval_ms / 1000.0
        while self._active and now >= self._next_due:
            self._next_due += step
            self.fired += 1
            fires += 1
            self.callback()
        return fires

    def __repr__(self) -> str:
        state = "active" if self._active else "cancelled"
        return f"IntervalTimer({self.interval_ms:g}ms, {state}, fired={self.fired})"
