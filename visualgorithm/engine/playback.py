"""
playback.py — Step-by-Step Playback Controller
===============================================
The controller is the ONLY object a renderer talks to during a run.
It holds one finished result (sort or traversal), a cursor into its
steps, and a play/pause/next/prev/speed API.

State machine:
    IDLE    →  load(result)  →  PAUSED
    PAUSED  →  play()        →  PLAYING
    PLAYING →  pause()       →  PAUSED
    PLAYING →  (last step)   →  PAUSED
    any     →  load(None)    →  IDLE

Thread safety:
  Not thread-safe.  Auto-advance is a cooperative IntervalTimer; the
  host calls `poll()` from its own loop (the web app does it on every
  state request).
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional, Union

from visualgorithm.algorithms.step import GraphResult, GraphStep, SortResult, SortStep
from visualgorithm.engine.timer import Clock, IntervalTimer

logger = logging.getLogger(__name__)

Result = Union[SortResult, GraphResult]
Step   = Union[SortStep, GraphStep]


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE    = "idle"
    PAUSED  = "paused"
    PLAYING = "playing"


# ---------------------------------------------------------------------------
# Speed → interval
# ---------------------------------------------------------------------------
def speed_to_interval_ms(speed: float) -> float:
    """
    Map a 1–100 speed slider to milliseconds per step.

    The low end (1–10) is a steep teaching ramp, 2800 ms down to 1000 ms;
    above that the delay shrinks linearly to 200 ms at 100.
    """
    if speed <= 10:
        return 3000 - speed * 200
    return 1200 - speed * 10


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        on_step : Optional callback(step) fired on every timed advance.
                  A renderer hooks its redraw here.
    """

    def __init__(
        self,
        speed:   float = 50,
        on_step: Optional[Callable[[Step], None]] = None,
        clock:   Clock = time.monotonic,
    ):
        self.on_step = on_step
        self._clock  = clock
        self._result: Optional[Result]        = None
        self._cursor: int                     = 0
        self._state:  PlaybackState           = PlaybackState.IDLE
        self._speed:  float                   = speed
        self._timer:  Optional[IntervalTimer] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, result: Optional[Result]) -> None:
        """Attach a finished result (or None to unload) and rewind."""
        self._cancel_timer()
        self._result = result
        self._cursor = 0
        self._state  = PlaybackState.PAUSED if result is not None else PlaybackState.IDLE

    def reset(self) -> None:
        self.pause()
        self._cursor = 0

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self._result is None or self._at_end():
            return
        self._cancel_timer()
        self._state = PlaybackState.PLAYING
        self._timer = IntervalTimer(self.interval_ms, self.tick, clock=self._clock)
        logger.debug("playback started at %gms/step", self.interval_ms)

    def pause(self) -> None:
        self._cancel_timer()
        if self._state is PlaybackState.PLAYING:
            self._state = PlaybackState.PAUSED

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> None:
        if self._result is not None and not self._at_end():
            self._cursor += 1

    def step_backward(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def seek(self, index: int) -> None:
        """Jump to an arbitrary step, clamped into range."""
        if self._result is None:
            return
        self._cursor = max(0, min(int(index), self.total_steps - 1))

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: float) -> None:
        self._speed = speed
        if self.is_playing:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (driven by the timer)
    # ------------------------------------------------------------------
    def tick(self) -> None:
        if self._at_end():
            self.pause()
            return
        self._cursor += 1
        if self.on_step is not None:
            self.on_step(self.current_step)

    def poll(self, now: Optional[float] = None) -> int:
        """Pump the auto-advance timer.  Returns how many ticks fired."""
        if self._timer is None:
            return 0
        return self._timer.poll(now)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def total_steps(self) -> int:
        return self._result.total_steps if self._result is not None else 0

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def result(self) -> Optional[Result]:
        return self._result

    @property
    def current_step(self) -> Optional[Step]:
        if self._result is None or not self._result.steps:
            return None
        return self._result.steps[self._cursor]

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def interval_ms(self) -> float:
        return speed_to_interval_ms(self._speed)

    @property
    def timer(self) -> Optional[IntervalTimer]:
        return self._timer

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _at_end(self) -> bool:
        return self._cursor >= self.total_steps - 1

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
