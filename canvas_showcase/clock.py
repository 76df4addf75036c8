from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock abstraction.

    Scene code depends on this interface rather than calling real time directly.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class FrameTimer:
    """Samples a clock once per frame: elapsed time since start and frame delta."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._start = clock.now()
        self._prev = self._start

    def tick(self) -> tuple[float, float]:
        """Return ``(t, dt)`` for the frame that is about to be composed."""

        now = self._clock.now()
        dt = max(0.0, now - self._prev)
        self._prev = now
        return now - self._start, dt
