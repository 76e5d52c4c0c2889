"""Millisecond clocks: one backed by the system, one driven by hand."""

from __future__ import annotations

import time


class Clock:
    """Monotonic millisecond clock counting from its creation."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def millis(self) -> int:
        """Milliseconds elapsed since the clock was created."""
        return int((time.monotonic() - self._start) * 1000)

    def delay(self, ms: int) -> None:
        """Block for ``ms`` milliseconds."""
        if ms < 0:
            raise ValueError("delay must not be negative")
        time.sleep(ms / 1000.0)


class ManualClock:
    """Clock whose time only moves when told to; delays advance it instantly."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start must not be negative")
        self._now = start

    def millis(self) -> int:
        return self._now

    def delay(self, ms: int) -> None:
        self.advance(ms)

    def advance(self, ms: int) -> None:
        """Move the clock forward by ``ms`` milliseconds."""
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        self._now += ms