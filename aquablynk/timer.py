"""A fixed-size table of software timers polled from a main loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, List, Optional, Tuple

MAX_TIMERS = 16
RUN_FOREVER = 0


class _Call(Enum):
    DONT_RUN = auto()
    RUN_ONLY = auto()
    RUN_AND_DELETE = auto()


@dataclass
class _Slot:
    prev_millis: int = 0
    callback: Optional[Callable[..., Any]] = None
    args: Tuple[Any, ...] = field(default_factory=tuple)
    delay: int = 0
    max_num_runs: int = RUN_FOREVER
    num_runs: int = 0
    enabled: bool = False
    to_be_called: _Call = _Call.DONT_RUN


class SimpleTimer:
    """Up to ``MAX_TIMERS`` interval timers driven by repeated ``run()`` calls."""

    def __init__(self, clock: Any) -> None:
        self._clock = clock
        now = clock.millis()
        self._slots: List[_Slot] = [_Slot(prev_millis=now) for _ in range(MAX_TIMERS)]
        self._count = 0

    @staticmethod
    def _in_range(timer_id: int) -> bool:
        return 0 <= timer_id < MAX_TIMERS

    def _is_valid(self, timer_id: int) -> bool:
        return self._slots[timer_id].callback is not None

    def setup_timer(
        self,
        delay: int,
        callback: Callable[..., Any],
        num_runs: int = RUN_FOREVER,
        *args: Any,
    ) -> int:
        """Register ``callback`` to run every ``delay`` ms and return its id.

        ``num_runs`` of ``RUN_FOREVER`` keeps the timer forever; otherwise it
        is deleted after that many runs.
        """
        if callback is None:
            raise ValueError("callback must not be None")
        if self._count >= MAX_TIMERS:
            raise RuntimeError("no free timer slot")
        free = next(
            (i for i in range(MAX_TIMERS) if not self._is_valid(i)), None
        )
        if free is None:
            raise RuntimeError("no free timer slot")
        self._slots[free] = _Slot(
            prev_millis=self._clock.millis(),
            callback=callback,
            args=tuple(args),
            delay=delay,
            max_num_runs=num_runs,
            enabled=True,
        )
        self._count += 1
        return free

    def run(self) -> None:
        """Call every timer that is due; delete those that used up their runs."""
        now = self._clock.millis()
        for slot in self._slots:
            slot.to_be_called = _Call.DONT_RUN
            if slot.callback is None:
                continue
            if now - slot.prev_millis < slot.delay:
                continue
            if slot.delay:
                skip = (now - slot.prev_millis) // slot.delay
                slot.prev_millis += slot.delay * skip
            else:
                slot.prev_millis = now
            if not slot.enabled:
                continue
            if slot.max_num_runs == RUN_FOREVER:
                slot.to_be_called = _Call.RUN_ONLY
            elif slot.num_runs < slot.max_num_runs:
                slot.to_be_called = _Call.RUN_ONLY
                slot.num_runs += 1
                if slot.num_runs >= slot.max_num_runs:
                    slot.to_be_called = _Call.RUN_AND_DELETE

        for timer_id in range(MAX_TIMERS):
            slot = self._slots[timer_id]
            if slot.to_be_called is _Call.DONT_RUN or slot.callback is None:
                continue
            slot.callback(*slot.args)
            if self._slots[timer_id].to_be_called is _Call.RUN_AND_DELETE:
                self.delete_timer(timer_id)

    def change_interval(self, timer_id: int, delay: int) -> bool:
        if not self._in_range(timer_id) or not self._is_valid(timer_id):
            return False
        slot = self._slots[timer_id]
        slot.delay = delay
        slot.prev_millis = self._clock.millis()
        return True

    def change_function(
        self, timer_id: int, callback: Callable[..., Any], *args: Any
    ) -> bool:
        if not self._in_range(timer_id) or not self._is_valid(timer_id):
            return False
        slot = self._slots[timer_id]
        slot.callback = callback
        slot.args = tuple(args)
        return True

    def delete_timer(self, timer_id: int) -> None:
        if not self._in_range(timer_id) or self._count == 0:
            return
        if self._is_valid(timer_id):
            self._slots[timer_id] = _Slot(prev_millis=self._clock.millis())
            self._count -= 1

    def restart_timer(self, timer_id: int) -> None:
        if self._in_range(timer_id):
            self._slots[timer_id].prev_millis = self._clock.millis()

    def execute_now(self, timer_id: int) -> None:
        """Make the timer due on the next ``run()``."""
        if self._in_range(timer_id):
            slot = self._slots[timer_id]
            slot.prev_millis = self._clock.millis() - slot.delay

    def is_enabled(self, timer_id: int) -> bool:
        if not self._in_range(timer_id):
            return False
        return self._is_valid(timer_id) and self._slots[timer_id].enabled

    def remaining_time(self, timer_id: int) -> Optional[int]:
        """Milliseconds until the timer is due, or None if it is not enabled."""
        if not self.is_enabled(timer_id):
            return None
        slot = self._slots[timer_id]
        return slot.prev_millis + slot.delay - self._clock.millis()

    def enable(self, timer_id: int) -> None:
        if self._in_range(timer_id):
            self._slots[timer_id].enabled = True

    def disable(self, timer_id: int) -> None:
        if self._in_range(timer_id):
            self._slots[timer_id].enabled = False

    def enable_all(self) -> None:
        """Enable every timer that runs forever."""
        for slot in self._slots:
            if slot.callback is not None and slot.max_num_runs == RUN_FOREVER:
                slot.enabled = True

    def disable_all(self) -> None:
        """Disable every timer that runs forever."""
        for slot in self._slots:
            if slot.callback is not None and slot.max_num_runs == RUN_FOREVER:
                slot.enabled = False

    def toggle(self, timer_id: int) -> None:
        if self._in_range(timer_id):
            slot = self._slots[timer_id]
            slot.enabled = not slot.enabled

    def num_timers(self) -> int:
        return self._count