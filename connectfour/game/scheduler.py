"""
scheduler.py - Deferred continuations without threads

The controller needs "run this once, after N seconds" to separate the
teardown of a board from the creation of its replacement. Callbacks are
queued with a due time and fired by whoever drives the event loop
(``run_due``), so everything still runs on a single thread.
"""

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple

from connectfour.debug import debug


class ScheduledCall:
    """Handle for a queued callback."""

    __slots__ = ("due", "callback", "fired")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.fired = False

    def __repr__(self) -> str:
        return f"ScheduledCall(due={self.due:.3f}, fired={self.fired})"


class Scheduler:
    """
    Single-fire timer queue driven by polling.

    Args:
        clock: Zero-argument callable returning the current time in seconds
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._clock()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def next_due(self) -> Optional[float]:
        """Due time of the earliest queued call, or None."""
        return self._queue[0][0] if self._queue else None

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Queue ``callback`` to fire once, ``delay`` seconds from now."""
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
        call = ScheduledCall(self.now() + delay, callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        debug.trace(f"Scheduled {call!r}", "scheduler")
        return call

    def run_due(self, now: Optional[float] = None) -> int:
        """
        Fire every callback whose due time has passed.

        Callbacks run in due-time order, ties in the order they were queued.
        A callback that schedules another due callback sees it fired in the
        same pass.

        Returns:
            Number of callbacks fired
        """
        if now is None:
            now = self.now()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, call = heapq.heappop(self._queue)
            self._fire(call)
            fired += 1
        return fired

    def flush(self) -> int:
        """Fire every queued callback regardless of its due time."""
        fired = 0
        while self._queue:
            _, _, call = heapq.heappop(self._queue)
            self._fire(call)
            fired += 1
        return fired

    def _fire(self, call: ScheduledCall):
        call.fired = True
        debug.trace(f"Firing {call!r}", "scheduler")
        call.callback()


class ManualScheduler(Scheduler):
    """Scheduler on a virtual clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self._time = start
        super().__init__(clock=lambda: self._time)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire whatever became due."""
        if seconds < 0:
            raise ValueError("Cannot move the clock backwards")
        self._time += seconds
        return self.run_due()
