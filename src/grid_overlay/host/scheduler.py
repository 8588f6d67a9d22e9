"""Cooperative one-shot timers for a single-threaded event loop."""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass(order=True)
class Timer:
    """A callback due at `deadline` (in clock seconds)."""
    deadline: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)


class Scheduler:
    """
    Runs timers from the host's own loop.

    Nothing runs in the background: the loop calls `run_due` between input
    reads, and every due callback runs there, earliest first. Callbacks may
    schedule further timers; those run on a later call even when already due.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._timers: list[Timer] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        """Run callback once, `delay` seconds from now."""
        timer = Timer(self._clock() + max(0.0, delay), next(self._sequence), callback)
        heapq.heappush(self._timers, timer)
        return timer

    def run_due(self, now: Optional[float] = None) -> int:
        """Run every timer due at `now`. Returns how many ran."""
        now = self._clock() if now is None else now
        due: list[Timer] = []
        while self._timers and self._timers[0].deadline <= now:
            due.append(heapq.heappop(self._timers))
        for timer in due:
            timer.callback()
        return len(due)

    def next_deadline(self) -> Optional[float]:
        return self._timers[0].deadline if self._timers else None

    @property
    def pending(self) -> int:
        return len(self._timers)
