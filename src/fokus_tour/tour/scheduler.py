"""One-shot timer capability used for the settle-delay re-measurement.

``ManualScheduler`` is a virtual clock: nothing fires until ``advance`` moves
time forward, which makes timer ordering fully deterministic in headless runs.
The Qt-backed implementation lives in ``qt_adapters``.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Protocol

__all__ = ["TimerHandle", "Scheduler", "ManualTimer", "ManualScheduler"]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...  # pragma: no cover - structural


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...  # pragma: no cover


@dataclass(order=True)
class ManualTimer:
    due_ms: int
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: List[ManualTimer] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(due_ms=self.now_ms + max(0, int(delay_ms)), seq=next(self._seq), callback=callback)
        heapq.heappush(self._queue, timer)
        return timer

    def pending(self) -> List[ManualTimer]:
        return sorted(t for t in self._queue if not t.cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms``, firing due timers in order.

        Returns the number of callbacks fired. Timers scheduled by a callback
        fire within the same call when they fall due before the target time.
        """
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0].due_ms <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now_ms = timer.due_ms
            timer.fired = True
            fired += 1
            timer.callback()
        self.now_ms = target
        return fired
