"""Viewport watcher: decides *when* placement is recomputed.

Triggers
--------
* ``start()`` and every ``step_changed()``: immediate recompute.
* One settle recompute ``settle_delay_ms`` after each start/step change. A newer
  step change cancels the pending one; only the latest may fire.
* Every viewport resize while active: immediate recompute, no debounce. Resize
  recomputes and the settle timer are independent of each other.

Staleness is guarded twice: the pending handle is cancelled, and every settle
callback carries the generation it was scheduled under and is ignored unless
it still matches (covers a timer that fires while racing ``stop()``).
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .scheduler import Scheduler, TimerHandle
from .settings import DEFAULT_SETTLE_DELAY_MS
from .viewport import ResizeSubscription, Viewport

__all__ = ["ViewportWatcher"]

log = logging.getLogger(__name__)


class ViewportWatcher:
    def __init__(
        self,
        viewport: Viewport,
        scheduler: Scheduler,
        recompute: Callable[[], object],
        settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS,
    ) -> None:
        if settle_delay_ms <= 0:
            raise ValueError("settle_delay_ms must be > 0")
        self._viewport = viewport
        self._scheduler = scheduler
        self._recompute = recompute
        self._settle_delay_ms = int(settle_delay_ms)
        self._active = False
        self._generation = 0
        self._pending: Optional[TimerHandle] = None
        self._resize_sub: Optional[ResizeSubscription] = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def has_pending_settle(self) -> bool:
        return self._pending is not None

    @property
    def settle_delay_ms(self) -> int:
        return self._settle_delay_ms

    def start(self) -> None:
        if self._active:
            self.step_changed()
            return
        self._active = True
        self._resize_sub = self._viewport.subscribe_resize(self._on_resize)
        self._recompute()
        if not self._active:
            return  # recompute ended the tour
        self._schedule_settle()

    def step_changed(self) -> None:
        if not self._active:
            return
        self._recompute()
        if not self._active:
            return  # recompute ended the tour
        self._schedule_settle()

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self._generation += 1
        self._cancel_pending()
        if self._resize_sub is not None:
            self._resize_sub.cancel()
            self._resize_sub = None

    # Internal ----------------------------------------------------------
    def _on_resize(self) -> None:
        if self._active:
            self._recompute()

    def _schedule_settle(self) -> None:
        self._cancel_pending()
        self._generation += 1
        generation = self._generation
        self._pending = self._scheduler.call_later(
            self._settle_delay_ms, lambda: self._on_settle(generation)
        )

    def _on_settle(self, generation: int) -> None:
        if not self._active or generation != self._generation:
            log.debug("stale settle timer ignored (gen %d, current %d)", generation, self._generation)
            return
        self._pending = None
        self._recompute()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
