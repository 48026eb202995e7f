"""Step sequencer: the tour's small state machine.

States
------
``INACTIVE`` before the first start or after a host teardown (``stop``),
``ACTIVE`` while a step is shown, ``DONE`` after completion or skip. Completion
and skip land in the same state; callers tell them apart through the
``on_completed`` / ``on_skipped`` hooks, each fired exactly once per session.

Invariant: while ACTIVE, ``0 <= index < len(steps)``. Leaving ACTIVE releases
the step tuple.

State is always updated before hooks run, so a hook that raises (logged, not
propagated) or re-enters the sequencer observes a consistent session.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

from .models import TourProgress, TourStep

__all__ = ["SequencerState", "StepSequencer"]

log = logging.getLogger(__name__)


class SequencerState(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    DONE = "done"


class StepSequencer:
    def __init__(self) -> None:
        self._steps: Tuple[TourStep, ...] = ()
        self._index = 0
        self._state = SequencerState.INACTIVE
        self.on_index_changed: Optional[Callable[[int], None]] = None
        self.on_completed: Optional[Callable[[], None]] = None
        self.on_skipped: Optional[Callable[[], None]] = None

    # Read access -----------------------------------------------------
    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is SequencerState.ACTIVE

    @property
    def index(self) -> Optional[int]:
        return self._index if self.active else None

    @property
    def steps(self) -> Tuple[TourStep, ...]:
        return self._steps

    @property
    def current_step(self) -> Optional[TourStep]:
        if not self.active:
            return None
        return self._steps[self._index]

    def progress(self) -> Optional[TourProgress]:
        if not self.active:
            return None
        return TourProgress(current_index=self._index, total_steps=len(self._steps))

    # Transitions -----------------------------------------------------
    def start(self, steps: Iterable[TourStep]) -> bool:
        snapshot = tuple(steps)
        if not snapshot:
            log.debug("start ignored: empty step list")
            return False
        self._steps = snapshot
        self._index = 0
        self._state = SequencerState.ACTIVE
        log.debug("tour started with %d steps", len(snapshot))
        self._emit(self.on_index_changed, 0)
        return True

    def advance(self) -> None:
        if not self.active:
            return
        if self._index < len(self._steps) - 1:
            self._index += 1
            self._emit(self.on_index_changed, self._index)
            return
        self._finish(SequencerState.DONE)
        log.debug("tour completed")
        self._emit(self.on_completed)

    def retreat(self) -> None:
        if not self.active or self._index == 0:
            return
        self._index -= 1
        self._emit(self.on_index_changed, self._index)

    def skip(self) -> None:
        if not self.active:
            return
        skipped_at = self._index
        self._finish(SequencerState.DONE)
        log.debug("tour skipped at step %d", skipped_at)
        self._emit(self.on_skipped)

    def stop(self) -> None:
        """Host teardown: go inactive without completed/skipped signals."""
        if self._state is SequencerState.INACTIVE:
            return
        self._finish(SequencerState.INACTIVE)

    # Internal --------------------------------------------------------
    def _finish(self, state: SequencerState) -> None:
        self._state = state
        self._steps = ()
        self._index = 0

    @staticmethod
    def _emit(hook: Optional[Callable[..., None]], *args) -> None:
        if hook is None:
            return
        try:
            hook(*args)
        except Exception:  # noqa: BLE001 - listener failure must not break the session
            log.exception("tour sequencer listener failed")
