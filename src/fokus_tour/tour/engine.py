"""Guided tour engine facade.

Wires the step sequencer, viewport watcher, rect provider and placement
calculator together and is the single object the host and renderer talk to.

Host side::

    engine = TourEngine(provider, viewport, scheduler,
                        on_completed=mark_seen, on_skipped=mark_seen)
    engine.activate(build_editor_tour().steps)

Renderer side: ``on_update(placement, progress, step)`` fires after every
recomputation (``placement`` is ``None`` once the tour is no longer active) and
the card buttons call ``next()`` / ``prev()`` / ``skip()``.

Lifecycle events are also published on the event bus (explicit ``event_bus``
argument, else the ``"event_bus"`` service when registered).
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from ..services.event_bus import EventBus, TourEvent
from ..services.service_locator import services
from .models import PlacementResult, TourProgress, TourStep
from .placement import compute_placement
from .rect_provider import RectProvider, resolve_anchor
from .scheduler import Scheduler
from .sequencer import StepSequencer
from .settings import DEFAULT_SETTLE_DELAY_MS, PlacementSettings, TourSettings
from .viewport import Viewport
from .watcher import ViewportWatcher

__all__ = ["TourEngine", "UpdateCallback"]

log = logging.getLogger(__name__)

UpdateCallback = Callable[[Optional[PlacementResult], Optional[TourProgress], Optional[TourStep]], None]


class TourEngine:
    def __init__(
        self,
        rect_provider: RectProvider,
        viewport: Viewport,
        scheduler: Scheduler,
        *,
        settings: Optional[PlacementSettings] = None,
        settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS,
        event_bus: Optional[EventBus] = None,
        on_completed: Optional[Callable[[], None]] = None,
        on_skipped: Optional[Callable[[], None]] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> None:
        self._provider = rect_provider
        self._viewport = viewport
        self._settings = settings
        self._event_bus = event_bus
        self.on_completed = on_completed
        self.on_skipped = on_skipped
        self.on_update = on_update
        self._placement: Optional[PlacementResult] = None
        self._sequencer = StepSequencer()
        self._sequencer.on_index_changed = self._handle_index_changed
        self._sequencer.on_completed = self._handle_completed
        self._sequencer.on_skipped = self._handle_skipped
        self._watcher = ViewportWatcher(viewport, scheduler, self.recompute, settle_delay_ms)
        self._starting = False

    @classmethod
    def from_settings(
        cls,
        rect_provider: RectProvider,
        viewport: Viewport,
        scheduler: Scheduler,
        tour_settings: TourSettings,
        **kwargs,
    ) -> "TourEngine":
        return cls(
            rect_provider,
            viewport,
            scheduler,
            settings=tour_settings.placement,
            settle_delay_ms=tour_settings.settle_delay_ms,
            **kwargs,
        )

    # Read access -------------------------------------------------------
    @property
    def active(self) -> bool:
        return self._sequencer.active

    @property
    def placement(self) -> Optional[PlacementResult]:
        return self._placement

    @property
    def current_step(self) -> Optional[TourStep]:
        return self._sequencer.current_step

    @property
    def watcher(self) -> ViewportWatcher:
        return self._watcher

    def progress(self) -> Optional[TourProgress]:
        return self._sequencer.progress()

    # Host operations ---------------------------------------------------
    def activate(self, steps: Iterable[TourStep]) -> bool:
        """Start a tour; an empty step list is ignored.

        Activating while a tour runs restarts from the first step of ``steps``.
        """
        snapshot = tuple(steps)
        if not snapshot:
            log.debug("activate ignored: no steps")
            return False
        if self.active:
            self._watcher.stop()
        self._starting = True
        try:
            self._sequencer.start(snapshot)
        finally:
            self._starting = False
        progress = self.progress()
        self._publish(TourEvent.TOUR_STARTED, {"total_steps": progress.total_steps if progress else 0})
        self._watcher.start()
        return True

    def deactivate(self) -> None:
        if not self.active:
            return
        self._sequencer.stop()
        self._teardown()
        self._publish(TourEvent.TOUR_DEACTIVATED)

    # Renderer operations -----------------------------------------------
    def next(self) -> None:
        self._sequencer.advance()

    def prev(self) -> None:
        self._sequencer.retreat()

    def skip(self) -> None:
        self._sequencer.skip()

    # Recomputation -----------------------------------------------------
    def recompute(self) -> Optional[PlacementResult]:
        step = self._sequencer.current_step
        if step is None:
            return None
        width, height = self._viewport.size()
        rect = resolve_anchor(self._provider, step.anchor)
        placement = compute_placement(rect, step.side, width, height, self._settings)
        self._placement = placement
        self._notify(placement, self._sequencer.progress(), step)
        if self.active:
            # on_update may have ended the tour
            self._publish(TourEvent.PLACEMENT_UPDATED, placement)
        return placement

    # Sequencer hooks ---------------------------------------------------
    def _handle_index_changed(self, index: int) -> None:
        if self._starting:
            return  # watcher.start() performs the first recompute
        self._publish(TourEvent.TOUR_STEP_CHANGED, {"index": index})
        self._watcher.step_changed()

    def _handle_completed(self) -> None:
        self._teardown()
        self._publish(TourEvent.TOUR_COMPLETED)
        self._call(self.on_completed)

    def _handle_skipped(self) -> None:
        self._teardown()
        self._publish(TourEvent.TOUR_SKIPPED)
        self._call(self.on_skipped)

    # Internal ----------------------------------------------------------
    def _teardown(self) -> None:
        self._watcher.stop()
        self._placement = None
        self._notify(None, None, None)

    def _notify(self, placement, progress, step) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(placement, progress, step)
        except Exception:  # noqa: BLE001 - renderer failures stay local
            log.exception("tour update callback failed")

    def _call(self, hook: Optional[Callable[[], None]]) -> None:
        if hook is None:
            return
        try:
            hook()
        except Exception:  # noqa: BLE001
            log.exception("tour host callback failed")

    def _publish(self, event: TourEvent, payload=None) -> None:
        bus = self._event_bus or services.try_get("event_bus")
        if isinstance(bus, EventBus):
            bus.publish(event, payload)
