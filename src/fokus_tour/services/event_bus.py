"""Tour event bus.

Small synchronous publish/subscribe hub the engine uses to tell the host about
tour lifecycle changes (started, step changed, completed, skipped...). No Qt
dependency so it runs headless.

Behavior:
 - Handlers run in subscription order on the publishing thread.
 - A failing handler is recorded in ``errors`` and logged; remaining handlers
   still run.
 - ``once=True`` subscriptions are dropped after their first successful call.
 - Subscribers are snapshotted before dispatch so handlers may (un)subscribe
   while being called.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "TourEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

log = logging.getLogger(__name__)


class TourEvent(str, Enum):
    TOUR_STARTED = "tour_started"
    TOUR_STEP_CHANGED = "tour_step_changed"
    TOUR_COMPLETED = "tour_completed"
    TOUR_SKIPPED = "tour_skipped"
    TOUR_DEACTIVATED = "tour_deactivated"
    PLACEMENT_UPDATED = "placement_updated"


@dataclass
class Event:
    name: str  # TourEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: "str | TourEvent") -> str:
    return name.value if isinstance(name, TourEvent) else name


class EventBus:
    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: "str | TourEvent", handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.active = False
        with self._lock:
            bucket = [s for s in self._subs.get(sub.event, ()) if s is not sub]
            if bucket:
                self._subs[sub.event] = bucket
            else:
                self._subs.pop(sub.event, None)

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: "str | TourEvent", payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                log.warning("handler for %s failed: %s", evt.name, exc)
                with self._lock:
                    self._errors.append((evt, exc))
                continue
            if sub.once:
                self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: "str | TourEvent") -> int:
        with self._lock:
            return sum(1 for s in self._subs.get(_key(name), ()) if s.active)

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
