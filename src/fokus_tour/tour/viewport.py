"""Viewport size + resize notification capability."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol, Tuple

__all__ = ["ResizeCallback", "ResizeSubscription", "Viewport", "FixedViewport"]

ResizeCallback = Callable[[], None]


class Viewport(Protocol):
    def size(self) -> Tuple[float, float]: ...  # pragma: no cover - structural

    def subscribe_resize(self, callback: ResizeCallback) -> "ResizeSubscription": ...  # pragma: no cover


@dataclass
class ResizeSubscription:
    callback: ResizeCallback
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class FixedViewport:
    """In-memory viewport; ``resize`` notifies subscribers synchronously."""

    def __init__(self, width: float, height: float) -> None:
        self._size = (float(width), float(height))
        self._subs: List[ResizeSubscription] = []

    def size(self) -> Tuple[float, float]:
        return self._size

    def subscribe_resize(self, callback: ResizeCallback) -> ResizeSubscription:
        sub = ResizeSubscription(callback)
        self._subs.append(sub)
        return sub

    @property
    def subscriber_count(self) -> int:
        self._subs = [s for s in self._subs if s.active]
        return len(self._subs)

    def resize(self, width: float, height: float) -> None:
        self._size = (float(width), float(height))
        self._subs = [s for s in self._subs if s.active]
        for sub in list(self._subs):
            if sub.active:
                sub.callback()
