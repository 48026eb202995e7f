"""Anchor rect resolution contract.

The engine only knows locators as opaque keys; the host's view layer decides
what they mean (Qt object names, canvas ids, accessibility paths...). A missing
anchor is an ordinary outcome, reported as ``None``.
"""

from __future__ import annotations

import logging
from typing import Dict, Hashable, Optional, Protocol

from .models import Rect

__all__ = ["RectProvider", "MappingRectProvider", "resolve_anchor"]

log = logging.getLogger(__name__)


class RectProvider(Protocol):
    def resolve(self, locator: Hashable) -> Optional[Rect]: ...  # pragma: no cover - structural


def resolve_anchor(provider: RectProvider, locator: Optional[Hashable]) -> Optional[Rect]:
    """Resolve ``locator`` through ``provider``; failures degrade to not-found."""
    if locator is None:
        return None
    try:
        rect = provider.resolve(locator)
    except Exception:  # noqa: BLE001 - a broken view lookup must not halt the tour
        log.warning("rect provider failed for anchor %r", locator, exc_info=True)
        return None
    if rect is None:
        log.debug("anchor %r not found", locator)
    return rect


class MappingRectProvider:
    """Dict-backed provider for headless hosts and tests."""

    def __init__(self, rects: Optional[Dict[Hashable, Rect]] = None) -> None:
        self._rects: Dict[Hashable, Rect] = dict(rects or {})
        self.calls = 0

    def set(self, locator: Hashable, rect: Rect) -> None:
        self._rects[locator] = rect

    def remove(self, locator: Hashable) -> None:
        self._rects.pop(locator, None)

    def resolve(self, locator: Hashable) -> Optional[Rect]:
        self.calls += 1
        return self._rects.get(locator)
