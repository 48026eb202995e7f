"""PyQt6 implementations of the engine's capabilities.

- ``WidgetRectProvider``: anchor locator = ``objectName`` of a widget below
  ``root``; rect is mapped into ``root`` coordinates.
- ``WidgetViewport``: size of a widget plus resize notifications through an
  event filter.
- ``QtScheduler``: single-shot ``QTimer`` per call.

Kept apart from the engine core so the core imports without Qt.
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, List, Optional, Tuple

from PyQt6.QtCore import QEvent, QObject, QPoint, QTimer
from PyQt6.QtWidgets import QWidget

from .models import Rect
from .viewport import ResizeCallback, ResizeSubscription

__all__ = ["WidgetRectProvider", "WidgetViewport", "QtScheduler", "QtTimerHandle"]

log = logging.getLogger(__name__)


class WidgetRectProvider:
    def __init__(self, root: QWidget) -> None:
        self._root = root

    def resolve(self, locator: Hashable) -> Optional[Rect]:
        if not isinstance(locator, str) or not locator:
            return None
        widget = self._root.findChild(QWidget, locator)
        if widget is None or not widget.isVisible():
            return None
        origin = widget.mapTo(self._root, QPoint(0, 0))
        return Rect(
            top=float(origin.y()),
            left=float(origin.x()),
            width=float(widget.width()),
            height=float(widget.height()),
        )


class _ResizeFilter(QObject):
    def __init__(self, parent: QWidget, viewport: "WidgetViewport"):
        super().__init__(parent)
        self._viewport = viewport

    def eventFilter(self, watched, event):  # type: ignore[override]
        if event.type() == QEvent.Type.Resize:
            self._viewport._dispatch()
        return False


class WidgetViewport:
    def __init__(self, widget: QWidget) -> None:
        self._widget = widget
        self._subs: List[ResizeSubscription] = []
        self._filter = _ResizeFilter(widget, self)
        widget.installEventFilter(self._filter)

    def size(self) -> Tuple[float, float]:
        return (float(self._widget.width()), float(self._widget.height()))

    def subscribe_resize(self, callback: ResizeCallback) -> ResizeSubscription:
        sub = ResizeSubscription(callback)
        self._subs.append(sub)
        return sub

    def _dispatch(self) -> None:
        self._subs = [s for s in self._subs if s.active]
        for sub in list(self._subs):
            if not sub.active:
                continue
            try:
                sub.callback()
            except Exception:  # noqa: BLE001 - never let a callback escape into Qt's event loop
                log.exception("viewport resize callback failed")


class QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        try:
            self._timer.stop()
            self._timer.deleteLater()
        except RuntimeError:
            pass  # already fired and deleted

    @property
    def active(self) -> bool:
        try:
            return self._timer.isActive()
        except RuntimeError:
            return False


class QtScheduler:
    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        timer.timeout.connect(timer.deleteLater)
        timer.start(max(0, int(delay_ms)))
        return QtTimerHandle(timer)
