"""Guided tour overlay widget.

Draws what ``TourEngine`` computes: a dimmed backdrop covering the parent
window with a rounded cut-out around the current anchor (or a uniform dim when
there is none) and a tooltip card with the step content and navigation.

Usage::

    overlay, engine = install_tour_overlay(main_window, ctx=app_context)
    engine.activate(editor_tour_steps())

Behavior
--------
* The overlay fills the parent and blocks mouse input to the UI underneath.
* The card is positioned from ``PlacementResult.tooltip_box`` using its real
  measured size, so trailing-edge hints place its right/bottom edge.
* Centered steps cap the card width at ``PlacementResult.max_width``.
* The step body may be text or a zero-argument callable returning a QWidget.
* The overlay hides itself as soon as the engine reports no placement
  (completed, skipped or deactivated).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from PyQt6.QtCore import QRectF, Qt
from PyQt6.QtGui import QColor, QPainter, QPainterPath
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from fokus_tour.tour.engine import TourEngine
from fokus_tour.tour.models import PlacementResult, Rect, TourProgress, TourStep
from fokus_tour.tour.qt_adapters import QtScheduler, WidgetRectProvider, WidgetViewport

__all__ = ["TourOverlay", "install_tour_overlay"]

log = logging.getLogger(__name__)

_CARD_WIDTH = 320


class TourOverlay(QWidget):
    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setObjectName("TourOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, False)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self._engine: Optional[TourEngine] = None
        self._placement: Optional[PlacementResult] = None
        self._body_widget: Optional[QWidget] = None
        self._build_card()
        self.hide()

    # Construction ------------------------------------------------------------
    def _build_card(self) -> None:
        self.card = QFrame(self)
        self.card.setObjectName("TourCard")
        self.card.setStyleSheet(
            "#TourCard { background: palette(window); border-radius: 8px; }"
        )
        layout = QVBoxLayout(self.card)
        header = QHBoxLayout()
        self.title_label = QLabel(self.card)
        self.title_label.setObjectName("TourTitle")
        self.title_label.setWordWrap(True)
        self.counter_label = QLabel(self.card)
        self.counter_label.setObjectName("TourCounter")
        header.addWidget(self.title_label, 1)
        header.addWidget(self.counter_label)
        layout.addLayout(header)

        self.body_host = QVBoxLayout()
        self.body_label = QLabel(self.card)
        self.body_label.setObjectName("TourBody")
        self.body_label.setWordWrap(True)
        self.body_host.addWidget(self.body_label)
        layout.addLayout(self.body_host)

        footer = QHBoxLayout()
        self.skip_button = QPushButton("Skip", self.card)
        self.prev_button = QPushButton("Back", self.card)
        self.next_button = QPushButton("Next", self.card)
        self.next_button.setDefault(True)
        footer.addWidget(self.skip_button)
        footer.addStretch(1)
        footer.addWidget(self.prev_button)
        footer.addWidget(self.next_button)
        layout.addLayout(footer)

        self.skip_button.clicked.connect(self._on_skip)
        self.prev_button.clicked.connect(self._on_prev)
        self.next_button.clicked.connect(self._on_next)

    # Engine wiring -----------------------------------------------------------
    def attach(self, engine: TourEngine) -> None:
        self._engine = engine
        engine.on_update = self.apply_update

    def apply_update(
        self,
        placement: Optional[PlacementResult],
        progress: Optional[TourProgress],
        step: Optional[TourStep],
    ) -> None:
        self._placement = placement
        if placement is None or progress is None or step is None:
            self._clear_body()
            self.hide()
            return
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(0, 0, parent.width(), parent.height())
        self.title_label.setText(step.title)
        self.counter_label.setText(progress.label)
        self._set_body(step.body)
        self.prev_button.setVisible(not progress.is_first)
        self.next_button.setText("Done" if progress.is_last else "Next")
        self._position_card(placement)
        self.show()
        self.raise_()
        self.update()

    @property
    def placement(self) -> Optional[PlacementResult]:
        return self._placement

    def is_active(self) -> bool:
        return self.isVisible() and self._placement is not None

    # Painting ----------------------------------------------------------------
    def paintEvent(self, event):  # type: ignore[override]
        placement = self._placement
        if placement is None:
            return
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        color = QColor(0, 0, 0, int(round(255 * placement.backdrop_opacity)))
        path = QPainterPath()
        path.setFillRule(Qt.FillRule.OddEvenFill)
        path.addRect(QRectF(self.rect()))
        if isinstance(placement.spotlight, Rect):
            r = placement.spotlight
            radius = placement.corner_radius
            path.addRoundedRect(QRectF(r.left, r.top, r.width, r.height), radius, radius)
        p.fillPath(path, color)
        p.end()

    # Internal ----------------------------------------------------------------
    def _position_card(self, placement: PlacementResult) -> None:
        if placement.centered and placement.max_width is not None:
            self.card.setFixedWidth(max(1, int(placement.max_width)))
        else:
            self.card.setFixedWidth(_CARD_WIDTH)
        self.card.adjustSize()
        top, left = placement.tooltip_box(self.card.width(), self.card.height())
        self.card.move(int(round(left)), int(round(top)))

    def _set_body(self, body: Any) -> None:
        self._clear_body()
        if callable(body):
            widget = body()
            if isinstance(widget, QWidget):
                widget.setParent(self.card)
                self.body_host.addWidget(widget)
                self._body_widget = widget
                self.body_label.hide()
                return
            log.warning("tour body factory returned %r, showing as text", type(widget).__name__)
            body = widget
        self.body_label.setText("" if body is None else str(body))
        self.body_label.show()

    def _clear_body(self) -> None:
        if self._body_widget is not None:
            self.body_host.removeWidget(self._body_widget)
            self._body_widget.deleteLater()
            self._body_widget = None

    def _on_next(self) -> None:
        if self._engine is not None:
            self._engine.next()

    def _on_prev(self) -> None:
        if self._engine is not None:
            self._engine.prev()

    def _on_skip(self) -> None:
        if self._engine is not None:
            self._engine.skip()


def install_tour_overlay(window: QWidget, *, ctx=None) -> Tuple[TourOverlay, TourEngine]:
    """Create an overlay + engine pair bound to ``window``.

    With a bootstrap ``ctx`` the engine uses its tour settings and persists the
    "tour seen" flag on completion or skip.
    """
    overlay = TourOverlay(window)
    kwargs = {}
    if ctx is not None:
        kwargs["settings"] = ctx.tour_settings.placement
        kwargs["settle_delay_ms"] = ctx.tour_settings.settle_delay_ms
    engine = TourEngine(
        WidgetRectProvider(window),
        WidgetViewport(window),
        QtScheduler(window),
        **kwargs,
    )
    overlay.attach(engine)
    if ctx is not None:
        from fokus_tour.app.bootstrap import connect_tour_persistence

        connect_tour_persistence(engine, ctx)
    return overlay, engine
