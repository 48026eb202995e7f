"""Application bootstrap for the tour layer.

Responsibilities:
 - Optional QApplication creation (skipped when headless or PyQt6 missing)
 - Loading persisted tour state and tour settings (environment overrides)
 - Registering core services (fresh ``EventBus`` per bootstrap for test isolation)
 - Registering the built-in editor tour
 - Helpers tying engine completion/skip to the persisted "tour seen" flag

PyQt6 is imported lazily so headless test collection stays fast.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from fokus_tour.app.config_store import (
    OUTCOME_COMPLETED,
    OUTCOME_SKIPPED,
    TourStateConfig,
    load_config,
    mark_tour_seen,
)
from fokus_tour.services.event_bus import EventBus
from fokus_tour.services.service_locator import ServiceLocator, services
from fokus_tour.tour.default_steps import EDITOR_TOUR_ID, build_editor_tour
from fokus_tour.tour.engine import TourEngine
from fokus_tour.tour.registry import get_tour, register_tour
from fokus_tour.tour.settings import TourSettings, settings_from_env

try:  # Lazy / optional Qt import
    from PyQt6.QtWidgets import QApplication  # type: ignore

    _QT_AVAILABLE = True
except Exception:  # noqa: BLE001
    QApplication = None  # type: ignore
    _QT_AVAILABLE = False

__all__ = [
    "AppContext",
    "create_app",
    "should_show_tour",
    "connect_tour_persistence",
    "editor_tour_steps",
]

log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: QApplication instance (None when headless)
    headless: Whether headless bootstrap was used
    services: Global service locator after registration
    tour_state: Persisted tour state loaded from ``data_dir``
    tour_settings: Placement / settle settings (environment aware)
    data_dir: Directory holding ``tour_state.json`` (None = CWD)
    duration_s: Bootstrap wall time
    """

    qt_app: Optional[Any]
    headless: bool
    services: ServiceLocator
    tour_state: TourStateConfig
    tour_settings: TourSettings
    data_dir: Optional[Path] = None
    duration_s: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(*, headless: bool | None = None, data_dir: str | Path | None = None) -> AppContext:
    started = time.perf_counter()
    if headless is None:
        headless = not _QT_AVAILABLE

    qt_app = None
    if not headless and _QT_AVAILABLE:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    base = Path(data_dir) if data_dir else None
    state = load_config(base)
    settings = settings_from_env()

    services.register("event_bus", EventBus(), allow_override=True)
    services.register("tour_state", state, allow_override=True)
    services.register("tour_settings", settings, allow_override=True)
    try:
        register_tour(build_editor_tour())
    except ValueError:
        pass  # already registered by an earlier bootstrap

    ctx = AppContext(
        qt_app=qt_app,
        headless=headless,
        services=services,
        tour_state=state,
        tour_settings=settings,
        data_dir=base,
        duration_s=time.perf_counter() - started,
    )
    log.debug("tour bootstrap done in %.4fs (headless=%s)", ctx.duration_s, headless)
    return ctx


def should_show_tour(ctx: AppContext) -> bool:
    """First launch check: offer the tour until it was completed or skipped."""
    return not ctx.tour_state.tour_seen


def connect_tour_persistence(engine: TourEngine, ctx: AppContext) -> None:
    """Persist "tour seen" when ``engine`` completes or is skipped."""

    def _record(outcome: str) -> None:
        ctx.tour_state = mark_tour_seen(outcome, ctx.data_dir)
        ctx.services.register("tour_state", ctx.tour_state, allow_override=True)

    engine.on_completed = lambda: _record(OUTCOME_COMPLETED)
    engine.on_skipped = lambda: _record(OUTCOME_SKIPPED)


def editor_tour_steps():
    return get_tour(EDITOR_TOUR_ID).steps
