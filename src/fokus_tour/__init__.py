"""Fokus guided tour public API.

Small, curated surface for hosts (the editor main window, tests) so they do
not depend on deep module paths. Importing this package never creates a
QApplication and never imports PyQt6; the overlay widget lives in
``fokus_tour.components.tour_overlay``.
"""

from __future__ import annotations

from .services.service_locator import (  # noqa: F401
    services,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.event_bus import EventBus, TourEvent, Event  # noqa: F401
from .tour import (  # noqa: F401
    FULL_COVER,
    PlacementResult,
    Rect,
    Side,
    TourEngine,
    TourStep,
    compute_placement,
)

__version__ = "0.1.0"

__all__ = [
    "services",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EventBus",
    "TourEvent",
    "Event",
    "FULL_COVER",
    "PlacementResult",
    "Rect",
    "Side",
    "TourEngine",
    "TourStep",
    "compute_placement",
]
