"""Guided tour engine: step sequencing and spotlight/tooltip placement.

Qt-free; Qt adapters live in ``fokus_tour.tour.qt_adapters``.
"""

from .models import (  # noqa: F401
    FULL_COVER,
    PlacementResult,
    Rect,
    Side,
    TooltipAnchor,
    TourProgress,
    TourStep,
    TransformHint,
)
from .placement import compute_placement  # noqa: F401
from .sequencer import SequencerState, StepSequencer  # noqa: F401
from .rect_provider import MappingRectProvider, RectProvider, resolve_anchor  # noqa: F401
from .scheduler import ManualScheduler, Scheduler  # noqa: F401
from .viewport import FixedViewport, Viewport  # noqa: F401
from .watcher import ViewportWatcher  # noqa: F401
from .settings import PlacementSettings, TourSettings, settings_from_env  # noqa: F401
from .engine import TourEngine  # noqa: F401
from .registry import TourDefinition, register_tour, get_tour, list_tours, clear_tours  # noqa: F401
