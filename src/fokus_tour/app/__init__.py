"""Application layer: bootstrap and persisted tour state."""

from .bootstrap import (  # noqa: F401
    AppContext,
    create_app,
    should_show_tour,
    connect_tour_persistence,
    editor_tour_steps,
)
from .config_store import (  # noqa: F401
    TourStateConfig,
    load_config,
    save_config,
    mark_tour_seen,
)
