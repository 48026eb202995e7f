"""Tunable constants for tooltip placement and anchor re-measurement.

Defaults mirror the editor's shipped behavior. Environment bootstrap:

- ``FOKUS_TOUR_SETTLE_MS``: settle delay in milliseconds (positive int).
- ``FOKUS_TOUR_CLAMP``: "1"/"true"/"yes"/"on" enables the final viewport clamp
  of the tooltip's leading edge.

Invalid environment values are ignored (logged) and the default is kept.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

__all__ = [
    "PlacementSettings",
    "DEFAULT_PLACEMENT",
    "DEFAULT_SETTLE_DELAY_MS",
    "TourSettings",
    "settings_from_env",
]

log = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY_MS = 300

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class PlacementSettings:
    estimated_width: float = 320.0
    estimated_height: float = 200.0
    gap: float = 16.0
    side_top_offset: float = 20.0
    viewport_margin: float = 20.0
    flip_clearance: float = 100.0
    tall_anchor_height: float = 300.0
    edge_anchor_left: float = 100.0
    centered_max_width: float = 500.0
    centered_width_ratio: float = 0.9
    backdrop_opacity: float = 0.75
    corner_radius: float = 4.0
    clamp_to_viewport: bool = False


DEFAULT_PLACEMENT = PlacementSettings()


@dataclass(frozen=True)
class TourSettings:
    placement: PlacementSettings = DEFAULT_PLACEMENT
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> TourSettings:
    env = os.environ if environ is None else environ
    placement = DEFAULT_PLACEMENT
    settle = DEFAULT_SETTLE_DELAY_MS

    raw_settle = env.get("FOKUS_TOUR_SETTLE_MS", "").strip()
    if raw_settle:
        try:
            value = int(raw_settle)
            if value <= 0:
                raise ValueError(value)
            settle = value
        except ValueError:
            log.warning("Ignoring invalid FOKUS_TOUR_SETTLE_MS=%r", raw_settle)

    if env.get("FOKUS_TOUR_CLAMP", "").strip().lower() in _TRUTHY:
        placement = replace(placement, clamp_to_viewport=True)

    return TourSettings(placement=placement, settle_delay_ms=settle)
