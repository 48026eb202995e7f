"""Named tour definitions.

Hosts register the tours they ship (the editor tour, feature tours added
later) once at startup and look them up by id when the user asks for help.
The engine itself never reads the registry; it receives the step sequence on
activation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .models import TourStep

__all__ = [
    "TourDefinition",
    "register_tour",
    "get_tour",
    "list_tours",
    "clear_tours",
]


@dataclass(frozen=True)
class TourDefinition:
    id: str
    steps: Tuple[TourStep, ...] = field(default_factory=tuple)
    version: int = 1
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))

    def step_ids(self) -> List[str]:
        return [s.id for s in self.steps]


_registry: Dict[str, TourDefinition] = {}


def register_tour(defn: TourDefinition) -> None:
    if defn.id in _registry:
        raise ValueError(f"Tour already registered: {defn.id}")
    seen = set()
    for step in defn.steps:
        if not step.id:
            continue  # anonymous steps are allowed
        if step.id in seen:
            raise ValueError(f"Duplicate step id {step.id} in tour {defn.id}")
        seen.add(step.id)
    _registry[defn.id] = defn


def get_tour(tour_id: str) -> TourDefinition:
    return _registry[tour_id]


def list_tours() -> List[TourDefinition]:
    return list(_registry.values())


def clear_tours() -> None:
    _registry.clear()
