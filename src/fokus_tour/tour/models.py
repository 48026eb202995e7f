"""Value types shared by the guided tour engine.

Everything here is immutable. Rects are produced fresh on every anchor
resolution and placement results are derived per recomputation, so nothing in
this module carries identity or lifecycle.

Coordinates are viewport pixels relative to the top-left origin of the host
viewport (the widget the overlay covers).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Optional, Tuple, Union

__all__ = [
    "Side",
    "coerce_side",
    "Rect",
    "TourStep",
    "FULL_COVER",
    "TransformHint",
    "TRAILING_X",
    "TRAILING_Y",
    "CENTERED",
    "TooltipAnchor",
    "PlacementResult",
    "TourProgress",
]


class Side(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


def coerce_side(value: "Side | str | None") -> Optional[Side]:
    """Normalize a preferred side hint.

    ``None`` and the empty string mean "auto". Unknown strings raise
    ``ValueError`` since they are authoring mistakes in a step definition.
    """
    if value is None or value == "":
        return None
    if isinstance(value, Side):
        return value
    try:
        return Side(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown tooltip side: {value!r}") from None


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.top, self.left, self.width, self.height)


@dataclass(frozen=True)
class TourStep:
    """One explanation in a tour.

    Attributes
    ----------
    title: Heading shown on the tooltip card.
    body: Opaque payload handed to the renderer untouched (text, widget factory...).
    anchor: Opaque locator resolved by the host's rect provider; ``None`` for a
        centered, anchor-less step.
    side: Preferred tooltip side or ``None`` for automatic placement.
    id: Optional stable identifier (used by the tour registry).
    """

    title: str
    body: Any = ""
    anchor: Optional[Hashable] = None
    side: Optional[Side] = None
    id: str = ""

    def __post_init__(self) -> None:
        # Accept plain strings for ``side`` in step definitions
        object.__setattr__(self, "side", coerce_side(self.side))


FULL_COVER = "full-cover"


@dataclass(frozen=True)
class TransformHint:
    """Translation expressed as fractions of the tooltip's own size.

    ``x=-1`` places the box by its right edge (trailing-edge anchoring),
    ``y=-1`` by its bottom edge.
    """

    x: float = 0.0
    y: float = 0.0


TRAILING_X = TransformHint(x=-1.0)
TRAILING_Y = TransformHint(y=-1.0)
CENTERED = TransformHint(x=-0.5, y=-0.5)


@dataclass(frozen=True)
class TooltipAnchor:
    top: float
    left: float
    transform: Optional[TransformHint] = None


@dataclass(frozen=True)
class PlacementResult:
    spotlight: Union[Rect, str]
    tooltip: TooltipAnchor
    side: Optional[Side] = None
    centered: bool = False
    max_width: Optional[float] = None
    backdrop_opacity: float = 0.75
    corner_radius: float = 4.0

    @property
    def is_full_cover(self) -> bool:
        return self.spotlight == FULL_COVER

    def tooltip_box(self, width: float, height: float) -> Tuple[float, float]:
        """Return the (top, left) of a ``width`` x ``height`` box after the hint."""
        hint = self.tooltip.transform or TransformHint()
        top = self.tooltip.top + hint.y * height
        left = self.tooltip.left + hint.x * width
        return (top, left)


@dataclass(frozen=True)
class TourProgress:
    current_index: int
    total_steps: int

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index == self.total_steps - 1

    @property
    def label(self) -> str:
        return f"{self.current_index + 1} / {self.total_steps}"
