"""Tooltip placement calculator.

Pure function of (anchor rect or None, preferred side, viewport size). It never
measures anything itself; the caller hands in a freshly resolved rect.

Decision order
--------------
1. No anchor: full-cover backdrop, tooltip centered in the viewport with a
   width cap of ``min(centered_max_width, centered_width_ratio * width)``.
2. Side ``right``: top = anchor.top + 20, left = anchor.right + gap.
3. Side ``left``: top = anchor.top + 20, left = anchor.left - gap, trailing
   edge anchored. Flips right when the box would start before x=0.
4. Side ``top``: top = anchor.top - gap, bottom edge anchored, left = anchor.left.
5. Auto / ``bottom``: a tall anchor hugging the left edge resolves to ``right``.
   Otherwise below the anchor; flips above when the estimated bottom overflows
   and there is clearance above. No further vertical escape.
6. Horizontal clamp, always last: right overflow flips an explicit ``right``
   to the left of the anchor, otherwise shifts; a left margin breach flips an
   explicit ``left`` to the right, otherwise pins to the margin.

The optional ``clamp_to_viewport`` pass then keeps the tooltip's leading edge
inside ``[margin, width - estimated_width - margin]``.
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import (
    CENTERED,
    FULL_COVER,
    TRAILING_X,
    TRAILING_Y,
    PlacementResult,
    Rect,
    Side,
    TooltipAnchor,
    TransformHint,
    coerce_side,
)
from .settings import DEFAULT_PLACEMENT, PlacementSettings

__all__ = ["compute_placement"]

log = logging.getLogger(__name__)


def compute_placement(
    rect: Optional[Rect],
    side: "Side | str | None",
    viewport_width: float,
    viewport_height: float,
    settings: Optional[PlacementSettings] = None,
) -> PlacementResult:
    s = settings or DEFAULT_PLACEMENT
    preferred = coerce_side(side)

    if rect is None:
        return _centered(viewport_width, viewport_height, s)

    resolved = preferred
    if resolved is None and rect.height > s.tall_anchor_height and rect.left < s.edge_anchor_left:
        resolved = Side.RIGHT

    top = rect.bottom + s.gap
    left = rect.left
    tx = 0.0
    ty = 0.0

    if resolved is Side.RIGHT:
        top = rect.top + s.side_top_offset
        left = rect.right + s.gap
    elif resolved is Side.LEFT:
        top = rect.top + s.side_top_offset
        left = rect.left - s.gap
        tx = -1.0
        if left - s.estimated_width < 0:
            left = rect.right + s.gap
            tx = 0.0
    elif resolved is Side.TOP:
        top = rect.top - s.gap
        ty = -1.0
    elif top + s.estimated_height > viewport_height:
        candidate = rect.top - s.gap
        if candidate > s.flip_clearance:
            top = candidate
            ty = -1.0

    if left + s.estimated_width > viewport_width:
        if resolved is Side.RIGHT:
            left = rect.left - s.gap
            tx = -1.0
        else:
            left = viewport_width - s.estimated_width - s.viewport_margin

    if left < s.viewport_margin:
        if resolved is Side.LEFT:
            left = rect.right + s.gap
            tx = 0.0
        else:
            left = s.viewport_margin

    if s.clamp_to_viewport:
        left = _clamp_leading(left, tx, viewport_width, s)

    result = PlacementResult(
        spotlight=rect,
        tooltip=TooltipAnchor(top=top, left=left, transform=_hint(tx, ty)),
        side=resolved,
        backdrop_opacity=s.backdrop_opacity,
        corner_radius=s.corner_radius,
    )
    log.debug("placement side=%s top=%s left=%s hint=%s", resolved, top, left, result.tooltip.transform)
    return result


def _centered(width: float, height: float, s: PlacementSettings) -> PlacementResult:
    return PlacementResult(
        spotlight=FULL_COVER,
        tooltip=TooltipAnchor(top=height / 2, left=width / 2, transform=CENTERED),
        centered=True,
        max_width=min(s.centered_max_width, width * s.centered_width_ratio),
        backdrop_opacity=s.backdrop_opacity,
        corner_radius=s.corner_radius,
    )


def _hint(tx: float, ty: float) -> Optional[TransformHint]:
    if tx == 0.0 and ty == 0.0:
        return None
    if ty == 0.0:
        return TRAILING_X
    if tx == 0.0:
        return TRAILING_Y
    return TransformHint(x=tx, y=ty)


def _clamp_leading(left: float, tx: float, width: float, s: PlacementSettings) -> float:
    leading = left + tx * s.estimated_width
    upper = width - s.estimated_width - s.viewport_margin
    # Narrow viewports: the margin wins
    leading = max(s.viewport_margin, min(leading, upper))
    return leading - tx * s.estimated_width
