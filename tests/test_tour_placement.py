"""Placement calculator rules (anchor rect + side hint + viewport -> geometry)."""

from __future__ import annotations

import pytest

from fokus_tour.tour.models import (
    CENTERED,
    FULL_COVER,
    TRAILING_X,
    TRAILING_Y,
    Rect,
    Side,
)
from fokus_tour.tour.placement import compute_placement
from fokus_tour.tour.settings import PlacementSettings


def test_below_placement_without_clamp():
    res = compute_placement(Rect(top=100, left=50, width=200, height=40), None, 1200, 800)
    assert res.spotlight == Rect(100, 50, 200, 40)
    assert res.tooltip.top == 156
    assert res.tooltip.left == 50
    assert res.tooltip.transform is None
    assert res.side is None
    assert not res.centered


def test_flips_above_when_bottom_overflows():
    res = compute_placement(Rect(top=700, left=50, width=200, height=40), None, 1200, 800)
    assert res.tooltip.top == 684
    assert res.tooltip.left == 50
    assert res.tooltip.transform == TRAILING_Y


def test_explicit_right_flips_left_on_overflow():
    res = compute_placement(Rect(top=100, left=1000, width=150, height=30), "right", 1200, 800)
    assert res.tooltip.top == 120
    assert res.tooltip.left == 984
    assert res.tooltip.transform == TRAILING_X
    # Box's own right edge sits at 984
    top, left = res.tooltip_box(320, 150)
    assert (top, left) == (120, 984 - 320)


@pytest.mark.parametrize("side", [None, "top", "bottom", "left", "right", Side.LEFT])
def test_missing_anchor_is_full_cover_and_centered(side):
    res = compute_placement(None, side, 1200, 800)
    assert res.spotlight == FULL_COVER
    assert res.is_full_cover
    assert res.centered
    assert (res.tooltip.top, res.tooltip.left) == (400, 600)
    assert res.tooltip.transform == CENTERED
    assert res.max_width == 500
    assert res.backdrop_opacity == 0.75


def test_centered_width_cap_uses_viewport_ratio_on_narrow_screens():
    res = compute_placement(None, None, 400, 300)
    assert res.max_width == pytest.approx(360)


def test_right_side_fits():
    res = compute_placement(Rect(top=50, left=100, width=100, height=40), Side.RIGHT, 1200, 800)
    assert (res.tooltip.top, res.tooltip.left) == (70, 216)
    assert res.tooltip.transform is None
    assert res.side is Side.RIGHT


def test_left_side_trailing_anchor():
    res = compute_placement(Rect(top=50, left=600, width=100, height=40), "left", 1200, 800)
    assert (res.tooltip.top, res.tooltip.left) == (70, 584)
    assert res.tooltip.transform == TRAILING_X


def test_left_side_flips_right_when_box_would_leave_viewport():
    res = compute_placement(Rect(top=50, left=200, width=100, height=40), "left", 1200, 800)
    assert res.tooltip.left == 316
    assert res.tooltip.transform is None


def test_top_side_anchors_bottom_edge():
    res = compute_placement(Rect(top=400, left=300, width=80, height=30), "top", 1200, 800)
    assert res.tooltip.top == 384
    assert res.tooltip.left == 300
    assert res.tooltip.transform == TRAILING_Y


def test_top_side_gets_horizontal_shift():
    res = compute_placement(Rect(top=400, left=1100, width=80, height=30), "top", 1200, 800)
    assert res.tooltip.left == 1200 - 320 - 20
    assert res.tooltip.transform == TRAILING_Y


def test_tall_left_anchor_resolves_to_right():
    sidebar = Rect(top=60, left=0, width=260, height=700)
    res = compute_placement(sidebar, None, 1200, 800)
    assert res.side is Side.RIGHT
    assert (res.tooltip.top, res.tooltip.left) == (80, 276)


def test_tall_left_anchor_overflow_flips_like_explicit_right():
    sidebar = Rect(top=60, left=0, width=1000, height=700)
    res = compute_placement(sidebar, None, 1200, 800)
    # Flipped to the left of the anchor, then pinned to the margin
    assert res.tooltip.left == 20
    assert res.tooltip.transform == TRAILING_X


def test_no_flip_above_without_clearance():
    res = compute_placement(Rect(top=110, left=50, width=200, height=600), "bottom", 1200, 800)
    # 110 - 16 = 94 is not above the 100px clearance; stays below
    assert res.tooltip.top == 726
    assert res.tooltip.transform is None


def test_right_overflow_shift_for_auto_side():
    res = compute_placement(Rect(top=100, left=1000, width=100, height=30), None, 1200, 800)
    assert res.tooltip.left == 860
    assert res.tooltip.transform is None


def test_left_margin_clamp_for_auto_side():
    res = compute_placement(Rect(top=100, left=5, width=50, height=30), None, 1200, 800)
    assert res.tooltip.left == 20


def test_zero_viewport_and_degenerate_rect_do_not_fail():
    res = compute_placement(Rect(0, 0, 0, 0), None, 0, 0)
    assert res.spotlight == Rect(0, 0, 0, 0)
    # Shift to -340 then margin pin
    assert res.tooltip.left == 20
    centered = compute_placement(None, None, 0, 0)
    assert centered.max_width == 0
    assert (centered.tooltip.top, centered.tooltip.left) == (0, 0)


def test_pure_function_repeatable():
    args = (Rect(top=700, left=1100, width=80, height=30), "right", 1200, 800)
    assert compute_placement(*args) == compute_placement(*args)


def test_invalid_side_raises():
    with pytest.raises(ValueError):
        compute_placement(Rect(0, 0, 10, 10), "diagonal", 100, 100)


def test_optional_viewport_clamp_keeps_box_inside():
    narrow = PlacementSettings(clamp_to_viewport=True)
    # Explicit right on a narrow viewport: flip produces a box starting at -326
    res = compute_placement(Rect(top=10, left=10, width=30, height=30), "right", 360, 600, narrow)
    top, left = res.tooltip_box(320, 100)
    assert left == 20
    # Without the clamp the observed behavior pins the anchor coordinate only
    raw = compute_placement(Rect(top=10, left=10, width=30, height=30), "right", 360, 600)
    assert raw.tooltip_box(320, 100)[1] == 20 - 320


def test_custom_settings_change_constants():
    s = PlacementSettings(gap=8, estimated_height=50)
    res = compute_placement(Rect(top=100, left=50, width=200, height=40), None, 1200, 800, s)
    assert res.tooltip.top == 148
