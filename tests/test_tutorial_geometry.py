"""Tests for tutorial popover geometry."""

from gui.design.onboarding_tour import Placement
from gui.design.tutorial_geometry import (
    ARROW_SIZE,
    PADDING,
    POPOVER_WIDTH,
    Rect,
    centered_layout,
    compute_popover_layout,
    fits,
    highlight_rect,
    resolve_placement,
)

VW, VH = 1280, 800
POPOVER_H = 150


def test_center_placement_skips_geometry():
    target = Rect(top=300, left=300, width=100, height=40)
    layout = compute_popover_layout(target, Placement.CENTER, POPOVER_H, VW, VH)
    assert layout.centered
    assert layout.arrow is None
    assert layout.left == VW / 2 - POPOVER_WIDTH / 2
    assert layout.top == VH / 2 - POPOVER_H / 2


def test_missing_target_falls_back_to_center():
    layout = compute_popover_layout(None, Placement.BOTTOM, POPOVER_H, VW, VH)
    assert layout.centered
    assert layout.placement is Placement.CENTER


def test_centered_layout_uses_default_height_when_unknown():
    layout = centered_layout(VW, VH, 0)
    assert layout.height == 200


def test_top_flips_to_bottom_near_viewport_top():
    # 20px from the top: no room above for the popover
    target = Rect(top=20, left=500, width=120, height=40)
    assert not fits(target, Placement.TOP, POPOVER_H, VW, VH)
    layout = compute_popover_layout(target, Placement.TOP, POPOVER_H, VW, VH)
    assert layout.placement is Placement.BOTTOM
    assert layout.top == target.bottom + PADDING
    assert layout.arrow.rotation == 0


def test_bottom_flips_to_top_near_viewport_bottom():
    target = Rect(top=VH - 60, left=500, width=120, height=40)
    assert resolve_placement(target, Placement.BOTTOM, POPOVER_H, VW, VH) is Placement.TOP


def test_left_right_flip_only_to_opposite():
    near_left = Rect(top=300, left=10, width=80, height=40)
    assert resolve_placement(near_left, Placement.LEFT, POPOVER_H, VW, VH) is Placement.RIGHT
    near_right = Rect(top=300, left=VW - 90, width=80, height=40)
    assert resolve_placement(near_right, Placement.RIGHT, POPOVER_H, VW, VH) is Placement.LEFT


def test_flip_does_not_cascade_when_opposite_also_too_small():
    # Tiny viewport: neither top nor bottom fits, flip happens exactly once
    target = Rect(top=20, left=100, width=50, height=50)
    assert resolve_placement(target, Placement.TOP, 400, 400, 300) is Placement.BOTTOM


def test_default_placement_is_bottom():
    target = Rect(top=100, left=400, width=100, height=40)
    layout = compute_popover_layout(target, None, POPOVER_H, VW, VH)
    assert layout.placement is Placement.BOTTOM


def test_top_placement_geometry_and_arrow():
    target = Rect(top=500, left=500, width=100, height=40)
    layout = compute_popover_layout(target, Placement.TOP, POPOVER_H, VW, VH)
    assert layout.placement is Placement.TOP
    assert layout.top == 500 - POPOVER_H - PADDING
    assert layout.left == target.center_x - POPOVER_WIDTH / 2
    assert layout.arrow.top == POPOVER_H - ARROW_SIZE / 2
    assert layout.arrow.rotation == 180
    # arrow points at the target center
    assert layout.arrow.left == target.center_x - layout.left - ARROW_SIZE / 2


def test_right_placement_rotation_and_arrow_edge():
    target = Rect(top=300, left=100, width=120, height=40)
    layout = compute_popover_layout(target, Placement.RIGHT, POPOVER_H, VW, VH)
    assert layout.placement is Placement.RIGHT
    assert layout.left == target.right + PADDING
    assert layout.arrow.left == -ARROW_SIZE / 2
    assert layout.arrow.rotation == -90


def test_left_placement_rotation():
    target = Rect(top=300, left=900, width=120, height=40)
    layout = compute_popover_layout(target, Placement.LEFT, POPOVER_H, VW, VH)
    assert layout.left == 900 - POPOVER_WIDTH - PADDING
    assert layout.arrow.left == POPOVER_WIDTH - ARROW_SIZE / 2
    assert layout.arrow.rotation == 90


def test_popover_clamped_to_viewport_edges():
    # Target hugging the left edge: ideal left would be negative
    target = Rect(top=100, left=0, width=20, height=20)
    layout = compute_popover_layout(target, Placement.BOTTOM, POPOVER_H, VW, VH)
    assert layout.left == PADDING
    # Target hugging the right edge
    target = Rect(top=100, left=VW - 20, width=20, height=20)
    layout = compute_popover_layout(target, Placement.BOTTOM, POPOVER_H, VW, VH)
    assert layout.left == VW - POPOVER_WIDTH - PADDING


def test_arrow_clamped_inside_popover():
    target = Rect(top=100, left=0, width=10, height=10)
    layout = compute_popover_layout(target, Placement.BOTTOM, POPOVER_H, VW, VH)
    assert layout.arrow.left == ARROW_SIZE
    target = Rect(top=100, left=VW - 10, width=10, height=10)
    layout = compute_popover_layout(target, Placement.BOTTOM, POPOVER_H, VW, VH)
    assert layout.arrow.left == POPOVER_WIDTH - ARROW_SIZE * 2


def test_side_placement_vertical_clamp():
    target = Rect(top=VH - 30, left=100, width=100, height=20)
    layout = compute_popover_layout(target, Placement.RIGHT, POPOVER_H, VW, VH)
    assert layout.top == VH - POPOVER_H - PADDING
    assert layout.arrow.top == POPOVER_H - ARROW_SIZE * 2


def test_highlight_rect_pads_target():
    hl = highlight_rect(Rect(top=100, left=50, width=200, height=40))
    assert (hl.top, hl.left, hl.width, hl.height) == (92, 42, 216, 56)
