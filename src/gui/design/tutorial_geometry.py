"""Tutorial popover geometry.

Pure functions computing where the tutorial popover and its arrow go for a
given target rectangle, popover height and viewport size. No Qt dependency;
the Qt positioner feeds measured values in and applies the result.

Behavior:
 - ``center`` placement or a missing target -> centered layout, arrow hidden.
 - Declared placement flips to its single opposite when it does not fit
   (top<->bottom, left<->right; no diagonal fallback).
 - The popover is clamped so it never crosses the viewport edges (``PADDING``).
 - The arrow points at the target center, clamped inside the popover.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .onboarding_tour import Placement

__all__ = [
    "PADDING",
    "ARROW_SIZE",
    "POPOVER_WIDTH",
    "HIGHLIGHT_PADDING",
    "DEFAULT_POPOVER_HEIGHT",
    "ARROW_ROTATION",
    "Rect",
    "ArrowLayout",
    "PopoverLayout",
    "fits",
    "resolve_placement",
    "centered_layout",
    "compute_popover_layout",
    "highlight_rect",
]

PADDING = 16
ARROW_SIZE = 12
POPOVER_WIDTH = 288
HIGHLIGHT_PADDING = 8
DEFAULT_POPOVER_HEIGHT = 200

ARROW_ROTATION: Dict[Placement, int] = {
    Placement.BOTTOM: 0,
    Placement.LEFT: 90,
    Placement.TOP: 180,
    Placement.RIGHT: -90,
}


@dataclass(frozen=True)
class Rect:
    top: float
    left: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2


@dataclass(frozen=True)
class ArrowLayout:
    top: float
    left: float
    rotation: int


@dataclass(frozen=True)
class PopoverLayout:
    """Result of a positioning pass.

    ``target`` is None for centered layouts; ``arrow`` is None whenever the
    arrow should be hidden.
    """

    top: float
    left: float
    width: float
    height: float
    placement: Placement
    target: Optional[Rect] = None
    arrow: Optional[ArrowLayout] = None

    @property
    def centered(self) -> bool:
        return self.target is None


def fits(
    target: Rect,
    placement: Placement,
    popover_height: float,
    viewport_width: float,
    viewport_height: float,
    popover_width: float = POPOVER_WIDTH,
) -> bool:
    """Return True if the popover fits on ``placement`` side of ``target``."""
    if placement is Placement.TOP:
        return target.top - popover_height - PADDING > 0
    if placement is Placement.BOTTOM:
        return target.bottom + popover_height + PADDING < viewport_height
    if placement is Placement.LEFT:
        return target.left - popover_width - PADDING > 0
    if placement is Placement.RIGHT:
        return target.right + popover_width + PADDING < viewport_width
    return True


def resolve_placement(
    target: Rect,
    desired: Placement | None,
    popover_height: float,
    viewport_width: float,
    viewport_height: float,
    popover_width: float = POPOVER_WIDTH,
) -> Placement:
    placement = desired or Placement.BOTTOM
    if placement is Placement.CENTER:
        return placement
    if fits(target, placement, popover_height, viewport_width, viewport_height, popover_width):
        return placement
    # Flip once; the opposite side is used even if it does not fit either
    return placement.opposite


def centered_layout(
    viewport_width: float,
    viewport_height: float,
    popover_height: float | None = None,
    popover_width: float = POPOVER_WIDTH,
) -> PopoverLayout:
    height = popover_height or DEFAULT_POPOVER_HEIGHT
    return PopoverLayout(
        top=viewport_height / 2 - height / 2,
        left=viewport_width / 2 - popover_width / 2,
        width=popover_width,
        height=height,
        placement=Placement.CENTER,
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def compute_popover_layout(
    target: Rect | None,
    desired: Placement | None,
    popover_height: float,
    viewport_width: float,
    viewport_height: float,
    popover_width: float = POPOVER_WIDTH,
) -> PopoverLayout:
    """Compute popover + arrow placement for ``target``.

    Parameters
    ----------
    target: Rect | None
        Target box in viewport coordinates; None produces a centered layout.
    desired: Placement | None
        Side requested by the step (defaults to bottom).
    popover_height: float
        Measured height of the popover after layout.
    """
    if target is None or desired is Placement.CENTER:
        return centered_layout(viewport_width, viewport_height, popover_height, popover_width)

    placement = resolve_placement(
        target, desired, popover_height, viewport_width, viewport_height, popover_width
    )
    h = popover_height
    w = popover_width
    arrow_top = 0.0
    arrow_left = 0.0
    if placement is Placement.TOP:
        top = target.top - h - PADDING
        left = target.center_x - w / 2
        arrow_top = h - ARROW_SIZE / 2
    elif placement is Placement.LEFT:
        top = target.center_y - h / 2
        left = target.left - w - PADDING
        arrow_left = w - ARROW_SIZE / 2
    elif placement is Placement.RIGHT:
        top = target.center_y - h / 2
        left = target.right + PADDING
        arrow_left = -ARROW_SIZE / 2
    else:
        top = target.bottom + PADDING
        left = target.center_x - w / 2
        arrow_top = -ARROW_SIZE / 2

    # Clamp into the viewport; the far edge wins when the viewport is too small
    if left < PADDING:
        left = PADDING
    if left + w > viewport_width - PADDING:
        left = viewport_width - w - PADDING
    if top < PADDING:
        top = PADDING
    if top + h > viewport_height - PADDING:
        top = viewport_height - h - PADDING

    if placement in (Placement.TOP, Placement.BOTTOM):
        arrow_left = _clamp(target.center_x - left - ARROW_SIZE / 2, ARROW_SIZE, w - ARROW_SIZE * 2)
    else:
        arrow_top = _clamp(target.center_y - top - ARROW_SIZE / 2, ARROW_SIZE, h - ARROW_SIZE * 2)

    return PopoverLayout(
        top=top,
        left=left,
        width=w,
        height=h,
        placement=placement,
        target=target,
        arrow=ArrowLayout(top=arrow_top, left=arrow_left, rotation=ARROW_ROTATION[placement]),
    )


def highlight_rect(target: Rect, padding: float = HIGHLIGHT_PADDING) -> Rect:
    """Spotlight rectangle drawn around the target."""
    return Rect(
        top=target.top - padding,
        left=target.left - padding,
        width=target.width + padding * 2,
        height=target.height + padding * 2,
    )
