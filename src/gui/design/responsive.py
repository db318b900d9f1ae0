"""Responsive breakpoints and viewport classification.

Onboarding steps are authored against two layouts: the desktop layout with a
persistent side navigation and the compact (tablet / phone sized window)
layout where navigation collapses into a menu. Steps flagged ``desktop_only``
or ``mobile_only`` are gated on this classification, so the numeric threshold
lives here instead of being repeated across views.

Breakpoint Scale:
 - xs: < 640px           (phone sized window)
 - sm: >=640 & < 768px   (large phone / small tablet)
 - md: >=768 & < 1024px  (tablet; navigation still collapsed)
 - lg: >=1024 & < 1280px (desktop baseline; side navigation visible)
 - xl: >=1280px          (wide desktop)

Width comparisons are inclusive on lower bound, exclusive on upper bound
except the final tier. ``lg`` is the first desktop-class tier.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from config import settings

__all__ = [
    "Breakpoint",
    "ViewportClass",
    "list_breakpoints",
    "get_breakpoint",
    "classify_width",
    "classify_viewport",
    "is_desktop_width",
]


class ViewportClass(str, Enum):
    DESKTOP = "desktop"
    NON_DESKTOP = "non_desktop"


@dataclass(frozen=True)
class Breakpoint:
    """Semantic responsive breakpoint definition.

    Attributes
    ----------
    id: str
        Semantic identifier (xs|sm|md|lg|xl).
    min_width: int
        Inclusive lower pixel boundary.
    max_width: int
        Exclusive upper pixel boundary (-1 for the open-ended final tier).
    desktop: bool
        Whether widths in this tier count as desktop-class.
    """

    id: str
    min_width: int
    max_width: int
    desktop: bool = False

    def is_within(self, width: int) -> bool:
        if self.max_width == -1:
            return width >= self.min_width
        return self.min_width <= width < self.max_width


_REGISTRY: Dict[str, Breakpoint] = {}


def _register(bp: Breakpoint) -> None:
    if bp.id in _REGISTRY:
        raise ValueError(f"Duplicate breakpoint id: {bp.id}")
    _REGISTRY[bp.id] = bp


_register(Breakpoint(id="xs", min_width=0, max_width=640))
_register(Breakpoint(id="sm", min_width=640, max_width=768))
_register(Breakpoint(id="md", min_width=768, max_width=settings.DESKTOP_MIN_WIDTH))
_register(Breakpoint(id="lg", min_width=settings.DESKTOP_MIN_WIDTH, max_width=1280, desktop=True))
_register(Breakpoint(id="xl", min_width=1280, max_width=-1, desktop=True))


def list_breakpoints() -> List[Breakpoint]:
    return sorted(_REGISTRY.values(), key=lambda b: b.min_width)


def get_breakpoint(bp_id: str) -> Breakpoint:
    bp = _REGISTRY.get(bp_id)
    if bp is None:
        raise KeyError(f"Unknown breakpoint id: {bp_id}")
    return bp


def classify_width(width: int) -> Breakpoint:
    """Return the Breakpoint matching the given width (pixels)."""
    if width < 0:
        raise ValueError("Width must be non-negative")
    for bp in list_breakpoints():
        if bp.is_within(width):
            return bp
    return get_breakpoint("xl")


def classify_viewport(width: int, threshold: int | None = None) -> ViewportClass:
    """Map a viewport width to desktop / non-desktop.

    ``threshold`` overrides the configured desktop boundary (tests and the
    tutorial config use this); without it the breakpoint table decides.
    """
    if width < 0:
        raise ValueError("Width must be non-negative")
    if threshold is not None:
        return ViewportClass.DESKTOP if width >= threshold else ViewportClass.NON_DESKTOP
    return ViewportClass.DESKTOP if classify_width(width).desktop else ViewportClass.NON_DESKTOP


def is_desktop_width(width: int, threshold: int | None = None) -> bool:
    return classify_viewport(width, threshold) is ViewportClass.DESKTOP
