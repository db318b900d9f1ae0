"""GUI components package.

Qt widgets rendering the onboarding tour: the positioner that turns the active
step into popover geometry and the overlay that draws it.
"""

from __future__ import annotations

from .tutorial_positioner import TutorialPositioner, find_target  # noqa: F401
from .tutorial_overlay import TutorialOverlay  # noqa: F401

__all__ = ["TutorialPositioner", "TutorialOverlay", "find_target"]
