"""Design package.

Headless building blocks of the onboarding tour: step / tour definitions,
the built-in tour catalog, responsive breakpoints and popover geometry.
"""

from .onboarding_tour import (  # noqa: F401
    Feature,
    Placement,
    ActionKind,
    StepAction,
    TutorialStep,
    TourDefinition,
    register_tour,
    get_tour,
    list_tours,
    clear_tours,
)
from .responsive import ViewportClass, classify_viewport, classify_width  # noqa: F401
from .tutorial_geometry import Rect, PopoverLayout, compute_popover_layout  # noqa: F401
