"""StudySync onboarding GUI public API.

Curated, intentionally small surface for external callers (launcher, host
pages, tests):

- service locator and event bus infrastructure
- `create_app` bootstrap
- design namespace (`from gui import design`) for step / tour definitions
"""

from __future__ import annotations

from .services.service_locator import (  # noqa: F401
    services,
    ServiceLocator,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
)
from .services.event_bus import EventBus, TutorialEvent, Event  # noqa: F401
from . import design  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "ServiceAlreadyRegisteredError",
    "ServiceNotFoundError",
    "EventBus",
    "TutorialEvent",
    "Event",
    "design",
]
