"""Service layer exports.

Responsibilities:
 - Dependency/service locator (`services`)
 - EventBus publish/subscribe core
 - Tutorial progress persistence, viewport classification and the tutorial
   step sequencer
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, TutorialEvent  # noqa: F401

__all__ = [
    "services",
    "ServiceLocator",
    "EventBus",
    "TutorialEvent",
]
