"""Application bootstrap for the StudySync onboarding engine.

Responsibilities:
 - Optional QApplication creation (headless mode for tests)
 - Loading the tutorial configuration
 - Constructing the EventBus, progress store, viewport service and tutorial
   service explicitly and registering them in the service locator
 - Registering the built-in tours

Each call produces fresh service instances (registered with override) so
tests get isolated state. There is no teardown beyond process exit; call
``AppContext.tutorial.close()`` if a context is discarded early.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import os
import sys
import time
from typing import Any, Optional

from PyQt6.QtWidgets import QApplication

from config import settings
from gui.app.config_store import TutorialConfig, load_config
from gui.design.tour_catalog import register_default_tours
from gui.services.event_bus import EventBus
from gui.services.service_locator import ServiceLocator, services
from gui.services.step_actions import StepActionDispatcher
from gui.services.tutorial_progress import TutorialProgressStore
from gui.services.tutorial_service import Navigator, TutorialService
from gui.services.viewport_service import ViewportService

__all__ = ["AppContext", "create_app"]

_logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Container with references created during bootstrap.

    Attributes
    ----------
    qt_app: The QApplication instance (None if headless)
    headless: Whether headless bootstrap was used
    data_dir: Directory holding config and progress files
    config: Loaded tutorial configuration
    services: Global service locator (post-initialization state)
    duration_s: Total elapsed seconds for bootstrap
    """

    qt_app: Optional[Any]
    headless: bool
    data_dir: str
    config: TutorialConfig
    services: ServiceLocator
    bus: EventBus
    progress_store: TutorialProgressStore
    viewport: ViewportService
    tutorial: TutorialService
    duration_s: float
    metadata: dict[str, Any] = field(default_factory=dict)


def create_app(
    *,
    headless: bool = False,
    data_dir: str | None = None,
    user_id: str | None = None,
    new_account: bool = False,
    navigator: Navigator | None = None,
    viewport_width: int = 0,
) -> AppContext:
    """Create and initialize the onboarding application context.

    Parameters
    ----------
    headless: Skip QApplication creation (unit tests, tooling).
    data_dir: Directory for config / progress files (defaults to ``settings.DATA_DIR``).
    user_id: Authenticated user identity; None selects the guest bucket.
    new_account: The session belongs to a freshly created account (progress reset).
    navigator: Router callback receiving paths requested by finished tours.
    viewport_width: Initial viewport width until a window is observed.
    """
    started = time.perf_counter()
    data_dir = data_dir or settings.DATA_DIR
    os.makedirs(data_dir, exist_ok=True)

    qt_app = None
    if not headless:
        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    config = load_config(data_dir)
    bus = EventBus()
    store = TutorialProgressStore(data_dir, bus=bus)
    viewport = ViewportService(viewport_width, threshold=config.desktop_min_width, bus=bus)
    dispatcher = StepActionDispatcher()
    tutorial = TutorialService(
        store,
        viewport,
        bus=bus,
        dispatcher=dispatcher,
        navigator=navigator,
        enabled=config.enabled,
    )
    tutorial.set_user(user_id, new_account=new_account)
    register_default_tours()

    for name, value in [
        ("event_bus", bus),
        ("tutorial_config", config),
        ("tutorial_progress_store", store),
        ("viewport_service", viewport),
        ("step_actions", dispatcher),
        ("tutorial_service", tutorial),
    ]:
        services.register(name, value, allow_override=True)

    duration = time.perf_counter() - started
    _logger.debug("Onboarding bootstrap finished in %.1f ms", duration * 1000.0)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        data_dir=data_dir,
        config=config,
        services=services,
        bus=bus,
        progress_store=store,
        viewport=viewport,
        tutorial=tutorial,
        duration_s=duration,
        metadata={"user_id": user_id, "new_account": new_account},
    )
