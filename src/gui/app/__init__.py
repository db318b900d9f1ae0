"""Application layer: bootstrap and configuration persistence."""

from .bootstrap import create_app, AppContext  # noqa: F401
from .config_store import (  # noqa: F401
    TutorialConfig,
    load_config,
    save_config,
    CONFIG_VERSION,
)

__all__ = [
    "create_app",
    "AppContext",
    "TutorialConfig",
    "load_config",
    "save_config",
    "CONFIG_VERSION",
]
