"""Global configuration and constants for the onboarding engine."""

from __future__ import annotations

import os
from typing import Final

APP_NAME: Final = "StudySync"
DATA_DIR: Final = os.environ.get("STUDYSYNC_DATA_DIR", "data")

# Viewport widths at or above this value are treated as desktop-class
DESKTOP_MIN_WIDTH: Final = 1024

# Target lookup / scroll timings (milliseconds)
TARGET_POLL_INTERVAL_MS: Final = 100
TARGET_LOOKUP_TIMEOUT_MS: Final = 3000
SCROLL_SETTLE_MS: Final = 350
CLOSE_DELAY_MS: Final = 500

# Progress bucket naming
PROGRESS_KEY_PREFIX: Final = "studysync-tutorial-"
GUEST_BUCKET: Final = "guest"
