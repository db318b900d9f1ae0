"""Tutorial configuration persistence.

Stores the runtime knobs of the onboarding engine (enable flag, desktop
breakpoint, target lookup timings) so that a deployment or a test can tune
them without editing code.

Design principles:
- Pure logic (no direct Qt import) so it can be unit-tested headless.
- Explicit schema with version field to enable future migrations.
- Graceful fallback: corrupt or incompatible files produce defaults instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
import json
from pathlib import Path
from typing import Any, Dict

from config import settings

__all__ = ["TutorialConfig", "load_config", "save_config", "CONFIG_VERSION"]

CONFIG_VERSION = 1

DEFAULT_FILENAME = "tutorial_config.json"


@dataclass(slots=True)
class TutorialConfig:
    """Serializable onboarding configuration.

    Attributes
    ----------
    version: Schema version for migration handling.
    enabled: When False no tour is ever started (all start requests ignored).
    desktop_min_width: Width (px) from which the viewport counts as desktop.
    poll_interval_ms: Interval between target element lookups.
    lookup_timeout_ms: Upper bound for target lookup before falling back to a centered layout.
    scroll_settle_ms: Delay after scrolling the target into view before measuring it.
    close_delay_ms: Delay before the overlay is hidden once a tour ended.
    """

    version: int = CONFIG_VERSION
    enabled: bool = True
    desktop_min_width: int = settings.DESKTOP_MIN_WIDTH
    poll_interval_ms: int = settings.TARGET_POLL_INTERVAL_MS
    lookup_timeout_ms: int = settings.TARGET_LOOKUP_TIMEOUT_MS
    scroll_settle_ms: int = settings.SCROLL_SETTLE_MS
    close_delay_ms: int = settings.CLOSE_DELAY_MS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TutorialConfig":
        defaults = cls()
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            enabled=bool(data.get("enabled", True)),
            desktop_min_width=int(data.get("desktop_min_width", defaults.desktop_min_width)),
            poll_interval_ms=int(data.get("poll_interval_ms", defaults.poll_interval_ms)),
            lookup_timeout_ms=int(data.get("lookup_timeout_ms", defaults.lookup_timeout_ms)),
            scroll_settle_ms=int(data.get("scroll_settle_ms", defaults.scroll_settle_ms)),
            close_delay_ms=int(data.get("close_delay_ms", defaults.close_delay_ms)),
        )

    def validate(self) -> None:
        if self.desktop_min_width <= 0:
            raise ValueError("desktop_min_width must be > 0")
        if self.poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be > 0")
        if self.lookup_timeout_ms < self.poll_interval_ms:
            raise ValueError("lookup_timeout_ms must be >= poll_interval_ms")
        if self.scroll_settle_ms < 0 or self.close_delay_ms < 0:
            raise ValueError("delays must be >= 0")


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path(settings.DATA_DIR)
    return base / DEFAULT_FILENAME


def load_config(base_dir: str | Path | None = None) -> TutorialConfig:
    """Load tutorial config from directory.

    Parameters
    ----------
    base_dir: The directory containing the config file (defaults to ``settings.DATA_DIR``).
    """
    path = _resolve_path(base_dir)
    if not path.exists():
        return TutorialConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        cfg = TutorialConfig.from_dict(data)
        if cfg.version != CONFIG_VERSION:
            return TutorialConfig()
        cfg.validate()
        return cfg
    except Exception:  # noqa: BLE001
        return TutorialConfig()


def save_config(cfg: TutorialConfig, base_dir: str | Path | None = None) -> Path:
    """Persist tutorial config to directory.

    Returns the path written for convenience.
    """
    cfg.validate()
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
