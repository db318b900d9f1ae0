"""Tutorial progress persistence.

Persists, per user identity, which onboarding tours have been seen. Each
identity gets its own bucket file (``studysync-tutorial-<user>.json``); before
authentication the shared ``guest`` bucket is used.

Reads go through an in-memory cache. Writers publish
``TutorialEvent.TUTORIAL_PROGRESS_CHANGED`` on the EventBus; a change made by
another writer (e.g. a second window sharing the data directory) is announced
with ``notify_external_change`` which drops the cache entry so the next read
hits the file again. There is no polling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
import json
import logging
import os

from config import settings
from gui.design.onboarding_tour import Feature
from .event_bus import EventBus, TutorialEvent

__all__ = [
    "ProgressState",
    "TutorialProgress",
    "TutorialProgressStore",
    "bucket_name",
]

PROGRESS_VERSION = 1

_logger = logging.getLogger(__name__)


class ProgressState(str, Enum):
    UNSEEN = "unseen"
    SEEN = "seen"


def _all(state: ProgressState) -> Dict[Feature, ProgressState]:
    return {f: state for f in Feature}


@dataclass(frozen=True)
class TutorialProgress:
    states: Dict[Feature, ProgressState] = field(
        default_factory=lambda: _all(ProgressState.UNSEEN)
    )
    version: int = PROGRESS_VERSION

    @classmethod
    def initial(cls) -> "TutorialProgress":
        return cls()

    @classmethod
    def all_seen(cls) -> "TutorialProgress":
        return cls(states=_all(ProgressState.SEEN))

    def state(self, feature: Feature | str) -> ProgressState:
        return self.states.get(Feature(feature), ProgressState.UNSEEN)

    def is_seen(self, feature: Feature | str) -> bool:
        return self.state(feature) is ProgressState.SEEN

    def with_seen(self, feature: Feature | str) -> "TutorialProgress":
        states = dict(self.states)
        states[Feature(feature)] = ProgressState.SEEN
        return TutorialProgress(states=states)

    def as_dict(self) -> Dict[str, str]:
        return {f.value: self.state(f).value for f in Feature}

    def to_json(self) -> Dict[str, Any]:
        return {"version": self.version, "features": self.as_dict()}

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "TutorialProgress":
        if obj.get("version") != PROGRESS_VERSION:
            raise ValueError("version mismatch")
        states = _all(ProgressState.UNSEEN)
        for name, value in (obj.get("features") or {}).items():
            try:
                states[Feature(name)] = ProgressState(value)
            except ValueError:
                # Unknown feature or state from a newer build; ignore
                continue
        return cls(states=states)


def bucket_name(user_id: Optional[str]) -> str:
    return f"{settings.PROGRESS_KEY_PREFIX}{user_id or settings.GUEST_BUCKET}"


class TutorialProgressStore:
    def __init__(self, base_dir: str, bus: EventBus | None = None):
        self.base_dir = base_dir
        self._bus = bus
        self._cache: Dict[str, TutorialProgress] = {}
        os.makedirs(self.base_dir, exist_ok=True)

    def _path(self, bucket: str) -> str:
        return os.path.join(self.base_dir, f"{bucket}.json")

    # Reads ------------------------------------------------------------
    def load(self, user_id: Optional[str] = None) -> TutorialProgress:
        bucket = bucket_name(user_id)
        cached = self._cache.get(bucket)
        if cached is not None:
            return cached
        progress = self._read(bucket)
        self._cache[bucket] = progress
        return progress

    def _read(self, bucket: str) -> TutorialProgress:
        path = self._path(bucket)
        if not os.path.exists(path):
            return TutorialProgress.initial()
        try:
            with open(path, "r", encoding="utf-8") as f:
                return TutorialProgress.from_json(json.load(f))
        except Exception:
            _logger.warning("Corrupt tutorial progress file %s; starting fresh", path)
            try:
                stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
                os.replace(path, f"{path}.corrupt.{stamp}")
            except OSError:  # pragma: no cover
                pass
            return TutorialProgress.initial()

    # Writes -----------------------------------------------------------
    def save(self, user_id: Optional[str], progress: TutorialProgress) -> bool:
        bucket = bucket_name(user_id)
        path = self._path(bucket)
        tmp = path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(progress.to_json(), f, indent=2)
            os.replace(tmp, path)
        except OSError:
            _logger.exception("Failed to persist tutorial progress %s", path)
            return False
        self._cache[bucket] = progress
        self._publish(bucket, user_id, progress, origin="local")
        return True

    def mark_seen(self, user_id: Optional[str], feature: Feature | str) -> TutorialProgress:
        current = self.load(user_id)
        if current.is_seen(feature):
            return current
        return self._commit(user_id, current.with_seen(feature))

    def mark_all_seen(self, user_id: Optional[str]) -> TutorialProgress:
        return self._commit(user_id, TutorialProgress.all_seen())

    def reset(self, user_id: Optional[str]) -> TutorialProgress:
        return self._commit(user_id, TutorialProgress.initial())

    def _commit(self, user_id: Optional[str], progress: TutorialProgress) -> TutorialProgress:
        """Save ``progress``; returns what is actually stored for ``user_id``."""
        if self.save(user_id, progress):
            return progress
        return self.load(user_id)

    # Change notification ---------------------------------------------
    def invalidate(self, user_id: Optional[str] = None) -> None:
        self._cache.pop(bucket_name(user_id), None)

    def notify_external_change(self, user_id: Optional[str] = None) -> TutorialProgress:
        """Another writer changed the bucket: drop the cache and re-announce."""
        self.invalidate(user_id)
        progress = self.load(user_id)
        self._publish(bucket_name(user_id), user_id, progress, origin="external")
        return progress

    def _publish(
        self, bucket: str, user_id: Optional[str], progress: TutorialProgress, *, origin: str
    ) -> None:
        if self._bus is None:
            return
        self._bus.publish(
            TutorialEvent.TUTORIAL_PROGRESS_CHANGED,
            {
                "bucket": bucket,
                "user_id": user_id,
                "progress": progress.as_dict(),
                "origin": origin,
            },
        )
