"""EventBus core.

Synchronous publish/subscribe mechanism used as the change-notification
boundary of the onboarding engine: the progress store announces writes, the
viewport service announces class changes and the tutorial service announces
lifecycle transitions and navigation requests.

Goals:
 - Decouple producers and consumers (no Qt dependency)
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions and unsubscribe handles
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "TutorialEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class TutorialEvent(str, Enum):
    TUTORIAL_STARTED = "tutorial_started"
    TUTORIAL_STEP_CHANGED = "tutorial_step_changed"
    TUTORIAL_ENDED = "tutorial_ended"
    TUTORIAL_PROGRESS_CHANGED = "tutorial_progress_changed"
    TUTORIAL_TARGET_MISSING = "tutorial_target_missing"
    VIEWPORT_CLASS_CHANGED = "viewport_class_changed"
    NAVIGATION_REQUESTED = "navigation_requested"


@dataclass
class Event:
    name: str  # matches TutorialEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | TutorialEvent) -> str:
    return name.value if isinstance(name, TutorialEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked while the lock is NOT held (copy-first strategy) so
    handlers can publish, subscribe or unsubscribe recursively. Handler
    exceptions are recorded in ``errors`` instead of propagating.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | TutorialEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = _key(name)
        sub = Subscription(event=key, handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | TutorialEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - capture any handler failure
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    sub.active = False
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | TutorialEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
