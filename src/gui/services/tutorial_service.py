"""Tutorial step sequencer.

Owns the single active onboarding tour of the application: which feature is
running, the steps actually shown (already filtered for the viewport class)
and the current index. Progress is read from and written to the
`TutorialProgressStore`; the service never builds steps itself, pages pass
their own step lists to ``start_tutorial``.

Lifecycle rules:
 - a tour starts only for an ``unseen`` feature and only when no tour is active
 - steps are filtered once, at start (``desktop_only`` / ``mobile_only``); an
   empty result marks the feature seen without activating anything
 - finishing the last step, skipping, or the current step becoming invalid
   after a viewport class change marks the feature seen
 - "skip all" marks every feature seen in one write
 - finishing a step that declares ``next_path`` requests navigation, but only
   on desktop-class viewports

All transitions are announced on the EventBus (``tutorial_started``,
``tutorial_step_changed``, ``tutorial_ended``, ``navigation_requested``).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple
import logging

from gui.design.onboarding_tour import Feature, TutorialStep
from gui.design.responsive import ViewportClass
from .event_bus import EventBus, TutorialEvent
from .step_actions import StepActionDispatcher
from .tutorial_progress import TutorialProgress, TutorialProgressStore
from .viewport_service import ViewportService

__all__ = ["ActiveTour", "EndReason", "Navigator", "TutorialService"]

_logger = logging.getLogger(__name__)

Navigator = Callable[[str], None]


class EndReason(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    SKIPPED_ALL = "skipped_all"
    VIEWPORT_INVALIDATED = "viewport_invalidated"
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class ActiveTour:
    feature: Feature
    steps: Tuple[TutorialStep, ...]
    index: int = 0

    @property
    def step(self) -> TutorialStep:
        return self.steps[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.steps) - 1


class TutorialService:
    """Single owner of the active tour and of tutorial progress writes."""

    def __init__(
        self,
        store: TutorialProgressStore,
        viewport: ViewportService,
        *,
        bus: EventBus | None = None,
        dispatcher: StepActionDispatcher | None = None,
        navigator: Navigator | None = None,
        user_id: Optional[str] = None,
        enabled: bool = True,
    ):
        self._store = store
        self._viewport = viewport
        self._bus = bus
        self.dispatcher = dispatcher or StepActionDispatcher()
        self._navigator = navigator
        self._user_id = user_id
        self._enabled = enabled
        self._active: Optional[ActiveTour] = None
        self._current_route: Optional[str] = None
        viewport.add_listener(self._on_viewport_changed)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def progress(self) -> TutorialProgress:
        return self._store.load(self._user_id)

    @property
    def is_desktop(self) -> bool:
        return self._viewport.is_desktop

    @property
    def is_prompt_active(self) -> bool:
        return self._active is not None

    @property
    def active_feature(self) -> Optional[Feature]:
        return self._active.feature if self._active else None

    @property
    def active_steps(self) -> Tuple[TutorialStep, ...]:
        return self._active.steps if self._active else ()

    @property
    def active_index(self) -> int:
        return self._active.index if self._active else 0

    @property
    def active_step(self) -> Optional[TutorialStep]:
        return self._active.step if self._active else None

    @property
    def is_last_step(self) -> bool:
        return self._active is not None and self._active.is_last

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------
    def set_navigator(self, navigator: Navigator | None) -> None:
        self._navigator = navigator

    def set_current_route(self, route: Optional[str]) -> None:
        self._current_route = route

    def set_user(self, user_id: Optional[str], *, new_account: bool = False) -> None:
        """Switch the progress bucket to ``user_id`` (None -> guest bucket).

        ``new_account`` resets that user's progress so every tour is shown again.
        """
        if self._active is not None and user_id != self._user_id:
            self._end(EndReason.ABANDONED, mark_seen=False)
        self._user_id = user_id
        if new_account and user_id is not None:
            _logger.debug("New account %s: resetting tutorial progress", user_id)
            self._store.reset(user_id)

    def close(self) -> None:
        self._viewport.remove_listener(self._on_viewport_changed)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def start_tutorial(self, feature: Feature | str, steps: Sequence[TutorialStep]) -> bool:
        """Start the tour for ``feature``. Returns True if a tour became active."""
        feature = Feature(feature)
        if not self._enabled or self._active is not None:
            return False
        if self.progress.is_seen(feature):
            return False
        desktop = self.is_desktop
        eligible = tuple(s for s in steps if s.is_visible_on(desktop))
        if not eligible:
            _logger.debug("No eligible steps for %s on this viewport; marking seen", feature.value)
            self._store.mark_seen(self._user_id, feature)
            return False
        self._active = ActiveTour(feature=feature, steps=eligible)
        _logger.debug("Tutorial %s started with %d step(s)", feature.value, len(eligible))
        self._publish(
            TutorialEvent.TUTORIAL_STARTED, {"feature": feature.value, "total": len(eligible)}
        )
        self._enter_step()
        return True

    def next_step(self) -> None:
        active = self._active
        if active is None:
            return
        if not active.is_last:
            self._active = replace(active, index=active.index + 1)
            self._enter_step()
            return
        next_path = active.step.next_path
        self._end(EndReason.COMPLETED, mark_seen=True)
        if next_path and self.is_desktop:
            self._request_navigation(next_path)

    def end_current_tutorial(self) -> None:
        self._end(EndReason.SKIPPED, mark_seen=True)

    def end_entire_tutorial(self) -> None:
        self._store.mark_all_seen(self._user_id)
        self._end(EndReason.SKIPPED_ALL, mark_seen=False)

    def abandon(self) -> None:
        """Drop the active tour without touching progress (e.g. on logout)."""
        self._end(EndReason.ABANDONED, mark_seen=False)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _enter_step(self) -> None:
        active = self._active
        assert active is not None
        step = active.step
        self._publish(
            TutorialEvent.TUTORIAL_STEP_CHANGED,
            {
                "feature": active.feature.value,
                "index": active.index,
                "total": len(active.steps),
                "is_last": active.is_last,
                "selector": step.selector,
            },
        )
        if step.path and step.path != self._current_route:
            self._request_navigation(step.path)
        self.dispatcher.dispatch(step.action)

    def _end(self, reason: EndReason, *, mark_seen: bool) -> None:
        active = self._active
        if active is None:
            return
        self._active = None
        if mark_seen:
            self._store.mark_seen(self._user_id, active.feature)
        _logger.debug("Tutorial %s ended (%s)", active.feature.value, reason.value)
        self._publish(
            TutorialEvent.TUTORIAL_ENDED,
            {"feature": active.feature.value, "reason": reason.value, "index": active.index},
        )

    def _request_navigation(self, path: str) -> None:
        self._current_route = path
        self._publish(TutorialEvent.NAVIGATION_REQUESTED, {"path": path})
        if self._navigator is not None:
            self._navigator(path)

    def _on_viewport_changed(self, viewport_class: ViewportClass) -> None:
        step = self.active_step
        if step is None:
            return
        if not step.is_visible_on(viewport_class is ViewportClass.DESKTOP):
            self._end(EndReason.VIEWPORT_INVALIDATED, mark_seen=True)

    def _publish(self, event: TutorialEvent, payload: dict) -> None:
        if self._bus is not None:
            self._bus.publish(event, payload)
