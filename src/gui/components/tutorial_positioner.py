"""Tutorial positioner.

Qt driver for the popover geometry of the active tutorial step:

1. centered steps (``placement == center``, no selector, welcome modals) get a
   centered layout immediately;
2. otherwise the target widget is looked up by selector (``#objectName``)
   every ``poll_interval_ms`` until found or ``lookup_timeout_ms`` elapsed;
   on timeout a warning is logged, ``tutorial_target_missing`` is published
   and the centered layout is used;
3. a found target is scrolled into the middle of the scroll container, and
   after ``scroll_settle_ms`` its box is measured and the layout computed
   with `gui.design.tutorial_geometry`;
4. from then on the layout is recomputed on window resize, on scroll of the
   container and when the popover height changes.

Every timer is owned by the positioner and stopped on step change, on
``cancel`` and on ``close``; a lookup for a previous step can never emit a
layout for the current one.

Tests drive the timers deterministically through ``poll_now`` / ``settle_now``.
"""

from __future__ import annotations

from typing import Callable, Optional
import logging

from PyQt6.QtCore import QEvent, QObject, QPoint, QTimer, pyqtSignal
from PyQt6.QtWidgets import QScrollArea, QWidget

from config import settings
from gui.design.onboarding_tour import TutorialStep
from gui.design.tutorial_geometry import (
    DEFAULT_POPOVER_HEIGHT,
    PopoverLayout,
    Rect,
    compute_popover_layout,
)
from gui.services.event_bus import EventBus, TutorialEvent
from gui.services.target_lookup import LookupStatus, TargetLookup

__all__ = ["TutorialPositioner", "find_target"]

_logger = logging.getLogger(__name__)


def find_target(root: QWidget, selector: Optional[str]) -> Optional[QWidget]:
    """Resolve ``#objectName`` (or a bare object name) to a visible widget under ``root``."""
    if not selector:
        return None
    name = selector[1:] if selector.startswith("#") else selector
    candidates = [root] if root.objectName() == name else []
    candidates += root.findChildren(QWidget, name)
    return next((w for w in candidates if w.isVisible()), None)


class TutorialPositioner(QObject):
    """Computes popover layouts for the active step of a host window."""

    layoutChanged = pyqtSignal(object)  # PopoverLayout

    def __init__(
        self,
        window: QWidget,
        *,
        scroll_area: QScrollArea | None = None,
        poll_interval_ms: int = settings.TARGET_POLL_INTERVAL_MS,
        lookup_timeout_ms: int = settings.TARGET_LOOKUP_TIMEOUT_MS,
        scroll_settle_ms: int = settings.SCROLL_SETTLE_MS,
        clock: Callable[[], float] | None = None,
        bus: EventBus | None = None,
    ):
        super().__init__(window)
        self._window = window
        self._scroll_area = scroll_area
        self._lookup_timeout_ms = lookup_timeout_ms
        self._scroll_settle_ms = scroll_settle_ms
        self._clock = clock
        self._bus = bus
        self._step: Optional[TutorialStep] = None
        self._lookup: Optional[TargetLookup] = None
        self._target: Optional[QWidget] = None
        self._tracking = False
        self._popover_height: float = DEFAULT_POPOVER_HEIGHT
        self._layout: Optional[PopoverLayout] = None

        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(poll_interval_ms)
        self._poll_timer.timeout.connect(self.poll_now)  # type: ignore[attr-defined]
        self._settle_timer = QTimer(self)
        self._settle_timer.setSingleShot(True)
        self._settle_timer.timeout.connect(self._on_settled)  # type: ignore[attr-defined]

        window.installEventFilter(self)
        if scroll_area is not None:
            scroll_area.verticalScrollBar().valueChanged.connect(self._on_scrolled)
            scroll_area.horizontalScrollBar().valueChanged.connect(self._on_scrolled)

    # Introspection -------------------------------------------------------
    @property
    def current_layout(self) -> Optional[PopoverLayout]:
        return self._layout

    @property
    def target(self) -> Optional[QWidget]:
        return self._target

    @property
    def lookup_status(self) -> LookupStatus:
        return self._lookup.status if self._lookup else LookupStatus.IDLE

    def is_polling(self) -> bool:
        return self._poll_timer.isActive()

    def is_settling(self) -> bool:
        return self._settle_timer.isActive()

    # Control -------------------------------------------------------------
    def show_step(self, step: Optional[TutorialStep]) -> None:
        self.cancel()
        self._step = step
        self._layout = None
        if step is None:
            return
        if step.is_centered or step.is_welcome:
            self._tracking = True
            self.update_position()
            return
        self._lookup = TargetLookup(self._lookup_timeout_ms, self._clock)
        self._lookup.begin()
        if self.poll_now() is LookupStatus.PENDING:
            self._poll_timer.start()

    def set_popover_height(self, height: float) -> None:
        if height <= 0 or height == self._popover_height:
            return
        self._popover_height = height
        if self._tracking:
            self.update_position()

    def poll_now(self) -> LookupStatus:
        """Run one target lookup attempt for the current step."""
        if self._step is None or self._lookup is None:
            return LookupStatus.IDLE
        if self._lookup.status is not LookupStatus.PENDING:
            return self._lookup.status
        widget = find_target(self._window, self._step.selector)
        status = self._lookup.check(widget is not None)
        if status is LookupStatus.FOUND:
            self._poll_timer.stop()
            self._on_found(widget)  # type: ignore[arg-type]
        elif status is LookupStatus.TIMED_OUT:
            self._poll_timer.stop()
            self._on_timed_out()
        return status

    def settle_now(self) -> None:
        """Skip the remaining scroll-settle delay."""
        if self._settle_timer.isActive():
            self._settle_timer.stop()
            self._on_settled()

    def cancel(self) -> None:
        self._poll_timer.stop()
        self._settle_timer.stop()
        if self._lookup is not None:
            self._lookup.cancel()
        self._tracking = False
        self._target = None

    def close(self) -> None:
        self.cancel()
        self._step = None
        self._window.removeEventFilter(self)

    # Geometry ------------------------------------------------------------
    def target_box(self) -> Optional[Rect]:
        """Measure the current step's target, resolved again by selector on every call."""
        if self._step is None or self.lookup_status is not LookupStatus.FOUND:
            return None
        target = find_target(self._window, self._step.selector)
        self._target = target
        if target is None:
            return None
        origin = target.mapTo(self._window, QPoint(0, 0))
        return Rect(top=origin.y(), left=origin.x(), width=target.width(), height=target.height())

    def update_position(self) -> Optional[PopoverLayout]:
        step = self._step
        if step is None:
            return None
        box = None if (step.is_centered or step.is_welcome) else self.target_box()
        layout = compute_popover_layout(
            box,
            step.placement,
            self._popover_height,
            self._window.width(),
            self._window.height(),
        )
        self._layout = layout
        self.layoutChanged.emit(layout)
        return layout

    # Internal ------------------------------------------------------------
    def _on_found(self, widget: QWidget) -> None:
        self._target = widget
        if self._scroll_area is not None:
            viewport = self._scroll_area.viewport()
            xmargin = max(0, (viewport.width() - widget.width()) // 2)
            ymargin = max(0, (viewport.height() - widget.height()) // 2)
            self._scroll_area.ensureWidgetVisible(widget, xmargin, ymargin)
        if self._scroll_settle_ms > 0:
            self._settle_timer.start(self._scroll_settle_ms)
        else:
            self._on_settled()

    def _on_settled(self) -> None:
        self._tracking = True
        self.update_position()

    def _on_timed_out(self) -> None:
        selector = self._step.selector if self._step else None
        _logger.warning("Tutorial target element not found: %s", selector)
        if self._bus is not None:
            self._bus.publish(
                TutorialEvent.TUTORIAL_TARGET_MISSING,
                {"selector": selector, "timeout_ms": self._lookup_timeout_ms},
            )
        self._target = None
        self._tracking = True
        self.update_position()

    def _on_scrolled(self, _value: int) -> None:
        if self._tracking:
            self.update_position()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: D401
        if obj is self._window and event.type() == QEvent.Type.Resize and self._tracking:
            self.update_position()
        return super().eventFilter(obj, event)
