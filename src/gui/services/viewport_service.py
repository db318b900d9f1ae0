"""Viewport classification service.

Tracks the width of the main window and classifies it as desktop or
non-desktop (see `gui.design.responsive`). Consumers are notified only when
the class flips, never on every resize:

 - listeners registered with ``add_listener`` are called with the new class
 - ``TutorialEvent.VIEWPORT_CLASS_CHANGED`` is published on the EventBus with
   payload ``{"width": int, "viewport_class": str, "desktop": bool}``

``observe(window)`` installs a resize event filter so the service follows a
real top-level widget; tests drive it through ``update_width``.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from PyQt6.QtCore import QEvent, QObject

from gui.design.responsive import ViewportClass, classify_viewport
from .event_bus import EventBus, TutorialEvent

__all__ = ["ViewportService", "ViewportListener"]

ViewportListener = Callable[[ViewportClass], None]


class _ResizeFilter(QObject):
    def __init__(self, parent: QObject, service: "ViewportService"):
        super().__init__(parent)
        self._service = service

    def eventFilter(self, watched, event):  # type: ignore[override]
        if event.type() == QEvent.Type.Resize:
            self._service.update_width(watched.width())
        return False


class ViewportService:
    def __init__(
        self,
        width: int = 0,
        *,
        threshold: int | None = None,
        bus: EventBus | None = None,
    ):
        self._threshold = threshold
        self._bus = bus
        self._width = max(0, width)
        self._class = classify_viewport(self._width, threshold)
        self._listeners: List[ViewportListener] = []
        self._filter: Optional[_ResizeFilter] = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def viewport_class(self) -> ViewportClass:
        return self._class

    @property
    def is_desktop(self) -> bool:
        return self._class is ViewportClass.DESKTOP

    def add_listener(self, listener: ViewportListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ViewportListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update_width(self, width: int) -> bool:
        """Record a new viewport width. Returns True if the class changed."""
        self._width = max(0, int(width))
        new_class = classify_viewport(self._width, self._threshold)
        if new_class is self._class:
            return False
        self._class = new_class
        for listener in list(self._listeners):
            listener(new_class)
        if self._bus is not None:
            self._bus.publish(
                TutorialEvent.VIEWPORT_CLASS_CHANGED,
                {
                    "width": self._width,
                    "viewport_class": new_class.value,
                    "desktop": self.is_desktop,
                },
            )
        return True

    # Qt glue ------------------------------------------------------------
    def observe(self, window: QObject) -> None:
        if self._filter is not None:
            return
        self._filter = _ResizeFilter(window, self)
        window.installEventFilter(self._filter)
        self.update_width(window.width())  # type: ignore[attr-defined]
