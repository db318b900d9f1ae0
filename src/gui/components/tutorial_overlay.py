"""Tutorial overlay presentation layer.

`TutorialOverlay` is a child widget covering the host window while a tour is
active. It renders what the `TutorialService` and the `TutorialPositioner`
decided; it holds no tour state of its own.

 - anchored steps: window dimmed except for a rounded spotlight around the
   target, popover card with an arrow pointing at the target
 - centered steps / missing target: whole window dimmed, popover centered
 - welcome steps: centered modal card with "Skip Tour" / "Let's Go!"

"Skip Tour" ends the entire tutorial, "Next" / "Finish" advances. After a
tour ends the overlay stays up for ``close_delay_ms`` (exit animation slot)
before hiding itself.

Usage:
    overlay = TutorialOverlay(window, tutorial_service, positioner, bus=bus)
"""

from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import QEvent, QObject, QPointF, QRectF, Qt, QTimer
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPolygonF
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from config import settings
from gui.design.tutorial_geometry import (
    ARROW_SIZE,
    POPOVER_WIDTH,
    PopoverLayout,
    Rect,
    highlight_rect,
)
from gui.services.event_bus import Event, EventBus, Subscription, TutorialEvent
from gui.services.tutorial_service import TutorialService
from .tutorial_positioner import TutorialPositioner

__all__ = ["TutorialOverlay"]

DIM_COLOR = QColor(0, 0, 0, 153)
HIGHLIGHT_RADIUS = 12.0


class _Arrow(QWidget):
    """Small triangle pointing up; rotated according to the popover side."""

    def __init__(self, parent: QWidget):
        super().__init__(parent)
        self.setObjectName("tutorialArrow")
        self.setFixedSize(ARROW_SIZE, ARROW_SIZE)
        self.rotation = 0

    def paintEvent(self, event):  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        half = ARROW_SIZE / 2
        painter.translate(half, half)
        painter.rotate(self.rotation)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(30, 30, 32, 235))
        painter.drawPolygon(
            QPolygonF([QPointF(0, -half), QPointF(-half, half), QPointF(half, half)])
        )
        painter.end()


def _card(parent: QWidget, name: str) -> tuple[QFrame, QLabel, QLabel, QPushButton, QPushButton]:
    card = QFrame(parent)
    card.setObjectName(name)
    card.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
    layout = QVBoxLayout(card)
    layout.setContentsMargins(16, 16, 16, 16)
    layout.setSpacing(8)
    title = QLabel(card)
    title.setObjectName(f"{name}Title")
    title.setWordWrap(True)
    content = QLabel(card)
    content.setObjectName(f"{name}Content")
    content.setWordWrap(True)
    buttons = QHBoxLayout()
    skip = QPushButton("Skip Tour", card)
    skip.setObjectName(f"{name}Skip")
    advance = QPushButton("Next", card)
    advance.setObjectName(f"{name}Next")
    buttons.addWidget(skip)
    buttons.addStretch(1)
    buttons.addWidget(advance)
    layout.addWidget(title)
    layout.addWidget(content)
    layout.addLayout(buttons)
    return card, title, content, skip, advance


class TutorialOverlay(QWidget):
    def __init__(
        self,
        window: QWidget,
        service: TutorialService,
        positioner: TutorialPositioner,
        *,
        bus: EventBus,
        close_delay_ms: int = settings.CLOSE_DELAY_MS,
    ):
        super().__init__(window)
        self.setObjectName("tutorialOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self._window = window
        self._service = service
        self._positioner = positioner
        self._bus = bus
        self._highlight: Optional[Rect] = None

        self._popover, self._title, self._content, skip, self._next = _card(
            self, "tutorialPopover"
        )
        self._popover.setFixedWidth(POPOVER_WIDTH)
        self._arrow = _Arrow(self._popover)
        self._arrow.hide()
        self._modal, self._modal_title, self._modal_content, modal_skip, modal_go = _card(
            self, "tutorialWelcome"
        )
        modal_go.setText("Let's Go!")
        self._modal.setMaximumWidth(512)

        for btn in (skip, modal_skip):
            btn.clicked.connect(self._service.end_entire_tutorial)  # type: ignore[attr-defined]
        for btn in (self._next, modal_go):
            btn.clicked.connect(self._service.next_step)  # type: ignore[attr-defined]

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.setInterval(close_delay_ms)
        self._hide_timer.timeout.connect(self._finish_close)  # type: ignore[attr-defined]

        positioner.layoutChanged.connect(self._apply_layout)
        window.installEventFilter(self)
        self._subs: List[Subscription] = [
            bus.subscribe(TutorialEvent.TUTORIAL_STEP_CHANGED, self._on_step_changed),
            bus.subscribe(TutorialEvent.TUTORIAL_ENDED, self._on_ended),
        ]
        self.hide()

    # Introspection -------------------------------------------------------
    @property
    def highlight(self) -> Optional[Rect]:
        return self._highlight

    def popover(self) -> QFrame:
        return self._popover

    def welcome_card(self) -> QFrame:
        return self._modal

    def next_button_text(self) -> str:
        return self._next.text()

    def is_closing(self) -> bool:
        return self._hide_timer.isActive()

    # Rendering -----------------------------------------------------------
    def refresh(self) -> None:
        step = self._service.active_step
        if step is None:
            self._begin_close()
            return
        self._hide_timer.stop()
        self.setGeometry(self._window.rect())
        self.show()
        self.raise_()
        if step.is_welcome:
            self._popover.hide()
            self._modal_title.setText(step.title)
            self._modal_content.setText(step.content)
            self._modal.adjustSize()
            self._modal.move(
                (self.width() - self._modal.width()) // 2,
                (self.height() - self._modal.height()) // 2,
            )
            self._modal.show()
            self._highlight = None
            self._positioner.show_step(step)
            self.update()
            return
        self._modal.hide()
        self._title.setText(step.title)
        self._content.setText(step.content)
        self._next.setText("Finish" if self._service.is_last_step else "Next")
        self._popover.adjustSize()
        self._popover.show()
        self._positioner.set_popover_height(self._popover.sizeHint().height())
        self._positioner.show_step(step)

    def _apply_layout(self, layout: PopoverLayout) -> None:
        self._popover.setGeometry(
            int(layout.left), int(layout.top), int(layout.width), int(layout.height)
        )
        self._highlight = highlight_rect(layout.target) if layout.target is not None else None
        if layout.arrow is None:
            self._arrow.hide()
        else:
            self._arrow.rotation = layout.arrow.rotation
            self._arrow.move(int(layout.arrow.left), int(layout.arrow.top))
            self._arrow.show()
            self._arrow.raise_()
        self.update()

    def paintEvent(self, event):  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        path = QPainterPath()
        path.addRect(QRectF(self.rect()))
        if self._highlight is not None:
            hole = QPainterPath()
            h = self._highlight
            hole.addRoundedRect(
                QRectF(h.left, h.top, h.width, h.height), HIGHLIGHT_RADIUS, HIGHLIGHT_RADIUS
            )
            path = path.subtracted(hole)
        painter.fillPath(path, DIM_COLOR)
        painter.end()

    # Lifecycle -----------------------------------------------------------
    def _on_step_changed(self, _event: Event) -> None:
        self.refresh()

    def _on_ended(self, _event: Event) -> None:
        self._begin_close()

    def _begin_close(self) -> None:
        self._positioner.show_step(None)
        if self.isVisible() and not self._hide_timer.isActive():
            self._hide_timer.start()

    def _finish_close(self) -> None:
        if self._service.active_step is None:
            self._highlight = None
            self.hide()

    def close_now(self) -> None:
        """Skip the close delay."""
        if self._hide_timer.isActive():
            self._hide_timer.stop()
            self._finish_close()

    def dispose(self) -> None:
        for sub in self._subs:
            self._bus.unsubscribe(sub)
        self._subs.clear()
        self._hide_timer.stop()
        self._positioner.close()
        self._window.removeEventFilter(self)

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: D401
        if obj is self._window and event.type() == QEvent.Type.Resize and self.isVisible():
            self.setGeometry(self._window.rect())
        return super().eventFilter(obj, event)
