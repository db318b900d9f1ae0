"""Launcher for `python -m gui`.

Opens a small demo window laid out like the StudySync todo page (side
navigation + scrollable content) and runs the todo onboarding tour on it.
Useful for eyeballing the overlay and the placement fallback while resizing.

Environment:
 - ``STUDYSYNC_DATA_DIR``: where config / progress files live
 - ``STUDYSYNC_RESET_TUTORIALS``: when set, progress is reset before start
"""

from __future__ import annotations

import logging
import os
import sys

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from config import settings
from gui.app.bootstrap import create_app
from gui.components.tutorial_overlay import TutorialOverlay
from gui.components.tutorial_positioner import TutorialPositioner
from gui.design.onboarding_tour import Feature, get_tour

__all__ = ["DemoWindow", "main"]

_logger = logging.getLogger(__name__)


class DemoWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle(f"{settings.APP_NAME} onboarding demo")
        root = QWidget(self)
        row = QHBoxLayout(root)

        nav = QFrame(root)
        nav.setObjectName("side-nav")
        nav_layout = QVBoxLayout(nav)
        for name, label in [
            ("nav-link-dashboard", "Dashboard"),
            ("nav-link-timetable", "Timetable"),
            ("nav-link-todo", "To-Do"),
            ("nav-link-reminders", "Reminders"),
        ]:
            btn = QPushButton(label, nav)
            btn.setObjectName(name)
            nav_layout.addWidget(btn)
        nav_layout.addStretch(1)
        row.addWidget(nav)

        self.scroll_area = QScrollArea(root)
        self.scroll_area.setObjectName("main-content")
        self.scroll_area.setWidgetResizable(True)
        page = QWidget()
        page_layout = QVBoxLayout(page)
        form = QFrame(page)
        form.setObjectName("add-task-form")
        form_layout = QHBoxLayout(form)
        form_layout.addWidget(QLineEdit(form))
        form_layout.addWidget(QPushButton("Add", form))
        page_layout.addWidget(QLabel("To-Do", page))
        page_layout.addWidget(form)
        for name, items in [
            ("pending-tasks-list", ["Read chapter 4", "Lab report"]),
            ("completed-tasks-list", ["Buy notebook"]),
        ]:
            lst = QListWidget(page)
            lst.setObjectName(name)
            lst.addItems(items)
            lst.setMinimumHeight(260)
            page_layout.addWidget(lst)
        self.scroll_area.setWidget(page)
        row.addWidget(self.scroll_area, 1)
        self.setCentralWidget(root)


def main() -> int:  # pragma: no cover - runtime
    logging.basicConfig(level=logging.INFO)
    ctx = create_app(data_dir=settings.DATA_DIR)
    if os.environ.get("STUDYSYNC_RESET_TUTORIALS"):
        ctx.progress_store.reset(ctx.tutorial.user_id)
    win = DemoWindow()
    win.resize(1200, 800)
    ctx.viewport.observe(win)
    ctx.tutorial.set_current_route("/app/todo")
    ctx.tutorial.set_navigator(
        lambda path: win.statusBar().showMessage(f"Tour requested navigation to {path}")
    )
    positioner = TutorialPositioner(
        win,
        scroll_area=win.scroll_area,
        poll_interval_ms=ctx.config.poll_interval_ms,
        lookup_timeout_ms=ctx.config.lookup_timeout_ms,
        scroll_settle_ms=ctx.config.scroll_settle_ms,
        bus=ctx.bus,
    )
    TutorialOverlay(
        win, ctx.tutorial, positioner, bus=ctx.bus, close_delay_ms=ctx.config.close_delay_ms
    )
    win.show()
    QTimer.singleShot(
        300, lambda: ctx.tutorial.start_tutorial(Feature.TODO, get_tour(Feature.TODO).steps)
    )
    return ctx.qt_app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
