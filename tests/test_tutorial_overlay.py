import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QPushButton, QWidget

from gui.components.tutorial_overlay import TutorialOverlay
from gui.components.tutorial_positioner import TutorialPositioner
from gui.design.onboarding_tour import Feature, Placement, TutorialStep


@pytest.fixture
def window(qtbot):
    w = QWidget()
    w.resize(1280, 800)
    for i, name in enumerate(("one", "two", "three")):
        lbl = QLabel(name, w)
        lbl.setObjectName(name)
        lbl.setGeometry(200 + i * 200, 300, 120, 40)
    qtbot.addWidget(w)
    w.show()
    qtbot.waitExposed(w)
    return w


@pytest.fixture
def overlay(window, tutorial, bus):
    positioner = TutorialPositioner(window, scroll_settle_ms=0, bus=bus)
    ov = TutorialOverlay(window, tutorial, positioner, bus=bus)
    yield ov
    ov.dispose()


def test_hidden_until_tour_starts(overlay):
    assert not overlay.isVisible()


def test_shows_popover_with_highlight(overlay, tutorial, todo, three_steps):
    assert tutorial.start_tutorial(todo, three_steps)
    assert overlay.isVisible()
    assert overlay.popover().isVisible()
    assert overlay.findChild(QLabel, "tutorialPopoverTitle").text() == "One"
    assert overlay.next_button_text() == "Next"
    assert overlay.highlight is not None
    assert overlay.highlight.left == 200 - 8


def test_last_step_reads_finish(overlay, tutorial, todo, three_steps):
    tutorial.start_tutorial(todo, three_steps)
    tutorial.next_step()
    tutorial.next_step()
    assert overlay.next_button_text() == "Finish"


def test_next_button_advances(qtbot, overlay, tutorial, todo, three_steps):
    tutorial.start_tutorial(todo, three_steps)
    qtbot.mouseClick(overlay.findChild(QPushButton, "tutorialPopoverNext"), Qt.MouseButton.LeftButton)
    assert tutorial.active_index == 1


def test_skip_ends_everything_then_hides_after_delay(qtbot, overlay, tutorial, todo, three_steps):
    tutorial.start_tutorial(todo, three_steps)
    qtbot.mouseClick(overlay.findChild(QPushButton, "tutorialPopoverSkip"), Qt.MouseButton.LeftButton)
    assert not tutorial.is_prompt_active
    assert all(tutorial.progress.is_seen(f) for f in Feature)
    assert overlay.isVisible()
    assert overlay.is_closing()
    overlay.close_now()
    assert not overlay.isVisible()


def test_welcome_step_uses_modal_card(overlay, tutorial):
    steps = [
        TutorialStep(title="Welcome", content="hello", placement=Placement.CENTER, is_welcome=True),
        TutorialStep(title="One", content="first", selector="#one"),
    ]
    tutorial.start_tutorial(Feature.DASHBOARD, steps)
    assert overlay.welcome_card().isVisible()
    assert not overlay.popover().isVisible()
    assert overlay.findChild(QPushButton, "tutorialWelcomeNext").text() == "Let's Go!"
    assert overlay.highlight is None
    tutorial.next_step()
    assert overlay.popover().isVisible()
    assert not overlay.welcome_card().isVisible()
