# Shared pytest setup.
# Qt widgets run on the offscreen platform so the suite works without a display;
# pytest-qt provides the `qtbot` / `qapp` fixtures used by widget tests.

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from gui.design.onboarding_tour import Feature, TutorialStep  # noqa: E402
from gui.services.event_bus import EventBus  # noqa: E402
from gui.services.tutorial_progress import TutorialProgressStore  # noqa: E402
from gui.services.tutorial_service import TutorialService  # noqa: E402
from gui.services.viewport_service import ViewportService  # noqa: E402

DESKTOP_WIDTH = 1440
MOBILE_WIDTH = 390


class RecordingNavigator:
    """Collects navigation requests instead of routing."""

    def __init__(self):
        self.paths = []

    def __call__(self, path):
        self.paths.append(path)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def store(tmp_path, bus):
    return TutorialProgressStore(str(tmp_path / "progress"), bus=bus)


@pytest.fixture
def viewport(bus):
    return ViewportService(DESKTOP_WIDTH, bus=bus)


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def tutorial(store, viewport, bus, navigator):
    svc = TutorialService(store, viewport, bus=bus, navigator=navigator)
    yield svc
    svc.close()


@pytest.fixture
def three_steps():
    return [
        TutorialStep(title="One", content="first", selector="#one"),
        TutorialStep(title="Two", content="second", selector="#two"),
        TutorialStep(title="Three", content="third", selector="#three"),
    ]


@pytest.fixture
def todo():
    return Feature.TODO
