from gui.design.onboarding_tour import Feature, clear_tours, get_tour, list_tours
from gui.design.tour_catalog import (
    default_tours,
    register_default_tours,
    study_room_in_room_steps,
)


def setup_function():
    clear_tours()


def teardown_function():
    clear_tours()


def test_register_default_tours_idempotent():
    register_default_tours()
    register_default_tours()
    assert {t.feature for t in list_tours()} == set(default_tours())


def test_desktop_tours_hand_over_via_next_path():
    tours = default_tours()
    chain = {
        Feature.DASHBOARD: "/app/timetable",
        Feature.TIMETABLE: "/app/todo",
        Feature.TODO: "/app/reminders",
        Feature.REMINDERS: "/app/study-room",
    }
    for feature, path in chain.items():
        last = tours[feature].steps[-1]
        assert last.next_path == path
        assert last.desktop_only


def test_selectors_are_object_names():
    for tour in default_tours().values():
        for step in tour.steps:
            assert step.selector is None or step.selector.startswith("#")


def test_steps_serializable():
    register_default_tours()
    for step in get_tour(Feature.SETTINGS).steps:
        assert step.to_dict()["action"]["kind"] in {"switch_tab", "click"}


def test_study_room_tours_registered():
    register_default_tours()
    create = get_tour(Feature.STUDY_ROOM_CREATE).steps
    assert [s.selector for s in create] == ["#create-room-form"]
    in_room = get_tour(Feature.STUDY_ROOM_IN_ROOM).steps
    assert in_room[0].selector == "#chat-window"
    assert in_room[-1].next_path == "/app/settings"
    assert in_room[-1].desktop_only
    assert not any(s.selector.startswith("#participant-") for s in in_room)


def test_in_room_steps_introduce_ai_member():
    steps = study_room_in_room_steps("ai-7", "Professor Synapse")
    intro = [s for s in steps if s.selector == "#participant-ai-7"]
    assert len(intro) == 2
    assert intro[0].desktop_only and intro[1].mobile_only
    assert "Professor Synapse" in intro[0].content
    assert intro[1].action.target == "participants"


def test_in_room_steps_split_by_viewport():
    steps = study_room_in_room_steps("ai-7")
    desktop = [s.selector for s in steps if s.is_visible_on(True)]
    mobile = [s.selector for s in steps if s.is_visible_on(False)]
    assert "#nav-link-settings" in desktop and "#nav-link-settings" not in mobile
    assert "#invite-ais-button" in mobile and "#invite-ais-button" not in desktop
    assert desktop.count("#invite-ai-section") == 1
    assert mobile.count("#invite-ai-section") == 1
