"""Built-in onboarding tours for the StudySync pages.

Each page owns its tour content; this module collects the default step
lists so that pages (and the demo launcher) can fetch them with
``get_tour(Feature.X).steps``. Steps reference widgets by object name, so a
page must give its anchor widgets the matching ``setObjectName``.

The desktop tours end on a navigation-link step carrying ``next_path`` which
hands over to the next page's tour; those steps are desktop only because the
compact layout hides the side navigation.

The in-room tour depends on the room's AI members. The registered default is
built without one; a room page that has an AI member builds its own list with
``study_room_in_room_steps(ai_id, ai_name)``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .onboarding_tour import (
    Feature,
    Placement,
    StepAction,
    TourDefinition,
    TutorialStep,
    list_tours,
    register_tour,
)

__all__ = ["default_tours", "register_default_tours", "study_room_in_room_steps"]


def _dashboard() -> Tuple[TutorialStep, ...]:
    return (
        TutorialStep(
            selector="#greeting-header",
            title="Welcome to StudySync!",
            content=(
                "This is your all-in-one productivity hub. Let's take a quick tour to see how "
                "you can organize your schedule, manage tasks, and supercharge your focus."
            ),
            placement=Placement.CENTER,
            is_welcome=True,
        ),
        TutorialStep(
            selector="#motivation-quote",
            title="Daily Motivation",
            content="Get a fresh dose of inspiration every day. A new quote appears here.",
        ),
        TutorialStep(
            selector="#pomodoro-timer-container",
            title="The Focus Timer",
            content=(
                "This is the Pomodoro Timer. Work in focused sprints to maximize productivity "
                "and prevent burnout."
            ),
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#pomodoro-modes",
            title="Work & Break Modes",
            content="Switch between focused work sessions and short or long breaks.",
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#pomodoro-controls",
            title="Timer Controls",
            content="Start, pause, or reset the timer. Session lengths live in Settings.",
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#nav-link-timetable",
            title="Plan Your Week",
            content="Head to the Timetable to map out your classes and study sessions.",
            placement=Placement.RIGHT,
            desktop_only=True,
            next_path="/app/timetable",
        ),
    )


def _timetable() -> Tuple[TutorialStep, ...]:
    return (
        TutorialStep(
            selector="#timetable-view-controls",
            title="Your Visual Schedule",
            content="Switch between a full week view and a focused day view.",
        ),
        TutorialStep(
            selector="#new-event-button",
            title="Add a New Event",
            content="Add a class, study session, or appointment. Let's create one now.",
        ),
        TutorialStep(
            selector="#event-modal-title",
            title="Name Your Event",
            content='Give your event a descriptive title, like "Chem 101 Lecture".',
            action=StepAction.open_modal("event-modal"),
        ),
        TutorialStep(
            selector="#event-modal-time-controls",
            title="Schedule Date & Time",
            content="Set the day of the week and the start/end times for your event.",
        ),
        TutorialStep(
            selector="#event-modal-category-section",
            title="Categorize Your Event",
            content="The category color keeps your schedule organized at a glance.",
        ),
        TutorialStep(
            selector="#event-modal-save",
            title="Save Your Event",
            content="Save the event and it will appear on your timetable.",
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#nav-link-todo",
            title="Manage Your Tasks",
            content="Let's head over to the To-Do list to manage your assignments.",
            placement=Placement.RIGHT,
            desktop_only=True,
            next_path="/app/todo",
            action=StepAction.close_modal("event-modal"),
        ),
    )


def _todo() -> Tuple[TutorialStep, ...]:
    return (
        TutorialStep(
            selector="#add-task-form",
            title="Your Mission Control",
            content="Add your assignments, track your progress, and check things off.",
        ),
        TutorialStep(
            selector="#pending-tasks-list",
            title="Pending Tasks",
            content="New tasks appear here. Mark a task complete to move it down.",
        ),
        TutorialStep(
            selector="#completed-tasks-list",
            title="Track Your Wins",
            content="Completed tasks move here. You can un-check or delete them.",
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#nav-link-reminders",
            title="Set Timely Reminders",
            content="For time-sensitive tasks, use Reminders. Let's head there next.",
            placement=Placement.RIGHT,
            desktop_only=True,
            next_path="/app/reminders",
        ),
    )


def _reminders() -> Tuple[TutorialStep, ...]:
    return (
        TutorialStep(
            selector="#notification-banner",
            title="Never Miss a Deadline",
            content="Allow notifications so StudySync can ping you even when you're away.",
        ),
        TutorialStep(
            selector="#new-reminder-form",
            title="Set a Reminder",
            content="Give it a title, pick a date and time, and we'll handle the rest.",
        ),
        TutorialStep(
            selector="#upcoming-reminders-list",
            title="Upcoming Reminders",
            content="Active reminders appear here, sorted by time.",
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#past-reminders-list",
            title="Recently Past",
            content="Passed reminders are kept here for 7 days.",
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#nav-link-study-room",
            title="Time to Collaborate",
            content="Let's check out the Study Room, where you can chat with friends and AI partners.",
            placement=Placement.RIGHT,
            desktop_only=True,
            next_path="/app/study-room",
        ),
    )


def _study_room_join() -> Tuple[TutorialStep, ...]:
    return (
        TutorialStep(
            selector="#lobby-main-box",
            title="Welcome to the Study Room!",
            content=(
                "This is the lobby. From here you can join or create a private space to study "
                "with friends and AI partners."
            ),
        ),
        TutorialStep(
            selector="#join-room-form",
            title="Join an Existing Room",
            content=(
                "If you know the name of a room, enter it here to join directly. No password is "
                "needed to join, only to create."
            ),
        ),
        TutorialStep(
            selector="#my-created-rooms-section",
            title="Your Created Rooms",
            content="Rooms you create are listed here so you can quickly join or delete them.",
            placement=Placement.TOP,
        ),
        TutorialStep(
            selector="#create-room-tab",
            title="Create Your Own Room",
            content="To continue the tour, switch over to the 'Create Room' tab.",
        ),
    )


def _study_room_create() -> Tuple[TutorialStep, ...]:
    return (
        TutorialStep(
            selector="#create-room-form",
            title="Create Your Room",
            content=(
                "Give your room a unique name and a password to keep it private. After you click "
                "'Create', we'll give you a tour of the room itself!"
            ),
        ),
    )


def study_room_in_room_steps(
    ai_id: Optional[str] = None, ai_name: Optional[str] = None
) -> Tuple[TutorialStep, ...]:
    """Steps for the inside of a study room.

    When the room already has an AI member, pass its id (and display name) to
    add the steps introducing it; the participant widget is expected to be
    named ``participant-<ai_id>``.
    """
    steps: List[TutorialStep] = [
        TutorialStep(
            selector="#chat-window",
            title="Your Private Study Room",
            content=(
                "This is your private space to chat. Talk with friends or get help from an AI "
                "partner by mentioning them (e.g. '@ProfessorSynapse')."
            ),
            placement=Placement.RIGHT,
        ),
    ]
    if ai_id:
        name = ai_name or "your AI partner"
        steps += [
            TutorialStep(
                selector=f"#participant-{ai_id}",
                title="Your AI Assistant",
                content=(
                    f"Meet {name}! We've added this AI to the room to help you get started. "
                    "Try asking it a question!"
                ),
                placement=Placement.LEFT,
                desktop_only=True,
            ),
            TutorialStep(
                selector="#invite-ais-button",
                title="Your AI Assistant",
                content=(
                    f"Meet {name}! Tap here to see the participant list. "
                    "The tour will open it for you."
                ),
                mobile_only=True,
            ),
            TutorialStep(
                selector=f"#participant-{ai_id}",
                title="Say Hello!",
                content=f"{name} is here to help you study. Ask it a question any time.",
                mobile_only=True,
                action=StepAction.open_modal("participants"),
            ),
        ]
    for placement, desktop in ((Placement.LEFT, True), (Placement.TOP, False)):
        steps += [
            TutorialStep(
                selector="#invite-ai-section",
                title="Invite More AIs",
                content="Add other specialized AIs to your room from this list.",
                placement=placement,
                desktop_only=desktop,
                mobile_only=not desktop,
            ),
            TutorialStep(
                selector="#manage-ai-button",
                title="Manage Custom AIs",
                content=(
                    "Don't see an AI you like? Create your own with a custom personality. "
                    "The tour will open this for you."
                ),
                placement=placement,
                desktop_only=desktop,
                mobile_only=not desktop,
            ),
        ]
    steps += [
        TutorialStep(
            selector="#create-new-ai-form",
            title="Create a Persona",
            content=(
                "Define a name and behavior for your AI. The behavior acts as its core "
                "instructions and shapes its personality."
            ),
            action=StepAction.open_modal("ai-management"),
        ),
        TutorialStep(
            selector="#suggest-ai-button",
            title="Get Suggestions",
            content="Feeling uninspired? StudySync can generate a creative AI persona for you.",
        ),
        TutorialStep(
            selector="#nav-link-settings",
            title="Customize Your Experience",
            content=(
                "You've now seen all the core features of StudySync! Settings are always one "
                "click away in the user menu. Happy studying!"
            ),
            desktop_only=True,
            next_path="/app/settings",
            action=StepAction.click("#user-menu-button"),
        ),
    ]
    return tuple(steps)


def _settings() -> Tuple[TutorialStep, ...]:
    return (
        TutorialStep(
            selector="#settings-tab-account",
            title="Your Account",
            content="Manage your profile details here.",
            action=StepAction.switch_tab("account"),
        ),
        TutorialStep(
            selector="#settings-timer-card",
            title="Customize Your Timer",
            content="Fine-tune the length of your work sprints and breaks.",
            action=StepAction.switch_tab("timer"),
        ),
        TutorialStep(
            selector="#settings-timetable-card",
            title="Organize Your Schedule",
            content="Customize the visible hours and manage event categories.",
            action=StepAction.switch_tab("timetable"),
        ),
        TutorialStep(
            selector="#settings-ai-card",
            title="Advanced AI Settings",
            content="Select a default AI partner and customize the prompts StudySync uses.",
            action=StepAction.switch_tab("ai"),
        ),
        TutorialStep(
            selector="#user-menu-button",
            title="All Done!",
            content="You can come back to Settings at any time from the user menu.",
            placement=Placement.LEFT,
            action=StepAction.click("#user-menu-button"),
        ),
    )


def default_tours() -> Dict[Feature, TourDefinition]:
    return {
        Feature.DASHBOARD: TourDefinition(Feature.DASHBOARD, _dashboard(), "Dashboard basics"),
        Feature.TIMETABLE: TourDefinition(Feature.TIMETABLE, _timetable(), "Weekly planning"),
        Feature.TODO: TourDefinition(Feature.TODO, _todo(), "Task list"),
        Feature.REMINDERS: TourDefinition(Feature.REMINDERS, _reminders(), "Reminders"),
        Feature.STUDY_ROOM_JOIN: TourDefinition(
            Feature.STUDY_ROOM_JOIN, _study_room_join(), "Study room lobby"
        ),
        Feature.STUDY_ROOM_CREATE: TourDefinition(
            Feature.STUDY_ROOM_CREATE, _study_room_create(), "Creating a study room"
        ),
        Feature.STUDY_ROOM_IN_ROOM: TourDefinition(
            Feature.STUDY_ROOM_IN_ROOM, study_room_in_room_steps(), "Inside a study room"
        ),
        Feature.SETTINGS: TourDefinition(Feature.SETTINGS, _settings(), "Settings"),
    }


def register_default_tours() -> None:
    """Register the built-in tours (idempotent; already registered features are kept)."""
    existing = {t.feature for t in list_tours()}
    for feature, defn in default_tours().items():
        if feature not in existing:
            register_tour(defn)
