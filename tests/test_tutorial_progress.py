import json
import os

from gui.design.onboarding_tour import Feature
from gui.services.event_bus import EventBus, TutorialEvent
from gui.services.tutorial_progress import (
    ProgressState,
    TutorialProgress,
    TutorialProgressStore,
    bucket_name,
)


def test_defaults_are_all_unseen(tmp_path):
    store = TutorialProgressStore(str(tmp_path))
    progress = store.load("u1")
    assert all(progress.state(f) is ProgressState.UNSEEN for f in Feature)


def test_bucket_names_fall_back_to_guest():
    assert bucket_name(None) == "studysync-tutorial-guest"
    assert bucket_name("") == "studysync-tutorial-guest"
    assert bucket_name("42") == "studysync-tutorial-42"


def test_mark_seen_roundtrip_via_file(tmp_path):
    store = TutorialProgressStore(str(tmp_path))
    store.mark_seen("alice", Feature.TODO)
    fresh = TutorialProgressStore(str(tmp_path))
    loaded = fresh.load("alice")
    assert loaded.is_seen(Feature.TODO)
    assert not loaded.is_seen(Feature.DASHBOARD)
    # other identities are untouched
    assert not fresh.load("bob").is_seen(Feature.TODO)
    assert not fresh.load(None).is_seen(Feature.TODO)


def test_file_layout(tmp_path):
    store = TutorialProgressStore(str(tmp_path))
    store.mark_seen(None, "settings")
    path = tmp_path / "studysync-tutorial-guest.json"
    obj = json.loads(path.read_text(encoding="utf-8"))
    assert obj["version"] == 1
    assert obj["features"]["settings"] == "seen"
    assert obj["features"]["studyRoomInRoom"] == "unseen"


def test_mark_all_seen_and_reset(tmp_path):
    store = TutorialProgressStore(str(tmp_path))
    store.mark_all_seen("u")
    assert all(store.load("u").is_seen(f) for f in Feature)
    store.reset("u")
    assert not any(store.load("u").is_seen(f) for f in Feature)


def test_mark_seen_twice_writes_once(tmp_path):
    bus = EventBus()
    events = []
    bus.subscribe(TutorialEvent.TUTORIAL_PROGRESS_CHANGED, events.append)
    store = TutorialProgressStore(str(tmp_path), bus=bus)
    store.mark_seen("u", Feature.TODO)
    store.mark_seen("u", Feature.TODO)
    assert len(events) == 1
    assert events[0].payload["progress"]["todo"] == "seen"
    assert events[0].payload["origin"] == "local"


def test_unknown_keys_ignored_and_missing_default_unseen(tmp_path):
    path = tmp_path / "studysync-tutorial-guest.json"
    path.write_text(
        json.dumps({"version": 1, "features": {"todo": "seen", "legacyTour": "seen"}}),
        encoding="utf-8",
    )
    progress = TutorialProgressStore(str(tmp_path)).load(None)
    assert progress.is_seen(Feature.TODO)
    assert not progress.is_seen(Feature.REMINDERS)


def test_corrupt_file_backed_up(tmp_path):
    path = tmp_path / "studysync-tutorial-guest.json"
    path.write_text("{ not valid json", encoding="utf-8")
    progress = TutorialProgressStore(str(tmp_path)).load(None)
    assert progress == TutorialProgress.initial()
    backups = [p for p in os.listdir(tmp_path) if ".corrupt." in p]
    assert backups, "Expected corrupt backup file"


def test_external_change_invalidates_cache(tmp_path):
    bus = EventBus()
    events = []
    bus.subscribe(TutorialEvent.TUTORIAL_PROGRESS_CHANGED, events.append)
    ours = TutorialProgressStore(str(tmp_path), bus=bus)
    theirs = TutorialProgressStore(str(tmp_path))
    assert not ours.load("u").is_seen(Feature.TODO)  # now cached
    theirs.mark_seen("u", Feature.TODO)
    assert not ours.load("u").is_seen(Feature.TODO)  # stale cache until notified
    refreshed = ours.notify_external_change("u")
    assert refreshed.is_seen(Feature.TODO)
    assert ours.load("u").is_seen(Feature.TODO)
    assert events[-1].payload["origin"] == "external"


def test_progress_is_immutable_value():
    base = TutorialProgress.initial()
    updated = base.with_seen(Feature.TIMETABLE)
    assert not base.is_seen(Feature.TIMETABLE)
    assert updated.is_seen(Feature.TIMETABLE)
    assert TutorialProgress.from_json(updated.to_json()) == updated


def test_failed_write_is_not_reported_as_seen(tmp_path, caplog):
    base = tmp_path / "progress"
    bus = EventBus()
    events = []
    bus.subscribe(TutorialEvent.TUTORIAL_PROGRESS_CHANGED, events.append)
    store = TutorialProgressStore(str(base), bus=bus)
    # the data directory turns into a plain file, so every write fails
    base.rmdir()
    base.write_text("not a directory", encoding="utf-8")

    assert not store.mark_seen("u", Feature.TODO).is_seen(Feature.TODO)
    assert not store.load("u").is_seen(Feature.TODO)
    assert not store.mark_all_seen("u").is_seen(Feature.SETTINGS)
    assert events == []
    assert "Failed to persist tutorial progress" in caplog.text
