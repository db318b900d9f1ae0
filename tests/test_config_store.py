from gui.app.config_store import (
    TutorialConfig,
    load_config,
    save_config,
    CONFIG_VERSION,
)
from pathlib import Path
import json
import pytest


def test_load_returns_defaults_when_missing(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg.version == CONFIG_VERSION
    assert cfg.enabled is True
    assert cfg.desktop_min_width == 1024
    assert cfg.poll_interval_ms == 100
    assert cfg.lookup_timeout_ms == 3000
    assert cfg.scroll_settle_ms == 350
    assert cfg.close_delay_ms == 500


def test_save_and_reload_round_trip(tmp_path: Path):
    cfg = TutorialConfig(enabled=False, desktop_min_width=900, lookup_timeout_ms=1500)
    save_config(cfg, tmp_path)
    assert load_config(tmp_path).to_dict() == cfg.to_dict()


def test_corrupt_file_graceful_fallback(tmp_path: Path):
    (tmp_path / "tutorial_config.json").write_text("not json", encoding="utf-8")
    assert load_config(tmp_path) == TutorialConfig()


def test_version_mismatch_resets(tmp_path: Path):
    data = {"version": CONFIG_VERSION + 1, "enabled": False}
    (tmp_path / "tutorial_config.json").write_text(json.dumps(data), encoding="utf-8")
    assert load_config(tmp_path).enabled is True


def test_invalid_values_fall_back_on_load(tmp_path: Path):
    data = {"version": CONFIG_VERSION, "poll_interval_ms": 500, "lookup_timeout_ms": 100}
    (tmp_path / "tutorial_config.json").write_text(json.dumps(data), encoding="utf-8")
    assert load_config(tmp_path) == TutorialConfig()


def test_save_rejects_invalid_config(tmp_path: Path):
    with pytest.raises(ValueError):
        save_config(TutorialConfig(desktop_min_width=0), tmp_path)
