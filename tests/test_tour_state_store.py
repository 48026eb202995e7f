import json
from pathlib import Path

import pytest

from fokus_tour.app.config_store import (
    CONFIG_VERSION,
    OUTCOME_COMPLETED,
    OUTCOME_SKIPPED,
    TourStateConfig,
    load_config,
    mark_tour_seen,
    save_config,
)


def test_load_returns_defaults_when_missing(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg.version == CONFIG_VERSION
    assert cfg.tour_seen is False
    assert cfg.last_outcome is None


def test_save_and_reload(tmp_path: Path):
    save_config(TourStateConfig(tour_seen=True, last_outcome=OUTCOME_SKIPPED), tmp_path)
    loaded = load_config(tmp_path)
    assert loaded.tour_seen is True
    assert loaded.last_outcome == OUTCOME_SKIPPED
    assert not (tmp_path / "tour_state.json.tmp").exists()


def test_corrupt_file_graceful_fallback(tmp_path: Path):
    (tmp_path / "tour_state.json").write_text("not json", encoding="utf-8")
    assert load_config(tmp_path).tour_seen is False


def test_version_mismatch_keeps_seen_flag(tmp_path: Path):
    data = {"version": CONFIG_VERSION + 5, "tour_seen": True, "last_outcome": "completed"}
    (tmp_path / "tour_state.json").write_text(json.dumps(data), encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.version == CONFIG_VERSION
    assert cfg.tour_seen is True
    assert cfg.last_outcome is None


def test_unknown_outcome_dropped(tmp_path: Path):
    data = {"version": CONFIG_VERSION, "tour_seen": True, "last_outcome": "exploded"}
    (tmp_path / "tour_state.json").write_text(json.dumps(data), encoding="utf-8")
    assert load_config(tmp_path).last_outcome is None


def test_mark_tour_seen_distinguishes_outcomes(tmp_path: Path):
    mark_tour_seen(OUTCOME_COMPLETED, tmp_path)
    assert load_config(tmp_path).last_outcome == OUTCOME_COMPLETED
    mark_tour_seen(OUTCOME_SKIPPED, tmp_path)
    assert load_config(tmp_path).last_outcome == OUTCOME_SKIPPED
    with pytest.raises(ValueError):
        mark_tour_seen("abandoned", tmp_path)
