from fokus_tour.tour.settings import (
    DEFAULT_PLACEMENT,
    DEFAULT_SETTLE_DELAY_MS,
    settings_from_env,
)


def test_defaults_without_env():
    s = settings_from_env({})
    assert s.settle_delay_ms == DEFAULT_SETTLE_DELAY_MS == 300
    assert s.placement == DEFAULT_PLACEMENT
    assert s.placement.estimated_width == 320
    assert s.placement.clamp_to_viewport is False


def test_env_overrides():
    s = settings_from_env({"FOKUS_TOUR_SETTLE_MS": "450", "FOKUS_TOUR_CLAMP": "Yes"})
    assert s.settle_delay_ms == 450
    assert s.placement.clamp_to_viewport is True


def test_invalid_env_values_ignored():
    for raw in ("abc", "0", "-5"):
        assert settings_from_env({"FOKUS_TOUR_SETTLE_MS": raw}).settle_delay_ms == 300
    assert settings_from_env({"FOKUS_TOUR_CLAMP": "maybe"}).placement.clamp_to_viewport is False
