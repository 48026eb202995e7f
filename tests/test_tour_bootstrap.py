from pathlib import Path

from fokus_tour.app.bootstrap import (
    connect_tour_persistence,
    create_app,
    editor_tour_steps,
    should_show_tour,
)
from fokus_tour.app.config_store import load_config
from fokus_tour.services.event_bus import EventBus
from fokus_tour.tour.engine import TourEngine
from fokus_tour.tour.rect_provider import MappingRectProvider
from fokus_tour.tour.scheduler import ManualScheduler
from fokus_tour.tour.viewport import FixedViewport


def _engine():
    return TourEngine(MappingRectProvider(), FixedViewport(1200, 800), ManualScheduler())


def test_create_app_headless_registers_services(tmp_path: Path):
    ctx = create_app(headless=True, data_dir=tmp_path)
    assert ctx.headless is True
    assert ctx.qt_app is None
    assert isinstance(ctx.services.get("event_bus"), EventBus)
    assert ctx.services.get("tour_state") is ctx.tour_state
    assert ctx.services.get("tour_settings") is ctx.tour_settings


def test_create_app_fresh_bus_each_time(tmp_path: Path):
    c1 = create_app(headless=True, data_dir=tmp_path)
    bus1 = c1.services.get("event_bus")
    c2 = create_app(headless=True, data_dir=tmp_path)
    assert c2.services.get("event_bus") is not bus1
    assert len(editor_tour_steps()) == 7


def test_first_run_then_completed(tmp_path: Path):
    ctx = create_app(headless=True, data_dir=tmp_path)
    assert should_show_tour(ctx)
    engine = _engine()
    connect_tour_persistence(engine, ctx)
    engine.activate(editor_tour_steps())
    for _ in range(7):
        engine.next()
    assert not engine.active
    assert not should_show_tour(ctx)
    assert load_config(tmp_path).last_outcome == "completed"
    assert not should_show_tour(create_app(headless=True, data_dir=tmp_path))


def test_skip_recorded_distinctly(tmp_path: Path):
    ctx = create_app(headless=True, data_dir=tmp_path)
    engine = _engine()
    connect_tour_persistence(engine, ctx)
    engine.activate(editor_tour_steps())
    engine.skip()
    assert load_config(tmp_path).last_outcome == "skipped"
    assert ctx.services.get("tour_state").tour_seen


def test_deactivate_does_not_mark_seen(tmp_path: Path):
    ctx = create_app(headless=True, data_dir=tmp_path)
    engine = _engine()
    connect_tour_persistence(engine, ctx)
    engine.activate(editor_tour_steps())
    engine.deactivate()
    assert should_show_tour(ctx)
    assert not (tmp_path / "tour_state.json").exists()
