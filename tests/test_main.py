from __future__ import annotations

from pathlib import Path

from spacerace.config.settings import GameSettings, ScoreSettings, Settings
from spacerace.core.events import arcade_event, tick_event
from spacerace.engine.world import Obstacle
from spacerace.main import SpaceRaceApp


def _app(tmp_path: Path) -> SpaceRaceApp:
    settings = Settings(
        game=GameSettings(seed=3),
        scores=ScoreSettings(path=tmp_path / "scores.json"),
        log_file=tmp_path / "spacerace.log",
    )
    return SpaceRaceApp(settings)


def test_ticks_and_input_reach_mode(tmp_path: Path) -> None:
    app = _app(tmp_path)
    app.mode.enter()
    start = app.mode.world.player.lane

    app.event_bus.emit(arcade_event("right"))
    app.event_bus.emit(tick_event(0.1, 1))

    assert app.mode.world.player.lane == start + 1
    assert app.mode.score == 2


def test_scores_saved_to_configured_file(tmp_path: Path) -> None:
    app = _app(tmp_path)
    app.mode.enter()
    world = app.mode.world
    lane = world.player.lane
    world.score = 40.0
    world.obstacles.append(
        Obstacle(lane=lane, x=world.lane_center(lane), y=world.player.y, radius=25.0, speed=0.0)
    )
    app.event_bus.emit(tick_event(0.0, 1))

    app.mode.submit_name("jet")

    assert (tmp_path / "scores.json").exists()
    assert [(e.name, e.score) for e in _app(tmp_path).store.load()] == [("JET", 40)]
