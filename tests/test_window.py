from __future__ import annotations

from pathlib import Path

import pygame
import pytest

from spacerace.config.settings import GameSettings, ScoreSettings, Settings
from spacerace.core.events import tick_event
from spacerace.engine.world import Obstacle
from spacerace.main import SpaceRaceApp
from spacerace.modes.base import ModePhase
from spacerace.simulator.window import GameWindow


@pytest.fixture
def app(tmp_path: Path) -> SpaceRaceApp:
    settings = Settings(
        game=GameSettings(seed=11),
        scores=ScoreSettings(path=tmp_path / "scores.json"),
        log_file=tmp_path / "spacerace.log",
    )
    app = SpaceRaceApp(settings)
    app.mode.enter()
    return app


@pytest.fixture
def window(app: SpaceRaceApp):
    window = GameWindow(
        app.mode,
        config=app.settings.window,
        state_machine=app.state_machine,
        event_bus=app.event_bus,
    )
    yield window
    window.close()


def _key_down(window: GameWindow, key: int, unicode: str = "") -> None:
    window.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode))


def _key_up(window: GameWindow, key: int) -> None:
    window.handle_event(pygame.event.Event(pygame.KEYUP, key=key))


def _type(window: GameWindow, text: str) -> None:
    for char in text:
        _key_down(window, ord(char), char)


def _crash(app: SpaceRaceApp, score: float) -> None:
    world = app.mode.world
    lane = world.player.lane
    world.score = score
    world.obstacles.append(
        Obstacle(lane=lane, x=world.lane_center(lane), y=world.player.y, radius=25.0, speed=0.0)
    )
    app.event_bus.emit(tick_event(0.0, 1))


def test_arrow_keys_shift_lane(app: SpaceRaceApp, window: GameWindow) -> None:
    start = app.mode.world.player.lane

    _key_down(window, pygame.K_RIGHT)
    app.event_bus.emit(tick_event(0.016, 1))
    _key_up(window, pygame.K_RIGHT)
    _key_down(window, pygame.K_LEFT)
    _key_down(window, pygame.K_LEFT)
    app.event_bus.emit(tick_event(0.016, 2))

    assert app.mode.world.player.lane == start


def test_key_release_clears_pending_shift_at_wall(app: SpaceRaceApp, window: GameWindow) -> None:
    world = app.mode.world
    world.player.lane = world.lanes - 1
    signals = app.mode.run.controller.signals

    _key_down(window, pygame.K_RIGHT)
    app.event_bus.emit(tick_event(0.016, 1))
    assert signals.right

    _key_up(window, pygame.K_RIGHT)
    assert not signals.right

    world.player.lane = 3
    app.event_bus.emit(tick_event(0.016, 2))
    assert world.player.lane == 3


def test_crash_opens_name_prompt(app: SpaceRaceApp, window: GameWindow) -> None:
    _crash(app, 40.0)

    assert window.prompt.is_open
    assert window.prompt.score == 40


def test_typed_name_is_saved_on_enter(app: SpaceRaceApp, window: GameWindow) -> None:
    _crash(app, 40.0)

    _type(window, "j3et")
    _key_down(window, pygame.K_BACKSPACE)
    _type(window, "t")
    _key_down(window, pygame.K_RETURN, "\r")

    assert not window.prompt.is_open
    assert app.mode.pilot_name == "JET"
    assert [(e.name, e.score) for e in window.leaderboard] == [("JET", 40)]


def test_space_does_not_restart_while_prompt_open(app: SpaceRaceApp, window: GameWindow) -> None:
    _crash(app, 40.0)

    _key_down(window, pygame.K_SPACE, " ")

    assert window.prompt.is_open
    assert window.prompt.text == ""
    assert app.mode.phase == ModePhase.RESULT
    assert not app.mode.world.running


def test_escape_skips_name_then_space_restarts(app: SpaceRaceApp, window: GameWindow) -> None:
    _crash(app, 40.0)

    _key_down(window, pygame.K_ESCAPE)

    assert not window.prompt.is_open
    assert not app.mode.awaiting_name
    assert window.leaderboard == []
    assert window.running

    _key_down(window, pygame.K_SPACE, " ")

    assert app.mode.phase == ModePhase.ACTIVE
    assert app.mode.world.running
    assert app.mode.score == 0


def test_space_ignored_while_flying(app: SpaceRaceApp, window: GameWindow) -> None:
    app.event_bus.emit(tick_event(0.1, 1))

    _key_down(window, pygame.K_SPACE, " ")

    assert app.mode.score == 2
    assert app.state_machine.context.runs == 1


@pytest.mark.parametrize("key", [pygame.K_ESCAPE, pygame.K_q])
def test_quit_keys_stop_loop(window: GameWindow, key: int) -> None:
    _key_down(window, key)

    assert not window.running


def test_window_close_event_stops_loop(window: GameWindow) -> None:
    window.handle_event(pygame.event.Event(pygame.QUIT))

    assert not window.running
