from __future__ import annotations

import random

import pytest

from spacerace.config.settings import GameSettings
from spacerace.core.events import Event, EventBus, EventType
from spacerace.engine.world import World


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings(width=480, height=720, lanes=8, lane_padding=44, speed=3.2)


@pytest.fixture
def world(settings: GameSettings) -> World:
    return World.from_settings(settings)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


class FakeClock:
    """Seconds clock that advances one second per call."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class EventRecorder:
    """Collects every event emitted on a bus, in order."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[Event] = []
        for event_type in EventType:
            bus.subscribe(event_type, self.events.append)

    def of(self, event_type: EventType) -> list[Event]:
        return [e for e in self.events if e.type == event_type]


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(bus: EventBus) -> EventRecorder:
    return EventRecorder(bus)
