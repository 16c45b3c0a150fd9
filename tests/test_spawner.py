from __future__ import annotations

import random

import pytest

from spacerace.config.settings import GameSettings
from spacerace.engine.spawner import ObstacleSpawner
from spacerace.engine.world import World


def test_warning_flashes_six_times_then_drops_one_missile(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    warning = spawner.trigger_warning(world, 3)
    assert warning is not None

    seen = [warning.visible]
    for _ in range(5):
        spawned = spawner.update_warnings(world, 180)
        assert spawned == []
        assert warning.active
        seen.append(warning.visible)

    assert seen == [True, False, True, False, True, False]
    assert world.obstacles == []

    spawned = spawner.update_warnings(world, 180)
    assert not warning.active
    assert not warning.visible
    assert len(spawned) == 1
    assert len(world.obstacles) == 1
    assert world.obstacles[0].lane == 3


def test_flash_waits_for_full_interval(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    warning = spawner.trigger_warning(world, 0)

    spawner.update_warnings(world, 100)
    assert warning.visible
    assert warning.flashes_left == 6

    spawner.update_warnings(world, 80)
    assert not warning.visible
    assert warning.flashes_left == 5
    assert warning.timer == 0.0


def test_lanes_flash_independently(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    first = spawner.trigger_warning(world, 1)
    spawner.update_warnings(world, 180)
    second = spawner.trigger_warning(world, 5)

    spawner.update_warnings(world, 180)
    assert first.flashes_left == 4
    assert second.flashes_left == 5


def test_spawned_missile_properties_within_bounds(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    for _ in range(200):
        obstacle = spawner.spawn_obstacle(world, 2)
        assert 22 <= obstacle.radius < 30
        assert world.speed <= obstacle.speed < world.speed + 1.4
        assert obstacle.y == -40
        assert obstacle.x == pytest.approx(world.lane_center(2))


def test_retrigger_of_active_lane_is_refused(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    assert spawner.trigger_warning(world, 4) is not None
    spawner.update_warnings(world, 180)
    assert spawner.trigger_warning(world, 4) is None
    assert world.warnings[4].flashes_left == 5


def test_wave_fires_when_deadline_reached_and_reschedules(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    world.clock_ms = 0.0
    world.next_wave_ms = 0.0

    spawner.update(world, 0)

    assert sum(1 for w in world.warnings if w.active) == 1
    assert 900 <= world.next_wave_ms <= 1800


def test_no_wave_before_deadline(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    world.clock_ms = 500.0
    world.next_wave_ms = 900.0

    spawner.update(world, 16)

    assert not any(w.active for w in world.warnings)
    assert world.next_wave_ms == 900.0


def test_new_warning_starts_flashing_next_tick(world: World, rng: random.Random) -> None:
    spawner = ObstacleSpawner(rng)
    spawner.update(world, 500)

    active = [w for w in world.warnings if w.active]
    assert len(active) == 1
    assert active[0].timer == 0.0
    assert active[0].visible


def test_wave_on_busy_lane_is_dropped_but_still_rescheduled(rng: random.Random) -> None:
    world = World.from_settings(GameSettings(lanes=1))
    spawner = ObstacleSpawner(rng)
    spawner.trigger_warning(world, 0)
    spawner.update_warnings(world, 180)
    world.clock_ms = 2000.0
    world.next_wave_ms = 0.0

    assert spawner.spawn_wave(world) is None
    assert world.warnings[0].flashes_left == 5
    assert 2900 <= world.next_wave_ms <= 3800


def test_seeded_spawners_agree() -> None:
    settings = GameSettings()
    results = []
    for _ in range(2):
        world = World.from_settings(settings)
        spawner = ObstacleSpawner(random.Random(99))
        lanes = []
        for _ in range(10):
            world.next_wave_ms = world.clock_ms
            warning = spawner.spawn_wave(world)
            lanes.append(warning.lane if warning else None)
        results.append((lanes, world.next_wave_ms))
    assert results[0] == results[1]
