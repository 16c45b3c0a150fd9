from __future__ import annotations

import pytest

from spacerace.engine.collision import (
    OFFSCREEN_MARGIN,
    TIME_SCALE,
    advance_obstacles,
    find_collision,
    obstacle_hitbox,
    player_hitbox,
)
from spacerace.engine.world import Obstacle, World


def _missile(world: World, lane: int, y: float, radius: float = 25.0, speed: float = 4.0) -> Obstacle:
    return Obstacle(lane=lane, x=world.lane_center(lane), y=y, radius=radius, speed=speed)


def test_missiles_advance_by_speed_times_elapsed(world: World) -> None:
    missile = _missile(world, 2, -40.0, speed=4.0)
    world.obstacles.append(missile)

    for _ in range(10):
        advance_obstacles(world, 16)

    assert missile.y == pytest.approx(-40.0 + 10 * 4.0 * 16 * TIME_SCALE)


def test_missiles_past_bottom_margin_are_removed(world: World) -> None:
    gone = _missile(world, 0, world.height + OFFSCREEN_MARGIN - 1, speed=1.0)
    stays = _missile(world, 1, 100.0, speed=1.0)
    world.obstacles.extend([gone, stays])

    advance_obstacles(world, 100)

    assert world.obstacles == [stays]


def test_pruning_keeps_survivor_order(world: World) -> None:
    missiles = [_missile(world, lane, 50.0 * lane) for lane in range(4)]
    doomed = _missile(world, 5, world.height + 100)
    world.obstacles = [missiles[0], doomed, missiles[1], missiles[2], missiles[3]]

    advance_obstacles(world, 1)

    assert world.obstacles == missiles


def test_collision_in_player_lane(world: World) -> None:
    missile = _missile(world, world.player.lane, world.player.y)
    world.obstacles.append(missile)

    assert find_collision(world) is missile


def test_other_lane_at_same_position_is_ignored(world: World) -> None:
    missile = _missile(world, world.player.lane, world.player.y)
    missile.lane = world.player.lane + 1
    world.obstacles.append(missile)

    assert find_collision(world) is None


def test_vertical_overlap_is_strict(world: World) -> None:
    missile = _missile(world, world.player.lane, world.player.y)
    ship = player_hitbox(world, world.player)
    reach = ship.half_h + obstacle_hitbox(missile).half_h
    world.obstacles.append(missile)

    missile.y = world.player.y - reach - 0.5
    assert find_collision(world) is None

    missile.y = world.player.y - reach + 0.5
    assert find_collision(world) is missile


def test_horizontal_overlap_required(world: World) -> None:
    missile = _missile(world, world.player.lane, world.player.y)
    ship = player_hitbox(world, world.player)
    reach = ship.half_w + obstacle_hitbox(missile).half_w
    world.obstacles.append(missile)

    missile.x = ship.x + reach + 0.5
    assert find_collision(world) is None

    missile.x = ship.x + reach - 0.5
    assert find_collision(world) is missile


def test_hitbox_scale_factors(world: World) -> None:
    ship = player_hitbox(world, world.player)
    assert ship.half_w == pytest.approx(38 * 0.35)
    assert ship.half_h == pytest.approx(58 * 0.45)

    box = obstacle_hitbox(_missile(world, 0, 0.0, radius=20.0))
    assert box.half_w == pytest.approx(0.45 * 20.0 * 0.9)
    assert box.half_h == pytest.approx(0.45 * 20.0 * 2.4)


def test_first_hit_wins(world: World) -> None:
    first = _missile(world, world.player.lane, world.player.y - 5)
    second = _missile(world, world.player.lane, world.player.y + 5)
    world.obstacles.extend([first, second])

    assert find_collision(world) is first
