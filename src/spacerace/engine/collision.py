"""Missile motion and ship collision.

Ship and missiles are treated as centered axis-aligned boxes, scaled
down from the nominal sprite sizes.
"""

from dataclasses import dataclass
from typing import Optional

from spacerace.engine.world import Obstacle, Player, World

# Converts speed units to px per ms
TIME_SCALE = 0.06
# Missiles are removed this far below the bottom edge
OFFSCREEN_MARGIN = 60.0

PLAYER_HALF_WIDTH = 0.35
PLAYER_HALF_HEIGHT = 0.45
MISSILE_WIDTH = 0.9
MISSILE_HEIGHT = 2.4
MISSILE_HALF = 0.45


@dataclass(frozen=True)
class HitBox:
    x: float
    y: float
    half_w: float
    half_h: float

    def overlaps(self, other: "HitBox") -> bool:
        return (
            abs(self.x - other.x) < self.half_w + other.half_w
            and abs(self.y - other.y) < self.half_h + other.half_h
        )


def player_hitbox(world: World, player: Player) -> HitBox:
    return HitBox(
        x=world.lane_center(player.lane),
        y=player.y,
        half_w=player.width * PLAYER_HALF_WIDTH,
        half_h=player.height * PLAYER_HALF_HEIGHT,
    )


def obstacle_hitbox(obstacle: Obstacle) -> HitBox:
    return HitBox(
        x=obstacle.x,
        y=obstacle.y,
        half_w=obstacle.radius * MISSILE_WIDTH * MISSILE_HALF,
        half_h=obstacle.radius * MISSILE_HEIGHT * MISSILE_HALF,
    )


def advance_obstacles(world: World, delta_ms: float) -> None:
    """Move missiles down and drop the ones that left the screen."""
    for obstacle in world.obstacles:
        obstacle.y += obstacle.speed * delta_ms * TIME_SCALE
    limit = world.height + OFFSCREEN_MARGIN
    world.obstacles = [o for o in world.obstacles if o.y < limit]


def find_collision(world: World) -> Optional[Obstacle]:
    """Return the first missile in the ship's lane that overlaps it."""
    player = world.player
    ship = player_hitbox(world, player)
    for obstacle in world.obstacles:
        if obstacle.lane != player.lane:
            continue
        if ship.overlaps(obstacle_hitbox(obstacle)):
            return obstacle
    return None
