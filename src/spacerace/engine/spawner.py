"""Obstacle spawner: flash a warning in a lane, then drop a missile there.

Each lane runs its own cycle:

    INACTIVE --wave picks lane--> WARNING --6 flashes--> INACTIVE + missile

A wave that picks a lane whose warning is still flashing is dropped,
not retried; the next wave is scheduled either way.
"""

import logging
import random
from typing import List, Optional

from spacerace.engine.world import LaneWarning, Obstacle, World

logger = logging.getLogger(__name__)


class ObstacleSpawner:
    """Drives warnings and wave timing for a world."""

    FLASH_COUNT = 6
    FLASH_INTERVAL_MS = 180.0

    WAVE_MIN_MS = 900.0
    WAVE_MAX_MS = 1800.0

    RADIUS_MIN = 22.0
    RADIUS_SPREAD = 8.0
    SPEED_SPREAD = 1.4
    SPAWN_Y = -40.0

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def update(self, world: World, delta_ms: float) -> List[Obstacle]:
        """Advance warnings, then fire a wave if its deadline has passed.

        Returns:
            Obstacles released this tick
        """
        spawned = self.update_warnings(world, delta_ms)
        if world.clock_ms >= world.next_wave_ms:
            self.spawn_wave(world)
        return spawned

    def update_warnings(self, world: World, delta_ms: float) -> List[Obstacle]:
        spawned = []
        for warning in world.warnings:
            if not warning.active:
                continue
            warning.timer += delta_ms
            if warning.timer < self.FLASH_INTERVAL_MS:
                continue
            warning.timer = 0.0
            warning.visible = not warning.visible
            warning.flashes_left -= 1
            if warning.flashes_left <= 0:
                warning.clear()
                spawned.append(self.spawn_obstacle(world, warning.lane))
        return spawned

    def spawn_wave(self, world: World) -> Optional[LaneWarning]:
        """Try to start a warning in a random lane and schedule the next wave."""
        lane = self._rng.randrange(world.lanes)
        warning = self.trigger_warning(world, lane)
        world.next_wave_ms = world.clock_ms + self._rng.uniform(self.WAVE_MIN_MS, self.WAVE_MAX_MS)
        return warning

    def trigger_warning(self, world: World, lane: int) -> Optional[LaneWarning]:
        """Start the flash cycle in ``lane``. Returns None if already flashing."""
        warning = world.warnings[lane]
        if warning.active:
            logger.debug(f"Wave skipped: lane {lane} already warning")
            return None
        warning.active = True
        warning.flashes_left = self.FLASH_COUNT
        warning.timer = 0.0
        warning.visible = True
        logger.debug(f"Warning started in lane {lane}")
        return warning

    def spawn_obstacle(self, world: World, lane: int) -> Obstacle:
        obstacle = Obstacle(
            lane=lane,
            x=world.lane_center(lane),
            y=self.SPAWN_Y,
            radius=self.RADIUS_MIN + self._rng.random() * self.RADIUS_SPREAD,
            speed=world.speed + self._rng.random() * self.SPEED_SPREAD,
        )
        world.obstacles.append(obstacle)
        logger.debug(f"Missile launched in lane {lane} (r={obstacle.radius:.1f}, v={obstacle.speed:.2f})")
        return obstacle
