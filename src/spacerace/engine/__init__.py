"""Game engine: world model, spawner, player, motion and run loop."""

from spacerace.engine.lanes import LaneGeometry
from spacerace.engine.world import World, Player, Obstacle, LaneWarning
from spacerace.engine.spawner import ObstacleSpawner
from spacerace.engine.player import PlayerController, InputSignals
from spacerace.engine.collision import advance_obstacles, find_collision
from spacerace.engine.run import RunController

__all__ = [
    "LaneGeometry",
    "World",
    "Player",
    "Obstacle",
    "LaneWarning",
    "ObstacleSpawner",
    "PlayerController",
    "InputSignals",
    "advance_obstacles",
    "find_collision",
    "RunController",
]
