"""Run controller: the per-frame update loop of a SPACE RACE run.

Each tick runs, in order: player shift, warnings and wave timer,
missile motion, collision, score. A collision ends the run; the loop
does nothing until ``restart()``.
"""

import logging
import math
from typing import Callable, Optional

from spacerace.core.events import Event, EventBus, EventType
from spacerace.core.state import State, StateMachine
from spacerace.engine.collision import TIME_SCALE, advance_obstacles, find_collision
from spacerace.engine.player import PlayerController
from spacerace.engine.spawner import ObstacleSpawner
from spacerace.engine.world import Obstacle, World

logger = logging.getLogger(__name__)

RUNNING_STATUS = "Avoid the missiles!"
CRASHED_STATUS = "Crashed! Press Space to restart."

# Score points per ms survived
SCORE_RATE = 0.02
TRACK_SEGMENT = 40.0


class RunController:
    """Owns the world and advances it one frame at a time."""

    def __init__(
        self,
        world: World,
        spawner: Optional[ObstacleSpawner] = None,
        controller: Optional[PlayerController] = None,
        state_machine: Optional[StateMachine] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.world = world
        self.spawner = spawner or ObstacleSpawner()
        self.controller = controller or PlayerController()
        self.state_machine = state_machine or StateMachine()
        self.event_bus = event_bus
        self.status = RUNNING_STATUS

        self._on_run_ended: Optional[Callable[[int], None]] = None

    @property
    def is_running(self) -> bool:
        return self.world.running

    @property
    def display_score(self) -> int:
        return math.floor(self.world.score)

    def set_on_run_ended(self, callback: Callable[[int], None]) -> None:
        """Set the name-entry request, called with the final score."""
        self._on_run_ended = callback

    def tick(self, delta_ms: float) -> bool:
        """Advance one frame.

        Returns:
            True if the ship crashed during this tick
        """
        world = self.world
        if not world.running:
            return False

        world.clock_ms += delta_ms
        self.controller.update(world)
        world.track_offset = (world.track_offset + delta_ms * world.speed * TIME_SCALE) % TRACK_SEGMENT
        self.spawner.update(world, delta_ms)
        advance_obstacles(world, delta_ms)

        hit = find_collision(world)
        if hit is not None:
            self._end_run(hit)
            return True

        world.score += delta_ms * SCORE_RATE
        return False

    def restart(self) -> bool:
        """Start a new run. Ignored while a run is in progress."""
        if self.world.running:
            return False

        self.world.reset()
        self.status = RUNNING_STATUS
        self.state_machine.transition(
            State.RUNNING,
            status=self.status,
            runs=self.state_machine.context.runs + 1,
        )
        logger.info(f"Run {self.state_machine.context.runs} started")
        self._emit(EventType.RUN_STARTED, {"run": self.state_machine.context.runs})
        return True

    def _end_run(self, obstacle: Obstacle) -> None:
        self.world.running = False
        self.status = CRASHED_STATUS
        score = self.display_score

        logger.info(f"Crashed in lane {obstacle.lane} with score {score}")
        self.state_machine.transition(State.ENDED, status=self.status, final_score=score)
        self._emit(EventType.RUN_ENDED, {"score": score, "lane": obstacle.lane})

        if self._on_run_ended:
            self._on_run_ended(score)

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self.event_bus:
            self.event_bus.emit(Event(event_type, data=data, source="run"))
