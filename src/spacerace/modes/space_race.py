"""SPACE RACE - dodge the missiles.

The ship flies up an 8-lane track. Missiles are telegraphed by a
flashing lane before they drop; switch lanes to stay clear. Score
grows with survival time. After a crash the pilot enters a 3-letter
code for the leaderboard and presses Space to fly again.
"""

import logging
import random
from typing import Callable, List, Optional

import numpy as np
from numpy.typing import NDArray

from spacerace.config.settings import GameSettings
from spacerace.core.events import Event, EventType
from spacerace.engine.player import PlayerController
from spacerace.engine.run import RunController
from spacerace.engine.spawner import ObstacleSpawner
from spacerace.engine.world import World
from spacerace.graphics.scene import SceneRenderer
from spacerace.modes.base import BaseMode, ModeContext, ModePhase, ModeResult
from spacerace.scores.names import DEFAULT_NAME, normalize_name
from spacerace.scores.storage import MemoryStorage
from spacerace.scores.store import HighScoreEntry, HighScoreStore

logger = logging.getLogger(__name__)


class SpaceRaceMode(BaseMode):
    """Lane-dodging run with a persistent top-10 leaderboard."""

    name = "space_race"

    def __init__(
        self,
        context: ModeContext,
        settings: Optional[GameSettings] = None,
        store: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(context)
        self.settings = settings or GameSettings(
            width=context.main_width, height=context.main_height
        )
        self.store = store or HighScoreStore(MemoryStorage())
        self._rng = rng or random.Random(self.settings.seed)
        self._renderer = SceneRenderer()

        self.run: Optional[RunController] = None
        self.pilot_name = DEFAULT_NAME
        self._awaiting_name = False
        self._final_score = 0
        self._name_entry: Optional[Callable[[int], None]] = None

    @property
    def world(self) -> Optional[World]:
        return self.run.world if self.run else None

    @property
    def score(self) -> int:
        return self.run.display_score if self.run else 0

    @property
    def status(self) -> str:
        return self.run.status if self.run else ""

    @property
    def awaiting_name(self) -> bool:
        return self._awaiting_name

    def set_name_entry(self, callback: Callable[[int], None]) -> None:
        """Set the prompt shown after a crash; called with the final score."""
        self._name_entry = callback

    def on_enter(self) -> None:
        world = World.from_settings(self.settings)
        self.run = RunController(
            world,
            spawner=ObstacleSpawner(self._rng),
            controller=PlayerController(),
            state_machine=self.context.state_machine,
            event_bus=self.context.event_bus,
        )
        self.run.set_on_run_ended(self._on_crash)
        self._awaiting_name = False
        self.change_phase(ModePhase.ACTIVE)
        self.emit_event(EventType.RUN_STARTED, {"run": self.context.state_machine.context.runs})

    def on_exit(self) -> None:
        self._awaiting_name = False

    def on_update(self, delta_ms: float) -> None:
        if self.phase != ModePhase.ACTIVE or self.run is None:
            return
        self.run.tick(delta_ms)

    def on_input(self, event: Event) -> bool:
        if self.run is None:
            return False

        if event.type == EventType.ARCADE_LEFT:
            self.run.controller.press("left")
            return True
        if event.type == EventType.ARCADE_RIGHT:
            self.run.controller.press("right")
            return True
        if event.type == EventType.ARCADE_LEFT_RELEASE:
            self.run.controller.release("left")
            return True
        if event.type == EventType.ARCADE_RIGHT_RELEASE:
            self.run.controller.release("right")
            return True

        if event.type == EventType.BUTTON_PRESS:
            if self.phase != ModePhase.RESULT or self._awaiting_name:
                return False
            if self.run.restart():
                self.change_phase(ModePhase.ACTIVE)
            return True

        return False

    def submit_name(self, raw: str) -> Optional[HighScoreEntry]:
        """Finish name entry and record the last run's score."""
        if not self._awaiting_name:
            return None
        self._awaiting_name = False
        self.pilot_name = normalize_name(raw)
        self.emit_event(EventType.NAME_ENTERED, {"name": self.pilot_name})

        entry = self.store.record(self.pilot_name, self._final_score)
        if entry is not None:
            self.emit_event(EventType.SCORE_RECORDED, {"name": entry.name, "score": entry.score})
        return entry

    def skip_name(self) -> None:
        """Close name entry without saving."""
        if self._awaiting_name:
            logger.info("Name entry skipped")
        self._awaiting_name = False

    def leaderboard(self) -> List[HighScoreEntry]:
        return self.store.load()

    def render_main(self, buffer: NDArray[np.uint8]) -> None:
        if self.world is not None:
            self._renderer.render(buffer, self.world)

    def _on_crash(self, score: int) -> None:
        self._final_score = score
        self._awaiting_name = True
        self.complete(ModeResult(
            mode_name=self.name,
            success=score > 0,
            data={"score": score},
            display_text=f"SCORE {score}",
        ))
        if self._name_entry:
            self._name_entry(score)
