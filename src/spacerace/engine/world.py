"""World state for a SPACE RACE run.

One ``World`` is owned by the run controller and mutated only inside a
tick; renderers read it as a snapshot.
"""

from dataclasses import dataclass, field
from typing import List
import logging

from spacerace.config.settings import GameSettings
from spacerace.engine.lanes import LaneGeometry

logger = logging.getLogger(__name__)

PLAYER_START_LANE = 1
PLAYER_WIDTH = 38
PLAYER_HEIGHT = 58
# Ship sits this far above the bottom edge
PLAYER_BOTTOM_OFFSET = 90


@dataclass
class Player:
    """The player's ship. Only the lane changes during a run."""
    lane: int = PLAYER_START_LANE
    width: float = PLAYER_WIDTH
    height: float = PLAYER_HEIGHT
    y: float = 0.0


@dataclass
class Obstacle:
    """A falling missile locked to one lane."""
    lane: int
    x: float
    y: float
    radius: float
    speed: float


@dataclass
class LaneWarning:
    """Flashing telegraph shown in a lane before a missile drops."""
    lane: int
    active: bool = False
    flashes_left: int = 0
    timer: float = 0.0
    visible: bool = False

    def clear(self) -> None:
        self.active = False
        self.flashes_left = 0
        self.timer = 0.0
        self.visible = False


@dataclass
class World:
    """Everything the frame loop mutates."""

    geometry: LaneGeometry
    height: int
    speed: float
    player: Player
    warnings: List[LaneWarning]
    obstacles: List[Obstacle] = field(default_factory=list)
    score: float = 0.0
    running: bool = True
    # Run clock and wave deadline, both in ms
    clock_ms: float = 0.0
    next_wave_ms: float = 0.0
    # Lane-marker scroll, wraps every 40 px
    track_offset: float = 0.0

    @classmethod
    def from_settings(cls, settings: GameSettings) -> "World":
        geometry = LaneGeometry(
            width=settings.width,
            lanes=settings.lanes,
            padding=settings.lane_padding,
        )
        player = Player(
            lane=min(PLAYER_START_LANE, settings.lanes - 1),
            y=settings.height - PLAYER_BOTTOM_OFFSET,
        )
        warnings = [LaneWarning(lane=i) for i in range(settings.lanes)]
        logger.debug(
            f"World created: {settings.width}x{settings.height}, "
            f"{settings.lanes} lanes, lane width {geometry.lane_width:.1f}"
        )
        return cls(
            geometry=geometry,
            height=settings.height,
            speed=settings.speed,
            player=player,
            warnings=warnings,
        )

    @property
    def width(self) -> int:
        return self.geometry.width

    @property
    def lanes(self) -> int:
        return self.geometry.lanes

    def lane_center(self, index: int) -> float:
        return self.geometry.lane_center(index)

    def reset(self) -> None:
        """Start a new run in place. The ship keeps its lane."""
        self.score = 0.0
        self.obstacles = []
        for warning in self.warnings:
            warning.clear()
        self.running = True
        self.next_wave_ms = 0.0
