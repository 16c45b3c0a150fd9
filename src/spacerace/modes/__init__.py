"""Game modes for SPACE RACE."""

from spacerace.modes.base import BaseMode, ModeContext, ModeResult, ModePhase
from spacerace.modes.space_race import SpaceRaceMode

__all__ = [
    "BaseMode",
    "ModeContext",
    "ModeResult",
    "ModePhase",
    "SpaceRaceMode",
]
