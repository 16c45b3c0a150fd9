"""Player controller: one lane shift per key press."""

from dataclasses import dataclass

from spacerace.engine.world import World


@dataclass
class InputSignals:
    """Pending lane-shift requests.

    Set on key press, cleared when a shift is applied or the key is
    released. Holding a key never shifts more than once.
    """
    left: bool = False
    right: bool = False


class PlayerController:
    """Applies pending shifts to the player's lane, left first."""

    def __init__(self, signals: InputSignals | None = None) -> None:
        self.signals = signals or InputSignals()

    def press(self, direction: str) -> None:
        if direction == "left":
            self.signals.left = True
        elif direction == "right":
            self.signals.right = True

    def release(self, direction: str) -> None:
        if direction == "left":
            self.signals.left = False
        elif direction == "right":
            self.signals.right = False

    def update(self, world: World) -> None:
        player = world.player
        if self.signals.left and player.lane > 0:
            player.lane -= 1
            self.signals.left = False
        if self.signals.right and player.lane < world.lanes - 1:
            player.lane += 1
            self.signals.right = False
