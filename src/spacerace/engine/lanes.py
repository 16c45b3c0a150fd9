"""Lane geometry: maps lane indices to pixel positions on the track."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LaneGeometry:
    """Evenly divided lanes between two side paddings.

    Indices are not bounds-checked; callers keep them in ``0..lanes-1``.
    """

    width: int
    lanes: int
    padding: float

    @property
    def lane_width(self) -> float:
        return (self.width - self.padding * 2) / self.lanes

    def lane_left(self, index: int) -> float:
        """Left boundary x of a lane."""
        return self.padding + self.lane_width * index

    def lane_center(self, index: int) -> float:
        """Center x of a lane."""
        return self.padding + self.lane_width * index + self.lane_width / 2
