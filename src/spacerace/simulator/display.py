"""
Playfield display backed by a numpy buffer.

The game draws into ``buffer``; the window turns it into a pygame
surface once per frame.
"""

import pygame
import numpy as np
from numpy.typing import NDArray


class GameDisplay:
    """RGB buffer of the playfield with pygame presentation."""

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def buffer(self) -> NDArray[np.uint8]:
        """Live buffer; draw into it directly."""
        return self._buffer

    def render(self, size: tuple[int, int] | None = None) -> pygame.Surface:
        """
        Render buffer to a pygame surface.

        Args:
            size: Target (width, height); None keeps native size

        Returns:
            pygame.Surface with rendered playfield
        """
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        if size is None or size == (self._width, self._height):
            return surface
        return pygame.transform.smoothscale(surface, size)
