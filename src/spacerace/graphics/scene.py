"""Draws a world snapshot: track, warnings, missiles and the ship."""

import logging
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from spacerace.engine.world import Obstacle, World
from spacerace.graphics.primitives import (
    draw_dashed_vline,
    draw_ellipse,
    draw_rect,
    draw_triangle,
    draw_vertical_gradient,
    fill,
)

logger = logging.getLogger(__name__)

GRASS = (31, 94, 31)
TRACK = (10, 20, 40)
LANE_MARKER = (120, 200, 255)
RAIL = (160, 210, 255)
KERB = (235, 235, 235)
WARNING = (255, 70, 70)

MISSILE_BODY = (214, 215, 223)
MISSILE_NOSE = (255, 92, 92)
MISSILE_WINDOW = (30, 38, 58)
MISSILE_FIN = (58, 74, 107)
MISSILE_FLAME = (255, 180, 80)

SHIP_RED = (201, 24, 43)
SHIP_NOSE = (255, 59, 79)
SHIP_COCKPIT = (30, 43, 68)
SHIP_WHEEL = (10, 15, 31)
SHIP_WING = (244, 244, 246)


class SceneRenderer:
    """Renders the playfield into an (H, W, 3) uint8 buffer.

    The static part of the track is cached per buffer size; lane
    markers scroll with ``world.track_offset``.
    """

    def __init__(self) -> None:
        self._background: Optional[NDArray[np.uint8]] = None
        self._background_key: Optional[Tuple[int, ...]] = None

    def render(self, buffer: NDArray[np.uint8], world: World) -> None:
        self._draw_track(buffer, world)
        self._draw_warnings(buffer, world)
        for obstacle in world.obstacles:
            self._draw_missile(buffer, obstacle)
        self._draw_ship(buffer, world)

    def _static_track(self, buffer: NDArray[np.uint8], world: World) -> NDArray[np.uint8]:
        key = (*buffer.shape, world.lanes, world.geometry.padding)
        if self._background is not None and self._background_key == key:
            return self._background

        background = np.zeros_like(buffer)
        width = world.width
        pad = world.geometry.padding

        fill(background, GRASS)
        draw_vertical_gradient(
            background, pad - 10, width - pad * 2 + 20,
            top=(100, 160, 255), bottom=(20, 40, 80),
            top_alpha=0.12, bottom_alpha=0.5,
        )
        draw_rect(background, pad + 4, 0, width - pad * 2 - 8, background.shape[0], TRACK, alpha=0.85)

        # Rails, then dashed kerbs outside them
        for x in (pad - 12, width - pad + 12):
            draw_rect(background, x - 1.5, 0, 3, background.shape[0], RAIL, alpha=0.55)
        for x in (pad - 20, width - pad + 20):
            draw_dashed_vline(background, x, 2, 6, 6, KERB, alpha=0.8)

        self._background = background
        self._background_key = key
        logger.debug(f"Track background cached for {buffer.shape[1]}x{buffer.shape[0]}")
        return background

    def _draw_track(self, buffer: NDArray[np.uint8], world: World) -> None:
        np.copyto(buffer, self._static_track(buffer, world))
        for lane in range(1, world.lanes):
            x = world.geometry.lane_left(lane)
            draw_dashed_vline(buffer, x, 4, 18, 22, LANE_MARKER, alpha=0.35, offset=world.track_offset)

    def _draw_warnings(self, buffer: NDArray[np.uint8], world: World) -> None:
        lane_width = world.geometry.lane_width
        for warning in world.warnings:
            if not warning.active or not warning.visible:
                continue
            x = world.geometry.lane_left(warning.lane)
            draw_rect(buffer, x + 4, 0, lane_width - 8, buffer.shape[0], WARNING, alpha=0.7)

    def _draw_missile(self, buffer: NDArray[np.uint8], obstacle: Obstacle) -> None:
        # Nose points down, flame up
        x, y = obstacle.x, obstacle.y
        w = obstacle.radius * 0.9
        h = obstacle.radius * 2.4

        draw_rect(buffer, x - w * 0.45, y - h * 0.45, w * 0.9, h * 0.9, MISSILE_BODY)
        draw_triangle(buffer, (x, y + h * 0.65), (x - w * 0.45, y + h * 0.2), (x + w * 0.45, y + h * 0.2), MISSILE_NOSE)
        draw_rect(buffer, x - w * 0.2, y - h * 0.1, w * 0.4, h * 0.25, MISSILE_WINDOW)
        for side in (-1, 1):
            draw_triangle(
                buffer,
                (x + side * w * 0.45, y - h * 0.15),
                (x + side * w * 0.75, y - h * 0.35),
                (x + side * w * 0.45, y - h * 0.35),
                MISSILE_FIN,
            )
        draw_triangle(buffer, (x, y - h * 0.55), (x - w * 0.25, y - h * 0.2), (x + w * 0.25, y - h * 0.2), MISSILE_FLAME, alpha=0.9)

    def _draw_ship(self, buffer: NDArray[np.uint8], world: World) -> None:
        player = world.player
        x = world.lane_center(player.lane)
        y = player.y
        bw = player.width * 1.05
        bh = player.height * 1.05

        def rect(left: float, top: float, width: float, height: float, color) -> None:
            draw_rect(buffer, x + bw * left, y + bh * top, bw * width, bh * height, color)

        rect(-0.18, -0.55, 0.36, 1.1, SHIP_RED)
        nose = (x, y - bh * 0.7)
        tail = (x, y - bh * 0.15)
        draw_triangle(buffer, nose, (x + bw * 0.18, y - bh * 0.35), tail, SHIP_NOSE)
        draw_triangle(buffer, nose, (x - bw * 0.18, y - bh * 0.35), tail, SHIP_NOSE)
        rect(-0.14, -0.18, 0.28, 0.25, SHIP_COCKPIT)
        for left in (-0.5, 0.32):
            for top in (-0.28, 0.12):
                rect(left, top, 0.18, 0.24, SHIP_WHEEL)
        rect(-0.6, -0.48, 1.2, 0.12, SHIP_WING)
        rect(-0.55, 0.42, 1.1, 0.16, SHIP_RED)
        draw_ellipse(buffer, x, y - bh * 0.42, bw * 0.1, bh * 0.08, (255, 255, 255), alpha=0.65)
