"""Basic drawing primitives for RGB numpy buffers.

All shapes take float coordinates, clip to the buffer and support an
``alpha`` for blending over what is already drawn.
"""

import math
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def _blend(region: Buffer, mask, color: Color, alpha: float) -> None:
    if alpha >= 1.0:
        region[mask] = color
        return
    src = region[mask].astype(np.float32)
    region[mask] = (src * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha).astype(np.uint8)


def _bounds(buffer: Buffer, x0: float, y0: float, x1: float, y1: float) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    return (
        max(0, min(int(math.floor(x0)), w)),
        max(0, min(int(math.floor(y0)), h)),
        max(0, min(int(math.ceil(x1)), w)),
        max(0, min(int(math.ceil(y1)), h)),
    )


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled rectangle with its top-left corner at (x, y)."""
    x1, y1, x2, y2 = _bounds(buffer, x, y, x + width, y + height)
    if x1 >= x2 or y1 >= y2:
        return
    region = buffer[y1:y2, x1:x2]
    _blend(region, np.ones(region.shape[:2], dtype=bool), color, alpha)


def draw_triangle(
    buffer: Buffer,
    p1: Point,
    p2: Point,
    p3: Point,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled triangle (either winding)."""
    xs = (p1[0], p2[0], p3[0])
    ys = (p1[1], p2[1], p3[1])
    x1, y1, x2, y2 = _bounds(buffer, min(xs), min(ys), max(xs), max(ys))
    if x1 >= x2 or y1 >= y2:
        return

    yy, xx = np.mgrid[y1:y2, x1:x2]
    px = xx + 0.5
    py = yy + 0.5

    def edge(a: Point, b: Point):
        return (b[0] - a[0]) * (py - a[1]) - (b[1] - a[1]) * (px - a[0])

    e1, e2, e3 = edge(p1, p2), edge(p2, p3), edge(p3, p1)
    mask = ((e1 >= 0) & (e2 >= 0) & (e3 >= 0)) | ((e1 <= 0) & (e2 <= 0) & (e3 <= 0))
    _blend(buffer[y1:y2, x1:x2], mask, color, alpha)


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled axis-aligned ellipse."""
    if rx <= 0 or ry <= 0:
        return
    x1, y1, x2, y2 = _bounds(buffer, cx - rx, cy - ry, cx + rx, cy + ry)
    if x1 >= x2 or y1 >= y2:
        return
    yy, xx = np.mgrid[y1:y2, x1:x2]
    mask = ((xx + 0.5 - cx) / rx) ** 2 + ((yy + 0.5 - cy) / ry) ** 2 <= 1.0
    _blend(buffer[y1:y2, x1:x2], mask, color, alpha)


def draw_vertical_gradient(
    buffer: Buffer,
    x: float,
    width: float,
    top: Color,
    bottom: Color,
    top_alpha: float,
    bottom_alpha: float,
) -> None:
    """Blend a full-height vertical gradient band over the buffer."""
    x1, _, x2, _ = _bounds(buffer, x, 0, x + width, 0)
    h = buffer.shape[0]
    if x1 >= x2 or h == 0:
        return
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None, None]
    color = np.array(top, dtype=np.float32) + (np.array(bottom, dtype=np.float32) - np.array(top, dtype=np.float32)) * t
    alpha = top_alpha + (bottom_alpha - top_alpha) * t
    region = buffer[:, x1:x2].astype(np.float32)
    buffer[:, x1:x2] = (region * (1.0 - alpha) + color * alpha).astype(np.uint8)


def draw_dashed_vline(
    buffer: Buffer,
    x: float,
    thickness: float,
    dash: float,
    gap: float,
    color: Color,
    alpha: float = 1.0,
    offset: float = 0.0,
) -> None:
    """Draw a full-height dashed vertical line centered on x."""
    h = buffer.shape[0]
    period = dash + gap
    y = offset % period - period
    while y < h:
        draw_rect(buffer, x - thickness / 2, y, thickness, dash, color, alpha)
        y += period
