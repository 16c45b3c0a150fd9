"""Graphics module for SPACE RACE rendering."""

from spacerace.graphics.scene import SceneRenderer
from spacerace.graphics.primitives import (
    draw_rect,
    draw_triangle,
    draw_ellipse,
    draw_dashed_vline,
    draw_vertical_gradient,
    fill,
)

__all__ = [
    "SceneRenderer",
    "draw_rect",
    "draw_triangle",
    "draw_ellipse",
    "draw_dashed_vline",
    "draw_vertical_gradient",
    "fill",
]
