"""Rendering helpers for the gravity sandbox."""

from .camera import Camera
from .draw import (
    draw_bodies,
    draw_body,
    draw_hud,
    draw_orbit_ellipse,
    draw_orbit_line,
    draw_ship,
    ship_outline,
)

__all__ = [
    "Camera",
    "draw_bodies",
    "draw_body",
    "draw_hud",
    "draw_orbit_ellipse",
    "draw_orbit_line",
    "draw_ship",
    "ship_outline",
]
