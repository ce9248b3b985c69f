from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import pygame

from ..core.model import Appearance, Probe, SimState
from ..core.orbit import Ellipse
from .camera import Camera


def ship_outline(probe: Probe, height: float) -> np.ndarray:
    """Triangle in world coordinates, nose pointing along ``probe.rot``."""

    local = np.array(
        [
            [-height / 3.0, -height / 2.0],
            [2.0 * height / 3.0, 0.0],
            [-height / 3.0, height / 2.0],
        ]
    )
    cos_r = math.cos(probe.rot)
    sin_r = math.sin(probe.rot)
    rot = np.array([[cos_r, -sin_r], [sin_r, cos_r]])
    return local @ rot.T + probe.position


def _visible(camera: Camera, position: np.ndarray, radius: float) -> bool:
    x0, y0, x1, y1 = camera.view_rect()
    return x0 - radius <= position[0] <= x1 + radius and y0 - radius <= position[1] <= y1 + radius


def draw_body(
    surface: pygame.Surface,
    camera: Camera,
    position: np.ndarray,
    appearance: Appearance,
) -> None:
    if not _visible(camera, position, appearance.radius):
        return
    radius = max(1, camera.scale_length(appearance.radius))
    pygame.draw.circle(surface, appearance.color, camera.world_to_screen(*position), radius)


def draw_bodies(surface: pygame.Surface, camera: Camera, state: SimState) -> None:
    for index, body in enumerate(state.bodies):
        appearance = state.appearance_of(index)
        if appearance is None:
            continue
        draw_body(surface, camera, body.position, appearance)


def draw_ship(
    surface: pygame.Surface,
    camera: Camera,
    probe: Probe,
    *,
    height: float,
    color: tuple[int, int, int],
) -> None:
    points = camera.world_to_screen_many(ship_outline(probe, height))
    pygame.draw.polygon(surface, color, points)


def draw_orbit_line(
    surface: pygame.Surface,
    color: tuple[int, int, int] | tuple[int, int, int, int],
    points: Sequence[tuple[int, int]],
    width: int,
) -> None:
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, True, points)
    else:
        pygame.draw.lines(surface, color, True, points, width)


def draw_orbit_ellipse(
    surface: pygame.Surface,
    camera: Camera,
    ellipse: Ellipse,
    *,
    color: tuple[int, int, int],
    width: int,
    segments: int,
) -> None:
    if not np.all(np.isfinite(ellipse.center)):
        return
    points = camera.world_to_screen_many(ellipse.points(segments))
    draw_orbit_line(surface, color, points, width)


def draw_hud(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: Sequence[str],
    *,
    color: tuple[int, int, int],
    origin: tuple[int, int] = (12, 10),
) -> None:
    x, y = origin
    for line in lines:
        text = font.render(line, True, color)
        surface.blit(text, (x, y))
        y += text.get_height() + 2
