"""Procedural star system generation.

Every random draw goes through an explicitly passed
:class:`numpy.random.Generator`, so a seed fully determines the system.
"""
from __future__ import annotations

import logging
import math

import hsluv
import numpy as np

from .config import GENERATION_CFG, PHYSICS_CFG, GenerationCfg, PhysicsCfg, PlanetClassCfg
from .model import Appearance, Body, Probe, SimState
from .physics import G, circular_orbit_velocity

logger = logging.getLogger(__name__)


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def stylized_mass(radius: float, density: float) -> float:
    # (2/3) * 2pi * r^3, i.e. the volume of a sphere of this radius
    volume = 2.0 / 3.0 * 2.0 * math.pi * radius**3
    return volume * density


def hsluv_color(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    """Convert an HSLuv triple to an 8-bit RGB tuple."""

    rgb = hsluv.hsluv_to_rgb([hue, saturation, lightness])
    return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in rgb)


def _uniform(rng: np.random.Generator, bounds: tuple[float, float]) -> float:
    return float(rng.uniform(bounds[0], bounds[1]))


def random_star(
    rng: np.random.Generator,
    cfg: GenerationCfg = GENERATION_CFG,
) -> tuple[Body, Appearance]:
    radius = _uniform(rng, cfg.star_radius_range)
    density = _uniform(rng, cfg.star_density_range)
    body = Body(position=(0.0, 0.0), velocity=(0.0, 0.0), mass=stylized_mass(radius, density))
    return body, Appearance(radius=radius, color=hsluv_color(*cfg.star_hsluv))


def random_planet(
    rng: np.random.Generator,
    star: Body,
    planet_class: PlanetClassCfg,
    g: float = G,
) -> tuple[Body, Appearance]:
    """Planet of ``planet_class`` on a circular orbit around ``star``."""

    orbit = _uniform(rng, planet_class.orbit_range)
    angle = float(rng.uniform(0.0, 2.0 * math.pi))
    position = star.position + orbit * np.array([math.cos(angle), math.sin(angle)])
    clockwise = bool(rng.random() < 0.5)

    radius = _uniform(rng, planet_class.radius_range)
    density = _uniform(rng, planet_class.density_range)
    hue = _uniform(rng, planet_class.hue_range)

    body = Body(
        position=position,
        velocity=circular_orbit_velocity(star, position, clockwise, g),
        mass=stylized_mass(radius, density),
    )
    color = hsluv_color(hue, planet_class.saturation, planet_class.lightness)
    return body, Appearance(radius=radius, color=color)


def random_rocky_planet(
    rng: np.random.Generator,
    star: Body,
    cfg: GenerationCfg = GENERATION_CFG,
    g: float = G,
) -> tuple[Body, Appearance]:
    return random_planet(rng, star, cfg.rocky, g)


def random_gas_giant(
    rng: np.random.Generator,
    star: Body,
    cfg: GenerationCfg = GENERATION_CFG,
    g: float = G,
) -> tuple[Body, Appearance]:
    return random_planet(rng, star, cfg.gas_giant, g)


def spawn_probe(
    parent: Body,
    offset: tuple[float, float],
    clockwise: bool,
    g: float = G,
) -> Probe:
    position = parent.position + np.asarray(offset, dtype=float)
    return Probe(position=position, velocity=circular_orbit_velocity(parent, position, clockwise, g))


def generate_system(
    rng: np.random.Generator,
    cfg: GenerationCfg = GENERATION_CFG,
    physics: PhysicsCfg = PHYSICS_CFG,
) -> SimState:
    """Star at index 0, then rocky planets, then gas giants, plus the probe."""

    g = physics.gravitational_constant
    star, star_look = random_star(rng, cfg)
    state = SimState()
    state.add_body(star, star_look)

    for _ in range(cfg.rocky_count):
        state.add_body(*random_rocky_planet(rng, star, cfg, g))
    for _ in range(cfg.gas_giant_count):
        state.add_body(*random_gas_giant(rng, star, cfg, g))

    state.probe = spawn_probe(star, cfg.player_start_offset, cfg.player_clockwise, g)
    logger.debug(
        "Generated system: star mass %.4g, %d rocky, %d gas giants",
        star.mass,
        cfg.rocky_count,
        cfg.gas_giant_count,
    )
    return state


__all__ = [
    "generate_system",
    "hsluv_color",
    "make_rng",
    "random_gas_giant",
    "random_planet",
    "random_rocky_planet",
    "random_star",
    "spawn_probe",
    "stylized_mass",
]
