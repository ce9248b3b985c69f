"""Configuration dataclasses for the gravity sandbox."""
from __future__ import annotations

from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when a configuration value is out of range or inconsistent."""


def _check_range(name: str, bounds: tuple[float, float], *, minimum: float = 0.0) -> None:
    lo, hi = bounds
    if lo < minimum or hi < lo:
        raise ConfigurationError(
            f"{name} must satisfy {minimum} <= low <= high, got ({lo}, {hi})"
        )


@dataclass(frozen=True)
class PhysicsCfg:
    # Stylized units: G = 1, distances in pixels at zoom 1.
    gravitational_constant: float = 1.0
    thrust_acceleration: float = 10.0
    steps_per_second: int = 60
    max_substeps: int = 10
    log_every_steps: int = 20

    def __post_init__(self) -> None:
        if self.gravitational_constant <= 0.0:
            raise ConfigurationError("gravitational_constant must be positive")
        if self.steps_per_second <= 0:
            raise ConfigurationError("steps_per_second must be positive")
        if self.max_substeps <= 0:
            raise ConfigurationError("max_substeps must be positive")
        if self.log_every_steps <= 0:
            raise ConfigurationError("log_every_steps must be positive")

    @property
    def dt(self) -> float:
        return 1.0 / self.steps_per_second


@dataclass(frozen=True)
class PlanetClassCfg:
    """Sampling ranges that distinguish one kind of planet from another."""

    name: str
    radius_range: tuple[float, float]
    density_range: tuple[float, float]
    orbit_range: tuple[float, float]
    hue_range: tuple[float, float]
    saturation: float = 68.0
    lightness: float = 40.0

    def __post_init__(self) -> None:
        _check_range(f"{self.name}.radius_range", self.radius_range)
        _check_range(f"{self.name}.density_range", self.density_range)
        _check_range(f"{self.name}.orbit_range", self.orbit_range)
        _check_range(f"{self.name}.hue_range", self.hue_range)
        if self.hue_range[1] > 360.0:
            raise ConfigurationError(f"{self.name}.hue_range must stay within 0..360")


ROCKY_PLANET = PlanetClassCfg(
    name="rocky",
    radius_range=(5.0, 20.0),
    density_range=(0.1, 1.0),
    orbit_range=(500.0, 2000.0),
    hue_range=(0.0, 150.0),
)

GAS_GIANT = PlanetClassCfg(
    name="gas_giant",
    radius_range=(20.0, 50.0),
    density_range=(0.02, 0.1),
    orbit_range=(2000.0, 4000.0),
    hue_range=(150.0, 320.0),
)


@dataclass(frozen=True)
class GenerationCfg:
    star_radius_range: tuple[float, float] = (100.0, 200.0)
    star_density_range: tuple[float, float] = (0.01, 0.05)
    star_hsluv: tuple[float, float, float] = (70.0, 100.0, 90.0)
    rocky: PlanetClassCfg = ROCKY_PLANET
    gas_giant: PlanetClassCfg = GAS_GIANT
    rocky_count: int = 4
    gas_giant_count: int = 4
    player_start_offset: tuple[float, float] = (250.0, 0.0)
    player_clockwise: bool = True

    def __post_init__(self) -> None:
        _check_range("star_radius_range", self.star_radius_range)
        _check_range("star_density_range", self.star_density_range)
        if self.star_radius_range[0] <= 0.0 or self.star_density_range[0] <= 0.0:
            # zero radius or density would give a massless star
            raise ConfigurationError("star radius and density must be positive")
        if self.rocky_count < 0 or self.gas_giant_count < 0:
            raise ConfigurationError("planet counts cannot be negative")


@dataclass(frozen=True)
class RenderCfg:
    width: int = 800
    height: int = 600
    window_title: str = "Gravity Sandbox"
    background_color: tuple[int, int, int] = (0, 0, 0)
    ship_color: tuple[int, int, int] = (128, 153, 179)
    ship_height: float = 10.0
    orbit_color: tuple[int, int, int] = (255, 0, 0)
    orbit_line_width: int = 2
    orbit_segments: int = 180
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_font_size: int = 18
    zoom_step: float = 1.1
    initial_ppm: float = 1.0
    min_ppm: float = 0.01
    max_ppm: float = 20.0
    frame_rate_cap: int = 120


PHYSICS_CFG = PhysicsCfg()
GENERATION_CFG = GenerationCfg()
RENDER_CFG = RenderCfg()


__all__ = [
    "ConfigurationError",
    "GAS_GIANT",
    "GENERATION_CFG",
    "GenerationCfg",
    "PHYSICS_CFG",
    "PhysicsCfg",
    "PlanetClassCfg",
    "RENDER_CFG",
    "ROCKY_PLANET",
    "RenderCfg",
]
