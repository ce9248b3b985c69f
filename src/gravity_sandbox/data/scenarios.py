"""Fixed starting conditions for reproducible runs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..core.config import PHYSICS_CFG, PhysicsCfg
from ..core.generation import spawn_probe
from ..core.model import Appearance, Body, Probe, SimState
from ..core.physics import circular_orbit_velocity

SUN_COLOR = (255, 223, 128)
PLANET_COLOR = (94, 145, 201)


@dataclass(frozen=True)
class Scenario:
    key: str
    name: str
    description: str
    build: Callable[[PhysicsCfg], SimState]

    def create(self, cfg: PhysicsCfg = PHYSICS_CFG) -> SimState:
        return self.build(cfg)


def _lone_star(cfg: PhysicsCfg) -> SimState:
    g = cfg.gravitational_constant
    state = SimState()
    star = Body(position=(0.0, 0.0), velocity=(0.0, 0.0), mass=1e6)
    state.add_body(star, Appearance(radius=40.0, color=SUN_COLOR))
    state.probe = spawn_probe(star, (250.0, 0.0), clockwise=True, g=g)
    return state


def _star_and_planet(cfg: PhysicsCfg) -> SimState:
    g = cfg.gravitational_constant
    state = SimState()
    star = Body(position=(0.0, 0.0), velocity=(0.0, 0.0), mass=1e6)
    planet_position = (1000.0, 0.0)
    planet = Body(
        position=planet_position,
        velocity=circular_orbit_velocity(star, planet_position, clockwise=False, g=g),
        mass=2_000.0,
    )
    state.add_body(star, Appearance(radius=40.0, color=SUN_COLOR))
    state.add_body(planet, Appearance(radius=12.0, color=PLANET_COLOR))
    state.probe = spawn_probe(star, (250.0, 0.0), clockwise=True, g=g)
    return state


def _resting_pair(cfg: PhysicsCfg) -> SimState:
    state = SimState()
    state.add_body(
        Body(position=(0.0, 0.0), velocity=(0.0, 0.0), mass=1e6),
        Appearance(radius=40.0, color=SUN_COLOR),
    )
    state.add_body(
        Body(position=(200.0, 0.0), velocity=(0.0, 0.0), mass=1.0),
        Appearance(radius=4.0, color=PLANET_COLOR),
    )
    state.probe = Probe(position=(0.0, 600.0), velocity=(0.0, 0.0))
    return state


SCENARIO_DEFINITIONS: tuple[Scenario, ...] = (
    Scenario(
        key="lone_star",
        name="Lone star",
        description="Probe on a clockwise circular orbit at r = 250 around a 1e6 star.",
        build=_lone_star,
    ),
    Scenario(
        key="star_and_planet",
        name="Star and planet",
        description="Adds one counter-clockwise planet at r = 1000 to the lone star.",
        build=_star_and_planet,
    ),
    Scenario(
        key="resting_pair",
        name="Resting pair",
        description="Two bodies released from rest 200 apart; the probe falls in.",
        build=_resting_pair,
    ),
)

SCENARIOS: dict[str, Scenario] = {scenario.key: scenario for scenario in SCENARIO_DEFINITIONS}
GENERATED_KEY = "generated"


def get_scenario(key: str) -> Scenario:
    try:
        return SCENARIOS[key]
    except KeyError:
        known = ", ".join(sorted(SCENARIOS))
        raise KeyError(f"Unknown scenario {key!r}; known scenarios: {known}") from None


__all__ = [
    "GENERATED_KEY",
    "SCENARIO_DEFINITIONS",
    "SCENARIOS",
    "Scenario",
    "get_scenario",
]
