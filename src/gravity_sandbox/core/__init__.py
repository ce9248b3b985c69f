"""Physics core of the gravity sandbox: pure computation on numpy arrays."""

from .config import (
    GENERATION_CFG,
    PHYSICS_CFG,
    RENDER_CFG,
    ConfigurationError,
    GenerationCfg,
    PhysicsCfg,
    PlanetClassCfg,
    RenderCfg,
)
from .generation import generate_system, make_rng
from .model import Appearance, Body, Probe, SimState
from .orbit import Ellipse, OrbitConic, conic_from_state, predict_orbit
from .physics import circular_orbit_velocity, step
from .simulation import Simulation

__all__ = [
    "Appearance",
    "Body",
    "ConfigurationError",
    "Ellipse",
    "GENERATION_CFG",
    "GenerationCfg",
    "OrbitConic",
    "PHYSICS_CFG",
    "PhysicsCfg",
    "PlanetClassCfg",
    "Probe",
    "RENDER_CFG",
    "RenderCfg",
    "SimState",
    "Simulation",
    "circular_orbit_velocity",
    "conic_from_state",
    "generate_system",
    "make_rng",
    "predict_orbit",
    "step",
]
