"""Data models for the gravity sandbox state."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _as_vector(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(2)


@dataclass
class Body:
    """Massive point taking part in mutual gravity."""

    position: np.ndarray
    velocity: np.ndarray
    mass: float

    def __post_init__(self) -> None:
        self.position = _as_vector(self.position)
        self.velocity = _as_vector(self.velocity)
        self.mass = float(self.mass)
        if not self.mass > 0.0:
            raise ValueError(f"Body mass must be positive, got {self.mass}")

    @property
    def momentum(self) -> np.ndarray:
        return self.mass * self.velocity

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * float(np.dot(self.velocity, self.velocity))

    def copy(self) -> "Body":
        return Body(self.position.copy(), self.velocity.copy(), self.mass)


@dataclass
class Probe:
    """Massless craft: pulled by every body, pulls nothing back.

    ``rot`` is the facing angle in radians, counter-clockwise from +x.
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=float))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=float))
    rot: float = 0.0

    def __post_init__(self) -> None:
        self.position = _as_vector(self.position)
        self.velocity = _as_vector(self.velocity)

    def copy(self) -> "Probe":
        return Probe(self.position.copy(), self.velocity.copy(), self.rot)


@dataclass(frozen=True)
class Appearance:
    """Presentation-only data for a body, keyed by its registry index."""

    radius: float
    color: tuple[int, int, int]


@dataclass
class SimState:
    """Top level simulation state container."""

    bodies: list[Body] = field(default_factory=list)
    probe: Probe = field(default_factory=Probe)
    appearances: dict[int, Appearance] = field(default_factory=dict)
    time: float = 0.0
    paused: bool = False

    def add_body(self, body: Body, appearance: Appearance | None = None) -> int:
        index = len(self.bodies)
        self.bodies.append(body)
        if appearance is not None:
            self.appearances[index] = appearance
        return index

    def appearance_of(self, index: int) -> Appearance | None:
        return self.appearances.get(index)


__all__ = ["Appearance", "Body", "Probe", "SimState"]
