"""Newtonian N-body gravity and semi-implicit Euler integration."""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .config import PHYSICS_CFG
from .model import Body, Probe

G = PHYSICS_CFG.gravitational_constant


def gravitational_acceleration(
    target_position: np.ndarray,
    source_position: np.ndarray,
    source_mass: float,
    g: float = G,
) -> np.ndarray:
    """Acceleration a point at ``target_position`` feels from one source.

    Coincident positions are not guarded; the result is NaN.
    """

    r = source_position - target_position
    dist = float(np.linalg.norm(r))
    return g * source_mass * r / dist**3


def pairwise_accelerations(bodies: Sequence[Body], g: float = G) -> np.ndarray:
    """Accumulate the mutual gravitational acceleration of every body.

    Each unordered pair is evaluated once and both sides receive their
    equal-and-opposite share.
    """

    n = len(bodies)
    acc = np.zeros((n, 2), dtype=float)
    for i in range(n):
        bi = bodies[i]
        for j in range(i + 1, n):
            bj = bodies[j]
            r = bj.position - bi.position
            dist = float(np.linalg.norm(r))
            pull = g * r / dist**3
            acc[i] += bj.mass * pull
            acc[j] -= bi.mass * pull
    return acc


def probe_acceleration(probe: Probe, bodies: Sequence[Body], g: float = G) -> np.ndarray:
    acc = np.zeros(2, dtype=float)
    for body in bodies:
        acc += gravitational_acceleration(probe.position, body.position, body.mass, g)
    return acc


def thrust_vector(angle: float, magnitude: float) -> np.ndarray:
    return magnitude * np.array([math.cos(angle), math.sin(angle)], dtype=float)


def step(
    bodies: Sequence[Body],
    probe: Probe | None,
    dt: float,
    *,
    thrust: np.ndarray | None = None,
    g: float = G,
) -> None:
    """Advance bodies and probe by ``dt`` with semi-implicit Euler.

    All accelerations are taken from the positions at the start of the
    step; velocities are updated before positions.
    """

    acc = pairwise_accelerations(bodies, g)
    probe_acc = None
    if probe is not None:
        probe_acc = probe_acceleration(probe, bodies, g)
        if thrust is not None:
            probe_acc += thrust

    for body, a in zip(bodies, acc):
        body.velocity += a * dt
    if probe is not None:
        probe.velocity += probe_acc * dt

    for body in bodies:
        body.position += body.velocity * dt
    if probe is not None:
        probe.position += probe.velocity * dt


def circular_orbit_velocity(
    parent: Body,
    position: np.ndarray,
    clockwise: bool,
    g: float = G,
) -> np.ndarray:
    """Velocity for a circular orbit of ``position`` around ``parent``.

    Two-body approximation: the parent's own velocity is not added.
    """

    r = parent.position - np.asarray(position, dtype=float)
    if clockwise:
        direction = np.array([r[1], -r[0]], dtype=float)
    else:
        direction = np.array([-r[1], r[0]], dtype=float)
    dist = float(np.linalg.norm(r))
    direction /= dist
    return math.sqrt(g * parent.mass / dist) * direction


def total_momentum(bodies: Sequence[Body]) -> np.ndarray:
    momentum = np.zeros(2, dtype=float)
    for body in bodies:
        momentum += body.momentum
    return momentum


def kinetic_energy(bodies: Sequence[Body]) -> float:
    return sum(body.kinetic_energy for body in bodies)


def potential_energy(bodies: Sequence[Body], g: float = G) -> float:
    energy = 0.0
    n = len(bodies)
    for i in range(n):
        for j in range(i + 1, n):
            dist = float(np.linalg.norm(bodies[j].position - bodies[i].position))
            energy -= g * bodies[i].mass * bodies[j].mass / dist
    return energy


def total_energy(bodies: Sequence[Body], g: float = G) -> float:
    """Kinetic plus pairwise potential energy of the massive bodies."""

    return kinetic_energy(bodies) + potential_energy(bodies, g)


def specific_orbital_energy(r: np.ndarray, v: np.ndarray, mu: float) -> float:
    rmag = float(np.linalg.norm(r))
    vmag2 = float(v[0] * v[0] + v[1] * v[1])
    return 0.5 * vmag2 - mu / rmag


__all__ = [
    "G",
    "circular_orbit_velocity",
    "gravitational_acceleration",
    "kinetic_energy",
    "pairwise_accelerations",
    "potential_energy",
    "probe_acceleration",
    "specific_orbital_energy",
    "step",
    "thrust_vector",
    "total_energy",
    "total_momentum",
]
