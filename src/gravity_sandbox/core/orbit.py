"""Keplerian conic reconstruction for the predicted-orbit overlay.

The probe's position and velocity relative to a body define a two-body
conic through the eccentricity vector ``e`` and the semi-latus rectum ``p``:

    h = r x v                    (scalar, 2D cross product)
    e = (v.y * h, -v.x * h) / mu - r / |r|
    p = h**2 / mu

``|e| < 1`` is a bound (elliptical) orbit. Of all bodies that give an
elliptical orbit, the nearest one is taken as the dominant body.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .model import Body, Probe
from .physics import G


@dataclass(frozen=True, eq=False)
class Ellipse:
    """Displayable orbit geometry in world coordinates."""

    center: np.ndarray
    semi_major: float
    semi_minor: float
    rotation: float

    def points(self, segments: int = 180) -> np.ndarray:
        """Outline sampled at ``segments`` angles, shape ``(segments, 2)``."""

        t = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
        local = np.column_stack((self.semi_major * np.cos(t), self.semi_minor * np.sin(t)))
        cos_r = math.cos(self.rotation)
        sin_r = math.sin(self.rotation)
        rot = np.array([[cos_r, -sin_r], [sin_r, cos_r]])
        return local @ rot.T + self.center


@dataclass(frozen=True, eq=False)
class OrbitConic:
    body_index: int
    focus: np.ndarray
    eccentricity_vector: np.ndarray
    semi_latus_rectum: float

    @property
    def eccentricity(self) -> float:
        return float(np.linalg.norm(self.eccentricity_vector))

    def ellipse_axes(self) -> tuple[float, float] | None:
        e2 = float(np.dot(self.eccentricity_vector, self.eccentricity_vector))
        if e2 >= 1.0:
            return None
        a = self.semi_latus_rectum / (1.0 - e2)
        b = a * math.sqrt(1.0 - e2)
        return a, b

    def ellipse(self) -> Ellipse | None:
        axes = self.ellipse_axes()
        if axes is None:
            return None
        a, b = axes
        c = math.sqrt(max(a * a - b * b, 0.0))
        ecc = self.eccentricity
        if ecc > 0.0:
            direction = self.eccentricity_vector / ecc
        else:
            direction = np.array([1.0, 0.0])
        center = self.focus - direction * c
        return Ellipse(
            center=center,
            semi_major=a,
            semi_minor=b,
            rotation=rotation_angle(self.eccentricity_vector),
        )


def unsigned_angle(u: np.ndarray, w: np.ndarray) -> float:
    """Angle between two vectors in ``[0, pi]``; zero if either is null."""

    prod = float(np.linalg.norm(u) * np.linalg.norm(w))
    if prod == 0.0:
        return 0.0
    cos_angle = float(np.dot(u, w)) / prod
    return math.acos(max(-1.0, min(1.0, cos_angle)))


def rotation_angle(e_vec: np.ndarray) -> float:
    """Major-axis rotation of the orbit ellipse.

    Below the x axis the angle is mirrored to ``pi - angle``. This equals
    the signed angle up to a half turn, under which an ellipse is unchanged.
    """

    angle = unsigned_angle(e_vec, np.array([1.0, 0.0]))
    if e_vec[1] >= 0.0:
        return angle
    return math.pi - angle


def conic_from_state(r: np.ndarray, v: np.ndarray, mu: float) -> tuple[np.ndarray, float]:
    """Eccentricity vector and semi-latus rectum for relative state ``(r, v)``."""

    h = float(r[0] * v[1] - r[1] * v[0])
    r_hat = r / float(np.linalg.norm(r))
    e_vec = np.array([v[1] * h, -v[0] * h], dtype=float) / mu - r_hat
    p = h * h / mu
    return e_vec, p


def predict_orbit(bodies: Sequence[Body], probe: Probe, g: float = G) -> OrbitConic | None:
    """Conic of the probe around the nearest body that holds it in orbit."""

    best: OrbitConic | None = None
    min_rad = math.inf
    for index, body in enumerate(bodies):
        r = probe.position - body.position
        v = probe.velocity - body.velocity
        mu = g * body.mass
        e_vec, p = conic_from_state(r, v, mu)
        rad = float(np.linalg.norm(r))
        if np.linalg.norm(e_vec) < 1.0 and rad < min_rad:
            min_rad = rad
            best = OrbitConic(
                body_index=index,
                focus=body.position.copy(),
                eccentricity_vector=e_vec,
                semi_latus_rectum=p,
            )
    return best


__all__ = [
    "Ellipse",
    "OrbitConic",
    "conic_from_state",
    "predict_orbit",
    "rotation_angle",
    "unsigned_angle",
]
