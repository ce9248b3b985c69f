"""Fixed-step driver tying physics, thrust, orbit prediction and recording."""
from __future__ import annotations

import json
import logging
import math

from . import physics
from .config import PHYSICS_CFG, PhysicsCfg
from .logging_utils import RunLogger
from .model import SimState
from .orbit import Ellipse, OrbitConic, predict_orbit
from .timekeeping import FixedStepAccumulator

logger = logging.getLogger(__name__)


class Simulation:
    """Owns a :class:`SimState` and advances it in fixed ``dt`` slices."""

    def __init__(
        self,
        state: SimState,
        cfg: PhysicsCfg = PHYSICS_CFG,
        recorder: RunLogger | None = None,
    ) -> None:
        self.state = state
        self.cfg = cfg
        self.recorder = recorder
        self.accumulator = FixedStepAccumulator(cfg.dt, cfg.max_substeps)
        self.thrusting = False
        self.steps = 0
        self.orbit: OrbitConic | None = predict_orbit(
            state.bodies, state.probe, cfg.gravitational_constant
        )
        if recorder is not None:
            self._record_state()

    @property
    def dt(self) -> float:
        return self.cfg.dt

    @property
    def ellipse(self) -> Ellipse | None:
        if self.orbit is None:
            return None
        return self.orbit.ellipse()

    def steer(self, heading: float, thrusting: bool) -> None:
        self.state.probe.rot = heading
        self.thrusting = thrusting

    def toggle_pause(self) -> bool:
        self.state.paused = not self.state.paused
        self.accumulator.clear()
        return self.state.paused

    def step(self) -> None:
        """Run exactly one fixed step."""

        state = self.state
        g = self.cfg.gravitational_constant
        thrust = None
        if self.thrusting:
            thrust = physics.thrust_vector(state.probe.rot, self.cfg.thrust_acceleration)

        physics.step(state.bodies, state.probe, self.dt, thrust=thrust, g=g)
        state.time += self.dt
        self.steps += 1

        previous = self.orbit
        self.orbit = predict_orbit(state.bodies, state.probe, g)
        self._check_focus(previous, self.orbit)

        if self.recorder is not None and self.steps % self.cfg.log_every_steps == 0:
            self._record_state()

    def advance(self, frame_seconds: float) -> int:
        """Catch up with ``frame_seconds`` of real time; returns steps run."""

        if self.state.paused:
            return 0
        self.accumulator.accrue(frame_seconds)
        steps = self.accumulator.consume()
        for _ in range(steps):
            self.step()
        return steps

    def close(self) -> None:
        if self.recorder is not None:
            self.recorder.close()
            self.recorder = None

    def _check_focus(self, previous: OrbitConic | None, current: OrbitConic | None) -> None:
        before = -1 if previous is None else previous.body_index
        after = -1 if current is None else current.body_index
        if before == after:
            return
        if before == -1:
            event = "orbit_acquired"
        elif after == -1:
            event = "orbit_lost"
        else:
            event = "focus_changed"
        logger.debug("t=%.3f %s: body %d -> %d", self.state.time, event, before, after)
        if self.recorder is not None:
            ecc = math.nan if current is None else current.eccentricity
            details = json.dumps({"from": before, "to": after})
            self.recorder.log_event([self.state.time, event, after, ecc, details])

    def _record_state(self) -> None:
        state = self.state
        bodies = state.bodies
        g = self.cfg.gravitational_constant
        momentum = physics.total_momentum(bodies)
        if self.orbit is None:
            ecc, p, focus = math.nan, math.nan, -1
        else:
            ecc, p, focus = self.orbit.eccentricity, self.orbit.semi_latus_rectum, self.orbit.body_index
        self.recorder.log_ts(
            [
                float(state.time),
                float(state.probe.position[0]),
                float(state.probe.position[1]),
                float(state.probe.velocity[0]),
                float(state.probe.velocity[1]),
                float(physics.total_energy(bodies, g)),
                float(momentum[0]),
                float(momentum[1]),
                float(ecc),
                float(p),
                focus,
            ]
        )

    def meta(self) -> dict:
        """Run description written next to a recording."""

        bodies = self.state.bodies
        return {
            "G": self.cfg.gravitational_constant,
            "dt_phys": self.dt,
            "integrator": "semi-implicit Euler",
            "thrust_acceleration": self.cfg.thrust_acceleration,
            "log_every_steps": self.cfg.log_every_steps,
            "body_count": len(bodies),
            "masses": [body.mass for body in bodies],
            "probe_position": self.state.probe.position.tolist(),
            "probe_velocity": self.state.probe.velocity.tolist(),
            "initial_energy": physics.total_energy(bodies, self.cfg.gravitational_constant),
            "initial_momentum": physics.total_momentum(bodies).tolist(),
        }


__all__ = ["Simulation"]
