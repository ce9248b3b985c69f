import csv
import math
import tempfile
import unittest
from pathlib import Path

import numpy as np

from gravity_sandbox.core.config import PhysicsCfg
from gravity_sandbox.core.logging_utils import RunLogger
from gravity_sandbox.core.simulation import Simulation
from gravity_sandbox.data.scenarios import get_scenario


def _lone_star(cfg):
    return get_scenario("lone_star").create(cfg)


class TestAdvance(unittest.TestCase):

    def setUp(self):
        self.cfg = PhysicsCfg(steps_per_second=4, max_substeps=4)
        self.sim = Simulation(_lone_star(self.cfg), self.cfg)

    def test_runs_whole_steps_of_real_time(self):
        self.assertEqual(self.sim.advance(0.6), 2)
        self.assertAlmostEqual(self.sim.state.time, 0.5)
        self.assertEqual(self.sim.steps, 2)
        self.assertEqual(self.sim.advance(0.2), 1)
        self.assertAlmostEqual(self.sim.state.time, 0.75)

    def test_paused_simulation_does_not_move(self):
        position = self.sim.state.probe.position.copy()
        self.assertTrue(self.sim.toggle_pause())
        self.assertEqual(self.sim.advance(5.0), 0)
        np.testing.assert_array_equal(self.sim.state.probe.position, position)
        self.assertFalse(self.sim.toggle_pause())
        # time that passed while paused is not caught up
        self.assertEqual(self.sim.advance(0.1), 0)

    def test_backlog_is_capped(self):
        self.assertEqual(self.sim.advance(100.0), 4)


class TestThrust(unittest.TestCase):

    def test_thrust_changes_velocity_by_acceleration_times_dt(self):
        cfg = PhysicsCfg()
        coasting = Simulation(_lone_star(cfg), cfg)
        burning = Simulation(_lone_star(cfg), cfg)
        burning.steer(math.pi / 2, True)
        coasting.steer(math.pi / 2, False)
        coasting.step()
        burning.step()
        delta = burning.state.probe.velocity - coasting.state.probe.velocity
        np.testing.assert_allclose(delta, [0.0, cfg.thrust_acceleration * cfg.dt], atol=1e-9)
        self.assertEqual(burning.state.probe.rot, math.pi / 2)


class TestOrbitTracking(unittest.TestCase):

    def test_initial_orbit_and_ellipse(self):
        sim = Simulation(_lone_star(PhysicsCfg()))
        self.assertIsNotNone(sim.orbit)
        self.assertEqual(sim.orbit.body_index, 0)
        ellipse = sim.ellipse
        self.assertAlmostEqual(ellipse.semi_major, 250.0, places=6)

    def test_escape_clears_the_orbit(self):
        sim = Simulation(_lone_star(PhysicsCfg()))
        sim.state.probe.velocity = np.array([0.0, 1_000.0])
        sim.step()
        self.assertIsNone(sim.orbit)
        self.assertIsNone(sim.ellipse)


class TestRecording(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_records_initial_state_and_every_nth_step(self):
        cfg = PhysicsCfg(log_every_steps=2)
        recorder = RunLogger(self.root, run_id="rec")
        sim = Simulation(_lone_star(cfg), cfg, recorder)
        for _ in range(6):
            sim.step()
        sim.close()

        with recorder.timeseries_path.open(newline="") as fh:
            rows = list(csv.DictReader(fh))
        self.assertEqual(len(rows), 4)
        self.assertEqual(float(rows[0]["t"]), 0.0)
        self.assertEqual(int(float(rows[-1]["focus"])), 0)
        self.assertAlmostEqual(float(rows[-1]["t"]), 6 * cfg.dt)

    def test_losing_the_orbit_is_an_event(self):
        cfg = PhysicsCfg(log_every_steps=1)
        recorder = RunLogger(self.root, run_id="escape")
        sim = Simulation(_lone_star(cfg), cfg, recorder)
        sim.state.probe.velocity = np.array([0.0, 1_000.0])
        sim.step()
        sim.close()

        with recorder.events_path.open(newline="") as fh:
            events = list(csv.DictReader(fh))
        self.assertEqual([e["type"] for e in events], ["orbit_lost"])
        self.assertEqual(int(float(events[0]["focus"])), -1)
        with recorder.timeseries_path.open(newline="") as fh:
            last = list(csv.DictReader(fh))[-1]
        self.assertEqual(last["e"], "nan")

    def test_meta_describes_the_run(self):
        cfg = PhysicsCfg()
        sim = Simulation(_lone_star(cfg), cfg)
        meta = sim.meta()
        self.assertEqual(meta["body_count"], 1)
        self.assertEqual(meta["masses"], [1e6])
        self.assertAlmostEqual(meta["dt_phys"], 1.0 / 60.0)
        self.assertEqual(meta["initial_momentum"], [0.0, 0.0])


if __name__ == '__main__':
    unittest.main()
