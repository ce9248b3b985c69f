import unittest

import numpy as np

from gravity_sandbox import app
from gravity_sandbox.core.config import GENERATION_CFG, PhysicsCfg
from gravity_sandbox.core.simulation import Simulation
from gravity_sandbox.data.scenarios import SCENARIO_DEFINITIONS


class TestCommandLine(unittest.TestCase):

    def test_defaults(self):
        args = app.build_parser().parse_args([])
        self.assertEqual(args.scenario, "generated")
        self.assertIsNone(args.seed)
        self.assertEqual(args.rocky, GENERATION_CFG.rocky_count)
        self.assertFalse(args.record)

    def test_scenario_help_lists_every_scenario(self):
        text = app.scenario_help()
        for scenario in SCENARIO_DEFINITIONS:
            self.assertIn(scenario.name, text)
            self.assertIn(scenario.description, text)

    def test_negative_counts_are_rejected(self):
        with self.assertRaises(SystemExit):
            app.main(["--rocky", "-1"])


class TestCreateState(unittest.TestCase):

    def test_seeded_generation_is_reproducible(self):
        first = app.create_state("generated", 99, GENERATION_CFG)
        second = app.create_state("generated", 99, GENERATION_CFG)
        np.testing.assert_array_equal(first.bodies[3].position, second.bodies[3].position)

    def test_named_scenario(self):
        state = app.create_state("lone_star", None, GENERATION_CFG)
        self.assertEqual(len(state.bodies), 1)


class TestRegenerate(unittest.TestCase):

    def test_generated_system_gets_a_fresh_seed(self):
        seed = app.next_seed("generated", 5)
        self.assertIsInstance(seed, int)
        self.assertTrue(0 <= seed < 2**32)

    def test_literal_scenario_keeps_its_seed(self):
        self.assertIsNone(app.next_seed("lone_star", None))
        self.assertEqual(app.next_seed("resting_pair", 7), 7)


class TestHud(unittest.TestCase):

    def test_lines_follow_orbit_and_pause(self):
        sim = Simulation(app.create_state("lone_star", None, GENERATION_CFG), PhysicsCfg())
        lines = app.hud_lines(sim)
        self.assertIn("focus: body 0", lines)
        self.assertIn("eps = -2,000.0", lines)
        sim.toggle_pause()
        sim.state.probe.velocity = np.array([0.0, 1_000.0])
        sim.orbit = None
        lines = app.hud_lines(sim)
        self.assertIn("no bound orbit", lines)
        self.assertEqual(lines[-1], "PAUSED")


if __name__ == '__main__':
    unittest.main()
