import math
import unittest

import numpy as np

from gravity_sandbox.core.orbit import predict_orbit
from gravity_sandbox.data.scenarios import SCENARIO_DEFINITIONS, SCENARIOS, get_scenario


class TestScenarios(unittest.TestCase):

    def test_every_scenario_builds(self):
        for scenario in SCENARIO_DEFINITIONS:
            with self.subTest(key=scenario.key):
                state = scenario.create()
                self.assertGreater(len(state.bodies), 0)
                self.assertEqual(set(state.appearances), set(range(len(state.bodies))))
                self.assertEqual(state.time, 0.0)

    def test_lone_star_probe_is_circular(self):
        state = get_scenario("lone_star").create()
        np.testing.assert_allclose(state.probe.position, [250.0, 0.0])
        np.testing.assert_allclose(state.probe.velocity, [0.0, math.sqrt(1e6 / 250.0)])
        conic = predict_orbit(state.bodies, state.probe)
        self.assertAlmostEqual(conic.eccentricity, 0.0, places=9)

    def test_resting_pair_starts_at_rest(self):
        state = get_scenario("resting_pair").create()
        for body in state.bodies:
            np.testing.assert_array_equal(body.velocity, [0.0, 0.0])
        # at rest relative to every body: any conic found is radial
        conic = predict_orbit(state.bodies, state.probe)
        if conic is not None:
            self.assertEqual(conic.semi_latus_rectum, 0.0)

    def test_keys_match_registry(self):
        self.assertEqual(set(SCENARIOS), {s.key for s in SCENARIO_DEFINITIONS})

    def test_unknown_key(self):
        with self.assertRaises(KeyError):
            get_scenario("no_such_scenario")


if __name__ == '__main__':
    unittest.main()
