import math
import unittest
import numpy as np
from nbody.config import ConfigurationError
from nbody.data_models import Body
from nbody.physics import ForceField, compute_accelerations, circular_orbit_velocity, escape_velocity


def _three_bodies():
    return [
        Body(100.0, (0, 0, 0), (0, 0, 0), radius=1.0, name="A"),
        Body(10.0, (10, 0, 0), (0, 1, 0), radius=1.0, name="B"),
        Body(5.0, (0, -7, 3), (1, 0, 0), radius=0.5, name="C"),
    ]


class TestForceField(unittest.TestCase):

    def test_single_body_has_zero_acceleration(self):
        b = Body(10, (1, 2, 3), (0, 0, 0), radius=1)
        b.acceleration = np.array([5.0, 5.0, 5.0])
        compute_accelerations([b], 1.0)
        np.testing.assert_array_equal(b.acceleration, [0.0, 0.0, 0.0])

    def test_two_body_inverse_square(self):
        a = Body(1.0, (0, 0, 0), (0, 0, 0), radius=0.1)
        b = Body(50.0, (5, 0, 0), (0, 0, 0), radius=0.1)
        compute_accelerations([a, b], 2.0)
        np.testing.assert_allclose(a.acceleration, [2.0 * 50.0 / 25.0, 0.0, 0.0])
        np.testing.assert_allclose(b.acceleration, [-2.0 * 1.0 / 25.0, 0.0, 0.0])

    def test_distance_is_clamped_to_radius_sum(self):
        a = Body(1.0, (0, 0, 0), (0, 0, 0), radius=2.0)
        b = Body(8.0, (0, 1, 0), (0, 0, 0), radius=2.0)
        compute_accelerations([a, b], 1.0)
        # r = max(1, 4) = 4
        np.testing.assert_allclose(a.acceleration, [0.0, 8.0 / 16.0, 0.0])

    def test_coincident_centers_stay_finite(self):
        a = Body(1.0, (3, 3, 3), (0, 0, 0), radius=0.0)
        b = Body(1.0, (3, 3, 3), (0, 0, 0), radius=0.0)
        compute_accelerations([a, b], 1.0)
        self.assertTrue(np.all(np.isfinite(a.acceleration)))
        self.assertTrue(np.all(np.isfinite(b.acceleration)))

    def test_accelerations_are_reset_each_call(self):
        bodies = _three_bodies()
        compute_accelerations(bodies, 1.0)
        first = [b.acceleration.copy() for b in bodies]
        compute_accelerations(bodies, 1.0)
        for before, b in zip(first, bodies):
            np.testing.assert_allclose(b.acceleration, before)

    def test_result_independent_of_collection_order(self):
        bodies = _three_bodies()
        compute_accelerations(bodies, 1.5)
        forward = {b.name: b.acceleration.copy() for b in bodies}

        reordered = list(reversed(_three_bodies()))
        compute_accelerations(reordered, 1.5)
        for b in reordered:
            np.testing.assert_allclose(b.acceleration, forward[b.name], rtol=1e-12)

    def test_net_force_is_zero(self):
        bodies = _three_bodies()
        ForceField().compute_accelerations(bodies, 1.0)
        net = sum(b.mass * b.acceleration for b in bodies)
        np.testing.assert_allclose(net, [0.0, 0.0, 0.0], atol=1e-12)

    def test_non_positive_g_rejected(self):
        with self.assertRaises(ConfigurationError):
            compute_accelerations(_three_bodies(), 0.0)


class TestOrbitalHelpers(unittest.TestCase):

    def test_circular_orbit_velocity(self):
        self.assertAlmostEqual(circular_orbit_velocity(1.0, 1000.0, 10.0), 10.0)
        self.assertEqual(circular_orbit_velocity(1.0, 1000.0, 0.0), 0.0)

    def test_escape_velocity(self):
        self.assertAlmostEqual(escape_velocity(1.0, 1000.0, 10.0), math.sqrt(200.0))
        self.assertEqual(escape_velocity(1.0, 0.0, 10.0), 0.0)


if __name__ == '__main__':
    unittest.main()
