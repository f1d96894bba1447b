import unittest
import numpy as np
from nbody.config import ConfigurationError
from nbody.data_models import Body, TrailBuffer


class TestBody(unittest.TestCase):

    def test_vectors_are_coerced_to_float64_3d(self):
        b = Body(2, [1, 2, 3], (0, 1, 0), radius=1)
        self.assertEqual(b.position.dtype, np.float64)
        self.assertEqual(b.position.shape, (3,))
        np.testing.assert_array_equal(b.velocity, [0.0, 1.0, 0.0])
        np.testing.assert_array_equal(b.acceleration, [0.0, 0.0, 0.0])

    def test_2d_vectors_are_placed_in_xy_plane(self):
        b = Body(1, (3.0, 4.0), (1.0, -1.0))
        np.testing.assert_array_equal(b.position, [3.0, 4.0, 0.0])
        np.testing.assert_array_equal(b.velocity, [1.0, -1.0, 0.0])

    def test_inputs_are_copied(self):
        pos = np.array([1.0, 1.0, 1.0])
        b = Body(1, pos, (0, 0, 0))
        pos[0] = 99.0
        self.assertEqual(b.position[0], 1.0)

    def test_non_positive_mass_rejected(self):
        with self.assertRaises(ConfigurationError):
            Body(0, (0, 0, 0), (0, 0, 0))
        with self.assertRaises(ConfigurationError):
            Body(-5, (0, 0, 0), (0, 0, 0))

    def test_negative_radius_rejected(self):
        with self.assertRaises(ConfigurationError):
            Body(1, (0, 0, 0), (0, 0, 0), radius=-1)

    def test_zero_radius_allowed(self):
        self.assertEqual(Body(1, (0, 0, 0), (0, 0, 0), radius=0).radius, 0.0)

    def test_bodies_compare_by_identity(self):
        a = Body(1, (0, 0, 0), (0, 0, 0))
        b = Body(1, (0, 0, 0), (0, 0, 0))
        self.assertNotEqual(a, b)
        self.assertEqual(a, a)

    def test_momentum(self):
        b = Body(4, (0, 0, 0), (1, 2, 0))
        np.testing.assert_array_almost_equal(b.momentum, [4.0, 8.0, 0.0])

    def test_add_trail_point_copies_position(self):
        b = Body(1, (1, 2, 3), (0, 0, 0))
        b.add_trail_point()
        b.position = b.position + 1.0
        np.testing.assert_array_equal(b.trail.latest(), [1.0, 2.0, 3.0])


class TestTrailBuffer(unittest.TestCase):

    def test_default_capacity(self):
        self.assertEqual(TrailBuffer().capacity, 200)

    def test_append_and_order(self):
        t = TrailBuffer(5)
        for k in range(3):
            t.append((k, 0, 0))
        self.assertEqual(len(t), 3)
        np.testing.assert_array_equal(t.to_array()[:, 0], [0, 1, 2])

    def test_evicts_oldest_when_full(self):
        t = TrailBuffer(4)
        for k in range(10):
            t.append((k, 0, 0))
        self.assertEqual(len(t), 4)
        np.testing.assert_array_equal(t.to_array()[:, 0], [6, 7, 8, 9])
        np.testing.assert_array_equal(t.latest(), [9, 0, 0])

    def test_iteration_matches_to_array(self):
        t = TrailBuffer(3)
        for k in range(5):
            t.append((k, k, k))
        xs = [p[0] for p in t]
        self.assertEqual(xs, [2.0, 3.0, 4.0])

    def test_clear(self):
        t = TrailBuffer(3)
        t.append((1, 1, 1))
        t.clear()
        self.assertEqual(len(t), 0)
        self.assertEqual(t.to_array().shape, (0, 3))
        with self.assertRaises(IndexError):
            t.latest()

    def test_invalid_capacity(self):
        with self.assertRaises(ConfigurationError):
            TrailBuffer(0)


if __name__ == '__main__':
    unittest.main()
