import unittest
import numpy as np
from nbody.config import PhysicsError
from nbody.data_models import Body
from nbody.diagnostics import (
    CoincidentBodiesError,
    EmptyCollectionError,
    center_of_mass,
    kinetic_energy,
    potential_energy,
    relative_energy_drift,
    total_energy,
    total_momentum,
)


class TestEnergy(unittest.TestCase):

    def test_kinetic_energy(self):
        bodies = [Body(2.0, (0, 0, 0), (3, 4, 0)), Body(1.0, (5, 0, 0), (0, 0, 2))]
        self.assertAlmostEqual(kinetic_energy(bodies), 0.5 * 2 * 25 + 0.5 * 1 * 4)

    def test_potential_energy_pairs(self):
        bodies = [
            Body(2.0, (0, 0, 0), (0, 0, 0)),
            Body(3.0, (4, 0, 0), (0, 0, 0)),
            Body(5.0, (0, 3, 0), (0, 0, 0)),
        ]
        expected = -(2 * 3 / 4.0 + 2 * 5 / 3.0 + 3 * 5 / 5.0) * 0.5
        self.assertAlmostEqual(potential_energy(bodies, 0.5), expected)

    def test_total_energy(self):
        bodies = [Body(1.0, (0, 0, 0), (1, 0, 0)), Body(1.0, (2, 0, 0), (0, 0, 0))]
        self.assertAlmostEqual(total_energy(bodies, 1.0), 0.5 - 0.5)

    def test_empty_energy_is_zero(self):
        self.assertEqual(total_energy([], 1.0), 0.0)

    def test_relative_energy_drift(self):
        self.assertAlmostEqual(relative_energy_drift(-50.0, -49.5), 0.01)
        self.assertAlmostEqual(relative_energy_drift(0.0, 0.25), 0.25)

    def test_coincident_bodies_raise_typed_error(self):
        bodies = [Body(1.0, (2, 2, 2), (0, 0, 0), name="p"), Body(3.0, (2, 2, 2), (0, 0, 0), name="q")]
        with self.assertRaises(CoincidentBodiesError):
            potential_energy(bodies, 1.0)
        with self.assertRaises(PhysicsError):
            total_energy(bodies, 1.0)


class TestCenterOfMass(unittest.TestCase):

    def test_weighted_mean(self):
        bodies = [Body(1.0, (0, 0, 0), (0, 0, 0)), Body(3.0, (4, 8, 0), (0, 0, 0))]
        np.testing.assert_allclose(center_of_mass(bodies), [3.0, 6.0, 0.0])

    def test_empty_collection_raises(self):
        with self.assertRaises(EmptyCollectionError):
            center_of_mass([])
        self.assertTrue(issubclass(EmptyCollectionError, PhysicsError))


class TestMomentum(unittest.TestCase):

    def test_total_momentum(self):
        bodies = [Body(2.0, (0, 0, 0), (1, 0, 0)), Body(1.0, (1, 0, 0), (-2, 1, 0))]
        np.testing.assert_allclose(total_momentum(bodies), [0.0, 1.0, 0.0])

    def test_empty_momentum_is_zero(self):
        np.testing.assert_array_equal(total_momentum([]), [0.0, 0.0, 0.0])


if __name__ == '__main__':
    unittest.main()
