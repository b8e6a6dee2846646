"""
Unit Tests for Orbit Math Helpers

Run with:
    python -m pytest tests/test_orbit_math.py -v
"""

import math
import unittest

import numpy as np

from orbit_propagator.orbit_math import (
    OrbitType,
    angle,
    asinh,
    cross,
    dot,
    mag,
    newtonnu,
    rv2coe,
    sgn,
    solve_kepler,
)


class TestVectorHelpers(unittest.TestCase):
    """Vector helpers"""

    def setUp(self):
        self.v1 = [10.0, 10.0, 10.0]
        self.v2 = [-10.0, -10.0, -10.0]

    def test_mag(self):
        """Test vector magnitude."""
        self.assertAlmostEqual(mag(self.v1), 17.320508075688775, places=12)

    def test_cross(self):
        """Test cross product."""
        np.testing.assert_array_equal(cross(self.v1, self.v2), [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(cross([1, 0, 0], [0, 1, 0]), [0.0, 0.0, 1.0])

    def test_dot(self):
        """Test dot product."""
        self.assertEqual(dot(self.v1, self.v2), -300.0)

    def test_angle(self):
        """Test angle between vectors."""
        self.assertAlmostEqual(angle(self.v1, self.v2), math.pi, places=6)
        self.assertAlmostEqual(angle([1, 0, 0], [0, 1, 0]), math.pi / 2, places=12)

    def test_angle_zero_vector(self):
        """Test that the angle is undefined for a zero vector."""
        self.assertIsNone(angle([0.0, 0.0, 0.0], self.v1))

    def test_asinh(self):
        """Test inverse hyperbolic sine."""
        self.assertAlmostEqual(asinh(math.pi), 1.8622957433108482, places=12)

    def test_sgn(self):
        """Test sign function."""
        self.assertEqual(sgn(-2.5), -1)
        self.assertEqual(sgn(0.0), 1)
        self.assertEqual(sgn(3.0), 1)


class TestNewtonNu(unittest.TestCase):
    """Anomaly conversions"""

    def test_circular(self):
        """Test that circular orbits keep anomalies equal."""
        e0, m = newtonnu(0.0, -1.0)
        self.assertAlmostEqual(e0, -1.0, places=12)
        self.assertAlmostEqual(m, 5.283185307179586, places=12)

    def test_zero_true_anomaly(self):
        """Test anomalies at periapsis."""
        for ecc in (0.0, 0.5, 1.0, 1.5):
            with self.subTest(ecc=ecc):
                e0, m = newtonnu(ecc, 0.0)
                self.assertAlmostEqual(e0, 0.0, places=12)
                self.assertAlmostEqual(m, 0.0, places=12)

    def test_elliptical_consistency(self):
        """Test elliptical anomaly conversion against Kepler's equation."""
        ecc, nu = 0.1, 1.0
        e0, m = newtonnu(ecc, nu)
        self.assertAlmostEqual(m, e0 - ecc * math.sin(e0), places=12)
        self.assertAlmostEqual(
            math.tan(nu / 2.0),
            math.sqrt((1.0 + ecc) / (1.0 - ecc)) * math.tan(e0 / 2.0),
            places=12,
        )

    def test_hyperbolic_beyond_asymptote(self):
        """Test hyperbolic anomalies past the asymptote."""
        self.assertEqual(newtonnu(2.0, 2.5), (None, None))

    def test_parabolic_beyond_limit(self):
        """Test parabolic anomalies past the limit."""
        self.assertEqual(newtonnu(1.0, math.radians(170.0)), (None, None))


class TestSolveKepler(unittest.TestCase):
    """Equinoctial Kepler solver"""

    def test_moderate_eccentricity(self):
        """Test Kepler solution at moderate eccentricity."""
        ecc, u = 0.1, 1.0
        eo1, sineo1, coseo1 = solve_kepler(u, ecc, 0.0)
        self.assertAlmostEqual(eo1 - ecc * math.sin(eo1), u, places=10)

    def test_high_eccentricity(self):
        """Test Kepler solution at high eccentricity."""
        ecc, u = 0.9, 0.1
        eo1, _, _ = solve_kepler(u, ecc, 0.0)
        self.assertAlmostEqual(eo1 - ecc * math.sin(eo1), u, places=9)

    def test_circular_is_identity(self):
        """Test that a circular orbit returns the mean anomaly."""
        eo1, sineo1, coseo1 = solve_kepler(2.0, 0.0, 0.0)
        self.assertAlmostEqual(eo1, 2.0, places=12)
        self.assertAlmostEqual(sineo1, math.sin(2.0), places=12)
        self.assertAlmostEqual(coseo1, math.cos(2.0), places=12)

    def test_equinoctial_form(self):
        """Test the equinoctial Kepler solver used by the kernel."""
        axnl, aynl, u = 0.05, 0.03, 4.0
        eo1, _, _ = solve_kepler(u, axnl, aynl)
        residual = eo1 - axnl * math.sin(eo1) + aynl * math.cos(eo1) - u
        self.assertAlmostEqual(residual, 0.0, places=10)

    def test_near_parabolic_returns_finite(self):
        """Test that near-parabolic orbits stay finite."""
        eo1, sineo1, coseo1 = solve_kepler(0.01, 0.999, 0.0)
        self.assertTrue(math.isfinite(eo1))


class TestRv2Coe(unittest.TestCase):
    """Classical elements from state vectors"""

    def setUp(self):
        self.r = [-2469.18115234375, -6742.41845703125, -4302.49951171875]
        self.v = [5.526907444000244, -4.195889472961426, 0.920195996761322]
        self.mu = 398600.8

    def test_elliptical_inclined(self):
        """Test elements of an inclined elliptical orbit."""
        elements = rv2coe(self.r, self.v, self.mu)
        self.assertEqual(elements.orbit_type, OrbitType.ELLIPTICAL_INCLINED)
        self.assertAlmostEqual(elements.p, 8326.95467068737, places=4)
        self.assertAlmostEqual(elements.a, 8620.589416586823, places=4)
        self.assertAlmostEqual(elements.ecc, 0.1845590057042562, places=9)
        self.assertAlmostEqual(elements.incl, 0.5976602330329903, places=9)
        self.assertAlmostEqual(elements.omega, 5.4377740711189215, places=9)
        self.assertAlmostEqual(elements.argp, 3.5324404502518094, places=9)
        self.assertAlmostEqual(elements.nu, 1.5991142060024006, places=9)
        self.assertAlmostEqual(elements.m, 1.2308092930674526, places=9)
        self.assertIsNone(elements.arglat)
        self.assertIsNone(elements.truelon)
        self.assertIsNone(elements.lonper)

    def test_circular_equatorial(self):
        """Test elements of a circular equatorial orbit."""
        r = [7000.0, 0.0, 0.0]
        v = [0.0, math.sqrt(self.mu / 7000.0), 0.0]
        elements = rv2coe(r, v, self.mu)
        self.assertEqual(elements.orbit_type, OrbitType.CIRCULAR_EQUATORIAL)
        self.assertAlmostEqual(elements.a, 7000.0, places=6)
        self.assertAlmostEqual(elements.truelon, 0.0, places=9)
        self.assertIsNone(elements.omega)
        self.assertIsNone(elements.argp)
        self.assertIsNone(elements.nu)

    def test_circular_inclined(self):
        """Test elements of a circular inclined orbit."""
        speed = math.sqrt(self.mu / 7000.0)
        # quarter of a revolution past the ascending node
        r = [0.0, 7000.0 * math.sqrt(0.5), 7000.0 * math.sqrt(0.5)]
        v = [-speed, 0.0, 0.0]
        elements = rv2coe(r, v, self.mu)
        self.assertEqual(elements.orbit_type, OrbitType.CIRCULAR_INCLINED)
        self.assertAlmostEqual(elements.incl, math.pi / 4, places=9)
        self.assertAlmostEqual(elements.arglat, math.pi / 2, places=9)
        self.assertEqual(elements.m, elements.arglat)

    def test_parabolic_semi_major_axis(self):
        """Test that a parabolic orbit has an undefined semi-major axis."""
        r = [7000.0, 0.0, 0.0]
        v = [0.0, math.sqrt(2.0 * self.mu / 7000.0), 0.0]
        elements = rv2coe(r, v, self.mu)
        self.assertTrue(math.isinf(elements.a))

    def test_radial_trajectory(self):
        """Test a radial trajectory with zero angular momentum."""
        elements = rv2coe([7000.0, 0.0, 0.0], [1.0, 0.0, 0.0], self.mu)
        self.assertTrue(all(value is None for value in elements))


if __name__ == "__main__":
    unittest.main()
