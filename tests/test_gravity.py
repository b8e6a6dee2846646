"""
Unit Tests for Gravity Models

Run with:
    python -m pytest tests/test_gravity.py -v
"""

import unittest

from orbit_propagator.gravity import GravityModel, get_gravity_constants, resolve_gravity_model


class TestGravityModels(unittest.TestCase):
    """Earth constant sets"""

    def test_wgs72(self):
        """Test WGS-72 constants and derived values."""
        grav = get_gravity_constants(GravityModel.WGS72)
        self.assertEqual(grav.mu, 398600.8)
        self.assertEqual(grav.radiusearthkm, 6378.135)
        self.assertAlmostEqual(grav.xke, 0.07436691613317342, places=14)
        self.assertAlmostEqual(grav.tumin * grav.xke, 1.0, places=14)
        self.assertAlmostEqual(grav.j3oj2, grav.j3 / grav.j2, places=15)

    def test_wgs72old_uses_rounded_xke(self):
        """Test that the legacy model keeps its rounded xke."""
        grav = get_gravity_constants("wgs72old")
        self.assertEqual(grav.xke, 0.0743669161)
        self.assertEqual(grav.j2, 0.001082616)

    def test_wgs84(self):
        """Test WGS-84 constants."""
        grav = get_gravity_constants("WGS84")
        self.assertEqual(grav.mu, 398600.5)
        self.assertEqual(grav.radiusearthkm, 6378.137)
        self.assertEqual(grav.j2, 0.00108262998905)

    def test_default_is_wgs72(self):
        """Test that WGS-72 is the default model."""
        self.assertEqual(get_gravity_constants(), get_gravity_constants(GravityModel.WGS72))

    def test_unknown_model(self):
        """Test that an unknown model name is rejected."""
        with self.assertRaises(ValueError) as ctx:
            get_gravity_constants("wgs96")
        self.assertIn("unknown gravity option wgs96", str(ctx.exception))

    def test_resolve(self):
        """Test model resolution from names and members."""
        self.assertIs(resolve_gravity_model("wgs72"), GravityModel.WGS72)
        self.assertIs(resolve_gravity_model(GravityModel.WGS84), GravityModel.WGS84)


if __name__ == "__main__":
    unittest.main()
