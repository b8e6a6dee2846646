"""
Unit Tests for the TLE Parser

Run with:
    python -m pytest tests/test_tle_parser.py -v
"""

import math
import unittest

from orbit_propagator.config import DEG2RAD, XPDOTP
from orbit_propagator.tle_parser import (
    TLEFormatError,
    compute_checksum,
    decode_catalog_number,
    exp_to_dec,
    full_epoch_year,
    iter_element_sets,
    parse_tle,
)


class TestParseTLE(unittest.TestCase):
    """Field extraction and unit conversion"""

    def setUp(self):
        self.line1 = "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753"
        self.line2 = "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667"

    def test_identity_fields(self):
        """Test identity fields."""
        elements = parse_tle(self.line1, self.line2, "VANGUARD 2")
        self.assertEqual(elements.satnum, "00005")
        self.assertEqual(elements.satnum_int, 5)
        self.assertEqual(elements.classification, "U")
        self.assertEqual(elements.intldesg, "58002B")
        self.assertEqual(elements.launch_year, 1958)
        self.assertEqual(elements.launch_number, 2)
        self.assertEqual(elements.launch_piece, "B")
        self.assertEqual(elements.name, "VANGUARD 2")
        self.assertEqual(elements.elnum, 475)
        self.assertEqual(elements.revnum, 41366)
        self.assertEqual(elements.ephtype, 0)

    def test_epoch(self):
        """Test epoch fields."""
        elements = parse_tle(self.line1, self.line2)
        self.assertEqual(elements.epochyr, 0)
        self.assertEqual(elements.epoch_year, 2000)
        self.assertAlmostEqual(elements.epochdays, 179.78495062, places=8)
        self.assertEqual(elements.jdsatepoch, 2451722.5)
        self.assertAlmostEqual(elements.jdsatepochF, 0.78495062, places=8)

    def test_orbital_elements_in_working_units(self):
        """Test element conversion to working units."""
        elements = parse_tle(self.line1, self.line2)
        self.assertAlmostEqual(elements.inclo, 34.2682 * DEG2RAD, places=12)
        self.assertAlmostEqual(elements.nodeo, 348.7242 * DEG2RAD, places=12)
        self.assertAlmostEqual(elements.ecco, 0.1859667, places=12)
        self.assertAlmostEqual(elements.argpo, 331.7664 * DEG2RAD, places=12)
        self.assertAlmostEqual(elements.mo, 19.3264 * DEG2RAD, places=12)
        self.assertAlmostEqual(elements.no_kozai, 10.82419157 / XPDOTP, places=12)
        self.assertAlmostEqual(elements.mean_motion_rev_per_day, 10.82419157, places=8)
        self.assertAlmostEqual(elements.bstar, 2.8098e-05, places=12)
        self.assertAlmostEqual(elements.ndot, 0.00000023 / (XPDOTP * 1440.0), places=18)
        self.assertEqual(elements.nddot, 0.0)

    def test_period(self):
        """Test orbital period."""
        elements = parse_tle(self.line1, self.line2)
        self.assertAlmostEqual(elements.period_minutes, 1440.0 / 10.82419157, places=6)

    def test_negative_bstar_field(self):
        """Test a negative B* field."""
        line1 = self.line1[:53] + "-11606-4" + self.line1[61:]
        elements = parse_tle(line1, self.line2)
        self.assertAlmostEqual(elements.bstar, -1.1606e-5, places=12)

    def test_blank_international_designator(self):
        """Test a blank international designator."""
        line1 = "1 11801U          80230.29629788  .00000096  00000-0  00000-0 0    13"
        line2 = "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848    13"
        elements = parse_tle(line1, line2)
        self.assertEqual(elements.intldesg, "")
        self.assertIsNone(elements.launch_year)
        self.assertIsNone(elements.launch_number)
        self.assertEqual(elements.epoch_year, 1980)

    def test_trailing_whitespace_ignored(self):
        """Test that trailing whitespace is stripped."""
        elements = parse_tle(self.line1 + "   \n", self.line2 + "\r\n")
        self.assertEqual(elements.line1, self.line1)
        self.assertEqual(elements.line2, self.line2)


class TestAlpha5(unittest.TestCase):
    """Alpha-5 catalog numbers"""

    def test_decode(self):
        """Test Alpha-5 decoding."""
        self.assertEqual(decode_catalog_number("J1234"), 191234)
        self.assertEqual(decode_catalog_number("A0001"), 100001)
        self.assertEqual(decode_catalog_number("25544"), 25544)
        self.assertEqual(decode_catalog_number("    5"), 5)

    def test_parse(self):
        """Test parsing an Alpha-5 element set."""
        line1 = "1 J1234U 20001C   20001.00000000  .00001000  00000-0  10000-3 0  9991"
        line2 = "2 J1234  51.6400 100.0000 0001000   0.0000   0.0000 15.00000000   107"
        elements = parse_tle(line1, line2)
        self.assertEqual(elements.satnum, "J1234")
        self.assertEqual(elements.satnum_int, 191234)

    def test_invalid(self):
        """Test that malformed catalog numbers are rejected."""
        for field in ("     ", "J12X4", "12.45"):
            with self.subTest(field=field):
                with self.assertRaises(TLEFormatError):
                    decode_catalog_number(field)


class TestExponentialFields(unittest.TestCase):
    """Implied-decimal exponent notation"""

    def test_bstar_values(self):
        """Test B* style exponent fields."""
        self.assertAlmostEqual(exp_to_dec(" 00098", "-0"), 0.00098, places=15)
        self.assertAlmostEqual(exp_to_dec(" 00098", "-5"), 9.8e-9, places=20)
        self.assertAlmostEqual(exp_to_dec("-00098", "-5"), -9.8e-9, places=20)

    def test_nddot_values(self):
        """Test second derivative exponent fields."""
        self.assertAlmostEqual(exp_to_dec(" 00023", "-0"), 0.00023, places=15)
        self.assertAlmostEqual(exp_to_dec("-00023", "-0"), -0.00023, places=15)

    def test_positive_exponent(self):
        """Test a positive exponent."""
        self.assertAlmostEqual(exp_to_dec(" 12345", "+1"), 1.2345, places=12)

    def test_invalid_sign(self):
        """Test that an invalid sign is rejected."""
        with self.assertRaises(TLEFormatError):
            exp_to_dec("x12345", "-3")

    def test_invalid_digits(self):
        """Test that invalid digits are rejected."""
        with self.assertRaises(TLEFormatError):
            exp_to_dec(" 12a45", "-3")


class TestChecksum(unittest.TestCase):
    """Line checksums"""

    def test_compute_checksum(self):
        """Test line checksums."""
        self.assertEqual(
            compute_checksum("1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753"), 3
        )
        self.assertEqual(
            compute_checksum("2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667"), 7
        )

    def test_minus_counts_one(self):
        """Test that minus signs count as one."""
        self.assertEqual(compute_checksum("-" * 3), 3)

    def test_mismatch_only_warns(self):
        """Test that a checksum mismatch only warns."""
        line1 = "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4755"
        line2 = "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667"
        with self.assertLogs("orbit_propagator.tle_parser", level="WARNING") as logs:
            elements = parse_tle(line1, line2)
        self.assertEqual(elements.satnum_int, 5)
        self.assertTrue(any("Checksum mismatch" in message for message in logs.output))


class TestValidation(unittest.TestCase):
    """Malformed element sets"""

    def setUp(self):
        self.line1 = "1 25544U 98067A   23054.45075046  .00016717  00000-0  30164-3 0  9994"
        self.line2 = "2 25544  51.6417 203.5231 0005102 218.5493 303.0730 15.49367633384550"

    def test_valid(self):
        """Test a valid element set."""
        elements = parse_tle(self.line1, self.line2)
        self.assertEqual(elements.satnum_int, 25544)
        self.assertEqual(elements.epoch_year, 2023)

    def test_short_line(self):
        """Test that short lines are rejected."""
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1[:40], self.line2)
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1, self.line2[:50])

    def test_wrong_line_number(self):
        """Test that wrong line numbers are rejected."""
        with self.assertRaises(TLEFormatError):
            parse_tle("3" + self.line1[1:], self.line2)
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1, self.line1)

    def test_mismatched_catalog_numbers(self):
        """Test that mismatched catalog numbers are rejected."""
        line2 = self.line2[:2] + "25545" + self.line2[7:]
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1, line2)

    def test_inclination_out_of_range(self):
        """Test that an out-of-range inclination is rejected."""
        line2 = self.line2[:8] + "190.0000" + self.line2[16:]
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1, line2)

    def test_mean_anomaly_out_of_range(self):
        """Test that an out-of-range mean anomaly is rejected."""
        line2 = self.line2[:43] + "400.0000" + self.line2[51:]
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1, line2)

    def test_zero_mean_motion(self):
        """Test that zero mean motion is rejected."""
        line2 = self.line2[:52] + " 0.00000000" + self.line2[63:]
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1, line2)

    def test_non_numeric_field(self):
        """Test that non-numeric fields are rejected."""
        line2 = self.line2[:8] + "  51.6x7" + self.line2[16:]
        with self.assertRaises(TLEFormatError):
            parse_tle(self.line1, line2)

    def test_errors_are_value_errors(self):
        """Test that format errors are value errors."""
        with self.assertRaises(ValueError):
            parse_tle("", "")

    def test_errors_are_logged(self):
        """Test that format errors are logged."""
        with self.assertLogs("orbit_propagator.tle_parser", level="ERROR"):
            with self.assertRaises(TLEFormatError):
                parse_tle(self.line1[:40], self.line2)


class TestEpochYear(unittest.TestCase):
    """Two-digit year pivot"""

    def test_pivot(self):
        """Test the two-digit year pivot."""
        self.assertEqual(full_epoch_year(56), 2056)
        self.assertEqual(full_epoch_year(57), 1957)
        self.assertEqual(full_epoch_year(99), 1999)
        self.assertEqual(full_epoch_year(0), 2000)


class TestCatalogIteration(unittest.TestCase):
    """Walking two-line and three-line catalogs"""

    def setUp(self):
        self.line1 = "1 25544U 98067A   23054.45075046  .00016717  00000-0  30164-3 0  9994"
        self.line2 = "2 25544  51.6417 203.5231 0005102 218.5493 303.0730 15.49367633384550"

    def test_three_line_catalog(self):
        """Test a catalog with name lines."""
        lines = ["ISS (ZARYA)", self.line1, self.line2, "", "0 VANGUARD 2",
                 "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753",
                 "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667"]
        entries = list(iter_element_sets(lines))
        self.assertEqual(len(entries), 2)
        self.assertEqual(entries[0], ("ISS (ZARYA)", self.line1, self.line2))
        self.assertEqual(entries[1][0], "VANGUARD 2")

    def test_two_line_catalog(self):
        """Test a catalog without name lines."""
        entries = list(iter_element_sets([self.line1 + "\n", self.line2 + "\n"]))
        self.assertEqual(entries, [("", self.line1, self.line2)])

    def test_unpaired_line_dropped(self):
        """Test that an unpaired line is dropped."""
        lines = [self.line1, "NEXT SAT", self.line1, self.line2]
        with self.assertLogs("orbit_propagator.tle_parser", level="WARNING"):
            entries = list(iter_element_sets(lines))
        self.assertEqual(entries, [("NEXT SAT", self.line1, self.line2)])


if __name__ == "__main__":
    unittest.main()
