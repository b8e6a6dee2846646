"""
TLE Parser Module

Fixed-column parsing of Two-Line Element (TLE) sets into the raw orbital
elements that seed the SGP4 initializer.

Column ranges follow the NORAD format (1-based, inclusive):

    Line 1: catalog number 3-7, classification 8, international designator
            10-17, epoch year 19-20, epoch day 21-32, ndot 34-43, nddot 45-52,
            B* 54-61, ephemeris type 63, element set number 65-68, checksum 69
    Line 2: inclination 9-16, node 18-25, eccentricity 27-33, argument of
            perigee 35-42, mean anomaly 44-51, mean motion 53-63, revolution
            number 64-68, checksum 69

Catalog numbers above 99999 use the Alpha-5 scheme: a leading letter ``c``
stands for the two-digit prefix ``(c - 'a') + 10``, so ``J1234`` is 191234.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from orbit_propagator.config import DEG2RAD, XPDOTP
from orbit_propagator.logging_config import get_logger
from orbit_propagator.time_utils import days2mdhms, jday

logger = get_logger(__name__)

LINE1_MIN_LENGTH = 61
LINE2_MIN_LENGTH = 63


class TLEFormatError(ValueError):
    """Raised when an element set cannot be read."""


@dataclass
class ElementSet:
    """
    Raw elements of one TLE, already converted to working units.

    Angles are in radians, mean motion in rad/min, ``ndot`` in rad/min^2 and
    ``nddot`` in rad/min^3. B* is in inverse Earth radii.
    """

    satnum: str
    satnum_int: int
    classification: str
    intldesg: str
    epochyr: int
    epochdays: float
    ndot: float
    nddot: float
    bstar: float
    ephtype: int
    elnum: int
    inclo: float
    nodeo: float
    ecco: float
    argpo: float
    mo: float
    no_kozai: float
    revnum: int
    jdsatepoch: float
    jdsatepochF: float
    name: str = ""
    line1: str = ""
    line2: str = ""

    @property
    def epoch_year(self) -> int:
        """Four-digit epoch year (two-digit years below 57 are 20xx)."""
        return full_epoch_year(self.epochyr)

    @property
    def launch_year(self) -> Optional[int]:
        digits = self.intldesg[:2].strip()
        if not digits.isdigit():
            return None
        return full_epoch_year(int(digits))

    @property
    def launch_number(self) -> Optional[int]:
        digits = self.intldesg[2:5].strip()
        return int(digits) if digits.isdigit() else None

    @property
    def launch_piece(self) -> str:
        return self.intldesg[5:].strip()

    @property
    def mean_motion_rev_per_day(self) -> float:
        return self.no_kozai * XPDOTP

    @property
    def period_minutes(self) -> float:
        return 2.0 * math.pi / self.no_kozai


def full_epoch_year(two_digit_year: int) -> int:
    return two_digit_year + 2000 if two_digit_year < 57 else two_digit_year + 1900


def decode_catalog_number(field: str) -> int:
    """
    Decode a five-column catalog number, including the Alpha-5 form.

    Args:
        field: Columns 3-7 of either line

    Returns:
        Integer catalog number

    Raises:
        TLEFormatError: If the field is empty or not a valid number
    """
    text = field.strip()
    if not text:
        raise TLEFormatError("catalog number is blank")

    first = text[0]
    rest = text[1:]
    try:
        if first.isalpha():
            if not rest.isdigit():
                raise ValueError(field)
            prefix = ord(first.lower()) - ord("a") + 10
            return int(f"{prefix}{rest}")
        return int(text)
    except ValueError:
        raise TLEFormatError(f"invalid catalog number {field!r}") from None


def compute_checksum(line: str) -> int:
    """Modulo-10 checksum of the first 68 columns (digits count their value, '-' counts 1)."""
    total = 0
    for char in line[:68]:
        if char.isdigit():
            total += int(char)
        elif char == "-":
            total += 1
    return total % 10


def exp_to_dec(mant_str: str, exp_str: str) -> float:
    """
    Parse TLE implied-decimal exponential notation.

    ``" 12345-3"`` is read as mantissa ``mant_str = " 12345"`` and exponent
    ``exp_str = "-3"``, giving 0.12345e-3. Blanks inside the fields read as zeros.

    Args:
        mant_str: Sign column followed by the five mantissa digits
        exp_str: Exponent sign and digit

    Returns:
        Decoded value

    Raises:
        TLEFormatError: If either field holds something other than digits and a sign
    """
    sign_char = mant_str[:1]
    digits = mant_str[1:].replace(" ", "0")
    sign = -1.0 if sign_char == "-" else 1.0
    if sign_char not in ("-", "+", " "):
        raise TLEFormatError(f"invalid exponential field {mant_str + exp_str!r}")

    exp_text = exp_str.strip() or "0"
    exp_sign = exp_text[:1]
    exp_digits = exp_text[1:] if exp_sign in "+-" else exp_text
    if not digits.isdigit() or not (exp_digits or "0").isdigit():
        raise TLEFormatError(f"invalid exponential field {mant_str + exp_str!r}")

    exponent = int(exp_digits or "0")
    if exp_sign == "-":
        exponent = -exponent

    return sign * float("0." + digits) * math.pow(10.0, exponent)


def _number(line: str, start: int, end: int, label: str, line_no: int) -> float:
    text = line[start:end]
    try:
        return float(text)
    except ValueError:
        raise TLEFormatError(f"line {line_no}: invalid {label} {text!r}") from None


def _integer(line: str, start: int, end: int, default: int = 0) -> int:
    text = line[start:end].strip()
    return int(text) if text.isdigit() else default


def _check_line(line: str, expected: str, min_length: int) -> None:
    if len(line) < min_length:
        raise TLEFormatError(
            f"line {expected}: expected at least {min_length} columns, got {len(line)}"
        )
    if line[0] != expected:
        raise TLEFormatError(f"line {expected}: line number is {line[0]!r}")
    if len(line) >= 69 and line[68].isdigit():
        expected_sum = compute_checksum(line)
        if int(line[68]) != expected_sum:
            logger.warning(
                f"Checksum mismatch on line {expected}: "
                f"found {line[68]}, computed {expected_sum}"
            )


def parse_tle(line1: str, line2: str, name: str = "") -> ElementSet:
    """
    Parse a two-line element set.

    Args:
        line1: First line of TLE
        line2: Second line of TLE
        name: Optional satellite name

    Returns:
        ElementSet in working units

    Raises:
        TLEFormatError: If a field is malformed or out of range
    """
    line1 = line1.rstrip()
    line2 = line2.rstrip()

    try:
        _check_line(line1, "1", LINE1_MIN_LENGTH)
        _check_line(line2, "2", LINE2_MIN_LENGTH)

        satnum = line1[2:7].strip()
        satnum_int = decode_catalog_number(line1[2:7])
        if decode_catalog_number(line2[2:7]) != satnum_int:
            raise TLEFormatError(
                f"catalog numbers differ: {line1[2:7]!r} and {line2[2:7]!r}"
            )

        classification = line1[7].strip() or "U"
        intldesg = line1[9:17].rstrip()
        epochyr = int(_number(line1, 18, 20, "epoch year", 1))
        epochdays = _number(line1, 20, 32, "epoch day", 1)
        ndot = _number(line1, 33, 43, "first derivative of mean motion", 1)
        nddot = exp_to_dec(line1[44:50], line1[50:52])
        bstar = exp_to_dec(line1[53:59], line1[59:61])
        ephtype = _integer(line1, 62, 63)
        elnum = _integer(line1, 64, 68)

        inclination = _number(line2, 8, 16, "inclination", 2)
        raan = _number(line2, 17, 25, "right ascension", 2)
        ecc_digits = line2[26:33].replace(" ", "0")
        if not ecc_digits.isdigit():
            raise TLEFormatError(f"line 2: invalid eccentricity {line2[26:33]!r}")
        ecco = float("0." + ecc_digits)
        argp = _number(line2, 34, 42, "argument of perigee", 2)
        mean_anomaly = _number(line2, 43, 51, "mean anomaly", 2)
        mean_motion = _number(line2, 52, 63, "mean motion", 2)
        revnum = _integer(line2, 63, 68)

        if not 0.0 <= inclination <= 180.0:
            raise TLEFormatError(f"inclination {inclination} outside [0, 180] degrees")
        for label, value in (("right ascension", raan), ("argument of perigee", argp),
                             ("mean anomaly", mean_anomaly)):
            if not 0.0 <= value <= 360.0:
                raise TLEFormatError(f"{label} {value} outside [0, 360] degrees")
        if mean_motion <= 0.0:
            raise TLEFormatError(f"mean motion {mean_motion} must be positive")

    except TLEFormatError as e:
        logger.error(f"TLE parsing error: {e}")
        raise

    year = full_epoch_year(epochyr)
    mon, day, hr, minute, sec = days2mdhms(year, epochdays)
    jdsatepoch, jdsatepochF = jday(year, mon, day, hr, minute, sec)

    return ElementSet(
        satnum=satnum,
        satnum_int=satnum_int,
        classification=classification,
        intldesg=intldesg,
        epochyr=epochyr,
        epochdays=epochdays,
        ndot=ndot / (XPDOTP * 1440.0),
        nddot=nddot / (XPDOTP * 1440.0 * 1440.0),
        bstar=bstar,
        ephtype=ephtype,
        elnum=elnum,
        inclo=inclination * DEG2RAD,
        nodeo=raan * DEG2RAD,
        ecco=ecco,
        argpo=argp * DEG2RAD,
        mo=mean_anomaly * DEG2RAD,
        no_kozai=mean_motion / XPDOTP,
        revnum=revnum,
        jdsatepoch=jdsatepoch,
        jdsatepochF=jdsatepochF,
        name=name,
        line1=line1,
        line2=line2,
    )


def iter_element_sets(lines: Iterable[str]) -> Iterator[Tuple[str, str, str]]:
    """
    Walk a catalog in two-line or three-line (name line first) form.

    Args:
        lines: Text lines of the catalog

    Yields:
        Tuples (name, line1, line2); name is "" when the catalog has no name lines
    """
    name = ""
    pending = None
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if line.startswith("1 ") and pending is None:
            pending = line
        elif line.startswith("2 ") and pending is not None:
            yield name, pending, line
            name = ""
            pending = None
        else:
            if pending is not None:
                logger.warning(f"Dropping unpaired line 1: {pending!r}")
                pending = None
            name = line[2:].strip() if line.startswith("0 ") else line.strip()
