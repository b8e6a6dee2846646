"""
Satellite Record

The mutable state of one initialized propagator instance: identity, raw
elements in working units (radians, minutes, Earth radii), constants derived
at initialization, the optional deep-space coefficients and the error code of
the last operation.

Only the propagation kernel mutates a record after initialization, and only
through ``error``, ``t`` and the deep-space ``ResonanceCache``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional

from orbit_propagator.config import SGP4_EPOCH_JD
from orbit_propagator.gravity import GravityConstants, GravityModel, get_gravity_constants
from orbit_propagator.time_utils import datetime_from_jday


class OpsMode(Enum):
    """Sidereal time and node handling variant"""

    AFSPC = "a"
    IMPROVED = "i"

    @classmethod
    def resolve(cls, value) -> "OpsMode":
        if isinstance(value, cls):
            return value
        text = str(value).lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"unknown operations mode {value}")


class Method(Enum):
    """Propagation theory selected at initialization"""

    NEAR_EARTH = "n"
    DEEP_SPACE = "d"


class Resonance(Enum):
    """Deep-space geopotential resonance class"""

    NONE = 0
    SYNCHRONOUS = 1
    HALF_DAY = 2


class ErrorCode(IntEnum):
    NONE = 0
    MEAN_ELEMENTS = 1
    MEAN_MOTION = 2
    PERTURBED_ECCENTRICITY = 3
    SEMI_LATUS_RECTUM = 4
    SUBORBITAL = 5
    DECAYED = 6


# Error code meanings
ERROR_MESSAGES = {
    ErrorCode.NONE: "No error",
    ErrorCode.MEAN_ELEMENTS: "Mean eccentricity is outside [-0.001, 1.0) or mean semi-major axis is below 0.95 Earth radii",
    ErrorCode.MEAN_MOTION: "Mean motion is not positive",
    ErrorCode.PERTURBED_ECCENTRICITY: "Perturbed eccentricity is outside [0, 1]",
    ErrorCode.SEMI_LATUS_RECTUM: "Semi-latus rectum is negative",
    ErrorCode.SUBORBITAL: "Epoch elements are sub-orbital",
    ErrorCode.DECAYED: "Satellite has decayed (radius below one Earth radius)",
}


@dataclass
class ResonanceCache:
    """
    Integrator state of the deep-space resonance terms.

    ``atime`` is the integrator time (minutes from epoch) reached by the last
    propagation, ``xli`` and ``xni`` the mean longitude and mean motion at that
    time. ``xlamo`` and ``xn0`` hold the epoch values the integrator restarts
    from on ``reset``.
    """

    xlamo: float = 0.0
    xn0: float = 0.0
    atime: float = 0.0
    xli: float = 0.0
    xni: float = 0.0

    def reset(self) -> None:
        self.atime = 0.0
        self.xli = self.xlamo
        self.xni = self.xn0


@dataclass
class DeepSpaceCoefficients:
    """Lunar-solar and resonance coefficients computed once by the deep-space initialization."""

    # lunar-solar long-period periodic amplitudes
    e3: float = 0.0
    ee2: float = 0.0
    se2: float = 0.0
    se3: float = 0.0
    sgh2: float = 0.0
    sgh3: float = 0.0
    sgh4: float = 0.0
    sh2: float = 0.0
    sh3: float = 0.0
    si2: float = 0.0
    si3: float = 0.0
    sl2: float = 0.0
    sl3: float = 0.0
    sl4: float = 0.0
    xgh2: float = 0.0
    xgh3: float = 0.0
    xgh4: float = 0.0
    xh2: float = 0.0
    xh3: float = 0.0
    xi2: float = 0.0
    xi3: float = 0.0
    xl2: float = 0.0
    xl3: float = 0.0
    xl4: float = 0.0
    zmol: float = 0.0
    zmos: float = 0.0

    # lunar-solar secular rates
    dedt: float = 0.0
    didt: float = 0.0
    dmdt: float = 0.0
    dnodt: float = 0.0
    domdt: float = 0.0

    # resonance
    irez: Resonance = Resonance.NONE
    d2201: float = 0.0
    d2211: float = 0.0
    d3210: float = 0.0
    d3222: float = 0.0
    d4410: float = 0.0
    d4422: float = 0.0
    d5220: float = 0.0
    d5232: float = 0.0
    d5421: float = 0.0
    d5433: float = 0.0
    del1: float = 0.0
    del2: float = 0.0
    del3: float = 0.0
    xfact: float = 0.0


@dataclass
class SatelliteRecord:
    # identity / configuration
    satnum: str = ""
    satnum_int: int = 0
    gravity_model: GravityModel = GravityModel.WGS72
    gravity: GravityConstants = field(default_factory=get_gravity_constants)
    opsmode: OpsMode = OpsMode.IMPROVED

    # raw elements in working units
    ecco: float = 0.0
    inclo: float = 0.0
    argpo: float = 0.0
    mo: float = 0.0
    no_kozai: float = 0.0
    nodeo: float = 0.0
    bstar: float = 0.0
    ndot: float = 0.0
    nddot: float = 0.0
    epochyr: int = 0
    epochdays: float = 0.0
    jdsatepoch: float = 0.0
    jdsatepochF: float = 0.0

    # derived at initialization
    method: Method = Method.NEAR_EARTH
    isimp: int = 0
    no_unkozai: float = 0.0
    a: float = 0.0
    alta: float = 0.0
    altp: float = 0.0
    gsto: float = 0.0
    aycof: float = 0.0
    con41: float = 0.0
    cc1: float = 0.0
    cc4: float = 0.0
    cc5: float = 0.0
    d2: float = 0.0
    d3: float = 0.0
    d4: float = 0.0
    delmo: float = 0.0
    eta: float = 0.0
    argpdot: float = 0.0
    omgcof: float = 0.0
    sinmao: float = 0.0
    t2cof: float = 0.0
    t3cof: float = 0.0
    t4cof: float = 0.0
    t5cof: float = 0.0
    x1mth2: float = 0.0
    x7thm1: float = 0.0
    mdot: float = 0.0
    nodedot: float = 0.0
    xlcof: float = 0.0
    xmcof: float = 0.0
    nodecf: float = 0.0

    # present only for deep-space records
    deep_space: Optional[DeepSpaceCoefficients] = None
    resonance: ResonanceCache = field(default_factory=ResonanceCache)

    # last operation
    t: float = 0.0
    error: int = ErrorCode.NONE

    @property
    def is_deep_space(self) -> bool:
        return self.method is Method.DEEP_SPACE

    @property
    def irez(self) -> Resonance:
        if self.deep_space is None:
            return Resonance.NONE
        return self.deep_space.irez

    @property
    def error_message(self) -> str:
        return ERROR_MESSAGES.get(self.error, f"Unknown error {self.error}")

    @property
    def epoch(self) -> float:
        """Epoch as days since 0 Jan 1950, 0h."""
        return self.jdsatepoch + self.jdsatepochF - SGP4_EPOCH_JD

    @property
    def epoch_datetime(self) -> datetime:
        return datetime_from_jday(self.jdsatepoch, self.jdsatepochF)

    def reset_resonance(self) -> None:
        """Restart the resonance integrator from epoch on the next propagation."""
        self.resonance.reset()
