"""
Orbit Math Utilities

Vector helpers, anomaly conversion and state-vector to classical element
conversion.

Geometrically undefined quantities (for example the argument of perigee of a
circular orbit) are reported as ``None`` rather than a numeric sentinel.

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications (4th ed.),
    Algorithms 5 (NewtonNu) and 9 (RV2COE).
"""

import math
from enum import Enum
from math import asinh
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

from orbit_propagator.config import KEPLER_MAX_ITER, KEPLER_MAX_STEP, KEPLER_TOLERANCE, TWOPI

SMALL = 0.00000001
HALFPI = 0.5 * math.pi

__all__ = [
    "ClassicalElements", "OrbitType", "angle", "asinh", "cross", "dot", "mag",
    "newtonnu", "rv2coe", "sgn", "solve_kepler",
]


def mag(x: Sequence[float]) -> float:
    """Euclidean length of a 3-vector."""
    return float(np.linalg.norm(np.asarray(x, dtype=float)))


def cross(a: Sequence[float], b: Sequence[float]) -> np.ndarray:
    return np.cross(np.asarray(a, dtype=float), np.asarray(b, dtype=float))


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return float(np.dot(np.asarray(a, dtype=float), np.asarray(b, dtype=float)))


def sgn(x: float) -> int:
    return -1 if x < 0.0 else 1


def angle(v1: Sequence[float], v2: Sequence[float]) -> Optional[float]:
    """
    Angle between two vectors.

    Args:
        v1: First vector
        v2: Second vector

    Returns:
        Angle in radians [0, pi], or None if either vector has zero length
    """
    magv1 = mag(v1)
    magv2 = mag(v2)

    if magv1 * magv2 > SMALL * SMALL:
        temp = dot(v1, v2) / (magv1 * magv2)
        if math.fabs(temp) > 1.0:
            temp = sgn(temp) * 1.0
        return math.acos(temp)

    return None


def newtonnu(ecc: float, nu: float) -> Tuple[Optional[float], Optional[float]]:
    """
    Eccentric (or hyperbolic/parabolic) anomaly and mean anomaly from true anomaly.

    Args:
        ecc: Eccentricity
        nu: True anomaly (rad)

    Returns:
        Tuple (e0, m). Either is None when the anomaly is undefined, which
        happens for hyperbolic true anomalies beyond the asymptote and for
        parabolic ones beyond 168 degrees.
    """
    e0 = None
    m = None

    if math.fabs(ecc) < SMALL:
        # circular
        m = nu
        e0 = nu
    elif ecc < 1.0 - SMALL:
        # elliptical
        sine = (math.sqrt(1.0 - ecc * ecc) * math.sin(nu)) / (1.0 + ecc * math.cos(nu))
        cose = (ecc + math.cos(nu)) / (1.0 + ecc * math.cos(nu))
        e0 = math.atan2(sine, cose)
        m = e0 - ecc * math.sin(e0)
    elif ecc > 1.0 + SMALL:
        # hyperbolic
        if math.fabs(nu) + 0.00001 < math.pi - math.acos(1.0 / ecc):
            sine = (math.sqrt(ecc * ecc - 1.0) * math.sin(nu)) / (1.0 + ecc * math.cos(nu))
            e0 = asinh(sine)
            m = ecc * math.sinh(e0) - e0
    elif math.fabs(nu) < 168.0 * math.pi / 180.0:
        # parabolic
        e0 = math.tan(nu * 0.5)
        m = e0 + (e0 * e0 * e0) / 3.0

    if ecc < 1.0 and m is not None:
        m = math.fmod(m, TWOPI)
        if m < 0.0:
            m = m + TWOPI
        e0 = math.fmod(e0, TWOPI)

    return e0, m


def solve_kepler(u: float, axnl: float, aynl: float) -> Tuple[float, float, float]:
    """
    Solve the equinoctial form of Kepler's equation.

    Newton iteration on ``u = E - axnl*sin(E) + aynl*cos(E)``. The step is
    clamped to +/-0.95 rad and the loop stops after ten iterations; the last
    iterate is returned whether or not it met the tolerance.

    Args:
        u: Mean longitude minus node (rad)
        axnl: e*cos(argp) of the long-period corrected elements
        aynl: e*sin(argp) plus the long-period correction

    Returns:
        Tuple (eo1, sineo1, coseo1) of the eccentric longitude and its sine/cosine
    """
    eo1 = u
    tem5 = 9999.9
    ktr = 1
    sineo1 = math.sin(eo1)
    coseo1 = math.cos(eo1)

    while math.fabs(tem5) >= KEPLER_TOLERANCE and ktr <= KEPLER_MAX_ITER:
        sineo1 = math.sin(eo1)
        coseo1 = math.cos(eo1)
        tem5 = 1.0 - coseo1 * axnl - sineo1 * aynl
        tem5 = (u - aynl * coseo1 + axnl * sineo1 - eo1) / tem5
        if math.fabs(tem5) >= KEPLER_MAX_STEP:
            tem5 = KEPLER_MAX_STEP if tem5 > 0.0 else -KEPLER_MAX_STEP
        eo1 = eo1 + tem5
        ktr += 1

    return eo1, sineo1, coseo1


class OrbitType(Enum):
    """Orbit classification used to decide which angles are defined"""

    ELLIPTICAL_INCLINED = "ei"
    CIRCULAR_EQUATORIAL = "ce"
    CIRCULAR_INCLINED = "ci"
    ELLIPTICAL_EQUATORIAL = "ee"


class ClassicalElements(NamedTuple):
    p: Optional[float]
    a: Optional[float]
    ecc: Optional[float]
    incl: Optional[float]
    omega: Optional[float]
    argp: Optional[float]
    nu: Optional[float]
    m: Optional[float]
    arglat: Optional[float]
    truelon: Optional[float]
    lonper: Optional[float]
    orbit_type: Optional[OrbitType] = None


_UNDEFINED_ELEMENTS = ClassicalElements(*([None] * 12))


def _full_circle(value: Optional[float], negative: bool) -> Optional[float]:
    # acos gives [0, pi]; move to (pi, 2pi) when the reference component is negative
    if value is None or not negative:
        return value
    return TWOPI - value


def rv2coe(r: Sequence[float], v: Sequence[float], mu: float) -> ClassicalElements:
    """
    Classical orbital elements from a position and velocity vector.

    Args:
        r: Position vector (km)
        v: Velocity vector (km/s)
        mu: Gravitational parameter (km^3/s^2)

    Returns:
        ClassicalElements with p and a in km and angles in radians. Members
        that are undefined for the orbit type are None; ``a`` is infinite for
        a parabolic orbit. When the angular momentum vanishes every member is None.
    """
    r = np.asarray(r, dtype=float)
    v = np.asarray(v, dtype=float)

    magr = mag(r)
    magv = mag(v)
    hbar = cross(r, v)
    magh = mag(hbar)

    if magh <= SMALL:
        return _UNDEFINED_ELEMENTS

    nbar = np.array([-hbar[1], hbar[0], 0.0])
    magn = mag(nbar)
    c1 = magv * magv - mu / magr
    rdotv = dot(r, v)
    ebar = (c1 * r - rdotv * v) / mu
    ecc = mag(ebar)

    sme = (magv * magv * 0.5) - (mu / magr)
    if math.fabs(sme) > SMALL:
        a = -mu / (2.0 * sme)
    else:
        a = math.inf
    p = magh * magh / mu

    hk = hbar[2] / magh
    incl = math.acos(hk)

    equatorial = incl < SMALL or math.fabs(incl - math.pi) < SMALL
    if ecc < SMALL:
        orbit_type = OrbitType.CIRCULAR_EQUATORIAL if equatorial else OrbitType.CIRCULAR_INCLINED
    else:
        orbit_type = OrbitType.ELLIPTICAL_EQUATORIAL if equatorial else OrbitType.ELLIPTICAL_INCLINED
    elliptical = orbit_type in (OrbitType.ELLIPTICAL_INCLINED, OrbitType.ELLIPTICAL_EQUATORIAL)

    # longitude of ascending node
    omega = None
    if magn > SMALL:
        temp = nbar[0] / magn
        if math.fabs(temp) > 1.0:
            temp = sgn(temp)
        omega = _full_circle(math.acos(temp), nbar[1] < 0.0)

    argp = None
    if orbit_type is OrbitType.ELLIPTICAL_INCLINED:
        argp = _full_circle(angle(nbar, ebar), ebar[2] < 0.0)

    nu = None
    if elliptical:
        nu = _full_circle(angle(ebar, r), rdotv < 0.0)

    m = None
    arglat = None
    if orbit_type is OrbitType.CIRCULAR_INCLINED:
        arglat = _full_circle(angle(nbar, r), r[2] < 0.0)
        m = arglat

    lonper = None
    if ecc > SMALL and orbit_type is OrbitType.ELLIPTICAL_EQUATORIAL:
        temp = ebar[0] / ecc
        if math.fabs(temp) > 1.0:
            temp = sgn(temp)
        lonper = _full_circle(math.acos(temp), ebar[1] < 0.0)
        if incl > HALFPI:
            lonper = TWOPI - lonper

    truelon = None
    if magr > SMALL and orbit_type is OrbitType.CIRCULAR_EQUATORIAL:
        temp = r[0] / magr
        if math.fabs(temp) > 1.0:
            temp = sgn(temp)
        truelon = _full_circle(math.acos(temp), r[1] < 0.0)
        if incl > HALFPI:
            truelon = TWOPI - truelon
        m = truelon

    if elliptical and nu is not None:
        _, m = newtonnu(ecc, nu)

    return ClassicalElements(
        p, a, ecc, incl, omega, argp, nu, m, arglat, truelon, lonper, orbit_type
    )
