"""
SGP4 Propagation Kernel

Propagates an initialized SatelliteRecord to a time offset from its epoch.

Steps:
1. Secular gravity and drag update of the mean elements
2. Deep-space secular and resonance effects (SDP4 records only)
3. Mean element validation (error codes 1 and 2)
4. Lunar-solar long-period periodics (SDP4 records only, error code 3)
5. Long-period J3 terms and Kepler's equation
6. Short-period J2 corrections (error code 4 for a negative semi-latus rectum)
7. Decay check (error code 6) and TEME position/velocity

Failures do not raise: the kernel sets ``record.error`` and returns None so
that callers working through a catalog can skip the record.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import math
from typing import NamedTuple, Optional

import numpy as np

from orbit_propagator.config import TWOPI
from orbit_propagator.deep_space import dpper, dspace
from orbit_propagator.logging_config import get_logger
from orbit_propagator.orbit_math import solve_kepler
from orbit_propagator.satrec import ErrorCode, Method, SatelliteRecord

logger = get_logger(__name__)

X2O3 = 2.0 / 3.0
TEMP4 = 1.5e-12


class StateVector(NamedTuple):
    """TEME position (km) and velocity (km/s)"""

    position: np.ndarray
    velocity: np.ndarray


def _fail(record: SatelliteRecord, code: ErrorCode, tsince: float) -> None:
    record.error = code
    logger.debug(f"Satellite {record.satnum} t={tsince:.3f} min: error {int(code)} ({record.error_message})")
    return None


def sgp4(record: SatelliteRecord, tsince: float) -> Optional[StateVector]:
    """
    Propagate a record to ``tsince`` minutes from epoch.

    Args:
        record: Initialized satellite record
        tsince: Minutes since epoch (negative values propagate backwards)

    Returns:
        StateVector, or None with ``record.error`` set on failure
    """
    grav = record.gravity
    deep = record.method is Method.DEEP_SPACE
    vkmpersec = grav.radiusearthkm * grav.xke / 60.0

    record.t = tsince
    record.error = ErrorCode.NONE

    # secular gravity and atmospheric drag
    xmdf = record.mo + record.mdot * tsince
    argpdf = record.argpo + record.argpdot * tsince
    nodedf = record.nodeo + record.nodedot * tsince
    argpm = argpdf
    mm = xmdf
    t2 = tsince * tsince
    nodem = nodedf + record.nodecf * t2
    tempa = 1.0 - record.cc1 * tsince
    tempe = record.bstar * record.cc4 * tsince
    templ = record.t2cof * t2

    if record.isimp != 1:
        delomg = record.omgcof * tsince
        delmtemp = 1.0 + record.eta * math.cos(xmdf)
        delm = record.xmcof * (delmtemp * delmtemp * delmtemp - record.delmo)
        temp = delomg + delm
        mm = xmdf + temp
        argpm = argpdf - temp
        t3 = t2 * tsince
        t4 = t3 * tsince
        tempa = tempa - record.d2 * t2 - record.d3 * t3 - record.d4 * t4
        tempe = tempe + record.bstar * record.cc5 * (math.sin(mm) - record.sinmao)
        templ = templ + record.t3cof * t3 + t4 * (record.t4cof + tsince * record.t5cof)

    nm = record.no_unkozai
    em = record.ecco
    inclm = record.inclo
    if deep:
        em, argpm, inclm, mm, nodem, nm = dspace(
            record.deep_space, record.resonance, tsince, tsince, record.gsto,
            record.argpo, record.argpdot, record.no_unkozai,
            em, argpm, inclm, mm, nodem, nm,
        )

    if nm <= 0.0:
        return _fail(record, ErrorCode.MEAN_MOTION, tsince)

    am = math.pow(grav.xke / nm, X2O3) * tempa * tempa
    nm = grav.xke / math.pow(am, 1.5)
    em = em - tempe

    if em >= 1.0 or em < -0.001 or am < 0.95:
        return _fail(record, ErrorCode.MEAN_ELEMENTS, tsince)
    # avoid a divide by zero for circular orbits
    if em < 1.0e-6:
        em = 1.0e-6

    mm = mm + record.no_unkozai * templ
    xlm = mm + argpm + nodem

    nodem = math.fmod(nodem, TWOPI)
    argpm = math.fmod(argpm, TWOPI)
    xlm = math.fmod(xlm, TWOPI)
    mm = math.fmod(xlm - argpm - nodem, TWOPI)

    sinim = math.sin(inclm)
    cosim = math.cos(inclm)

    ep = em
    xincp = inclm
    argpp = argpm
    nodep = nodem
    mp = mm
    sinip = sinim
    cosip = cosim
    aycof = record.aycof
    xlcof = record.xlcof
    con41 = record.con41
    x1mth2 = record.x1mth2
    x7thm1 = record.x7thm1

    if deep:
        ep, xincp, nodep, argpp, mp = dpper(
            record.deep_space, tsince, ep, xincp, nodep, argpp, mp, record.opsmode
        )
        if xincp < 0.0:
            xincp = -xincp
            nodep = nodep + math.pi
            argpp = argpp - math.pi
        if ep < 0.0 or ep > 1.0:
            return _fail(record, ErrorCode.PERTURBED_ECCENTRICITY, tsince)

        # long-period coefficients follow the perturbed inclination
        sinip = math.sin(xincp)
        cosip = math.cos(xincp)
        aycof = -0.5 * grav.j3oj2 * sinip
        if math.fabs(cosip + 1.0) > TEMP4:
            xlcof = -0.25 * grav.j3oj2 * sinip * (3.0 + 5.0 * cosip) / (1.0 + cosip)
        else:
            xlcof = -0.25 * grav.j3oj2 * sinip * (3.0 + 5.0 * cosip) / TEMP4

    # long-period periodics
    axnl = ep * math.cos(argpp)
    temp = 1.0 / (am * (1.0 - ep * ep))
    aynl = ep * math.sin(argpp) + temp * aycof
    xl = mp + argpp + nodep + temp * xlcof * axnl

    u = math.fmod(xl - nodep, TWOPI)
    eo1, sineo1, coseo1 = solve_kepler(u, axnl, aynl)

    # short-period preliminary quantities
    ecose = axnl * coseo1 + aynl * sineo1
    esine = axnl * sineo1 - aynl * coseo1
    el2 = axnl * axnl + aynl * aynl
    pl = am * (1.0 - el2)
    if pl < 0.0:
        return _fail(record, ErrorCode.SEMI_LATUS_RECTUM, tsince)

    rl = am * (1.0 - ecose)
    rdotl = math.sqrt(am) * esine / rl
    rvdotl = math.sqrt(pl) / rl
    betal = math.sqrt(1.0 - el2)
    temp = esine / (1.0 + betal)
    sinu = am / rl * (sineo1 - aynl - axnl * temp)
    cosu = am / rl * (coseo1 - axnl + aynl * temp)
    su = math.atan2(sinu, cosu)
    sin2u = (cosu + cosu) * sinu
    cos2u = 1.0 - 2.0 * sinu * sinu
    temp = 1.0 / pl
    temp1 = 0.5 * grav.j2 * temp
    temp2 = temp1 * temp

    if deep:
        cosisq = cosip * cosip
        con41 = 3.0 * cosisq - 1.0
        x1mth2 = 1.0 - cosisq
        x7thm1 = 7.0 * cosisq - 1.0

    # short-period periodics
    mrt = rl * (1.0 - 1.5 * temp2 * betal * con41) + 0.5 * temp1 * x1mth2 * cos2u
    su = su - 0.25 * temp2 * x7thm1 * sin2u
    xnode = nodep + 1.5 * temp2 * cosip * sin2u
    xinc = xincp + 1.5 * temp2 * cosip * sinip * cos2u
    mvt = rdotl - nm * temp1 * x1mth2 * sin2u / grav.xke
    rvdot = rvdotl + nm * temp1 * (x1mth2 * cos2u + 1.5 * con41) / grav.xke

    if mrt < 1.0:
        return _fail(record, ErrorCode.DECAYED, tsince)

    # orientation vectors
    sinsu = math.sin(su)
    cossu = math.cos(su)
    snod = math.sin(xnode)
    cnod = math.cos(xnode)
    sini = math.sin(xinc)
    cosi = math.cos(xinc)
    xmx = -snod * cosi
    xmy = cnod * cosi
    ux = xmx * sinsu + cnod * cossu
    uy = xmy * sinsu + snod * cossu
    uz = sini * sinsu
    vx = xmx * cossu - cnod * sinsu
    vy = xmy * cossu - snod * sinsu
    vz = sini * cossu

    position = np.array([mrt * ux, mrt * uy, mrt * uz]) * grav.radiusearthkm
    velocity = np.array([
        mvt * ux + rvdot * vx,
        mvt * uy + rvdot * vy,
        mvt * uz + rvdot * vz,
    ]) * vkmpersec

    return StateVector(position, velocity)


# name used by the propagation call contract
propagate = sgp4
