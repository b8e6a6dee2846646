"""
SGP4 Initialization

Turns raw elements into an initialized SatelliteRecord.

- ``initl`` removes the Kozai mean motion convention (Brouwer correction) and
  computes the epoch quantities shared by everything downstream, including
  the Greenwich sidereal time at epoch.
- ``sgp4init`` computes the near-Earth secular and drag coefficients, selects
  SDP4 for periods of 225 minutes or more and runs the deep-space
  initialization, then propagates to epoch once to validate the elements.

Sub-orbital epoch elements (historical error code 5) are not rejected here;
true decay is reported by the kernel when the radius drops below one Earth
radius.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import math
from typing import NamedTuple, Optional, Union

from orbit_propagator.config import (
    DEEP_SPACE_PERIOD_MIN,
    DEFAULT_GRAVITY_MODEL,
    DEFAULT_OPS_MODE,
    SGP4_EPOCH_JD,
    TWOPI,
)
from orbit_propagator.deep_space import dscom, dsinit
from orbit_propagator.gravity import GravityConstants, GravityModel, get_gravity_constants, resolve_gravity_model
from orbit_propagator.kernel import sgp4
from orbit_propagator.logging_config import get_logger
from orbit_propagator.satrec import DeepSpaceCoefficients, ErrorCode, Method, OpsMode, SatelliteRecord
from orbit_propagator.time_utils import gstime
from orbit_propagator.tle_parser import ElementSet, parse_tle

logger = get_logger(__name__)

X2O3 = 2.0 / 3.0
TEMP4 = 1.5e-12

# AFSPC sidereal time at 0 Jan 1970 and its rates
THGR70 = 1.7321343856509374
C1 = 1.72027916940703639e-2
FK5R = 5.07551419432269442e-15


class EpochQuantities(NamedTuple):
    no_unkozai: float
    ainv: float
    ao: float
    con41: float
    con42: float
    cosio: float
    cosio2: float
    eccsq: float
    omeosq: float
    posq: float
    rp: float
    rteosq: float
    sinio: float
    gsto: float


def afspc_gstime(epoch: float) -> float:
    """
    Greenwich sidereal time by the legacy AFSPC formula.

    Args:
        epoch: Days since 0 Jan 1950, 0h

    Returns:
        Sidereal angle in radians, in [0, 2pi)
    """
    ts70 = epoch - 7305.0
    ds70 = math.floor(ts70 + 1.0e-8)
    tfrac = ts70 - ds70
    c1p2p = C1 + TWOPI
    gsto = math.fmod(THGR70 + C1 * ds70 + c1p2p * tfrac + ts70 * ts70 * FK5R, TWOPI)
    if gsto < 0.0:
        gsto = gsto + TWOPI
    return gsto


def initl(grav: GravityConstants, ecco: float, epoch: float, inclo: float,
          no_kozai: float, opsmode: OpsMode) -> EpochQuantities:
    """
    Epoch quantities for SGP4.

    Args:
        grav: Gravity model constants
        ecco: Eccentricity
        epoch: Days since 0 Jan 1950, 0h
        inclo: Inclination (rad)
        no_kozai: Mean motion from the element set (rad/min)
        opsmode: Selects the sidereal time formula

    Returns:
        EpochQuantities with the Brouwer mean motion and auxiliary terms
    """
    eccsq = ecco * ecco
    omeosq = 1.0 - eccsq
    rteosq = math.sqrt(omeosq)
    cosio = math.cos(inclo)
    cosio2 = cosio * cosio

    # un-Kozai the mean motion
    ak = math.pow(grav.xke / no_kozai, X2O3)
    d1 = 0.75 * grav.j2 * (3.0 * cosio2 - 1.0) / (rteosq * omeosq)
    delta = d1 / (ak * ak)
    adel = ak * (1.0 - delta * delta - delta * (1.0 / 3.0 + 134.0 * delta * delta / 81.0))
    delta = d1 / (adel * adel)
    no_unkozai = no_kozai / (1.0 + delta)

    ao = math.pow(grav.xke / no_unkozai, X2O3)
    sinio = math.sin(inclo)
    po = ao * omeosq
    con42 = 1.0 - 5.0 * cosio2
    con41 = -con42 - cosio2 - cosio2
    ainv = 1.0 / ao
    posq = po * po
    rp = ao * (1.0 - ecco)

    if opsmode is OpsMode.AFSPC:
        gsto = afspc_gstime(epoch)
    else:
        gsto = gstime(epoch + SGP4_EPOCH_JD)

    return EpochQuantities(
        no_unkozai, ainv, ao, con41, con42, cosio, cosio2, eccsq,
        omeosq, posq, rp, rteosq, sinio, gsto,
    )


def sgp4init(record: SatelliteRecord) -> SatelliteRecord:
    """
    Initialize the derived constants of a record holding raw elements.

    Finishes with a propagation to epoch, whose outcome is left in
    ``record.error``.

    Args:
        record: Record with identity, gravity constants, ops mode and raw elements set

    Returns:
        The same record, initialized
    """
    grav = record.gravity
    ss = 78.0 / grav.radiusearthkm + 1.0
    qzms2ttemp = (120.0 - 78.0) / grav.radiusearthkm
    qzms2t = qzms2ttemp * qzms2ttemp * qzms2ttemp * qzms2ttemp

    record.t = 0.0
    record.error = ErrorCode.NONE
    record.deep_space = None
    record.method = Method.NEAR_EARTH

    epoch = record.epoch
    eq = initl(grav, record.ecco, epoch, record.inclo, record.no_kozai, record.opsmode)
    ao = eq.ao
    cosio = eq.cosio
    cosio2 = eq.cosio2
    sinio = eq.sinio
    omeosq = eq.omeosq

    record.no_unkozai = eq.no_unkozai
    record.con41 = eq.con41
    record.gsto = eq.gsto
    record.a = math.pow(record.no_unkozai * grav.tumin, -X2O3)
    record.alta = record.a * (1.0 + record.ecco) - 1.0
    record.altp = record.a * (1.0 - record.ecco) - 1.0

    record.isimp = 0
    if eq.rp < (220.0 / grav.radiusearthkm + 1.0):
        record.isimp = 1

    # atmospheric density parameters, altered for perigees below 156 km
    sfour = ss
    qzms24 = qzms2t
    perige = (eq.rp - 1.0) * grav.radiusearthkm
    if perige < 156.0:
        sfour = perige - 78.0
        if perige < 98.0:
            sfour = 20.0
        qzms24temp = (120.0 - sfour) / grav.radiusearthkm
        qzms24 = qzms24temp * qzms24temp * qzms24temp * qzms24temp
        sfour = sfour / grav.radiusearthkm + 1.0

    pinvsq = 1.0 / eq.posq
    tsi = 1.0 / (ao - sfour)
    record.eta = ao * record.ecco * tsi
    etasq = record.eta * record.eta
    eeta = record.ecco * record.eta
    psisq = math.fabs(1.0 - etasq)
    coef = qzms24 * math.pow(tsi, 4.0)
    coef1 = coef / math.pow(psisq, 3.5)
    cc2 = coef1 * record.no_unkozai * (
        ao * (1.0 + 1.5 * etasq + eeta * (4.0 + etasq))
        + 0.375 * grav.j2 * tsi / psisq * record.con41 * (8.0 + 3.0 * etasq * (8.0 + etasq))
    )
    record.cc1 = record.bstar * cc2
    cc3 = 0.0
    if record.ecco > 1.0e-4:
        cc3 = -2.0 * coef * tsi * grav.j3oj2 * record.no_unkozai * sinio / record.ecco
    record.x1mth2 = 1.0 - cosio2
    record.cc4 = 2.0 * record.no_unkozai * coef1 * ao * omeosq * (
        record.eta * (2.0 + 0.5 * etasq)
        + record.ecco * (0.5 + 2.0 * etasq)
        - grav.j2 * tsi / (ao * psisq) * (
            -3.0 * record.con41 * (1.0 - 2.0 * eeta + etasq * (1.5 - 0.5 * eeta))
            + 0.75 * record.x1mth2 * (2.0 * etasq - eeta * (1.0 + etasq)) * math.cos(2.0 * record.argpo)
        )
    )
    record.cc5 = 2.0 * coef1 * ao * omeosq * (1.0 + 2.75 * (etasq + eeta) + eeta * etasq)

    # secular rates
    cosio4 = cosio2 * cosio2
    temp1 = 1.5 * grav.j2 * pinvsq * record.no_unkozai
    temp2 = 0.5 * temp1 * grav.j2 * pinvsq
    temp3 = -0.46875 * grav.j4 * pinvsq * pinvsq * record.no_unkozai
    record.mdot = (
        record.no_unkozai
        + 0.5 * temp1 * eq.rteosq * record.con41
        + 0.0625 * temp2 * eq.rteosq * (13.0 - 78.0 * cosio2 + 137.0 * cosio4)
    )
    record.argpdot = (
        -0.5 * temp1 * eq.con42
        + 0.0625 * temp2 * (7.0 - 114.0 * cosio2 + 395.0 * cosio4)
        + temp3 * (3.0 - 36.0 * cosio2 + 49.0 * cosio4)
    )
    xhdot1 = -temp1 * cosio
    record.nodedot = xhdot1 + (
        0.5 * temp2 * (4.0 - 19.0 * cosio2) + 2.0 * temp3 * (3.0 - 7.0 * cosio2)
    ) * cosio
    xpidot = record.argpdot + record.nodedot
    record.omgcof = record.bstar * cc3 * math.cos(record.argpo)
    record.xmcof = 0.0
    if record.ecco > 1.0e-4:
        record.xmcof = -X2O3 * coef * record.bstar / eeta
    record.nodecf = 3.5 * omeosq * xhdot1 * record.cc1
    record.t2cof = 1.5 * record.cc1

    # guard the divide for inclinations of 180 degrees
    if math.fabs(cosio + 1.0) > TEMP4:
        record.xlcof = -0.25 * grav.j3oj2 * sinio * (3.0 + 5.0 * cosio) / (1.0 + cosio)
    else:
        record.xlcof = -0.25 * grav.j3oj2 * sinio * (3.0 + 5.0 * cosio) / TEMP4
    record.aycof = -0.5 * grav.j3oj2 * sinio
    delmotemp = 1.0 + record.eta * math.cos(record.mo)
    record.delmo = delmotemp * delmotemp * delmotemp
    record.sinmao = math.sin(record.mo)
    record.x7thm1 = 7.0 * cosio2 - 1.0

    if TWOPI / record.no_unkozai >= DEEP_SPACE_PERIOD_MIN:
        record.method = Method.DEEP_SPACE
        record.isimp = 1
        ds = DeepSpaceCoefficients()
        common = dscom(
            epoch, record.ecco, record.argpo, 0.0, record.inclo,
            record.nodeo, record.no_unkozai, ds,
        )
        record.resonance = dsinit(
            ds, common, grav.xke, record.ecco, eq.eccsq, record.inclo,
            record.argpo, record.mo, record.nodeo, record.mdot,
            record.nodedot, xpidot, record.no_unkozai, record.gsto,
        )
        record.deep_space = ds
        logger.debug(
            f"Satellite {record.satnum}: deep space, resonance {ds.irez.name}"
        )

    # higher-order drag polynomial for the full near-Earth model
    if record.isimp != 1:
        cc1sq = record.cc1 * record.cc1
        record.d2 = 4.0 * ao * tsi * cc1sq
        temp = record.d2 * tsi * record.cc1 / 3.0
        record.d3 = (17.0 * ao + sfour) * temp
        record.d4 = 0.5 * temp * ao * tsi * (221.0 * ao + 31.0 * sfour) * record.cc1
        record.t3cof = record.d2 + 2.0 * cc1sq
        record.t4cof = 0.25 * (3.0 * record.d3 + record.cc1 * (12.0 * record.d2 + 10.0 * cc1sq))
        record.t5cof = 0.2 * (
            3.0 * record.d4
            + 12.0 * record.cc1 * record.d3
            + 6.0 * record.d2 * record.d2
            + 15.0 * cc1sq * (2.0 * record.d2 + cc1sq)
        )
    else:
        record.d2 = record.d3 = record.d4 = 0.0
        record.t3cof = record.t4cof = record.t5cof = 0.0

    sgp4(record, 0.0)
    if record.error != ErrorCode.NONE:
        logger.warning(
            f"Satellite {record.satnum} failed at epoch: error {int(record.error)} ({record.error_message})"
        )
    return record


def initialize(elements: ElementSet,
               gravity_model: Union[GravityModel, str] = DEFAULT_GRAVITY_MODEL,
               ops_mode: Union[OpsMode, str] = DEFAULT_OPS_MODE) -> SatelliteRecord:
    """
    Build and initialize a SatelliteRecord from parsed elements.

    Args:
        elements: Raw elements from ``parse_tle``
        gravity_model: Gravity model enum member or name
        ops_mode: OpsMode member, "a"/"afspc" or "i"/"improved"

    Returns:
        Initialized record; check ``record.error`` for the outcome of the
        validating propagation to epoch

    Raises:
        ValueError: If the gravity model or ops mode is unknown
    """
    model = resolve_gravity_model(gravity_model)
    record = SatelliteRecord(
        satnum=elements.satnum,
        satnum_int=elements.satnum_int,
        gravity_model=model,
        gravity=get_gravity_constants(model),
        opsmode=OpsMode.resolve(ops_mode),
        ecco=elements.ecco,
        inclo=elements.inclo,
        argpo=elements.argpo,
        mo=elements.mo,
        no_kozai=elements.no_kozai,
        nodeo=elements.nodeo,
        bstar=elements.bstar,
        ndot=elements.ndot,
        nddot=elements.nddot,
        epochyr=elements.epochyr,
        epochdays=elements.epochdays,
        jdsatepoch=elements.jdsatepoch,
        jdsatepochF=elements.jdsatepochF,
    )
    return sgp4init(record)


def twoline2rv(line1: str, line2: str,
               gravity_model: Union[GravityModel, str] = DEFAULT_GRAVITY_MODEL,
               ops_mode: Union[OpsMode, str] = DEFAULT_OPS_MODE,
               name: Optional[str] = None) -> SatelliteRecord:
    """
    Parse and initialize a two-line element set in one step.

    Raises:
        TLEFormatError: If the lines cannot be parsed
        ValueError: If the gravity model or ops mode is unknown
    """
    return initialize(parse_tle(line1, line2, name or ""), gravity_model, ops_mode)
