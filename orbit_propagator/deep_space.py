"""
Deep-Space (SDP4) Perturbations

Lunar-solar and geopotential resonance effects for orbits with a period of
225 minutes or more.

Procedures:
    dscom: lunar and solar geometry terms shared by the other procedures
    dpper: long-period lunar-solar periodics, with the Lyddane modification
        for low perturbed inclination
    dsinit: secular lunar-solar rates and resonance coefficients
    dspace: fixed-step integration of the resonance terms

The integrator state lives in the record's ``ResonanceCache``; all other
intermediate quantities are local to each call.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
    Hoots, F. R., & Roehrich, R. L. (1980). Spacetrack Report No. 3.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from orbit_propagator.config import TWOPI
from orbit_propagator.logging_config import get_logger
from orbit_propagator.satrec import DeepSpaceCoefficients, OpsMode, Resonance, ResonanceCache

logger = get_logger(__name__)

# Solar and lunar constants
ZES = 0.01675
ZEL = 0.05490
ZNS = 1.19459e-5
ZNL = 1.5835218e-4
C1SS = 2.9864797e-6
C1L = 4.7968065e-7
ZSINIS = 0.39785416
ZCOSIS = 0.91744867
ZCOSGS = 0.1945905
ZSINGS = -0.98088458

# Earth rotation rate (rad/min)
RPTIM = 4.37526908801129966e-3

# Resonance bands (rad/min)
SYNCHRONOUS_MIN = 0.0034906585
SYNCHRONOUS_MAX = 0.0052359877
HALF_DAY_MIN = 8.26e-3
HALF_DAY_MAX = 9.24e-3
HALF_DAY_MIN_ECC = 0.5

# Integrator step (minutes)
STEPP = 720.0
STEPN = -720.0
STEP2 = 259200.0

LYDDANE_INCLINATION = 0.2


@dataclass
class CommonTerms:
    """Output of ``dscom``: orientation terms and the solar (``ss*``, ``sz*``) and lunar (``s*``, ``z*``) geometry."""

    snodm: float
    cnodm: float
    sinim: float
    cosim: float
    sinomm: float
    cosomm: float
    day: float
    em: float
    emsq: float
    gam: float
    rtemsq: float
    nm: float
    s1: float
    s2: float
    s3: float
    s4: float
    s5: float
    s6: float
    s7: float
    ss1: float
    ss2: float
    ss3: float
    ss4: float
    ss5: float
    ss6: float
    ss7: float
    sz1: float
    sz2: float
    sz3: float
    sz11: float
    sz12: float
    sz13: float
    sz21: float
    sz22: float
    sz23: float
    sz31: float
    sz32: float
    sz33: float
    z1: float
    z2: float
    z3: float
    z11: float
    z12: float
    z13: float
    z21: float
    z22: float
    z23: float
    z31: float
    z32: float
    z33: float


def _geometry_pass(zcosg, zsing, zcosi, zsini, zcosh, zsinh, cc,
                   cosim, sinim, cosomm, sinomm, em, emsq, betasq, rtemsq, xnoi):
    # one body (sun or moon): returns (s1..s7, z1..z3, z11..z13, z21..z23, z31..z33)
    a1 = zcosg * zcosh + zsing * zcosi * zsinh
    a3 = -zsing * zcosh + zcosg * zcosi * zsinh
    a7 = -zcosg * zsinh + zsing * zcosi * zcosh
    a8 = zsing * zsini
    a9 = zsing * zsinh + zcosg * zcosi * zcosh
    a10 = zcosg * zsini
    a2 = cosim * a7 + sinim * a8
    a4 = cosim * a9 + sinim * a10
    a5 = -sinim * a7 + cosim * a8
    a6 = -sinim * a9 + cosim * a10

    x1 = a1 * cosomm + a2 * sinomm
    x2 = a3 * cosomm + a4 * sinomm
    x3 = -a1 * sinomm + a2 * cosomm
    x4 = -a3 * sinomm + a4 * cosomm
    x5 = a5 * sinomm
    x6 = a6 * sinomm
    x7 = a5 * cosomm
    x8 = a6 * cosomm

    z31 = 12.0 * x1 * x1 - 3.0 * x3 * x3
    z32 = 24.0 * x1 * x2 - 6.0 * x3 * x4
    z33 = 12.0 * x2 * x2 - 3.0 * x4 * x4
    z1 = 3.0 * (a1 * a1 + a2 * a2) + z31 * emsq
    z2 = 6.0 * (a1 * a3 + a2 * a4) + z32 * emsq
    z3 = 3.0 * (a3 * a3 + a4 * a4) + z33 * emsq
    z11 = -6.0 * a1 * a5 + emsq * (-24.0 * x1 * x7 - 6.0 * x3 * x5)
    z12 = -6.0 * (a1 * a6 + a3 * a5) + emsq * (
        -24.0 * (x2 * x7 + x1 * x8) - 6.0 * (x3 * x6 + x4 * x5))
    z13 = -6.0 * a3 * a6 + emsq * (-24.0 * x2 * x8 - 6.0 * x4 * x6)
    z21 = 6.0 * a2 * a5 + emsq * (24.0 * x1 * x5 - 6.0 * x3 * x7)
    z22 = 6.0 * (a4 * a5 + a2 * a6) + emsq * (
        24.0 * (x2 * x5 + x1 * x6) - 6.0 * (x4 * x7 + x3 * x8))
    z23 = 6.0 * a4 * a6 + emsq * (24.0 * x2 * x6 - 6.0 * x4 * x8)
    z1 = z1 + z1 + betasq * z31
    z2 = z2 + z2 + betasq * z32
    z3 = z3 + z3 + betasq * z33
    s3 = cc * xnoi
    s2 = -0.5 * s3 / rtemsq
    s4 = s3 * rtemsq
    s1 = -15.0 * em * s4
    s5 = x1 * x3 + x2 * x4
    s6 = x2 * x3 + x1 * x4
    s7 = x2 * x4 - x1 * x3

    return (s1, s2, s3, s4, s5, s6, s7,
            z1, z2, z3, z11, z12, z13, z21, z22, z23, z31, z32, z33)


def dscom(epoch: float, ep: float, argpp: float, tc: float, inclp: float,
          nodep: float, np: float, ds: DeepSpaceCoefficients) -> CommonTerms:
    """
    Compute the lunar-solar common terms.

    Fills the periodic amplitudes (``se2`` .. ``xh3``) and the epoch lunar and
    solar mean anomalies (``zmol``, ``zmos``) of ``ds``.

    Args:
        epoch: Epoch in days since 0 Jan 1950
        ep: Eccentricity
        argpp: Argument of perigee (rad)
        tc: Minutes since epoch the geometry is evaluated at
        inclp: Inclination (rad)
        nodep: Right ascension of the node (rad)
        np: Mean motion (rad/min)
        ds: Coefficients to fill in

    Returns:
        CommonTerms needed by ``dsinit``
    """
    nm = np
    em = ep
    snodm = math.sin(nodep)
    cnodm = math.cos(nodep)
    sinomm = math.sin(argpp)
    cosomm = math.cos(argpp)
    sinim = math.sin(inclp)
    cosim = math.cos(inclp)
    emsq = em * em
    betasq = 1.0 - emsq
    rtemsq = math.sqrt(betasq)

    # lunar orbit orientation
    day = epoch + 18261.5 + tc / 1440.0
    xnodce = math.fmod(4.5236020 - 9.2422029e-4 * day, TWOPI)
    stem = math.sin(xnodce)
    ctem = math.cos(xnodce)
    zcosil = 0.91375164 - 0.03568096 * ctem
    zsinil = math.sqrt(1.0 - zcosil * zcosil)
    zsinhl = 0.089683511 * stem / zsinil
    zcoshl = math.sqrt(1.0 - zsinhl * zsinhl)
    gam = 5.8351514 + 0.0019443680 * day
    zx = 0.39785416 * stem / zsinil
    zy = zcoshl * ctem + 0.91744867 * zsinhl * stem
    zx = math.atan2(zx, zy)
    zx = gam + zx - xnodce
    zcosgl = math.cos(zx)
    zsingl = math.sin(zx)

    xnoi = 1.0 / nm
    solar = _geometry_pass(ZCOSGS, ZSINGS, ZCOSIS, ZSINIS, cnodm, snodm, C1SS,
                           cosim, sinim, cosomm, sinomm, em, emsq, betasq, rtemsq, xnoi)
    lunar = _geometry_pass(zcosgl, zsingl, zcosil, zsinil,
                           zcoshl * cnodm + zsinhl * snodm,
                           snodm * zcoshl - cnodm * zsinhl,
                           C1L, cosim, sinim, cosomm, sinomm, em, emsq, betasq, rtemsq, xnoi)

    (ss1, ss2, ss3, ss4, ss5, ss6, ss7,
     sz1, sz2, sz3, sz11, sz12, sz13, sz21, sz22, sz23, sz31, sz32, sz33) = solar
    (s1, s2, s3, s4, s5, s6, s7,
     z1, z2, z3, z11, z12, z13, z21, z22, z23, z31, z32, z33) = lunar

    ds.zmol = math.fmod(4.7199672 + 0.22997150 * day - gam, TWOPI)
    ds.zmos = math.fmod(6.2565837 + 0.017201977 * day, TWOPI)

    # solar terms
    ds.se2 = 2.0 * ss1 * ss6
    ds.se3 = 2.0 * ss1 * ss7
    ds.si2 = 2.0 * ss2 * sz12
    ds.si3 = 2.0 * ss2 * (sz13 - sz11)
    ds.sl2 = -2.0 * ss3 * sz2
    ds.sl3 = -2.0 * ss3 * (sz3 - sz1)
    ds.sl4 = -2.0 * ss3 * (-21.0 - 9.0 * emsq) * ZES
    ds.sgh2 = 2.0 * ss4 * sz32
    ds.sgh3 = 2.0 * ss4 * (sz33 - sz31)
    ds.sgh4 = -18.0 * ss4 * ZES
    ds.sh2 = -2.0 * ss2 * sz22
    ds.sh3 = -2.0 * ss2 * (sz23 - sz21)

    # lunar terms
    ds.ee2 = 2.0 * s1 * s6
    ds.e3 = 2.0 * s1 * s7
    ds.xi2 = 2.0 * s2 * z12
    ds.xi3 = 2.0 * s2 * (z13 - z11)
    ds.xl2 = -2.0 * s3 * z2
    ds.xl3 = -2.0 * s3 * (z3 - z1)
    ds.xl4 = -2.0 * s3 * (-21.0 - 9.0 * emsq) * ZEL
    ds.xgh2 = 2.0 * s4 * z32
    ds.xgh3 = 2.0 * s4 * (z33 - z31)
    ds.xgh4 = -18.0 * s4 * ZEL
    ds.xh2 = -2.0 * s2 * z22
    ds.xh3 = -2.0 * s2 * (z23 - z21)

    return CommonTerms(
        snodm, cnodm, sinim, cosim, sinomm, cosomm, day, em, emsq, gam, rtemsq, nm,
        s1, s2, s3, s4, s5, s6, s7,
        ss1, ss2, ss3, ss4, ss5, ss6, ss7,
        sz1, sz2, sz3, sz11, sz12, sz13, sz21, sz22, sz23, sz31, sz32, sz33,
        z1, z2, z3, z11, z12, z13, z21, z22, z23, z31, z32, z33,
    )


def dpper(ds: DeepSpaceCoefficients, t: float, ep: float, inclp: float,
          nodep: float, argpp: float, mp: float,
          opsmode: OpsMode = OpsMode.IMPROVED) -> Tuple[float, float, float, float, float]:
    """
    Apply lunar-solar long-period periodics to the mean elements.

    Below 0.2 rad of perturbed inclination the node and argument of perigee
    corrections use the Lyddane formulation, which stays finite as the
    inclination goes to zero.

    Args:
        ds: Deep-space coefficients
        t: Minutes since epoch
        ep, inclp, nodep, argpp, mp: Mean eccentricity, inclination, node,
            argument of perigee and mean anomaly (rad)
        opsmode: AFSPC mode keeps the node non-negative in the Lyddane branch

    Returns:
        Tuple (ep, inclp, nodep, argpp, mp) with the periodics applied
    """
    # solar
    zm = ds.zmos + ZNS * t
    zf = zm + 2.0 * ZES * math.sin(zm)
    sinzf = math.sin(zf)
    f2 = 0.5 * sinzf * sinzf - 0.25
    f3 = -0.5 * sinzf * math.cos(zf)
    ses = ds.se2 * f2 + ds.se3 * f3
    sis = ds.si2 * f2 + ds.si3 * f3
    sls = ds.sl2 * f2 + ds.sl3 * f3 + ds.sl4 * sinzf
    sghs = ds.sgh2 * f2 + ds.sgh3 * f3 + ds.sgh4 * sinzf
    shs = ds.sh2 * f2 + ds.sh3 * f3

    # lunar
    zm = ds.zmol + ZNL * t
    zf = zm + 2.0 * ZEL * math.sin(zm)
    sinzf = math.sin(zf)
    f2 = 0.5 * sinzf * sinzf - 0.25
    f3 = -0.5 * sinzf * math.cos(zf)
    sel = ds.ee2 * f2 + ds.e3 * f3
    sil = ds.xi2 * f2 + ds.xi3 * f3
    sll = ds.xl2 * f2 + ds.xl3 * f3 + ds.xl4 * sinzf
    sghl = ds.xgh2 * f2 + ds.xgh3 * f3 + ds.xgh4 * sinzf
    shll = ds.xh2 * f2 + ds.xh3 * f3

    pe = ses + sel
    pinc = sis + sil
    pl = sls + sll
    pgh = sghs + sghl
    ph = shs + shll

    inclp = inclp + pinc
    ep = ep + pe
    sinip = math.sin(inclp)
    cosip = math.cos(inclp)

    if inclp >= LYDDANE_INCLINATION:
        ph = ph / sinip
        pgh = pgh - cosip * ph
        argpp = argpp + pgh
        nodep = nodep + ph
        mp = mp + pl
    else:
        sinop = math.sin(nodep)
        cosop = math.cos(nodep)
        alfdp = sinip * sinop
        betdp = sinip * cosop
        dalf = ph * cosop + pinc * cosip * sinop
        dbet = -ph * sinop + pinc * cosip * cosop
        alfdp = alfdp + dalf
        betdp = betdp + dbet
        nodep = math.fmod(nodep, TWOPI)
        if nodep < 0.0 and opsmode is OpsMode.AFSPC:
            nodep = nodep + TWOPI
        xls = mp + argpp + cosip * nodep
        dls = pl + pgh - pinc * nodep * sinip
        xls = xls + dls
        xnoh = nodep
        nodep = math.atan2(alfdp, betdp)
        if nodep < 0.0 and opsmode is OpsMode.AFSPC:
            nodep = nodep + TWOPI
        # keep the node within pi of its unperturbed value
        if math.fabs(xnoh - nodep) > math.pi:
            if nodep < xnoh:
                nodep = nodep + TWOPI
            else:
                nodep = nodep - TWOPI
        mp = mp + pl
        argpp = xls - mp - cosip * nodep

    return ep, inclp, nodep, argpp, mp


def classify_resonance(nm: float, em: float) -> Resonance:
    """
    Resonance class of a mean motion / eccentricity pair.

    Args:
        nm: Brouwer mean motion (rad/min)
        em: Eccentricity

    Returns:
        SYNCHRONOUS inside the one-day band, HALF_DAY inside the half-day band
        for eccentricities of 0.5 and above, NONE otherwise
    """
    if SYNCHRONOUS_MIN <= nm <= SYNCHRONOUS_MAX:
        return Resonance.SYNCHRONOUS
    if HALF_DAY_MIN <= nm <= HALF_DAY_MAX and em >= HALF_DAY_MIN_ECC:
        return Resonance.HALF_DAY
    return Resonance.NONE


def _half_day_coefficients(ds, em, emsq, sinim, cosim, nm, aonv):
    eoc = em * emsq
    g201 = -0.306 - (em - 0.64) * 0.440

    if em <= 0.65:
        g211 = 3.616 - 13.2470 * em + 16.2900 * emsq
        g310 = -19.302 + 117.3900 * em - 228.4190 * emsq + 156.5910 * eoc
        g322 = -18.9068 + 109.7927 * em - 214.6334 * emsq + 146.5816 * eoc
        g410 = -41.122 + 242.6940 * em - 471.0940 * emsq + 313.9530 * eoc
        g422 = -146.407 + 841.8800 * em - 1629.014 * emsq + 1083.4350 * eoc
        g520 = -532.114 + 3017.977 * em - 5740.032 * emsq + 3708.2760 * eoc
    else:
        g211 = -72.099 + 331.819 * em - 508.738 * emsq + 266.724 * eoc
        g310 = -346.844 + 1582.851 * em - 2415.925 * emsq + 1246.113 * eoc
        g322 = -342.585 + 1554.908 * em - 2366.899 * emsq + 1215.972 * eoc
        g410 = -1052.797 + 4758.686 * em - 7193.992 * emsq + 3651.957 * eoc
        g422 = -3581.690 + 16178.110 * em - 24462.770 * emsq + 12422.520 * eoc
        if em > 0.715:
            g520 = -5149.66 + 29936.92 * em - 54087.36 * emsq + 31324.56 * eoc
        else:
            g520 = 1464.74 - 4664.75 * em + 3763.64 * emsq

    if em < 0.7:
        g533 = -919.22770 + 4988.6100 * em - 9064.7700 * emsq + 5542.21 * eoc
        g521 = -822.71072 + 4568.6173 * em - 8491.4146 * emsq + 5337.524 * eoc
        g532 = -853.66600 + 4690.2500 * em - 8624.7700 * emsq + 5341.4 * eoc
    else:
        g533 = -37995.780 + 161616.52 * em - 229838.20 * emsq + 109377.94 * eoc
        g521 = -51752.104 + 218913.95 * em - 309468.16 * emsq + 146349.42 * eoc
        g532 = -40023.880 + 170470.89 * em - 242699.48 * emsq + 115605.82 * eoc

    cosisq = cosim * cosim
    sini2 = sinim * sinim
    f220 = 0.75 * (1.0 + 2.0 * cosim + cosisq)
    f221 = 1.5 * sini2
    f321 = 1.875 * sinim * (1.0 - 2.0 * cosim - 3.0 * cosisq)
    f322 = -1.875 * sinim * (1.0 + 2.0 * cosim - 3.0 * cosisq)
    f441 = 35.0 * sini2 * f220
    f442 = 39.3750 * sini2 * sini2
    f522 = 9.84375 * sinim * (sini2 * (1.0 - 2.0 * cosim - 5.0 * cosisq)
                              + 0.33333333 * (-2.0 + 4.0 * cosim + 6.0 * cosisq))
    f523 = sinim * (4.92187512 * sini2 * (-2.0 - 4.0 * cosim + 10.0 * cosisq)
                    + 6.56250012 * (1.0 + 2.0 * cosim - 3.0 * cosisq))
    f542 = 29.53125 * sinim * (2.0 - 8.0 * cosim
                               + cosisq * (-12.0 + 8.0 * cosim + 10.0 * cosisq))
    f543 = 29.53125 * sinim * (-2.0 - 8.0 * cosim
                               + cosisq * (12.0 + 8.0 * cosim - 10.0 * cosisq))

    root22 = 1.7891679e-6
    root32 = 3.7393792e-7
    root44 = 7.3636953e-9
    root52 = 1.1428639e-7
    root54 = 2.1765803e-9

    xno2 = nm * nm
    ainv2 = aonv * aonv
    temp1 = 3.0 * xno2 * ainv2
    temp = temp1 * root22
    ds.d2201 = temp * f220 * g201
    ds.d2211 = temp * f221 * g211
    temp1 = temp1 * aonv
    temp = temp1 * root32
    ds.d3210 = temp * f321 * g310
    ds.d3222 = temp * f322 * g322
    temp1 = temp1 * aonv
    temp = 2.0 * temp1 * root44
    ds.d4410 = temp * f441 * g410
    ds.d4422 = temp * f442 * g422
    temp1 = temp1 * aonv
    temp = temp1 * root52
    ds.d5220 = temp * f522 * g520
    ds.d5232 = temp * f523 * g532
    temp = 2.0 * temp1 * root54
    ds.d5421 = temp * f542 * g521
    ds.d5433 = temp * f543 * g533


def _synchronous_coefficients(ds, emsq, sinim, cosim, nm, aonv):
    q22 = 1.7891679e-6
    q31 = 2.1460748e-6
    q33 = 2.2123015e-7

    g200 = 1.0 + emsq * (-2.5 + 0.8125 * emsq)
    g310 = 1.0 + 2.0 * emsq
    g300 = 1.0 + emsq * (-6.0 + 6.60937 * emsq)
    f220 = 0.75 * (1.0 + cosim) * (1.0 + cosim)
    f311 = 0.9375 * sinim * sinim * (1.0 + 3.0 * cosim) - 0.75 * (1.0 + cosim)
    f330 = 1.0 + cosim
    f330 = 1.875 * f330 * f330 * f330
    del1 = 3.0 * nm * nm * aonv * aonv
    ds.del2 = 2.0 * del1 * f220 * g200 * q22
    ds.del3 = 3.0 * del1 * f330 * g300 * q33 * aonv
    ds.del1 = del1 * f311 * g310 * q31 * aonv


def dsinit(ds: DeepSpaceCoefficients, common: CommonTerms, xke: float,
           ecco: float, eccsq: float, inclm: float, argpo: float, mo: float,
           nodeo: float, mdot: float, nodedot: float, xpidot: float,
           no: float, gsto: float, tc: float = 0.0) -> ResonanceCache:
    """
    Initialize the deep-space secular rates and resonance terms.

    Args:
        ds: Coefficients already holding the ``dscom`` output; completed in place
        common: ``dscom`` geometry terms
        xke: Gravity model time-unit scale
        ecco, eccsq: Epoch eccentricity and its square
        inclm: Epoch inclination (rad)
        argpo, mo, nodeo: Epoch argument of perigee, mean anomaly and node (rad)
        mdot, nodedot, xpidot: Near-Earth secular rates (rad/min)
        no: Brouwer mean motion (rad/min)
        gsto: Greenwich sidereal time at epoch (rad)
        tc: Minutes since epoch

    Returns:
        ResonanceCache positioned at epoch
    """
    cosim = common.cosim
    sinim = common.sinim
    emsq = common.emsq
    em = common.em
    nm = common.nm

    ds.irez = classify_resonance(nm, em)

    # solar secular rates
    ses = common.ss1 * ZNS * common.ss5
    sis = common.ss2 * ZNS * (common.sz11 + common.sz13)
    sls = -ZNS * common.ss3 * (common.sz1 + common.sz3 - 14.0 - 6.0 * emsq)
    sghs = common.ss4 * ZNS * (common.sz31 + common.sz33 - 6.0)
    shs = -ZNS * common.ss2 * (common.sz21 + common.sz23)
    near_polar_axis = inclm < 5.2359877e-2 or inclm > math.pi - 5.2359877e-2
    if near_polar_axis:
        shs = 0.0
    if sinim != 0.0:
        shs = shs / sinim
    sgs = sghs - cosim * shs

    # lunar secular rates
    ds.dedt = ses + common.s1 * ZNL * common.s5
    ds.didt = sis + common.s2 * ZNL * (common.z11 + common.z13)
    ds.dmdt = sls - ZNL * common.s3 * (common.z1 + common.z3 - 14.0 - 6.0 * emsq)
    sghl = common.s4 * ZNL * (common.z31 + common.z33 - 6.0)
    shll = -ZNL * common.s2 * (common.z21 + common.z23)
    if near_polar_axis:
        shll = 0.0
    ds.domdt = sgs + sghl
    ds.dnodt = shs
    if sinim != 0.0:
        ds.domdt = ds.domdt - cosim / sinim * shll
        ds.dnodt = ds.dnodt + shll / sinim

    cache = ResonanceCache()
    if ds.irez is Resonance.NONE:
        return cache

    theta = math.fmod(gsto + tc * RPTIM, TWOPI)
    aonv = math.pow(nm / xke, 2.0 / 3.0)

    if ds.irez is Resonance.HALF_DAY:
        # the half-day polynomials use the epoch eccentricity
        _half_day_coefficients(ds, ecco, eccsq, sinim, cosim, nm, aonv)
        xlamo = math.fmod(mo + nodeo + nodeo - theta - theta, TWOPI)
        ds.xfact = mdot + ds.dmdt + 2.0 * (nodedot + ds.dnodt - RPTIM) - no
    else:
        _synchronous_coefficients(ds, emsq, sinim, cosim, nm, aonv)
        xlamo = math.fmod(mo + nodeo + argpo - theta, TWOPI)
        ds.xfact = mdot + xpidot - RPTIM + ds.dmdt + ds.domdt + ds.dnodt - no

    cache.xlamo = xlamo
    cache.xn0 = no
    cache.reset()
    logger.debug(f"Resonance {ds.irez.name} initialized, xlamo={xlamo:.9f}")
    return cache


def dspace(ds: DeepSpaceCoefficients, cache: ResonanceCache, t: float, tc: float,
           gsto: float, argpo: float, argpdot: float, no: float,
           em: float, argpm: float, inclm: float, mm: float, nodem: float,
           nm: float) -> Tuple[float, float, float, float, float, float]:
    """
    Advance the deep-space secular and resonance effects to ``t``.

    The resonance integrator continues from the state held in ``cache`` when
    ``t`` lies further from epoch on the same side as the cached time;
    otherwise it restarts from epoch. ``cache`` is updated in place.

    Args:
        ds: Deep-space coefficients
        cache: Resonance integrator state
        t: Minutes since epoch
        tc: Minutes since epoch used for the sidereal angle
        gsto: Greenwich sidereal time at epoch (rad)
        argpo, argpdot: Epoch argument of perigee and its rate
        no: Brouwer mean motion (rad/min)
        em, argpm, inclm, mm, nodem, nm: Secularly updated mean elements

    Returns:
        Tuple (em, argpm, inclm, mm, nodem, nm)
    """
    fasx2 = 0.13130908
    fasx4 = 2.8843198
    fasx6 = 0.37448087
    g22 = 5.7686396
    g32 = 0.95240898
    g44 = 1.8014998
    g52 = 1.0508330
    g54 = 4.4108898

    theta = math.fmod(gsto + tc * RPTIM, TWOPI)
    em = em + ds.dedt * t
    inclm = inclm + ds.didt * t
    argpm = argpm + ds.domdt * t
    nodem = nodem + ds.dnodt * t
    mm = mm + ds.dmdt * t

    if ds.irez is Resonance.NONE:
        return em, argpm, inclm, mm, nodem, nm

    if cache.atime == 0.0 or t * cache.atime <= 0.0 or math.fabs(t) < math.fabs(cache.atime):
        cache.reset()

    delt = STEPP if t > 0.0 else STEPN
    synchronous = ds.irez is Resonance.SYNCHRONOUS

    while True:
        xli = cache.xli
        xni = cache.xni
        if synchronous:
            xndt = (ds.del1 * math.sin(xli - fasx2)
                    + ds.del2 * math.sin(2.0 * (xli - fasx4))
                    + ds.del3 * math.sin(3.0 * (xli - fasx6)))
            xldot = xni + ds.xfact
            xnddt = (ds.del1 * math.cos(xli - fasx2)
                     + 2.0 * ds.del2 * math.cos(2.0 * (xli - fasx4))
                     + 3.0 * ds.del3 * math.cos(3.0 * (xli - fasx6)))
            xnddt = xnddt * xldot
        else:
            xomi = argpo + argpdot * cache.atime
            x2omi = xomi + xomi
            x2li = xli + xli
            xndt = (ds.d2201 * math.sin(x2omi + xli - g22) + ds.d2211 * math.sin(xli - g22)
                    + ds.d3210 * math.sin(xomi + xli - g32) + ds.d3222 * math.sin(-xomi + xli - g32)
                    + ds.d4410 * math.sin(x2omi + x2li - g44) + ds.d4422 * math.sin(x2li - g44)
                    + ds.d5220 * math.sin(xomi + xli - g52) + ds.d5232 * math.sin(-xomi + xli - g52)
                    + ds.d5421 * math.sin(xomi + x2li - g54) + ds.d5433 * math.sin(-xomi + x2li - g54))
            xldot = xni + ds.xfact
            xnddt = (ds.d2201 * math.cos(x2omi + xli - g22) + ds.d2211 * math.cos(xli - g22)
                     + ds.d3210 * math.cos(xomi + xli - g32) + ds.d3222 * math.cos(-xomi + xli - g32)
                     + ds.d5220 * math.cos(xomi + xli - g52) + ds.d5232 * math.cos(-xomi + xli - g52)
                     + 2.0 * (ds.d4410 * math.cos(x2omi + x2li - g44)
                              + ds.d4422 * math.cos(x2li - g44)
                              + ds.d5421 * math.cos(xomi + x2li - g54)
                              + ds.d5433 * math.cos(-xomi + x2li - g54)))
            xnddt = xnddt * xldot

        if math.fabs(t - cache.atime) < STEPP:
            ft = t - cache.atime
            break

        cache.xli = xli + xldot * delt + xndt * STEP2
        cache.xni = xni + xndt * delt + xnddt * STEP2
        cache.atime = cache.atime + delt

    nm = cache.xni + xndt * ft + xnddt * ft * ft * 0.5
    xl = cache.xli + xldot * ft + xndt * ft * ft * 0.5
    if synchronous:
        mm = xl - nodem - argpm + theta
    else:
        mm = xl - 2.0 * nodem + 2.0 * theta
    dndt = nm - no
    nm = no + dndt

    return em, argpm, inclm, mm, nodem, nm
