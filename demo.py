"""
SGP4/SDP4 Orbital Propagation Demonstration

This script walks through the propagator:
- TLE parsing into working-unit elements
- Near-Earth propagation over one revolution, with osculating elements
- Deep-space propagation of a 12-hour resonant orbit
- Error reporting for a decayed element set
- B* drag sensitivity of the along-track position

Usage:
    python demo.py [--sensitivity] [--verbose]

Arguments:
    --sensitivity: Run B* drag sensitivity analysis
    --verbose: Enable debug logging

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import argparse
import dataclasses
import logging
import math
from typing import List

import numpy as np

from orbit_propagator import ElementSet, initialize, parse_tle, propagate_batch, sgp4, twoline2rv
from orbit_propagator.config import FALLBACK_ISS_TLE
from orbit_propagator.logging_config import configure_logging, get_logger
from orbit_propagator.orbit_math import rv2coe

logger = get_logger("orbit_propagator.demo")

MOLNIYA_LINE1 = "1 08195U 75081A   06176.33215444  .00000099  00000-0  11873-3 0   813"
MOLNIYA_LINE2 = "2 08195  64.1586 279.0717 6877146 264.7651  20.2257  2.00491383225656"

DECAYED_LINE1 = "1 99902U 20001B   20001.00000000  .00000000  00000-0  00000-0 0  9995"
DECAYED_LINE2 = "2 99902  51.6400 100.0000 2000000   0.0000   0.0000 15.00000000   107"


def demonstrate_tle_parsing(line1: str, line2: str, name: str) -> ElementSet:
    """
    Parse a TLE and log its elements.

    Parameters
    ----------
    line1 : str
        TLE line 1
    line2 : str
        TLE line 2
    name : str
        Satellite name

    Returns
    -------
    ElementSet
        Parsed elements in working units
    """
    logger.info(f"Parsing TLE for {name}")
    logger.debug(f"Line 1: {line1}")
    logger.debug(f"Line 2: {line2}")

    elements = parse_tle(line1, line2, name)

    logger.info(f"Catalog number: {elements.satnum_int}")
    logger.info(f"Epoch: {elements.epoch_year} day {elements.epochdays:.8f}")
    logger.info(f"Inclination: {math.degrees(elements.inclo):.4f} degrees")
    logger.info(f"RAAN: {math.degrees(elements.nodeo):.4f} degrees")
    logger.info(f"Eccentricity: {elements.ecco:.7f}")
    logger.info(f"Mean Motion: {elements.mean_motion_rev_per_day:.8f} rev/day")
    logger.info(f"Period: {elements.period_minutes:.2f} minutes")
    logger.info(f"B* Drag: {elements.bstar:.8e}")
    return elements


def demonstrate_propagation(elements: ElementSet) -> None:
    """Propagate one revolution and log states with osculating elements."""
    record = initialize(elements)
    logger.info(f"Method: {record.method.name}, epoch {record.epoch_datetime.isoformat()}")

    step = elements.period_minutes / 6.0
    times: List[float] = [i * step for i in range(7)]
    for tsince, (error, state) in zip(times, propagate_batch(record, times)):
        if state is None:
            logger.warning(f"t={tsince:8.2f} min: error {error}")
            continue
        coe = rv2coe(state.position, state.velocity, record.gravity.mu)
        altitude = np.linalg.norm(state.position) - record.gravity.radiusearthkm
        logger.info(
            f"t={tsince:8.2f} min  alt={altitude:9.3f} km  "
            f"|v|={np.linalg.norm(state.velocity):7.4f} km/s  "
            f"a={coe.a:10.3f} km  e={coe.ecc:.6f}"
        )


def demonstrate_deep_space() -> None:
    """Propagate a Molniya orbit through the resonance integrator."""
    record = twoline2rv(MOLNIYA_LINE1, MOLNIYA_LINE2, name="MOLNIYA 1-29")
    logger.info(f"Satellite {record.satnum}: {record.method.name}, resonance {record.irez.name}")

    for days in (0, 1, 5, 10):
        state = sgp4(record, days * 1440.0)
        if state is None:
            logger.warning(f"Day {days}: {record.error_message}")
            continue
        logger.info(f"Day {days:2d}: r = {np.round(state.position, 3)} km")


def demonstrate_error_reporting() -> None:
    """Show how a decayed element set is reported."""
    record = twoline2rv(DECAYED_LINE1, DECAYED_LINE2)
    state = sgp4(record, 0.0)
    logger.info(f"Decayed element set: state={state}, error {int(record.error)} ({record.error_message})")


def analyze_bstar_sensitivity(elements: ElementSet, days: float = 3.0) -> None:
    """
    Along-track effect of scaling B*.

    Parameters
    ----------
    elements : ElementSet
        Nominal elements
    days : float
        Propagation span
    """
    tsince = days * 1440.0
    nominal = sgp4(initialize(elements), tsince)
    if nominal is None:
        logger.error("Nominal propagation failed")
        return

    logger.info(f"B* sensitivity after {days:.1f} days")
    for scale in (0.5, 0.9, 1.1, 1.5, 2.0):
        varied = dataclasses.replace(elements, bstar=elements.bstar * scale)
        state = sgp4(initialize(varied), tsince)
        if state is None:
            logger.warning(f"B* x{scale}: propagation failed")
            continue
        delta = np.linalg.norm(state.position - nominal.position)
        logger.info(f"B* x{scale:.1f}: position difference {delta:10.3f} km")


def main() -> None:
    """Main demonstration entry point."""
    parser = argparse.ArgumentParser(
        description="SGP4/SDP4 Orbital Propagation Demonstration"
    )
    parser.add_argument(
        "--sensitivity", action="store_true", help="Run B* drag sensitivity analysis"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    logger.info("SGP4/SDP4 Orbital Propagation Demonstration")
    logger.info("=" * 60)

    elements = demonstrate_tle_parsing(
        FALLBACK_ISS_TLE["line1"], FALLBACK_ISS_TLE["line2"], FALLBACK_ISS_TLE["name"]
    )

    logger.info("")
    demonstrate_propagation(elements)

    logger.info("")
    demonstrate_deep_space()

    logger.info("")
    demonstrate_error_reporting()

    if args.sensitivity:
        logger.info("")
        analyze_bstar_sensitivity(elements)
        logger.info("Sensitivity analysis complete")

    logger.info("=" * 60)
    logger.info("Demonstration complete")


if __name__ == "__main__":
    main()
