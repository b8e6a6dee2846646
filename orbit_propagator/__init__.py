"""
SGP4/SDP4 Orbital Propagation Package

Analytical propagation of two-line element sets: SGP4 for near-Earth orbits
and SDP4 (lunar-solar and resonance perturbations) for periods of 225 minutes
or more.

Modules:
    tle_parser: Fixed-column TLE parsing with Alpha-5 catalog numbers
    gravity: WGS-72 old, WGS-72 and WGS-84 Earth constants
    initializer: Brouwer mean motion, secular and drag coefficients
    deep_space: Lunar-solar periodics and the resonance integrator
    kernel: The propagation kernel
    propagator: Datetime, batch and catalog helpers, SGP4Propagator
    time_utils: Julian dates, calendar conversion, sidereal time
    orbit_math: Vector helpers, Kepler solver, newtonnu and rv2coe

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

__version__ = "1.0.0"

from orbit_propagator.gravity import GravityModel, get_gravity_constants
from orbit_propagator.initializer import initialize, sgp4init, twoline2rv
from orbit_propagator.kernel import StateVector, propagate, sgp4
from orbit_propagator.propagator import (
    SGP4Propagator,
    minutes_since_epoch,
    propagate_batch,
    propagate_catalog,
    propagate_to,
)
from orbit_propagator.satrec import ErrorCode, Method, OpsMode, Resonance, ResonanceCache, SatelliteRecord
from orbit_propagator.tle_parser import ElementSet, TLEFormatError, parse_tle

__all__ = [
    "ElementSet", "ErrorCode", "GravityModel", "Method", "OpsMode", "Resonance",
    "ResonanceCache", "SGP4Propagator", "SatelliteRecord", "StateVector",
    "TLEFormatError", "get_gravity_constants", "initialize", "minutes_since_epoch",
    "parse_tle", "propagate", "propagate_batch", "propagate_catalog",
    "propagate_to", "sgp4", "sgp4init", "twoline2rv",
]
