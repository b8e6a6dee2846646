"""
Gravity Model Constants

Earth constants used by SGP4 for each supported reference ellipsoid.

WGS-72 is the model the element sets are generated with and is the default.
WGS-72 "old" keeps the historical rounded ``xke`` value, WGS-84 is provided
for comparison studies only.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753, Section "Gravitational Constants".
"""

import math
from enum import Enum
from typing import NamedTuple, Union

from orbit_propagator.logging_config import get_logger

logger = get_logger(__name__)


class GravityModel(Enum):
    """Named reference ellipsoids"""

    WGS72OLD = "wgs72old"
    WGS72 = "wgs72"
    WGS84 = "wgs84"


class GravityConstants(NamedTuple):
    tumin: float  # minutes in one time unit
    mu: float  # km^3/s^2
    radiusearthkm: float  # km
    xke: float  # reciprocal of tumin
    j2: float
    j3: float
    j4: float
    j3oj2: float


def resolve_gravity_model(model: Union[GravityModel, str]) -> GravityModel:
    """
    Turn a model name into a ``GravityModel``.

    Args:
        model: Enum member or one of "wgs72old", "wgs72", "wgs84"

    Returns:
        The matching GravityModel

    Raises:
        ValueError: If the name is not a known model
    """
    if isinstance(model, GravityModel):
        return model
    try:
        return GravityModel(str(model).lower())
    except ValueError:
        raise ValueError(f"unknown gravity option {model}") from None


def get_gravity_constants(model: Union[GravityModel, str] = GravityModel.WGS72) -> GravityConstants:
    """
    Look up the Earth constants for a gravity model.

    Args:
        model: Gravity model enum member or name

    Returns:
        GravityConstants for the model

    Raises:
        ValueError: If the model is unknown
    """
    model = resolve_gravity_model(model)

    if model is GravityModel.WGS72OLD:
        mu = 398600.79964
        radiusearthkm = 6378.135
        xke = 0.0743669161
        tumin = 1.0 / xke
        j2 = 0.001082616
        j3 = -0.00000253881
        j4 = -0.00000165597
    elif model is GravityModel.WGS72:
        mu = 398600.8
        radiusearthkm = 6378.135
        xke = 60.0 / math.sqrt(radiusearthkm * radiusearthkm * radiusearthkm / mu)
        tumin = 1.0 / xke
        j2 = 0.001082616
        j3 = -0.00000253881
        j4 = -0.00000165597
    else:
        mu = 398600.5
        radiusearthkm = 6378.137
        xke = 60.0 / math.sqrt(radiusearthkm * radiusearthkm * radiusearthkm / mu)
        tumin = 1.0 / xke
        j2 = 0.00108262998905
        j3 = -0.00000253215306
        j4 = -0.00000161098761

    logger.debug(f"Gravity constants selected: {model.value}")
    return GravityConstants(tumin, mu, radiusearthkm, xke, j2, j3, j4, j3 / j2)
