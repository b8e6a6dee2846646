"""
Propagation Helpers

Convenience layer over the kernel for callers that think in datetimes, need
many epochs of one satellite, or a single epoch of a whole catalog.

A record carries the deep-space resonance integrator state, so batches of
times for one record are propagated in order on that record and must not be
shared between threads. Distinct records are independent.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from orbit_propagator.config import DEFAULT_GRAVITY_MODEL, DEFAULT_OPS_MODE, MINUTES_PER_DAY
from orbit_propagator.gravity import GravityModel
from orbit_propagator.initializer import twoline2rv
from orbit_propagator.kernel import StateVector, sgp4
from orbit_propagator.logging_config import get_logger
from orbit_propagator.satrec import ERROR_MESSAGES, OpsMode, SatelliteRecord
from orbit_propagator.time_utils import jday_datetime

logger = get_logger(__name__)


def minutes_since_epoch(record: SatelliteRecord, when: datetime) -> float:
    """
    Minutes from the record epoch to ``when``.

    Args:
        record: Initialized satellite record
        when: Target time; naive datetimes are taken as UTC

    Returns:
        Offset in minutes (negative before epoch)
    """
    jd, fr = jday_datetime(when)
    return ((jd - record.jdsatepoch) + (fr - record.jdsatepochF)) * MINUTES_PER_DAY


def propagate_to(record: SatelliteRecord, when: datetime) -> Optional[StateVector]:
    """Propagate a record to a calendar time. Returns None with ``record.error`` set on failure."""
    return sgp4(record, minutes_since_epoch(record, when))


def propagate_batch(record: SatelliteRecord,
                    times: Iterable[Union[float, datetime]]) -> List[Tuple[int, Optional[StateVector]]]:
    """
    Propagate one record to several times, in the order given.

    Args:
        record: Initialized satellite record
        times: Minutes since epoch or datetimes

    Returns:
        List of (error code, state or None), one per requested time
    """
    results = []
    for when in times:
        if isinstance(when, datetime):
            state = propagate_to(record, when)
        else:
            state = sgp4(record, float(when))
        results.append((int(record.error), state))
    return results


def propagate_catalog(records: Iterable[SatelliteRecord],
                      when: Union[float, datetime]) -> Dict[str, StateVector]:
    """
    Propagate many records to one time, skipping those that fail.

    Args:
        records: Initialized satellite records
        when: Minutes since each record's own epoch, or an absolute datetime

    Returns:
        Dictionary of catalog number to state for the records that succeeded.
        When several records share a catalog number the last one wins.
    """
    states = {}
    skipped = 0
    for record in records:
        if isinstance(when, datetime):
            state = propagate_to(record, when)
        else:
            state = sgp4(record, float(when))
        if state is None:
            skipped += 1
            logger.warning(
                f"Skipping satellite {record.satnum}: error {int(record.error)} ({record.error_message})"
            )
            continue
        if record.satnum in states:
            logger.warning(f"Duplicate satellite {record.satnum}: replacing earlier element set")
        states[record.satnum] = state

    if skipped:
        logger.info(f"Catalog propagation: {len(states)} succeeded, {skipped} skipped")
    return states


class SGP4Propagator:
    """
    One satellite built from a two-line element set.

    Wraps parsing, initialization and propagation. ``propagate`` never raises
    for physical failures; it returns ``(None, None)`` and leaves the code in
    ``error``.
    """

    def __init__(self, line1: str, line2: str,
                 gravity_model: Union[GravityModel, str] = DEFAULT_GRAVITY_MODEL,
                 ops_mode: Union[OpsMode, str] = DEFAULT_OPS_MODE,
                 name: str = ""):
        self.line1 = line1
        self.line2 = line2
        self.name = name
        self.record = twoline2rv(line1, line2, gravity_model, ops_mode, name)

    @property
    def error(self) -> int:
        return int(self.record.error)

    @property
    def error_message(self) -> str:
        return ERROR_MESSAGES.get(self.record.error, "")

    @property
    def method(self) -> str:
        return self.record.method.value

    def propagate(self, tsince: float) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        """
        Propagate to minutes since epoch.

        Args:
            tsince: Time since epoch (minutes)

        Returns:
            Tuple of (position km, velocity km/s) or (None, None) on error
        """
        state = sgp4(self.record, tsince)
        if state is None:
            return None, None
        return state.position, state.velocity

    def propagate_datetime(self, when: datetime) -> Tuple[Optional[np.ndarray], Optional[np.ndarray]]:
        return self.propagate(minutes_since_epoch(self.record, when))

    def reset(self) -> None:
        """Restart the resonance integrator from epoch."""
        self.record.reset_resonance()

    def __repr__(self):
        epoch = self.record.epoch_datetime.isoformat()
        return f"SGP4Propagator(satnum={self.record.satnum!r}, epoch={epoch}, method={self.method!r})"
