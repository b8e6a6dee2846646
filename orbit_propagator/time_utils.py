"""
Time Utilities

Julian date conversions, calendar helpers and Greenwich sidereal time used
by the propagator.

The calendar helpers treat every year divisible by four as a leap year. That
is the rule the element-set epochs are built with and it is exact for
1901-2099, which covers the 1957-2056 window of two-digit TLE years.

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications (4th ed.),
    Algorithms 14 (JDay), 15 (GSTime) and 22 (InvJDay).
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Tuple

from orbit_propagator.config import DEG2RAD, TWOPI

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def jday(year: int, mon: int, day: int, hr: int = 0, minute: int = 0, sec: float = 0.0) -> Tuple[float, float]:
    """
    Julian date of a calendar date, split into day and fraction.

    Args:
        year: Year (1900-2100)
        mon: Month (1-12)
        day: Day of month
        hr: Hour
        minute: Minute
        sec: Seconds with fraction

    Returns:
        Tuple (jd, jd_frac) where jd ends in .5 and |jd_frac| <= 1
    """
    jd = (
        367.0 * year
        - math.floor((7 * (year + math.floor((mon + 9) / 12.0))) * 0.25)
        + math.floor(275 * mon / 9.0)
        + day
        + 1721013.5
    )
    jd_frac = (sec + minute * 60.0 + hr * 3600.0) / 86400.0

    # carry whole days out of the fraction
    if math.fabs(jd_frac) > 1.0:
        dtt = math.floor(jd_frac)
        jd = jd + dtt
        jd_frac = jd_frac - dtt

    return jd, jd_frac


def days2mdhms(year: int, days: float) -> Tuple[int, int, int, int, float]:
    """
    Split a fractional day of the year into month, day, hour, minute, second.

    Args:
        year: Year, used only for the February length
        days: Day of year with fraction (1.0 is 1 Jan 0h)

    Returns:
        Tuple (mon, day, hr, minute, sec)
    """
    lmonth = list(_MONTH_LENGTHS)
    if year % 4 == 0:
        lmonth[1] = 29

    dayofyr = int(math.floor(days))

    i = 1
    inttemp = 0
    while dayofyr > inttemp + lmonth[i - 1] and i < 12:
        inttemp = inttemp + lmonth[i - 1]
        i += 1
    mon = i
    day = dayofyr - inttemp

    temp = (days - dayofyr) * 24.0
    hr = int(math.floor(temp))
    temp = (temp - hr) * 60.0
    minute = int(math.floor(temp))
    sec = (temp - minute) * 60.0

    return mon, day, hr, minute, sec


def invjday(jd: float, jd_frac: float = 0.0) -> Tuple[int, int, int, int, int, float]:
    """
    Calendar date of a split Julian date.

    Args:
        jd: Julian date (whole or with fraction)
        jd_frac: Additional fraction of a day

    Returns:
        Tuple (year, mon, day, hr, minute, sec)
    """
    # whole days hidden in the fraction
    if math.fabs(jd_frac) >= 1.0:
        jd = jd + math.floor(jd_frac)
        jd_frac = jd_frac - math.floor(jd_frac)

    # fraction of a day hidden in jd
    dt = jd - math.floor(jd) - 0.5
    if math.fabs(dt) > 0.00000001:
        jd = jd - dt
        jd_frac = jd_frac + dt

    temp = jd - 2415019.5
    tu = temp / 365.25
    year = 1900 + int(math.floor(tu))
    leapyrs = int(math.floor((year - 1901) * 0.25))
    days = math.floor(temp - ((year - 1900) * 365.0 + leapyrs))

    # beginning of a year
    if days + jd_frac < 1.0:
        year = year - 1
        leapyrs = int(math.floor((year - 1901) * 0.25))
        days = math.floor(temp - ((year - 1900) * 365.0 + leapyrs))

    mon, day, hr, minute, sec = days2mdhms(year, days + jd_frac)
    return year, mon, day, hr, minute, sec


def gstime(jdut1: float) -> float:
    """
    Greenwich mean sidereal time (IAU-82).

    Args:
        jdut1: Julian date in UT1

    Returns:
        Sidereal angle in radians, in [0, 2pi)
    """
    tut1 = (jdut1 - 2451545.0) / 36525.0
    temp = (
        -6.2e-6 * tut1 * tut1 * tut1
        + 0.093104 * tut1 * tut1
        + (876600.0 * 3600 + 8640184.812866) * tut1
        + 67310.54841
    )  # seconds
    temp = math.fmod(temp * DEG2RAD / 240.0, TWOPI)

    if temp < 0.0:
        temp += TWOPI

    return temp


def jday_datetime(dt: datetime) -> Tuple[float, float]:
    """
    Split Julian date of a datetime.

    Naive datetimes are taken as UTC; aware datetimes are converted to UTC.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return jday(
        dt.year, dt.month, dt.day, dt.hour, dt.minute,
        dt.second + dt.microsecond * 1e-6,
    )


def datetime_from_jday(jd: float, jd_frac: float = 0.0) -> datetime:
    """Timezone-aware UTC datetime of a split Julian date, rounded to the microsecond."""
    year, mon, day, hr, minute, sec = invjday(jd, jd_frac)
    micro = int(round(sec * 1e6))
    base = datetime(year, mon, day, hr, minute, tzinfo=timezone.utc)
    return base + timedelta(microseconds=micro)
