"""Calendar conversions in UTC and sunrise/sunset estimation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

YEAR_0 = 1900
YEAR_EPOCH = 1970
SECS_IN_DAY = 24 * 60 * 60
TIME_MAX = 2147483647

_MONTH_DAYS = (
    (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
    (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
)

_RAD = 57.295779513082322


@dataclass
class BlynkTm:
    """Broken-down time, with the same field meanings as C's ``struct tm``."""

    tm_sec: int = 0
    tm_min: int = 0
    tm_hour: int = 0
    tm_mday: int = 1
    tm_mon: int = 0
    tm_year: int = 0
    tm_wday: int = 0
    tm_yday: int = 0


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _month_days(year: int, month: int) -> int:
    return _MONTH_DAYS[is_leap_year(year)][month]


def _cdivmod(a: int, b: int) -> Tuple[int, int]:
    """Division and remainder truncating toward zero."""
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


def gmtime(t: int) -> BlynkTm:
    """Break seconds since the epoch into UTC calendar fields."""
    if t < 0:
        raise ValueError("time must not be negative")
    dayclock = t % SECS_IN_DAY
    dayno = t // SECS_IN_DAY

    tm = BlynkTm(
        tm_sec=dayclock % 60,
        tm_min=(dayclock % 3600) // 60,
        tm_hour=dayclock // 3600,
        tm_wday=(dayno + 4) % 7,
    )
    year = YEAR_EPOCH
    while dayno >= sum(_MONTH_DAYS[is_leap_year(year)]):
        dayno -= sum(_MONTH_DAYS[is_leap_year(year)])
        year += 1
    tm.tm_year = year - YEAR_0
    tm.tm_yday = dayno
    month = 0
    while dayno >= _month_days(year, month):
        dayno -= _month_days(year, month)
        month += 1
    tm.tm_mon = month
    tm.tm_mday = dayno + 1
    return tm


def mk_gmtime(tm: BlynkTm) -> int:
    """Normalise ``tm`` in place and return seconds since the epoch.

    Raises ValueError for dates before 1970 and OverflowError for dates
    beyond the 32-bit time range.
    """
    carry, tm.tm_sec = _cdivmod(tm.tm_sec, 60)
    tm.tm_min += carry
    if tm.tm_sec < 0:
        tm.tm_sec += 60
        tm.tm_min -= 1
    carry, tm.tm_min = _cdivmod(tm.tm_min, 60)
    tm.tm_hour += carry
    if tm.tm_min < 0:
        tm.tm_min += 60
        tm.tm_hour -= 1
    day, tm.tm_hour = _cdivmod(tm.tm_hour, 24)
    if tm.tm_hour < 0:
        tm.tm_hour += 24
        day -= 1
    carry, tm.tm_mon = _cdivmod(tm.tm_mon, 12)
    tm.tm_year += carry
    if tm.tm_mon < 0:
        tm.tm_mon += 12
        tm.tm_year -= 1

    day += tm.tm_mday - 1
    while day < 0:
        tm.tm_mon -= 1
        if tm.tm_mon < 0:
            tm.tm_year -= 1
            tm.tm_mon = 11
        day += _month_days(YEAR_0 + tm.tm_year, tm.tm_mon)
    while day >= _month_days(YEAR_0 + tm.tm_year, tm.tm_mon):
        day -= _month_days(YEAR_0 + tm.tm_year, tm.tm_mon)
        tm.tm_mon += 1
        if tm.tm_mon == 12:
            tm.tm_mon = 0
            tm.tm_year += 1
    tm.tm_mday = day + 1

    if tm.tm_year < YEAR_EPOCH - YEAR_0:
        raise ValueError("date is before the epoch")

    overflow = False
    year = tm.tm_year + YEAR_0
    span = year - YEAR_EPOCH

    if TIME_MAX // 365 < span:
        overflow = True
    day = span * 365
    if TIME_MAX - day < span // 4 + 1:
        overflow = True
    day += span // 4 + int(bool(year % 4) and year % 4 < YEAR_EPOCH % 4)
    day -= span // 100 + int(bool(year % 100) and year % 100 < YEAR_EPOCH % 100)
    day += span // 400 + int(bool(year % 400) and year % 400 < YEAR_EPOCH % 400)

    yday = sum(_month_days(year, month) for month in range(tm.tm_mon))
    yday += tm.tm_mday - 1
    if day + yday < 0:
        overflow = True
    day += yday

    tm.tm_yday = yday
    tm.tm_wday = (day + 4) % 7

    seconds = (tm.tm_hour * 60 + tm.tm_min) * 60 + tm.tm_sec
    if (TIME_MAX - seconds) // SECS_IN_DAY < day:
        overflow = True
    seconds += day * SECS_IN_DAY

    if overflow:
        raise OverflowError("date is beyond the supported time range")
    return seconds


def compute_sun(
    month: int, day: int, latitude: float, longitude: float, rise: bool
) -> Optional[int]:
    """Minutes after UTC midnight of sunrise (or sunset).

    Returns None when the sun neither rises nor sets on that day.
    """
    month -= 1
    day -= 1
    lat = latitude / _RAD
    lon = -longitude / _RAD

    approx_hour = 18 if rise else 6
    y = month * 30.4375 + day + approx_hour / 24.0
    y *= 1.718771839885e-02

    eqt = 229.18 * (
        0.000075
        + 0.001868 * math.cos(y)
        - 0.032077 * math.sin(y)
        - 0.014615 * math.cos(y * 2)
        - 0.040849 * math.sin(y * 2)
    )
    decl = (
        0.006918
        - 0.399912 * math.cos(y)
        + 0.070257 * math.sin(y)
        - 0.006758 * math.cos(y * 2)
        + 0.000907 * math.sin(y * 2)
        - 0.002697 * math.cos(y * 3)
        + 0.00148 * math.sin(y * 3)
    )

    ha = math.cos(1.585340737228125) / (math.cos(lat) * math.cos(decl)) - math.tan(
        lat
    ) * math.tan(decl)
    if abs(ha) > 1.0:
        return None

    ha = math.acos(ha)
    if not rise:
        ha = -ha

    return int(720 + 4 * (lon - ha) * _RAD - eqt)