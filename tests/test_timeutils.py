import calendar
import time

import pytest

from aquablynk.timeutils import BlynkTm, compute_sun, gmtime, is_leap_year, mk_gmtime

SAMPLES = [0, 59, 86399, 86400, 951782400, 1000000000, 1700000000, 2147483647]


@pytest.mark.parametrize("year", [1900, 1970, 1972, 2000, 2023, 2024, 2100, 2400])
def test_is_leap_year_matches_calendar(year):
    assert is_leap_year(year) == calendar.isleap(year)


@pytest.mark.parametrize("t", SAMPLES)
def test_gmtime_matches_stdlib(t):
    ref = time.gmtime(t)
    tm = gmtime(t)
    assert tm.tm_year == ref.tm_year - 1900
    assert tm.tm_mon == ref.tm_mon - 1
    assert tm.tm_mday == ref.tm_mday
    assert tm.tm_hour == ref.tm_hour
    assert tm.tm_min == ref.tm_min
    assert tm.tm_sec == ref.tm_sec
    assert tm.tm_yday == ref.tm_yday - 1
    assert tm.tm_wday == (ref.tm_wday + 1) % 7


def test_epoch_was_a_thursday():
    assert gmtime(0).tm_wday == 4


def test_gmtime_rejects_negative():
    with pytest.raises(ValueError):
        gmtime(-1)


@pytest.mark.parametrize("t", SAMPLES)
def test_round_trip(t):
    assert mk_gmtime(gmtime(t)) == t


def test_mk_gmtime_normalises_overflowing_seconds():
    tm = BlynkTm(tm_sec=3661, tm_mday=1, tm_mon=0, tm_year=100)
    result = mk_gmtime(tm)
    assert result == calendar.timegm((2000, 1, 1, 0, 0, 3661))
    assert tm == gmtime(result)


def test_mk_gmtime_normalises_day_zero_to_previous_month():
    tm = BlynkTm(tm_mday=0, tm_mon=0, tm_year=101)
    result = mk_gmtime(tm)
    assert result == calendar.timegm((2000, 12, 31, 0, 0, 0))
    assert tm == gmtime(result)


def test_mk_gmtime_handles_negative_fields():
    tm = BlynkTm(tm_sec=-1, tm_mday=1, tm_mon=0, tm_year=100)
    result = mk_gmtime(tm)
    assert result == calendar.timegm((1999, 12, 31, 23, 59, 59))


def test_mk_gmtime_before_epoch_raises():
    with pytest.raises(ValueError):
        mk_gmtime(BlynkTm(tm_mday=1, tm_mon=0, tm_year=60))


def test_mk_gmtime_beyond_range_raises():
    with pytest.raises(OverflowError):
        mk_gmtime(BlynkTm(tm_mday=1, tm_mon=0, tm_year=200))


def test_no_sunrise_in_polar_summer():
    assert compute_sun(6, 21, 80.0, 0.0, True) is None


def test_equatorial_sunrise_before_sunset():
    rise = compute_sun(3, 21, 0.0, 0.0, True)
    sunset = compute_sun(3, 21, 0.0, 0.0, False)
    assert 300 < rise < 420
    assert 1020 < sunset < 1140
    assert rise < 720 < sunset


def test_eastern_longitude_shifts_sunrise_earlier():
    west = compute_sun(3, 21, 0.0, 0.0, True)
    east = compute_sun(3, 21, 0.0, 15.0, True)
    assert east < west