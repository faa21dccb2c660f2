"""Conversions between datetimes and spreadsheet serial day numbers.

Naive datetimes are treated as UTC throughout.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

MJD_0 = 2400000.5
MJD_JD2000 = 51544.5

SECONDS_IN_A_DAY = 86400.0
NANOS_IN_A_DAY = 86400.0 * 1e9

_NS_PER_US = 1000
_NS_PER_S = 1_000_000_000
_DAY_NS = 24 * 60 * 60 * 1e9

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# Excel counts Feb 29 1900 as a real day, so the 1900 epoch sits on Dec 30 1899.
EXCEL_1900_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)
EXCEL_1904_EPOCH = datetime(1904, 1, 1, tzinfo=timezone.utc)

_DAYS_BETWEEN_1970_AND_1900 = float((_UNIX_EPOCH - EXCEL_1900_EPOCH).days)
_DAYS_BETWEEN_1970_AND_1904 = float((_UNIX_EPOCH - EXCEL_1904_EPOCH).days)

_JULIAN_OFFSET_1900 = 15018.0
_JULIAN_OFFSET_1904 = 16480.0


def _quo(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _rem(a: int, b: int) -> int:
    """Remainder matching truncating division."""
    return a - b * _quo(a, b)


def _as_utc_aware(t: datetime) -> datetime:
    return t.replace(tzinfo=timezone.utc) if t.tzinfo is None else t


def time_to_utc_time(t: datetime) -> datetime:
    """Return the same wall-clock time, labelled as UTC."""
    return t.replace(tzinfo=timezone.utc)


def _shift_julian_to_noon(days: float, fraction: float) -> tuple[float, float]:
    if -0.5 < fraction < 0.5:
        fraction += 0.5
    elif fraction >= 0.5:
        days += 1
        fraction -= 0.5
    elif fraction <= -0.5:
        days -= 1
        fraction += 1.5
    return days, fraction


def fraction_of_a_day(fraction: float) -> tuple[int, int, int, int]:
    """Split a fraction of a day into hours, minutes, seconds and nanoseconds.

    The result is rounded to the nearest microsecond.
    """
    frac = int(_DAY_NS * fraction + _NS_PER_US / 2)
    nanoseconds = _quo(_rem(frac, _NS_PER_S), _NS_PER_US) * _NS_PER_US
    frac = _quo(frac, _NS_PER_S)
    seconds = _rem(frac, 60)
    frac = _quo(frac, 60)
    minutes = _rem(frac, 60)
    hours = _quo(frac, 60)
    return hours, minutes, seconds, nanoseconds


def _fliegel_van_flandern(jd: int) -> tuple[int, int, int]:
    """Convert a Julian day number into (day, month, year)."""
    l = jd + 68569
    n = _quo(4 * l, 146097)
    l = l - _quo(146097 * n + 3, 4)
    i = _quo(4000 * (l + 1), 1461001)
    l = l - _quo(1461 * i, 4) + 31
    j = _quo(80 * l, 2447)
    d = l - _quo(2447 * j, 80)
    l = _quo(j, 11)
    m = j + 2 - 12 * l
    y = 100 * (n - 49) + i + l
    return d, m, y


def julian_date_to_gregorian_time(part1: float, part2: float) -> datetime:
    """Convert a Julian date given as two summands into a UTC datetime."""
    part1_frac, part1_int = math.modf(part1)
    part2_frac, part2_int = math.modf(part2)
    days, fraction = _shift_julian_to_noon(part1_int + part2_int, part1_frac + part2_frac)
    day, month, year = _fliegel_van_flandern(int(days))
    hours, minutes, seconds, nanoseconds = fraction_of_a_day(fraction)
    return datetime(year, month, day, tzinfo=timezone.utc) + timedelta(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=_quo(nanoseconds, _NS_PER_US),
    )


def time_from_excel_time(excel_time: float, date1904: bool) -> datetime:
    """Convert a serial day number into a UTC datetime."""
    whole_days = int(excel_time)
    # Days up to the end of February 1900 follow the Julian reckoning.
    if whole_days <= 61:
        offset = _JULIAN_OFFSET_1904 if date1904 else _JULIAN_OFFSET_1900
        return julian_date_to_gregorian_time(MJD_0, excel_time + offset)
    float_part = excel_time - whole_days
    epoch = EXCEL_1904_EPOCH if date1904 else EXCEL_1900_EPOCH
    nanos = int(NANOS_IN_A_DAY * float_part)
    return epoch + timedelta(days=whole_days, microseconds=_quo(nanos, _NS_PER_US))


def time_to_excel_time(t: datetime, date1904: bool) -> float:
    """Convert a datetime into a serial day number in 1900 or 1904 mode."""
    delta = _as_utc_aware(t) - _UNIX_EPOCH
    unix_seconds = delta.days * 86400 + delta.seconds
    nanos = delta.microseconds * _NS_PER_US
    days_since_unix_epoch = unix_seconds / SECONDS_IN_A_DAY
    nanos_part = nanos / NANOS_IN_A_DAY
    offset = _DAYS_BETWEEN_1970_AND_1904 if date1904 else _DAYS_BETWEEN_1970_AND_1900
    return days_since_unix_epoch + offset + nanos_part