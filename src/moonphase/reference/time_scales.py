from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
import math
from typing import Optional

from ..core.engine import Calendar, DateMath
from ..core.errors import InvalidInstantError
from ..core.time import DEFAULT_CALENDAR, DEFAULT_DATE_MATH, day_of_year0, local_midnight


# ============================================================
# Decimal year
# ============================================================

SECONDS_PER_DAY = 86400
SECONDS_PER_JULIAN_YEAR = 31557600  # 365.25 days

# Added by instant_to_jd so the seconds floor in jd_to_instant survives the
# rounding of a JD near 2.4e6 (~2e-5 s).
FLOOR_GUARD_SECONDS = 5e-4


def decimal_year(dt: datetime) -> float:
    """
    Convert an instant to a decimal year: year + (zero-based day of year) in Julian years.

    The day of year is read in the instant's own timezone; the time of day is ignored.
    """
    return dt.year + day_of_year0(dt) * SECONDS_PER_DAY / SECONDS_PER_JULIAN_YEAR


# ============================================================
# JD <-> calendar instant
# ============================================================

def jd_to_instant(
    jd: float,
    tz: tzinfo,
    *,
    calendar: Optional[Calendar] = None,
    date_math: Optional[DateMath] = None,
) -> datetime:
    """
    JD -> aware datetime in `tz`.

    The integer part selects the civil date (JDN); the fraction, counted from noon,
    is added as elapsed time to local midnight of that date:
      h = floor(24 f) + 12                      (12 <= h < 36)
      m = floor(1440 (f - (h-12)/24))
      s = 86400 (f - (h-12)/24 - m/1440)        (floored, not rounded)
    Hours past 24 roll into the next day.
    """
    calendar = calendar or DEFAULT_CALENDAR
    date_math = date_math or DEFAULT_DATE_MATH

    d = math.floor(jd)
    f = jd - d
    civil = calendar.from_jdn(d)

    h = math.floor(24 * f) + 12
    m = math.floor(1440 * (f - (h - 12) / 24))
    s = 86400 * (f - (h - 12) / 24 - m / 1440)

    return date_math.add_seconds(local_midnight(civil, tz), h * 3600 + m * 60 + math.floor(s))


def instant_to_jd(
    dt: datetime,
    tz: tzinfo,
    *,
    calendar: Optional[Calendar] = None,
    date_math: Optional[DateMath] = None,
) -> float:
    """
    Inverse of jd_to_instant: JDN of a local date plus elapsed time since its noon.

    Instants before local noon are counted from the previous date (12 <= h < 36
    in jd_to_instant), so any instant jd_to_instant produces maps back to itself
    to the second, DST-change days included.
    """
    calendar = calendar or DEFAULT_CALENDAR
    date_math = date_math or DEFAULT_DATE_MATH

    civil = dt.astimezone(tz).date()
    elapsed = date_math.diff_seconds(local_midnight(civil, tz), dt)
    if elapsed < SECONDS_PER_DAY / 2:
        try:
            civil -= timedelta(days=1)
        except OverflowError as e:
            raise InvalidInstantError(f"{dt.isoformat()} is outside the supported date range") from e
        elapsed = date_math.diff_seconds(local_midnight(civil, tz), dt)

    elapsed += FLOOR_GUARD_SECONDS
    return calendar.to_jdn(civil) + (elapsed - SECONDS_PER_DAY / 2) / SECONDS_PER_DAY
