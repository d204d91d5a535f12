from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidInstantError

TzLike = Union[tzinfo, str, None]


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidInstantError(f"JDN {jdn} is outside the supported date range") from e

def day_of_year0(dt: date) -> int:
    """Zero-based day of year (Jan 1 = 0), read in the datetime's own zone."""
    return dt.timetuple().tm_yday - 1


# ============================================================
# Timezone handling
# ============================================================

def resolve_timezone(tz: TzLike) -> Optional[tzinfo]:
    """Accept a tzinfo, an IANA zone name, or None."""
    if tz is None or isinstance(tz, tzinfo):
        return tz
    if isinstance(tz, str):
        if tz.upper() == "UTC":
            return timezone.utc
        try:
            return ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise InvalidInstantError(f"Unknown timezone '{tz}'") from e
    raise InvalidInstantError(f"Expected tzinfo or zone name, got {type(tz).__name__}")

def ensure_aware(value: Union[datetime, date], tz: Optional[tzinfo] = None) -> datetime:
    """
    Coerce `value` into a timezone-aware datetime.

    Plain dates become local midnight; naive datetimes are read as wall time in `tz`.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time(0))
    else:
        raise InvalidInstantError(f"Expected datetime or date, got {type(value).__name__}")

    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        if tz is None:
            raise InvalidInstantError("datetime must be timezone-aware (or a timezone must be given)")
        dt = dt.replace(tzinfo=tz)
    return dt

def local_midnight(d: date, tz: tzinfo) -> datetime:
    return datetime.combine(d, time(0), tzinfo=tz)


# ============================================================
# Default collaborators
# ============================================================

class GregorianCalendar:
    """Proleptic Gregorian calendar backed by the Fliegel-Van Flandern formulas."""

    def to_jdn(self, d: date) -> int:
        return to_jdn(d)

    def from_jdn(self, jdn: int) -> date:
        return from_jdn(jdn)


class ElapsedDateMath:
    """
    Arithmetic in elapsed (UTC) seconds.

    Aware-datetime `+` within one zone works on wall time, so shifts go through UTC.
    """

    def add_seconds(self, dt: datetime, seconds: float) -> datetime:
        try:
            shifted = dt.astimezone(timezone.utc) + timedelta(seconds=seconds)
            return shifted.astimezone(dt.tzinfo)
        except (OverflowError, ValueError) as e:
            raise InvalidInstantError(f"{dt.isoformat()} shifted by {seconds}s is out of range") from e

    def diff_seconds(self, a: datetime, b: datetime) -> float:
        return (b.astimezone(timezone.utc) - a.astimezone(timezone.utc)).total_seconds()


class SystemClock:
    def now(self, tz: Optional[tzinfo] = None) -> datetime:
        return datetime.now(tz if tz is not None else timezone.utc)


DEFAULT_CALENDAR = GregorianCalendar()
DEFAULT_DATE_MATH = ElapsedDateMath()
DEFAULT_CLOCK = SystemClock()
