"""
moonphase.core.engine
---------------------
Collaborator boundaries of the phase pipeline.

The numeric core only needs three services from its environment: a calendar
that maps civil dates to Julian Day Numbers, elapsed-time arithmetic on aware
datetimes, and a clock. Default implementations live in `moonphase.core.time`.
"""

from __future__ import annotations
from datetime import date, datetime, tzinfo
from typing import Optional, Protocol


class Calendar(Protocol):
    def to_jdn(self, d: date) -> int: ...
    def from_jdn(self, jdn: int) -> date: ...


class DateMath(Protocol):
    def add_seconds(self, dt: datetime, seconds: float) -> datetime:
        """Shift `dt` by elapsed seconds, keeping its tzinfo."""
        ...

    def diff_seconds(self, a: datetime, b: datetime) -> float:
        """Elapsed seconds from `a` to `b` (positive when `b` is later)."""
        ...


class Clock(Protocol):
    def now(self, tz: Optional[tzinfo] = None) -> datetime: ...
