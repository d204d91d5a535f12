from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Dict, Optional, Union

from .core.engine import Calendar, Clock, DateMath
from .core.time import (
    DEFAULT_CALENDAR,
    DEFAULT_CLOCK,
    DEFAULT_DATE_MATH,
    TzLike,
    ensure_aware,
    resolve_timezone,
)
from .core.types import PhaseEvent, PhaseKind
from .engines import classifier
from .engines import phases
from .reference.time_scales import decimal_year

InstantLike = Union[datetime, date]


class Observation:
    """
    A reference instant together with its decimal year and output timezone.

    The decimal year is recomputed every time the reference instant is replaced.
    Not safe to share between threads.
    """

    def __init__(self, reference_instant: InstantLike, timezone: TzLike = None):
        self._tz = resolve_timezone(timezone)
        self.reference_instant = reference_instant

    @property
    def reference_instant(self) -> datetime:
        return self._instant

    @reference_instant.setter
    def reference_instant(self, value: InstantLike) -> None:
        self._instant = ensure_aware(value, self._tz)
        self._decimal_year = decimal_year(self._instant)

    @property
    def decimal_year(self) -> float:
        return self._decimal_year

    @property
    def timezone(self) -> tzinfo:
        """Output timezone: the configured one, else the reference instant's own."""
        return self._tz if self._tz is not None else self._instant.tzinfo

    def __repr__(self) -> str:
        return f"Observation({self._instant.isoformat()}, decimal_year={self._decimal_year:.6f}, tz={self.timezone})"


class MoonPhaseCalculator:
    """Phase events of the lunation nearest a reference instant."""

    def __init__(
        self,
        instant: InstantLike,
        timezone: TzLike = None,
        *,
        calendar: Optional[Calendar] = None,
        date_math: Optional[DateMath] = None,
        clock: Optional[Clock] = None,
    ):
        self.observation = Observation(instant, timezone)
        self.calendar = calendar or DEFAULT_CALENDAR
        self.date_math = date_math or DEFAULT_DATE_MATH
        self.clock = clock or DEFAULT_CLOCK

    @property
    def reference_instant(self) -> datetime:
        return self.observation.reference_instant

    @reference_instant.setter
    def reference_instant(self, value: InstantLike) -> None:
        self.observation.reference_instant = value

    @property
    def decimal_year(self) -> float:
        return self.observation.decimal_year

    @property
    def timezone(self) -> tzinfo:
        return self.observation.timezone

    # ---------------------------------------------------------
    # Phase events
    # ---------------------------------------------------------
    def phase_event(self, kind: PhaseKind) -> PhaseEvent:
        return phases.phase_event(
            kind, self.decimal_year, self.timezone, calendar=self.calendar, date_math=self.date_math
        )

    def all_phase_events(self) -> Dict[PhaseKind, PhaseEvent]:
        return phases.phase_events(
            self.decimal_year, self.timezone, calendar=self.calendar, date_math=self.date_math
        )

    def new_moon(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.NEW_MOON)

    def waxing_crescent(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.WAXING_CRESCENT)

    def first_quarter(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.FIRST_QUARTER)

    def waxing_gibbous(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.WAXING_GIBBOUS)

    def full_moon(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.FULL_MOON)

    def waning_gibbous(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.WANING_GIBBOUS)

    def last_quarter(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.LAST_QUARTER)

    def waning_crescent(self) -> PhaseEvent:
        return self.phase_event(PhaseKind.WANING_CRESCENT)

    # ---------------------------------------------------------
    # Classification
    # ---------------------------------------------------------
    def classify_instant(self, instant: Optional[InstantLike] = None) -> Optional[PhaseKind]:
        """Phase at `instant` (default: the reference instant); None when indeterminate."""
        dt = self.reference_instant if instant is None else ensure_aware(instant, self.timezone)
        return classifier.classify(dt, self.timezone, calendar=self.calendar, date_math=self.date_math)

    def classify_current_instant(self) -> Optional[PhaseKind]:
        return self.classify_instant(self.clock.now(self.timezone))


# ============================================================
# Functional API
# ============================================================

def phase_event(kind: PhaseKind, instant: InstantLike, timezone: TzLike = None) -> PhaseEvent:
    return MoonPhaseCalculator(instant, timezone).phase_event(kind)

def phase_events(instant: InstantLike, timezone: TzLike = None) -> Dict[PhaseKind, PhaseEvent]:
    return MoonPhaseCalculator(instant, timezone).all_phase_events()

def classify_instant(instant: InstantLike, timezone: TzLike = None) -> Optional[PhaseKind]:
    return MoonPhaseCalculator(instant, timezone).classify_instant()

def current_phase(timezone: TzLike = None, *, clock: Optional[Clock] = None) -> Optional[PhaseKind]:
    clock = clock or DEFAULT_CLOCK
    tz = resolve_timezone(timezone) or resolve_timezone("UTC")
    return MoonPhaseCalculator(clock.now(tz), tz, clock=clock).classify_current_instant()