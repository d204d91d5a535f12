from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional

from ..core.engine import Calendar, DateMath
from ..core.errors import IndeterminateClassificationError
from ..core.time import DEFAULT_DATE_MATH
from ..core.types import PhaseKind
from ..reference.time_scales import SECONDS_PER_DAY, decimal_year
from .phases import phase_event, phase_events

LOGGER = logging.getLogger(__name__)

# Step back this far when the nearest lunation's new moon lies in the future.
REANCHOR_DAYS = 15


def classify(
    instant: datetime,
    tz: tzinfo,
    *,
    calendar: Optional[Calendar] = None,
    date_math: Optional[DateMath] = None,
) -> Optional[PhaseKind]:
    """
    Phase the (aware) `instant` currently lies in, or None if it cannot be bracketed.

    The lunation is chosen from the instant's decimal year. If its new moon is
    still ahead, the instant is moved back REANCHOR_DAYS and the lunation chosen
    again. The result is the phase preceding the first event not yet reached;
    an instant at or past the cycle's last event (waning crescent) yields None.
    """
    date_math = date_math or DEFAULT_DATE_MATH

    y = decimal_year(instant)
    new_moon = phase_event(PhaseKind.NEW_MOON, y, tz, calendar=calendar, date_math=date_math)
    if date_math.diff_seconds(instant, new_moon.instant) > 0:
        anchor = date_math.add_seconds(instant, -REANCHOR_DAYS * SECONDS_PER_DAY)
        y = decimal_year(anchor)
        LOGGER.debug(
            "new moon %s is after %s; re-anchoring at %s",
            new_moon.instant.isoformat(), instant.isoformat(), anchor.isoformat(),
        )

    events = phase_events(y, tz, calendar=calendar, date_math=date_math)
    since_new_moon = date_math.diff_seconds(instant, events[PhaseKind.NEW_MOON].instant)

    if since_new_moon < 0:
        for kind, event in events.items():
            if date_math.diff_seconds(instant, event.instant) > 0:
                return PhaseKind(kind - 1)
        LOGGER.debug("%s is past the last event of its cycle", instant.isoformat())
        return None

    if since_new_moon == 0:
        return PhaseKind.NEW_MOON

    LOGGER.debug("no lunation brackets %s", instant.isoformat())
    return None


def classify_strict(
    instant: datetime,
    tz: tzinfo,
    *,
    calendar: Optional[Calendar] = None,
    date_math: Optional[DateMath] = None,
) -> PhaseKind:
    kind = classify(instant, tz, calendar=calendar, date_math=date_math)
    if kind is None:
        raise IndeterminateClassificationError(f"No lunar phase brackets {instant.isoformat()}")
    return kind
