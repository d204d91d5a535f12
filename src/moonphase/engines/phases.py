"""
moonphase.engines.phases
------------------------
Combines the mean phase with the periodic corrections into the Julian Day of
each of the eight named phases.

Principal phases (new, first quarter, full, last quarter) follow Meeus ch. 49.
The intermediate phases are the preceding principal phase shifted by one eighth
of the mean synodic month, reusing its correction terms unchanged.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Dict, Optional

from ..core.engine import Calendar, DateMath
from ..core.types import PhaseEvent, PhaseKind
from ..reference import astro_args as aa
from ..reference import series
from ..reference.time_scales import jd_to_instant

LOGGER = logging.getLogger(__name__)

EIGHTH_MONTH = aa.SYNODIC_MONTH / 8


def julian_day_k(kind: PhaseKind, k: float) -> float:
    """JD of `kind` for lunation index k (k already carries the quarter offset)."""
    args = aa.orbital_arguments_k(k)
    jd = aa.jde_mean_phase(k) + series.eval_planetary(k, args.t)

    quadrant = kind.quadrant
    if quadrant is PhaseKind.NEW_MOON:
        jd += series.new_moon_correction(args)
    elif quadrant is PhaseKind.FIRST_QUARTER:
        jd += series.quarter_correction(args)
        jd += series.quarter_w(args)
    elif quadrant is PhaseKind.FULL_MOON:
        jd += series.full_moon_correction(args)
    else:
        jd += series.quarter_correction(args)
        jd -= series.quarter_w(args)

    if not kind.is_principal:
        jd += EIGHTH_MONTH
    return jd


def phase_julian_day(kind: PhaseKind, decimal_year: float) -> float:
    return julian_day_k(kind, aa.lunation_index(decimal_year, kind))


def phase_event(
    kind: PhaseKind,
    decimal_year: float,
    tz: tzinfo,
    *,
    calendar: Optional[Calendar] = None,
    date_math: Optional[DateMath] = None,
) -> PhaseEvent:
    kind = PhaseKind(kind)
    k = aa.lunation_index(decimal_year, kind)
    jd = julian_day_k(kind, k)
    LOGGER.debug("%s: k=%.2f jd=%.6f", kind.name, k, jd)
    return PhaseEvent(
        kind=kind,
        julian_day=jd,
        instant=jd_to_instant(jd, tz, calendar=calendar, date_math=date_math),
    )


def phase_events(
    decimal_year: float,
    tz: tzinfo,
    *,
    calendar: Optional[Calendar] = None,
    date_math: Optional[DateMath] = None,
) -> Dict[PhaseKind, PhaseEvent]:
    """All eight events of the lunation nearest `decimal_year`, NEW_MOON first."""
    return {
        kind: phase_event(kind, decimal_year, tz, calendar=calendar, date_math=date_math)
        for kind in PhaseKind
    }
