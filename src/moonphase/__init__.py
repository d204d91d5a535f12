"""moonphase public API.

Keep this surface small: users should mostly interact with names re-exported here.
"""

from .api import (
    MoonPhaseCalculator,
    Observation,
    phase_event,
    phase_events,
    classify_instant,
    current_phase,
)
from .core.errors import (
    MoonPhaseError,
    InvalidInstantError,
    IndeterminateClassificationError,
)
from .core.types import PhaseKind, PhaseEvent, K_OFFSETS

__all__ = [
    "MoonPhaseCalculator",
    "Observation",
    "phase_event",
    "phase_events",
    "classify_instant",
    "current_phase",
    "MoonPhaseError",
    "InvalidInstantError",
    "IndeterminateClassificationError",
    "PhaseKind",
    "PhaseEvent",
    "K_OFFSETS",
]
