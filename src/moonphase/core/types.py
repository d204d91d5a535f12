from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping


class PhaseKind(IntEnum):
    """The eight named phases, in cyclic order starting at new moon."""
    NEW_MOON = 0
    WAXING_CRESCENT = 1
    FIRST_QUARTER = 2
    WAXING_GIBBOUS = 3
    FULL_MOON = 4
    WANING_GIBBOUS = 5
    LAST_QUARTER = 6
    WANING_CRESCENT = 7

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_principal(self) -> bool:
        return self.value % 2 == 0

    @property
    def quadrant(self) -> "PhaseKind":
        """Principal phase whose correction terms this phase reuses."""
        return PhaseKind(self.value - self.value % 2)

    @property
    def k_offset(self) -> float:
        return K_OFFSETS[self]


# Fractional lunation offset per phase; intermediate phases share the k
# of the principal phase just before them.
K_OFFSETS: Mapping[PhaseKind, float] = MappingProxyType({
    PhaseKind.NEW_MOON: 0.0,
    PhaseKind.WAXING_CRESCENT: 0.0,
    PhaseKind.FIRST_QUARTER: 0.25,
    PhaseKind.WAXING_GIBBOUS: 0.25,
    PhaseKind.FULL_MOON: 0.50,
    PhaseKind.WANING_GIBBOUS: 0.50,
    PhaseKind.LAST_QUARTER: 0.75,
    PhaseKind.WANING_CRESCENT: 0.75,
})


@dataclass(frozen=True)
class PhaseEvent:
    kind: PhaseKind
    julian_day: float
    instant: datetime

    def __str__(self) -> str:
        return f"{self.kind.label:<16} {self.instant:%Y-%m-%d %H:%M:%S %Z}  (JD {self.julian_day:.5f})"
