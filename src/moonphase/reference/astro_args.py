from __future__ import annotations

from dataclasses import dataclass
import math

from ..core.types import PhaseKind, K_OFFSETS


# ------------------------------------------------------------
# Constants (Meeus, Astronomical Algorithms, ch. 49)
# ------------------------------------------------------------

J2000_YEAR = 2000.0
LUNATIONS_PER_YEAR = 12.3685     # mean lunations per Julian year
K_PER_CENTURY = 1236.85          # lunations per Julian century
JDE_EPOCH = 2451550.09765        # mean new moon k = 0 (2000 Jan 6)
SYNODIC_MONTH = 29.53058886      # days


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def normalize_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360)."""
    turns = x_deg / 360.0
    y = (turns - math.floor(turns)) * 360.0
    # tiny negative inputs round up to a full turn
    return 0.0 if y >= 360.0 else y

def round_half_away(x: float) -> int:
    """Round to nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


# ------------------------------------------------------------
# Lunation index and time variable
# ------------------------------------------------------------

def lunation_index(decimal_year: float, kind: PhaseKind) -> float:
    """
    k for the lunation nearest `decimal_year`, shifted to the requested phase.

    k is integral at new moons; first quarter, full moon and last quarter add
    0.25, 0.50 and 0.75. The intermediate phases use their principal's k.
    """
    return round_half_away((decimal_year - J2000_YEAR) * LUNATIONS_PER_YEAR) + K_OFFSETS[kind]

def T_from_k(k: float) -> float:
    """Julian centuries from J2000.0, approximated from the lunation index."""
    return k / K_PER_CENTURY


# ------------------------------------------------------------
# Orbital arguments at a phase (degrees)
# ------------------------------------------------------------

def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Scales the periodic terms that depend on the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)

def sun_mean_anomaly(k: float, T: float) -> float:
    return normalize_deg(
        2.5534
        + 29.10535669 * k
        - 0.00000218 * T**2
        - 0.00000011 * T**3
    )

def moon_mean_anomaly(k: float, T: float) -> float:
    return normalize_deg(
        201.5643
        + 385.81693528 * k
        + 0.0107438 * T**2
        + 0.00001239 * T**3
        - 0.000000058 * T**4
    )

def moon_argument_of_latitude(k: float, T: float) -> float:
    return normalize_deg(
        160.7108
        + 390.67050274 * k
        - 0.0016341 * T**2
        - 0.00000227 * T**3
        + 0.000000011 * T**4
    )

def moon_ascending_node(k: float, T: float) -> float:
    return normalize_deg(
        124.7746
        - 1.56375580 * k
        + 0.0020691 * T**2
        + 0.00000215 * T**3
    )


@dataclass(frozen=True)
class OrbitalArguments:
    """Lunation index, time variable and mean elements (degrees) at one phase."""
    k: float
    t: float
    e: float
    m: float    # Sun's mean anomaly
    mp: float   # Moon's mean anomaly
    f: float    # Moon's argument of latitude
    ohm: float  # longitude of the ascending node


def orbital_arguments_k(k: float) -> OrbitalArguments:
    T = T_from_k(k)
    return OrbitalArguments(
        k=k,
        t=T,
        e=eccentricity_factor(T),
        m=sun_mean_anomaly(k, T),
        mp=moon_mean_anomaly(k, T),
        f=moon_argument_of_latitude(k, T),
        ohm=moon_ascending_node(k, T),
    )

def orbital_arguments(kind: PhaseKind, decimal_year: float) -> OrbitalArguments:
    return orbital_arguments_k(lunation_index(decimal_year, kind))


# ------------------------------------------------------------
# Mean phase
# ------------------------------------------------------------

def jde_mean_phase(k: float) -> float:
    """
    Mean Julian Ephemeris Day of the phase with lunation index k:
      JDE = 2451550.09765 + 29.53058886 k
            + 0.0001337 T^2 - 0.000000150 T^3 + 0.00000000073 T^4,
      T = k / 1236.85.
    """
    T = T_from_k(k)
    return (
        JDE_EPOCH
        + SYNODIC_MONTH * k
        + 0.0001337 * T**2
        - 0.000000150 * T**3
        + 0.00000000073 * T**4
    )
