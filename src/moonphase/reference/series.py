# reference/series.py

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Literal, Tuple

from .astro_args import OrbitalArguments, normalize_deg


Trig = Literal["sin", "cos"]
_TRIG = {"sin": math.sin, "cos": math.cos}


@dataclass(frozen=True)
class CorrectionTerm:
    """coefficient * E**e_pow * trig(m*M + mp*M' + f*F + ohm*Omega)."""
    coefficient: float
    e_pow: int = 0
    m: int = 0
    mp: int = 0
    f: int = 0
    ohm: int = 0
    trig: Trig = "sin"

    def angle_deg(self, args: OrbitalArguments) -> float:
        return normalize_deg(self.m * args.m + self.mp * args.mp + self.f * args.f + self.ohm * args.ohm)

    def evaluate(self, args: OrbitalArguments) -> float:
        return self.coefficient * args.e**self.e_pow * _TRIG[self.trig](math.radians(self.angle_deg(args)))


@dataclass(frozen=True)
class PlanetaryTerm:
    """coefficient * sin(a0 + a1*k + a2*T^2)."""
    coefficient: float
    a0: float
    a1: float
    a2: float = 0.0

    def angle_deg(self, k: float, T: float) -> float:
        return normalize_deg(self.a0 + self.a1 * k + self.a2 * T**2)

    def evaluate(self, k: float, T: float) -> float:
        return self.coefficient * math.sin(math.radians(self.angle_deg(k, T)))


def _table(rows: Iterable[Tuple[float, int, int, int, int, int]], trig: Trig = "sin") -> Tuple[CorrectionTerm, ...]:
    return tuple(CorrectionTerm(c, e_pow, m, mp, f, ohm, trig) for c, e_pow, m, mp, f, ohm in rows)


# Additional corrections for all phases (planetary arguments A1..A14).
# (coefficient, a0, a1 per lunation, a2 per T^2)
PLANETARY_TERMS = tuple(PlanetaryTerm(*row) for row in (
    (0.000325, 299.77, 0.107408, -0.009173),
    (0.000165, 251.88, 0.016321),
    (0.000164, 251.83, 26.651886),
    (0.000126, 349.42, 36.412478),
    (0.000110, 84.66, 18.206239),
    (0.000062, 141.74, 53.303771),
    (0.000060, 207.14, 2.453732),
    (0.000056, 154.14, 7.306860),
    (0.000047, 34.52, 27.261239),
    (0.000042, 207.19, 0.121824),
    (0.000040, 291.34, 1.844379),
    (0.000037, 161.72, 24.198154),
    (0.000035, 239.56, 25.513099),
    (0.000023, 331.55, 3.592518),
))

# (coefficient, power of E, M, M', F, Omega)
NEW_MOON_TERMS = _table((
    (-0.40720, 0, 0, 1, 0, 0),
    (0.17241, 1, 1, 0, 0, 0),
    (0.01608, 0, 0, 2, 0, 0),
    (0.01039, 0, 0, 0, 2, 0),
    (0.00739, 1, -1, 1, 0, 0),
    (-0.00514, 1, 1, 1, 0, 0),
    (0.00208, 2, 2, 0, 0, 0),
    (-0.00111, 0, 0, 1, -2, 0),
    (-0.00057, 0, 0, 1, 2, 0),
    (0.00056, 1, 1, 2, 0, 0),
    (-0.00042, 0, 0, 3, 0, 0),
    (0.00042, 1, 1, 0, 2, 0),
    (0.00038, 1, 1, 0, -2, 0),
    (-0.00024, 1, -1, 2, 0, 0),
    (-0.00017, 0, 0, 0, 0, 1),
    (-0.00007, 0, 2, 1, 0, 0),
    (0.00004, 0, 0, 2, -2, 0),
    (0.00004, 0, 3, 0, 0, 0),
    (0.00003, 0, 1, 1, -2, 0),
    (0.00003, 0, 0, 2, 2, 0),
    (-0.00003, 0, 1, 1, 2, 0),
    (0.00003, 0, -1, 1, 2, 0),
    (-0.00002, 0, -1, 1, -2, 0),
    (-0.00002, 0, 1, 3, 0, 0),
    (0.00002, 0, 0, 4, 0, 0),
))

FULL_MOON_TERMS = _table((
    (-0.40614, 0, 0, 1, 0, 0),
    (0.17302, 1, 1, 0, 0, 0),
    (0.01614, 0, 0, 2, 0, 0),
    (0.01043, 0, 0, 0, 2, 0),
    (0.00734, 1, -1, 1, 0, 0),
    (-0.00515, 1, 1, 1, 0, 0),
    (0.00209, 2, 2, 0, 0, 0),
    (-0.00111, 0, 0, 1, -2, 0),
    (-0.00057, 0, 0, 1, 2, 0),
    (0.00056, 1, 1, 2, 0, 0),
    (-0.00042, 0, 0, 3, 0, 0),
    (0.00042, 1, 1, 0, 2, 0),
    (0.00038, 1, 1, 0, -2, 0),
    (-0.00024, 1, -1, 2, 0, 0),
    (-0.00017, 0, 0, 0, 0, 1),
    (-0.00007, 0, 2, 1, 0, 0),
    (0.00004, 0, 0, 2, -2, 0),
    (0.00004, 0, 3, 0, 0, 0),
    (0.00003, 0, 1, 1, -2, 0),
    (0.00003, 0, 0, 2, 2, 0),
    (-0.00003, 0, 1, 1, 2, 0),
    (0.00003, 0, -1, 1, 2, 0),
    (-0.00002, 0, -1, 1, -2, 0),
    (-0.00002, 0, 1, 3, 0, 0),
    (0.00002, 0, 0, 4, 0, 0),
))

# First and last quarter.
# NB: the E^2 term is sin(M), not Meeus' sin(2M). Reference phase times depend on it.
QUARTER_TERMS = _table((
    (-0.62801, 0, 0, 1, 0, 0),
    (0.17172, 1, 1, 0, 0, 0),
    (-0.01183, 1, 1, 1, 0, 0),
    (0.00862, 0, 0, 2, 0, 0),
    (0.00804, 0, 0, 0, 2, 0),
    (0.00454, 1, -1, 1, 0, 0),
    (0.00204, 2, 1, 0, 0, 0),
    (-0.00180, 0, 0, 1, -2, 0),
    (-0.00070, 0, 0, 1, 2, 0),
    (-0.00040, 0, 3, 0, 0, 0),
    (-0.00034, 1, -1, 2, 0, 0),
    (0.00032, 1, 1, 0, 2, 0),
    (0.00032, 1, 1, 0, -2, 0),
    (-0.00028, 2, 2, 1, 0, 0),
    (0.00027, 1, 1, 2, 0, 0),
    (-0.00017, 0, 0, 0, 0, 1),
    (-0.00005, 0, -1, 1, -2, 0),
    (0.00004, 0, 0, 2, 2, 0),
    (-0.00004, 0, 1, 1, 2, 0),
    (0.00004, 0, -2, 1, 0, 0),
    (0.00003, 0, 1, 1, -2, 0),
    (0.00003, 0, 3, 0, 0, 0),
    (0.00002, 0, 0, 2, -2, 0),
    (0.00002, 0, -1, 1, 2, 0),
    (-0.00002, 0, 1, 3, 0, 0),
))

# Quarter asymmetry W (added at first quarter, subtracted at last quarter).
QUARTER_W_CONSTANT = 0.00306
QUARTER_W_TERMS = _table((
    (-0.00038, 1, 1, 0, 0, 0),
    (0.00026, 0, 0, 1, 0, 0),
    (-0.00002, 0, -1, 1, 0, 0),
    (0.00002, 0, 1, 1, 0, 0),
    (0.00002, 0, 0, 0, 2, 0),
), trig="cos")


# ------------------------------------------------------------
# Evaluators
# ------------------------------------------------------------

def eval_planetary(k: float, T: float) -> float:
    s = 0.0
    for term in PLANETARY_TERMS:
        s += term.evaluate(k, T)
    return s

def eval_terms(terms: Tuple[CorrectionTerm, ...], args: OrbitalArguments) -> float:
    s = 0.0
    for term in terms:
        s += term.evaluate(args)
    return s

def new_moon_correction(args: OrbitalArguments) -> float:
    return eval_terms(NEW_MOON_TERMS, args)

def full_moon_correction(args: OrbitalArguments) -> float:
    return eval_terms(FULL_MOON_TERMS, args)

def quarter_correction(args: OrbitalArguments) -> float:
    return eval_terms(QUARTER_TERMS, args)

def quarter_w(args: OrbitalArguments) -> float:
    return QUARTER_W_CONSTANT + eval_terms(QUARTER_W_TERMS, args)
