#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import Dict, List, Optional, Tuple

from moonphase.core.types import PhaseKind, K_OFFSETS
from moonphase.engines.phases import EIGHTH_MONTH, julian_day_k
from moonphase.reference import astro_args as aa


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "moonphase[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "moonphase[diagnostics]"') from e


def build_gaps(np, year_start: float, year_end: float) -> Tuple["np.ndarray", "np.ndarray"]:
    """
    Gaps (days) between consecutive phase events, one row per lunation.

    Column i is the gap from phase i to phase i+1; column 7 runs from the waning
    crescent to the next new moon.
    """
    k0 = aa.round_half_away((year_start - aa.J2000_YEAR) * aa.LUNATIONS_PER_YEAR)
    k1 = aa.round_half_away((year_end - aa.J2000_YEAR) * aa.LUNATIONS_PER_YEAR)
    if k1 <= k0:
        raise ValueError("year_end must be after year_start")

    ks = np.arange(k0, k1 + 1, dtype=float)
    jd = np.empty((len(ks), len(PhaseKind) + 1), dtype=float)
    for i, k in enumerate(ks):
        for kind in PhaseKind:
            jd[i, kind] = julian_day_k(kind, k + K_OFFSETS[kind])
        jd[i, len(PhaseKind)] = julian_day_k(PhaseKind.NEW_MOON, k + 1)

    years = aa.J2000_YEAR + ks / aa.LUNATIONS_PER_YEAR
    return years, np.diff(jd, axis=1)


def summarize(np, gaps) -> Dict[str, float]:
    dev = gaps - EIGHTH_MONTH
    return {
        "min_gap": float(gaps.min()),
        "max_gap": float(gaps.max()),
        "mean_gap": float(gaps.mean()),
        "max_abs_deviation": float(np.abs(dev).max()),
        "rms_deviation": float(np.sqrt(np.mean(dev * dev))),
    }


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Spacing of consecutive lunar phase events vs. one eighth of the synodic month.")
    p.add_argument("--year-start", type=float, default=1900.0)
    p.add_argument("--year-end", type=float, default=2100.0)
    p.add_argument("--out-png", default=None, help="Save a scatter plot of the deviations")
    args = p.parse_args(argv)

    np = _need_numpy()

    years, gaps = build_gaps(np, args.year_start, args.year_end)
    stats = summarize(np, gaps)

    print(f"Lunations: {len(years)}  ({years[0]:.2f} .. {years[-1]:.2f})")
    print(f"Nominal gap (synodic/8) = {EIGHTH_MONTH:.6f} d")
    for name, value in stats.items():
        print(f"  {name:<18} = {value:.6f} d")
    print()
    print("Max |deviation| per gap (days)")
    for kind in PhaseKind:
        nxt = PhaseKind((kind + 1) % len(PhaseKind))
        col = np.abs(gaps[:, kind] - EIGHTH_MONTH)
        print(f"  {kind.label:>16} -> {nxt.label:<16} {col.max():.6f}")

    if args.out_png:
        plt = _need_matplotlib()
        fig, ax = plt.subplots(figsize=(10, 5), constrained_layout=True)
        for kind in PhaseKind:
            ax.scatter(years, (gaps[:, kind] - EIGHTH_MONTH) * 24.0, s=2, alpha=0.5, label=kind.label)
        ax.set_xlabel("Year")
        ax.set_ylabel("Gap - synodic/8 (hours)")
        ax.set_title("Lunar phase spacing (Meeus periodic terms)")
        ax.grid(True, alpha=0.3)
        ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5), frameon=False, markerscale=4)
        fig.savefig(args.out_png, dpi=200)
        print(f"Saved: {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
