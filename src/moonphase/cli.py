from __future__ import annotations

import argparse
from datetime import datetime
import logging
import sys
import re
import importlib
import inspect


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _parse_instant(s: str) -> datetime:
    """YYYY-MM-DD, optionally followed by THH:MM[:SS] and a UTC offset."""
    try:
        return datetime.fromisoformat(s)
    except ValueError as e:
        raise SystemExit(f"Invalid date '{s}': expected YYYY-MM-DD[THH:MM[:SS]]") from e


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_phases(argv: list[str]) -> int:
    import moonphase

    p = argparse.ArgumentParser(prog="moonphase phases", description="Phase events of the lunation nearest a date")
    p.add_argument("date", help="YYYY-MM-DD[THH:MM[:SS]]")
    p.add_argument("--tz", default="UTC", help="IANA timezone for input and output (default: UTC)")
    args = p.parse_args(argv)

    calc = moonphase.MoonPhaseCalculator(_parse_instant(args.date), args.tz)
    print(f"Reference: {calc.reference_instant.isoformat()}  (decimal year {calc.decimal_year:.6f})")
    for event in calc.all_phase_events().values():
        print(f"  {event}")
    return 0


def cmd_classify(argv: list[str]) -> int:
    import moonphase
    from moonphase.core.time import DEFAULT_CLOCK, resolve_timezone
    from moonphase.engines.classifier import classify_strict

    p = argparse.ArgumentParser(prog="moonphase classify", description="Which phase an instant lies in")
    p.add_argument("date", nargs="?", help="YYYY-MM-DD[THH:MM[:SS]] (default: now)")
    p.add_argument("--tz", default="UTC", help="IANA timezone (default: UTC)")
    p.add_argument("--strict", action="store_true", help="exit with status 2 when no phase brackets the instant")
    args = p.parse_args(argv)

    tz = resolve_timezone(args.tz)
    instant = _parse_instant(args.date) if args.date is not None else DEFAULT_CLOCK.now(tz)
    calc = moonphase.MoonPhaseCalculator(instant, tz)

    if args.strict:
        try:
            kind = classify_strict(calc.reference_instant, calc.timezone, calendar=calc.calendar, date_math=calc.date_math)
        except moonphase.IndeterminateClassificationError as e:
            print(e, file=sys.stderr)
            return 2
    else:
        kind = calc.classify_instant()

    label = kind.label if kind is not None else "indeterminate"
    print(f"{calc.reference_instant.isoformat()}: {label}")
    return 0


def cmd_args(argv: list[str]) -> int:
    from moonphase.core.types import PhaseKind
    from moonphase.reference import astro_args as aa
    from moonphase.reference import series
    from moonphase.reference.time_scales import decimal_year
    from moonphase.core.time import ensure_aware, resolve_timezone

    p = argparse.ArgumentParser(prog="moonphase args", description="Print lunation index, orbital arguments and correction sums.")
    g = p.add_mutually_exclusive_group()
    g.add_argument("--k", type=float, default=None, help="Lunation index (Meeus), default 0")
    g.add_argument("--date", default=None, help="Derive k from this date instead (YYYY-MM-DD)")
    p.add_argument("--phase", choices=[k.name.lower() for k in PhaseKind], default="new_moon")
    p.add_argument("--tz", default="UTC")
    args = p.parse_args(argv)

    kind = PhaseKind[args.phase.upper()]
    if args.date is not None:
        dt = ensure_aware(_parse_instant(args.date), resolve_timezone(args.tz))
        y = decimal_year(dt)
        k = aa.lunation_index(y, kind)
        print(f"decimal year = {y:.8f}")
    else:
        k = args.k if args.k is not None else kind.k_offset

    oa = aa.orbital_arguments_k(k)

    print(f"k = {oa.k:g}")
    print(f"T (Julian centuries from J2000.0) = {oa.t:.12f}")
    print(f"E = {oa.e:.10f}")
    print()
    print("Orbital arguments (degrees, wrapped to [0,360))")
    print(f"  M      = {oa.m:.10f}")
    print(f"  M'     = {oa.mp:.10f}")
    print(f"  F      = {oa.f:.10f}")
    print(f"  Omega  = {oa.ohm:.10f}")
    print()
    print(f"JDE (mean phase) = {aa.jde_mean_phase(k):.8f}")
    print()
    print("Correction sums (days)")
    print(f"  planetary  = {series.eval_planetary(k, oa.t):+.8f}")
    print(f"  new moon   = {series.new_moon_correction(oa):+.8f}")
    print(f"  full moon  = {series.full_moon_correction(oa):+.8f}")
    print(f"  quarter    = {series.quarter_correction(oa):+.8f}")
    print(f"  W          = {series.quarter_w(oa):+.8f}")

    return 0


def main(argv: list[str] | None = None) -> int:
    import moonphase

    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `moonphase [-v] YYYY-MM-DD ...`
    i = next((i for i, a in enumerate(argv) if not a.startswith("-")), None)
    if i is not None and _DATE_RE.match(argv[i]):
        argv = [*argv[:i], "phases", *argv[i:]]

    p = argparse.ArgumentParser(prog="moonphase", description="Lunar phase toolkit CLI (Meeus periodic terms).")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("phases", help="Phase events of the lunation nearest a date")
    sub.add_parser("classify", help="Which phase an instant lies in")
    sub.add_parser("args", help="Print lunation index, orbital arguments and correction sums")

    p_diag = sub.add_parser("diag", help="Diagnostics tools (need the 'diagnostics' extra)")
    p_diag.add_argument("tool", choices=["spacing"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    try:
        if args.cmd == "phases":
            return cmd_phases(rest)

        if args.cmd == "classify":
            return cmd_classify(rest)

        if args.cmd == "args":
            return cmd_args(rest)

        if args.cmd == "diag":
            tool_map = {
                "spacing": "moonphase.diagnostics.phase_spacing",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except moonphase.MoonPhaseError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
