#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Recover the constant term f(0) of each test case in a JSON input file.

Each case gives k (points needed) and samples x -> {base, value}, where value
is a digit string in radix `base` (2..36); a bare JSON integer is read as its
decimal digits. The first k samples that decode, in
file order, are interpolated (Lagrange at x = 0).

Options (defaults in parentheses):
  --method (exact)      exact rational arithmetic, or float (float64, rounded)
  --cross-check         with --method exact, also run float64 and warn on mismatch
  --workers (1)         thread pool size; output stays in input order
  --json                dump every result as one JSON document
  --strict              exit 1 if any case failed
  Verbose logging: -v / --verbose

Exit codes: 0 ok, 1 unusable input (or a failed case with --strict), 2 usage.
"""

import argparse
import json
import sys
from typing import List, Optional

from errors import MalformedRecordError
from interp import METHODS
from records import load_cases
from runner import Result, run_batch


# ---- Utility ----
def vprint(verbose: bool, *args, **kwargs):
    if verbose:
        print(*args, **kwargs)


# ---- Reporting ----
def report_text(results: List[Result], *, cross_check: bool = False, verbose: bool = False,
                out=None, err=None) -> None:
    out = out or sys.stdout
    err = err or sys.stderr
    for r in results:
        print(f"--- Test case {r.case_index} ---", file=out)
        for s in r.samples:
            print(f"Decoded sample: x = {s.x}, y = {s.y}", file=out)
        for s in r.skipped:
            print(f"[warn] case {r.case_index}: skipping sample x={s.raw[0]!r}: {s.reason}", file=err)
        if r.declared_n is not None and r.declared_n != len(r.samples) + len(r.skipped):
            vprint(verbose, f"[info] case {r.case_index}: keys.n={r.declared_n} but "
                            f"{len(r.samples) + len(r.skipped)} samples supplied", file=out)
        if not r.ok:
            print(f"[error] case {r.case_index} failed [{r.stage}]: {r.error}", file=err)
            continue
        print(f"Constant term (case {r.case_index}): {r.constant_term}", file=out)
        if cross_check:
            if r.float_check is None:
                print(f"[warn] case {r.case_index}: float64 cross-check overflowed", file=err)
            elif r.diverged:
                print(f"[warn] case {r.case_index}: float64 gives {r.float_check}, "
                      f"exact gives {r.constant_term}", file=err)
            else:
                vprint(verbose, f"[info] case {r.case_index}: float64 cross-check agrees", file=out)

def report_json(results: List[Result], out=None) -> None:
    out = out or sys.stdout
    print(json.dumps([r.to_record() for r in results], indent=2), file=out)


# ---- Driver ----
def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(
        description="Recover polynomial constant terms from base-encoded sample points."
    )
    ap.add_argument("input", help="path to the JSON test-case file")
    ap.add_argument("--method", choices=METHODS, default="exact",
                    help="interpolation arithmetic (default: exact)")
    ap.add_argument("--cross-check", action="store_true",
                    help="also run the float64 path and warn when it disagrees")
    ap.add_argument("--workers", type=int, default=1, help="thread pool size (default: 1)")
    ap.add_argument("--json", action="store_true", help="print results as JSON")
    ap.add_argument("--strict", action="store_true", help="exit 1 if any case failed")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable verbose diagnostics.")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.workers < 1:
        print("[error] --workers must be >= 1", file=sys.stderr)
        return 2

    # decoded values and constant terms are printed in full, however many digits
    if hasattr(sys, "set_int_max_str_digits"):
        sys.set_int_max_str_digits(0)

    try:
        cases = load_cases(args.input)
    except MalformedRecordError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    vprint(args.verbose, f"[info] {len(cases)} test case(s), method={args.method}, "
                         f"workers={args.workers}", file=sys.stderr)
    results = run_batch(cases, method=args.method, cross_check=args.cross_check,
                        workers=args.workers)

    if args.json:
        report_json(results)
    else:
        report_text(results, cross_check=args.cross_check and args.method == "exact",
                    verbose=args.verbose)

    failed = sum(1 for r in results if not r.ok)
    vprint(args.verbose, f"[info] {len(results) - failed} reported, {failed} failed", file=sys.stderr)
    if args.strict and failed:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
