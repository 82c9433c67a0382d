#!/usr/bin/env python3
# gen_cases.py
# Generate input documents: random integer polynomials sampled at distinct x,
# each y written in a random base. keys.secret holds the expected f(0).

import argparse
import json
import random
from typing import Any, Dict, List, Optional

from decode import MAX_BASE, MIN_BASE, encode_value


def poly_eval(coeffs: List[int], x: int) -> int:
    y = 0
    for c in reversed(coeffs):
        y = y * x + c
    return y

def rand_poly(k: int, coeff_bits: int, rng=None) -> List[int]:
    """Degree k-1, non-negative coefficients below 2**coeff_bits."""
    if rng is None:
        rng = random
    return [rng.randrange(1 << coeff_bits) for _ in range(k)]

def gen_case(k: int, extra: int = 0, coeff_bits: int = 32, rng=None) -> Dict[str, Any]:
    """
    One case object with k + extra samples at x = 1..k+extra.

    Positive x and non-negative coefficients keep every y non-negative, so
    each can be encoded without a sign.
    """
    if rng is None:
        rng = random
    coeffs = rand_poly(k, coeff_bits, rng)
    n = k + extra
    case: Dict[str, Any] = {"keys": {"n": n, "k": k, "secret": str(coeffs[0])}}
    for x in range(1, n + 1):
        base = rng.randint(MIN_BASE, MAX_BASE)
        case[str(x)] = {"base": str(base), "value": encode_value(poly_eval(coeffs, x), base)}
    return case

def gen_document(cases: int, k: int, extra: int = 0, coeff_bits: int = 32,
                 seed: Optional[int] = None) -> List[Dict[str, Any]]:
    rng = random.Random(seed)
    return [gen_case(k, extra, coeff_bits, rng) for _ in range(cases)]


def main():
    ap = argparse.ArgumentParser(description="Generate constant-term recovery test cases.")
    ap.add_argument("--cases", type=int, default=2)
    ap.add_argument("--k", type=int, default=3)
    ap.add_argument("--extra", type=int, default=1, help="samples beyond k per case")
    ap.add_argument("--coeff-bits", type=int, default=32)
    ap.add_argument("--seed", type=int, default=None,
                    help="Random seed for reproducibility.")
    ap.add_argument("--out", type=str, default=None, help="output file (default: stdout)")
    args = ap.parse_args()

    if args.k < 1 or args.extra < 0 or args.coeff_bits < 1:
        raise SystemExit("Require k >= 1, extra >= 0, coeff-bits >= 1.")

    doc = gen_document(args.cases, args.k, args.extra, args.coeff_bits, args.seed)
    text = json.dumps(doc, indent=2)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        print(f"[info] wrote {args.cases} case(s) to {args.out}")
    else:
        print(text)


if __name__ == "__main__":
    main()
