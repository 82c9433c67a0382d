#!/usr/bin/env python3
# interp.py
# Lagrange interpolation specialised to the evaluation point x = 0.
#
#   f(0) = sum_i y_i * prod_{j != i} (-x_j) / (x_i - x_j)

import math
from math import gcd
from typing import Sequence, Tuple

import numpy as np

from decode import short_int
from errors import DuplicateXError, InsufficientSamplesError
from samples import Sample

METHODS = ("exact", "float")


def check_points(points: Sequence[Sample]) -> None:
    if len(points) == 0:
        raise InsufficientSamplesError("cannot interpolate through zero points")
    seen = {}
    for i, (x, _) in enumerate(points):
        if x in seen:
            raise DuplicateXError(
                f"x = {short_int(x)} appears at positions {seen[x]} and {i}; x_i - x_j would be 0")
        seen[x] = i

# ---------- Exact ----------

def lagrange_at_zero(points: Sequence[Sample]) -> Tuple[int, int]:
    """
    Exact f(0) as a reduced fraction (numerator, denominator), denominator > 0.

    Each term y_i * prod(-x_j) / prod(x_i - x_j) is folded into the running sum
    over a common denominator, then reduced by gcd so the integers stay small.
    """
    check_points(points)
    num, den = 0, 1
    for i, (xi, yi) in enumerate(points):
        ti, di = yi, 1
        for j, (xj, _) in enumerate(points):
            if j == i: continue
            ti *= -xj
            di *= xi - xj
        num = num * di + ti * den
        den = den * di
        g = gcd(num, den)
        num //= g; den //= g
    if den < 0:
        num, den = -num, -den
    return num, den

def round_fraction(num: int, den: int) -> int:
    """Nearest integer to num/den (den > 0), ties away from zero."""
    q, r = divmod(num, den)
    if 2 * r > den or (2 * r == den and num > 0):
        q += 1
    return q

# ---------- Floating point ----------

def lagrange_at_zero_float(points: Sequence[Sample]) -> int:
    """
    f(0) in float64, rounded half-up. Loses precision once |x|, |y| outgrow
    the 53-bit mantissa; raises OverflowError when they outgrow a double.
    """
    check_points(points)
    xs = np.array([float(x) for x, _ in points], dtype=np.float64)
    ys = np.array([float(y) for _, y in points], dtype=np.float64)
    total = np.float64(0.0)
    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(len(xs)):
            others = np.delete(xs, i)
            total += ys[i] * np.prod(-others / (xs[i] - others))
    if not np.isfinite(total):
        raise OverflowError(f"float64 interpolation is not finite ({total})")
    return int(math.floor(total + 0.5))

# ---------- Dispatch ----------

def evaluate_at_zero(points: Sequence[Sample], method: str = "exact") -> int:
    if method == "exact":
        return round_fraction(*lagrange_at_zero(points))
    if method == "float":
        return lagrange_at_zero_float(points)
    raise ValueError(f"unknown method {method!r}; expected one of {METHODS}")
