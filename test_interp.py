import random

import pytest

from errors import DuplicateXError, InsufficientSamplesError
from gen_cases import poly_eval
from interp import evaluate_at_zero, lagrange_at_zero, lagrange_at_zero_float, round_fraction
from samples import Sample


def pts(*pairs):
    return [Sample(x, y) for x, y in pairs]


def test_quadratic_constant_term():
    # x^2 + 2x + 1
    assert evaluate_at_zero(pts((1, 4), (2, 9), (3, 16))) == 1
    # x^2 + 3
    assert evaluate_at_zero(pts((1, 4), (2, 7), (3, 12))) == 3


def test_single_point_returns_y():
    assert evaluate_at_zero(pts((7, 123456789))) == 123456789
    assert lagrange_at_zero(pts((7, -5))) == (-5, 1)
    assert lagrange_at_zero_float(pts((7, 42))) == 42


def test_negative_and_unordered_x():
    coeffs = [-17, 4, 0, 3]
    xs = [5, -2, 11, 0]
    assert evaluate_at_zero([Sample(x, poly_eval(coeffs, x)) for x in xs]) == -17


def test_exact_on_random_integer_polynomials():
    rng = random.Random(7)
    for k in range(1, 9):
        for _ in range(10):
            coeffs = [rng.randint(-10 ** 30, 10 ** 30) for _ in range(k)]
            xs = rng.sample(range(-50, 50), k)
            points = [Sample(x, poly_eval(coeffs, x)) for x in xs]
            assert lagrange_at_zero(points) == (coeffs[0], 1)
            assert evaluate_at_zero(points) == coeffs[0]


def test_float_agrees_on_small_inputs():
    rng = random.Random(11)
    for k in range(1, 6):
        coeffs = [rng.randint(0, 1000) for _ in range(k)]
        points = [Sample(x, poly_eval(coeffs, x)) for x in range(1, k + 1)]
        assert lagrange_at_zero_float(points) == evaluate_at_zero(points, "exact") == coeffs[0]


def test_float_and_exact_diverge_exact_is_normative():
    # y = 1 + 10^20 x: the +1 is below float64 resolution at this magnitude
    points = pts((1, 10 ** 20 + 1), (2, 2 * 10 ** 20 + 1))
    assert evaluate_at_zero(points, "exact") == 1
    assert evaluate_at_zero(points, "float") == 0


def test_float_overflow():
    points = pts((1, 10 ** 400), (2, 2 * 10 ** 400))
    assert evaluate_at_zero(points) == 0
    with pytest.raises(OverflowError):
        lagrange_at_zero_float(points)


def test_duplicate_x():
    with pytest.raises(DuplicateXError):
        evaluate_at_zero(pts((1, 2), (3, 4), (1, 5)))
    with pytest.raises(DuplicateXError):
        lagrange_at_zero_float(pts((2, 2), (2, 2)))


def test_empty():
    with pytest.raises(InsufficientSamplesError):
        lagrange_at_zero([])


def test_non_integral_result_is_rounded():
    # line through (1, 1), (3, 2): f(0) = 1/2
    assert lagrange_at_zero(pts((1, 1), (3, 2))) == (1, 2)
    assert evaluate_at_zero(pts((1, 1), (3, 2))) == 1
    assert round_fraction(-5, 2) == -3
    assert round_fraction(7, 3) == 2
    assert round_fraction(-7, 3) == -2


def test_unknown_method():
    with pytest.raises(ValueError):
        evaluate_at_zero(pts((1, 1)), "decimal")
