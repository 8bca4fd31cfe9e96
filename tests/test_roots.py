import math

import pytest

from jerkplan.roots import (
    poly_derivative,
    poly_eval,
    poly_monic_derivative,
    pow2,
    shrink_interval,
    solve_cubic,
    solve_quart_monic,
    solve_resolvent,
)


def _residual(coeffs, x):
    return poly_eval(coeffs, x)


def test_pow2():
    assert pow2(3.0) == 9.0
    assert pow2(-2.5) == pow2(2.5)


def test_cubic_three_positive_roots():
    coeffs = [1.0, -6.0, 11.0, -6.0]  # (x-1)(x-2)(x-3)
    roots = solve_cubic(*coeffs)
    assert len(roots) == 3
    assert roots == sorted(roots)
    assert roots == pytest.approx([1.0, 2.0, 3.0])


def test_cubic_negative_roots_dropped():
    coeffs = [1.0, -4.0, 1.0, 6.0]  # (x+1)(x-2)(x-3)
    roots = solve_cubic(*coeffs)
    assert len(roots) == 2
    assert all(r >= 0 for r in roots)
    for r in roots:
        assert abs(_residual(coeffs, r)) < 1e-9


def test_cubic_zero_constant_includes_zero():
    roots = solve_cubic(1.0, -3.0, 2.0, 0.0)  # x(x-1)(x-2)
    assert roots[0] == 0.0
    assert roots == pytest.approx([0.0, 1.0, 2.0])


def test_cubic_one_real_root():
    coeffs = [2.0, 0.0, 1.0, -3.0]
    roots = solve_cubic(*coeffs)
    assert len(roots) == 1
    assert abs(_residual(coeffs, roots[0])) < 1e-9


def test_cubic_degenerates_to_linear_and_quadratic():
    assert solve_cubic(0.0, 0.0, 2.0, -4.0) == pytest.approx([2.0])
    assert solve_cubic(0.0, 1.0, 0.0, -4.0) == pytest.approx([2.0])
    assert solve_cubic(0.0, 1.0, 0.0, 4.0) == []


def test_resolvent_three_roots():
    values, count = solve_resolvent(-6.0, 11.0, -6.0)
    assert count == 3
    for x in values:
        assert abs(x ** 3 - 6.0 * x ** 2 + 11.0 * x - 6.0) < 1e-9
    assert sorted(values) == pytest.approx([1.0, 2.0, 3.0])


def test_resolvent_single_root():
    values, count = solve_resolvent(0.0, 1.0, -2.0)
    assert count == 1
    x = values[0]
    assert abs(x ** 3 + x - 2.0) < 1e-9


def test_quartic_four_positive_roots():
    coeffs = [1.0, -10.0, 35.0, -50.0, 24.0]  # (x-1)(x-2)(x-3)(x-4)
    roots = solve_quart_monic(*coeffs[1:])
    assert len(roots) == 4
    assert roots == sorted(roots)
    assert roots == pytest.approx([1.0, 2.0, 3.0, 4.0])


def test_quartic_roots_are_nonnegative_and_satisfy_polynomial():
    coeffs = [1.0, 0.5, -7.0, -1.5, 9.0]
    roots = solve_quart_monic(*coeffs[1:])
    assert roots
    for r in roots:
        assert r >= 0
        assert abs(_residual(coeffs, r)) < 1e-8


def test_quartic_zero_tail():
    roots = solve_quart_monic(-3.0, 2.0, 0.0, 0.0)  # x^2 (x-1)(x-2)
    assert roots == pytest.approx([0.0, 1.0, 2.0])


def test_quartic_without_real_roots():
    assert solve_quart_monic(0.0, 2.0, 0.0, 1.0) == []


def test_poly_eval_special_points():
    p = [2.0, -1.0, 4.0, 7.0]
    assert poly_eval(p, 0.0) == p[-1]
    assert poly_eval(p, 1.0) == pytest.approx(sum(p))
    assert poly_eval([], 3.0) == 0.0


def test_poly_eval_matches_roots():
    p = [1.0, -6.0, 11.0, -6.0]
    for r in (1.0, 2.0, 3.0):
        assert poly_eval(p, r) == pytest.approx(0.0, abs=1e-12)


def test_poly_derivative_matches_finite_difference():
    p = [3.0, -2.0, 0.5, 1.0]
    deriv = poly_derivative(p)
    assert len(deriv) == len(p) - 1
    h = 1e-6
    for x in (-1.3, 0.4, 2.2):
        numeric = (poly_eval(p, x + h) - poly_eval(p, x - h)) / (2 * h)
        assert poly_eval(deriv, x) == pytest.approx(numeric, rel=1e-6)


def test_poly_monic_derivative_is_scaled_derivative():
    p = [1.0, 4.0, -3.0, 2.0, 5.0]
    monic = poly_monic_derivative(p)
    plain = poly_derivative(p)
    assert monic[0] == 1.0
    assert monic == pytest.approx([c / plain[0] for c in plain])


def test_shrink_interval_finds_root():
    root = shrink_interval([1.0, 0.0, -2.0], 0.0, 2.0)
    assert root == pytest.approx(math.sqrt(2.0), abs=1e-12)


def test_shrink_interval_with_reversed_signs():
    p = [-1.0, 0.0, 2.0]
    root = shrink_interval(p, 0.0, 3.0)
    assert abs(poly_eval(p, root)) < 1e-12
    assert 0.0 <= root <= 3.0


def test_shrink_interval_returns_bound_at_exact_zero():
    assert shrink_interval([1.0, -1.0], 1.0, 5.0) == 1.0
    assert shrink_interval([1.0, -5.0], 1.0, 5.0) == 5.0