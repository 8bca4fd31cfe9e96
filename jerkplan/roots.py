"""Polynomial root finding used by the profile calculations."""

from __future__ import annotations

import math
import sys
from typing import Sequence

__all__ = [
    "pow2",
    "solve_cubic",
    "solve_resolvent",
    "solve_quart_monic",
    "poly_eval",
    "poly_derivative",
    "poly_monic_derivative",
    "shrink_interval",
    "TOLERANCE",
]

_EPS = sys.float_info.epsilon
_COS120 = -0.50
_SIN120 = 0.866025403784438646764

#: Stopping tolerance of the safe Newton method.
TOLERANCE = 1e-14


def pow2(v: float) -> float:
    """Square of ``v``."""
    return v * v


def _sqrt(x: float) -> float:
    # Negative arguments yield NaN, which later comparisons silently discard.
    return math.sqrt(x) if x >= 0.0 else math.nan


def _cbrt(x: float) -> float:
    if x == 0.0 or not math.isfinite(x):
        return x
    y = math.copysign(abs(x) ** (1.0 / 3.0), x)
    return y - (y * y * y - x) / (3.0 * y * y)


def _positive_sorted(values: list[float]) -> list[float]:
    return sorted(value for value in values if value >= 0)


def solve_cubic(a: float, b: float, c: float, d: float) -> list[float]:
    """Non-negative real roots of ``a*x^3 + b*x^2 + c*x + d = 0``, sorted."""
    roots: list[float] = []

    if abs(d) < _EPS:
        roots.append(0.0)
        a, b, c, d = 0.0, a, b, c

    if abs(a) < _EPS:
        if abs(b) < _EPS:
            if abs(c) > _EPS:
                roots.append(-d / c)
        else:
            discriminant = c * c - 4 * b * d
            if discriminant >= 0:
                inv2b = 1.0 / (2 * b)
                y = math.sqrt(discriminant)
                roots.append((-c + y) * inv2b)
                roots.append((-c - y) * inv2b)
        return _positive_sorted(roots)

    inva = 1.0 / a
    invaa = inva * inva
    bb = b * b
    bover3a = b * inva / 3
    p = (a * c - bb / 3) * invaa
    halfq = (2 * bb * b - 9 * a * b * c + 27 * a * a * d) / 54 * invaa * inva
    yy = p * p * p / 27 + halfq * halfq

    if yy > _EPS:
        y = math.sqrt(yy)
        uuu = -halfq + y
        vvv = -halfq - y
        www = uuu if abs(uuu) > abs(vvv) else vvv
        w = _cbrt(www)
        roots.append(w - p / (3 * w) - bover3a)
    elif yy < -_EPS:
        x = -halfq
        y = math.sqrt(-yy)
        if abs(x) > _EPS:
            theta = math.atan(y / x) if x > 0.0 else math.atan(y / x) + math.pi
            r = math.sqrt(x * x - yy)
        else:
            theta = math.pi / 2
            r = y
        theta /= 3
        r = 2 * _cbrt(r)
        ux = math.cos(theta) * r
        uyi = math.sin(theta) * r
        roots.append(ux - bover3a)
        roots.append(ux * _COS120 - uyi * _SIN120 - bover3a)
        roots.append(ux * _COS120 + uyi * _SIN120 - bover3a)
    else:
        w = 2 * _cbrt(-halfq)
        roots.append(w - bover3a)
        roots.append(w * _COS120 - bover3a)

    return _positive_sorted(roots)


def solve_resolvent(a: float, b: float, c: float) -> tuple[list[float], int]:
    """Solve the resolvent cubic ``x^3 + a*x^2 + b*x + c = 0`` of a quartic.

    Returns three values and the number of distinct real zeros among them
    (3, 2 or 1). With one real zero, only the first value is a root.
    """
    a /= 3
    a2 = a * a
    q = a2 - b / 3
    r = (a * (2 * a2 - b) + c) / 2
    r2 = r * r
    q3 = q * q * q

    if r2 < q3:
        qsqrt = math.sqrt(q)
        t = min(max(r / (q * qsqrt), -1.0), 1.0)
        q = -2 * qsqrt
        theta = math.acos(t) / 3
        ux = math.cos(theta) * q
        uyi = math.sin(theta) * q
        return [
            ux - a,
            ux * _COS120 - uyi * _SIN120 - a,
            ux * _COS120 + uyi * _SIN120 - a,
        ], 3

    big_a = -_cbrt(abs(r) + math.sqrt(r2 - q3))
    if r < 0.0:
        big_a = -big_a
    big_b = 0.0 if big_a == 0.0 else q / big_a

    x0 = (big_a + big_b) - a
    x1 = -(big_a + big_b) / 2 - a
    x2 = math.sqrt(3) * (big_a - big_b) / 2
    if abs(x2) < _EPS:
        return [x0, x1, x1], 2
    return [x0, x1, x2], 1


def solve_quart_monic(a: float, b: float, c: float, d: float) -> list[float]:
    """Non-negative real roots of ``x^4 + a*x^3 + b*x^2 + c*x + d = 0``, sorted."""
    roots: list[float] = []

    if abs(d) < _EPS:
        if abs(c) < _EPS:
            roots.append(0.0)
            disc = a * a - 4 * b
            if abs(disc) < _EPS:
                roots.append(-a / 2)
            elif disc > 0.0:
                sqrt_disc = math.sqrt(disc)
                roots.append((-a - sqrt_disc) / 2)
                roots.append((-a + sqrt_disc) / 2)
            return _positive_sorted(roots)

        if abs(a) < _EPS and abs(b) < _EPS:
            roots.append(0.0)
            roots.append(-_cbrt(c))
            return _positive_sorted(roots)

    a3 = -b
    b3 = a * c - 4 * d
    c3 = -a * a * d - c * c + 4 * b * d

    x3, number_zeroes = solve_resolvent(a3, b3, c3)

    y = x3[0]
    if number_zeroes != 1:
        if abs(x3[1]) > abs(y):
            y = x3[1]
        if abs(x3[2]) > abs(y):
            y = x3[2]

    disc = y * y - 4 * d
    if abs(disc) < _EPS:
        q1 = q2 = y / 2
        disc = a * a - 4 * (b - y)
        if abs(disc) < _EPS:
            p1 = p2 = a / 2
        else:
            sqrt_disc = _sqrt(disc)
            p1 = (a + sqrt_disc) / 2
            p2 = (a - sqrt_disc) / 2
    else:
        sqrt_disc = _sqrt(disc)
        q1 = (y + sqrt_disc) / 2
        q2 = (y - sqrt_disc) / 2
        p1 = (a * q1 - c) / (q1 - q2)
        p2 = (c - a * q2) / (q1 - q2)

    eps = 16 * _EPS
    for p_k, q_k in ((p1, q1), (p2, q2)):
        disc = p_k * p_k - 4 * q_k
        if abs(disc) < eps:
            roots.append(-p_k / 2)
        elif disc > 0.0:
            sqrt_disc = math.sqrt(disc)
            roots.append((-p_k - sqrt_disc) / 2)
            roots.append((-p_k + sqrt_disc) / 2)

    return _positive_sorted(roots)


def poly_eval(p: Sequence[float], x: float) -> float:
    """Evaluate a polynomial given by coefficients, highest order first."""
    if not p:
        return 0.0
    if abs(x) < _EPS:
        return float(p[-1])

    result = 0.0
    if x == 1.0:
        for coefficient in reversed(p):
            result += coefficient
        return result

    xn = 1.0
    for coefficient in reversed(p):
        result += coefficient * xn
        xn *= x
    return result


def poly_derivative(coeffs: Sequence[float]) -> list[float]:
    """Coefficients of the derivative polynomial, highest order first."""
    order = len(coeffs) - 1
    return [(order - i) * coefficient for i, coefficient in enumerate(coeffs[:-1])]


def poly_monic_derivative(monic_coeffs: Sequence[float]) -> list[float]:
    """Derivative of a monic polynomial, normalised to be monic again."""
    order = len(monic_coeffs) - 1
    derivative = [1.0]
    derivative.extend(
        (order - i) * monic_coeffs[i] / order for i in range(1, order)
    )
    return derivative


def shrink_interval(p: Sequence[float], low: float, high: float, max_iterations: int = 128) -> float:
    """Find a single zero of ``p`` inside ``[low, high]`` with a safe Newton method.

    The polynomial must change sign between ``low`` and ``high``.
    """
    fl = poly_eval(p, low)
    fh = poly_eval(p, high)
    if fl == 0.0:
        return low
    if fh == 0.0:
        return high
    if fl > 0.0:
        low, high = high, low

    rts = (low + high) / 2
    dxold = abs(high - low)
    dx = dxold
    deriv = poly_derivative(p)
    f = poly_eval(p, rts)
    df = poly_eval(deriv, rts)

    for _ in range(max_iterations):
        if ((rts - high) * df - f) * ((rts - low) * df - f) > 0.0 or abs(2 * f) > abs(dxold * df):
            dxold = dx
            dx = (high - low) / 2
            rts = low + dx
            if low == rts:
                break
        else:
            if df == 0.0:
                # Only reachable with f == 0: rts is already an exact root.
                break
            dxold = dx
            dx = f / df
            previous = rts
            rts -= dx
            if previous == rts:
                break

        if abs(dx) < TOLERANCE:
            break

        f = poly_eval(p, rts)
        df = poly_eval(deriv, rts)
        if f < 0.0:
            low = rts
        else:
            high = rts

    return rts