"""Constant-jerk integration and number formatting helpers."""

from __future__ import annotations

from typing import Iterable

__all__ = ["integrate", "join"]


def integrate(t: float, p0: float, v0: float, a0: float, j: float) -> tuple[float, float, float]:
    """Integrate with constant jerk for duration ``t``.

    Returns the new position, velocity and acceleration.
    """
    return (
        p0 + t * (v0 + t * (a0 / 2 + t * j / 6)),
        v0 + t * (a0 + t * j / 2),
        a0 + t * j,
    )


def join(values: Iterable[float], high_precision: bool = False) -> str:
    """Join numbers with ", " using 6 (or 16 when high precision) significant digits."""
    spec = ".16g" if high_precision else ".6g"
    return ", ".join(format(value, spec) for value in values)