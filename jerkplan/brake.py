"""Pre-trajectories that bring a state back within its kinematic limits."""

from __future__ import annotations

from dataclasses import dataclass, field

from .kinematics import integrate

__all__ = ["BrakeProfile"]


def _pair() -> list[float]:
    return [0.0, 0.0]


@dataclass
class BrakeProfile:
    """A two-step constant-jerk profile run before the main profile."""

    duration: float = 0.0
    t: list[float] = field(default_factory=_pair)
    j: list[float] = field(default_factory=_pair)
    a: list[float] = field(default_factory=_pair)
    v: list[float] = field(default_factory=_pair)
    p: list[float] = field(default_factory=_pair)

    def finalize(self, ps: float, vs: float, as_: float) -> tuple[float, float, float]:
        """Integrate a third-order brake along the given state.

        Records the start state of each step and returns the state after braking.
        """
        if self.t[0] <= 0.0 and self.t[1] <= 0.0:
            self.duration = 0.0
            return ps, vs, as_

        self.duration = self.t[0]
        self.p[0], self.v[0], self.a[0] = ps, vs, as_
        ps, vs, as_ = integrate(self.t[0], ps, vs, as_, self.j[0])

        if self.t[1] > 0.0:
            self.duration += self.t[1]
            self.p[1], self.v[1], self.a[1] = ps, vs, as_
            ps, vs, as_ = integrate(self.t[1], ps, vs, as_, self.j[1])

        return ps, vs, as_

    def finalize_second_order(self, ps: float, vs: float, as_: float) -> tuple[float, float, float]:
        """Integrate a second-order brake with its constant acceleration ``a[0]``."""
        if self.t[0] <= 0.0:
            self.duration = 0.0
            return ps, vs, as_

        self.duration = self.t[0]
        self.p[0], self.v[0] = ps, vs
        return integrate(self.t[0], ps, vs, self.a[0], 0.0)