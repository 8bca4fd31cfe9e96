"""Single-DoF kinematic profiles made of seven constant-jerk steps."""

from __future__ import annotations

import copy
import math
import sys
from dataclasses import dataclass, field
from enum import Enum
from itertools import accumulate
from typing import Optional

from .brake import BrakeProfile
from .kinematics import integrate
from .roots import solve_cubic

__all__ = ["Bound", "ReachedLimits", "Direction", "ControlSigns", "Profile"]

_EPS = sys.float_info.epsilon

_V_EPS = 1e-12
_A_EPS = 1e-12
_J_EPS = 1e-12

_P_PRECISION = 1e-8
_V_PRECISION = 1e-8
_A_PRECISION = 1e-10
_T_PRECISION = 1e-12

_T_MAX = 1e12


@dataclass
class Bound:
    """Extreme positions of a profile and the times they are reached."""

    min: float = math.inf
    max: float = -math.inf
    t_min: float = 0.0
    t_max: float = 0.0


class ReachedLimits(Enum):
    """Which kinematic limits a profile reaches."""

    ACC0_ACC1_VEL = "ACC0_ACC1_VEL"
    VEL = "VEL"
    ACC0 = "ACC0"
    ACC1 = "ACC1"
    ACC0_ACC1 = "ACC0_ACC1"
    ACC0_VEL = "ACC0_VEL"
    ACC1_VEL = "ACC1_VEL"
    NONE = "NONE"


class Direction(Enum):
    """Direction of the limiting velocity or acceleration."""

    UP = "UP"
    DOWN = "DOWN"


class ControlSigns(Enum):
    """Sign pattern of the control signal over the profile steps."""

    UDDU = "UDDU"
    UDUD = "UDUD"


_VEL_LIMITS = frozenset(
    {ReachedLimits.ACC0_ACC1_VEL, ReachedLimits.ACC0_VEL, ReachedLimits.ACC1_VEL, ReachedLimits.VEL}
)
_ZERO_A3_LIMITS = _VEL_LIMITS | {ReachedLimits.ACC0_ACC1}
_ACC0_LIMITS = frozenset({ReachedLimits.ACC0, ReachedLimits.ACC0_ACC1})
_ACC1_LIMITS = frozenset({ReachedLimits.ACC1, ReachedLimits.ACC0_ACC1})


def _seven() -> list[float]:
    return [0.0] * 7


def _eight() -> list[float]:
    return [0.0] * 8


def _signed_steps(control_signs: ControlSigns, t: list[float], up: float, down: float) -> list[float]:
    if control_signs is ControlSigns.UDDU:
        pattern = [up, 0.0, down, 0.0, down, 0.0, up]
    else:
        pattern = [up, 0.0, down, 0.0, up, 0.0, down]
    return [value if duration > 0 else 0.0 for value, duration in zip(pattern, t)]


def _time_sums(t: list[float]) -> Optional[list[float]]:
    if any(duration < 0 for duration in t):
        return None
    return list(accumulate(t))


def _check_position_extremum(t_ext: float, t_sum: float, t: float, p: float, v: float,
                             a: float, j: float, ext: Bound) -> None:
    if 0 < t_ext < t:
        p_ext, _, a_ext = integrate(t_ext, p, v, a, j)
        if a_ext > 0 and p_ext < ext.min:
            ext.min = p_ext
            ext.t_min = t_sum + t_ext
        elif a_ext < 0 and p_ext > ext.max:
            ext.max = p_ext
            ext.t_max = t_sum + t_ext


def _check_step_for_position_extremum(t_sum: float, t: float, p: float, v: float,
                                      a: float, j: float, ext: Bound) -> None:
    if p < ext.min:
        ext.min = p
        ext.t_min = t_sum
    if p > ext.max:
        ext.max = p
        ext.t_max = t_sum

    if j != 0:
        disc = a * a - 2 * j * v
        if abs(disc) < _EPS:
            _check_position_extremum(-a / j, t_sum, t, p, v, a, j, ext)
        elif disc > 0.0:
            root = math.sqrt(disc)
            _check_position_extremum((-a - root) / j, t_sum, t, p, v, a, j, ext)
            _check_position_extremum((-a + root) / j, t_sum, t, p, v, a, j, ext)


@dataclass
class Profile:
    """A single-DoF kinematic profile with position, velocity, acceleration and jerk."""

    t: list[float] = field(default_factory=_seven)
    t_sum: list[float] = field(default_factory=_seven)
    j: list[float] = field(default_factory=_seven)
    a: list[float] = field(default_factory=_eight)
    v: list[float] = field(default_factory=_eight)
    p: list[float] = field(default_factory=_eight)
    brake: BrakeProfile = field(default_factory=BrakeProfile)
    accel: BrakeProfile = field(default_factory=BrakeProfile)
    pf: float = 0.0
    vf: float = 0.0
    af: float = 0.0
    limits: ReachedLimits = ReachedLimits.NONE
    direction: Direction = Direction.UP
    control_signs: ControlSigns = ControlSigns.UDDU

    # Third-order velocity interface

    def check_for_velocity(self, control_signs: ControlSigns, limits: ReachedLimits,
                           jf: float, a_max: float, a_min: float) -> bool:
        """Integrate the profile with jerk ``jf`` and check it reaches the target velocity."""
        t = self.t
        sums = _time_sums(t)
        if sums is None:
            return False
        self.t_sum = sums

        if limits is ReachedLimits.ACC0 and t[1] < _EPS:
            return False
        if sums[-1] > _T_MAX:
            return False

        self.j = _signed_steps(control_signs, t, jf, -jf)
        j, a, v, p = self.j, self.a, self.v, self.p
        for i in range(7):
            a[i + 1] = a[i] + t[i] * j[i]
            v[i + 1] = v[i] + t[i] * (a[i] + t[i] * j[i] / 2)
            p[i + 1] = p[i] + t[i] * (v[i] + t[i] * (a[i] / 2 + t[i] * j[i] / 6))

        self.control_signs = control_signs
        self.limits = limits

        self.direction = Direction.UP if a_max > 0 else Direction.DOWN
        up = self.direction is Direction.UP
        a_upp = (a_max if up else a_min) + _A_EPS
        a_low = (a_min if up else a_max) - _A_EPS

        return (
            abs(v[-1] - self.vf) < _V_PRECISION
            and abs(a[-1] - self.af) < _A_PRECISION
            and all(a_low <= a[k] <= a_upp for k in (1, 3, 5))
        )

    def check_for_velocity_with_timing(self, control_signs: ControlSigns, limits: ReachedLimits,
                                       tf: float, jf: float, a_max: float, a_min: float,
                                       j_max: Optional[float] = None) -> bool:
        """Like :meth:`check_for_velocity`, also bounding ``jf`` by ``j_max`` when given."""
        if j_max is not None and not abs(jf) < abs(j_max) + _J_EPS:
            return False
        return self.check_for_velocity(control_signs, limits, jf, a_max, a_min)

    def set_boundary_for_velocity(self, p0: float, v0: float, a0: float, vf: float, af: float) -> None:
        """Set the start state and the target velocity and acceleration."""
        self.a[0] = a0
        self.v[0] = v0
        self.p[0] = p0
        self.af = af
        self.vf = vf

    # Second-order velocity interface

    def check_for_second_order_velocity(self, control_signs: ControlSigns, limits: ReachedLimits,
                                        a_up: float) -> bool:
        """Check a single constant-acceleration step reaches the target velocity."""
        t = self.t
        if t[1] < 0.0:
            return False

        self.t_sum = [0.0, t[1], t[1], t[1], t[1], t[1], t[1]]
        if self.t_sum[-1] > _T_MAX:
            return False

        self.j = _seven()
        self.a = [0.0, a_up if t[1] > 0 else 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, self.af]
        a, v, p = self.a, self.v, self.p
        for i in range(7):
            v[i + 1] = v[i] + t[i] * a[i]
            p[i + 1] = p[i] + t[i] * (v[i] + t[i] * a[i] / 2)

        self.control_signs = control_signs
        self.limits = limits
        self.direction = Direction.UP if a_up > 0 else Direction.DOWN

        return abs(v[-1] - self.vf) < _V_PRECISION

    def check_for_second_order_velocity_with_timing(self, control_signs: ControlSigns,
                                                    limits: ReachedLimits, tf: float, a_up: float,
                                                    a_max: Optional[float] = None,
                                                    a_min: Optional[float] = None) -> bool:
        """Like :meth:`check_for_second_order_velocity`, bounding ``a_up`` when limits are given."""
        if a_max is not None and a_min is not None:
            if not (a_min - _A_EPS < a_up < a_max + _A_EPS):
                return False
        return self.check_for_second_order_velocity(control_signs, limits, a_up)

    # Third-order position interface

    def check(self, control_signs: ControlSigns, limits: ReachedLimits, jf: float,
              v_max: float, v_min: float, a_max: float, a_min: float,
              set_limits: bool = False) -> bool:
        """Integrate the profile with jerk ``jf`` and check it reaches the target state within limits."""
        t = self.t
        sums = _time_sums(t)
        if sums is None:
            return False
        self.t_sum = sums

        if limits in _VEL_LIMITS and t[3] < _EPS:
            return False
        if limits in _ACC0_LIMITS and t[1] < _EPS:
            return False
        if limits in _ACC1_LIMITS and t[5] < _EPS:
            return False
        if sums[-1] > _T_MAX:
            return False

        self.j = _signed_steps(control_signs, t, jf, -jf)

        self.direction = Direction.UP if v_max > 0 else Direction.DOWN
        up = self.direction is Direction.UP
        v_upp = (v_max if up else v_min) + _V_EPS
        v_low = (v_min if up else v_max) - _V_EPS

        j, a, v, p = self.j, self.a, self.v, self.p
        for i in range(7):
            a[i + 1] = a[i] + t[i] * j[i]
            v[i + 1] = v[i] + t[i] * (a[i] + t[i] * j[i] / 2)
            p[i + 1] = p[i] + t[i] * (v[i] + t[i] * (a[i] / 2 + t[i] * j[i] / 6))

            if limits in _ZERO_A3_LIMITS and i == 2:
                a[3] = 0.0

            if set_limits:
                if limits is ReachedLimits.ACC1 and i == 2:
                    a[3] = a_min
                if limits is ReachedLimits.ACC0_ACC1:
                    if i == 0:
                        a[1] = a_max
                    if i == 4:
                        a[5] = a_min

            if i > 1 and a[i + 1] * a[i] < -_EPS:
                if j[i] == 0:
                    return False
                v_a_zero = v[i] - (a[i] * a[i]) / (2 * j[i])
                if v_a_zero > v_upp or v_a_zero < v_low:
                    return False

        self.control_signs = control_signs
        self.limits = limits

        a_upp = (a_max if up else a_min) + _A_EPS
        a_low = (a_min if up else a_max) - _A_EPS

        return (
            abs(p[-1] - self.pf) < _P_PRECISION
            and abs(v[-1] - self.vf) < _V_PRECISION
            and abs(a[-1] - self.af) < _A_PRECISION
            and all(a_low <= a[k] <= a_upp for k in (1, 3, 5))
            and all(v_low <= v[k] <= v_upp for k in (3, 4, 5, 6))
        )

    def check_with_timing(self, control_signs: ControlSigns, limits: ReachedLimits, tf: float,
                          jf: float, v_max: float, v_min: float, a_max: float, a_min: float,
                          j_max: Optional[float] = None) -> bool:
        """Like :meth:`check`, also bounding ``jf`` by ``j_max`` when given."""
        if j_max is not None and not abs(jf) < abs(j_max) + _J_EPS:
            return False
        return self.check(control_signs, limits, jf, v_max, v_min, a_max, a_min)

    def set_boundary(self, p0: float, v0: float, a0: float, pf: float, vf: float, af: float) -> None:
        """Set the start and target states."""
        self.a[0] = a0
        self.v[0] = v0
        self.p[0] = p0
        self.af = af
        self.vf = vf
        self.pf = pf

    def set_boundary_from(self, other: Profile) -> None:
        """Take start and target states and brake sub-profiles from another profile."""
        self.a[0] = other.a[0]
        self.v[0] = other.v[0]
        self.p[0] = other.p[0]
        self.af = other.af
        self.vf = other.vf
        self.pf = other.pf
        self.brake = copy.deepcopy(other.brake)
        self.accel = copy.deepcopy(other.accel)

    # Second-order position interface

    def check_for_second_order(self, control_signs: ControlSigns, limits: ReachedLimits,
                               a_up: float, a_down: float, v_max: float, v_min: float) -> bool:
        """Integrate piecewise constant acceleration and check the target state within limits."""
        t = self.t
        sums = _time_sums(t)
        if sums is None:
            return False
        self.t_sum = sums
        if sums[-1] > _T_MAX:
            return False

        self.j = _seven()
        self.a = _signed_steps(control_signs, t, a_up, a_down) + [self.af]

        self.direction = Direction.UP if v_max > 0 else Direction.DOWN
        up = self.direction is Direction.UP
        v_upp = (v_max if up else v_min) + _V_EPS
        v_low = (v_min if up else v_max) - _V_EPS

        a, v, p = self.a, self.v, self.p
        for i in range(7):
            v[i + 1] = v[i] + t[i] * a[i]
            p[i + 1] = p[i] + t[i] * (v[i] + t[i] * a[i] / 2)

        self.control_signs = control_signs
        self.limits = limits

        return (
            abs(p[-1] - self.pf) < _P_PRECISION
            and abs(v[-1] - self.vf) < _V_PRECISION
            and all(v_low <= v[k] <= v_upp for k in (2, 3, 4, 5, 6))
        )

    def check_for_second_order_with_timing(self, control_signs: ControlSigns, limits: ReachedLimits,
                                           tf: float, a_up: float, a_down: float, v_max: float,
                                           v_min: float, a_max: Optional[float] = None,
                                           a_min: Optional[float] = None) -> bool:
        """Like :meth:`check_for_second_order`, bounding both accelerations when limits are given."""
        if a_max is not None and a_min is not None:
            if not (a_min - _A_EPS < a_up < a_max + _A_EPS and a_min - _A_EPS < a_down < a_max + _A_EPS):
                return False
        return self.check_for_second_order(control_signs, limits, a_up, a_down, v_max, v_min)

    # First-order position interface

    def check_for_first_order(self, control_signs: ControlSigns, limits: ReachedLimits,
                              v_up: float) -> bool:
        """Check a single constant-velocity step reaches the target position."""
        t = self.t
        if t[3] < 0.0:
            return False

        self.t_sum = [0.0, 0.0, 0.0, t[3], t[3], t[3], t[3]]
        if self.t_sum[-1] > _T_MAX:
            return False

        self.j = _seven()
        self.a = [0.0] * 7 + [self.af]
        self.v = [0.0, 0.0, 0.0, v_up if t[3] > 0 else 0.0, 0.0, 0.0, 0.0, self.vf]
        a, v, p = self.a, self.v, self.p
        for i in range(7):
            p[i + 1] = p[i] + t[i] * (v[i] + t[i] * a[i] / 2)

        self.control_signs = control_signs
        self.limits = limits
        self.direction = Direction.UP if v_up > 0 else Direction.DOWN

        return abs(p[-1] - self.pf) < _P_PRECISION

    def check_for_first_order_with_timing(self, control_signs: ControlSigns, limits: ReachedLimits,
                                          tf: float, v_up: float, v_max: Optional[float] = None,
                                          v_min: Optional[float] = None) -> bool:
        """Like :meth:`check_for_first_order`, bounding ``v_up`` when limits are given."""
        if v_max is not None and v_min is not None:
            if not (v_min - _V_EPS < v_up < v_max + _V_EPS):
                return False
        return self.check_for_first_order(control_signs, limits, v_up)

    # Secondary features

    def get_position_extrema(self) -> Bound:
        """Minimum and maximum position over the brake and main profile."""
        extrema = Bound()
        brake = self.brake

        if brake.duration > 0.0 and brake.t[0] > 0.0:
            _check_step_for_position_extremum(0.0, brake.t[0], brake.p[0], brake.v[0],
                                              brake.a[0], brake.j[0], extrema)
            if brake.t[1] > 0.0:
                _check_step_for_position_extremum(brake.t[0], brake.t[1], brake.p[1], brake.v[1],
                                                  brake.a[1], brake.j[1], extrema)

        starts = [0.0] + self.t_sum[:-1]
        for start, t, p, v, a, j in zip(starts, self.t, self.p, self.v, self.a, self.j):
            _check_step_for_position_extremum(start + brake.duration, t, p, v, a, j, extrema)

        end_time = self.t_sum[-1] + brake.duration
        if self.pf < extrema.min:
            extrema.min = self.pf
            extrema.t_min = end_time
        if self.pf > extrema.max:
            extrema.max = self.pf
            extrema.t_max = end_time

        return extrema

    def get_first_state_at_position(self, pt: float, time_after: float = 0.0) -> Optional[float]:
        """First time at or after ``time_after`` at which the position equals ``pt``, or None."""
        t_cum = 0.0
        for t, p, v, a, j in zip(self.t, self.p, self.v, self.a, self.j):
            if t == 0.0:
                continue

            if abs(p - pt) < _EPS and t_cum >= time_after:
                return t_cum

            for root in solve_cubic(j / 6, a / 2, v, p - pt):
                if 0 < root and time_after - t_cum <= root <= t:
                    return root + t_cum

            t_cum += t

        total = self.t_sum[-1]
        if (self.t[6] > 0.0 or total == 0.0) and abs(self.pf - pt) < 1e-9 and total >= time_after:
            return total

        return None

    def to_string(self) -> str:
        """Short name such as ``UP_ACC0_UDDU`` for the profile's shape."""
        return f"{self.direction.value}_{self.limits.value}_{self.control_signs.value}"