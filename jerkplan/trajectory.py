"""The multi-DoF trajectory made of per-section profiles."""

from __future__ import annotations

import copy
from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Sequence

from .kinematics import integrate
from .profile import Bound, Profile

__all__ = ["TrajectoryState", "Trajectory"]


@dataclass
class TrajectoryState:
    """Kinematic state, jerk and section of a trajectory at one instant."""

    position: list[float]
    velocity: list[float]
    acceleration: list[float]
    jerk: list[float]
    section: int


_Segment = tuple[float, float, float, float, float]


class Trajectory:
    """Time-parametrised trajectory over all degrees of freedom."""

    def __init__(
        self,
        degrees_of_freedom: int,
        profiles: Optional[Sequence[Sequence[Profile]]] = None,
        duration: float = 0.0,
        cumulative_times: Optional[Sequence[float]] = None,
        independent_min_durations: Optional[Sequence[float]] = None,
    ) -> None:
        self.degrees_of_freedom = degrees_of_freedom
        if profiles is None:
            self.profiles = [[Profile() for _ in range(degrees_of_freedom)]]
        else:
            self.profiles = [list(section) for section in profiles]
        self.duration = duration
        self.cumulative_times = list(cumulative_times) if cumulative_times is not None else [duration]
        if independent_min_durations is None:
            self.independent_min_durations = [0.0] * degrees_of_freedom
        else:
            self.independent_min_durations = list(independent_min_durations)
        self.position_extrema = [Bound() for _ in range(degrees_of_freedom)]

    def _segments(self, time: float) -> tuple[int, Iterator[_Segment]]:
        """Section index and, per DoF, the elapsed time and start state to integrate from."""
        if time >= self.duration:
            section = len(self.profiles)
            last = self.profiles[-1]

            def after_end() -> Iterator[_Segment]:
                for profile in last:
                    if len(self.profiles) > 1:
                        t_pre = self.cumulative_times[-2]
                    else:
                        t_pre = profile.brake.duration
                    t_diff = time - (t_pre + profile.t_sum[-1])
                    yield t_diff, profile.p[-1], profile.v[-1], profile.a[-1], 0.0

            return section, after_end()

        section = bisect_right(self.cumulative_times, time)
        t_diff = time - self.cumulative_times[section - 1] if section > 0 else time

        def within() -> Iterator[_Segment]:
            for profile in self.profiles[section]:
                t_dof = t_diff
                brake = profile.brake

                if section == 0 and brake.duration > 0:
                    if t_dof < brake.duration:
                        index = 0 if t_dof < brake.t[0] else 1
                        if index > 0:
                            t_dof -= brake.t[0]
                        yield t_dof, brake.p[index], brake.v[index], brake.a[index], brake.j[index]
                        continue
                    t_dof -= brake.duration

                if t_dof >= profile.t_sum[-1]:
                    yield t_dof - profile.t_sum[-1], profile.p[-1], profile.v[-1], profile.a[-1], 0.0
                    continue

                index = bisect_right(profile.t_sum, t_dof)
                if index > 0:
                    t_dof -= profile.t_sum[index - 1]
                yield t_dof, profile.p[index], profile.v[index], profile.a[index], profile.j[index]

        return section, within()

    def at_time(self, time: float) -> TrajectoryState:
        """Kinematic state, jerk and section at ``time``."""
        section, segments = self._segments(time)
        state = TrajectoryState([], [], [], [], section)
        for t, p, v, a, j in segments:
            new_p, new_v, new_a = integrate(t, p, v, a, j)
            state.position.append(new_p)
            state.velocity.append(new_v)
            state.acceleration.append(new_a)
            state.jerk.append(j)
        return state

    def position_at(self, time: float) -> list[float]:
        """Positions of all DoFs at ``time``."""
        _, segments = self._segments(time)
        return [integrate(t, p, v, a, j)[0] for t, p, v, a, j in segments]

    def get_position_extrema(self) -> list[Bound]:
        """Minimum and maximum position of every DoF over all sections."""
        extrema = [profile.get_position_extrema() for profile in self.profiles[0]]
        for section in self.profiles[1:]:
            for bound, profile in zip(extrema, section):
                section_bound = profile.get_position_extrema()
                if section_bound.max > bound.max:
                    bound.max = section_bound.max
                    bound.t_max = section_bound.t_max
                if section_bound.min < bound.min:
                    bound.min = section_bound.min
                    bound.t_min = section_bound.t_min
        self.position_extrema = extrema
        return copy.deepcopy(extrema)

    def get_first_time_at_position(self, dof: int, position: float, time_after: float = 0.0) -> Optional[float]:
        """First time the given DoF passes ``position``, or None if it never does."""
        if not 0 <= dof < self.degrees_of_freedom:
            return None

        for index, section in enumerate(self.profiles):
            time = section[dof].get_first_state_at_position(position, time_after)
            if time is not None:
                section_time = self.cumulative_times[index - 1] if index > 0 else 0.0
                return section_time + time
        return None

    @property
    def intermediate_durations(self) -> list[float]:
        """Durations at which the intermediate sections end."""
        return list(self.cumulative_times)


_StateFunc = Callable[[float], TrajectoryState]