"""Input checks and waypoint filtering for the trajectory planner."""

from __future__ import annotations

import math
from typing import Sequence

from .errors import RuckigError
from .input_parameter import ControlInterface, DurationDiscretization, InputParameter

__all__ = ["filter_intermediate_positions", "validate_input"]


def _divide(numerator: float, denominator: float) -> float:
    """Floating-point division that yields inf or NaN instead of raising."""
    if denominator != 0.0:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _ordered_max(value: float, current: float) -> float:
    # Keeps the first argument unless it compares strictly less (NaN stays NaN).
    return current if value < current else value


def _ordered_min(value: float, current: float) -> float:
    return current if current < value else value


def filter_intermediate_positions(
    input_parameter: InputParameter,
    threshold_distance: Sequence[float],
) -> list[list[float]]:
    """Drop intermediate positions lying within ``threshold_distance`` of the straight line.

    A waypoint is removed when a single point on the line between the
    surrounding kept positions lies within the per-DoF threshold of it.
    """
    waypoints = input_parameter.intermediate_positions
    if not waypoints:
        return []

    count = len(waypoints)
    dofs = input_parameter.degrees_of_freedom
    is_active = [True] * count

    start = 0
    for end in range(2, count + 2):
        pos_start = input_parameter.current_position if start == 0 else waypoints[start - 1]
        pos_end = input_parameter.target_position if end == count + 1 else waypoints[end - 1]

        are_all_below = True
        for pos_current in waypoints[start:end - 1]:
            t_start_max = 0.0
            t_end_min = 1.0
            for dof in range(dofs):
                span = pos_end[dof] - pos_start[dof]
                h0 = _divide(pos_current[dof] - pos_start[dof], span)
                margin = _divide(threshold_distance[dof], abs(span))
                t_start_max = _ordered_max(h0 - margin, t_start_max)
                t_end_min = _ordered_min(h0 + margin, t_end_min)

                if t_start_max > t_end_min:
                    are_all_below = False
                    break
            if not are_all_below:
                break

        is_active[end - 2] = not are_all_below
        if not are_all_below:
            start = end - 1

    return [list(position) for position, active in zip(waypoints, is_active) if active]


def validate_input(
    input_parameter: InputParameter,
    delta_time: float,
    max_number_of_waypoints: int = 0,
    check_current_state_within_limits: bool = False,
    check_target_state_within_limits: bool = True,
) -> None:
    """Check the input together with the planner settings; raise RuckigError if invalid."""
    input_parameter.validate(check_current_state_within_limits, check_target_state_within_limits)

    waypoints = input_parameter.intermediate_positions
    if waypoints and input_parameter.control_interface is ControlInterface.POSITION:
        if len(waypoints) > max_number_of_waypoints:
            raise RuckigError(
                f"The number of intermediate positions {len(waypoints)} exceeds the maximum "
                f"number of waypoints {max_number_of_waypoints}."
            )

    if delta_time <= 0.0 and input_parameter.duration_discretization is not DurationDiscretization.CONTINUOUS:
        raise RuckigError(
            f"delta time (control rate) parameter {delta_time:f} should be larger than zero."
        )