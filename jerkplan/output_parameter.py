"""Output of the trajectory planner for one control cycle."""

from __future__ import annotations

from .input_parameter import InputParameter
from .kinematics import join
from .trajectory import Trajectory

__all__ = ["OutputParameter"]


class OutputParameter:
    """New kinematic state and bookkeeping produced by an update step."""

    def __init__(self, degrees_of_freedom: int) -> None:
        self.degrees_of_freedom = degrees_of_freedom

        #: The trajectory currently being followed.
        self.trajectory = Trajectory(degrees_of_freedom)

        self.new_position: list[float] = [0.0] * degrees_of_freedom
        self.new_velocity: list[float] = [0.0] * degrees_of_freedom
        self.new_acceleration: list[float] = [0.0] * degrees_of_freedom
        self.new_jerk: list[float] = [0.0] * degrees_of_freedom

        #: Current time on the trajectory in seconds.
        self.time = 0.0

        #: Index of the current section between intermediate positions.
        self.new_section = 0

        #: Whether a new section was reached in the last cycle.
        self.did_section_change = False

        #: Whether a new trajectory was calculated in the last cycle.
        self.new_calculation = False

        #: Whether the trajectory calculation was interrupted.
        self.was_calculation_interrupted = False

        #: Computational duration of the last update in microseconds.
        self.calculation_duration = 0.0

    def pass_to_input(self, input_parameter: InputParameter) -> None:
        """Make the new state the current state of ``input_parameter``.

        Drops the first intermediate waypoint when the section changed.
        """
        input_parameter.current_position = list(self.new_position)
        input_parameter.current_velocity = list(self.new_velocity)
        input_parameter.current_acceleration = list(self.new_acceleration)

        if self.did_section_change and input_parameter.intermediate_positions:
            del input_parameter.intermediate_positions[0]

    def to_string(self) -> str:
        """Readable, script-like listing of the output."""
        return (
            f"\nout.new_position = [{join(self.new_position, True)}]\n"
            f"out.new_velocity = [{join(self.new_velocity, True)}]\n"
            f"out.new_acceleration = [{join(self.new_acceleration, True)}]\n"
            f"out.new_jerk = [{join(self.new_jerk, True)}]\n"
            f"out.time = [{self.time:.16g}]\n"
            f"out.calculation_duration = [{self.calculation_duration:.16g}]\n"
        )

    def __str__(self) -> str:
        return self.to_string()