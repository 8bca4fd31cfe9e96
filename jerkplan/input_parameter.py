"""Input of the trajectory planner: current state, target state and limits."""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Sequence

from .errors import RuckigError
from .kinematics import join

__all__ = [
    "ControlInterface",
    "Synchronization",
    "DurationDiscretization",
    "InputParameter",
]


class ControlInterface(Enum):
    """Which part of the kinematic state is controlled."""

    POSITION = "Position"
    """Full control over the entire kinematic state (default)."""
    VELOCITY = "Velocity"
    """Ignores the current and target position and the velocity limits."""


class Synchronization(Enum):
    """How the DoFs are synchronised with each other."""

    TIME = "Time"
    """Always reach the target at the same time (default)."""
    TIME_IF_NECESSARY = "TimeIfNecessary"
    """Synchronise only for non-zero target velocity or acceleration."""
    PHASE = "Phase"
    """Phase synchronise when possible, else fall back to time synchronisation."""
    NONE = "None"
    """Calculate every DoF independently."""


class DurationDiscretization(Enum):
    """Whether the trajectory duration is restricted to the control cycle."""

    CONTINUOUS = "Continuous"
    DISCRETE = "Discrete"


def _v_at_a_zero(v0: float, a0: float, j: float) -> float:
    return v0 + (a0 * a0) / (2 * j)


def _num(value: float) -> str:
    return f"{value:f}"


def _copy_optional(values: Optional[Sequence]) -> Optional[list]:
    return None if values is None else list(values)


def _copy_optional_nested(values: Optional[Sequence[Sequence[float]]]) -> Optional[list[list[float]]]:
    return None if values is None else [list(row) for row in values]


class InputParameter:
    """Current state, target state and kinematic constraints for all DoFs."""

    _COMPARED = (
        "current_position",
        "current_velocity",
        "current_acceleration",
        "target_position",
        "target_velocity",
        "target_acceleration",
        "max_velocity",
        "max_acceleration",
        "max_jerk",
        "intermediate_positions",
        "per_section_max_velocity",
        "per_section_max_acceleration",
        "per_section_max_jerk",
        "per_section_min_velocity",
        "per_section_min_acceleration",
        "per_section_max_position",
        "per_section_min_position",
        "max_position",
        "min_position",
        "enabled",
        "minimum_duration",
        "per_section_minimum_duration",
        "min_velocity",
        "min_acceleration",
        "control_interface",
        "synchronization",
        "duration_discretization",
        "per_dof_control_interface",
        "per_dof_synchronization",
    )

    def __init__(self, degrees_of_freedom: int) -> None:
        dofs = degrees_of_freedom
        self.degrees_of_freedom = dofs

        self.control_interface = ControlInterface.POSITION
        self.synchronization = Synchronization.TIME
        self.duration_discretization = DurationDiscretization.CONTINUOUS

        self.current_position: list[float] = [0.0] * dofs
        self.current_velocity: list[float] = [0.0] * dofs
        self.current_acceleration: list[float] = [0.0] * dofs

        self.target_position: list[float] = [0.0] * dofs
        self.target_velocity: list[float] = [0.0] * dofs
        self.target_acceleration: list[float] = [0.0] * dofs

        self.max_velocity: list[float] = [0.0] * dofs
        self.max_acceleration: list[float] = [math.inf] * dofs
        self.max_jerk: list[float] = [math.inf] * dofs
        self.min_velocity: Optional[list[float]] = None
        self.min_acceleration: Optional[list[float]] = None

        self.intermediate_positions: list[list[float]] = []

        self.per_section_max_velocity: Optional[list[list[float]]] = None
        self.per_section_max_acceleration: Optional[list[list[float]]] = None
        self.per_section_max_jerk: Optional[list[list[float]]] = None
        self.per_section_min_velocity: Optional[list[list[float]]] = None
        self.per_section_min_acceleration: Optional[list[list[float]]] = None
        self.per_section_max_position: Optional[list[list[float]]] = None
        self.per_section_min_position: Optional[list[list[float]]] = None

        self.max_position: Optional[list[float]] = None
        self.min_position: Optional[list[float]] = None

        self.enabled: list[bool] = [True] * dofs

        self.per_dof_control_interface: Optional[list[ControlInterface]] = None
        self.per_dof_synchronization: Optional[list[Synchronization]] = None

        self.minimum_duration: Optional[float] = None
        self.per_section_minimum_duration: Optional[list[float]] = None

        #: Soft interruption of the calculation in microseconds.
        self.interrupt_calculation_duration: Optional[float] = None

    def copy(self) -> InputParameter:
        """Independent copy of this input."""
        other = InputParameter(self.degrees_of_freedom)
        other.control_interface = self.control_interface
        other.synchronization = self.synchronization
        other.duration_discretization = self.duration_discretization
        for name in (
            "current_position", "current_velocity", "current_acceleration",
            "target_position", "target_velocity", "target_acceleration",
            "max_velocity", "max_acceleration", "max_jerk", "enabled",
        ):
            setattr(other, name, list(getattr(self, name)))
        for name in (
            "min_velocity", "min_acceleration", "max_position", "min_position",
            "per_dof_control_interface", "per_dof_synchronization",
            "per_section_minimum_duration",
        ):
            setattr(other, name, _copy_optional(getattr(self, name)))
        for name in (
            "per_section_max_velocity", "per_section_max_acceleration",
            "per_section_max_jerk", "per_section_min_velocity",
            "per_section_min_acceleration", "per_section_max_position",
            "per_section_min_position",
        ):
            setattr(other, name, _copy_optional_nested(getattr(self, name)))
        other.intermediate_positions = [list(row) for row in self.intermediate_positions]
        other.minimum_duration = self.minimum_duration
        other.interrupt_calculation_duration = self.interrupt_calculation_duration
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InputParameter):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self._COMPARED)

    __hash__ = None  # type: ignore[assignment]

    def _control_interface_of(self, dof: int) -> ControlInterface:
        if self.per_dof_control_interface is not None:
            return self.per_dof_control_interface[dof]
        return self.control_interface

    def validate(
        self,
        check_current_state_within_limits: bool = False,
        check_target_state_within_limits: bool = True,
    ) -> None:
        """Check the input for trajectory calculation; raise RuckigError if invalid."""
        for dof in range(self.degrees_of_freedom):
            self._validate_dof(dof, check_current_state_within_limits, check_target_state_within_limits)

        if self.intermediate_positions and self.control_interface is ControlInterface.POSITION:
            if (
                self.minimum_duration is not None
                or self.duration_discretization is not DurationDiscretization.CONTINUOUS
            ):
                raise RuckigError(
                    "Intermediate position can not be used together with a global minimum or discrete duration."
                )
            if self.per_dof_control_interface is not None or self.per_dof_synchronization is not None:
                raise RuckigError(
                    "Intermediate positions can only be used together with the position control "
                    "interface and a global synchronization."
                )
            for dof, j_max in enumerate(self.max_jerk):
                if math.isinf(j_max):
                    raise RuckigError(
                        f"infinite jerk limit of DoF {dof} is currently not supported with intermediate positions."
                    )

    def _validate_dof(self, dof: int, check_current: bool, check_target: bool) -> None:
        j_max = self.max_jerk[dof]
        if math.isnan(j_max) or j_max < 0.0:
            raise RuckigError(
                f"maximum jerk limit {_num(j_max)} of DoF {dof} should be larger than or equal to zero."
            )

        a_max = self.max_acceleration[dof]
        if math.isnan(a_max) or a_max < 0.0:
            raise RuckigError(
                f"maximum acceleration limit {_num(a_max)} of DoF {dof} should be larger than or equal to zero."
            )

        a_min = self.min_acceleration[dof] if self.min_acceleration is not None else -a_max
        if math.isnan(a_min) or a_min > 0.0:
            raise RuckigError(
                f"minimum acceleration limit {_num(a_min)} of DoF {dof} should be smaller than or equal to zero."
            )

        a0 = self.current_acceleration[dof]
        if math.isnan(a0):
            raise RuckigError(f"current acceleration {_num(a0)} of DoF {dof} should be a valid number.")
        af = self.target_acceleration[dof]
        if math.isnan(af):
            raise RuckigError(f"target acceleration {_num(af)} of DoF {dof} should be a valid number.")

        if check_current:
            if a0 > a_max:
                raise RuckigError(
                    f"current acceleration {_num(a0)} of DoF {dof} exceeds its maximum acceleration limit {_num(a_max)}."
                )
            if a0 < a_min:
                raise RuckigError(
                    f"current acceleration {_num(a0)} of DoF {dof} undercuts its minimum acceleration limit {_num(a_min)}."
                )
        if check_target:
            if af > a_max:
                raise RuckigError(
                    f"target acceleration {_num(af)} of DoF {dof} exceeds its maximum acceleration limit {_num(a_max)}."
                )
            if af < a_min:
                raise RuckigError(
                    f"target acceleration {_num(af)} of DoF {dof} undercuts its minimum acceleration limit {_num(a_min)}."
                )

        v0 = self.current_velocity[dof]
        if math.isnan(v0):
            raise RuckigError(f"current velocity {_num(v0)} of DoF {dof} should be a valid number.")
        vf = self.target_velocity[dof]
        if math.isnan(vf):
            raise RuckigError(f"target velocity {_num(vf)} of DoF {dof} should be a valid number.")

        if self._control_interface_of(dof) is not ControlInterface.POSITION:
            return

        p0 = self.current_position[dof]
        if math.isnan(p0):
            raise RuckigError(f"current position {_num(p0)} of DoF {dof} should be a valid number.")
        pf = self.target_position[dof]
        if math.isnan(pf):
            raise RuckigError(f"target position {_num(pf)} of DoF {dof} should be a valid number.")

        v_max = self.max_velocity[dof]
        if math.isnan(v_max) or v_max < 0.0:
            raise RuckigError(
                f"maximum velocity limit {_num(v_max)} of DoF {dof} should be larger than or equal to zero."
            )

        v_min = self.min_velocity[dof] if self.min_velocity is not None else -v_max
        if math.isnan(v_min) or v_min > 0.0:
            raise RuckigError(
                f"minimum velocity limit {_num(v_min)} of DoF {dof} should be smaller than or equal to zero."
            )

        if check_current:
            if v0 > v_max:
                raise RuckigError(
                    f"current velocity {_num(v0)} of DoF {dof} exceeds its maximum velocity limit {_num(v_max)}."
                )
            if v0 < v_min:
                raise RuckigError(
                    f"current velocity {_num(v0)} of DoF {dof} undercuts its minimum velocity limit {_num(v_min)}."
                )
        if check_target:
            if vf > v_max:
                raise RuckigError(
                    f"target velocity {_num(vf)} of DoF {dof} exceeds its maximum velocity limit {_num(v_max)}."
                )
            if vf < v_min:
                raise RuckigError(
                    f"target velocity {_num(vf)} of DoF {dof} undercuts its minimum velocity limit {_num(v_min)}."
                )

        if check_current:
            if a0 > 0 and j_max > 0 and _v_at_a_zero(v0, a0, j_max) > v_max:
                raise RuckigError(
                    f"DoF {dof} will inevitably reach a velocity {_num(_v_at_a_zero(v0, a0, j_max))} from the "
                    f"current kinematic state that will exceed its maximum velocity limit {_num(v_max)}."
                )
            if a0 < 0 and j_max > 0 and _v_at_a_zero(v0, a0, -j_max) < v_min:
                raise RuckigError(
                    f"DoF {dof} will inevitably reach a velocity {_num(_v_at_a_zero(v0, a0, -j_max))} from the "
                    f"current kinematic state that will undercut its minimum velocity limit {_num(v_min)}."
                )
        if check_target:
            if af < 0 and j_max > 0 and _v_at_a_zero(vf, af, j_max) > v_max:
                raise RuckigError(
                    f"DoF {dof} will inevitably have reached a velocity {_num(_v_at_a_zero(vf, af, j_max))} from "
                    f"the target kinematic state that will exceed its maximum velocity limit {_num(v_max)}."
                )
            if af > 0 and j_max > 0 and _v_at_a_zero(vf, af, -j_max) < v_min:
                raise RuckigError(
                    f"DoF {dof} will inevitably have reached a velocity {_num(_v_at_a_zero(vf, af, -j_max))} from "
                    f"the target kinematic state that will undercut its minimum velocity limit {_num(v_min)}."
                )

    def is_valid(
        self,
        check_current_state_within_limits: bool = False,
        check_target_state_within_limits: bool = True,
    ) -> bool:
        """Whether :meth:`validate` passes, without raising."""
        try:
            self.validate(check_current_state_within_limits, check_target_state_within_limits)
        except RuckigError:
            return False
        return True

    def to_string(self) -> str:
        """Readable, script-like listing of the input."""
        lines = [""]
        if self.control_interface is ControlInterface.VELOCITY:
            lines.append("inp.control_interface = ControlInterface.Velocity")
        if self.synchronization is Synchronization.PHASE:
            lines.append("inp.synchronization = Synchronization.Phase")
        elif self.synchronization is Synchronization.NONE:
            lines.append("inp.synchronization = Synchronization.No")
        if self.duration_discretization is DurationDiscretization.DISCRETE:
            lines.append("inp.duration_discretization = DurationDiscretization.Discrete")

        for name in (
            "current_position", "current_velocity", "current_acceleration",
            "target_position", "target_velocity", "target_acceleration",
            "max_velocity", "max_acceleration", "max_jerk",
        ):
            lines.append(f"inp.{name} = [{join(getattr(self, name), True)}]")
        if self.min_velocity is not None:
            lines.append(f"inp.min_velocity = [{join(self.min_velocity, True)}]")
        if self.min_acceleration is not None:
            lines.append(f"inp.min_acceleration = [{join(self.min_acceleration, True)}]")
        if self.minimum_duration is not None:
            lines.append(f"inp.minimum_duration = {self.minimum_duration:.6g}")

        if self.intermediate_positions:
            lines.append("inp.intermediate_positions = [")
            lines.extend(f"    [{join(row, True)}]," for row in self.intermediate_positions)
            lines.append("]")
        if self.min_position is not None:
            lines.append(f"inp.min_position = [{join(self.min_position, True)}]")
        if self.max_position is not None:
            lines.append(f"inp.max_position = [{join(self.max_position, True)}]")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_string()