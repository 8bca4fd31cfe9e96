"""Result codes and the exception raised by the trajectory planner."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["Result", "RuckigError"]


class Result(IntEnum):
    """Outcome of a trajectory calculation or update step."""

    WORKING = 0
    FINISHED = 1
    ERROR = -1
    ERROR_INVALID_INPUT = -100
    ERROR_TRAJECTORY_DURATION = -101
    ERROR_POSITIONAL_LIMITS = -102
    ERROR_ZERO_LIMITS = -104
    ERROR_EXECUTION_TIME_CALCULATION = -110
    ERROR_SYNCHRONIZATION_CALCULATION = -111

    @property
    def is_error(self) -> bool:
        """True for every code that signals a failure."""
        return self.value < 0


class RuckigError(RuntimeError):
    """Base class for all errors raised by the planner."""

    def __init__(self, message: str) -> None:
        super().__init__("\n[ruckig] " + message)
        self.message = message