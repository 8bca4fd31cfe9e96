"""Building blocks for jerk-limited motion profiles, plus encoder and board utilities."""

__version__ = "0.1.0"

__all__ = [
    "block",
    "board",
    "brake",
    "encoder",
    "errors",
    "input_parameter",
    "kinematics",
    "output_parameter",
    "planner",
    "profile",
    "roots",
    "trajectory",
]