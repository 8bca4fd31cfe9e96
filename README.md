# jerkplan

Building blocks for motion profiles with limits on velocity, acceleration
and jerk, for any number of degrees of freedom (DoFs), together with a few
helpers for a small robot controller board.

## Installation

```
pip install jerkplan
```

To run the test suite:

```
pip install "jerkplan[test]"
pytest
```

## Modules

- `jerkplan.errors`: the `Result` codes (`Result.WORKING`,
  `Result.FINISHED`, `Result.ERROR_INVALID_INPUT`, ...; `is_error` is true
  for the negative ones) and the `RuckigError` exception.
- `jerkplan.kinematics`: `integrate(t, p0, v0, a0, j)` steps a kinematic
  state forward under constant jerk and returns `(p, v, a)`;
  `join(values, high_precision=False)` formats numbers separated by `", "`.
- `jerkplan.roots`: polynomial helpers. `solve_cubic` and
  `solve_quart_monic` return the non-negative real roots in ascending
  order; `solve_resolvent`, `poly_eval`, `poly_derivative`,
  `poly_monic_derivative`, `pow2` and `shrink_interval` (a safe Newton
  search for a root inside a sign-changing interval).
- `jerkplan.brake`: `BrakeProfile`, a two-step pre-profile; `finalize` and
  `finalize_second_order` integrate it and return the state after braking.
- `jerkplan.profile`: `Profile`, a seven-step single-DoF profile, with the
  enums `ReachedLimits`, `Direction` and `ControlSigns`. Its `check*`
  methods integrate the step durations in `t` and report whether the
  target state is reached within the limits. `get_position_extrema()`
  returns a `Bound`; `get_first_state_at_position(pt, time_after=0.0)`
  returns a time or `None`.
- `jerkplan.block`: `Block` and `Interval` describe which durations a DoF
  can reach; `calculate_block(valid_profiles)` builds a `Block` from a list
  of extremal profiles, or returns `None`.
- `jerkplan.trajectory`: `Trajectory` holds per-section profiles for all
  DoFs. `at_time(t)` returns a `TrajectoryState` (position, velocity,
  acceleration, jerk, section); `position_at(t)`, `get_position_extrema()`,
  `get_first_time_at_position(dof, position, time_after=0.0)` and
  `intermediate_durations`.
- `jerkplan.input_parameter`: `InputParameter` with `ControlInterface`,
  `Synchronization` and `DurationDiscretization`. `validate()` raises
  `RuckigError` on bad input, `is_valid()` returns a bool, `copy()` makes an
  independent copy and `to_string()` lists the input.
- `jerkplan.output_parameter`: `OutputParameter`; `pass_to_input` makes the
  new state the current state of an input and drops the first intermediate
  position when the section changed.
- `jerkplan.planner`: `validate_input(input_parameter, delta_time, ...)`
  adds checks on the waypoint count and control cycle;
  `filter_intermediate_positions(input_parameter, threshold_distance)`
  removes waypoints close to the straight line between their neighbours.
- `jerkplan.encoder`: `Encoder` turns raw 14-bit readings from a callable
  into a multi-turn position, counting wrap-arounds; `percent()` scales it
  between a minimum and maximum.
- `jerkplan.board`: the board's pin numbers, `raw_to_millivolts` for the
  voltage-sense ADC, `VoltageMonitor` for a smoothed reading and
  `online_banner` for the coloured start-up line.

## Examples

```python
from jerkplan.errors import RuckigError
from jerkplan.input_parameter import InputParameter

inp = InputParameter(3)
inp.current_position = [0.0, 0.0, 0.5]
inp.target_position = [5.0, -2.0, -3.5]
inp.max_velocity = [3.0, 1.0, 3.0]
inp.max_acceleration = [3.0, 2.0, 1.0]
inp.max_jerk = [4.0, 3.0, 2.0]

try:
    inp.validate()
except RuckigError as err:
    print("bad input:", err)
```

```python
from jerkplan.kinematics import integrate

p, v, a = integrate(1.0, 0.0, 0.0, 0.0, 6.0)   # (1.0, 3.0, 6.0)
```

```python
from jerkplan.encoder import Encoder

readings = iter([16000, 100, 300])
enc = Encoder(lambda: next(readings), min_val=0, max_val=32768)
enc.update()   # 16000
enc.update()   # 16484: wrapped past zero
```

## What this package does not do

- It does not compute time-optimal trajectories. There is no solver that
  turns an `InputParameter` into a `Trajectory`, and no update loop that
  advances an `OutputParameter` each control cycle; a `Trajectory` has to be
  built from `Profile` objects whose step durations are already known.
- It does not talk to hardware. `Encoder` reads through a callable you
  supply, and the board helpers only convert readings and format text.