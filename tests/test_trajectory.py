import pytest

from jerkplan.brake import BrakeProfile
from jerkplan.profile import ControlSigns, Profile, ReachedLimits
from jerkplan.trajectory import Trajectory


def _travel_profile(start):
    """Rest-to-rest move of 3 units taking 5 time units with unit jerk."""
    profile = Profile(t=[1.0, 0.0, 1.0, 1.0, 1.0, 0.0, 1.0])
    profile.set_boundary(start, 0.0, 0.0, start + 3.0, 0.0, 0.0)
    ok = profile.check(ControlSigns.UDDU, ReachedLimits.VEL, 1.0, 1.0, -1.0, 1.0, -1.0)
    assert ok
    return profile


def _single():
    return Trajectory(1, profiles=[[_travel_profile(0.0)]], duration=5.0, cumulative_times=[5.0])


def test_default_trajectory_is_at_rest():
    trajectory = Trajectory(2)
    state = trajectory.at_time(1.0)
    assert state.position == [0.0, 0.0]
    assert state.velocity == [0.0, 0.0]
    assert state.section == 1


def test_start_and_end_states():
    trajectory = _single()
    start = trajectory.at_time(0.0)
    assert start.position[0] == pytest.approx(0.0)
    assert start.section == 0
    end = trajectory.at_time(5.0)
    assert end.position[0] == pytest.approx(3.0)
    assert end.velocity[0] == pytest.approx(0.0)
    assert end.section == 1


def test_midpoint_by_symmetry():
    state = _single().at_time(2.5)
    assert state.position[0] == pytest.approx(1.5)
    assert state.velocity[0] == pytest.approx(1.0)
    assert state.jerk[0] == 0.0


def test_positions_are_monotonic_and_match_position_at():
    trajectory = _single()
    times = [k * 0.25 for k in range(25)]
    positions = [trajectory.at_time(t).position[0] for t in times]
    assert positions == sorted(positions)
    assert [trajectory.position_at(t)[0] for t in times] == positions


def test_after_end_holds_final_state():
    state = _single().at_time(7.0)
    assert state.position[0] == pytest.approx(3.0)
    assert state.acceleration[0] == pytest.approx(0.0)


def test_brake_segment_is_used_first():
    profile = Profile()
    profile.brake = BrakeProfile(t=[1.0, 0.0], j=[0.0, 0.0])
    profile.brake.finalize(-1.0, 1.0, 0.0)
    trajectory = Trajectory(1, profiles=[[profile]], duration=1.0, cumulative_times=[1.0])
    state = trajectory.at_time(0.5)
    assert state.position[0] == pytest.approx(-0.5)
    assert state.velocity[0] == pytest.approx(1.0)


def test_unsynchronised_dof_stays_at_rest():
    trajectory = Trajectory(2, profiles=[[_travel_profile(0.0), Profile()]], duration=5.0, cumulative_times=[5.0])
    state = trajectory.at_time(2.5)
    assert state.position[1] == 0.0
    assert state.position[0] == pytest.approx(1.5)


def _two_sections():
    return Trajectory(
        1,
        profiles=[[_travel_profile(0.0)], [_travel_profile(3.0)]],
        duration=10.0,
        cumulative_times=[5.0, 10.0],
    )


def test_sections():
    trajectory = _two_sections()
    assert trajectory.at_time(2.0).section == 0
    assert trajectory.at_time(7.0).section == 1
    assert trajectory.at_time(10.0).section == 2
    assert trajectory.at_time(10.0).position[0] == pytest.approx(6.0)
    assert trajectory.intermediate_durations == [5.0, 10.0]


def test_position_extrema():
    single = _single().get_position_extrema()[0]
    assert single.min == pytest.approx(0.0)
    assert single.t_min == 0.0
    assert single.max == pytest.approx(3.0)
    assert single.t_max == pytest.approx(5.0)

    combined = _two_sections().get_position_extrema()[0]
    assert combined.min == pytest.approx(0.0)
    assert combined.max == pytest.approx(6.0)


def test_first_time_in_later_section():
    assert _two_sections().get_first_time_at_position(0, 4.5) == pytest.approx(7.5)