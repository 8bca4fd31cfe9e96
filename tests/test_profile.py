import pytest

from jerkplan.brake import BrakeProfile
from jerkplan.profile import Bound, ControlSigns, Direction, Profile, ReachedLimits

UDDU = ControlSigns.UDDU
UDUD = ControlSigns.UDUD
NONE = ReachedLimits.NONE


def third_order_profile():
    """Rest-to-rest move from 0 to 2 with unit jerk and four unit steps."""
    profile = Profile()
    profile.set_boundary(0.0, 0.0, 0.0, 2.0, 0.0, 0.0)
    profile.t = [1.0, 0.0, 1.0, 0.0, 1.0, 0.0, 1.0]
    return profile


def test_check_accepts_matching_profile():
    profile = third_order_profile()
    assert profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    assert profile.p[-1] == pytest.approx(profile.pf)
    assert profile.v[-1] == pytest.approx(0.0, abs=1e-12)
    assert profile.a[-1] == pytest.approx(0.0, abs=1e-12)
    assert profile.t_sum[-1] == pytest.approx(sum(profile.t))
    assert profile.direction is Direction.UP
    assert profile.to_string() == "UP_NONE_UDDU"


def test_check_sets_jerk_signs():
    profile = third_order_profile()
    profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    assert profile.j == [1.0, 0.0, -1.0, 0.0, -1.0, 0.0, 1.0]


def test_check_rejects_velocity_limit():
    profile = third_order_profile()
    assert not profile.check(UDDU, NONE, 1.0, 0.9, -0.9, 2.0, -2.0)


def test_check_rejects_acceleration_limit():
    profile = third_order_profile()
    assert not profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 0.5, -0.5)


def test_check_rejects_wrong_target():
    profile = third_order_profile()
    profile.pf = 3.0
    assert not profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)


def test_check_rejects_negative_time():
    profile = third_order_profile()
    profile.t[4] = -0.1
    assert not profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)


def test_check_rejects_overlong_profile():
    profile = third_order_profile()
    profile.t[3] = 2e12
    assert not profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)


@pytest.mark.parametrize("limits", [ReachedLimits.VEL, ReachedLimits.ACC0, ReachedLimits.ACC1])
def test_check_requires_limit_step(limits):
    profile = third_order_profile()
    assert not profile.check(UDDU, limits, 1.0, 2.0, -2.0, 2.0, -2.0)


def test_check_with_timing_bounds_jerk():
    profile = third_order_profile()
    assert not profile.check_with_timing(UDDU, NONE, 4.0, 1.0, 2.0, -2.0, 2.0, -2.0, 0.5)
    assert profile.check_with_timing(UDDU, NONE, 4.0, 1.0, 2.0, -2.0, 2.0, -2.0, 1.0)


def test_check_udud_jerk_pattern():
    profile = third_order_profile()
    profile.check(UDUD, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    assert profile.j == [1.0, 0.0, -1.0, 0.0, 1.0, 0.0, -1.0]


def test_check_for_velocity():
    profile = Profile()
    profile.set_boundary_for_velocity(0.0, 0.0, 0.0, 1.0, 0.0)
    profile.t = [1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0]
    assert profile.check_for_velocity(UDDU, NONE, 1.0, 2.0, -2.0)
    assert profile.v[-1] == pytest.approx(profile.vf)
    assert profile.direction is Direction.UP
    assert not profile.check_for_velocity(UDDU, NONE, 1.0, 0.5, -0.5)


def test_check_for_velocity_with_timing_bounds_jerk():
    profile = Profile()
    profile.set_boundary_for_velocity(0.0, 0.0, 0.0, 1.0, 0.0)
    profile.t = [1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0]
    assert not profile.check_for_velocity_with_timing(UDDU, NONE, 2.0, 1.0, 2.0, -2.0, 0.1)
    assert profile.check_for_velocity_with_timing(UDDU, NONE, 2.0, 1.0, 2.0, -2.0)


def test_check_for_second_order_velocity():
    profile = Profile()
    profile.set_boundary_for_velocity(0.0, 0.0, 0.0, 1.0, 0.0)
    profile.t = [0.0, 2.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    assert profile.check_for_second_order_velocity(UDDU, ReachedLimits.ACC0, 0.5)
    assert profile.v[-1] == pytest.approx(profile.vf)
    assert profile.t_sum[-1] == pytest.approx(2.0)
    assert not profile.check_for_second_order_velocity_with_timing(
        UDDU, ReachedLimits.ACC0, 2.0, 0.5, 0.4, -0.4)


def test_check_for_second_order():
    profile = Profile()
    profile.set_boundary(0.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    profile.t = [1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0]
    assert profile.check_for_second_order(UDDU, NONE, 1.0, -1.0, 2.0, -2.0)
    assert profile.p[-1] == pytest.approx(profile.pf)
    assert profile.j == [0.0] * 7
    assert not profile.check_for_second_order(UDDU, NONE, 1.0, -1.0, 0.5, -0.5)


def test_check_for_second_order_with_timing_bounds_acceleration():
    profile = Profile()
    profile.set_boundary(0.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    profile.t = [1.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0]
    assert not profile.check_for_second_order_with_timing(
        UDDU, NONE, 2.0, 1.0, -1.0, 2.0, -2.0, 0.5, -0.5)
    assert profile.check_for_second_order_with_timing(
        UDDU, NONE, 2.0, 1.0, -1.0, 2.0, -2.0, 2.0, -2.0)


def test_check_for_first_order():
    profile = Profile()
    profile.set_boundary(0.0, 0.0, 0.0, 2.0, 0.0, 0.0)
    profile.t = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0]
    assert profile.check_for_first_order(UDDU, ReachedLimits.VEL, 2.0)
    assert profile.p[-1] == pytest.approx(profile.pf)
    assert profile.direction is Direction.UP
    assert not profile.check_for_first_order(UDDU, ReachedLimits.VEL, 1.0)


def test_check_for_first_order_with_timing_bounds_velocity():
    profile = Profile()
    profile.set_boundary(0.0, 0.0, 0.0, 2.0, 0.0, 0.0)
    profile.t = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0]
    assert not profile.check_for_first_order_with_timing(UDDU, ReachedLimits.VEL, 1.0, 2.0, 1.5, -1.5)
    assert profile.check_for_first_order_with_timing(UDDU, ReachedLimits.VEL, 1.0, 2.0, 3.0, -3.0)


def test_first_order_down_direction():
    profile = Profile()
    profile.set_boundary(0.0, 0.0, 0.0, -2.0, 0.0, 0.0)
    profile.t = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0]
    assert profile.check_for_first_order(UDDU, ReachedLimits.VEL, -2.0)
    assert profile.to_string() == "DOWN_VEL_UDDU"


def test_position_extrema():
    profile = third_order_profile()
    profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    bound = profile.get_position_extrema()
    assert isinstance(bound, Bound)
    assert bound.min == pytest.approx(profile.p[0])
    assert bound.t_min == pytest.approx(0.0)
    assert bound.max == pytest.approx(profile.pf)
    assert bound.t_max == pytest.approx(4.0)


def test_position_extrema_contain_all_step_positions():
    profile = third_order_profile()
    profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    bound = profile.get_position_extrema()
    assert all(bound.min <= p <= bound.max for p in profile.p)


def test_position_extrema_shift_with_brake_duration():
    profile = third_order_profile()
    profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    plain = profile.get_position_extrema()
    profile.brake.duration = 0.5
    shifted = profile.get_position_extrema()
    assert shifted.t_max == pytest.approx(plain.t_max + 0.5)


def test_first_state_at_position():
    profile = third_order_profile()
    profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    assert profile.get_first_state_at_position(1.0) == pytest.approx(2.0, abs=1e-9)
    assert profile.get_first_state_at_position(0.0) == pytest.approx(0.0)
    assert profile.get_first_state_at_position(profile.pf) == pytest.approx(sum(profile.t), abs=1e-3)
    assert profile.get_first_state_at_position(5.0) is None


def test_first_state_respects_time_after():
    profile = third_order_profile()
    profile.check(UDDU, NONE, 1.0, 2.0, -2.0, 2.0, -2.0)
    assert profile.get_first_state_at_position(0.0, time_after=0.5) is None


def test_set_boundary_from_copies_brake():
    source = third_order_profile()
    source.brake = BrakeProfile(duration=1.0, t=[1.0, 0.0])
    target = Profile()
    target.set_boundary_from(source)
    assert target.pf == source.pf
    assert target.p[0] == source.p[0]
    assert target.brake == source.brake
    source.brake.t[0] = 9.0
    assert target.brake.t[0] == 1.0