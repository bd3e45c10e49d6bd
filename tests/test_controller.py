import math

import pytest

from premo.clock import ManualClock
from premo.controller import PreMo, TwistDirection
from premo.encoder_manager import EncoderManager
from premo.motor_manager import MotorManager


def make_robot(kp=1.0, kd=0.0, kp_motor=1.0, ki_motor=0.0):
    calls = []
    mm = MotorManager(
        lambda s: calls.append(("lf", s)),
        lambda s: calls.append(("lr", s)),
        lambda s: calls.append(("rf", s)),
        lambda s: calls.append(("rr", s)),
        lambda: calls.append(("stop", None)),
    )
    mm.set_speed_limits(0, 100)
    em = EncoderManager(360)
    clock = ManualClock(1_000_000)
    robot = PreMo(30.0, 10.0, kp, kd, kp_motor, ki_motor, mm, em, clock)
    return robot, calls, clock, em


def values(calls, name):
    return [v for n, v in calls if n == name]


def test_forward_drives_both_wheels_at_path_speed():
    robot, calls, _, _ = make_robot()
    robot.forward(100)
    assert robot.is_following_path
    assert (robot.x, robot.y) == (0.0, 0.0)
    robot.continue_path_following()
    assert values(calls, "lf") == [PreMo.DEFAULT_PATH_FOLLOW_SPEED]
    assert values(calls, "rf") == [PreMo.DEFAULT_PATH_FOLLOW_SPEED]
    assert robot.output == pytest.approx(0.0, abs=1e-9)


def test_reverse_uses_reverse_motors():
    robot, calls, _, _ = make_robot()
    robot.reverse(100)
    robot.continue_path_following()
    assert values(calls, "lr") == [PreMo.DEFAULT_PATH_FOLLOW_SPEED]
    assert values(calls, "rr") == [PreMo.DEFAULT_PATH_FOLLOW_SPEED]
    assert values(calls, "lf") == [] and values(calls, "rf") == []


def test_set_path_follow_speed():
    robot, calls, _, _ = make_robot()
    robot.set_path_follow_speed(50)
    robot.forward(100)
    robot.continue_path_following()
    assert values(calls, "lf") == [50]
    assert values(calls, "rf") == [50]


def test_path_following_stops_past_end():
    robot, calls, _, _ = make_robot()
    robot.forward(100)
    robot.x = 200
    robot.continue_path_following()
    assert not robot.is_following_path
    assert values(calls, "stop") == [None]


def test_start_path_following_sets_location():
    robot, _, _, _ = make_robot()
    robot.start_path_following([3, 3, 3, 3], [1, 6, 11, 16])
    assert robot.x == 3
    assert robot.y == 1
    assert robot.heading == pytest.approx(math.pi / 2)
    assert robot.is_following_path


def test_start_path_following_backwards_flips_heading():
    robot, _, _, _ = make_robot()
    robot.start_path_following([3, 3, 3, 3], [1, 6, 11, 16], False, True)
    assert robot.heading == pytest.approx(math.pi / 2 + math.pi)


def test_start_path_following_rejects_short_path():
    robot, _, _, _ = make_robot()
    with pytest.raises(ValueError):
        robot.start_path_following([0, 1, 2], [0, 0, 0])


def test_zero_steering_gains_give_zero_output():
    robot, _, _, _ = make_robot()
    robot.set_pid_path_following(0, 0, 0)
    robot.start_path_following([0, 10, 20, 30], [5, 5, 5, 5], True, False)
    robot.continue_path_following()
    assert robot.output == 0


def test_go_to_goal_lies_on_path():
    robot, _, _, _ = make_robot()
    robot.go_to(100, 0)
    assert robot.is_following_path
    robot.continue_path_following()
    assert robot.goal_y == pytest.approx(0.0, abs=1e-9)
    assert 0 < robot.goal_x <= 100


def test_go_to_delta_is_relative():
    robot, _, _, _ = make_robot()
    robot.x = 5
    robot.go_to_delta(0, 50)
    robot.continue_path_following()
    assert robot.goal_x == pytest.approx(5.0, abs=1e-6)
    assert 0 <= robot.goal_y <= 50
    assert robot.location_data()[3:] == (robot.goal_x, robot.goal_y)


def test_stop_and_reset():
    robot, calls, _, _ = make_robot()
    robot.forward(100)
    robot.x = 5
    robot.y = 7
    assert (robot.x, robot.y) == (5, 7)
    robot.reset()
    assert robot.location_data()[:3] == (0.0, 0.0, 0.0)
    assert not robot.is_following_path
    assert values(calls, "stop") == [None]


@pytest.mark.parametrize(
    "target, direction, driven",
    [
        (90, TwistDirection.CCW, "rf"),
        (90, TwistDirection.CW, "lf"),
        (90, TwistDirection.MIN, "rf"),
        (270, TwistDirection.MIN, "lf"),
        (270, TwistDirection.CCW, "rf"),
    ],
)
def test_twist_picks_direction(target, direction, driven):
    robot, calls, _, _ = make_robot()
    robot.twist(target, direction)
    robot.continue_twist()
    assert [n for n, _ in calls] == [driven]


def test_twist_rejects_unknown_direction():
    robot, _, _, _ = make_robot()
    with pytest.raises(ValueError):
        robot.twist(90, 7)


def test_twist_both_motors_drives_opposite_wheel_in_reverse():
    robot, calls, _, _ = make_robot()
    robot.twist_both_motors(True)
    robot.twist_delta(90)
    robot.continue_twist()
    assert sorted(n for n, _ in calls) == ["lr", "rf"]


def test_small_twist_stops_immediately():
    robot, calls, _, _ = make_robot()
    robot.twist_delta(1.0)
    robot.continue_twist()
    assert [n for n, _ in calls] == ["stop"]


def test_twist_motor_speed_follows_pid():
    robot, calls, clock, _ = make_robot()
    robot.twist_delta(90)
    robot.continue_twist()
    clock.advance(20_000)
    robot.continue_twist()
    assert values(calls, "rf") == [0, PreMo.TWIST_SPEED_RPM]


def test_set_pid_motor_zero_gains_keep_motor_still():
    robot, calls, clock, _ = make_robot()
    robot.set_pid_motor(0, 0, 0)
    robot.twist_delta(90)
    robot.continue_twist()
    clock.advance(20_000)
    robot.continue_twist()
    assert values(calls, "rf") == [0, 0]


def test_loop_integrates_encoder_ticks():
    robot, _, clock, em = make_robot()
    robot.forward(100)
    clock.advance(100_000)
    em.tick_left(10)
    em.tick_right(10)
    robot.loop()
    assert robot.x > 0
    assert robot.y == pytest.approx(0.0, abs=1e-9)
    assert robot.heading == pytest.approx(0.0, abs=1e-9)


def test_print_path(capsys):
    robot, _, _, _ = make_robot()
    robot.forward(100)
    robot.print_path()
    out = capsys.readouterr().out
    assert "PRINTING PATH" in out
    assert "PRINT PATH COMPLETE" in out