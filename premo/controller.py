"""Path following and in-place turning for a differential-drive robot."""

from __future__ import annotations

import enum
import math
from typing import Iterable

from premo.clock import PI, RAD_TO_DEG, SystemClock, map_range
from premo.dead_reckoner import DeadReckoner, WheelDirection
from premo.encoder_manager import EncoderManager
from premo.motor_manager import MotorManager
from premo.pid import PID, Direction, Mode
from premo.pure_pursuit import PurePursuit


class TwistDirection(enum.IntEnum):
    CCW = 0
    CW = 1
    MIN = 2


class PreMo:
    """Ties odometry, pure pursuit and PID motor control into one robot controller.

    Call :meth:`loop` frequently; it updates the position estimate and keeps
    any running path following or twist going.
    """

    PID_SAMPLE_TIME = 15  # ms
    PID_MOTOR_OUTPUT_RANGE = 100
    DEFAULT_PATH_FOLLOW_SPEED = 85  # percent
    TWIST_SPEED_RPM = 40
    _TWIST_THRESHOLD_ANGLE = 2.0  # degrees

    def __init__(
        self,
        radius: float,
        length: float,
        kp: float,
        kd: float,
        kp_motor: float,
        ki_motor: float,
        motor_manager: MotorManager,
        encoder_manager: EncoderManager,
        clock=None,
    ) -> None:
        clock = clock if clock is not None else SystemClock()
        self._motor_manager = motor_manager
        self._encoder_manager = encoder_manager
        self._move_reverse = False
        self._motor_speed = self.DEFAULT_PATH_FOLLOW_SPEED
        self._following_path = False
        self._twisting = False
        self._twist_both_motors = False
        self._twist_angle = 0.0
        self._target_heading = 0.0

        self._dead_reckoner = DeadReckoner(
            encoder_manager.read_left,
            encoder_manager.read_right,
            encoder_manager.ticks_per_rev,
            radius,
            length,
            clock=clock,
        )

        self._pid = PID(kp, 0, kd, Direction.DIRECT, clock=clock)
        self._pid.set_sample_time(self.PID_SAMPLE_TIME)
        self._pid.set_output_limits(-self.PID_MOTOR_OUTPUT_RANGE, self.PID_MOTOR_OUTPUT_RANGE)
        self._pid.set_mode(Mode.AUTOMATIC)

        self._pid_left = self._motor_pid(kp_motor, ki_motor, clock)
        self._pid_right = self._motor_pid(kp_motor, ki_motor, clock)

        self._pure_pursuit = PurePursuit(self._dead_reckoner.pose, length, clock=clock)

    def _motor_pid(self, kp: float, ki: float, clock) -> PID:
        pid = PID(kp, ki, 0, Direction.DIRECT, clock=clock)
        pid.set_sample_time(self.PID_SAMPLE_TIME)
        pid.set_output_limits(0, 100)
        pid.set_mode(Mode.AUTOMATIC)
        return pid

    # Motion commands

    def go_to_delta(self, delta_x: float, delta_y: float) -> None:
        """Drive to a point given relative to the current position."""
        dr = self._dead_reckoner
        self.go_to(dr.x + delta_x, dr.y + delta_y)

    def go_to(self, x: float, y: float) -> None:
        """Drive along a straight path to the given point."""
        dr = self._dead_reckoner
        xr, yr = dr.x, dr.y
        theta = math.atan2(y - yr, x - xr)
        c, s = math.cos(theta), math.sin(theta)
        path_x = [xr, xr + c, x - 2 * c, x - c, x]
        path_y = [yr, yr + s, y - 2 * s, y - s, y]
        self.start_path_following(path_x, path_y, True, False)

    def _straight_path(self, distance: float) -> tuple[list[float], list[float]]:
        x, y, heading = self._dead_reckoner.pose()
        c, s = math.cos(heading), math.sin(heading)
        fractions = (0.0, 0.01, 0.99, 1.0)
        return (
            [x + distance * f * c for f in fractions],
            [y + distance * f * s for f in fractions],
        )

    def forward(self, distance: float) -> None:
        """Drive forward in a straight line."""
        path_x, path_y = self._straight_path(distance)
        self.start_path_following(path_x, path_y, True, False)

    def reverse(self, distance: float) -> None:
        """Drive backward in a straight line."""
        path_x, path_y = self._straight_path(-distance)
        self.start_path_following(path_x, path_y, False, False)

    def twist_both_motors(self, enabled: bool) -> None:
        """Choose whether a twist turns both wheels in opposition or only one."""
        self._twist_both_motors = bool(enabled)

    def twist(self, target_heading: float, direction: TwistDirection = TwistDirection.MIN) -> None:
        """Turn in place to an absolute heading in degrees."""
        direction = TwistDirection(direction)
        target_heading = target_heading - 360 * math.floor(target_heading / 360)
        heading = self._dead_reckoner.heading * RAD_TO_DEG
        heading = heading - 360 * math.floor(heading / 360)

        delta1 = target_heading - heading
        delta2 = abs(360 - abs(delta1))
        if delta1 > 0:
            delta_ccw, delta_cw = delta1, -delta2
        else:
            delta_ccw, delta_cw = delta2, delta1

        if direction == TwistDirection.CCW:
            delta = delta_ccw
        elif direction == TwistDirection.CW:
            delta = delta_cw
        else:
            delta = delta_ccw if abs(delta_ccw) < abs(delta_cw) else delta_cw
        self.twist_delta(delta)

    def twist_delta(self, angle: float) -> None:
        """Turn in place by an angle in degrees; positive is counter-clockwise."""
        self._pid_left.setpoint = self.TWIST_SPEED_RPM
        self._pid_right.setpoint = self.TWIST_SPEED_RPM
        self._pid_left.input = 0.0
        self._pid_right.input = 0.0
        heading = self._dead_reckoner.heading * RAD_TO_DEG
        self._target_heading = heading + angle
        self._twist_angle = angle
        self._twisting = True

    def continue_twist(self) -> None:
        """Drive the motors for a running twist, or stop once the target is reached."""
        dr = self._dead_reckoner
        mm = self._motor_manager
        heading = dr.heading * RAD_TO_DEG
        remaining_ccw = self._twist_angle > 0 and self._target_heading - heading > self._TWIST_THRESHOLD_ANGLE
        remaining_cw = self._twist_angle < 0 and heading - self._target_heading > self._TWIST_THRESHOLD_ANGLE
        if not (remaining_ccw or remaining_cw):
            self._twisting = False
            self.stop()
            return

        self._pid_left.input = abs(dr.wl * DeadReckoner.RAD_PER_SEC_TO_RPM)
        self._pid_right.input = abs(dr.wr * DeadReckoner.RAD_PER_SEC_TO_RPM)
        if self._twist_angle > 0:
            if self._twist_both_motors:
                mm.left_reverse(self._pid_left.output)
                dr.left_direction = WheelDirection.REVERSE
            mm.right_forward(self._pid_right.output)
            dr.right_direction = WheelDirection.FORWARD
        else:
            if self._twist_both_motors:
                mm.right_reverse(self._pid_right.output)
                dr.right_direction = WheelDirection.REVERSE
            mm.left_forward(self._pid_left.output)
            dr.left_direction = WheelDirection.FORWARD
        self._pid_left.compute()
        self._pid_right.compute()

    @staticmethod
    def _transform_coordinate(
        x: float, y: float, angle: float, translate_x: float, translate_y: float
    ) -> tuple[float, float]:
        c, s = math.cos(angle), math.sin(angle)
        return translate_x + x * c + y * s, translate_y - x * s + y * c

    def _curve_path_point(
        self, theta: float, turning_radius: float, transform_angle: float, is_left_turn: bool
    ) -> tuple[float, float]:
        theta = theta if is_left_turn else -theta
        xip = turning_radius * (math.cos(theta) - 1)
        yip = turning_radius * math.sin(theta)
        dr = self._dead_reckoner
        return self._transform_coordinate(xip, yip, transform_angle, dr.x, dr.y)

    # Tuning

    def set_pid_path_following(self, kp: float, kd: float, ki: float) -> None:
        """Set the gains of the steering controller."""
        self._pid.set_tunings(kp, ki, kd)

    def set_pid_motor(self, kp: float, kd: float, ki: float) -> None:
        """Set the gains of both wheel speed controllers."""
        self._pid_left.set_tunings(kp, ki, kd)
        self._pid_right.set_tunings(kp, ki, kd)

    def set_path_follow_speed(self, speed_percentage: int) -> None:
        """Set the wheel speed used while following a path, in percent."""
        self._motor_speed = int(speed_percentage)

    # Path following

    def start_path_following(
        self,
        path_x: Iterable[float],
        path_y: Iterable[float],
        is_forward: bool = True,
        set_location: bool = True,
    ) -> None:
        """Follow a path of control points.

        With ``set_location`` the robot is placed at the first point, facing the second.
        """
        xs = [float(v) for v in path_x]
        ys = [float(v) for v in path_y]
        self._pure_pursuit.set_path(xs, ys)

        heading = math.atan2(ys[1] - ys[0], xs[1] - xs[0])
        if not is_forward:
            heading += PI
        if set_location:
            dr = self._dead_reckoner
            dr.x = xs[0]
            dr.y = ys[0]
            dr.heading = heading

        self._move_reverse = not is_forward
        self._following_path = True
        self._pure_pursuit.start()

    def continue_path_following(self) -> None:
        """Run one step of path following and stop at the end of the path."""
        self._pure_pursuit.compute()
        self._pid.input = self._pure_pursuit.curvature
        self._pid.compute()
        self._move_motors(self._motor_speed, self._pid.output)
        if self._pure_pursuit.check_stop():
            self._following_path = False
            self.stop()

    def _move_motors(self, motor_speed: int, diff: float) -> None:
        # Positive diff turns left, negative turns right.
        if diff > 0:
            speed_left = map_range(diff, 100, 0, 0, motor_speed)
            speed_right = motor_speed
        else:
            speed_left = motor_speed
            speed_right = map_range(-diff, 100, 0, 0, motor_speed)

        dr = self._dead_reckoner
        mm = self._motor_manager
        if self._move_reverse:
            dr.left_direction = WheelDirection.REVERSE
            dr.right_direction = WheelDirection.REVERSE
            mm.left_reverse(speed_left)
            mm.right_reverse(speed_right)
        else:
            dr.left_direction = WheelDirection.FORWARD
            dr.right_direction = WheelDirection.FORWARD
            mm.left_forward(speed_left)
            mm.right_forward(speed_right)

    def stop(self) -> None:
        """Abort any motion and stop the motors."""
        self._following_path = False
        self._twisting = False
        self._motor_manager.stop()

    def loop(self) -> None:
        """Update odometry and continue whatever motion is running."""
        self._dead_reckoner.compute_position()
        if self._following_path:
            self.continue_path_following()
        elif self._twisting:
            self.continue_twist()

    @property
    def is_following_path(self) -> bool:
        """True while a path is being followed."""
        return self._following_path

    # State

    @property
    def x(self) -> float:
        """Estimated x position."""
        return self._dead_reckoner.x

    @x.setter
    def x(self, value: float) -> None:
        self._dead_reckoner.x = float(value)

    @property
    def y(self) -> float:
        """Estimated y position."""
        return self._dead_reckoner.y

    @y.setter
    def y(self, value: float) -> None:
        self._dead_reckoner.y = float(value)

    @property
    def goal_x(self) -> float:
        """x of the current pure pursuit goal point."""
        return self._pure_pursuit.goal_x

    @property
    def goal_y(self) -> float:
        """y of the current pure pursuit goal point."""
        return self._pure_pursuit.goal_y

    @property
    def heading(self) -> float:
        """Estimated heading in radians."""
        return self._dead_reckoner.heading

    def location_data(self) -> tuple[float, float, float, float, float]:
        """Return (x, y, heading, goal_x, goal_y)."""
        x, y, heading = self._dead_reckoner.pose()
        return x, y, heading, self._pure_pursuit.goal_x, self._pure_pursuit.goal_y

    @property
    def output(self) -> float:
        """Latest output of the steering controller."""
        return self._pid.output

    def print_path(self) -> None:
        """Print the control points of the current path."""
        self._pure_pursuit.print_path()

    def reset(self) -> None:
        """Zero the position estimate and stop."""
        self._dead_reckoner.reset()
        self.stop()