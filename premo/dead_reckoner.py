"""Dead-reckoning odometry for a differential-drive robot from wheel encoder ticks."""

from __future__ import annotations

import enum
import math
from typing import Callable

from premo.clock import TWO_PI, SystemClock

UNSIGNED_LONG_MAX = 4294967295
_U32_MASK = 0xFFFFFFFF

TickSource = Callable[[], int]


class WheelDirection(enum.IntEnum):
    FORWARD = 1
    REVERSE = -1


def tick_change(current: int, previous: int) -> int:
    """Difference between two unsigned 32-bit counter readings, allowing for one wrap."""
    if current < previous:
        return UNSIGNED_LONG_MAX - previous + current
    return current - previous


class DeadReckoner:
    """Integrates wheel speeds into a position and heading estimate.

    Position is in the unit of the wheel radius; heading is in radians.
    The encoder counts are read through the ``left_ticks`` and ``right_ticks``
    callables. Encoders count unsigned, so the wheel directions must be set
    by whoever drives the motors.
    """

    RAD_PER_SEC_TO_RPM = 30.0 / math.pi

    def __init__(
        self,
        left_ticks: TickSource,
        right_ticks: TickSource,
        ticks_per_rev: int,
        radius: float,
        length: float,
        compute_interval: int = 50,
        clock=None,
    ) -> None:
        if ticks_per_rev == 0:
            raise ValueError("ticks_per_rev must be non-zero")
        self._left_ticks = left_ticks
        self._right_ticks = right_ticks
        self._clock = clock if clock is not None else SystemClock()
        self.ticks_per_rev = int(ticks_per_rev)
        self.radius = float(radius)
        self.length = float(length)
        self._to_rad_per_sec = 1_000_000.0 * TWO_PI / self.ticks_per_rev
        self._interval = int(compute_interval) * 1000

        self.left_direction = WheelDirection.FORWARD
        self.right_direction = WheelDirection.FORWARD

        self._left_prev = self._left_ticks()
        self._right_prev = self._right_ticks()
        self.x = 0.0
        self.y = 0.0
        self.heading = 0.0
        self._wl = 0.0
        self._wr = 0.0
        self._w = 0.0
        now = self._clock.micros()
        self._prev_integration_time = now
        self._prev_wheel_time = now

    @property
    def wl(self) -> float:
        """Latest left wheel angular velocity in rad/s."""
        return self._wl

    @property
    def wr(self) -> float:
        """Latest right wheel angular velocity in rad/s."""
        return self._wr

    @property
    def w(self) -> float:
        """Latest angular velocity of the robot in rad/s."""
        return self._w

    def pose(self) -> tuple[float, float, float]:
        """Return (x, y, heading)."""
        return self.x, self.y, self.heading

    def _compute_angular_velocities(self) -> None:
        dt = tick_change(self._clock.micros(), self._prev_wheel_time)
        left = self._left_ticks()
        right = self._right_ticks()
        d_left = tick_change(left, self._left_prev)
        d_right = tick_change(right, self._right_prev)

        self._wl = int(self.left_direction) * d_left / dt * self._to_rad_per_sec
        self._wr = int(self.right_direction) * d_right / dt * self._to_rad_per_sec

        self._left_prev = left
        self._right_prev = right
        self._prev_wheel_time = self._clock.micros()

    def compute_position(self) -> bool:
        """Update the pose if the compute interval has passed; return True if it did."""
        elapsed = (self._clock.micros() - self._prev_integration_time) & _U32_MASK
        if elapsed <= self._interval:
            return False

        self._compute_angular_velocities()
        dt = tick_change(self._clock.micros(), self._prev_integration_time) / 1_000_000.0

        v_left = self._wl * self.radius
        v_right = self._wr * self.radius
        v = (v_right + v_left) / 2.0
        self._w = (v_right - v_left) / self.length

        half_turn = dt * self._w / 2
        gain = dt * v * (2 + math.cos(half_turn)) / 3
        self.x += gain * math.cos(self.heading + half_turn)
        self.y += gain * math.sin(self.heading + half_turn)
        self.heading += dt * self._w

        self._prev_integration_time = self._clock.micros()
        return True

    def reset(self) -> None:
        """Zero the pose and velocities."""
        self.x = 0.0
        self.y = 0.0
        self.heading = 0.0
        self._wl = 0.0
        self._wr = 0.0
        self._w = 0.0