"""Motor command dispatch with percentage-to-drive-value scaling."""

from __future__ import annotations

from typing import Callable

from premo.clock import map_range

SpeedCommand = Callable[[int], None]
StopCommand = Callable[[], None]


class MotorManager:
    """Turns speed percentages into drive values and passes them to motor callbacks."""

    def __init__(
        self,
        left_forward: SpeedCommand,
        left_reverse: SpeedCommand,
        right_forward: SpeedCommand,
        right_reverse: SpeedCommand,
        stop: StopCommand,
    ) -> None:
        self._left_forward = left_forward
        self._left_reverse = left_reverse
        self._right_forward = right_forward
        self._right_reverse = right_reverse
        self._stop = stop
        self._min = 0
        self._max = 255

    def set_speed_limits(self, minimum: int, maximum: int) -> None:
        """Set the drive values that 0 % and 100 % map to."""
        self._min = int(minimum)
        self._max = int(maximum)

    @property
    def min_speed(self) -> int:
        """Drive value for 0 %."""
        return self._min

    @property
    def max_speed(self) -> int:
        """Drive value for 100 %."""
        return self._max

    def _scale(self, speed: float) -> int:
        return map_range(speed, 0, 100, self._min, self._max)

    def left_forward(self, speed: float) -> None:
        """Drive the left wheel forward at a percentage of full speed."""
        self._left_forward(self._scale(speed))

    def left_reverse(self, speed: float) -> None:
        """Drive the left wheel backward at a percentage of full speed."""
        self._left_reverse(self._scale(speed))

    def right_forward(self, speed: float) -> None:
        """Drive the right wheel forward at a percentage of full speed."""
        self._right_forward(self._scale(speed))

    def right_reverse(self, speed: float) -> None:
        """Drive the right wheel backward at a percentage of full speed."""
        self._right_reverse(self._scale(speed))

    def stop(self) -> None:
        """Stop both motors."""
        self._stop()