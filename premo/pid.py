"""PID controller with proportional-on-error or proportional-on-measurement."""

from __future__ import annotations

import enum

from premo.clock import SystemClock

_U32_MASK = 0xFFFFFFFF


class Mode(enum.IntEnum):
    MANUAL = 0
    AUTOMATIC = 1


class Direction(enum.IntEnum):
    DIRECT = 0
    REVERSE = 1


class ProportionalOn(enum.IntEnum):
    MEASUREMENT = 0
    ERROR = 1


def _clamp(value: float, low: float, high: float) -> float:
    if value > high:
        return high
    if value < low:
        return low
    return value


class PID:
    """A discrete PID controller.

    Set ``input`` and ``setpoint``, call :meth:`compute` often, and read
    ``output``. The calculation only runs once per sample time.
    """

    def __init__(
        self,
        kp: float,
        ki: float,
        kd: float,
        direction: Direction = Direction.DIRECT,
        p_on: ProportionalOn = ProportionalOn.ERROR,
        clock=None,
    ) -> None:
        self.input = 0.0
        self.output = 0.0
        self.setpoint = 0.0

        self._clock = clock if clock is not None else SystemClock()
        self._in_auto = False
        self._output_sum = 0.0
        self._last_input = 0.0
        self._out_min = 0.0
        self._out_max = 255.0
        self._sample_time = 100
        self._direction = Direction(direction)
        self._p_on = ProportionalOn(p_on)
        self._p_on_e = self._p_on == ProportionalOn.ERROR
        self._disp_kp = self._disp_ki = self._disp_kd = 0.0
        self._kp = self._ki = self._kd = 0.0

        self.set_output_limits(0, 255)
        self.set_controller_direction(direction)
        self.set_tunings(kp, ki, kd, p_on)
        self._last_time = (self._clock.millis() - self._sample_time) & _U32_MASK

    def compute(self) -> bool:
        """Run one step if in automatic mode and the sample time has passed."""
        if not self._in_auto:
            return False
        now = self._clock.millis()
        if ((now - self._last_time) & _U32_MASK) < self._sample_time:
            return False

        value = self.input
        error = self.setpoint - value
        d_input = value - self._last_input
        self._output_sum += self._ki * error
        if not self._p_on_e:
            self._output_sum -= self._kp * d_input
        self._output_sum = _clamp(self._output_sum, self._out_min, self._out_max)

        output = self._kp * error if self._p_on_e else 0.0
        output += self._output_sum - self._kd * d_input
        self.output = _clamp(output, self._out_min, self._out_max)

        self._last_input = value
        self._last_time = now
        return True

    def set_tunings(self, kp: float, ki: float, kd: float, p_on=None) -> None:
        """Change the gains; negative gains are ignored."""
        if kp < 0 or ki < 0 or kd < 0:
            return
        if p_on is not None:
            self._p_on = ProportionalOn(p_on)
        self._p_on_e = self._p_on == ProportionalOn.ERROR

        self._disp_kp, self._disp_ki, self._disp_kd = kp, ki, kd
        sample_seconds = self._sample_time / 1000
        self._kp = kp
        self._ki = ki * sample_seconds
        self._kd = kd / sample_seconds
        if self._direction == Direction.REVERSE:
            self._kp, self._ki, self._kd = -self._kp, -self._ki, -self._kd

    def set_sample_time(self, sample_time: int) -> None:
        """Set the calculation period in milliseconds; non-positive values are ignored."""
        if sample_time > 0:
            ratio = sample_time / self._sample_time
            self._ki *= ratio
            self._kd /= ratio
            self._sample_time = int(sample_time)

    def set_output_limits(self, minimum: float, maximum: float) -> None:
        """Clamp the output to [minimum, maximum]; an empty range is ignored."""
        if minimum >= maximum:
            return
        self._out_min = minimum
        self._out_max = maximum
        if self._in_auto:
            self.output = _clamp(self.output, minimum, maximum)
            self._output_sum = _clamp(self._output_sum, minimum, maximum)

    def set_mode(self, mode: Mode) -> None:
        """Switch between manual and automatic; entering automatic is bumpless."""
        new_auto = mode == Mode.AUTOMATIC
        if new_auto and not self._in_auto:
            self._initialize()
        self._in_auto = new_auto

    def _initialize(self) -> None:
        self._output_sum = _clamp(self.output, self._out_min, self._out_max)
        self._last_input = self.input

    def set_controller_direction(self, direction: Direction) -> None:
        """Set whether output acts directly or in reverse on the process."""
        direction = Direction(direction)
        if self._in_auto and direction != self._direction:
            self._kp, self._ki, self._kd = -self._kp, -self._ki, -self._kd
        self._direction = direction

    @property
    def kp(self) -> float:
        """Proportional gain as last accepted."""
        return self._disp_kp

    @property
    def ki(self) -> float:
        """Integral gain as last accepted."""
        return self._disp_ki

    @property
    def kd(self) -> float:
        """Derivative gain as last accepted."""
        return self._disp_kd

    @property
    def mode(self) -> Mode:
        """Current mode."""
        return Mode.AUTOMATIC if self._in_auto else Mode.MANUAL

    @property
    def direction(self) -> Direction:
        """Current controller direction."""
        return self._direction