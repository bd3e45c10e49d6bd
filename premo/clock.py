"""Time sources with 32-bit wrap-around tick counters, and integer range mapping."""

from __future__ import annotations

import math
import time

_U32_MASK = 0xFFFFFFFF

PI = math.pi
TWO_PI = math.tau
RAD_TO_DEG = 180.0 / math.pi


class SystemClock:
    """Microsecond tick counter backed by the monotonic clock; wraps at 2**32."""

    def micros(self) -> int:
        """Return the current tick count in microseconds."""
        return (time.monotonic_ns() // 1000) & _U32_MASK

    def millis(self) -> int:
        """Return the current tick count in milliseconds."""
        return self.micros() // 1000


class ManualClock:
    """A clock that only moves when told to; useful for simulation and tests."""

    def __init__(self, start: int = 0) -> None:
        self._ticks = int(start) & _U32_MASK

    def micros(self) -> int:
        """Return the current tick count in microseconds."""
        return self._ticks

    def millis(self) -> int:
        """Return the current tick count in milliseconds."""
        return self._ticks // 1000

    def advance(self, microseconds: int) -> None:
        """Move the clock forward, wrapping at 2**32 microseconds."""
        if microseconds < 0:
            raise ValueError("a clock cannot move backwards")
        self._ticks = (self._ticks + int(microseconds)) & _U32_MASK


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def map_range(x, in_min, in_max, out_min, out_max) -> int:
    """Linearly re-map an integer from one range to another.

    All arguments are truncated to integers and the division truncates
    toward zero, so results are not clamped to the output range.
    """
    x, in_min, in_max, out_min, out_max = (
        int(v) for v in (x, in_min, in_max, out_min, out_max)
    )
    if in_min == in_max:
        raise ValueError("input range is empty")
    return _truncating_div((x - in_min) * (out_max - out_min), in_max - in_min) + out_min