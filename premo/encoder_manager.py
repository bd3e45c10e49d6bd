"""Wheel encoder tick counters for a differential-drive robot."""

from __future__ import annotations

_U32_MASK = 0xFFFFFFFF


class EncoderManager:
    """Holds the running tick counts of the left and right wheel encoders.

    Counts are unsigned 32-bit values that wrap around, like a hardware counter.
    Encoder interrupt handlers call :meth:`tick_left` and :meth:`tick_right`;
    consumers read the counts through :meth:`read_left` and :meth:`read_right`.
    """

    def __init__(self, ticks_per_rev: int, left: int = 0, right: int = 0) -> None:
        self.ticks_per_rev = int(ticks_per_rev)
        self._left = int(left) & _U32_MASK
        self._right = int(right) & _U32_MASK

    def read_left(self) -> int:
        """Return the total tick count of the left encoder."""
        return self._left

    def read_right(self) -> int:
        """Return the total tick count of the right encoder."""
        return self._right

    def tick_left(self, count: int = 1) -> None:
        """Add ticks to the left encoder count."""
        self._left = (self._left + int(count)) & _U32_MASK

    def tick_right(self, count: int = 1) -> None:
        """Add ticks to the right encoder count."""
        self._right = (self._right + int(count)) & _U32_MASK