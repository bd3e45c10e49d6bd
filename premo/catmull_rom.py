"""Catmull-Rom spline interpolation with a distance-stepped iterator."""

from __future__ import annotations

import math
import sys
from typing import Iterable


class CatmullRom:
    """A path of control points with an iterator that walks the spline in steps."""

    # Step size used near the last known points.
    END_STEP_SIZE = 1.0

    def __init__(self, path_x: Iterable[float] = (), path_y: Iterable[float] = ()) -> None:
        self._xs: list[float] = []
        self._ys: list[float] = []
        self._step_size = 0.0
        self._parameter_step = 0.0
        self._x = 0.0
        self._y = 0.0
        self._index = 0
        self._t = 0.0
        self.set_points(path_x, path_y)

    def set_points(self, path_x: Iterable[float], path_y: Iterable[float]) -> None:
        """Replace the control points."""
        xs = [float(v) for v in path_x]
        ys = [float(v) for v in path_y]
        if len(xs) != len(ys):
            raise ValueError("x and y coordinate sequences differ in length")
        self._xs = xs
        self._ys = ys

    def format_path(self) -> str:
        """Return the control points as a tab-separated table."""
        rule = "-" * 61
        lines = [rule, "PRINTING PATH", "x\ty\ti"]
        lines.extend(f"{x}\t{y}\t{i}" for i, (x, y) in enumerate(zip(self._xs, self._ys)))
        lines.extend(["PRINT PATH COMPLETE", rule])
        return "\n".join(lines)

    def print_path(self) -> str:
        """Write the control point table to standard output and return it."""
        text = self.format_path() + "\n"
        sys.stdout.write(text)
        return text

    def has_next(self) -> bool:
        """Return True if another forward step is possible."""
        if self._t + self._parameter_step > 1:
            return self._index + 4 < len(self._xs)
        return True

    def has_prev(self) -> bool:
        """Return True if another backward step is possible."""
        if self._t - self._parameter_step < 0:
            return self._index > 3
        return True

    def next(self) -> bool:
        """Advance the iterator one step; return False at the end."""
        if not self.has_next():
            return False
        self._t += self._parameter_step
        if self._t > 1:
            self._index += 1
            step = self.END_STEP_SIZE if self._index == len(self._xs) - 3 else self._step_size
            self._parameter_step = self.parameter_step(self._index, step)
            self._t = self._parameter_step
        self._x, self._y = self.interpolate(self._index, self._t)
        return True

    def prev(self) -> bool:
        """Move the iterator back one step; return False at the start."""
        while self.has_prev():
            self._t -= self._parameter_step
            if self._t < 0:
                self._index -= 1
                self._parameter_step = self.parameter_step(self._index, self._step_size)
                self._t = math.floor(1.0 / self._parameter_step) * self._parameter_step
            elif self._t == 0:
                continue
            self._x, self._y = self.interpolate(self._index, self._t)
            return True
        return False

    @property
    def iteration_x(self) -> float:
        """Interpolated x at the current iteration."""
        return self._x

    @property
    def iteration_y(self) -> float:
        """Interpolated y at the current iteration."""
        return self._y

    def reset_iterator(self, step_size: float) -> None:
        """Restart iteration at the second point, aiming for steps of the given distance."""
        self._index = 1
        self._t = 0.0
        self._step_size = float(step_size)
        self._parameter_step = self.parameter_step(self._index, self._step_size)
        self._x, self._y = self.interpolate(self._index, self._t)

    def point(self, i: int) -> tuple[float, float]:
        """Return the i-th control point."""
        return self._xs[i], self._ys[i]

    @property
    def path_x(self) -> tuple[float, ...]:
        """The x coordinates of the control points."""
        return tuple(self._xs)

    @property
    def path_y(self) -> tuple[float, ...]:
        """The y coordinates of the control points."""
        return tuple(self._ys)

    def __len__(self) -> int:
        return len(self._xs)

    @staticmethod
    def distance(x1: float, y1: float, x2: float, y2: float) -> float:
        """Euclidean distance between two points."""
        return math.hypot(x2 - x1, y2 - y1)

    @staticmethod
    def catmull_rom_interpolation(values, i: int, t: float) -> float:
        """Interpolate between values[i] and values[i + 1] at parameter t."""
        if i < 1 or i + 2 >= len(values):
            raise IndexError(f"segment {i} needs neighbours on both sides")
        p0, p1, p2, p3 = values[i - 1], values[i], values[i + 1], values[i + 2]
        return 0.5 * (
            t * t * t * (p3 - 3 * p2 + 3 * p1 - p0)
            + t * t * (-p3 + 4 * p2 - 5 * p1 + 2 * p0)
            + t * (p2 - p0)
            + 2 * p1
        )

    def interpolate(self, i: int, t: float) -> tuple[float, float]:
        """Interpolate the path segment starting at point i at parameter t."""
        return (
            self.catmull_rom_interpolation(self._xs, i, t),
            self.catmull_rom_interpolation(self._ys, i, t),
        )

    def parameter_step(self, i: int, target_step: float) -> float:
        """Convert a target distance on segment i into a parameter step, at most 1."""
        if i < 0 or i + 1 >= len(self._xs):
            raise IndexError(f"segment {i} is outside the path")
        distance = self.distance(self._xs[i], self._ys[i], self._xs[i + 1], self._ys[i + 1])
        if distance == 0:
            return 1.0
        step = target_step / distance
        return step if step < 1 else 1.0