"""Pure pursuit path tracking over a Catmull-Rom interpolated path."""

from __future__ import annotations

import math
from typing import Callable, Iterable

from premo.catmull_rom import CatmullRom
from premo.clock import SystemClock

_U32_MASK = 0xFFFFFFFF

PoseSource = Callable[[], "tuple[float, float, float]"]


class PurePursuit:
    """Computes the steering curvature that brings a robot onto a path.

    ``pose`` is a callable returning the robot's (x, y, heading).
    """

    MIN_PATH_LENGTH = 4
    DEFAULT_INTERPOLATION_STEP = 20.0

    def __init__(
        self,
        pose: PoseSource,
        look_ahead: float,
        interval: int = 50,
        clock=None,
    ) -> None:
        self._pose = pose
        self._look_ahead = float(look_ahead)
        self._interval = int(interval)
        self._clock = clock if clock is not None else SystemClock()
        self._interpolation_step = self.DEFAULT_INTERPOLATION_STEP
        self._path: CatmullRom | None = None
        self._stop = False
        self._prev_compute_time = 0
        self._curvature = 0.0
        self._goal_x = 0.0
        self._goal_y = 0.0

    def _require_path(self) -> CatmullRom:
        if self._path is None:
            raise RuntimeError("no path has been set")
        return self._path

    @staticmethod
    def distance(x0: float, y0: float, x1: float, y1: float) -> float:
        """Euclidean distance between two points."""
        return math.hypot(x1 - x0, y1 - y0)

    def start(self) -> None:
        """Begin following the current path from its start."""
        path = self._require_path()
        self._stop = False
        path.reset_iterator(self._interpolation_step)

    def check_stop(self) -> bool:
        """Return True once the robot has passed the end of the path."""
        return self._stop

    def compute_next_goal_point(self) -> None:
        """Advance along the path to the point closest to look-ahead distance away."""
        path = self._require_path()
        x_pos, y_pos, _ = self._pose()

        dist = math.inf
        min_dist = math.inf
        min_x, min_y = self._goal_x, self._goal_y
        while True:
            iter_x, iter_y = path.iteration_x, path.iteration_y
            prev_dist = dist
            dist = abs(self.distance(x_pos, y_pos, iter_x, iter_y) - self._look_ahead)
            if dist < min_dist:
                min_dist = dist
                min_x, min_y = iter_x, iter_y
            if prev_dist < dist or not path.has_next():
                break
            path.next()

        self._goal_x = min_x
        self._goal_y = min_y
        # Step back so the end-of-path condition can still be reached.
        if path.has_next():
            path.prev()

    @property
    def curvature(self) -> float:
        """Latest curvature computed by the pure pursuit algorithm."""
        return self._curvature

    def compute(self) -> bool:
        """Update the goal point and curvature if the interval has passed."""
        now = self._clock.millis()
        if ((now - self._prev_compute_time) & _U32_MASK) <= self._interval:
            return False
        path = self._require_path()

        x_pos, y_pos, heading = self._pose()
        phi = heading - math.pi / 2

        self.compute_next_goal_point()

        dx = self._goal_x - x_pos
        dy = self._goal_y - y_pos
        goal_rel_x = dx * math.cos(phi) + dy * math.sin(phi)
        self._curvature = 2 * goal_rel_x / self._look_ahead

        if not path.has_next():
            n = len(path)
            p0x, p0y = path.point(n - 2)
            p1x, p1y = path.point(n - 1)
            phi1 = math.atan2(p1y - p0y, p1x - p0x)
            phi2 = math.atan2(y_pos - p1y, x_pos - p1x)
            theta = abs(phi2 - phi1)
            if theta < math.pi / 2 or theta > 3 * math.pi / 2:
                self._stop = True

        self._prev_compute_time = self._clock.millis()
        return True

    def set_path(self, path_x: Iterable[float], path_y: Iterable[float]) -> None:
        """Set the control points of the path to follow."""
        xs = list(path_x)
        ys = list(path_y)
        if len(xs) < self.MIN_PATH_LENGTH:
            raise ValueError(
                f"Path length must be minimum of {self.MIN_PATH_LENGTH}"
            )
        if self._path is None:
            self._path = CatmullRom(xs, ys)
        else:
            self._path.set_points(xs, ys)

    @property
    def path(self) -> CatmullRom | None:
        """The interpolated path, or None before one is set."""
        return self._path

    @property
    def goal_x(self) -> float:
        """x of the current goal point."""
        return self._goal_x

    @property
    def goal_y(self) -> float:
        """y of the current goal point."""
        return self._goal_y

    def set_interpolation_step(self, interpolation_step: float) -> None:
        """Set the target distance between interpolated path points."""
        self._interpolation_step = float(interpolation_step)

    def print_path(self) -> None:
        """Print the control points of the path."""
        self._require_path().print_path()