# premo

Path following for two-wheeled, differential-drive robots.

`premo` combines:

- **dead reckoning** from wheel encoder ticks (`premo.dead_reckoner.DeadReckoner`),
- **Catmull-Rom interpolation** of a sparse list of waypoints (`premo.catmull_rom.CatmullRom`),
- the **pure pursuit** algorithm, which picks a goal point on the path and a steering
  curvature (`premo.pure_pursuit.PurePursuit`),
- a **PID controller** (`premo.pid.PID`) used for steering and for wheel speed during
  in-place turns,

and ties them together in `premo.controller.PreMo`.

## Installation

```
pip install .
```

It needs nothing outside the standard library.

## Hardware hooks

`PreMo` never talks to hardware itself. You provide:

- an `EncoderManager` (`premo.encoder_manager`), holding the ticks per revolution of your
  encoders and the left and right tick counters. Counters are unsigned 32-bit values that
  wrap around. Your interrupt or polling code calls `tick_left(count)` and
  `tick_right(count)`.
- a `MotorManager` (`premo.motor_manager`), built from five callables: left forward,
  left reverse, right forward, right reverse (each given an integer motor value) and stop.
  Speed percentages are scaled with `premo.clock.map_range` into the range set by
  `set_speed_limits(minimum, maximum)`, 0–255 by default.
- optionally a clock (`premo.clock`). `SystemClock`, the default, uses the monotonic
  clock. `ManualClock(start)` only moves when you call `advance(microseconds)`, which makes
  simulations and tests deterministic. Both count microseconds and wrap at 2**32.

## Example

```python
from premo.clock import ManualClock
from premo.controller import PreMo
from premo.encoder_manager import EncoderManager
from premo.motor_manager import MotorManager

clock = ManualClock(0)
encoders = EncoderManager(360)

def log(name):
    return lambda value: print(name, value)

motors = MotorManager(
    log("left forward"), log("left reverse"),
    log("right forward"), log("right reverse"),
    lambda: print("stop"),
)

robot = PreMo(
    radius=30.0, length=150.0,      # wheel radius and wheel spacing, in mm
    kp=0.1, kd=0.0,                 # steering PID
    kp_motor=1.0, ki_motor=0.5,     # wheel-speed PID used while twisting
    motor_manager=motors, encoder_manager=encoders, clock=clock,
)

robot.go_to(1000.0, 500.0)
for _ in range(1000):
    if not robot.is_following_path:
        break
    clock.advance(10_000)           # 10 ms
    # feed encoder ticks here with encoders.tick_left(n) / encoders.tick_right(n)
    robot.loop()

print(robot.location_data())        # (x, y, heading, goal_x, goal_y)
```

Call `loop()` often. It updates the position estimate (at most every 50 ms) and then
continues the path being followed or the twist in progress.

### Motions

- `forward(distance)` and `reverse(distance)` drive in a straight line from the current pose.
- `go_to(x, y)` and `go_to_delta(delta_x, delta_y)` drive along a straight path to a point.
- `start_path_following(path_x, path_y, is_forward=True, set_location=True)` follows your
  own waypoints. At least four points are needed; fewer raises `ValueError`. With
  `set_location` the robot is placed at the first point, facing the second.
- `twist(target_heading, direction)` turns in place to a heading in degrees. `direction`
  is a `TwistDirection`: `CCW`, `CW`, or `MIN` (the shorter way, the default).
  `twist_delta(angle)` turns by a relative angle in degrees; positive is counter-clockwise.
  `twist_both_motors(enabled)` chooses whether both wheels turn in opposition or only one.
- `stop()` stops the motors. `reset()` also zeroes the pose.

### Tuning and state

- `set_pid_path_following(kp, kd, ki)` and `set_pid_motor(kp, kd, ki)` change the gains.
- `set_path_follow_speed(speed_percentage)` sets the wheel speed while following a path
  (85 % by default).
- `x`, `y` (both settable), `heading` (radians), `goal_x`, `goal_y`, `output` and
  `is_following_path` are properties; `location_data()` returns them as a tuple.
- `print_path()` writes the current waypoints as a table to standard output.

The building blocks can be used on their own: `CatmullRom` iterates over a spline with
`reset_iterator(step_size)`, `next()` and `prev()`; `PID` takes `input` and `setpoint`,
and `compute()` updates `output` once per sample time; `DeadReckoner.compute_position()`
integrates tick counts into `pose()`.

## What it does not do

The package has no command-line program and does no hardware input or output of its own:
reading encoders and driving motors is left to the callables and counters you provide.
Positions are estimated from wheel ticks alone, with no other sensors.

## Tests

```
pip install .[test]
pytest
```