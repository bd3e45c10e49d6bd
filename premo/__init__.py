"""Dead reckoning, Catmull-Rom paths, pure pursuit and PID control for differential-drive robots."""

__version__ = "0.1.0"

__all__ = [
    "catmull_rom",
    "clock",
    "controller",
    "dead_reckoner",
    "encoder_manager",
    "motor_manager",
    "pid",
    "pure_pursuit",
]