[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "premo"
version = "0.1.0"
description = "Path following for differential-drive robots: dead reckoning, pure pursuit over Catmull-Rom paths and PID motor control."
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "pure-pursuit", "pid", "dead-reckoning", "catmull-rom", "path-following"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["premo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
