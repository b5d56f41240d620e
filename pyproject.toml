[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robofilters"
version = "0.1.0"
description = "Kalman, extended Kalman and particle filters for planar mobile-robot state estimation"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "kalman-filter",
    "extended-kalman-filter",
    "particle-filter",
    "state-estimation",
    "robotics",
    "odometry",
    "imu",
]
classifiers = [
    "Development Status :: 3 - Alpha",
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
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["robofilters"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
