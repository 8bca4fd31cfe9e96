[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jerkplan"
version = "0.1.0"
description = "Building blocks for jerk-limited motion profiles over multiple degrees of freedom, plus small robot board utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["trajectory", "motion profile", "jerk", "robotics", "kinematics", "encoder"]
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
packages = ["jerkplan"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
