[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spiritflow"
version = "0.1.0"
description = "Kinematics, beam and particle identification, event selection and histogram helpers for heavy-ion TPC analysis"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["physics", "heavy-ion", "tpc", "particle-identification", "histogram", "kinematics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spiritflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
