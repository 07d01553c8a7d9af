[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridmapping"
version = "0.1.0"
description = "Building blocks for grid-based particle-filter mapping: poses, occupancy grids, scan-matching cells, resampling and statistics"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["slam", "occupancy grid", "particle filter", "robotics", "mapping", "icp", "resampling"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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
packages = ["gridmapping"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
