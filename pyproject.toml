[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lapjv"
version = "0.2.1"
description = "Linear assignment problem solver using the Jonker-Volgenant algorithm"
requires-python = ">=3.10"
dependencies = []
keywords = ["assignment", "lap", "jonker-volgenant", "optimization", "shortest augmenting path"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lapjv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
