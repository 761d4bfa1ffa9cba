[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tankbattle"
version = "0.1.0"
description = "Turn-based tank battle simulation on a wrapping grid with offensive and defensive AI players"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "tanks", "simulation", "turn-based", "ai"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tankbattle"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
