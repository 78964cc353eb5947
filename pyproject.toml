[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "icetux"
version = "0.1.1"
description = "Game-logic core of a small penguin platformer: bitmask collisions, tile maps, enemy kinds, levels and saved settings"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "platformer", "tilemap", "collision", "bitmask", "s-expression", "level"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["icetux"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
