[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "backgammon-board"
version = "1.0.0"
description = "Backgammon board state, move rules, action log and match record export"
requires-python = ">=3.10"
dependencies = []
keywords = ["backgammon", "board game", "game engine", "match record", "dice"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["backgammon_board"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
