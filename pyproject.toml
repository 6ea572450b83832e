[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "harvestcli"
version = "0.1.0"
description = "Building blocks for a Harvest time-tracking command line: configuration, date parsing, output formatting and terminal prompts."
requires-python = ">=3.10"
dependencies = [
    "python-dateutil",
]
keywords = ["harvest", "time-tracking", "timesheet", "cli", "configuration"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
harvest-version = "harvestcli.version:main"

[tool.hatch.build.targets.wheel]
packages = ["harvestcli"]

[tool.hatch.build.targets.sdist]
include = ["harvestcli", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
