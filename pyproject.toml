[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "choretracker"
version = "0.1.3"
description = "Track recurring chores with cron-style schedules"
requires-python = ">=3.11"
dependencies = [
    "platformdirs",
]
keywords = ["chores", "cron", "crontab", "scheduling", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
choretracker = "choretracker.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["choretracker"]

[tool.pytest.ini_options]
addopts = "-ra"
