[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "todokit"
version = "2.16.0"
description = "Task management library: tasks with priorities, tags, projects, due dates, recurrence, dependencies, JSON storage and git sync"
requires-python = ">=3.11"
keywords = ["todo", "task-manager", "productivity", "recurrence", "dependencies"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "platformdirs",
    "filelock",
    "termcolor",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["todokit"]

[tool.hatch.build.targets.sdist]
include = ["todokit", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
