[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minirel"
version = "0.1.0"
description = "Building blocks of a small relational database engine: slotted pages, run-based sorting, partitioning, column printing and a query-language front end"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "database",
    "relational",
    "slotted page",
    "external sort",
    "partitioning",
    "query language",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
minirel-testdata = "minirel.testdata:main"

[tool.hatch.build.targets.wheel]
packages = ["minirel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
