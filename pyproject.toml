[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "logly"
version = "0.1.0"
description = "A small append-only log with in-memory and file-backed storage and a JSON-over-HTTPS API"
requires-python = ">=3.10"
dependencies = []
keywords = ["log", "append-only", "commit-log", "storage", "http", "index"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
logly = "logly.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["logly"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
