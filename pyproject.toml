[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "usersvc"
version = "0.1.0"
description = "Domain layer of a user and staff directory service: users, staff, roles, configuration, event handling and a health endpoint."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["users", "staff", "roles", "directory", "domain-service", "events"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["usersvc"]

[tool.hatch.build.targets.sdist]
include = ["usersvc", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
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
