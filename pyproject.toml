[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "roughenough"
version = "2.0.0"
description = "Roughtime client building blocks: key decoding, server lists, causality checks, malfeasance reports and load statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["roughtime", "time-sync", "ntp", "causality", "malfeasance"]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: System :: Networking :: Time Synchronization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
roughenough-e2e = "roughenough.e2e:main"

[tool.hatch.build.targets.wheel]
packages = ["roughenough"]

[tool.hatch.build.targets.sdist]
include = ["roughenough", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
