[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coflow"
version = "0.1.0"
description = "Structured asyncio building blocks: lazy tasks, fail-fast joins, scoped teardown and event-loop threads."
requires-python = ">=3.11"
dependencies = []
keywords = ["asyncio", "coroutines", "structured-concurrency", "cancellation", "tasks", "threads"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["coflow"]

[tool.pytest.ini_options]
addopts = "-ra"
