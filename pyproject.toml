[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dining-philos"
version = "1.0.0"
description = "Dining philosophers simulation with threads and locks, or with processes and semaphores"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "dining philosophers",
    "concurrency",
    "simulation",
    "threads",
    "multiprocessing",
    "semaphores",
    "deadlock",
]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dining-philos = "dining_philos.simulation:main"
dining-philos-processes = "dining_philos.process_simulation:main"

[tool.hatch.build.targets.wheel]
packages = ["dining_philos"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
