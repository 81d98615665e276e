[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nachosthreads"
version = "0.1.0"
description = "A teaching kernel of cooperatively switched threads with a FIFO scheduler, semaphores, locks, condition variables and synchronized lists"
requires-python = ">=3.10"
dependencies = []
keywords = ["operating-systems", "threads", "scheduler", "semaphore", "condition-variable", "teaching"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nachosthreads = "nachosthreads.kernel:main"

[tool.hatch.build.targets.wheel]
packages = ["nachosthreads"]

[tool.pytest.ini_options]
addopts = "-ra"
