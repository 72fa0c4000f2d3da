[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdk"
version = "0.1.0"
description = "Small server toolkit: config files, IO buffers, queues, signals, tasks, threads, logging and socket helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["config", "buffer", "queue", "thread-pool", "logger", "socket", "toolkit"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mdk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
