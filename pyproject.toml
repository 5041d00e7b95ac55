[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bwmeter"
version = "0.1.0"
description = "Building blocks for network bandwidth measurement: unit parsing and formatting, timers, socket helpers and TCP info"
requires-python = ">=3.10"
dependencies = []
keywords = ["bandwidth", "throughput", "network", "tcp", "sockets", "timers", "measurement"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bwmeter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
