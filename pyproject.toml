[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kernelwire"
version = "0.1.0"
description = "Wire protocol, process control blocks and socket helpers for a small teaching operating-system simulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["serialization", "sockets", "pcb", "operating-system", "protocol", "handshake"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kernelwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
