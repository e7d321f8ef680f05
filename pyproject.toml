[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "o1agent"
version = "0.1.0"
description = "O1 management agent for an O-RAN distributed unit: alarms, cell state and NETCONF configuration handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["o-ran", "o1", "netconf", "yang", "alarms", "5g", "gnb"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["o1agent"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
