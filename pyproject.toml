[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "memtrace"
version = "0.1.0"
description = "Wire the memtrace MCP server into AI coding agents, with project health-check helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "memory",
    "ai",
    "coding-agents",
    "mcp",
    "configuration",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
memtrace-setup = "memtrace.agents:main"

[tool.hatch.build.targets.wheel]
packages = ["memtrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
