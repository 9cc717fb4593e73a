[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bongoquery"
version = "1.0.0"
description = "Front-end helpers for a small SQL engine: script splitting, CLI options, REPL input and history, CHECK-constraint text helpers and result formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "repl", "query", "script", "cli", "formatting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bongoquery"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
