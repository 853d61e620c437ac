[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuzzyfind"
version = "0.27.0"
description = "Fuzzy and exact matching with relevance scoring, ANSI color extraction, result merging and query history"
requires-python = ">=3.10"
dependencies = []
keywords = ["fuzzy", "matching", "finder", "search", "ansi", "scoring"]
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
    "Topic :: Utilities",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fuzzyfind"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
