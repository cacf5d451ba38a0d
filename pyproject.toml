[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glance"
version = "0.1.0"
description = "Summarise long command output into head, tail and regex-matched lines, with stored captures to drill into"
requires-python = ">=3.10"
dependencies = []
keywords = ["cli", "logs", "summarizer", "filter", "llm", "pipe"]
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
    "Topic :: Text Processing :: Filters",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
glance = "glance.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["glance"]

[tool.pytest.ini_options]
addopts = "-ra"
