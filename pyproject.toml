[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyshell"
version = "0.1.0"
description = "A small interactive command shell with pipelines, background jobs, history, script files and timed command reports"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "command-line", "pipeline", "history", "terminal", "ansi"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinyshell = "tinyshell.shell:main"
tinyshell-fib = "tinyshell.fib:main"
tinyshell-hello = "tinyshell.hello:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyshell"]

[tool.pytest.ini_options]
addopts = "-ra"
