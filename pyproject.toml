[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mshell"
version = "0.1.0"
description = "A small interactive Unix shell with pipes, redirections, here-documents and variable expansion"
requires-python = ">=3.10"
keywords = ["shell", "repl", "pipes", "redirection", "heredoc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mshell = "mshell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["mshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
