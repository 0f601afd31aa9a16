"""Finding the program file that a command name refers to."""

from __future__ import annotations

import os

from mshell.builtins import is_builtin
from mshell.environment import Environment
from mshell.errors import ShellError, format_error


def search_path(env: Environment) -> list[str] | None:
    """Directories listed in PATH, empty entries dropped; None when PATH is unset."""
    path = env.get("PATH")
    if path is None:
        return None
    return [entry for entry in path.split(":") if entry]


def _check_explicit(name: str) -> str:
    if os.path.isdir(name):
        raise ShellError(format_error(name, ": Is a directory"), 126)
    if not os.path.exists(name):
        raise ShellError(format_error(name, ": No such file or directory"), 127)
    if not os.access(name, os.X_OK | os.R_OK):
        raise ShellError(format_error(name, ": Permission denied"), 126)
    return name


def resolve_command(name: str, search_dirs: list[str] | None) -> str:
    """Path of the program to run for ``name``; builtins resolve to themselves.

    Raises ShellError with status 126 or 127 when no runnable file is found.
    """
    if name and (name.startswith("/") or name.startswith("./") or name.endswith("/")):
        return _check_explicit(name)
    if is_builtin(name):
        return name
    not_found = ShellError(format_error(name, ": command not found"), 127)
    if search_dirs is None or not name:
        raise not_found
    for directory in search_dirs:
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    raise not_found