"""Here-documents: counting them, naming their files and reading their bodies."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterable

from mshell.expansion import expand_heredoc_line
from mshell.state import ShellState

FIRST_NUMBER = 2147483647
HEREDOC_PROMPT = "> "

ReadLine = Callable[[str], "str | None"]


def count_heredocs(words: list[str]) -> int:
    """Count ``<<`` words among the input redirections that open a command."""
    count = 0
    for word in words:
        if not word.startswith("<"):
            break
        if word.startswith("<<"):
            count += 1
    return count


def allocate_names(count: int, directory: str | os.PathLike[str] = ".") -> list[str]:
    """Pick ``count`` hidden file paths in ``directory`` that do not exist yet.

    Numbers are tried from the largest 32-bit signed value downwards.
    """
    names: list[str] = []
    number = FIRST_NUMBER
    while len(names) < count:
        candidate = os.path.join(directory, f".{number}")
        number -= 1
        if os.path.exists(candidate) or candidate in names:
            continue
        names.append(candidate)
    return names


def read_heredoc(
    path: str | os.PathLike[str],
    delimiter: str,
    raw_delimiter: str,
    state: ShellState,
    read_line: ReadLine,
) -> None:
    """Read lines until ``delimiter`` and write them to ``path``.

    Variables are expanded unless the delimiter was written with quotes.
    """
    expand = "'" not in raw_delimiter and '"' not in raw_delimiter
    with open(path, "w", encoding="utf-8") as handle:
        while True:
            line = read_line(HEREDOC_PROMPT)
            if line is None:
                sys.stdout.write(
                    "warning: here-document delimited by end-of-file "
                    f"(wanted `{delimiter}')\n"
                )
                break
            if line == delimiter:
                break
            if expand and "$" in line:
                line = expand_heredoc_line(line, state.env, state.status)
            handle.write(line + "\n")


def remove_files(paths: Iterable[str | os.PathLike[str]]) -> None:
    """Delete every path that exists; missing files are ignored."""
    for path in paths:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass