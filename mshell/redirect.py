"""Splitting a command into redirections and arguments, and opening its files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import BinaryIO

from mshell.errors import ShellError, format_error
from mshell.quoting import remove_quotes_all


@dataclass(frozen=True)
class Redirection:
    """One redirection: operator, target with quotes removed, target as written."""

    op: str
    target: str
    raw: str

    @property
    def is_heredoc(self) -> bool:
        return self.op == "<<"

    @property
    def is_append(self) -> bool:
        return self.op == ">>"

    @classmethod
    def from_word(cls, word: str) -> "Redirection":
        op = word[:2] if word[1:2] == word[0] else word[0]
        raw = word[len(op):]
        return cls(op, remove_quotes_all([raw])[0], raw)


@dataclass
class CommandSpec:
    """Input redirections, output redirections and arguments of one command."""

    inputs: list[Redirection] = field(default_factory=list)
    outputs: list[Redirection] = field(default_factory=list)
    argv: list[str] = field(default_factory=list)

    @property
    def heredocs(self) -> list[Redirection]:
        return [redir for redir in self.inputs if redir.is_heredoc]


@dataclass
class Streams:
    """Files that replace standard input and output; None keeps the inherited one."""

    stdin: BinaryIO | None = None
    stdout: BinaryIO | None = None

    def close(self) -> None:
        for handle in (self.stdin, self.stdout):
            if handle is not None:
                handle.close()

    def __enter__(self) -> "Streams":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def parse_command(words: list[str]) -> CommandSpec:
    """Read the leading redirections of normalized ``words``; the rest, unquoted, is argv."""
    spec = CommandSpec()
    index = 0
    while index < len(words) and words[index][:1] in ("<", ">"):
        redir = Redirection.from_word(words[index])
        (spec.inputs if redir.op.startswith("<") else spec.outputs).append(redir)
        index += 1
    spec.argv = remove_quotes_all(words[index:])
    return spec


def missing_input(spec: CommandSpec) -> str | None:
    """Name of the first input file that does not exist, here-documents aside."""
    for redir in spec.inputs:
        if not redir.is_heredoc and not os.path.exists(redir.target):
            return redir.target
    return None


def _denied(name: str) -> ShellError:
    return ShellError(format_error(name, ": Permission denied"), 1)


def _open_input(spec: CommandSpec, heredoc_paths: list[str]) -> BinaryIO | None:
    if not spec.inputs:
        return None
    last = spec.inputs[-1]
    path = heredoc_paths[len(spec.heredocs) - 1] if last.is_heredoc else last.target
    try:
        return open(path, "rb")
    except OSError as err:
        raise _denied(last.target) from err


def open_streams(spec: CommandSpec, heredoc_paths: list[str]) -> Streams:
    """Open the last input and every output in order, keeping the last output.

    ``heredoc_paths`` holds the files of this command's here-documents, in order.
    Raises ShellError with status 1 for a missing or unreadable file.
    """
    missing = missing_input(spec)
    if missing is not None:
        raise ShellError(format_error(missing, ": No such file or directory"), 1)
    streams = Streams(stdin=_open_input(spec, heredoc_paths))
    try:
        for redir in spec.outputs:
            if streams.stdout is not None:
                streams.stdout.close()
                streams.stdout = None
            try:
                streams.stdout = open(redir.target, "ab" if redir.is_append else "wb")
            except OSError as err:
                raise _denied(redir.target) from err
    except ShellError:
        streams.close()
        raise
    return streams