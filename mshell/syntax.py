"""Checks that reject a command line before it is parsed."""

from __future__ import annotations

from collections.abc import Iterator

from mshell.errors import ShellError
from mshell.quoting import split_words

SYNTAX_ERROR = "bash: syntax error near unexpected token"
QUOTE_ERROR = "bash: syntax error quote not closed \"'\" or '\"'"
DOT_ERROR = (
    "bash: .: filename argument required\n"
    ".: usage: . filename [arguments]"
)
SYNTAX_STATUS = 2


class ShellSyntaxError(ShellError):
    """A command line that cannot be run as written."""


def _fail(message: str) -> None:
    raise ShellSyntaxError(message, SYNTAX_STATUS)


def unexpected_token_message(line: str, pos: int, char: str) -> str:
    """Message naming the run of ``char`` that starts at ``pos`` in ``line``."""
    end = pos
    while end < len(line) and line[end] == char:
        end += 1
    return f"{SYNTAX_ERROR} `{line[pos:end]}'"


def _unquoted(line: str) -> Iterator[tuple[int, str]]:
    """Yield index and character of everything outside quotes, quotes excluded."""
    quote = None
    for index, ch in enumerate(line):
        if ch in "'\"":
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
        elif quote is None:
            yield index, ch


def quotes_balanced(line: str) -> bool:
    """True when every single and double quote in ``line`` is closed."""
    single = double = False
    prev = ""
    for ch in line:
        if ch == "'":
            if not double or prev == "\\":
                single = not single
        elif ch == '"':
            if not single or prev == "\\":
                double = not double
        prev = ch
    return not single and not double


def check_redirections(line: str) -> str:
    """Reject ``<<<`` and ``>>>`` outside quotes; return the line unchanged."""
    for index, ch in _unquoted(line):
        if ch in "<>" and line.startswith(ch * 3, index):
            _fail(unexpected_token_message(line, index + 2, ch))
    return line


def check_pipes(line: str) -> str:
    """Reject pipes at either end, empty pipeline stages and ``||``."""
    words = split_words(line)
    if not words:
        return line
    first, last = words[0], words[-1]
    if first.startswith("|"):
        _fail(unexpected_token_message(first, 0, "|"))
    if last.endswith("|"):
        _fail(unexpected_token_message(last, len(last) - 1, "|"))
    for current, following in zip(words, words[1:]):
        if current.endswith("|") and following.startswith("|"):
            _fail(unexpected_token_message(following, 0, "|"))
    for index, ch in _unquoted(line):
        if ch == "|" and line[index + 1:index + 2] == "|":
            _fail(unexpected_token_message(line, index + 1, "|"))
    return line


def check_line(line: str) -> str:
    """Run every syntax check; raise ShellSyntaxError or return the line."""
    if line == ".":
        _fail(DOT_ERROR)
    if not quotes_balanced(line):
        _fail(QUOTE_ERROR)
    check_redirections(line)
    check_pipes(line)
    return line