"""Rearranging the words of one command so that redirections come first."""

from __future__ import annotations

from mshell.quoting import is_token_char
from mshell.syntax import ShellSyntaxError

_QUOTES = "'\""
TOKEN_ERROR = "Error token"


def count_redirections(word: str) -> int:
    """Number of redirection operators outside quotes; ``<<`` and ``>>`` count once."""
    count = 0
    quote = None
    index = 0
    while index < len(word):
        ch = word[index]
        if ch in _QUOTES and (quote is None or ch == quote):
            quote = None if quote else ch
        elif is_token_char(ch) and quote is None:
            if word[index + 1:index + 2] == ch:
                index += 1
            count += 1
        index += 1
    return count


def has_dangling_operator(words: list[str]) -> bool:
    """True when a word ends in an operator with no target word after it."""
    for word, following in zip(words, [*words[1:], None]):
        if not word or not is_token_char(word[-1]):
            continue
        if following is None or (following and is_token_char(following[0])):
            return True
    return False


def _split_word(word: str) -> list[str]:
    """Cut ``word`` before every unquoted operator, keeping each operator with its target."""
    pieces: list[str] = []
    current: list[str] = []
    quote = None
    index = 0
    while index < len(word):
        ch = word[index]
        if ch in _QUOTES and (quote is None or ch == quote):
            quote = None if quote else ch
            current.append(ch)
        elif is_token_char(ch) and quote is None:
            if current:
                pieces.append("".join(current))
            current = [ch]
            if word[index + 1:index + 2] == ch:
                current.append(ch)
                index += 1
        else:
            current.append(ch)
        index += 1
    if current:
        pieces.append("".join(current))
    return pieces


def split_sticky(words: list[str]) -> list[str]:
    """Separate redirections written against other text, as in ``cat<in``."""
    return [piece for word in words for piece in _split_word(word)]


def _is_bare_operator(word: str) -> bool:
    return 1 <= len(word) <= 2 and all(is_token_char(ch) for ch in word)


def join_operators(words: list[str]) -> list[str]:
    """Glue each lone operator to the word that follows it."""
    joined: list[str] = []
    rest = iter(words)
    for word in rest:
        if _is_bare_operator(word):
            target = next(rest, None)
            joined.append(word if target is None else word + target)
        else:
            joined.append(word)
    return joined


def _is_redirection(word: str, op: str) -> bool:
    return len(word) > 1 and word[0] == op


def redirections_first(words: list[str]) -> list[str]:
    """Input redirections, then output redirections, then the other words, each in order."""
    inputs = [word for word in words if _is_redirection(word, "<")]
    outputs = [word for word in words if _is_redirection(word, ">")]
    others = [
        word for word in words
        if not (_is_redirection(word, "<") or _is_redirection(word, ">"))
    ]
    return inputs + outputs + others


def normalize(words: list[str]) -> list[str]:
    """Check, split, join and reorder the words of one command."""
    if has_dangling_operator(words):
        raise ShellSyntaxError(TOKEN_ERROR, 2)
    return redirections_first(join_operators(split_sticky(words)))