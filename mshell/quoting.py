"""Quote handling and word splitting."""

from __future__ import annotations

import string

_QUOTES = "'\""
_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def remove_quotes(word: str) -> str:
    """Strip quote pairs from ``word``, keeping what they enclose."""
    if "'" not in word and '"' not in word:
        return word
    out = []
    quote = None
    for ch in word:
        if quote:
            if ch == quote:
                quote = None
            else:
                out.append(ch)
        elif ch in _QUOTES:
            quote = ch
        else:
            out.append(ch)
    return "".join(out)


def remove_quotes_all(words: list[str]) -> list[str]:
    """Strip quotes from every word."""
    return [remove_quotes(word) for word in words]


def is_token_char(char: str) -> bool:
    """True for the redirection characters ``<`` and ``>``."""
    return char in ("<", ">")


def is_valid_key(name: str) -> bool:
    """True when ``name`` holds only ASCII letters, digits and underscores."""
    return all(ch in _KEY_CHARS for ch in name)


def count_unquoted(text: str, char: str) -> int:
    """Count occurrences of ``char`` outside quotes."""
    count = 0
    quote = None
    for ch in text:
        if ch in _QUOTES:
            if quote == ch:
                quote = None
            elif quote is None:
                quote = ch
        elif ch == char and quote is None:
            count += 1
    return count


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs outside quotes, keeping the quotes in the words."""
    words = []
    current: list[str] = []
    quote = None
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
            current.append(ch)
        elif ch in " \t":
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        words.append("".join(current))
    return words