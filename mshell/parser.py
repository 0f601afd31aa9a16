"""Turning a command line into words or pipeline segments."""

from __future__ import annotations

from mshell.quoting import count_unquoted, split_words
from mshell.redirection import normalize
from mshell.syntax import check_line


def _split_unquoted(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    quote = None
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
            current.append(ch)
        elif ch == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def split_pipeline(line: str) -> list[str]:
    """Split at unquoted pipes; each segment is normalized and rejoined with spaces."""
    return [
        " ".join(normalize(split_words(segment)))
        for segment in _split_unquoted(line, "|")
    ]


def parse(line: str) -> list[str]:
    """Check ``line`` and return its words, or its segments when it holds a pipe."""
    check_line(line)
    if count_unquoted(line, "|"):
        return split_pipeline(line)
    return normalize(split_words(line))