"""Expansion of ``$NAME`` and ``$?`` in words, here-document lines and pipeline segments."""

from __future__ import annotations

from mshell.environment import Environment
from mshell.quoting import split_words


def _is_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _toggle_quotes(ch: str, single: bool, double: bool) -> tuple[bool, bool]:
    """Track whether the scan is inside single or double quotes."""
    if ch == '"' and not single:
        double = not double
    if ch == "'" and not double:
        single = not single
    return single, double


def _lookup(env: Environment, name: str) -> str | None:
    return env.get(name) if name else None


def variable_name(text: str, start: int) -> tuple[str, int]:
    """Read a variable name at ``start``; return it and the index just past it.

    A name is made of ASCII letters, digits and underscores; a leading digit
    forms a name of its own, as in ``$1``.
    """
    end = start
    while end < len(text) and (_is_alnum(text[end]) or text[end] == "_"):
        end += 1
        if end - start == 1 and text[start].isdigit():
            break
    return text[start:end], end


def expand_word(word: str, env: Environment, status: int) -> list[str]:
    """Expand one word of a simple command.

    When a variable was substituted the result is split into words again,
    so it may yield several words or none at all.
    """
    out: list[str] = []
    single = double = False
    found = False
    heredoc = word.startswith("<<")
    i = 0
    while i < len(word):
        ch = word[i]
        single, double = _toggle_quotes(ch, single, double)
        if ch != "$":
            out.append(ch)
            i += 1
            continue
        nxt = word[i + 1:i + 2]
        literal = (
            single
            or nxt in ("", " ")
            or (double and nxt in (" ", '"', "'"))
            or ((" " in word or double) and nxt == '"')
            or (i != 0 and heredoc)
        )
        if literal:
            out.append(ch)
            i += 1
            continue
        if nxt == "?":
            out.append(str(status))
            i += 2
            continue
        name, i = variable_name(word, i + 1)
        value = _lookup(env, name)
        if value is not None:
            out.append(value)
            found = True
    result = "".join(out)
    return split_words(result) if found else [result]


def drop_empty(words: list[str]) -> list[str]:
    """Remove empty words."""
    return [word for word in words if word]


def expand_arguments(
    words: list[str], env: Environment, status: int, keep_empty: bool = False
) -> list[str]:
    """Expand every word holding ``$``.

    Unless ``keep_empty`` is set, empty words are dropped when at least two
    words remain.
    """
    result: list[str] = []
    for word in words:
        if "$" in word:
            result.extend(expand_word(word, env, status))
        else:
            result.append(word)
    if not keep_empty and len(result) >= 2:
        result = drop_empty(result)
    return result


def expand_heredoc_line(line: str, env: Environment, status: int) -> str:
    """Expand a here-document line; quotes do not prevent expansion."""
    out: list[str] = []
    i = 0
    while i < len(line):
        ch = line[i]
        nxt = line[i + 1:i + 2]
        if ch == "$" and nxt and (_is_alnum(nxt) or nxt == "?"):
            if nxt == "?":
                out.append(str(status))
                i += 2
                continue
            name, i = variable_name(line, i + 1)
            value = _lookup(env, name)
            if value is not None:
                out.append(value)
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _is_literal_dollar(text: str, i: int, single: bool, double: bool) -> bool:
    nxt = text[i + 1:i + 2]
    return text[i] == "$" and (
        single or nxt in ("", " ") or (double and nxt in (" ", '"', "'"))
    )


def expand_segment(segment: str, env: Environment, status: int) -> str:
    """Expand one pipeline segment without splitting it; here-document delimiters stay as written."""
    out: list[str] = []
    single = double = False
    i = 0
    n = len(segment)
    while i < n:
        single, double = _toggle_quotes(segment[i], single, double)
        if segment.startswith("<<", i):
            while i < n and segment[i] != " ":
                out.append(segment[i])
                i += 1
                if i < n:
                    single, double = _toggle_quotes(segment[i], single, double)
            continue
        if segment[i] != "$" or _is_literal_dollar(segment, i, single, double):
            out.append(segment[i])
            i += 1
            continue
        if segment[i + 1:i + 2] == "?":
            out.append(str(status))
            i += 2
            continue
        name, i = variable_name(segment, i + 1)
        value = _lookup(env, name)
        if value is not None:
            out.append(value)
    return "".join(out)


def expand_pipeline(segments: list[str], env: Environment, status: int) -> list[str]:
    """Expand every segment of a pipeline."""
    return [expand_segment(segment, env, status) for segment in segments]