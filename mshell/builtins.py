"""Commands the shell runs itself: echo, cd, pwd, env, export, unset and exit."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from mshell.environment import Environment, split_assignment
from mshell.errors import ExitRequest, format_error
from mshell.quoting import is_valid_key
from mshell.state import ShellState

BUILTINS = frozenset({"cd", "export", "pwd", "unset", "env", "exit", "echo", "./minishell"})
PARENT_BUILTINS = frozenset({"cd", "export", "unset", "exit", "./minishell"})

_DIGITS = "0123456789"
_SPACES = " \t\n\v\f\r"
_LLONG_MAX = 2**63 - 1
_LLONG_MIN_TEXT = "-9223372036854775808"


def _stream(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def _report(message: str) -> None:
    sys.stderr.write(message + "\n")


def _take_digits(text: str) -> str:
    end = 0
    while end < len(text) and text[end] in _DIGITS:
        end += 1
    return text[:end]


def _leading_int(text: str | None) -> int:
    """Integer at the start of ``text`` after blanks and an optional sign; 0 if none."""
    body = (text or "").lstrip(_SPACES)
    sign = 1
    if body and body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    digits = _take_digits(body)
    return sign * int(digits) if digits else 0


def is_builtin(name: str) -> bool:
    """True for every name the shell handles itself."""
    return name in BUILTINS


def is_parent_builtin(name: str) -> bool:
    """True for the commands that must run in the shell process itself."""
    return name in PARENT_BUILTINS


def is_n_flag(word: str) -> bool:
    """True for ``-n``, ``-nn`` and so on."""
    return len(word) >= 2 and word[0] == "-" and set(word[1:]) == {"n"}


def _is_numeric_argument(text: str) -> bool:
    body = text[1:] if text[:1] in ("+", "-") else text
    return bool(body) and all(ch in _DIGITS for ch in body)


def parse_exit_code(text: str) -> int:
    """Exit status for ``text``, reduced to 0..255.

    Raises ValueError when the number does not fit in a signed 64-bit integer.
    """
    if text == _LLONG_MIN_TEXT:
        return 0
    body = text.lstrip(_SPACES)
    sign = 1
    if body and body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
        if not body or body[0] not in _DIGITS:
            return 0
    digits = _take_digits(body)
    value = int(digits) if digits else 0
    if value > _LLONG_MAX:
        raise ValueError(f"numeric argument out of range: {text}")
    return (sign * value) & 0xFF


def increment_shlvl(env: Environment) -> None:
    """Add one to SHLVL when it is set."""
    if "SHLVL" in env:
        env.set("SHLVL", str(_leading_int(env.get("SHLVL")) + 1))


def echo(args: list[str], state: ShellState, out: TextIO | None = None) -> None:
    """Print the arguments; leading ``-n`` flags suppress the newline."""
    words = args[1:]
    newline = True
    while words and is_n_flag(words[0]):
        newline = False
        words = words[1:]
    stream = _stream(out)
    stream.write(" ".join(words))
    if newline:
        stream.write("\n")
    state.status = 0


def cd(args: list[str], state: ShellState) -> None:
    """Change directory, to HOME without an argument, and update PWD and OLDPWD."""
    try:
        old = os.getcwd()
    except OSError:
        old = None
    if len(args) < 2:
        home = state.env.get("HOME")
        try:
            if home is None:
                raise FileNotFoundError("HOME")
            os.chdir(home)
        except OSError:
            _report("bash: cd: HOME not set")
            state.status = 1
            return
    elif len(args) > 2:
        _report("bash: cd: too many arguments")
        state.status = 1
        return
    else:
        try:
            os.chdir(args[1])
        except OSError:
            _report(format_error(args[1], ": No such file or directory"))
            state.status = 1
            return
    new = os.getcwd()
    for key, value in (("OLDPWD", old), ("PWD", new)):
        if key in state.env:
            state.env.set(key, value)
    state.status = 0


def pwd(args: list[str], state: ShellState, out: TextIO | None = None) -> None:
    """Print the current directory."""
    try:
        cwd = os.getcwd()
    except OSError as err:
        _report(f"getcwd(): {err.strerror}")
        state.status = 1
        return
    _stream(out).write(cwd + "\n")
    state.status = 0


def env_builtin(args: list[str], state: ShellState, out: TextIO | None = None) -> None:
    """Print every variable that has a value as ``KEY=VALUE``."""
    stream = _stream(out)
    for line in state.env.to_envp():
        stream.write(line + "\n")
    state.status = 0


def _invalid_identifier(command: str, word: str, state: ShellState) -> None:
    _report(f"bash: {command}: `{word}': not a valid identifier")
    state.status = 1


def export(args: list[str], state: ShellState, out: TextIO | None = None) -> None:
    """List variables, or set each ``KEY`` or ``KEY=VALUE`` argument."""
    if len(args) < 2:
        stream = _stream(out)
        for key, value in state.env:
            if value is None:
                stream.write(f"declare -x {key}\n")
            else:
                stream.write(f'declare -x {key}="{value}"\n')
        state.status = 0
        return
    state.status = 0
    for word in args[1:]:
        if not word or word[0] == "=" or word[0] in _DIGITS:
            _invalid_identifier("export", word, state)
            continue
        key, value = split_assignment(word)
        if not is_valid_key(key):
            _invalid_identifier("export", word, state)
            continue
        if key in state.env:
            if value is not None:
                state.env.set(key, value)
        else:
            state.env.set(key, value)


def unset(args: list[str], state: ShellState) -> None:
    """Remove each named variable."""
    state.status = 0
    for word in args[1:]:
        if not is_valid_key(word) or word[:1] in tuple(_DIGITS):
            _invalid_identifier("unset", word, state)
            continue
        state.env.remove(word)


def exit_builtin(
    args: list[str], state: ShellState, in_pipe: bool = False, out: TextIO | None = None
) -> None:
    """Leave the shell by raising ExitRequest.

    Inside a pipeline a numeric argument only sets the status.
    """
    if not in_pipe:
        _stream(out).write("exit\n")
    if len(args) < 2 or not args[1]:
        raise ExitRequest(state.status)
    argument = args[1]
    if not _is_numeric_argument(argument):
        _report(f"exit: {argument}: numeric argument required")
        raise ExitRequest(2)
    if len(args) > 2:
        _report("exit: too many arguments")
        state.status = 1
        return
    try:
        state.status = parse_exit_code(argument)
    except ValueError:
        _report(format_error(argument, ": numeric argument required"))
        state.status = 2
    if not in_pipe:
        raise ExitRequest(state.status)


def run_builtin(
    args: list[str], state: ShellState, out: TextIO | None = None, in_pipe: bool = False
) -> bool:
    """Run ``args`` if it names a builtin; return whether it was handled."""
    if not args or not is_builtin(args[0]):
        return False
    match args[0]:
        case "env":
            if len(args) > 1:
                return False
            env_builtin(args, state, out)
        case "cd":
            cd(args, state)
        case "pwd":
            pwd(args, state, out)
        case "export":
            export(args, state, out)
        case "unset":
            unset(args, state)
        case "exit":
            exit_builtin(args, state, in_pipe, out)
        case "echo":
            echo(args, state, out)
        case _:
            return False
    return True