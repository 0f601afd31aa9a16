"""The interactive loop of the shell and its command-line entry point."""

from __future__ import annotations

import os
import signal
import sys

try:
    import readline  # noqa: F401  (gives input() line editing and history)
except ImportError:
    readline = None

from mshell.errors import ExitRequest, is_empty
from mshell.executor import Executor, ReadLine
from mshell.signals import SignalMode, signal_mode, signal_status
from mshell.state import ShellState, is_ascii_line
from mshell.syntax import ShellSyntaxError

ARGUMENT_ERROR = "Error : Number of Arguments"
NON_ASCII_ERROR = "bash: input holds non-ASCII characters"
PARSE_FAILURE = "error token parsing"


def _read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _interrupted(state: ShellState) -> None:
    sys.stdout.write("\n")
    state.status = signal_status(signal.SIGINT)


def run(state: ShellState, read_line: ReadLine | None = None) -> int:
    """Read and run lines until end of input or ``exit``; return the exit status."""
    reader = read_line or _read_line
    executor = Executor(state, reader)
    with signal_mode(SignalMode.INTERACTIVE):
        while True:
            try:
                line = reader(state.prompt)
            except KeyboardInterrupt:
                _interrupted(state)
                continue
            if not is_ascii_line(line):
                if line is not None:
                    sys.stderr.write(NON_ASCII_ERROR + "\n")
                sys.stdout.write("exit\n")
                return 0
            if is_empty(line):
                continue
            try:
                executor.run_line(line)
            except ShellSyntaxError as err:
                sys.stderr.write(err.message + "\n")
                sys.stdout.write(PARSE_FAILURE + "\n")
            except ExitRequest as request:
                return request.status
            except KeyboardInterrupt:
                _interrupted(state)


def main(argv: list[str] | None = None) -> int:
    """Start the shell with the process environment; it takes no arguments."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        sys.stderr.write(ARGUMENT_ERROR + "\n")
        return 0
    state = ShellState.from_envp(f"{key}={value}" for key, value in os.environ.items())
    return run(state)


if __name__ == "__main__":
    sys.exit(main())