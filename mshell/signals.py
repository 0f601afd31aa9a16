"""Signal dispositions for the shell's prompt, running commands and here-documents."""

from __future__ import annotations

import signal
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any

_SIGQUIT = getattr(signal, "SIGQUIT", None)


class SignalMode(Enum):
    """What the shell process does with SIGINT and SIGQUIT."""

    INTERACTIVE = "interactive"
    EXEC = "exec"
    HEREDOC = "heredoc"
    IGNORE = "ignore"


def signal_status(signum: int) -> int:
    """Exit status reported for a command ended by signal ``signum``."""
    return 128 + int(signum)


def _handled_signals() -> list[int]:
    signals = [signal.SIGINT]
    if _SIGQUIT is not None:
        signals.append(_SIGQUIT)
    return signals


def _handlers(mode: SignalMode) -> dict[int, Any]:
    """At the prompt and in here-documents SIGINT raises KeyboardInterrupt.

    While commands run the shell ignores both signals and leaves them to the
    child processes; SIGQUIT is always ignored by the shell itself.
    """
    if mode in (SignalMode.INTERACTIVE, SignalMode.HEREDOC):
        sigint: Any = signal.default_int_handler
    else:
        sigint = signal.SIG_IGN
    handlers: dict[int, Any] = {signal.SIGINT: sigint}
    if _SIGQUIT is not None:
        handlers[_SIGQUIT] = signal.SIG_IGN
    return handlers


def _install(handlers: dict[int, Any]) -> dict[int, Any]:
    previous: dict[int, Any] = {}
    for signum, handler in handlers.items():
        old = signal.signal(signum, handler)
        previous[signum] = signal.SIG_DFL if old is None else old
    return previous


def set_mode(mode: SignalMode) -> dict[int, Any]:
    """Install the handlers of ``mode``; return the handlers they replaced."""
    return _install(_handlers(mode))


@contextmanager
def signal_mode(mode: SignalMode) -> Iterator[SignalMode]:
    """Use ``mode`` inside the block and restore the previous handlers after it."""
    previous = set_mode(mode)
    try:
        yield mode
    finally:
        _install(previous)