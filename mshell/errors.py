"""Exceptions and small helpers for reporting shell errors."""

from __future__ import annotations


def format_error(subject: str, reason: str) -> str:
    """Message in the form ``bash: <subject><reason>``."""
    return f"bash: {subject}{reason}"


def is_empty(line: str) -> bool:
    """True when the line holds only spaces and tabs."""
    return line.strip(" \t") == ""


class ShellError(Exception):
    """An error that ends a command with the given exit status."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ExitRequest(Exception):
    """Raised to leave the shell with the given status."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status