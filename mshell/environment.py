"""Shell environment: an ordered set of variables, some without a value."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

DEFAULT_PROMPT = "42@guest>"


def split_assignment(line: str) -> tuple[str, str | None]:
    """Split ``KEY=VALUE`` at the first ``=``; the value is None when there is no ``=``."""
    key, sep, value = line.partition("=")
    return key, (value if sep else None)


def make_prompt(user: str) -> str:
    """Build the prompt shown for ``user``."""
    return f"42@{user}> "


class Environment:
    """Variables in insertion order; a value of None marks a declared but unset variable."""

    def __init__(self, items: Iterable[tuple[str, str | None]] = ()) -> None:
        self._vars: dict[str, str | None] = {}
        for key, value in items:
            self.set(key, value)

    @classmethod
    def from_envp(cls, envp: Iterable[str]) -> "Environment":
        """Build from ``KEY=VALUE`` strings; an empty list yields PWD and SHLVL only."""
        entries = list(envp)
        if not entries:
            return cls([("PWD", os.getcwd()), ("SHLVL", "1")])
        return cls(split_assignment(entry) for entry in entries)

    def get(self, key: str) -> str | None:
        """Value of ``key`` matched exactly, or None."""
        return self._vars.get(key)

    def set(self, key: str, value: str | None) -> None:
        """Update ``key`` in place, or append it at the end."""
        self._vars[key] = value

    def remove(self, key: str) -> None:
        """Drop ``key`` if present."""
        self._vars.pop(key, None)

    def to_envp(self) -> list[str]:
        """``KEY=VALUE`` strings for every variable that has a value."""
        return [f"{key}={value}" for key, value in self._vars.items() if value is not None]

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        """Yield ``(key, value)`` pairs in order."""
        return iter(list(self._vars.items()))

    def __len__(self) -> int:
        return len(self._vars)

    def __contains__(self, key: object) -> bool:
        return key in self._vars