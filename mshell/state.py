"""State shared by the running shell."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from mshell.environment import DEFAULT_PROMPT, Environment, make_prompt


def is_ascii_line(line: str | None) -> bool:
    """True when a line was read and holds only ASCII characters."""
    return line is not None and line.isascii()


@dataclass
class ShellState:
    """Environment, prompt and last exit status of the shell."""

    env: Environment
    prompt: str
    status: int = field(default=0, init=False)

    @classmethod
    def from_envp(cls, envp: Iterable[str]) -> "ShellState":
        """Build the state from ``KEY=VALUE`` strings; USER sets the prompt."""
        entries = list(envp)
        prompt = DEFAULT_PROMPT
        for entry in entries:
            if entry.startswith("USER="):
                prompt = make_prompt(entry[len("USER="):])
        return cls(Environment.from_envp(entries), prompt)