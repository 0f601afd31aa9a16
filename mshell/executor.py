"""Running command lines: simple commands, pipelines and here-documents."""

from __future__ import annotations

import io
import signal
import subprocess
import sys
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mshell.builtins import increment_shlvl, is_builtin, is_parent_builtin, run_builtin
from mshell.environment import Environment
from mshell.errors import ExitRequest, ShellError, format_error
from mshell.expansion import expand_arguments, expand_pipeline
from mshell.heredoc import allocate_names, read_heredoc, remove_files
from mshell.parser import parse
from mshell.quoting import count_unquoted, remove_quotes_all, split_words
from mshell.redirect import CommandSpec, Streams, open_streams, parse_command
from mshell.resolve import resolve_command, search_path
from mshell.signals import SignalMode, signal_mode, signal_status
from mshell.state import ShellState

ReadLine = Callable[[str], "str | None"]

SELF_NAME = "./minishell"
QUIT_MESSAGE = "Quit (core dumped)\n"
_SIGQUIT = getattr(signal, "SIGQUIT", None)


@dataclass
class _Stage:
    """One started command: its status, its process and what the next command reads."""

    status: int = 0
    process: subprocess.Popen | None = None
    output: Any = subprocess.DEVNULL


def _report(message: str) -> None:
    sys.stderr.write(message + "\n")
    sys.stderr.flush()


def _default_signals() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    if _SIGQUIT is not None:
        signal.signal(_SIGQUIT, signal.SIG_DFL)


def _environ(env: Environment) -> dict[str, str]:
    return {key: value for key, value in env if value is not None}


def _close(handle: Any) -> None:
    if handle is not None and not isinstance(handle, int):
        handle.close()


def _child_state(state: ShellState) -> ShellState:
    child = ShellState(Environment(state.env), state.prompt)
    child.status = state.status
    return child


class Executor:
    """Runs command lines against a shell state."""

    def __init__(self, state: ShellState, read_line: ReadLine) -> None:
        self.state = state
        self.read_line = read_line

    def run_line(self, line: str) -> int:
        """Parse, expand and run ``line``; return its exit status.

        Raises ShellSyntaxError for a malformed line and ExitRequest from ``exit``.
        """
        parsed = parse(line)
        env, status = self.state.env, self.state.status
        if count_unquoted(line, "|"):
            return self.run_pipeline(expand_pipeline(parsed, env, status))
        return self.run_simple(expand_arguments(parsed, env, status))

    def run_simple(self, words: list[str]) -> int:
        """Run one command given as normalized, expanded words."""
        if not words:
            return self.state.status
        first = words[0]
        if first == SELF_NAME:
            increment_shlvl(self.state.env)
        elif is_parent_builtin(first):
            run_builtin(remove_quotes_all(words), self.state, None, in_pipe=False)
            return self.state.status
        spec = parse_command(words)
        paths = self._prepare_heredocs([spec])
        if paths is None:
            return self.state.status
        try:
            with signal_mode(SignalMode.EXEC):
                stage = self._launch(spec, paths, None, to_pipe=False)
                status = self._finish([stage])
        finally:
            remove_files(paths)
        self.state.status = status
        return status

    def run_pipeline(self, segments: list[str]) -> int:
        """Run expanded pipeline segments; the status is that of the last one."""
        specs = [parse_command(split_words(segment)) for segment in segments]
        if not specs:
            return self.state.status
        paths = self._prepare_heredocs(specs)
        if paths is None:
            return self.state.status
        stages: list[_Stage] = []
        try:
            with signal_mode(SignalMode.EXEC):
                stdin: Any = None
                offset = 0
                last = len(specs) - 1
                for index, spec in enumerate(specs):
                    count = len(spec.heredocs)
                    stage = self._launch(
                        spec, paths[offset:offset + count], stdin, to_pipe=index < last
                    )
                    offset += count
                    _close(stdin)
                    stdin = stage.output
                    stages.append(stage)
                _close(stdin)
                status = self._finish(stages)
        finally:
            remove_files(paths)
        self.state.status = status
        return status

    def _prepare_heredocs(self, specs: list[CommandSpec]) -> list[str] | None:
        """Read every here-document into its own file; None when interrupted."""
        redirs = [redir for spec in specs for redir in spec.heredocs]
        paths = allocate_names(len(redirs))
        try:
            with signal_mode(SignalMode.HEREDOC):
                for path, redir in zip(paths, redirs):
                    read_heredoc(path, redir.target, redir.raw, self.state, self.read_line)
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            remove_files(paths)
            self.state.status = signal_status(signal.SIGINT)
            return None
        return paths

    def _launch(
        self, spec: CommandSpec, heredoc_paths: list[str], stdin: Any, to_pipe: bool
    ) -> _Stage:
        try:
            streams = open_streams(spec, heredoc_paths)
        except ShellError as err:
            _report(err.message)
            return _Stage(status=err.status)
        with streams:
            if not spec.argv:
                return _Stage()
            if is_builtin(spec.argv[0]):
                stage = self._launch_builtin(spec.argv, streams, to_pipe)
                if stage is not None:
                    return stage
            return self._launch_program(spec.argv, streams, stdin, to_pipe)

    def _launch_builtin(
        self, argv: list[str], streams: Streams, to_pipe: bool
    ) -> _Stage | None:
        child = _child_state(self.state)
        buffer = io.StringIO()
        try:
            if not run_builtin(argv, child, buffer, in_pipe=True):
                return None
            status = child.status
        except ExitRequest as request:
            status = request.status
        data = buffer.getvalue()
        if streams.stdout is not None:
            streams.stdout.write(data.encode())
            return _Stage(status=status)
        if to_pipe:
            pipe = tempfile.TemporaryFile()
            pipe.write(data.encode())
            pipe.seek(0)
            return _Stage(status=status, output=pipe)
        sys.stdout.write(data)
        sys.stdout.flush()
        return _Stage(status=status)

    def _launch_program(
        self, argv: list[str], streams: Streams, stdin: Any, to_pipe: bool
    ) -> _Stage:
        try:
            path = resolve_command(argv[0], search_path(self.state.env))
        except ShellError as err:
            _report(err.message)
            return _Stage(status=err.status)
        if streams.stdout is not None:
            stdout: Any = streams.stdout
        elif to_pipe:
            stdout = subprocess.PIPE
        else:
            stdout = None
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            process = subprocess.Popen(
                argv,
                executable=path,
                stdin=streams.stdin if streams.stdin is not None else stdin,
                stdout=stdout,
                env=_environ(self.state.env),
                preexec_fn=_default_signals,
            )
        except OSError as err:
            _report(format_error(argv[0], f": {err.strerror}"))
            return _Stage(status=126)
        output = process.stdout if process.stdout is not None else subprocess.DEVNULL
        return _Stage(process=process, output=output)

    @staticmethod
    def _finish(stages: list[_Stage]) -> int:
        for stage in stages:
            if stage.process is None:
                continue
            code = stage.process.wait()
            stage.status = code if code >= 0 else signal_status(-code)
            if code == -signal.SIGINT:
                sys.stdout.write("\n")
            elif _SIGQUIT is not None and code == -_SIGQUIT:
                sys.stdout.write(QUIT_MESSAGE)
        sys.stdout.flush()
        return stages[-1].status