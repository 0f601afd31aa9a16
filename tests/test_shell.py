import builtins
import os
import signal

import pytest

from mshell.shell import main, run
from mshell.state import ShellState


def lines(*items):
    feed = iter(items)

    def read_line(prompt):
        item = next(feed, None)
        if isinstance(item, BaseException):
            raise item
        return item

    return read_line


@pytest.fixture
def state(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return ShellState.from_envp(
        [f"PATH={os.environ.get('PATH', '/usr/bin:/bin')}", "USER=tester"]
    )


def test_runs_lines_until_end_of_input(state, tmp_path, capsys):
    assert run(state, lines("echo hi > f.txt", None)) == 0
    assert (tmp_path / "f.txt").read_text() == "hi\n"
    assert capsys.readouterr().out.endswith("exit\n")


def test_exit_status_is_returned(state):
    assert run(state, lines("exit 5", "echo never")) == 5


def test_non_ascii_line_ends_shell(state, capsys):
    assert run(state, lines("caf\u00e9", "exit 5")) == 0
    captured = capsys.readouterr()
    assert "exit" in captured.out
    assert captured.err != ""


def test_syntax_error_is_reported(state, capsys):
    assert run(state, lines("| cat", None)) == 0
    captured = capsys.readouterr()
    assert "error token parsing" in captured.out
    assert "syntax error" in captured.err


def test_interrupt_at_prompt_sets_status(state):
    assert run(state, lines(KeyboardInterrupt(), "exit")) == 130


def test_blank_lines_are_skipped(state, capsys):
    assert run(state, lines("   ", "\t", None)) == 0
    assert "error" not in capsys.readouterr().out


def test_prompt_is_passed_to_reader(state):
    seen = []

    def read_line(prompt):
        seen.append(prompt)
        return None

    run(state, read_line)
    assert seen == [state.prompt]


def test_signal_handlers_restored(state):
    before = signal.getsignal(signal.SIGINT)
    assert run(state, lines(None)) == 0
    assert signal.getsignal(signal.SIGINT) == before


def test_main_rejects_arguments(capsys):
    assert main(["extra"]) == 0
    assert "Number of Arguments" in capsys.readouterr().err


def test_main_ends_on_eof(monkeypatch, tmp_path, capsys):
    monkeypatch.chdir(tmp_path)

    def fake_input(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)
    assert main([]) == 0
    assert capsys.readouterr().out.endswith("exit\n")