import pytest

from mshell.errors import ExitRequest, ShellError, format_error, is_empty


def test_format_error():
    assert format_error("ls", ": command not found") == "bash: ls: command not found"


def test_format_error_prefix():
    assert format_error("x", "").startswith("bash: ")


def test_shell_error_carries_status():
    err = ShellError("bash: foo: boom", 127)
    assert err.status == 127
    assert str(err) == "bash: foo: boom"


def test_exit_request_status():
    request = ExitRequest(2)
    assert request.status == 2


@pytest.mark.parametrize("line", ["", " ", "\t", " \t  "])
def test_is_empty_true(line):
    assert is_empty(line) is True


@pytest.mark.parametrize("line", ["a", "  ls", "\tx\t"])
def test_is_empty_false(line):
    assert is_empty(line) is False