import os
import stat

import pytest

from mshell.environment import Environment
from mshell.errors import ShellError
from mshell.resolve import resolve_command, search_path


def _executable(directory, name):
    path = directory / name
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IRUSR)
    return path


def test_search_path_splits():
    assert search_path(Environment([("PATH", "/a:/b")])) == ["/a", "/b"]


def test_search_path_drops_empty_entries():
    assert search_path(Environment([("PATH", "/a::/b:")])) == ["/a", "/b"]


def test_search_path_unset():
    assert search_path(Environment()) is None


def test_resolve_in_path(tmp_path):
    _executable(tmp_path, "tool")
    assert resolve_command("tool", [str(tmp_path)]) == f"{tmp_path}/tool"


def test_resolve_first_matching_directory(tmp_path):
    first = tmp_path / "one"
    second = tmp_path / "two"
    first.mkdir()
    second.mkdir()
    _executable(second, "tool")
    assert resolve_command("tool", [str(first), str(second)]) == f"{second}/tool"


def test_command_not_found(tmp_path):
    with pytest.raises(ShellError) as info:
        resolve_command("nope", [str(tmp_path)])
    assert info.value.status == 127
    assert info.value.message == "bash: nope: command not found"


def test_no_path_not_found():
    with pytest.raises(ShellError) as info:
        resolve_command("ls", None)
    assert info.value.status == 127


def test_builtin_resolves_to_itself():
    assert resolve_command("echo", None) == "echo"


def test_absolute_executable(tmp_path):
    path = _executable(tmp_path, "prog")
    assert resolve_command(str(path), None) == str(path)


def test_directory_is_rejected(tmp_path):
    with pytest.raises(ShellError) as info:
        resolve_command(str(tmp_path), None)
    assert info.value.status == 126
    assert info.value.message.endswith(": Is a directory")


def test_missing_absolute_path(tmp_path):
    missing = os.path.join(tmp_path, "missing")
    with pytest.raises(ShellError) as info:
        resolve_command(missing, None)
    assert info.value.status == 127
    assert info.value.message == f"bash: {missing}: No such file or directory"