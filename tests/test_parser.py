import pytest

from mshell.parser import parse, split_pipeline
from mshell.syntax import ShellSyntaxError


def test_simple_command_words():
    assert parse("ls -l") == ["ls", "-l"]


def test_quotes_are_kept():
    assert parse("echo 'a b'") == ["echo", "'a b'"]


def test_quoted_pipe_is_a_simple_command():
    assert parse("echo '|'") == ["echo", "'|'"]


def test_pipeline_segments():
    result = parse("cat < in | wc -l")
    assert len(result) == 2
    assert result[1] == "wc -l"


def test_pipeline_segment_is_normalized():
    assert parse("cat < in | wc")[0] == "<in cat"


def test_simple_command_redirections_moved_first():
    words = parse("grep x > out")
    assert words[0] == ">out"
    assert words[1:] == ["grep", "x"]


def test_split_pipeline_respects_quotes():
    assert split_pipeline('echo "a|b" | wc') == ['echo "a|b"', "wc"]


def test_split_pipeline_segment_count_matches_pipes():
    line = "a | b | c | d"
    assert len(split_pipeline(line)) == line.count("|") + 1


@pytest.mark.parametrize("line", ["ls |", "| ls", 'echo "x', "ls > ", "ls || wc", "."])
def test_parse_rejects_bad_lines(line):
    with pytest.raises(ShellSyntaxError):
        parse(line)


def test_parse_rejects_dangling_operator_in_segment():
    with pytest.raises(ShellSyntaxError) as info:
        parse("cat > | wc")
    assert info.value.status == 2