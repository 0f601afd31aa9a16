import pytest

from mshell.redirection import (
    count_redirections,
    has_dangling_operator,
    join_operators,
    normalize,
    redirections_first,
    split_sticky,
)
from mshell.syntax import ShellSyntaxError

WORDS = ["a>b", ">>out", "<in>out", "a<<b>c", "plain", "'>'x", "x\">\"y", "<>b"]


@pytest.mark.parametrize("word", ["plain", "'>'", '"a<b"', "x'<<'y"])
def test_quoted_or_plain_words_have_no_redirections(word):
    assert count_redirections(word) == 0


def test_double_operator_counts_once():
    assert count_redirections(">>out") == count_redirections(">out")
    assert count_redirections("<<eof") == count_redirections("<eof")


@pytest.mark.parametrize("word", WORDS)
def test_split_sticky_round_trip(word):
    assert "".join(split_sticky([word])) == word


@pytest.mark.parametrize("word", WORDS)
def test_split_sticky_piece_count(word):
    expected = count_redirections(word) + (0 if word[0] in "<>" else 1)
    assert len(split_sticky([word])) == expected


def test_split_sticky_keeps_operator_with_target():
    pieces = split_sticky(["cat<in"])
    assert pieces == ["cat", "<in"]


@pytest.mark.parametrize(
    "words",
    [["ls", ">"], ["ls>"], ["cat", "<", ">out"], ["a>", "<b"], [">"]],
)
def test_dangling_operator_detected(words):
    assert has_dangling_operator(words) is True


@pytest.mark.parametrize(
    "words", [["ls", ">", "out"], ["cat", "<in"], ["echo", "'>'"], []]
)
def test_no_dangling_operator(words):
    assert has_dangling_operator(words) is False


def test_join_operators_glues_target():
    assert join_operators(["cat", "<", "in", ">>", "out"]) == ["cat", "<" + "in", ">>" + "out"]


def test_join_operators_leaves_other_words():
    words = ["echo", "hello", "<in"]
    assert join_operators(words) == words


def test_redirections_first_order():
    words = ["cat", ">out", "-e", "<in", "<<eof", ">>log"]
    assert redirections_first(words) == ["<in", "<<eof", ">out", ">>log", "cat", "-e"]


def test_redirections_first_keeps_lone_operator_with_others():
    assert redirections_first(["a", "<", "b"]) == ["a", "<", "b"]


def test_normalize_full_example():
    assert normalize(["cat", "<", "in", ">", "out"]) == ["<in", ">out", "cat"]


def test_normalize_sticky_word():
    assert normalize(["echo", "a>b"]) == [">b", "echo", "a"]


def test_normalize_puts_redirections_before_words():
    result = normalize(["grep", "x", "<in", "y", ">", "out", "z"])
    kinds = [word[0] in "<>" for word in result]
    assert kinds == sorted(kinds, reverse=True)
    assert sorted(result) == sorted(["grep", "x", "<in", "y", ">out", "z"])


def test_normalize_rejects_dangling_operator():
    with pytest.raises(ShellSyntaxError) as info:
        normalize(["ls", ">"])
    assert info.value.message == "Error token"