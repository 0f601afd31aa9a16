import pytest

from mshell.quoting import (
    count_unquoted,
    is_token_char,
    is_valid_key,
    remove_quotes,
    remove_quotes_all,
    split_words,
)


def test_remove_quotes_single():
    assert remove_quotes("'a b'") == "a b"


def test_remove_quotes_keeps_other_quote_inside():
    assert remove_quotes("\"it's\"") == "it's"


def test_remove_quotes_mixed():
    assert remove_quotes("a'b'\"c\"") == "abc"


def test_remove_quotes_nested_kind():
    assert remove_quotes("\"'x'\"") == "'x'"


def test_remove_quotes_plain_unchanged():
    assert remove_quotes("plain") == "plain"


def test_remove_quotes_all():
    assert remove_quotes_all(["'a'", "b", "\"c d\""]) == ["a", "b", "c d"]


@pytest.mark.parametrize("char,expected", [("<", True), (">", True), ("|", False), ("a", False)])
def test_is_token_char(char, expected):
    assert is_token_char(char) is expected


@pytest.mark.parametrize("name,expected", [("A_1", True), ("A-B", False), ("", True), ("x y", False)])
def test_is_valid_key(name, expected):
    assert is_valid_key(name) is expected


def test_count_unquoted_skips_quoted():
    assert count_unquoted("a | b '|' \"|\" | c", "|") == 2


def test_count_unquoted_none():
    assert count_unquoted("echo hi", "|") == 0


def test_split_words_keeps_quoted_spaces():
    assert split_words("echo 'a b'  c") == ["echo", "'a b'", "c"]


def test_split_words_tabs_and_edges():
    assert split_words("\t ls\t-l ") == ["ls", "-l"]


def test_split_words_join_round_trip():
    words = ["cat", "\"x  y\"", "z"]
    assert split_words(" ".join(words)) == words