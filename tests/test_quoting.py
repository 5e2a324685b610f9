import shlex

import pytest

from cgen.quoting import quote, quote_command


def test_empty_string():
    assert quote("") == "''"


@pytest.mark.parametrize("word", ["abc", "a-b_c", "path/to/file.txt", "key=value", "user@host:1,2+3%"])
def test_safe_words_unchanged(word):
    assert quote(word) == word


@pytest.mark.parametrize("word", ["two words", "it's", "$HOME", "a;b", "é", "x\ny", "*"])
def test_unsafe_words_round_trip(word):
    quoted = quote(word)
    assert quoted.startswith("'")
    assert shlex.split(quoted) == [word]


def test_single_quote_escaping():
    assert quote("it's") == "'it'\"'\"'s'"


def test_quote_command_round_trip():
    words = ["plain", "with space", "", "it's"]
    assert shlex.split(quote_command(words)) == words


def test_quote_command_empty():
    assert quote_command([]) == ""


def test_quote_command_joins_with_spaces():
    assert quote_command(["a", "b"]) == "a b"