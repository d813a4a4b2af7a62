import pytest

from pcskit.args import is_quote, parse


def test_parse_mixed_quotes_and_escapes():
    line = r'''  one two three "double quotes" 'single quotes'  ""   arg\ with\ spaces "\"quotes\" in 'quotes'" '"quotes" in \'quotes'"  "   '''
    assert parse(line) == [
        "one",
        "two",
        "three",
        "double quotes",
        "single quotes",
        "",
        "arg with spaces",
        "\"quotes\" in 'quotes'",
        "\"quotes\" in 'quotes  ",
    ]


def test_parse_unicode_filename():
    assert parse(" cd  英语_800个有趣句子帮你记忆7000个单词_42页.doc") == [
        "cd",
        "英语_800个有趣句子帮你记忆7000个单词_42页.doc",
    ]


def test_parse_empty_and_blank():
    assert parse("") == []
    assert parse("   \t  ") == []


def test_backslash_before_ordinary_char_is_kept():
    assert parse(r"a\nb") == [r"a\nb"]


def test_trailing_backslash_is_kept():
    assert parse("abc\\") == ["abc\\"]


def test_escaped_backslash():
    assert parse(r"a\\b") == [r"a\b"]


def test_other_quote_inside_quotes_is_literal():
    assert parse("\"it's\" `x y`") == ["it's", "x y"]


def test_unclosed_quote_drops_argument():
    assert parse('ls "abc') == ["ls"]


@pytest.mark.parametrize("char", ["'", '"', "`"])
def test_is_quote_true(char):
    assert is_quote(char) is True


@pytest.mark.parametrize("char", ["a", " ", "\\", ""])
def test_is_quote_false(char):
    assert is_quote(char) is False