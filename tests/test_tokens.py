import pytest

from threebc.errors import ErrorCode, TbcError
from threebc.tokens import split_columns, tokenize


def test_three_columns():
    assert split_columns("mode 0 2") == (("mode", "0", "2"), None)


def test_tabs_and_dots_separate_columns():
    assert split_columns("mode\t0.2") == (("mode", "0", "2"), None)


def test_comma_leaves_rest():
    columns, rest = split_columns("mode 0 2, strc 0 'a'")
    assert columns == ("mode", "0", "2")
    assert rest == " strc 0 'a'"


def test_newline_leaves_rest():
    columns, rest = split_columns("mode 0 2 \nstrc 0 1")
    assert columns == ("mode", "0", "2")
    assert rest == "strc 0 1"


@pytest.mark.parametrize("text", ["", "   ", "\n", "# only a comment", "; note"])
def test_blank_rows(text):
    assert split_columns(text) == ((), None)


def test_comment_after_columns():
    assert split_columns("mode 0 2 # set mode") == (("mode", "0", "2"), None)


def test_char_literal_with_space():
    assert split_columns("strc 0 ' '") == (("strc", "0", "' '"), None)


def test_char_literal_with_escaped_quote():
    assert split_columns("strc 0 '\\''") == (("strc", "0", "'\\''"), None)


@pytest.mark.parametrize("text", ["mode 0", "mode", "mode 0 2 3"])
def test_wrong_column_count(text):
    with pytest.raises(TbcError) as info:
        split_columns(text)
    assert info.value.code == ErrorCode.COLUMNS


def test_tokenize_skips_blank_rows():
    rows = list(tokenize("mode 0 2,,strc 0 'a',"))
    assert rows == [("mode", "0", "2"), ("strc", "0", "'a'")]


def test_tokenize_every_row_has_three_columns():
    rows = list(tokenize("a b c, d e f, g h i"))
    assert all(len(row) == 3 for row in rows)
    assert len(rows) == 3


def test_tokenize_propagates_column_error():
    with pytest.raises(TbcError) as info:
        list(tokenize("mode 0 2, strc 0"))
    assert info.value.code == ErrorCode.COLUMNS