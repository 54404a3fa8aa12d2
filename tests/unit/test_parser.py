from __future__ import annotations

import pytest

from omikuji.dataset.parser import MalformedInputError, normalize_newlines, parse_delimited


def test_parse_empty_text_yields_no_rows():
    assert parse_delimited("") == []


def test_parse_keeps_empty_cells():
    assert parse_delimited("a,,b\n") == [["a", "", "b"]]


def test_parse_unquoted_rows_split_on_delimiter():
    text = "id,title,genre1\n1,大吉,お守り\n2,吉,筆\n"
    rows = parse_delimited(text)
    assert len(rows) == 3
    for line, row in zip(text.splitlines(), rows):
        assert len(row) == line.count(",") + 1
        assert row == line.split(",")


def test_parse_trailing_row_without_newline_is_emitted():
    assert parse_delimited("a,b\nc,d") == [["a", "b"], ["c", "d"]]


def test_parse_line_of_only_delimiters():
    assert parse_delimited(",,,\n") == [["", "", "", ""]]


def test_parse_empty_line_is_single_empty_cell():
    assert parse_delimited("a\n\nb\n") == [["a"], [""], ["b"]]


@pytest.mark.parametrize("text", ["a,b\r\nc,d\r\n", "a,b\rc,d\r", "a,b\nc,d\n"])
def test_parse_normalizes_line_endings(text: str):
    assert parse_delimited(text) == [["a", "b"], ["c", "d"]]


def test_normalize_newlines():
    assert normalize_newlines("x\r\ny\rz\n") == "x\ny\nz\n"


def test_parse_quoted_cell_keeps_delimiter_and_newline():
    rows = parse_delimited('1,"良縁, あり\n急ぐな",x\n')
    assert rows == [["1", "良縁, あり\n急ぐな", "x"]]


def test_parse_doubled_quote_inside_quotes_is_literal():
    assert parse_delimited('"say ""hi"""\n') == [['say "hi"']]


def test_parse_empty_quoted_cell():
    assert parse_delimited('a,"",b\n') == [["a", "", "b"]]


def test_parse_round_trip_of_quoted_value():
    original = 'a,b\n"c"'
    encoded = '"' + original.replace('"', '""') + '"'
    assert parse_delimited(encoded + "\n") == [[original]]
    assert parse_delimited("x," + encoded) == [["x", original]]


def test_parse_cells_are_not_trimmed():
    assert parse_delimited(" a , b \n") == [[" a ", " b "]]


def test_parse_crlf_inside_quotes_is_normalized():
    assert parse_delimited('"a\r\nb"\r\n') == [["a\nb"]]


def test_parse_unterminated_quote_raises():
    with pytest.raises(MalformedInputError):
        parse_delimited('"unterminated')


def test_parse_unterminated_quote_reports_opening_line():
    with pytest.raises(MalformedInputError) as exc_info:
        parse_delimited('id,title\n1,ok\n2,"broken\nstill open')
    assert exc_info.value.line == 3
    assert "line 3" in str(exc_info.value)


def test_malformed_input_is_value_error():
    assert issubclass(MalformedInputError, ValueError)


def test_parse_quoted_cell_with_escaped_quotes_and_delimiter():
    assert parse_delimited('"x, ""y"""') == [['x, "y"']]
