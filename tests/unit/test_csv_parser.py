"""Tests for the quote-aware CSV parser."""

from fieldreport.ingestion.csv_parser import parse_csv


class TestParseCsv:
    def test_simple_rows(self):
        assert parse_csv("a,b,c\n1,2,3\n") == [["a", "b", "c"], ["1", "2", "3"]]

    def test_cells_are_trimmed(self):
        assert parse_csv(" a , b ,c ") == [["a", "b", "c"]]

    def test_quoted_comma_newline_and_escaped_quote(self):
        """One quoted cell holding a comma, a newline and doubled quotes stays one cell."""
        text = 'region,damage\nR1,"He said ""hi"", then\nwent, home"\n'
        rows = parse_csv(text)
        assert rows == [
            ["region", "damage"],
            ["R1", 'He said "hi", then\nwent, home'],
        ]

    def test_crlf_is_one_terminator(self):
        assert parse_csv("a,b\r\n1,2\r\n") == [["a", "b"], ["1", "2"]]

    def test_crlf_inside_quotes_is_kept(self):
        rows = parse_csv('a,"line1\r\nline2"\r\n')
        assert rows == [["a", "line1\r\nline2"]]

    def test_blank_lines_dropped(self):
        assert parse_csv("a,b\n\n\n1,2\n\n") == [["a", "b"], ["1", "2"]]

    def test_whitespace_only_line_dropped(self):
        assert parse_csv("a\n   \nb") == [["a"], ["b"]]

    def test_trailing_row_without_terminator(self):
        assert parse_csv("a,b\n1,2") == [["a", "b"], ["1", "2"]]

    def test_empty_cells_row_is_kept(self):
        """A row of delimiters still carries cells; the mapper decides what to drop."""
        assert parse_csv(",,,\n") == [["", "", "", ""]]

    def test_empty_input(self):
        assert parse_csv("") == []

    def test_unterminated_quote_takes_rest_of_input(self):
        rows = parse_csv('a,"open cell\nnext, line')
        assert rows == [["a", "open cell\nnext, line"]]

    def test_quoted_empty_cell(self):
        assert parse_csv('"",x') == [["", "x"]]

    def test_arabic_text(self):
        rows = parse_csv('الجهة,الإقليم\n"فاس - مكناس","تاونات"\n')
        assert rows[1] == ["فاس - مكناس", "تاونات"]

    def test_repeated_parse_is_identical(self):
        """Parsing the same text twice never accumulates rows."""
        text = "h1,h2\nx,y\n"
        assert parse_csv(text) == parse_csv(text)
        assert len(parse_csv(text)) == 2
