#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the CALS table transformer."""

import pytest

from paste2dita.dom.utils import parse_markup, serialize
from paste2dita.options import TableOptions
from paste2dita.transforms.tables import (
    TableTransformer,
    count_columns,
    extract_cell_content,
    own_rows,
    resolve_column_widths,
    transform_tables,
)

COLSPECS_2 = '<colspec colnum="1" colname="col1" colwidth="1*"/><colspec colnum="2" colname="col2" colwidth="1*"/>'


def _table(body: str, cols: int = 2, colspecs: str = COLSPECS_2) -> str:
    return f'<table frame="all" rowsep="1" colsep="1"><tgroup cols="{cols}">{colspecs}{body}</tgroup></table>'


@pytest.mark.unit
class TestTableHelpers:
    """Tests for row, column and width helpers."""

    def test_own_rows_skip_nested(self) -> None:
        """Test that rows of a nested table are not counted."""
        soup = parse_markup("<table><tr><td><table><tr><td>x</td></tr></table></td></tr><tr><td>y</td></tr></table>")
        outer = soup.find("table")
        assert len(own_rows(outer)) == 2

    def test_count_columns(self) -> None:
        """Test that the widest row by span sum wins."""
        soup = parse_markup('<table><tr><td colspan="3">a</td></tr><tr><td>b</td><td>c</td></tr></table>')
        assert count_columns(soup.find_all("tr")) == 3

    def test_widths_from_col_elements(self) -> None:
        """Test widths declared on column descriptors, expanded across spans."""
        soup = parse_markup(
            '<table><colgroup><col span="2" width="20%"><col style="width:72pt"></colgroup>'
            "<tr><td>a</td><td>b</td><td>c</td></tr></table>"
        )
        table = soup.find("table")
        assert resolve_column_widths(table, 3, soup.find("tr")) == ["20*", "20*", "96"]

    def test_widths_from_first_row(self) -> None:
        """Test widths taken from single-column first-row cells."""
        soup = parse_markup(
            '<table><tr><td colspan="2" style="width:156pt">a</td><td style="width:78.0pt">b</td></tr></table>'
        )
        assert resolve_column_widths(soup.find("table"), 3, soup.find("tr")) == ["1*", "1*", "104"]

    def test_cell_content_inlines_simple_paragraphs(self) -> None:
        """Test that paragraphs holding only emphasis are inlined."""
        soup = parse_markup("<td><p class='x'> <b>Bold</b>  text </p><p><i>more</i></p></td>")
        entry = soup.new_tag("entry")
        extract_cell_content(soup.td, entry)
        assert serialize(entry) == "<b>Bold</b> text<i>more</i>"

    def test_cell_content_keeps_complex_paragraphs(self) -> None:
        """Test that paragraphs with other elements stay as blocks."""
        soup = parse_markup('<td><p>see <a href="u">link</a></p></td>')
        entry = soup.new_tag("entry")
        extract_cell_content(soup.td, entry)
        assert serialize(entry) == '<p>see <a href="u">link</a></p>'

    def test_cell_content_empty_paragraphs(self) -> None:
        """Test that a cell holding only empty paragraphs gives an empty entry."""
        soup = parse_markup("<td> <p>\xa0</p> <p></p> </td>")
        entry = soup.new_tag("entry")
        extract_cell_content(soup.td, entry)
        assert entry.contents == []


@pytest.mark.unit
class TestTableTransformer:
    """Tests for the table transformer stage."""

    def test_column_span(self) -> None:
        """Test a cell spanning two columns above a two-cell row."""
        markup = '<table><tr><td colspan="2">A</td></tr><tr><td>B</td><td>C</td></tr></table>'
        assert TableTransformer().run(markup) == _table(
            '<tbody><row><entry namest="col1" nameend="col2">A</entry></row>'
            "<row><entry>B</entry><entry>C</entry></row></tbody>"
        )

    def test_row_span(self) -> None:
        """Test that a row span becomes morerows and shifts the next row."""
        markup = '<table><tr><td rowspan="2">A</td><td>B</td></tr><tr><td>C</td></tr></table>'
        assert TableTransformer().run(markup) == _table(
            '<tbody><row><entry morerows="1">A</entry><entry>B</entry></row><row><entry>C</entry></row></tbody>'
        )

    def test_short_row_padded(self) -> None:
        """Test that a short row is padded with empty entries."""
        markup = "<table><tr><td>A</td><td>B</td></tr><tr><td>C</td></tr></table>"
        assert TableTransformer().run(markup) == _table(
            "<tbody><row><entry>A</entry><entry>B</entry></row><row><entry>C</entry><entry></entry></row></tbody>"
        )

    def test_overlapping_span_shrinks(self) -> None:
        """Test that a column span stops where a row span from above begins."""
        markup = '<table><tr><td>A</td><td rowspan="2">B</td></tr><tr><td colspan="2">C</td></tr></table>'
        assert TableTransformer().run(markup) == _table(
            '<tbody><row><entry>A</entry><entry morerows="1">B</entry></row><row><entry>C</entry></row></tbody>'
        )

    def test_head_and_body(self) -> None:
        """Test that thead rows become a thead group."""
        markup = "<table><thead><tr><th>H</th></tr></thead><tbody><tr><td>x</td></tr></tbody></table>"
        colspec = '<colspec colnum="1" colname="col1" colwidth="1*"/>'
        assert TableTransformer().run(markup) == _table(
            "<thead><row><entry>H</entry></row></thead><tbody><row><entry>x</entry></row></tbody>",
            cols=1,
            colspecs=colspec,
        )

    @pytest.mark.parametrize("span", ["abc", "0", "-1", ""])
    def test_invalid_spans(self, span: str) -> None:
        """Test that invalid span values are treated as 1."""
        markup = f'<table><tr><td colspan="{span}" rowspan="{span}">A</td><td>B</td></tr></table>'
        assert TableTransformer().run(markup) == _table("<tbody><row><entry>A</entry><entry>B</entry></row></tbody>")

    def test_nested_table(self) -> None:
        """Test that an inner table is converted inside the outer entry."""
        markup = "<table><tr><td><table><tr><td>inner</td></tr></table></td></tr></table>"
        soup = parse_markup(markup)
        result, message = TableTransformer().apply_with_summary(soup)

        assert message == "tables: converted 2 table(s)"
        outer_entry = result.find("entry")
        assert outer_entry.find("tgroup") is not None
        assert result.find("tr") is None
        assert len(result.find_all("tgroup")) == 2

    def test_untouched_tables(self) -> None:
        """Test that empty and already-structured tables are left alone."""
        structured = _table("<tbody><row><entry>x</entry></row></tbody>")
        markup = "<table></table>" + structured
        soup = parse_markup(markup)
        result, message = TableTransformer().apply_with_summary(soup)
        assert serialize(result) == markup
        assert message == "tables: converted 0 table(s)"

    def test_table_attributes_from_options(self) -> None:
        """Test configurable frame, separators and fallback width."""
        stage = TableTransformer(TableOptions(frame="topbot", rowsep="0", colsep="0", default_column_width="2*"))
        output = stage.run("<table><tr><td>a</td></tr></table>")
        assert output.startswith('<table frame="topbot" rowsep="0" colsep="0"><tgroup cols="1">')
        assert 'colwidth="2*"' in output

    def test_module_function(self) -> None:
        """Test the functional entry point."""
        soup = transform_tables(parse_markup("<table><tr><td>a</td></tr></table>"))
        assert soup.find("entry").get_text() == "a"
