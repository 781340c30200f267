#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/tables.py
"""Table transformer stage: convert native tables into CALS-style tables.

Tables are processed deepest-nested first so that an inner table is
already converted when its containing cell is moved into an ``entry``.
Already-structured tables (with a ``tgroup``) and tables without rows are
left untouched.
"""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from paste2dita.constants import (
    ANY_WHITESPACE_RUN_RE,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_UNWRAP_TAGS,
    PARAGRAPH_WRAPPER_TAGS,
    SIMPLE_INLINE_TAGS,
    TABLE_CELL_TAGS,
    WIDTH_PROPERTY,
)
from paste2dita.dom.builder import CalsTableBuilder, CellSpec, parse_span
from paste2dita.dom.utils import collapse_whitespace, is_blank_text, strip_edges, text_content
from paste2dita.options.stages import TableOptions
from paste2dita.transforms.base import Stage
from paste2dita.utils.css import normalize_column_width, parse_style

logger = logging.getLogger(__name__)

# Presentational wrappers that do not count against a paragraph being "simple"
_TRANSPARENT_INLINE_TAGS = frozenset(DEFAULT_UNWRAP_TAGS)


def _own(table: Tag, name: str | list[str]) -> list[Tag]:
    """Find descendants of ``table`` that belong to it rather than to a nested table."""
    return [el for el in table.find_all(name) if el.find_parent("table") is table]


def own_rows(table: Tag) -> list[Tag]:
    """Return the ``tr`` elements of a table, excluding rows of nested tables."""
    return _own(table, "tr")


def row_cells(row: Tag) -> list[Tag]:
    """Return the cells of a row in order."""
    return row.find_all(list(TABLE_CELL_TAGS), recursive=False)


def count_columns(rows: list[Tag]) -> int:
    """Return the maximum, over all rows, of the sum of column spans."""
    return max((sum(CellSpec.from_element(c).colspan for c in row_cells(r)) for r in rows), default=0)


def _declared_width(element: Tag) -> Optional[str]:
    width = parse_style(str(element.get("style", ""))).get(WIDTH_PROPERTY)
    if not width:
        attr = element.get("width")
        width = str(attr) if attr is not None else None
    return width.strip() if width and width.strip() else None


def resolve_column_widths(table: Tag, column_count: int, first_row: Optional[Tag]) -> list[str]:
    """Resolve one normalized width per column.

    Priority order: widths declared on ``col`` descriptors (expanded across
    their ``span``), then the width of the first-row cell occupying an
    unresolved column when that cell spans exactly one column, then the
    default proportional weight.

    Parameters
    ----------
    table : Tag
        Source table
    column_count : int
        Number of logical columns
    first_row : Tag or None
        First row of the table

    Returns
    -------
    list[str]
        ``column_count`` normalized widths

    """
    widths: list[Optional[str]] = [None] * column_count

    column = 0
    for col in _own(table, "col"):
        span = parse_span(col.get("span"), column_count or 1)
        width = _declared_width(col)
        if width:
            for offset in range(span):
                if column + offset < column_count:
                    widths[column + offset] = width
        column += span

    if first_row is not None and any(w is None for w in widths):
        column = 0
        for cell in row_cells(first_row):
            spec = CellSpec.from_element(cell)
            width = _declared_width(cell)
            if spec.colspan == 1 and width and column < column_count and widths[column] is None:
                widths[column] = width
            column += spec.colspan

    return [normalize_column_width(w) for w in widths]


def _is_simple_paragraph(paragraph: Tag) -> bool:
    """Return True if a paragraph holds only inline emphasis (or nothing)."""
    for child in paragraph.children:
        if not isinstance(child, Tag):
            continue
        if child.name in SIMPLE_INLINE_TAGS:
            continue
        if child.name in _TRANSPARENT_INLINE_TAGS and _is_simple_paragraph(child):
            continue
        return False
    return True


def _is_empty_paragraph(node: Tag) -> bool:
    return node.name in PARAGRAPH_WRAPPER_TAGS and not text_content(node).strip() and node.find(True) is None


def extract_cell_content(cell: Tag, entry: Tag) -> None:
    """Move the content of a source cell into an ``entry``.

    If the only content is empty paragraph wrappers the entry stays empty.
    Otherwise each paragraph holding only inline emphasis is inlined (its
    trimmed inner content), other paragraphs are kept as nested blocks, and
    any remaining content is moved as-is. Whitespace runs collapse to single
    spaces and the result is trimmed.
    """
    children = list(cell.contents)
    significant = [c for c in children if not is_blank_text(c)]
    if significant and all(isinstance(c, Tag) and _is_empty_paragraph(c) for c in significant):
        return

    for child in children:
        child = child.extract()
        if isinstance(child, Tag) and child.name in PARAGRAPH_WRAPPER_TAGS and _is_simple_paragraph(child):
            strip_edges(child)
            for grandchild in list(child.contents):
                entry.append(grandchild.extract())
        else:
            entry.append(child)

    collapse_whitespace(entry, ANY_WHITESPACE_RUN_RE)
    strip_edges(entry)


class TableTransformer(Stage[TableOptions]):
    """Convert ``table``/``tr``/``td`` markup into the CALS table model.

    The output is ``table > tgroup > colspec*, thead?, tbody?`` with
    ``row`` and ``entry`` elements. Merged cells are resolved with an
    occupancy grid per row group; spans become ``morerows`` and
    ``namest``/``nameend`` attributes, and short rows are padded with
    empty entries.

    Parameters
    ----------
    options : TableOptions, optional
        Table options

    """

    name = "tables"
    options_class = TableOptions

    def _apply(self, soup: BeautifulSoup) -> tuple[BeautifulSoup, str]:
        converted = 0
        skipped = 0
        # find_all is document order, so reversing visits inner tables first
        for table in reversed(soup.find_all("table")):
            if self.convert_table(soup, table):
                converted += 1
            else:
                skipped += 1

        if converted or skipped:
            logger.debug("Converted %d table(s), left %d untouched", converted, skipped)
        return soup, f"{self.name}: converted {converted} table(s)"

    def convert_table(self, soup: BeautifulSoup, table: Tag) -> bool:
        """Replace one native table with its structured equivalent.

        Returns
        -------
        bool
            False if the table was left untouched

        """
        if table.find("tgroup", recursive=False) is not None:
            return False

        rows = own_rows(table)
        column_count = count_columns(rows)
        if not rows or column_count == 0:
            logger.debug("Skipping table without rows or cells")
            return False

        head_rows = [r for r in rows if r.parent is not None and r.parent.name == "thead"]
        head_ids = {id(r) for r in head_rows}
        body_rows = [r for r in rows if id(r) not in head_ids]

        widths = resolve_column_widths(table, column_count, rows[0])
        if self.options.default_column_width != DEFAULT_COLUMN_WIDTH:
            widths = [self.options.default_column_width if w == DEFAULT_COLUMN_WIDTH else w for w in widths]

        builder = CalsTableBuilder(
            soup.new_tag,
            column_count=column_count,
            column_widths=widths,
            frame=self.options.frame,
            rowsep=self.options.rowsep,
            colsep=self.options.colsep,
        )
        builder.add_group("thead", [[CellSpec.from_element(c) for c in row_cells(r)] for r in head_rows])
        builder.add_group("tbody", [[CellSpec.from_element(c) for c in row_cells(r)] for r in body_rows])

        for placement in builder.placements:
            if placement.spec.element is not None:
                extract_cell_content(placement.spec.element, placement.entry)

        table.replace_with(builder.get_table())
        return True


def transform_tables(soup: BeautifulSoup, options: TableOptions | None = None) -> BeautifulSoup:
    """Apply the table transformer to ``soup`` and return the resulting tree."""
    return TableTransformer(options).apply(soup)


__all__ = [
    "TableTransformer",
    "count_columns",
    "extract_cell_content",
    "own_rows",
    "resolve_column_widths",
    "row_cells",
    "transform_tables",
]
