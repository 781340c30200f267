#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/dom/builder.py
"""Builder helper classes for constructing list and table structures.

These builders handle the bookkeeping of nesting and merged cells so that
the transform stages can focus on reading signals out of pasted markup.
Both build BeautifulSoup elements through a ``new_tag`` factory (normally
``soup.new_tag``) so that the results can be spliced straight into the
tree being transformed.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from bs4.element import Tag

from paste2dita.constants import (
    COLUMN_NAME_TEMPLATE,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_TABLE_COLSEP,
    DEFAULT_TABLE_FRAME,
    DEFAULT_TABLE_ROWSEP,
    ListKind,
    RowGroup,
)

logger = logging.getLogger(__name__)

TagFactory = Callable[..., Tag]

LIST_TAGS: dict[str, ListKind] = {"ol": "ordered", "ul": "unordered"}
MAX_COLSPAN = 1000
MAX_ROWSPAN = 65534


def list_tag_for(kind: ListKind) -> str:
    """Return the container element name for a list kind."""
    return "ol" if kind == "ordered" else "ul"


@dataclass
class _ListFrame:
    container: Tag
    level: int
    kind: ListKind
    parent_item: Tag | None = None


class ListBuilder:
    """Helper for building nested list structures from leveled items.

    Keeps an explicit stack of open list containers. Each frame remembers
    the raw level its items were read at, so a jump from level 1 to level 3
    nests a single child list instead of inventing an empty intermediate
    item. A later item at a level between the two keeps filling that child
    list when its kind matches, so items at one depth share a container.

    Parameters
    ----------
    new_tag : callable
        Element factory, usually ``soup.new_tag``

    Examples
    --------
    >>> builder = ListBuilder(soup.new_tag)
    >>> builder.add_item(1, "ordered", li_one)
    >>> builder.add_item(2, "unordered", li_nested)
    >>> builder.add_item(1, "ordered", li_two)
    >>> containers = builder.get_lists()

    """

    def __init__(self, new_tag: TagFactory):
        """Initialize an empty builder."""
        self._new_tag = new_tag
        self._stack: list[_ListFrame] = []
        self._roots: list[Tag] = []

    @property
    def depth(self) -> int:
        """Number of currently open list containers."""
        return len(self._stack)

    def add_item(self, level: int, kind: ListKind, item: Tag) -> None:
        """Append a list item at the given nesting level.

        Parameters
        ----------
        level : int
            Nesting level (1 is top-level)
        kind : {"ordered", "unordered"}
            List kind of the item
        item : Tag
            The ``li`` element to append

        Raises
        ------
        ValueError
            If level is less than 1

        """
        if level < 1:
            raise ValueError(f"Level must be >= 1, got {level}")

        popped: _ListFrame | None = None
        while self._stack and self._stack[-1].level > level:
            popped = self._stack.pop()

        if popped is not None and self._continues(popped, level, kind):
            # Shallower item after a level jump: keep filling the closed container
            popped.level = level
            self._stack.append(popped)
        elif not self._stack:
            self._open_list(level, kind, parent_item=None)
        elif self._stack[-1].level < level:
            parent_item = self._last_item(self._stack[-1].container)
            self._open_list(level, kind, parent_item=parent_item)
        elif self._stack[-1].kind != kind:
            # Same level, different kind: close the current container and
            # start a sibling at the same nesting point
            self._stack.pop()
            parent_item = self._last_item(self._stack[-1].container) if self._stack else None
            self._open_list(level, kind, parent_item=parent_item)

        self._stack[-1].container.append(item)

    def _open_list(self, level: int, kind: ListKind, parent_item: Tag | None) -> None:
        container = self._new_tag(list_tag_for(kind))
        if parent_item is None:
            self._roots.append(container)
        else:
            parent_item.append(container)
        self._stack.append(_ListFrame(container=container, level=level, kind=kind, parent_item=parent_item))

    def _continues(self, frame: _ListFrame, level: int, kind: ListKind) -> bool:
        if frame.kind != kind:
            return False
        if not self._stack:
            return frame.parent_item is None
        top = self._stack[-1]
        return top.level < level and frame.parent_item is self._last_item(top.container)

    @staticmethod
    def _last_item(container: Tag) -> Tag:
        items = container.find_all("li", recursive=False)
        return items[-1]

    def get_lists(self) -> list[Tag]:
        """Get the top-level list containers in creation order."""
        return list(self._roots)


@dataclass
class CellSpec:
    """One source table cell with its declared spans.

    Parameters
    ----------
    element : Tag or None
        The source ``td``/``th`` element, or None for padding
    rowspan : int, default 1
        Declared row span
    colspan : int, default 1
        Declared column span

    """

    element: Tag | None
    rowspan: int = 1
    colspan: int = 1

    @classmethod
    def from_element(cls, element: Tag) -> CellSpec:
        """Read span attributes, degrading invalid or absent values to 1."""
        return cls(
            element=element,
            rowspan=parse_span(element.get("rowspan"), MAX_ROWSPAN),
            colspan=parse_span(element.get("colspan"), MAX_COLSPAN),
        )


def parse_span(value: object, upper: int) -> int:
    if value is None:
        return 1
    try:
        span = int(str(value).strip())
    except ValueError:
        logger.debug("Invalid span value %r, using 1", value)
        return 1
    return min(max(span, 1), upper)


@dataclass
class CellPlacement:
    """Where a cell landed in the logical grid of its row group."""

    spec: CellSpec
    entry: Tag
    row: int
    column: int
    rowspan: int
    colspan: int

    @property
    def is_padding(self) -> bool:
        return self.spec.element is None


class OccupancyGrid:
    """Bookkeeping grid marking which (row, column) positions are already covered.

    Parameters
    ----------
    row_count : int
        Number of rows in the row group; spans are clamped to it

    """

    def __init__(self, row_count: int):
        """Initialize an empty grid."""
        self.row_count = row_count
        self._owners: dict[tuple[int, int], int] = {}

    def is_occupied(self, row: int, column: int) -> bool:
        return (row, column) in self._owners

    def owner(self, row: int, column: int) -> int | None:
        """Return the placement index covering a position, if any."""
        return self._owners.get((row, column))

    def first_free(self, row: int, start: int = 0) -> int:
        """Return the first unoccupied column at or after ``start``."""
        column = start
        while self.is_occupied(row, column):
            column += 1
        return column

    def fit(self, row: int, column: int, rowspan: int, colspan: int) -> tuple[int, int]:
        """Shrink spans so the cell covers only free positions.

        A column span stops at the first occupied column of the starting
        row; a row span stops at the group end or at the first row where
        any of the covered columns is already taken.
        """
        fitted_colspan = 1
        while fitted_colspan < colspan and not self.is_occupied(row, column + fitted_colspan):
            fitted_colspan += 1

        fitted_rowspan = 1
        max_rowspan = max(1, min(rowspan, self.row_count - row))
        while fitted_rowspan < max_rowspan and not any(
            self.is_occupied(row + fitted_rowspan, c) for c in range(column, column + fitted_colspan)
        ):
            fitted_rowspan += 1

        return fitted_rowspan, fitted_colspan

    def occupy(self, row: int, column: int, rowspan: int, colspan: int, owner: int) -> None:
        """Mark every position covered by a cell."""
        for r in range(row, row + rowspan):
            for c in range(column, column + colspan):
                if (r, c) in self._owners:
                    raise ValueError(f"Position ({r}, {c}) is already covered")
                self._owners[(r, c)] = owner

    def covered(self) -> dict[tuple[int, int], int]:
        """Return a copy of the position -> owner mapping."""
        return dict(self._owners)


class CalsTableBuilder:
    """Helper for building a CALS-style structured table.

    Produces ``table > tgroup > colspec* , thead?, tbody?`` with ``row`` and
    ``entry`` elements. Entries are created empty; callers fill them from
    :attr:`placements` once the structure is built.

    Parameters
    ----------
    new_tag : callable
        Element factory, usually ``soup.new_tag``
    column_count : int
        Number of logical columns
    column_widths : sequence of str, optional
        One normalized width per column; missing widths use ``1*``
    frame, rowsep, colsep : str
        Table-level attributes

    Examples
    --------
    >>> builder = CalsTableBuilder(soup.new_tag, column_count=2)
    >>> builder.add_group("tbody", [[CellSpec(td, colspan=2)], [CellSpec(a), CellSpec(b)]])
    >>> table = builder.get_table()

    """

    def __init__(
        self,
        new_tag: TagFactory,
        column_count: int,
        column_widths: Sequence[str] | None = None,
        frame: str = DEFAULT_TABLE_FRAME,
        rowsep: str = DEFAULT_TABLE_ROWSEP,
        colsep: str = DEFAULT_TABLE_COLSEP,
    ):
        """Initialize the table with its column specifications."""
        if column_count < 1:
            raise ValueError(f"Column count must be >= 1, got {column_count}")
        self._new_tag = new_tag
        self.column_count = column_count
        self.placements: list[CellPlacement] = []
        self.grids: dict[RowGroup, OccupancyGrid] = {}
        self.overflow_count = 0

        self.table = new_tag("table", attrs={"frame": frame, "rowsep": rowsep, "colsep": colsep})
        self.tgroup = new_tag("tgroup", attrs={"cols": str(column_count)})
        self.table.append(self.tgroup)

        widths = list(column_widths or [])
        for index in range(1, column_count + 1):
            width = widths[index - 1] if index <= len(widths) and widths[index - 1] else DEFAULT_COLUMN_WIDTH
            colspec = new_tag(
                "colspec",
                attrs={"colnum": str(index), "colname": self.column_name(index - 1), "colwidth": width},
            )
            self.tgroup.append(colspec)

    @staticmethod
    def column_name(column: int) -> str:
        """Return the ``colname`` of a zero-based column index."""
        return COLUMN_NAME_TEMPLATE.format(index=column + 1)

    def add_group(self, group: RowGroup, rows: Sequence[Sequence[CellSpec]]) -> Tag | None:
        """Emit a row group, resolving spans through an occupancy grid.

        Parameters
        ----------
        group : {"thead", "tbody"}
            Row group element to emit
        rows : sequence of sequence of CellSpec
            Cells of each source row, in order

        Returns
        -------
        Tag or None
            The emitted group element, or None if there were no rows

        """
        if not rows:
            return None

        group_tag = self._new_tag(group)
        grid = OccupancyGrid(len(rows))
        self.grids[group] = grid

        for row_index, cells in enumerate(rows):
            row_tag = self._new_tag("row")
            column = 0
            for spec in cells:
                column = grid.first_free(row_index, column)
                rowspan, colspan = grid.fit(row_index, column, spec.rowspan, spec.colspan)
                if (rowspan, colspan) != (min(spec.rowspan, len(rows) - row_index), spec.colspan):
                    logger.debug(
                        "Cell span %dx%d at row %d col %d reduced to %dx%d to avoid overlap",
                        spec.rowspan,
                        spec.colspan,
                        row_index,
                        column,
                        rowspan,
                        colspan,
                    )
                if column + colspan > self.column_count:
                    self.overflow_count += 1
                    logger.warning(
                        "Cell at row %d extends past column %d of %d; emitting it anyway",
                        row_index,
                        column + colspan,
                        self.column_count,
                    )
                row_tag.append(self._place(grid, spec, row_index, column, rowspan, colspan))
                column += colspan

            # Pad positions no cell (or prior span) covers
            for pad_column in range(self.column_count):
                if not grid.is_occupied(row_index, pad_column):
                    row_tag.append(self._place(grid, CellSpec(element=None), row_index, pad_column, 1, 1))

            group_tag.append(row_tag)

        self.tgroup.append(group_tag)
        return group_tag

    def _place(self, grid: OccupancyGrid, spec: CellSpec, row: int, column: int, rowspan: int, colspan: int) -> Tag:
        entry = self._new_tag("entry")
        if rowspan > 1:
            entry["morerows"] = str(rowspan - 1)
        if colspan > 1:
            entry["namest"] = self.column_name(column)
            entry["nameend"] = self.column_name(column + colspan - 1)
        grid.occupy(row, column, rowspan, colspan, owner=len(self.placements))
        self.placements.append(
            CellPlacement(spec=spec, entry=entry, row=row, column=column, rowspan=rowspan, colspan=colspan)
        )
        return entry

    def get_table(self) -> Tag:
        """Get the constructed table element."""
        return self.table


__all__ = [
    "LIST_TAGS",
    "ListBuilder",
    "list_tag_for",
    "CellSpec",
    "CellPlacement",
    "OccupancyGrid",
    "CalsTableBuilder",
]
