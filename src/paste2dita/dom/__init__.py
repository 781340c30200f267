#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/dom/__init__.py
"""Tree parsing, serialization and structure builders."""

from paste2dita.dom.builder import CalsTableBuilder, CellPlacement, CellSpec, ListBuilder, OccupancyGrid
from paste2dita.dom.utils import Token, iter_tokens, parse_markup, serialize

__all__ = [
    "CalsTableBuilder",
    "CellPlacement",
    "CellSpec",
    "ListBuilder",
    "OccupancyGrid",
    "Token",
    "iter_tokens",
    "parse_markup",
    "serialize",
]
