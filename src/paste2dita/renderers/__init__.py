#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/renderers/__init__.py
"""Output renderers for transformed trees."""

from paste2dita.renderers.formatter import PrettyFormatter, format_tree

__all__ = ["PrettyFormatter", "format_tree"]
