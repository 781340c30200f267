#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/utils/__init__.py
"""Utility modules for the paste2dita package.

This package contains inline style parsing, CSS length conversion and
word-processor content detection helpers.
"""

from paste2dita.utils.css import (
    filter_style,
    is_bold,
    is_italic,
    is_underline,
    length_to_points,
    normalize_column_width,
    parse_style,
    serialize_style,
)
from paste2dita.utils.detection import detect_content_source, is_word_content

__all__ = [
    "filter_style",
    "is_bold",
    "is_italic",
    "is_underline",
    "length_to_points",
    "normalize_column_width",
    "parse_style",
    "serialize_style",
    "detect_content_source",
    "is_word_content",
]
