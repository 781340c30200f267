#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/utils/css.py
"""Inline style declaration helpers.

Word-processor exports carry nearly all of their semantics in ``style``
attributes: list identity and nesting (``mso-list``), visual indent
(``margin-left``), emphasis (``font-weight``, ``font-style``,
``text-decoration``) and table column sizes (``width``). This module parses
those declarations into ordered dictionaries, serializes them back, and
converts CSS lengths into the units the pipeline works with.
"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from paste2dita.constants import (
    BOLD_FONT_WEIGHTS,
    DEFAULT_COLUMN_WIDTH,
    FONT_STYLE_PROPERTY,
    FONT_WEIGHT_PROPERTY,
    ITALIC_FONT_STYLES,
    LIST_LEVEL_RE,
    LIST_MARKER_STYLE_VALUE,
    LIST_STYLE_PROPERTY,
    MARGIN_LEFT_PROPERTY,
    PIXEL_FACTORS,
    POINT_FACTORS,
    TEXT_DECORATION_PROPERTY,
    WIDTH_PROPERTY,
)

logger = logging.getLogger(__name__)

_LENGTH_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))\s*([a-z%]*)\s*$", re.IGNORECASE)


def parse_style(style: str | None) -> dict[str, str]:
    """Parse an inline style attribute into an ordered declaration mapping.

    Property names are lower-cased; values keep their case. Declarations
    without a colon or with an empty name are skipped, and a repeated
    property keeps its last value (CSS cascade order).

    Parameters
    ----------
    style : str or None
        Raw ``style`` attribute value

    Returns
    -------
    dict[str, str]
        Property name to value, in source order

    Examples
    --------
        >>> parse_style("mso-list:l0 level2 lfo1; margin-left:.5in")
        {'mso-list': 'l0 level2 lfo1', 'margin-left': '.5in'}

    """
    declarations: dict[str, str] = {}
    if not style:
        return declarations

    for chunk in style.split(";"):
        if ":" not in chunk:
            continue
        name, _, value = chunk.partition(":")
        name = name.strip().lower()
        value = " ".join(value.split())
        if not name:
            continue
        declarations.pop(name, None)
        declarations[name] = value

    return declarations


def serialize_style(declarations: Mapping[str, str]) -> str:
    """Serialize declarations back into a compact ``style`` attribute value."""
    return ";".join(f"{name}:{value}" for name, value in declarations.items())


def filter_style(declarations: Mapping[str, str]) -> dict[str, str]:
    """Keep only the declarations later stages rely on.

    The allow-list is: ``mso-list``, ``margin-left`` (only alongside
    ``mso-list``), bold ``font-weight``, italic ``font-style``, underline
    ``text-decoration`` and ``width``.

    Parameters
    ----------
    declarations : Mapping[str, str]
        Parsed declarations

    Returns
    -------
    dict[str, str]
        Surviving declarations, in source order

    """
    has_list_style = LIST_STYLE_PROPERTY in declarations
    kept: dict[str, str] = {}

    for name, value in declarations.items():
        if name == LIST_STYLE_PROPERTY:
            kept[name] = value
        elif name == MARGIN_LEFT_PROPERTY:
            if has_list_style:
                kept[name] = value
        elif name == FONT_WEIGHT_PROPERTY:
            if _is_bold_value(value):
                kept[name] = value
        elif name == FONT_STYLE_PROPERTY:
            if _is_italic_value(value):
                kept[name] = value
        elif name == TEXT_DECORATION_PROPERTY:
            if _is_underline_value(value):
                kept[name] = value
        elif name == WIDTH_PROPERTY:
            kept[name] = value

    return kept


def _is_bold_value(value: str) -> bool:
    return value.strip().lower() in BOLD_FONT_WEIGHTS


def _is_italic_value(value: str) -> bool:
    return value.strip().lower() in ITALIC_FONT_STYLES


def _is_underline_value(value: str) -> bool:
    return "underline" in value.lower().split()


def is_bold(declarations: Mapping[str, str]) -> bool:
    """Return True if the declarations render text bold."""
    return _is_bold_value(declarations.get(FONT_WEIGHT_PROPERTY, ""))


def is_italic(declarations: Mapping[str, str]) -> bool:
    """Return True if the declarations render text italic."""
    return _is_italic_value(declarations.get(FONT_STYLE_PROPERTY, ""))


def is_underline(declarations: Mapping[str, str]) -> bool:
    """Return True if the declarations underline text."""
    return _is_underline_value(declarations.get(TEXT_DECORATION_PROPERTY, ""))


def is_list_marker_style(declarations: Mapping[str, str]) -> bool:
    """Return True for the ``mso-list:Ignore`` declaration that flags a marker run."""
    return declarations.get(LIST_STYLE_PROPERTY, "").strip().lower() == LIST_MARKER_STYLE_VALUE


def parse_length(value: str | None) -> tuple[float, str] | None:
    """Split a CSS length into its magnitude and lower-cased unit.

    Returns None when the value is not a plain number with an optional
    alphabetic or ``%`` unit (``auto``, ``calc(...)``, empty strings).
    """
    if not value:
        return None
    match = _LENGTH_RE.match(value)
    if not match:
        return None
    return float(match.group(1)), match.group(2).lower()


def length_to_points(value: str | None) -> float | None:
    """Convert a CSS length to points.

    Parameters
    ----------
    value : str or None
        Length such as ``"0.5in"``, ``"36pt"`` or ``"1.27cm"``

    Returns
    -------
    float or None
        Magnitude in points, or None when the value cannot be interpreted
        (unknown unit, percentages, keywords)

    Examples
    --------
        >>> length_to_points(".5in")
        36.0
        >>> length_to_points("auto") is None
        True

    """
    parsed = parse_length(value)
    if parsed is None:
        return None
    magnitude, unit = parsed
    factor = POINT_FACTORS.get(unit)
    if factor is None:
        return None
    return magnitude * factor


def list_level_from_style(list_value: str | None) -> int | None:
    """Extract the explicit ``levelN`` number from an ``mso-list`` value."""
    if not list_value:
        return None
    match = LIST_LEVEL_RE.search(list_value)
    if not match:
        return None
    level = int(match.group(1))
    return level if level >= 1 else None


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def normalize_column_width(value: str | None) -> str:
    """Normalize a raw column width into a structured-table ``colwidth``.

    Percentages become proportional weights (``"25%"`` -> ``"25*"``),
    absolute lengths become an integer pixel-equivalent magnitude
    (``"72pt"`` -> ``"96"``), plain numbers pass through unchanged and
    anything else falls back to the default proportional weight.

    Parameters
    ----------
    value : str or None
        Width taken from a ``col`` descriptor or a first-row cell

    Returns
    -------
    str
        Normalized column width

    """
    if value is None or not value.strip():
        return DEFAULT_COLUMN_WIDTH

    raw = value.strip()
    parsed = parse_length(raw)
    if parsed is None:
        logger.debug("Unresolvable column width %r, using %s", raw, DEFAULT_COLUMN_WIDTH)
        return DEFAULT_COLUMN_WIDTH

    magnitude, unit = parsed
    if unit == "%":
        return raw.replace("%", "*").replace(" ", "")
    if unit == "":
        return raw
    factor = PIXEL_FACTORS.get(unit)
    if factor is None:
        logger.debug("Unsupported column width unit %r, using %s", unit, DEFAULT_COLUMN_WIDTH)
        return DEFAULT_COLUMN_WIDTH
    return str(_round_half_up(magnitude * factor))


__all__ = [
    "parse_style",
    "serialize_style",
    "filter_style",
    "is_bold",
    "is_italic",
    "is_underline",
    "is_list_marker_style",
    "parse_length",
    "length_to_points",
    "list_level_from_style",
    "normalize_column_width",
]
