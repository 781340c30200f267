#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for paste2dita.

This module centralizes the tag vocabularies, unit conversion factors and
default configuration values used across the transformation pipeline.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Parsing and Serialization - Tree builder selection and void elements
3. Sanitizer - Elements, attributes and style declarations kept or dropped
4. List Reconstruction - Marker styles, patterns and length units
5. Table Transformation - Structured table vocabulary and width units
6. Structural Normalization - Heading, link and inline tag handling
7. Formatter - Block and simple-block tag sets
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]
ListKind = Literal["ordered", "unordered"]
RowGroup = Literal["thead", "tbody"]
StageName = Literal["sanitize", "lists", "tables", "structure"]
HookPoint = Literal["post_parse", "pre_stage", "post_stage", "post_serialize", "post_format"]

# =============================================================================
# Parsing and Serialization
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html.parser"
HTML_PARSER_PACKAGES: dict[str, str] = {"lxml": "lxml", "html5lib": "html5lib"}

# Elements that never carry content and serialize self-closed
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "colspec",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# ASCII whitespace only; non-breaking spaces survive until the normalizer
WHITESPACE_RUN_RE = re.compile(r"[ \t\r\n\f\v]+")
ANY_WHITESPACE_RUN_RE = re.compile(r"\s+")

# =============================================================================
# Sanitizer
# =============================================================================

DEFAULT_SANITIZE_DROP_ELEMENTS: tuple[str, ...] = ("script", "style", "head", "meta", "link", "xml", "noscript")
DEFAULT_DOCUMENT_WRAPPER_ELEMENTS: tuple[str, ...] = ("html", "body")
DEFAULT_VENDOR_CLASS_PREFIXES: tuple[str, ...] = ("Mso",)
DEFAULT_EMBEDDED_BLOCK_MARKERS: tuple[str, ...] = ("tdoc-data-src",)
DEFAULT_STRIP_IMAGES = False

LIST_STYLE_PROPERTY = "mso-list"
LIST_MARKER_STYLE_VALUE = "ignore"
MARGIN_LEFT_PROPERTY = "margin-left"
WIDTH_PROPERTY = "width"
FONT_WEIGHT_PROPERTY = "font-weight"
FONT_STYLE_PROPERTY = "font-style"
TEXT_DECORATION_PROPERTY = "text-decoration"

BOLD_FONT_WEIGHTS = frozenset({"bold", "bolder", "600", "700", "800", "900"})
ITALIC_FONT_STYLES = frozenset({"italic"})

# =============================================================================
# List Reconstruction
# =============================================================================

DEFAULT_LIST_PARAGRAPH_TAGS: tuple[str, ...] = ("p", "div")
DEFAULT_MARGIN_TOLERANCE = 1e-4
DEFAULT_LIST_LEVEL = 1

LIST_LEVEL_RE = re.compile(r"\blevel\s*(\d+)", re.IGNORECASE)

# Length unit -> points
POINT_FACTORS: dict[str, float] = {
    "in": 72.0,
    "cm": 28.3465,
    "mm": 2.83465,
    "pc": 12.0,
    "px": 0.75,
    "pt": 1.0,
    "": 1.0,
}

ORDERED_MARKER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[a-zA-Z]{1,2}[.)]"),
    re.compile(r"^\(?[0-9]+[.)]"),
    re.compile(r"^[ivxlcdm]+[.)]"),
    re.compile(r"^[IVXLCDM]+[.)]"),
    re.compile(r"^[〇零一二三四五六七八九十百千]+[.．、)）]"),
    re.compile(r"^[壹贰貳叁參肆伍陆陸柒捌玖拾佰]+[.．、)）]"),
)
BULLET_MARKER_RE = re.compile(r"^(?:[•·§●○◦‣⁃▪■□◆❖➢✓-]|o$)")

# =============================================================================
# Table Transformation
# =============================================================================

TABLE_CELL_TAGS: tuple[str, ...] = ("td", "th")
PARAGRAPH_WRAPPER_TAGS = frozenset({"p", "div"})
SIMPLE_INLINE_TAGS = frozenset({"b", "i", "u", "strong", "em"})

DEFAULT_TABLE_FRAME = "all"
DEFAULT_TABLE_ROWSEP = "1"
DEFAULT_TABLE_COLSEP = "1"
DEFAULT_COLUMN_WIDTH = "1*"
COLUMN_NAME_TEMPLATE = "col{index}"

# Length unit -> pixel equivalents for column widths
PIXEL_FACTORS: dict[str, float] = {
    "pt": 1.3333,
    "in": 96.0,
    "cm": 37.795,
    "mm": 3.7795,
    "pc": 16.0,
    "px": 1.0,
}

STRUCTURED_TABLE_TAGS = frozenset({"tgroup", "colspec", "row", "entry"})

# =============================================================================
# Structural Normalization
# =============================================================================

DEFAULT_CONTAINER_TAGS: tuple[str, ...] = ("div",)
DEFAULT_UNWRAP_TAGS: tuple[str, ...] = ("font", "span", "s")
DEFAULT_REMOVABLE_ATTRIBUTES: tuple[str, ...] = ("class", "id", "align", "valign", "lang")
DEFAULT_REMOVABLE_ATTRIBUTE_PREFIXES: tuple[str, ...] = ("data-",)
DEFAULT_MERGE_INLINE_TAGS: tuple[str, ...] = ("b", "i", "u", "strong", "em")
DEFAULT_PRESERVE_EMPTY_TAGS: tuple[str, ...] = (
    "table",
    "thead",
    "tbody",
    "tr",
    "td",
    "th",
    "ul",
    "ol",
    "li",
    "tgroup",
    "colspec",
    "row",
    "entry",
)
CONTENT_VOID_TAGS = frozenset({"img", "br"})

TITLE_HEADING_TAG = "h1"
SUBORDINATE_HEADING_TAGS: tuple[str, ...] = ("h2", "h3", "h4", "h5", "h6")
DEMOTED_HEADING_TAG = "b"
TITLE_TAG = "title"
SECTION_TAG = "section"
XREF_TAG = "xref"

DEFAULT_LINK_SCOPE = "external"
DEFAULT_LINK_FORMAT = "html"
DEFAULT_WRAP_SECTION = True

# =============================================================================
# Formatter
# =============================================================================

DEFAULT_INDENT_WIDTH = 2
DEFAULT_PRETTY_PRINT = True

DEFAULT_BLOCK_TAGS: tuple[str, ...] = (
    "html",
    "body",
    "dita",
    "topic",
    "title",
    "shortdesc",
    "section",
    "p",
    "div",
    "table",
    "tgroup",
    "thead",
    "tbody",
    "row",
    "entry",
    "colspec",
    "ul",
    "ol",
    "li",
    "dl",
    "dlentry",
    "dt",
    "dd",
    "fig",
    "note",
    "lines",
    "pre",
)
DEFAULT_SIMPLE_BLOCK_TAGS: tuple[str, ...] = ("entry", "p", "li", "title", "dt", "dd")

# =============================================================================
# Word-processor detection
# =============================================================================

WORD_CONTENT_RE = re.compile(
    r"<font face=\"Times New Roman\"|class=\"?Mso|style=\"[^\"]*\bmso-|style='[^']*\bmso-|w:WordDocument",
    re.IGNORECASE,
)
GOOGLE_DOCS_RE = re.compile(r"class=\"OutlineElement|id=\"?docs-internal-guid-")

# =============================================================================
# CLI
# =============================================================================

ENV_PREFIX = "PASTE2DITA_"
CONFIG_FILENAMES: tuple[str, ...] = (".paste2dita.toml", ".paste2dita.yaml", ".paste2dita.yml", ".paste2dita.json")
PYPROJECT_TOOL_SECTION = "paste2dita"
