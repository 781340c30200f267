#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the four tree-rewriting stages.

This module defines the options for the sanitizer, list reconstructor,
table transformer and structural normalizer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from paste2dita.constants import (
    DEFAULT_CONTAINER_TAGS,
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_DOCUMENT_WRAPPER_ELEMENTS,
    DEFAULT_EMBEDDED_BLOCK_MARKERS,
    DEFAULT_LINK_FORMAT,
    DEFAULT_LINK_SCOPE,
    DEFAULT_LIST_PARAGRAPH_TAGS,
    DEFAULT_MARGIN_TOLERANCE,
    DEFAULT_MERGE_INLINE_TAGS,
    DEFAULT_PRESERVE_EMPTY_TAGS,
    DEFAULT_REMOVABLE_ATTRIBUTE_PREFIXES,
    DEFAULT_REMOVABLE_ATTRIBUTES,
    DEFAULT_SANITIZE_DROP_ELEMENTS,
    DEFAULT_STRIP_IMAGES,
    DEFAULT_TABLE_COLSEP,
    DEFAULT_TABLE_FRAME,
    DEFAULT_TABLE_ROWSEP,
    DEFAULT_UNWRAP_TAGS,
    DEFAULT_VENDOR_CLASS_PREFIXES,
    DEFAULT_WRAP_SECTION,
)
from paste2dita.options.base import BaseStageOptions


# src/paste2dita/options/stages.py
@dataclass(frozen=True)
class SanitizeOptions(BaseStageOptions):
    """Configuration options for the sanitizer stage.

    Parameters
    ----------
    drop_elements : tuple[str, ...]
        Elements removed together with their content.
    unwrap_document_elements : tuple[str, ...]
        Document scaffolding elements replaced by their children.
    vendor_class_prefixes : tuple[str, ...]
        Class tokens starting with one of these prefixes are removed.
    embedded_block_markers : tuple[str, ...]
        Elements carrying any of these attributes are removed with their content.
    strip_images : bool, default False
        Whether to remove ``img`` elements.
    strip_comments : bool, default True
        Whether to remove comments, conditional comments and declarations.
    collapse_whitespace : bool, default True
        Whether to collapse ASCII whitespace runs to single spaces.

    """

    drop_elements: tuple[str, ...] = field(
        default=DEFAULT_SANITIZE_DROP_ELEMENTS,
        metadata={"help": "Elements removed together with their content", "importance": "advanced"},
    )
    unwrap_document_elements: tuple[str, ...] = field(
        default=DEFAULT_DOCUMENT_WRAPPER_ELEMENTS,
        metadata={"help": "Document scaffolding elements replaced by their children", "importance": "advanced"},
    )
    vendor_class_prefixes: tuple[str, ...] = field(
        default=DEFAULT_VENDOR_CLASS_PREFIXES,
        metadata={"help": "Class token prefixes that identify vendor-specific classes", "importance": "advanced"},
    )
    embedded_block_markers: tuple[str, ...] = field(
        default=DEFAULT_EMBEDDED_BLOCK_MARKERS,
        metadata={"help": "Attributes marking embedded non-content blocks", "importance": "advanced"},
    )
    strip_images: bool = field(
        default=DEFAULT_STRIP_IMAGES,
        metadata={"help": "Remove img elements", "importance": "core"},
    )
    strip_comments: bool = field(
        default=True,
        metadata={"help": "Remove comments and conditional-comment declarations", "importance": "advanced"},
    )
    collapse_whitespace: bool = field(
        default=True,
        metadata={"help": "Collapse whitespace runs to single spaces", "importance": "advanced"},
    )


@dataclass(frozen=True)
class ListOptions(BaseStageOptions):
    """Configuration options for list reconstruction.

    Parameters
    ----------
    paragraph_tags : tuple[str, ...], default ("p", "div")
        Paragraph-like elements inspected for list-marker styles.
    margin_tolerance : float, default 1e-4
        Left margins (in points) closer than this share a nesting level.
    trim_items : bool, default True
        Whether to trim leading and trailing whitespace of list items.

    """

    paragraph_tags: tuple[str, ...] = field(
        default=DEFAULT_LIST_PARAGRAPH_TAGS,
        metadata={"help": "Paragraph-like elements inspected for list-marker styles", "importance": "advanced"},
    )
    margin_tolerance: float = field(
        default=DEFAULT_MARGIN_TOLERANCE,
        metadata={"help": "Margins (points) closer than this collapse to one level", "importance": "advanced"},
    )
    trim_items: bool = field(
        default=True,
        metadata={"help": "Trim whitespace at the edges of list items", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If margin_tolerance is negative.

        """
        super().__post_init__()
        if self.margin_tolerance < 0:
            raise ValueError(f"margin_tolerance must be non-negative, got {self.margin_tolerance}")


@dataclass(frozen=True)
class TableOptions(BaseStageOptions):
    """Configuration options for structured table conversion.

    Parameters
    ----------
    frame : str, default "all"
        ``frame`` attribute of emitted tables.
    rowsep : str, default "1"
        ``rowsep`` attribute of emitted tables.
    colsep : str, default "1"
        ``colsep`` attribute of emitted tables.
    default_column_width : str, default "1*"
        Width used for columns with no resolvable width.

    """

    frame: str = field(
        default=DEFAULT_TABLE_FRAME,
        metadata={"help": "frame attribute of emitted tables", "importance": "advanced"},
    )
    rowsep: str = field(
        default=DEFAULT_TABLE_ROWSEP,
        metadata={"help": "rowsep attribute of emitted tables", "importance": "advanced"},
    )
    colsep: str = field(
        default=DEFAULT_TABLE_COLSEP,
        metadata={"help": "colsep attribute of emitted tables", "importance": "advanced"},
    )
    default_column_width: str = field(
        default=DEFAULT_COLUMN_WIDTH,
        metadata={"help": "Width used for columns with no resolvable width", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate field values.

        Raises
        ------
        ValueError
            If default_column_width is empty.

        """
        super().__post_init__()
        if not self.default_column_width.strip():
            raise ValueError("default_column_width must not be empty")


@dataclass(frozen=True)
class StructureOptions(BaseStageOptions):
    """Configuration options for the structural normalizer.

    Parameters
    ----------
    container_tags : tuple[str, ...], default ("div",)
        Generic containers renamed to ``p``.
    unwrap_tags : tuple[str, ...], default ("font", "span", "s")
        Presentational inline wrappers replaced by their children.
    removable_attributes : tuple[str, ...]
        Attributes dropped from every element.
    removable_attribute_prefixes : tuple[str, ...], default ("data-",)
        Attribute name prefixes dropped from every element.
    preserve_empty_tags : tuple[str, ...]
        Elements kept even when they have no content.
    merge_inline_tags : tuple[str, ...]
        Inline emphasis elements that are unwrapped when nested in themselves
        and merged when adjacent.
    wrap_section : bool, default True
        Whether to wrap the content in a ``section`` when a title is found.
    link_scope : str, default "external"
        ``scope`` attribute of cross-references made from links.
    link_format : str, default "html"
        ``format`` attribute of cross-references made from links.
    convert_nbsp : bool, default True
        Whether to replace non-breaking spaces with ordinary spaces.

    """

    container_tags: tuple[str, ...] = field(
        default=DEFAULT_CONTAINER_TAGS,
        metadata={"help": "Generic containers converted to paragraphs", "importance": "advanced"},
    )
    unwrap_tags: tuple[str, ...] = field(
        default=DEFAULT_UNWRAP_TAGS,
        metadata={"help": "Presentational inline wrappers replaced by their content", "importance": "advanced"},
    )
    removable_attributes: tuple[str, ...] = field(
        default=DEFAULT_REMOVABLE_ATTRIBUTES,
        metadata={"help": "Attributes removed from every element", "importance": "advanced"},
    )
    removable_attribute_prefixes: tuple[str, ...] = field(
        default=DEFAULT_REMOVABLE_ATTRIBUTE_PREFIXES,
        metadata={"help": "Attribute name prefixes removed from every element", "importance": "advanced"},
    )
    preserve_empty_tags: tuple[str, ...] = field(
        default=DEFAULT_PRESERVE_EMPTY_TAGS,
        metadata={"help": "Elements kept even when empty", "importance": "advanced"},
    )
    merge_inline_tags: tuple[str, ...] = field(
        default=DEFAULT_MERGE_INLINE_TAGS,
        metadata={"help": "Inline emphasis elements to unwrap and merge", "importance": "advanced"},
    )
    wrap_section: bool = field(
        default=DEFAULT_WRAP_SECTION,
        metadata={"help": "Wrap content in a section when a title is present", "importance": "core"},
    )
    link_scope: str = field(
        default=DEFAULT_LINK_SCOPE,
        metadata={"help": "scope attribute of cross-references", "importance": "advanced"},
    )
    link_format: str = field(
        default=DEFAULT_LINK_FORMAT,
        metadata={"help": "format attribute of cross-references", "importance": "advanced"},
    )
    convert_nbsp: bool = field(
        default=True,
        metadata={"help": "Replace non-breaking spaces with ordinary spaces", "importance": "core"},
    )
