#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the pretty formatter."""

from __future__ import annotations

from dataclasses import dataclass, field

from paste2dita.constants import DEFAULT_BLOCK_TAGS, DEFAULT_INDENT_WIDTH, DEFAULT_SIMPLE_BLOCK_TAGS
from paste2dita.options.base import CloneFrozenMixin


# src/paste2dita/options/formatter.py
@dataclass(frozen=True)
class FormatterOptions(CloneFrozenMixin):
    """Configuration options for rendering the final tree as indented text.

    Parameters
    ----------
    indent_width : int, default 2
        Spaces per indentation level.
    block_tags : tuple[str, ...]
        Elements that start their own line and indent their children.
        Everything else is treated as inline.
    simple_block_tags : tuple[str, ...], default ("entry", "p", "li", "title", "dt", "dd")
        Leaf block containers emitted on a single line when they hold only
        inline content.

    Examples
    --------
        >>> FormatterOptions(indent_width=4)

    """

    indent_width: int = field(
        default=DEFAULT_INDENT_WIDTH,
        metadata={"help": "Spaces per indentation level", "type": int, "importance": "core"},
    )
    block_tags: tuple[str, ...] = field(
        default=DEFAULT_BLOCK_TAGS,
        metadata={"help": "Elements rendered as indented blocks", "importance": "advanced"},
    )
    simple_block_tags: tuple[str, ...] = field(
        default=DEFAULT_SIMPLE_BLOCK_TAGS,
        metadata={"help": "Leaf blocks rendered on one line when their content is inline", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If indent_width is negative.

        """
        if self.indent_width < 0:
            raise ValueError(f"indent_width must be non-negative, got {self.indent_width}")
