#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Top-level options for the full transformation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import get_args

from paste2dita.constants import DEFAULT_HTML_PARSER, DEFAULT_PRETTY_PRINT, HtmlParser
from paste2dita.options.base import CloneFrozenMixin
from paste2dita.options.formatter import FormatterOptions
from paste2dita.options.stages import ListOptions, SanitizeOptions, StructureOptions, TableOptions


# src/paste2dita/options/pipeline.py
@dataclass(frozen=True)
class PipelineOptions(CloneFrozenMixin):
    """Configuration for a complete paste-to-structure run.

    Parameters
    ----------
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used for the single parse at entry.
    pretty_print : bool, default True
        Whether the result is passed through the formatter. When False the
        compact serialization is returned.
    sanitize : SanitizeOptions
        Sanitizer options.
    lists : ListOptions
        List reconstruction options.
    tables : TableOptions
        Table transformation options.
    structure : StructureOptions
        Structural normalizer options.
    formatter : FormatterOptions
        Pretty formatter options.

    Examples
    --------
    Disable pretty-printing and image output:
        >>> options = PipelineOptions(pretty_print=False, sanitize=SanitizeOptions(strip_images=True))

    Build from configuration data:
        >>> options = PipelineOptions.from_mapping({"formatter": {"indent_width": 4}})

    """

    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser to use",
            "choices": ["html.parser", "html5lib", "lxml"],
            "importance": "advanced",
        },
    )
    pretty_print: bool = field(
        default=DEFAULT_PRETTY_PRINT,
        metadata={"help": "Indent the output for readability", "importance": "core"},
    )
    sanitize: SanitizeOptions = field(default_factory=SanitizeOptions, metadata={"help": "Sanitizer options"})
    lists: ListOptions = field(default_factory=ListOptions, metadata={"help": "List reconstruction options"})
    tables: TableOptions = field(default_factory=TableOptions, metadata={"help": "Table transformation options"})
    structure: StructureOptions = field(
        default_factory=StructureOptions, metadata={"help": "Structural normalizer options"}
    )
    formatter: FormatterOptions = field(default_factory=FormatterOptions, metadata={"help": "Formatter options"})

    def __post_init__(self) -> None:
        """Validate the parser selection.

        Raises
        ------
        ValueError
            If html_parser is not a supported tree builder.

        """
        if self.html_parser not in get_args(HtmlParser):
            raise ValueError(f"html_parser must be one of {get_args(HtmlParser)}, got {self.html_parser!r}")
