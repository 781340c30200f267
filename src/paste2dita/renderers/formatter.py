#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/renderers/formatter.py
"""Pretty formatter: render a tree as indented, line-oriented markup.

The formatter consumes the token stream produced by
:func:`paste2dita.dom.utils.iter_tokens`. Block elements start their own
line and indent their children; inline elements and text accumulate on the
current line. Leaf blocks such as ``p`` or ``entry`` that hold only inline
content stay on a single line.

"""

from __future__ import annotations

import logging
from typing import Sequence, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from paste2dita.constants import DEFAULT_HTML_PARSER, WHITESPACE_RUN_RE
from paste2dita.dom.utils import Token, iter_tokens, parse_markup
from paste2dita.options.formatter import FormatterOptions

logger = logging.getLogger(__name__)


class PrettyFormatter:
    """Render markup with one block element per line.

    Parameters
    ----------
    options : FormatterOptions, optional
        Formatter options
    html_parser : str, default "html.parser"
        Tree builder used when :meth:`format` is given a string

    Examples
    --------
        >>> PrettyFormatter().format("<section><title>A</title><p>x <b>y</b></p></section>")
        '<section>\\n  <title>A</title>\\n  <p>x <b>y</b></p>\\n</section>'

    """

    def __init__(self, options: FormatterOptions | None = None, html_parser: str = DEFAULT_HTML_PARSER):
        """Initialize the formatter."""
        self.options = options or FormatterOptions()
        self.html_parser = html_parser
        self._block_tags = frozenset(self.options.block_tags)
        self._simple_tags = frozenset(self.options.simple_block_tags)

    def format(self, source: Union[str, BeautifulSoup, Tag]) -> str:
        """Format a markup string or a parsed tree.

        Parameters
        ----------
        source : str, BeautifulSoup or Tag
            Markup to format. Strings are parsed first.

        Returns
        -------
        str
            Indented markup without a trailing newline

        """
        if isinstance(source, str):
            if not source.strip():
                return ""
            source = parse_markup(source, self.html_parser)
        return self.format_tokens(list(iter_tokens(source)))

    def format_tokens(self, tokens: Sequence[Token]) -> str:
        """Format a flat token stream."""
        lines: list[str] = []
        current: list[str] = []
        indent = 0

        def flush() -> None:
            line = "".join(current).strip()
            if line:
                lines.append(self._pad(indent) + line)
            current.clear()

        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.kind in ("text", "raw") or token.name not in self._block_tags:
                current.append(self._render_inline(token))
            elif token.kind == "close":
                flush()
                indent = max(0, indent - 1)
                lines.append(self._pad(indent) + token.render())
            elif token.kind == "empty":
                flush()
                lines.append(self._pad(indent) + token.render())
            else:
                end = self._simple_block_end(tokens, i) if token.name in self._simple_tags else None
                flush()
                if end is not None:
                    lines.append(self._pad(indent) + "".join(self._render_inline(t) for t in tokens[i : end + 1]))
                    i = end
                else:
                    lines.append(self._pad(indent) + token.render())
                    indent += 1
            i += 1

        flush()
        return "\n".join(lines).strip()

    def _simple_block_end(self, tokens: Sequence[Token], start: int) -> int | None:
        """Return the index of the matching close token if the block holds only inline content."""
        name = tokens[start].name
        balance = 1
        for j in range(start + 1, len(tokens)):
            token = tokens[j]
            if token.kind not in ("open", "close", "empty"):
                continue
            if token.name == name:
                if token.kind == "close":
                    balance -= 1
                    if balance == 0:
                        return j
                elif token.kind == "open":
                    balance += 1
            elif token.name in self._block_tags:
                return None
        return None

    @staticmethod
    def _render_inline(token: Token) -> str:
        if token.kind == "text":
            return Token("text", text=WHITESPACE_RUN_RE.sub(" ", token.text)).render()
        return token.render()

    def _pad(self, indent: int) -> str:
        return " " * (self.options.indent_width * indent)


def format_tree(source: Union[str, BeautifulSoup, Tag], options: FormatterOptions | None = None) -> str:
    """Format markup or a tree with :class:`PrettyFormatter`."""
    return PrettyFormatter(options).format(source)


__all__ = ["PrettyFormatter", "format_tree"]
