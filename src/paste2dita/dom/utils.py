#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/dom/utils.py
"""Tree helpers shared by the pipeline stages.

Markup is parsed exactly once at pipeline entry into a BeautifulSoup tree
and serialized exactly once at exit. In between, every stage edits the
tree in place. The serializer walks the tree into a flat token stream
(open, close, empty, text, raw) which is also what the formatter consumes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Literal, Union

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.dammit import EntitySubstitution
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from paste2dita.constants import (
    DEFAULT_HTML_PARSER,
    HTML_PARSER_PACKAGES,
    VOID_ELEMENTS,
    WHITESPACE_RUN_RE,
)
from paste2dita.exceptions import DependencyError, ParsingError

logger = logging.getLogger(__name__)

TokenKind = Literal["open", "close", "empty", "text", "raw"]
Root = Union[BeautifulSoup, Tag]


@dataclass(frozen=True)
class Token:
    """A single fragment of serialized markup.

    Parameters
    ----------
    kind : {"open", "close", "empty", "text", "raw"}
        Fragment kind. ``raw`` carries comments and declarations verbatim.
    name : str, default ""
        Element name for tag tokens
    attrs : tuple of (str, str), default ()
        Attributes in source order for ``open`` and ``empty`` tokens
    text : str, default ""
        Unescaped character data for ``text`` tokens, verbatim markup for ``raw``

    """

    kind: TokenKind
    name: str = ""
    attrs: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    text: str = ""

    def render(self) -> str:
        """Render the token as markup."""
        if self.kind == "text":
            return EntitySubstitution.substitute_xml(self.text)
        if self.kind == "raw":
            return self.text
        if self.kind == "close":
            return f"</{self.name}>"
        attrs = "".join(
            f" {name}={EntitySubstitution.substitute_xml(value, make_quoted_attribute=True)}"
            for name, value in self.attrs
        )
        if self.kind == "empty":
            return f"<{self.name}{attrs}/>"
        return f"<{self.name}{attrs}>"


def parse_markup(markup: str, parser: str = DEFAULT_HTML_PARSER) -> BeautifulSoup:
    """Parse markup into a BeautifulSoup tree.

    Parameters
    ----------
    markup : str
        Markup to parse
    parser : str, default "html.parser"
        BeautifulSoup tree builder name

    Returns
    -------
    BeautifulSoup
        Parsed tree. ``class`` and similar attributes are kept as plain
        strings so they serialize exactly as written.

    Raises
    ------
    DependencyError
        If the requested tree builder is not installed
    ParsingError
        If the tree builder fails on the input

    """
    try:
        return BeautifulSoup(markup, parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        package = HTML_PARSER_PACKAGES.get(parser, parser)
        raise DependencyError(f"html_parser={parser}", [package], original_error=e) from e
    except Exception as e:
        raise ParsingError(f"Failed to parse markup: {e}", parsing_stage="parse", original_error=e) from e


def is_text(node: PageElement) -> bool:
    """Return True for character data (not comments, declarations or CDATA)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_blank_text(node: PageElement) -> bool:
    """Return True for character data made only of whitespace."""
    return is_text(node) and not str(node).strip()


def text_content(node: PageElement) -> str:
    """Concatenate the character data under a node."""
    if is_text(node):
        return str(node)
    if isinstance(node, Tag):
        return "".join(str(s) for s in node.descendants if is_text(s))
    return ""


def iter_text_nodes(root: Root) -> list[NavigableString]:
    """Snapshot the character-data nodes under ``root`` in document order."""
    return [node for node in root.descendants if is_text(node)]


def find_elements(root: Root, names: Iterable[str]) -> list[Tag]:
    """Snapshot descendant elements whose name is in ``names``."""
    wanted = set(names)
    return [node for node in root.descendants if isinstance(node, Tag) and node.name in wanted]


def has_ancestor(node: PageElement, names: Iterable[str]) -> bool:
    """Return True if any ancestor of ``node`` has a name in ``names``."""
    wanted = set(names)
    return any(parent.name in wanted for parent in node.parents)


def replace_text(node: NavigableString, value: str) -> None:
    """Replace the text of a character-data node, removing it if empty."""
    if value == str(node):
        return
    if value:
        node.replace_with(NavigableString(value))
    else:
        node.extract()


def collapse_whitespace(root: Root, pattern: re.Pattern[str] = WHITESPACE_RUN_RE) -> None:
    """Collapse whitespace runs in every text node to a single space.

    Text inside ``pre`` is left alone.
    """
    for node in iter_text_nodes(root):
        if has_ancestor(node, ("pre",)):
            continue
        replace_text(node, pattern.sub(" ", str(node)))


def strip_edges(element: Tag) -> None:
    """Trim leading whitespace of the first and trailing whitespace of the last text leaf.

    Text nodes left empty are removed and the trim continues with the next
    leaf, so ``<li> <b> x</b> </li>`` becomes ``<li><b>x</b></li>``.
    """
    leaves = iter_text_nodes(element)
    for leaf in leaves:
        stripped = str(leaf).lstrip()
        replace_text(leaf, stripped)
        if stripped:
            break
    for leaf in reversed(iter_text_nodes(element)):
        stripped = str(leaf).rstrip()
        replace_text(leaf, stripped)
        if stripped:
            break


def iter_tokens(root: Root) -> Iterator[Token]:
    """Walk a tree into a flat token stream.

    Elements without children whose name is a void element serialize as a
    single ``empty`` token; every other element yields ``open``, its
    children and ``close``.
    """
    for child in root.contents:
        yield from _node_tokens(child)


def _node_tokens(node: PageElement) -> Iterator[Token]:
    if isinstance(node, Tag):
        attrs = tuple((name, _attribute_text(value)) for name, value in node.attrs.items())
        if node.name in VOID_ELEMENTS and not node.contents:
            yield Token("empty", node.name, attrs)
            return
        yield Token("open", node.name, attrs)
        for child in node.contents:
            yield from _node_tokens(child)
        yield Token("close", node.name)
    elif isinstance(node, PreformattedString):
        yield Token("raw", text=node.output_ready(formatter=None))
    elif isinstance(node, NavigableString):
        yield Token("text", text=str(node))


def _attribute_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def serialize(root: Root) -> str:
    """Serialize the children of ``root`` as compact markup."""
    return "".join(token.render() for token in iter_tokens(root))


def serialize_element(element: Tag) -> str:
    """Serialize an element including its own tags."""
    return "".join(token.render() for token in _node_tokens(element))


__all__ = [
    "Token",
    "TokenKind",
    "parse_markup",
    "is_text",
    "is_blank_text",
    "text_content",
    "iter_text_nodes",
    "find_elements",
    "has_ancestor",
    "replace_text",
    "collapse_whitespace",
    "strip_edges",
    "iter_tokens",
    "serialize",
    "serialize_element",
]
