#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/structure.py
"""Structural normalizer stage: turn cleaned markup into topic structure.

Runs, in order:

1. drop stray list-marker runs not consumed by list reconstruction
2. promote bold/italic/underline style declarations to ``b``/``i``/``u``
   and drop every ``style`` attribute
3. unwrap presentational inline wrappers (``font``, ``span``, ``s``)
4. drop presentational attributes (``class``, ``id``, ``align``, ...)
5. replace non-breaking spaces and re-collapse whitespace
6. rename generic containers to ``p``
7. convert links to external cross-references
8. remove empty elements outside the preserve-list
9. collapse consecutive line breaks and drop trailing ones
10. headings: first ``h1`` becomes the ``title``, everything is wrapped in a
    ``section``; other headings are demoted to ``b``
11. unwrap nested and merge adjacent identical inline emphasis
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from paste2dita.constants import (
    CONTENT_VOID_TAGS,
    DEFAULT_BLOCK_TAGS,
    DEMOTED_HEADING_TAG,
    SECTION_TAG,
    SUBORDINATE_HEADING_TAGS,
    TITLE_HEADING_TAG,
    TITLE_TAG,
    XREF_TAG,
)
from paste2dita.dom.utils import collapse_whitespace, is_blank_text, iter_text_nodes, replace_text, text_content
from paste2dita.options.stages import StructureOptions
from paste2dita.transforms.base import Stage
from paste2dita.utils.css import is_bold, is_italic, is_list_marker_style, is_underline, parse_style

logger = logging.getLogger(__name__)

# Containers whose children must stay structural; emphasis is never wrapped around them
_NO_EMPHASIS_WRAP = frozenset(
    {"ul", "ol", "table", "tgroup", "thead", "tbody", "tfoot", "tr", "row", "colgroup", "col", "colspec"}
)
_BLOCK_TAGS = frozenset(DEFAULT_BLOCK_TAGS)


def wrap_contents(soup: BeautifulSoup, element: Tag, name: str) -> Tag:
    """Move all children of ``element`` into a new ``name`` element appended to it."""
    wrapper = soup.new_tag(name)
    for child in list(element.contents):
        wrapper.append(child.extract())
    element.append(wrapper)
    return wrapper


def rename(element: Tag, name: str, attrs: dict[str, str] | None = None) -> Tag:
    """Rename an element in place, replacing its attributes."""
    element.name = name
    element.attrs = dict(attrs or {})
    return element


def _next_significant(node: PageElement) -> PageElement | None:
    sibling = node.next_sibling
    while sibling is not None and is_blank_text(sibling):
        sibling = sibling.next_sibling
    return sibling


def _previous_significant(node: PageElement) -> PageElement | None:
    sibling = node.previous_sibling
    while sibling is not None and is_blank_text(sibling):
        sibling = sibling.previous_sibling
    return sibling


class StructuralNormalizer(Stage[StructureOptions]):
    """Normalize containers, headings, links and inline emphasis.

    Parameters
    ----------
    options : StructureOptions, optional
        Normalizer options

    Examples
    --------
        >>> StructuralNormalizer().run("<h1>A</h1><p>x</p><h2>B</h2>")
        '<section><title>A</title><p>x</p><b>B</b></section>'

    """

    name = "structure"
    options_class = StructureOptions

    def _apply(self, soup: BeautifulSoup) -> tuple[BeautifulSoup, str]:
        self._drop_marker_runs(soup)
        self._promote_styles(soup)
        self._unwrap_presentational(soup)
        self._drop_attributes(soup)
        if self.options.convert_nbsp:
            self._replace_nbsp(soup)
        self._containers_to_paragraphs(soup)
        links = self._links_to_xrefs(soup)
        removed = self._remove_empty(soup)
        self._clean_line_breaks(soup)
        has_title = self._restructure_headings(soup)
        self._merge_inline(soup)

        logger.debug(
            "Normalized structure: title=%s, %d link(s), %d empty element(s) removed", has_title, links, removed
        )
        return soup, f"{self.name}: title={'yes' if has_title else 'no'}, {links} link(s), {removed} empty removed"

    @staticmethod
    def _drop_marker_runs(soup: BeautifulSoup) -> None:
        for element in soup.find_all(style=True):
            if not element.decomposed and is_list_marker_style(parse_style(str(element["style"]))):
                element.decompose()

    @staticmethod
    def _promote_styles(soup: BeautifulSoup) -> None:
        # Bottom-up so wrappers created for ancestors enclose descendants' wrappers
        for element in reversed(soup.find_all(style=True)):
            declarations = parse_style(str(element["style"]))
            del element["style"]
            if element.name in _NO_EMPHASIS_WRAP or not element.contents:
                continue
            if is_bold(declarations):
                wrap_contents(soup, element, "b")
            if is_italic(declarations):
                wrap_contents(soup, element, "i")
            if is_underline(declarations):
                wrap_contents(soup, element, "u")

    def _unwrap_presentational(self, soup: BeautifulSoup) -> None:
        for element in reversed(soup.find_all(list(self.options.unwrap_tags))):
            element.unwrap()

    def _drop_attributes(self, soup: BeautifulSoup) -> None:
        names = set(self.options.removable_attributes)
        prefixes = tuple(self.options.removable_attribute_prefixes)
        for element in soup.find_all(True):
            for attr in list(element.attrs):
                value = element.attrs[attr]
                if attr in names or attr.startswith(prefixes) or not str(value).strip():
                    del element[attr]

    @staticmethod
    def _replace_nbsp(soup: BeautifulSoup) -> None:
        for node in iter_text_nodes(soup):
            if "\xa0" in node:
                replace_text(node, str(node).replace("\xa0", " "))
        collapse_whitespace(soup)

    def _containers_to_paragraphs(self, soup: BeautifulSoup) -> None:
        for element in soup.find_all(list(self.options.container_tags)):
            element.name = "p"

    def _links_to_xrefs(self, soup: BeautifulSoup) -> int:
        converted = 0
        for anchor in reversed(soup.find_all("a")):
            href = anchor.get("href")
            if href:
                rename(
                    anchor,
                    XREF_TAG,
                    {"scope": self.options.link_scope, "format": self.options.link_format, "href": str(href)},
                )
                converted += 1
            else:
                anchor.unwrap()
        return converted

    def _remove_empty(self, soup: BeautifulSoup) -> int:
        preserve = set(self.options.preserve_empty_tags)
        removed = 0
        # Reverse document order visits descendants before their ancestors
        for element in reversed(soup.find_all(True)):
            if element.decomposed or element.name in preserve or element.name in CONTENT_VOID_TAGS:
                continue
            if text_content(element).strip():
                continue
            if element.find(list(CONTENT_VOID_TAGS)) is not None:
                continue
            element.decompose()
            removed += 1
        return removed

    @staticmethod
    def _clean_line_breaks(soup: BeautifulSoup) -> None:
        for br in soup.find_all("br"):
            if br.decomposed:
                continue
            previous = _previous_significant(br)
            if isinstance(previous, Tag) and previous.name == "br":
                br.decompose()
        for br in soup.find_all("br"):
            parent = br.parent
            is_block = isinstance(parent, BeautifulSoup) or (parent is not None and parent.name in _BLOCK_TAGS)
            if is_block and _next_significant(br) is None:
                br.decompose()

    def _restructure_headings(self, soup: BeautifulSoup) -> bool:
        for heading in soup.find_all(list(SUBORDINATE_HEADING_TAGS)):
            rename(heading, DEMOTED_HEADING_TAG)

        top_headings = soup.find_all(TITLE_HEADING_TAG)
        if not top_headings:
            return False

        rename(top_headings[0], TITLE_TAG)
        for heading in top_headings[1:]:
            rename(heading, DEMOTED_HEADING_TAG)
        logger.debug("Promoted first heading to title, demoted %d other top-level heading(s)", len(top_headings) - 1)

        if self.options.wrap_section:
            wrap_contents(soup, soup, SECTION_TAG)
        return True

    def _merge_inline(self, soup: BeautifulSoup) -> None:
        self._merge_children(soup, frozenset(self.options.merge_inline_tags))

    def _merge_children(self, element: Tag, merge_tags: frozenset[str]) -> None:
        if element.name in merge_tags:
            for child in list(element.children):
                if isinstance(child, Tag) and child.name == element.name:
                    child.unwrap()

        for child in list(element.children):
            if child.parent is not element or not isinstance(child, Tag) or child.name not in merge_tags:
                continue
            following = _next_significant(child)
            while isinstance(following, Tag) and following.name == child.name and following.attrs == child.attrs:
                between = child.next_sibling
                while between is not None and between is not following:
                    nxt = between.next_sibling
                    child.append(between.extract())
                    between = nxt
                for grandchild in list(following.contents):
                    child.append(grandchild.extract())
                following.decompose()
                following = _next_significant(child)

        for child in list(element.children):
            if isinstance(child, Tag):
                self._merge_children(child, merge_tags)


def normalize_structure(soup: BeautifulSoup, options: StructureOptions | None = None) -> BeautifulSoup:
    """Apply the structural normalizer to ``soup`` and return the resulting tree."""
    return StructuralNormalizer(options).apply(soup)


__all__ = ["StructuralNormalizer", "normalize_structure", "rename", "wrap_contents"]
