#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/lists.py
"""List reconstructor stage: rebuild nested lists from word-processor list paragraphs.

Word exports every list item as a flat paragraph whose ``style`` carries an
``mso-list`` declaration (list identity and nesting level) and usually a
``margin-left`` (visual indent), with the bullet or number rendered as a
text run inside a ``mso-list:Ignore`` span. This stage turns runs of such
paragraphs back into nested ``ol``/``ul`` trees.

Nesting levels are inferred document-wide in two passes. When the list
paragraphs use more than one distinct left margin, margins are ranked
(ascending, within a tolerance) and the rank is the level: margin reflects
visual nesting even when the explicit level numbering is flat. Otherwise
the explicit ``levelN`` of the ``mso-list`` declaration is used, and level
1 when neither signal is present.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from paste2dita.constants import (
    BULLET_MARKER_RE,
    DEFAULT_LIST_LEVEL,
    LIST_MARKER_STYLE_VALUE,
    LIST_STYLE_PROPERTY,
    MARGIN_LEFT_PROPERTY,
    ORDERED_MARKER_PATTERNS,
    ListKind,
)
from paste2dita.dom.builder import ListBuilder
from paste2dita.dom.utils import is_blank_text, strip_edges, text_content
from paste2dita.options.stages import ListOptions
from paste2dita.transforms.base import Stage
from paste2dita.utils.css import is_list_marker_style, length_to_points, list_level_from_style, parse_style

logger = logging.getLogger(__name__)

_NON_LIST_VALUES = frozenset({"none", LIST_MARKER_STYLE_VALUE})


@dataclass
class ListMarker:
    """A list-marker paragraph with its inferred level and kind.

    Parameters
    ----------
    element : Tag
        The paragraph carrying the ``mso-list`` declaration
    level : int
        Inferred nesting level (1 is top-level)
    kind : {"ordered", "unordered"}
        Classified list kind
    marker_text : str
        The bullet or number run, removed from the paragraph

    """

    element: Tag
    level: int = DEFAULT_LIST_LEVEL
    kind: ListKind = "unordered"
    marker_text: str = ""


def classify_marker(marker_text: str) -> ListKind:
    """Classify a bullet or number run as an ordered or unordered marker.

    Parameters
    ----------
    marker_text : str
        Marker run such as ``"1."``, ``"a)"``, ``"iv."``, ``"一、"`` or ``"·"``

    Returns
    -------
    {"ordered", "unordered"}
        ``"unordered"`` when the marker matches no ordered pattern

    Examples
    --------
        >>> classify_marker("2.\xa0\xa0")
        'ordered'
        >>> classify_marker("§")
        'unordered'

    """
    text = marker_text.strip()
    if not text:
        return "unordered"
    if any(pattern.match(text) for pattern in ORDERED_MARKER_PATTERNS):
        return "ordered"
    if BULLET_MARKER_RE.match(text):
        return "unordered"
    return "unordered"


def is_list_paragraph(element: Tag, paragraph_tags: Iterable[str]) -> bool:
    """Return True for a paragraph-like element carrying a list-marker declaration."""
    if element.name not in paragraph_tags or not element.has_attr("style"):
        return False
    value = parse_style(str(element["style"])).get(LIST_STYLE_PROPERTY)
    return value is not None and value.strip().lower() not in _NON_LIST_VALUES


def infer_levels(elements: Sequence[Tag], tolerance: float) -> list[int]:
    """Infer nesting levels for list paragraphs from margins or explicit levels.

    Parameters
    ----------
    elements : sequence of Tag
        Every list paragraph in the document, in document order
    tolerance : float
        Margins (in points) closer than this share a rank

    Returns
    -------
    list[int]
        One level per element

    """
    declarations = [parse_style(str(el.get("style", ""))) for el in elements]
    margins = [length_to_points(d.get(MARGIN_LEFT_PROPERTY)) or 0.0 for d in declarations]

    distinct: list[float] = []
    for margin in sorted(set(margins)):
        if not distinct or margin - distinct[-1] > tolerance:
            distinct.append(margin)

    if len(distinct) > 1:
        logger.debug("Inferring list levels from %d distinct margins", len(distinct))
        return [_margin_rank(margin, distinct, tolerance) for margin in margins]

    return [list_level_from_style(d.get(LIST_STYLE_PROPERTY)) or DEFAULT_LIST_LEVEL for d in declarations]


def _margin_rank(margin: float, distinct: list[float], tolerance: float) -> int:
    for rank, value in enumerate(distinct, start=1):
        if abs(margin - value) <= tolerance or margin < value:
            return rank
    return len(distinct)


def extract_marker_text(element: Tag) -> str:
    """Remove the ``mso-list:Ignore`` run from a list paragraph and return its text."""
    for candidate in element.find_all(style=True):
        if is_list_marker_style(parse_style(str(candidate["style"]))):
            marker = text_content(candidate)
            candidate.decompose()
            return marker
    return ""


class ListReconstructor(Stage[ListOptions]):
    """Rebuild nested ordered and unordered lists from list paragraphs.

    Consecutive list paragraphs under the same parent (ignoring
    whitespace-only text between them) form one buffer; any other content
    flushes it. Each buffer is rebuilt with :class:`ListBuilder` and the
    resulting list containers take the place of the paragraphs. Documents
    without list paragraphs are left untouched.

    Parameters
    ----------
    options : ListOptions, optional
        List reconstruction options

    """

    name = "lists"
    options_class = ListOptions

    def _apply(self, soup: BeautifulSoup) -> tuple[BeautifulSoup, str]:
        paragraph_tags = tuple(self.options.paragraph_tags)
        elements = [el for el in soup.find_all(list(paragraph_tags)) if is_list_paragraph(el, paragraph_tags)]
        if not elements:
            return soup, f"{self.name}: no list paragraphs found"

        levels = infer_levels(elements, self.options.margin_tolerance)
        markers: dict[int, ListMarker] = {}
        for element, level in zip(elements, levels):
            marker_text = extract_marker_text(element)
            markers[id(element)] = ListMarker(
                element=element, level=level, kind=classify_marker(marker_text), marker_text=marker_text
            )

        containers = 0
        buffers = self._collect_buffers(elements, markers)
        for buffer, blanks in buffers:
            containers += self._flush(soup, buffer)
            for blank in blanks:
                blank.extract()

        logger.debug("Rebuilt %d list item(s) into %d list(s)", len(elements), containers)
        return soup, f"{self.name}: rebuilt {len(elements)} item(s) into {containers} list(s)"

    @staticmethod
    def _collect_buffers(
        elements: Sequence[Tag], markers: dict[int, ListMarker]
    ) -> list[tuple[list[ListMarker], list[PageElement]]]:
        """Group list paragraphs into runs of consecutive siblings."""
        buffers: list[tuple[list[ListMarker], list[PageElement]]] = []
        seen_parents: set[int] = set()

        for element in elements:
            parent = element.parent
            if parent is None or id(parent) in seen_parents:
                continue
            seen_parents.add(id(parent))

            current: list[ListMarker] = []
            pending_blanks: list[PageElement] = []
            blanks: list[PageElement] = []
            for child in list(parent.contents):
                marker = markers.get(id(child)) if isinstance(child, Tag) else None
                if marker is not None:
                    current.append(marker)
                    blanks.extend(pending_blanks)
                    pending_blanks = []
                elif is_blank_text(child):
                    if current:
                        pending_blanks.append(child)
                elif current:
                    buffers.append((current, blanks))
                    current, pending_blanks, blanks = [], [], []
            if current:
                buffers.append((current, blanks))

        return buffers

    def _flush(self, soup: BeautifulSoup, buffer: list[ListMarker]) -> int:
        builder = ListBuilder(soup.new_tag)
        for marker in buffer:
            builder.add_item(marker.level, marker.kind, self._make_item(soup, marker.element))

        anchor = buffer[0].element
        roots = builder.get_lists()
        for container in roots:
            anchor.insert_before(container)
        for marker in buffer:
            marker.element.extract()
        return len(roots)

    def _make_item(self, soup: BeautifulSoup, element: Tag) -> Tag:
        item = soup.new_tag("li")
        for child in list(element.contents):
            item.append(child.extract())
        if self.options.trim_items:
            strip_edges(item)
        return item


def reconstruct_lists(soup: BeautifulSoup, options: ListOptions | None = None) -> BeautifulSoup:
    """Apply the list reconstructor to ``soup`` and return the resulting tree."""
    return ListReconstructor(options).apply(soup)


__all__ = [
    "ListMarker",
    "ListReconstructor",
    "classify_marker",
    "extract_marker_text",
    "infer_levels",
    "is_list_paragraph",
    "reconstruct_lists",
]
