#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/sanitize.py
"""Sanitizer stage: strip clipboard-export noise from pasted markup.

Removes comments and declarations, scripting and style blocks, document
scaffolding, vendor namespace tags and attributes, vendor class tokens and
embedded non-content blocks; reduces inline styles to the declarations
later stages need; and collapses whitespace runs.

Every sub-pass is guarded on its own: a failing pass is logged and the
tree produced by the previous passes is kept.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

from paste2dita.dom.utils import collapse_whitespace
from paste2dita.options.stages import SanitizeOptions
from paste2dita.transforms.base import Stage
from paste2dita.utils.css import filter_style, parse_style, serialize_style

logger = logging.getLogger(__name__)


def _is_vendor_name(name: str) -> bool:
    return ":" in name


class Sanitizer(Stage[SanitizeOptions]):
    """Remove noise and reduce styles to an allow-list.

    Parameters
    ----------
    options : SanitizeOptions, optional
        Sanitizer options

    Examples
    --------
        >>> Sanitizer().run('<p class="MsoNormal" style="color:red;font-weight:bold">x</p>')
        '<p style="font-weight:bold">x</p>'

    """

    name = "sanitize"
    options_class = SanitizeOptions

    def _apply(self, soup: BeautifulSoup) -> tuple[BeautifulSoup, str]:
        passes = [
            ("comments", self._remove_comments, self.options.strip_comments),
            ("drop-elements", self._drop_elements, True),
            ("embedded-blocks", self._remove_embedded_blocks, True),
            ("vendor-namespaces", self._unwrap_vendor_namespaces, True),
            ("document-elements", self._unwrap_document_elements, True),
            ("vendor-classes", self._strip_vendor_classes, True),
            ("styles", self._filter_styles, True),
            ("images", self._strip_images, self.options.strip_images),
            ("whitespace", self._collapse_whitespace, self.options.collapse_whitespace),
        ]
        completed = 0
        for label, sub_pass, active in passes:
            if not active:
                continue
            before = soup
            soup = self._guarded(soup, label, sub_pass)
            if soup is before:
                completed += 1

        logger.debug("Sanitizer completed %d sub-pass(es)", completed)
        return soup, f"{self.name}: completed {completed} sub-pass(es)"

    @staticmethod
    def _remove_comments(soup: BeautifulSoup) -> None:
        # Comments, conditional comments, doctype, processing instructions, CDATA
        for node in [n for n in soup.descendants if isinstance(n, PreformattedString)]:
            node.extract()

    def _drop_elements(self, soup: BeautifulSoup) -> None:
        for element in soup.find_all(list(self.options.drop_elements)):
            if not element.decomposed:
                element.decompose()

    def _remove_embedded_blocks(self, soup: BeautifulSoup) -> None:
        markers = self.options.embedded_block_markers
        if not markers:
            return
        for element in soup.find_all(lambda tag: any(tag.has_attr(m) for m in markers)):
            if not element.decomposed:
                element.decompose()

    @staticmethod
    def _unwrap_vendor_namespaces(soup: BeautifulSoup) -> None:
        for element in soup.find_all(True):
            for attr in [a for a in element.attrs if _is_vendor_name(a) or a == "xmlns"]:
                del element[attr]
        # Deepest first so nested vendor tags unwrap cleanly
        for element in reversed(soup.find_all(lambda tag: _is_vendor_name(tag.name))):
            element.unwrap()

    def _unwrap_document_elements(self, soup: BeautifulSoup) -> None:
        for element in reversed(soup.find_all(list(self.options.unwrap_document_elements))):
            element.unwrap()

    def _strip_vendor_classes(self, soup: BeautifulSoup) -> None:
        prefixes = tuple(self.options.vendor_class_prefixes)
        for element in soup.find_all(class_=True):
            tokens = [t for t in str(element["class"]).split() if not t.startswith(prefixes)]
            if tokens:
                element["class"] = " ".join(tokens)
            else:
                del element["class"]

    @staticmethod
    def _filter_styles(soup: BeautifulSoup) -> None:
        for element in soup.find_all(style=True):
            kept = filter_style(parse_style(str(element["style"])))
            if kept:
                element["style"] = serialize_style(kept)
            else:
                del element["style"]

    @staticmethod
    def _strip_images(soup: BeautifulSoup) -> None:
        for image in soup.find_all("img"):
            image.decompose()

    @staticmethod
    def _collapse_whitespace(soup: BeautifulSoup) -> None:
        collapse_whitespace(soup)


def sanitize(soup: BeautifulSoup, options: SanitizeOptions | None = None) -> BeautifulSoup:
    """Apply the sanitizer to ``soup`` and return the resulting tree."""
    return Sanitizer(options).apply(soup)


__all__ = ["Sanitizer", "sanitize"]
