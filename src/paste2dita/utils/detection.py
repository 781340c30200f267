#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/utils/detection.py
"""Recognize markup produced by word-processor clipboard export."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from paste2dita.constants import GOOGLE_DOCS_RE, WORD_CONTENT_RE

logger = logging.getLogger(__name__)

ContentSource = Literal["word", "google-docs"]


def detect_content_source(markup: str) -> Optional[ContentSource]:
    """Identify which word processor produced the pasted markup.

    Parameters
    ----------
    markup : str
        Raw clipboard markup

    Returns
    -------
    {"word", "google-docs"} or None
        The detected producer, or None for ordinary markup

    """
    if not markup:
        return None
    if WORD_CONTENT_RE.search(markup):
        return "word"
    if GOOGLE_DOCS_RE.search(markup):
        return "google-docs"
    return None


def is_word_content(markup: str) -> bool:
    """Return True if the markup carries Word or Google Docs export markers.

    Examples
    --------
        >>> is_word_content('<p class="MsoNormal">x</p>')
        True
        >>> is_word_content("<p>x</p>")
        False

    """
    source = detect_content_source(markup)
    if source is not None:
        logger.debug("Detected %s clipboard markup", source)
    return source is not None


__all__ = ["ContentSource", "detect_content_source", "is_word_content"]
