#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/base.py
"""Base class for tree-rewriting pipeline stages.

A stage edits a BeautifulSoup tree in place and returns the tree to hand to
the next stage. Stages can also be used on their own through
:meth:`Stage.run`, which parses, applies and serializes a markup string.

"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Generic, TypeVar

from bs4 import BeautifulSoup

from paste2dita.constants import DEFAULT_HTML_PARSER
from paste2dita.dom.utils import parse_markup, serialize
from paste2dita.exceptions import InvalidOptionsError
from paste2dita.options.base import BaseStageOptions

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=BaseStageOptions)


class Stage(ABC, Generic[OptionsT]):
    """Abstract base for one pipeline stage.

    Subclasses set :attr:`name` and :attr:`options_class` and implement
    :meth:`_apply`, which returns the (possibly replaced) tree and a short
    human-readable summary of what the stage did.

    Parameters
    ----------
    options : BaseStageOptions subclass, optional
        Stage options. Defaults to ``options_class()``.

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an instance of :attr:`options_class`

    """

    name: ClassVar[str] = "stage"
    options_class: ClassVar[type[BaseStageOptions]] = BaseStageOptions

    def __init__(self, options: OptionsT | None = None):
        """Initialize the stage with validated options."""
        if options is None:
            options = self.options_class()  # type: ignore[assignment]
        elif not isinstance(options, self.options_class):
            raise InvalidOptionsError(
                stage_name=type(self).__name__,
                expected_type=self.options_class,
                received_type=type(options),
            )
        self.options: OptionsT = options  # type: ignore[assignment]

    def apply(self, soup: BeautifulSoup) -> BeautifulSoup:
        """Apply the stage to a tree and return the resulting tree."""
        result, _ = self.apply_with_summary(soup)
        return result

    def apply_with_summary(self, soup: BeautifulSoup) -> tuple[BeautifulSoup, str]:
        """Apply the stage and return the tree with a processing-step message."""
        if not self.options.enabled:
            return soup, f"{self.name}: skipped (disabled)"
        return self._apply(soup)

    @abstractmethod
    def _apply(self, soup: BeautifulSoup) -> tuple[BeautifulSoup, str]:
        """Rewrite the tree; return it with a summary message."""

    def run(self, markup: str, parser: str = DEFAULT_HTML_PARSER) -> str:
        """Parse ``markup``, apply this stage alone and serialize the result."""
        return serialize(self.apply(parse_markup(markup, parser)))

    def _guarded(self, soup: BeautifulSoup, label: str, sub_pass: Callable[[BeautifulSoup], None]) -> BeautifulSoup:
        """Run a sub-pass, restoring the previous tree if it raises.

        Returns the tree to continue with: ``soup`` after a successful pass,
        or an untouched copy taken before the pass when it failed.
        """
        backup = copy.copy(soup)
        try:
            sub_pass(soup)
        except Exception as e:
            logger.warning("%s: sub-pass %r failed, keeping previous result: %s", self.name, label, e, exc_info=True)
            return backup
        return soup


__all__ = ["Stage"]
