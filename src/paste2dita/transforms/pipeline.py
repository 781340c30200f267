#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/pipeline.py
"""Pipeline orchestration for the paste-to-structure transformation.

The pipeline parses the input once, runs the four tree stages in a fixed
order (sanitize, lists, tables, structure), serializes once and, when
enabled, pretty-prints the result. Every stage is fault-isolated: a stage
that raises is logged and recorded, and the tree it received is carried
forward unchanged so that later stages still run.

Examples
--------
Simple run:

    >>> from paste2dita.transforms import Pipeline
    >>> result = Pipeline().run('<h1>Title</h1><p class="MsoNormal">Body</p>')
    >>> print(result.markup)
    <section>
      <title>Title</title>
      <p>Body</p>
    </section>

With hooks:

    >>> from paste2dita.transforms import HookManager, SnapshotRecorder
    >>> manager = HookManager()
    >>> recorder = SnapshotRecorder()
    >>> recorder.attach(manager)
    >>> Pipeline(hooks=manager).run(markup)

"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup

from paste2dita.constants import HookPoint
from paste2dita.dom.utils import parse_markup, serialize
from paste2dita.exceptions import TransformError, ValidationError
from paste2dita.options.pipeline import PipelineOptions
from paste2dita.renderers.formatter import PrettyFormatter
from paste2dita.transforms.base import Stage
from paste2dita.transforms.hooks import HookContext, HookManager
from paste2dita.transforms.lists import ListReconstructor
from paste2dita.transforms.sanitize import Sanitizer
from paste2dita.transforms.structure import StructuralNormalizer
from paste2dita.transforms.tables import TableTransformer
from paste2dita.utils.detection import detect_content_source

logger = logging.getLogger(__name__)

FORMAT_STAGE_NAME = "format"


@dataclass
class TransformResult:
    """Outcome of one pipeline run.

    Parameters
    ----------
    markup : str
        Final markup
    steps : list of str
        Human-readable processing-step messages in execution order
    failed_stages : list of str
        Names of stages that raised and were skipped
    word_content : bool
        Whether the input carried word-processor export markers
    content_source : str, optional
        The detected producer (``"word"`` or ``"google-docs"``)

    """

    markup: str
    steps: list[str] = field(default_factory=list)
    failed_stages: list[str] = field(default_factory=list)
    word_content: bool = False
    content_source: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when every stage completed."""
        return not self.failed_stages


class Pipeline:
    """Run the transformation stages over one piece of pasted markup.

    Parameters
    ----------
    options : PipelineOptions, optional
        Pipeline configuration. Defaults to ``PipelineOptions()``.
    hooks : HookManager, optional
        Observational hooks. Defaults to an empty manager.

    Notes
    -----
    Pipeline instances hold no per-run state and can be reused; each call
    to :meth:`run` creates its own :class:`HookContext`.

    """

    def __init__(self, options: PipelineOptions | None = None, hooks: HookManager | None = None):
        """Initialize the pipeline and its stages."""
        self.options = options or PipelineOptions()
        self.hooks = hooks or HookManager()
        self.stages: list[Stage] = [
            Sanitizer(self.options.sanitize),
            ListReconstructor(self.options.lists),
            TableTransformer(self.options.tables),
            StructuralNormalizer(self.options.structure),
        ]
        self.formatter = PrettyFormatter(self.options.formatter, html_parser=self.options.html_parser)

    def run(self, markup: str) -> TransformResult:
        """Transform pasted markup.

        Parameters
        ----------
        markup : str
            Raw clipboard markup

        Returns
        -------
        TransformResult
            Final markup with the processing report

        Raises
        ------
        ValidationError
            If ``markup`` is not a string or is blank
        DependencyError
            If the configured tree builder is not installed
        ParsingError
            If the markup cannot be parsed

        """
        if not isinstance(markup, str):
            raise ValidationError(
                f"Markup must be a string, got {type(markup).__name__}",
                parameter_name="markup",
                parameter_value=type(markup).__name__,
            )
        if not markup.strip():
            raise ValidationError("Markup is empty", parameter_name="markup", parameter_value=markup)

        source = detect_content_source(markup)
        result = TransformResult(markup="", word_content=source is not None, content_source=source)
        context = HookContext(steps=result.steps)
        if source is not None:
            logger.info(f"Detected {source} clipboard markup")

        soup = parse_markup(markup, self.options.html_parser)
        self._notify("post_parse", soup, context)

        for stage in self.stages:
            soup = self._run_stage(stage, soup, result, context)

        output = serialize(soup)
        context.stage_name = None
        self.hooks.execute_hooks("post_serialize", output, context)

        if self.options.pretty_print:
            output = self._format(output, soup, result, context)

        result.markup = output
        logger.debug(f"Pipeline finished with {len(result.failed_stages)} failed stage(s)")
        return result

    def _run_stage(
        self, stage: Stage, soup: BeautifulSoup, result: TransformResult, context: HookContext
    ) -> BeautifulSoup:
        context.stage_name = stage.name
        self._notify("pre_stage", soup, context)

        backup = copy.copy(soup)
        try:
            soup, message = stage.apply_with_summary(soup)
        except Exception as exc:
            e = TransformError(f"Stage '{stage.name}' failed: {exc}", stage_name=stage.name, original_error=exc)
            logger.warning(f"{e.message}; continuing with its input", exc_info=True)
            result.failed_stages.append(stage.name)
            result.steps.append(f"{stage.name}: failed, input kept ({e.original_error})")
            soup = backup
        else:
            result.steps.append(message)
            logger.debug(message)

        self._notify("post_stage", soup, context)
        return soup

    def _format(self, output: str, soup: BeautifulSoup, result: TransformResult, context: HookContext) -> str:
        context.stage_name = FORMAT_STAGE_NAME
        try:
            formatted = self.formatter.format(soup)
        except Exception as e:
            logger.warning(f"Formatting failed, returning compact markup: {e}", exc_info=True)
            result.failed_stages.append(FORMAT_STAGE_NAME)
            result.steps.append(f"{FORMAT_STAGE_NAME}: failed, compact markup kept")
            return output

        result.steps.append(f"{FORMAT_STAGE_NAME}: indented {formatted.count(chr(10)) + 1} line(s)")
        self.hooks.execute_hooks("post_format", formatted, context)
        return formatted

    def _notify(self, point: HookPoint, soup: BeautifulSoup, context: HookContext) -> None:
        # Only serialize when a hook is registered
        if self.hooks.has_hooks(point):
            self.hooks.execute_hooks(point, serialize(soup), context)


def run_pipeline(
    markup: str, options: PipelineOptions | None = None, hooks: HookManager | None = None
) -> TransformResult:
    """Run a one-off pipeline over ``markup``."""
    return Pipeline(options, hooks).run(markup)


__all__ = ["FORMAT_STAGE_NAME", "Pipeline", "TransformResult", "run_pipeline"]
