"""The main exported API functions for transforming pasted markup."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/paste2dita/api.py
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from paste2dita.exceptions import ValidationError
from paste2dita.options.formatter import FormatterOptions
from paste2dita.options.pipeline import PipelineOptions
from paste2dita.renderers.formatter import PrettyFormatter
from paste2dita.transforms.hooks import HookCallable, HookManager, HookPoint
from paste2dita.transforms.pipeline import Pipeline, TransformResult

logger = logging.getLogger(__name__)

HooksArg = Union[HookManager, Mapping[HookPoint, Sequence[HookCallable]], None]


def _resolve_options(options: Optional[PipelineOptions], kwargs: dict[str, Any]) -> PipelineOptions:
    """Merge keyword overrides into pipeline options.

    Parameters
    ----------
    options : PipelineOptions or None
        Base options; defaults are used when None
    kwargs : dict
        Top-level ``PipelineOptions`` field overrides

    Returns
    -------
    PipelineOptions
        Options with overrides applied

    Raises
    ------
    ValidationError
        If an override names an unknown field or has an invalid value

    """
    if options is not None and not isinstance(options, PipelineOptions):
        raise ValidationError(
            f"options must be PipelineOptions, got {type(options).__name__}",
            parameter_name="options",
            parameter_value=type(options).__name__,
        )
    base = options or PipelineOptions()
    if not kwargs:
        return base
    try:
        return base.create_updated(**kwargs)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid option override: {e}", parameter_name="options", original_error=e) from e


def _resolve_hooks(hooks: HooksArg) -> Optional[HookManager]:
    if hooks is None or isinstance(hooks, HookManager):
        return hooks
    manager = HookManager()
    for point, callables in hooks.items():
        for hook in callables:
            manager.register_hook(point, hook)
    return manager


def transform_with_report(
    markup: str,
    options: Optional[PipelineOptions] = None,
    hooks: HooksArg = None,
    **kwargs: Any,
) -> TransformResult:
    """Transform pasted markup and return the processing report.

    Parameters
    ----------
    markup : str
        Raw clipboard markup (typically from a word processor)
    options : PipelineOptions, optional
        Pipeline configuration
    hooks : HookManager or dict, optional
        Observational hooks, either a manager or a mapping of hook point to
        a list of callables
    **kwargs
        Overrides for top-level ``PipelineOptions`` fields, e.g.
        ``pretty_print=False``

    Returns
    -------
    TransformResult
        Final markup, processing-step messages, failed stages and the
        word-processor detection flag

    Raises
    ------
    ValidationError
        If the markup is empty or the options are invalid
    DependencyError
        If the configured tree builder is not installed

    Examples
    --------
        >>> result = transform_with_report('<p class="MsoNormal">x</p>')
        >>> result.word_content
        True

    """
    pipeline = Pipeline(_resolve_options(options, kwargs), _resolve_hooks(hooks))
    return pipeline.run(markup)


def transform(
    markup: str,
    options: Optional[PipelineOptions] = None,
    hooks: HooksArg = None,
    **kwargs: Any,
) -> str:
    """Transform pasted markup into clean structured markup.

    Runs every enabled stage (sanitize, lists, tables, structure) and
    pretty-prints the result unless ``pretty_print`` is disabled. Stage
    failures never propagate; see :func:`transform_with_report` to find out
    which stages, if any, were skipped.

    Examples
    --------
        >>> print(transform("<h1>Guide</h1><p>Intro</p>"))
        <section>
          <title>Guide</title>
          <p>Intro</p>
        </section>

    """
    return transform_with_report(markup, options, hooks, **kwargs).markup


def format_markup(markup: str, options: Optional[FormatterOptions] = None) -> str:
    """Pretty-print markup without transforming it.

    Parameters
    ----------
    markup : str
        Markup to indent
    options : FormatterOptions, optional
        Formatter configuration

    Returns
    -------
    str
        Indented markup; empty input gives an empty string

    """
    return PrettyFormatter(options).format(markup)


__all__ = ["format_markup", "transform", "transform_with_report"]
