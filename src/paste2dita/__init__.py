"""paste2dita - Clean word-processor clipboard markup into structured topic markup.

Markup pasted from word processors (Microsoft Word, Google Docs) is full
of vendor noise: conditional comments, namespaced tags, ``Mso*`` classes,
inline styles and list items flattened into indented paragraphs.
paste2dita runs it through a fixed pipeline of tree stages and returns
clean, indented DITA-style markup.

Pipeline
--------
1. **Sanitize**: drop comments, scripts, vendor tags, classes and styles
2. **Lists**: rebuild nested ``ol``/``ul`` trees from list paragraphs
3. **Tables**: convert native tables into the CALS table model
4. **Structure**: headings to ``title``/``section``, links to ``xref``,
   style-based emphasis to ``b``/``i``/``u``
5. **Format**: indent with one block element per line

Examples
--------
Basic usage:

    >>> from paste2dita import transform
    >>> print(transform('<h1>Title</h1><p class="MsoNormal">Body</p>'))
    <section>
      <title>Title</title>
      <p>Body</p>
    </section>

With a processing report:

    >>> from paste2dita import transform_with_report
    >>> result = transform_with_report(clipboard_html)
    >>> result.steps
    ['sanitize: completed 9 sub-pass(es)', 'lists: rebuilt 3 item(s) into 1 list(s)', ...]

See Also
--------
paste2dita.transforms : Stages, hooks and the pipeline
paste2dita.options : Option dataclasses

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "paste2dita requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from paste2dita.api import format_markup, transform, transform_with_report
from paste2dita.exceptions import (
    ConfigurationError,
    DependencyError,
    InvalidOptionsError,
    ParsingError,
    Paste2DitaError,
    TransformError,
    ValidationError,
)
from paste2dita.options import (
    FormatterOptions,
    ListOptions,
    PipelineOptions,
    SanitizeOptions,
    StructureOptions,
    TableOptions,
)
from paste2dita.renderers import PrettyFormatter
from paste2dita.transforms import (
    HookContext,
    HookManager,
    ListReconstructor,
    Pipeline,
    Sanitizer,
    SnapshotRecorder,
    StructuralNormalizer,
    TableTransformer,
    TransformResult,
)
from paste2dita.utils.detection import is_word_content

__all__ = [
    "__version__",
    "transform",
    "transform_with_report",
    "format_markup",
    "is_word_content",
    # Pipeline
    "Pipeline",
    "TransformResult",
    "HookContext",
    "HookManager",
    "SnapshotRecorder",
    # Stages
    "Sanitizer",
    "ListReconstructor",
    "TableTransformer",
    "StructuralNormalizer",
    "PrettyFormatter",
    # Options
    "PipelineOptions",
    "SanitizeOptions",
    "ListOptions",
    "TableOptions",
    "StructureOptions",
    "FormatterOptions",
    # Exceptions
    "Paste2DitaError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigurationError",
    "ParsingError",
    "TransformError",
    "DependencyError",
]
