#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the paste2dita pipeline.

Each stage has its own frozen Options dataclass; ``PipelineOptions`` nests
them together with the parser selection and pretty-print switch.
"""

from paste2dita.options.base import BaseStageOptions, CloneFrozenMixin
from paste2dita.options.formatter import FormatterOptions
from paste2dita.options.pipeline import PipelineOptions
from paste2dita.options.stages import ListOptions, SanitizeOptions, StructureOptions, TableOptions

__all__ = [
    "BaseStageOptions",
    "CloneFrozenMixin",
    "FormatterOptions",
    "ListOptions",
    "PipelineOptions",
    "SanitizeOptions",
    "StructureOptions",
    "TableOptions",
]
