#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/__init__.py
"""Tree-rewriting stages, hooks and the pipeline that runs them.

Examples
--------
Run a single stage:

    >>> from paste2dita.transforms import TableTransformer
    >>> TableTransformer().run("<table><tr><td>a</td></tr></table>")

Run everything:

    >>> from paste2dita.transforms import Pipeline
    >>> Pipeline().run(markup).markup

"""

from paste2dita.transforms.base import Stage
from paste2dita.transforms.hooks import HookCallable, HookContext, HookManager, HookPoint, SnapshotRecorder
from paste2dita.transforms.lists import ListReconstructor, reconstruct_lists
from paste2dita.transforms.pipeline import Pipeline, TransformResult, run_pipeline
from paste2dita.transforms.sanitize import Sanitizer, sanitize
from paste2dita.transforms.structure import StructuralNormalizer, normalize_structure
from paste2dita.transforms.tables import TableTransformer, transform_tables

__all__ = [
    "Stage",
    "Sanitizer",
    "ListReconstructor",
    "TableTransformer",
    "StructuralNormalizer",
    "sanitize",
    "reconstruct_lists",
    "transform_tables",
    "normalize_structure",
    "HookCallable",
    "HookContext",
    "HookManager",
    "HookPoint",
    "SnapshotRecorder",
    "Pipeline",
    "TransformResult",
    "run_pipeline",
]
