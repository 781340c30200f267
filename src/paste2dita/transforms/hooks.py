#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/paste2dita/transforms/hooks.py
"""Observational hook system for the transformation pipeline.

Hooks are called at fixed points of a pipeline run with a snapshot of the
markup at that point (a plain string, so the live tree can never be
touched) and a :class:`HookContext`. Their return values are ignored and
their exceptions are logged, never propagated: a hook can record or
report, but it can neither gate nor alter the result.

Hook points
-----------
- ``post_parse``: after the input has been parsed
- ``pre_stage`` / ``post_stage``: around each tree stage
- ``post_serialize``: after the compact serialization
- ``post_format``: after pretty-printing (only when enabled)

Examples
--------
Count characters after every stage:

    >>> from paste2dita.transforms import HookManager
    >>> manager = HookManager()
    >>>
    >>> def measure(markup, context):
    ...     print(f"{context.stage_name}: {len(markup)} chars")
    >>>
    >>> manager.register_hook('post_stage', measure)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

from paste2dita.constants import HookPoint

logger = logging.getLogger(__name__)

# Hooks: (markup snapshot, HookContext) -> ignored
HookCallable = Callable[[str, "HookContext"], Any]


@dataclass
class HookContext:
    """Context passed to hook functions.

    Parameters
    ----------
    stage_name : str, optional
        Name of the stage the hook point belongs to, if any
    shared : dict, default = empty dict
        Mutable dictionary shared by every hook of one pipeline run
    steps : list of str, default = empty list
        Processing-step messages recorded so far

    Examples
    --------
        >>> def count_runs(markup: str, context: HookContext) -> None:
        ...     context.set_shared('stages', context.get_shared('stages', 0) + 1)

    """

    stage_name: Optional[str] = None
    shared: dict[str, Any] = field(default_factory=dict)
    steps: list[str] = field(default_factory=list)

    def get_shared(self, key: str, default: Any = None) -> Any:
        """Get a value from shared state."""
        return self.shared.get(key, default)

    def set_shared(self, key: str, value: Any) -> None:
        """Set a value in shared state."""
        self.shared[key] = value


class HookManager:
    """Manager for registering and executing observational hooks.

    Examples
    --------
    Register and run a hook:
        >>> manager = HookManager()
        >>> manager.register_hook('post_stage', lambda markup, ctx: print(ctx.stage_name))
        >>> manager.execute_hooks('post_stage', '<p>x</p>', HookContext(stage_name='lists'))
        lists

    Notes
    -----
    HookManager instances are not thread-safe. Create one per pipeline.

    """

    def __init__(self) -> None:
        """Initialize an empty hook manager."""
        self._hooks: dict[HookPoint, list[tuple[int, HookCallable]]] = {}

    def register_hook(self, point: HookPoint, hook: HookCallable, priority: int = 100) -> None:
        """Register a hook for a hook point.

        Parameters
        ----------
        point : HookPoint
            Pipeline point to observe
        hook : callable
            Hook function with signature ``(markup, context) -> Any``
        priority : int, default = 100
            Execution priority (lower runs first); equal priorities run in
            registration order

        """
        self._hooks.setdefault(point, []).append((priority, hook))
        logger.debug(f"Registered hook for '{point}' with priority {priority}")

    def unregister_hook(self, point: HookPoint, hook: HookCallable) -> bool:
        """Unregister a hook.

        Returns
        -------
        bool
            True if the hook was found and removed

        """
        if point not in self._hooks:
            return False

        initial_len = len(self._hooks[point])
        self._hooks[point] = [(p, h) for p, h in self._hooks[point] if h != hook]

        removed = len(self._hooks[point]) < initial_len
        if removed:
            logger.debug(f"Unregistered hook from '{point}'")
        return removed

    def execute_hooks(self, point: HookPoint, markup: str, context: HookContext) -> None:
        """Execute all hooks for a point in priority order.

        Each hook receives the same snapshot; return values are discarded.
        A hook that raises is logged and the remaining hooks still run.
        """
        if point not in self._hooks:
            return

        for priority, hook in sorted(self._hooks[point], key=lambda x: x[0]):
            try:
                hook(markup, context)
            except Exception as e:
                logger.error(f"Hook failed at '{point}' with priority {priority}: {e}", exc_info=True)

    def has_hooks(self, point: HookPoint) -> bool:
        """Check if any hooks are registered for a point."""
        return bool(self._hooks.get(point))

    def list_hooks(self) -> dict[HookPoint, list[tuple[int, HookCallable]]]:
        """Return a shallow copy of the registered hooks with their priorities."""
        return {point: list(hooks) for point, hooks in self._hooks.items()}

    def clear(self) -> None:
        """Clear all registered hooks."""
        self._hooks.clear()
        logger.debug("Cleared all hooks")


class SnapshotRecorder:
    """Hook that records the markup after each pipeline point.

    Snapshots are kept in memory in call order and, when ``directory`` is
    given, also written to ``NN-<label>.html`` files there.

    Parameters
    ----------
    directory : str or Path, optional
        Directory to write snapshot files into; created if missing

    Examples
    --------
        >>> recorder = SnapshotRecorder()
        >>> recorder.attach(manager)
        >>> # ... run the pipeline ...
        >>> [label for label, _ in recorder.snapshots]
        ['parse', 'sanitize', 'lists', 'tables', 'structure', 'serialize', 'format']

    """

    def __init__(self, directory: Union[str, Path, None] = None):
        """Initialize an empty recorder."""
        self.directory = Path(directory) if directory is not None else None
        self.snapshots: list[tuple[str, str]] = []

    def attach(self, manager: HookManager, priority: int = 1000) -> None:
        """Register the recorder on every point whose snapshot it keeps."""
        manager.register_hook("post_parse", self._on("parse"), priority)
        manager.register_hook("post_stage", self._record_stage, priority)
        manager.register_hook("post_serialize", self._on("serialize"), priority)
        manager.register_hook("post_format", self._on("format"), priority)

    def _on(self, label: str) -> HookCallable:
        def record(markup: str, context: HookContext) -> None:
            self.record(label, markup)

        return record

    def _record_stage(self, markup: str, context: HookContext) -> None:
        self.record(context.stage_name or "stage", markup)

    def record(self, label: str, markup: str) -> None:
        """Store one snapshot, writing it to disk if a directory is set."""
        self.snapshots.append((label, markup))
        if self.directory is None:
            return
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{len(self.snapshots):02d}-{label}.html"
        path.write_text(markup, encoding="utf-8")
        logger.debug(f"Wrote snapshot {path}")

    def get(self, label: str) -> Optional[str]:
        """Return the most recent snapshot recorded under ``label``."""
        for recorded_label, markup in reversed(self.snapshots):
            if recorded_label == label:
                return markup
        return None


__all__ = [
    "HookCallable",
    "HookContext",
    "HookManager",
    "HookPoint",
    "SnapshotRecorder",
]
