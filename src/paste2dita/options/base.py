#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for stage and pipeline options.

This module defines the foundation classes for the frozen option
dataclasses used throughout the paste2dita transformation pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import MISSING, dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> Self:
        """Build options from a plain mapping such as a loaded config file.

        Lists are converted to tuples for tuple-valued fields. Dashes in
        keys are accepted in place of underscores.

        Parameters
        ----------
        data : Mapping[str, Any] or None
            Field names and values

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValueError
            If the mapping contains keys that are not fields of this class

        """
        if not data:
            return cls()

        known = {f.name: f for f in fields(cls)}  # type: ignore[arg-type]
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for raw_key, value in data.items():
            key = str(raw_key).replace("-", "_")
            if key not in known:
                unknown.append(str(raw_key))
                continue
            default = cls._field_default(known[key])
            if isinstance(default, tuple) and isinstance(value, (list, tuple)):
                value = tuple(value)
            elif isinstance(default, CloneFrozenMixin) and isinstance(value, Mapping):
                value = type(default).from_mapping(value)
            kwargs[key] = value

        if unknown:
            raise ValueError(f"Unknown option(s) for {cls.__name__}: {', '.join(sorted(unknown))}")

        return cls(**kwargs)

    @staticmethod
    def _field_default(f: Any) -> Any:
        if f.default_factory is not MISSING:
            return f.default_factory()
        return f.default


@dataclass(frozen=True)
class BaseStageOptions(CloneFrozenMixin):
    """Base class for the options of a single pipeline stage.

    Parameters
    ----------
    enabled : bool, default True
        Whether the pipeline runs this stage. Disabling a stage passes its
        input through unchanged.

    Notes
    -----
    Subclasses should define stage-specific options as frozen dataclass fields.

    """

    enabled: bool = field(
        default=True,
        metadata={"help": "Run this stage as part of the pipeline", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate field constraints.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        pass
