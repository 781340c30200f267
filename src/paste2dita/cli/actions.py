"""Custom argparse actions with environment-variable defaults.

Every option built from these actions can be defaulted through
``PASTE2DITA_<DEST>`` (upper-cased, dashes and dots as underscores). The
actions also record which destinations were set explicitly, on the
command line or through the environment, so that only those override a
configuration file.
"""

from __future__ import annotations

#  Copyright (c) 2025 Tom Villani, Ph.D.
import argparse
import logging
import os
from typing import Any, Callable, Optional, Sequence, Union

from paste2dita.constants import ENV_PREFIX

logger = logging.getLogger(__name__)

PROVIDED_ATTR = "_provided_args"
TRUTHY_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Return the environment variable that defaults ``dest``."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_').replace('.', '_')}"


def _mark_provided(namespace: argparse.Namespace, dest: str) -> None:
    if not hasattr(namespace, PROVIDED_ATTR):
        setattr(namespace, PROVIDED_ATTR, set())
    getattr(namespace, PROVIDED_ATTR).add(dest)


class EnvStoreAction(argparse.Action):
    """Store action that reads its default from the environment and tracks explicit use."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        nargs: Optional[Union[int, str]] = None,
        const: Optional[Any] = None,
        default: Optional[Any] = None,
        type: Optional[Callable[[str], Any]] = None,
        choices: Optional[Sequence[Any]] = None,
        required: bool = False,
        help: Optional[str] = None,
        metavar: Optional[Union[str, tuple[str, ...]]] = None,
    ) -> None:
        """Initialize the action, applying an environment default if one is set."""
        self.from_env = False
        env_key = env_key_for(dest)
        env_value = os.environ.get(env_key)
        if env_value is not None:
            try:
                default = type(env_value) if type is not None else env_value
                self.from_env = True
            except (ValueError, TypeError, argparse.ArgumentTypeError) as e:
                logger.warning(f"Invalid environment variable {env_key}={env_value}: {e}")

        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=nargs,
            const=const,
            default=default,
            type=type,
            choices=choices,
            required=required,
            help=help,
            metavar=metavar,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Store the value and mark it as explicitly provided."""
        setattr(namespace, self.dest, values)
        _mark_provided(namespace, self.dest)


class EnvStoreConstAction(argparse.Action):
    """Flag action storing ``const``; a truthy environment variable acts as the flag."""

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        const: Any = True,
        default: Any = False,
        required: bool = False,
        help: Optional[str] = None,
    ) -> None:
        """Initialize the flag, applying an environment default if one is set."""
        self.from_env = False
        env_value = os.environ.get(env_key_for(dest))
        if env_value is not None:
            default = const if env_value.lower() in TRUTHY_VALUES else default
            self.from_env = True

        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=const,
            default=default,
            required=required,
            help=help,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Store ``const`` and mark the flag as explicitly provided."""
        setattr(namespace, self.dest, self.const)
        _mark_provided(namespace, self.dest)


def explicitly_set(parser: argparse.ArgumentParser, namespace: argparse.Namespace) -> set[str]:
    """Return destinations set on the command line or through the environment."""
    provided = set(getattr(namespace, PROVIDED_ATTR, set()))
    for action in parser._actions:
        if getattr(action, "from_env", False):
            provided.add(action.dest)
    return provided


def positive_int(value: str) -> int:
    """Argparse type accepting integers >= 0."""
    try:
        ivalue = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from e
    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be >= 0")
    return ivalue


__all__ = ["EnvStoreAction", "EnvStoreConstAction", "env_key_for", "explicitly_set", "positive_int"]
