"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/paste2dita/cli/output.py
import argparse
import sys
from pathlib import Path
from typing import IO, Optional

from paste2dita.exceptions import DependencyError


def check_rich_available() -> bool:
    """Check if the Rich library is available."""
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(
    args: argparse.Namespace, raise_on_missing: bool = False, stream: Optional[IO[str]] = None
) -> bool:
    """Determine if Rich output should be used.

    Rich output is used when the ``--rich`` flag is set, no output file was
    given, the target stream is a TTY and Rich is installed.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    raise_on_missing : bool, default False
        Raise DependencyError if rich is not installed
    stream : optional
        Stream to check, defaults to sys.stdout

    Returns
    -------
    bool
        True if Rich output should be used

    """
    if not getattr(args, "rich", False) or getattr(args, "out", None):
        return False

    if not check_rich_available():
        if raise_on_missing:
            raise DependencyError(
                "rich-output",
                ["rich"],
                message=(
                    "Rich output requires the optional 'rich' dependency. "
                    "Install with: pip install paste2dita[rich]"
                ),
            )
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def render_rich(markup: str) -> None:
    """Print markup to the terminal with XML syntax highlighting."""
    from rich.console import Console
    from rich.syntax import Syntax

    Console().print(Syntax(markup, "xml", theme="monokai", word_wrap=True))


def write_output(markup: str, out: Optional[str], args: argparse.Namespace) -> None:
    """Write the result to ``out``, or to stdout when it is None or ``-``."""
    if out and out != "-":
        path = Path(out)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markup + "\n", encoding="utf-8")
        return

    if should_use_rich_output(args):
        render_rich(markup)
    else:
        sys.stdout.write(markup + "\n")


__all__ = ["check_rich_available", "render_rich", "should_use_rich_output", "write_output"]
