"""Command-line interface for the paste2dita transformation pipeline.

Reads pasted markup from a file or stdin, runs the pipeline and writes the
result to a file or stdout.

Environment Variable Support
----------------------------
Every option supports an environment variable default using the pattern
PASTE2DITA_<OPTION_NAME>, with the option name upper-cased and dashes
replaced by underscores. CLI arguments always override environment
variables, and both override values from a configuration file.

Examples
--------
Transform a saved clipboard export::

    $ paste2dita clipboard.html -o topic.xml

Read from stdin, compact output::

    $ xclip -o -t text/html | paste2dita --no-pretty

Keep per-stage snapshots for debugging::

    $ paste2dita clipboard.html --snapshot-dir ./snapshots --verbose

Use environment variables for defaults::

    $ export PASTE2DITA_INDENT=4
    $ paste2dita clipboard.html

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, get_args

from bs4 import UnicodeDammit

from paste2dita.cli.actions import EnvStoreAction, EnvStoreConstAction, explicitly_set, positive_int
from paste2dita.cli.config import load_config_with_priority, merge_configs, options_from_config
from paste2dita.cli.output import should_use_rich_output, write_output
from paste2dita.constants import ENV_PREFIX, HtmlParser
from paste2dita.exceptions import DependencyError, ParsingError, Paste2DitaError, ValidationError
from paste2dita.logging_utils import configure_logging
from paste2dita.options.pipeline import PipelineOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6

CONFIG_ENV_VAR = f"{ENV_PREFIX}CONFIG"

# argparse dest -> (option path, value transform)
_OPTION_OVERRIDES: Dict[str, tuple[tuple[str, ...], Any]] = {
    "no_pretty": (("pretty_print",), lambda v: not v),
    "indent": (("formatter", "indent_width"), None),
    "strip_images": (("sanitize", "strip_images"), None),
    "html_parser": (("html_parser",), None),
}


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    from paste2dita import __version__

    parser = argparse.ArgumentParser(
        prog="paste2dita",
        description="Clean word-processor clipboard markup into structured, indented topic markup.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Input file, or '-' for stdin (default)")
    parser.add_argument("-o", "--out", action=EnvStoreAction, help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file (TOML, YAML or JSON)")
    parser.add_argument(
        "--no-config", action=EnvStoreConstAction, help="Do not load a configuration file automatically"
    )
    parser.add_argument("--no-pretty", action=EnvStoreConstAction, help="Write compact markup without indentation")
    parser.add_argument(
        "--indent", action=EnvStoreAction, type=positive_int, metavar="N", help="Spaces per indentation level"
    )
    parser.add_argument("--strip-images", action=EnvStoreConstAction, help="Remove images from the output")
    parser.add_argument(
        "--html-parser",
        action=EnvStoreAction,
        choices=list(get_args(HtmlParser)),
        help="BeautifulSoup tree builder to parse with",
    )
    parser.add_argument(
        "--snapshot-dir", action=EnvStoreAction, metavar="DIR", help="Write the markup after every stage to DIR"
    )
    parser.add_argument("--report", action=EnvStoreConstAction, help="Print processing steps to stderr")
    parser.add_argument(
        "--log-level",
        action=EnvStoreAction,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", action=EnvStoreAction, help="Also write log output to this file")
    parser.add_argument("--verbose", action=EnvStoreConstAction, help="Enable debug logging")
    parser.add_argument("--trace", action=EnvStoreConstAction, help="Debug logging with timestamps and logger names")
    parser.add_argument("--rich", action=EnvStoreConstAction, help="Syntax-highlight output on a terminal")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments."""
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _set_path(config: Dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    target = config
    for key in path[:-1]:
        target = target.setdefault(key, {})
    target[path[-1]] = value


def build_options(parser: argparse.ArgumentParser, parsed_args: argparse.Namespace) -> PipelineOptions:
    """Combine configuration file values with explicitly set CLI options.

    Raises
    ------
    ConfigurationError
        If the configuration file cannot be loaded or holds invalid options

    """
    env_config = None if parsed_args.no_config else os.environ.get(CONFIG_ENV_VAR)
    config = load_config_with_priority(
        explicit_path=parsed_args.config, env_var_path=env_config, discover=not parsed_args.no_config
    )

    overrides: Dict[str, Any] = {}
    provided = explicitly_set(parser, parsed_args)
    for dest, (path, convert) in _OPTION_OVERRIDES.items():
        if dest in provided:
            value = getattr(parsed_args, dest)
            _set_path(overrides, path, convert(value) if convert else value)

    return options_from_config(merge_configs(config, overrides), config_path=parsed_args.config)


def read_input(source: str) -> str:
    """Read markup from a file or stdin, detecting the encoding of files."""
    if source == "-":
        return sys.stdin.read()
    data = Path(source).read_bytes()
    return UnicodeDammit(data, ["utf-8", "windows-1252"]).unicode_markup or ""


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI."""
    from paste2dita.api import transform_with_report
    from paste2dita.transforms.hooks import HookManager, SnapshotRecorder

    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        options = build_options(parser, parsed_args)
        should_use_rich_output(parsed_args, raise_on_missing=True)
        markup = read_input(parsed_args.input)

        hooks = HookManager()
        if parsed_args.snapshot_dir:
            SnapshotRecorder(parsed_args.snapshot_dir).attach(hooks)

        result = transform_with_report(markup, options, hooks)
        write_output(result.markup, parsed_args.out, parsed_args)
    except (Paste2DitaError, OSError) as e:
        logger.debug("CLI failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    if parsed_args.report:
        for step in result.steps:
            print(step, file=sys.stderr)
    if result.failed_stages:
        logger.warning(f"Stage(s) skipped after errors: {', '.join(result.failed_stages)}")
    return EXIT_SUCCESS


__all__ = ["create_parser", "build_options", "get_exit_code_for_exception", "main", "read_input"]


if __name__ == "__main__":
    sys.exit(main())
