#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the paste2dita command-line interface.

This module tests argument parsing, option precedence between config files,
environment variables and flags, exit codes and output handling.
"""

import argparse
import io
import logging

import pytest

from paste2dita.cli import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_options,
    create_parser,
    get_exit_code_for_exception,
    main,
    read_input,
)
from paste2dita.cli.actions import env_key_for, positive_int
from paste2dita.cli.output import should_use_rich_output
from paste2dita.exceptions import (
    ConfigurationError,
    DependencyError,
    ParsingError,
    TransformError,
    ValidationError,
)
from paste2dita.logging_utils import PACKAGE_LOGGER, configure_logging, stage_for_logger

SAMPLE = '<h1 class="MsoTitle">Guide</h1><p class="MsoNormal">Intro</p>'
PRETTY = "<section>\n  <title>Guide</title>\n  <p>Intro</p>\n</section>\n"


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo the handler changes made by configure_logging."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def sample_file(tmp_path):
    """Write a small Word paste to a file."""
    path = tmp_path / "paste.html"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestArgumentParsing:
    """Test parser construction and helpers."""

    def test_defaults(self) -> None:
        """Test default argument values."""
        args = create_parser().parse_args([])
        assert args.input == "-"
        assert args.out is None
        assert args.no_pretty is False
        assert args.indent is None
        assert args.log_level == "WARNING"

    def test_env_default(self, monkeypatch) -> None:
        """Test that environment variables supply defaults."""
        monkeypatch.setenv("PASTE2DITA_INDENT", "6")
        monkeypatch.setenv("PASTE2DITA_NO_PRETTY", "yes")
        args = create_parser().parse_args([])
        assert args.indent == 6
        assert args.no_pretty is True

    def test_invalid_env_value_ignored(self, monkeypatch) -> None:
        """Test that an unparsable environment value falls back to the default."""
        monkeypatch.setenv("PASTE2DITA_INDENT", "wide")
        args = create_parser().parse_args([])
        assert args.indent is None

    def test_positive_int(self) -> None:
        """Test the indentation argument type."""
        assert positive_int("0") == 0
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int("-1")
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int("two")

    def test_env_key(self) -> None:
        """Test environment variable naming."""
        assert env_key_for("strip_images") == "PASTE2DITA_STRIP_IMAGES"
        assert env_key_for("log-level") == "PASTE2DITA_LOG_LEVEL"

    def test_invalid_parser_choice(self) -> None:
        """Test that unknown tree builders are rejected by argparse."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--html-parser", "regex"])

    def test_version(self, capsys) -> None:
        """Test the version flag."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "paste2dita" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestBuildOptions:
    """Test precedence between config files, environment and flags."""

    def _options(self, argv):
        parser = create_parser()
        return build_options(parser, parser.parse_args(argv))

    def test_flags(self) -> None:
        """Test that flags map onto pipeline options."""
        options = self._options(["--no-config", "--no-pretty", "--indent", "3", "--strip-images"])
        assert options.pretty_print is False
        assert options.formatter.indent_width == 3
        assert options.sanitize.strip_images is True

    def test_defaults_without_flags(self) -> None:
        """Test that unset flags do not override defaults."""
        options = self._options(["--no-config"])
        assert options.pretty_print is True
        assert options.sanitize.strip_images is False

    def test_config_then_flags(self, tmp_path) -> None:
        """Test that flags override config values and unset flags do not."""
        config = tmp_path / "cfg.toml"
        config.write_text("pretty_print = false\n[formatter]\nindent_width = 4\n", encoding="utf-8")

        options = self._options(["--config", str(config)])
        assert options.pretty_print is False
        assert options.formatter.indent_width == 4

        options = self._options(["--config", str(config), "--indent", "1"])
        assert options.formatter.indent_width == 1
        assert options.pretty_print is False

    def test_env_overrides_config(self, tmp_path, monkeypatch) -> None:
        """Test that environment values override the config file."""
        config = tmp_path / "cfg.json"
        config.write_text('{"formatter": {"indent_width": 4}}', encoding="utf-8")
        monkeypatch.setenv("PASTE2DITA_INDENT", "3")
        assert self._options(["--config", str(config)]).formatter.indent_width == 3

    def test_config_from_env_path(self, tmp_path, monkeypatch) -> None:
        """Test the config-path environment variable and --no-config."""
        config = tmp_path / "cfg.yaml"
        config.write_text("tables:\n  frame: none\n", encoding="utf-8")
        monkeypatch.setenv("PASTE2DITA_CONFIG", str(config))

        assert self._options([]).tables.frame == "none"
        assert self._options(["--no-config"]).tables.frame == "all"

    def test_invalid_config(self, tmp_path) -> None:
        """Test that bad config values raise a configuration error."""
        config = tmp_path / "cfg.toml"
        config.write_text("colour = 'red'\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            self._options(["--config", str(config)])


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test end-to-end CLI runs."""

    def test_file_to_stdout(self, sample_file, capsys) -> None:
        """Test the default pretty output on stdout."""
        assert main([str(sample_file), "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == PRETTY

    def test_file_to_file(self, sample_file, tmp_path) -> None:
        """Test writing to an output file in a new directory."""
        out = tmp_path / "out" / "topic.xml"
        assert main([str(sample_file), "-o", str(out), "--no-config", "--no-pretty"]) == EXIT_SUCCESS
        assert out.read_text(encoding="utf-8") == "<section><title>Guide</title><p>Intro</p></section>\n"

    def test_stdin(self, monkeypatch, capsys) -> None:
        """Test reading from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO(SAMPLE))
        assert main(["-", "--no-config", "--indent", "4"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "<section>\n    <title>Guide</title>\n    <p>Intro</p>\n</section>\n"

    def test_report(self, sample_file, capsys) -> None:
        """Test that --report lists the processing steps on stderr."""
        assert main([str(sample_file), "--no-config", "--report"]) == EXIT_SUCCESS
        err = capsys.readouterr().err
        assert "sanitize: completed" in err
        assert "format: indented 4 line(s)" in err

    def test_snapshot_dir(self, sample_file, tmp_path, capsys) -> None:
        """Test writing per-stage snapshots."""
        snapshots = tmp_path / "snaps"
        assert main([str(sample_file), "--no-config", "--snapshot-dir", str(snapshots)]) == EXIT_SUCCESS
        names = sorted(p.name for p in snapshots.iterdir())
        assert names[0] == "01-parse.html"
        assert names[-1] == "07-format.html"

    def test_empty_input(self, tmp_path, capsys) -> None:
        """Test that empty input exits with the validation code."""
        empty = tmp_path / "empty.html"
        empty.write_text("  \n", encoding="utf-8")
        assert main([str(empty), "--no-config"]) == EXIT_VALIDATION_ERROR
        assert "Error: Markup is empty" in capsys.readouterr().err

    def test_missing_input(self, tmp_path, capsys) -> None:
        """Test that a missing file exits with the file error code."""
        assert main([str(tmp_path / "missing.html"), "--no-config"]) == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_invalid_config_exit_code(self, sample_file, tmp_path, capsys) -> None:
        """Test that an invalid config file exits with the validation code."""
        config = tmp_path / "cfg.json"
        config.write_text("[]", encoding="utf-8")
        assert main([str(sample_file), "--config", str(config)]) == EXIT_VALIDATION_ERROR

    def test_rich_missing(self, sample_file, monkeypatch, capsys) -> None:
        """Test that --rich without rich installed is a dependency error."""
        monkeypatch.setattr("paste2dita.cli.output.check_rich_available", lambda: False)
        assert main([str(sample_file), "--no-config", "--rich"]) == EXIT_DEPENDENCY_ERROR
        assert "paste2dita[rich]" in capsys.readouterr().err

    def test_rich_ignored_with_output_file(self, sample_file, tmp_path, monkeypatch) -> None:
        """Test that --rich has no effect when writing to a file."""
        monkeypatch.setattr("paste2dita.cli.output.check_rich_available", lambda: False)
        out = tmp_path / "topic.xml"
        assert main([str(sample_file), "--no-config", "--rich", "-o", str(out)]) == EXIT_SUCCESS
        assert out.read_text(encoding="utf-8") == PRETTY

    def test_failed_stage_still_succeeds(self, sample_file, monkeypatch, capsys) -> None:
        """Test that a degraded run still exits successfully."""

        def boom(self, soup):
            raise RuntimeError("boom")

        monkeypatch.setattr("paste2dita.transforms.tables.TableTransformer._apply", boom)
        assert main([str(sample_file), "--no-config"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == PRETTY

    def test_rich_not_used_for_pipes(self) -> None:
        """Test that rich output needs a terminal."""
        args = argparse.Namespace(rich=True, out=None)
        assert should_use_rich_output(args, stream=io.StringIO()) is False


@pytest.mark.unit
@pytest.mark.cli
class TestHelpers:
    """Test input reading and exit code mapping."""

    def test_read_input_detects_encoding(self, tmp_path) -> None:
        """Test decoding a legacy-encoded file."""
        path = tmp_path / "legacy.html"
        path.write_bytes("<p>café</p>".encode("windows-1252"))
        assert read_input(str(path)) == "<p>café</p>"

    def test_read_input_utf8(self, tmp_path) -> None:
        """Test decoding a UTF-8 file."""
        path = tmp_path / "utf8.html"
        path.write_bytes("<p>naïve · 一、</p>".encode("utf-8"))
        assert read_input(str(path)) == "<p>naïve · 一、</p>"

    @pytest.mark.parametrize(
        "exception,code",
        [
            (DependencyError("x", ["lxml"]), EXIT_DEPENDENCY_ERROR),
            (ImportError("x"), EXIT_DEPENDENCY_ERROR),
            (ValidationError("x"), EXIT_VALIDATION_ERROR),
            (ConfigurationError("x"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x"), EXIT_FILE_ERROR),
            (ParsingError("x"), EXIT_PARSING_ERROR),
            (TransformError("x"), EXIT_ERROR),
            (RuntimeError("x"), EXIT_ERROR),
        ],
    )
    def test_exit_codes(self, exception, code) -> None:
        """Test mapping exceptions to exit codes."""
        assert get_exit_code_for_exception(exception) == code


@pytest.mark.unit
@pytest.mark.cli
class TestConfigureLogging:
    """Test the package logger setup used by the CLI."""

    def test_level_by_name(self) -> None:
        """Test resolving a level name on the package logger."""
        logger = configure_logging("debug")
        assert logger.name == "paste2dita"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_root_logger_untouched(self) -> None:
        """Test that the root logger keeps its handlers."""
        root = logging.getLogger()
        before = list(root.handlers)
        configure_logging(logging.INFO)
        assert root.handlers == before

    def test_reconfigure_replaces_own_handlers(self) -> None:
        """Test that a second call replaces only the handlers of the first."""
        logger = logging.getLogger(PACKAGE_LOGGER)
        foreign = logging.NullHandler()
        logger.addHandler(foreign)

        configure_logging(logging.INFO)
        configure_logging(logging.WARNING)

        assert foreign in logger.handlers
        assert len(logger.handlers) == 2

    def test_trace_format_names_stage(self, tmp_path) -> None:
        """Test that trace output tags records with their pipeline stage."""
        log_file = tmp_path / "run.log"
        logger = configure_logging(logging.INFO, log_file=str(log_file), trace_mode=True)
        logging.getLogger("paste2dita.transforms.tables").warning("kept native table")
        logging.getLogger("paste2dita.cli").warning("done")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "[WARNING] [tables] paste2dita.transforms.tables: kept native table" in content
        assert "[WARNING] [-] paste2dita.cli: done" in content
        assert len(logger.handlers) == 2

    @pytest.mark.parametrize(
        "name,stage",
        [
            ("paste2dita.transforms.sanitize", "sanitize"),
            ("paste2dita.transforms.lists", "lists"),
            ("paste2dita.renderers.formatter", "format"),
            ("paste2dita.api", "-"),
        ],
    )
    def test_stage_for_logger(self, name: str, stage: str) -> None:
        """Test mapping module loggers to stage tags."""
        assert stage_for_logger(name) == stage
