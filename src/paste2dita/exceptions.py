#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the paste2dita library.

This module defines specialized exception classes for the error conditions
that can occur while transforming pasted word-processor markup. Most of
them never reach a caller of the pipeline: stage failures are caught,
logged and recorded while the stage's input is carried forward.

Exception Hierarchy
-------------------
- Paste2DitaError (base exception)

  - ValidationError (empty input, invalid parameters)
    - InvalidOptionsError (wrong options class for a stage)
    - ConfigurationError (unreadable or invalid configuration file)

  - ParsingError (markup could not be turned into a tree)

  - TransformError (a pipeline stage failed)

  - DependencyError (selected tree builder not installed)

"""

from typing import Any


class Paste2DitaError(Exception):
    """Base exception class for all paste2dita-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Paste2DitaError):
    """Exception raised for invalid input or parameters.

    This covers caller-input errors such as empty or blank markup, which
    are surfaced at the boundary rather than handled inside a stage.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a stage receives the wrong options class.

    Parameters
    ----------
    stage_name : str
        Name of the stage that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        stage_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{stage_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.stage_name = stage_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigurationError(ValidationError):
    """Exception raised when a configuration file cannot be used.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class ParsingError(Paste2DitaError):
    """Exception raised when markup cannot be parsed into a tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class TransformError(Paste2DitaError):
    """Exception raised when a pipeline stage fails.

    The pipeline catches this, logs it, and continues with the stage's
    input so that downstream stages still receive a valid tree.

    Parameters
    ----------
    message : str
        Description of the transform failure
    stage_name : str, optional
        Name of the stage that failed

    """

    def __init__(self, message: str, stage_name: str | None = None, original_error: Exception | None = None):
        """Initialize the transform error."""
        super().__init__(message, original_error)
        self.stage_name = stage_name


class DependencyError(Paste2DitaError):
    """Exception raised when a selected tree builder is not installed.

    Parameters
    ----------
    feature : str
        The feature that needs the packages (e.g. ``"html_parser=lxml"``)
    missing_packages : list[str]
        Packages that need to be installed

    """

    def __init__(
        self,
        feature: str,
        missing_packages: list[str],
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with package details."""
        if message is None:
            packages = " ".join(missing_packages)
            message = f"{feature} requires the following packages: {packages}\nInstall with: pip install {packages}"
        super().__init__(message, original_error)
        self.feature = feature
        self.missing_packages = missing_packages


__all__ = [
    "Paste2DitaError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigurationError",
    "ParsingError",
    "TransformError",
    "DependencyError",
]
