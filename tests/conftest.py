"""Pytest configuration and shared fixtures for the paste2dita test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path

import pytest

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by hypothesis")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep PASTE2DITA_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("PASTE2DITA_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def word_paste() -> str:
    """Provide a realistic Word clipboard export.

    Returns
    -------
    str
        Markup with a heading, a nested list, a merged-cell table and
        vendor noise.

    """
    return (FIXTURES_DIR / "word_paste.html").read_text(encoding="utf-8")


@pytest.fixture
def list_paragraph():
    """Build a Word list paragraph with a marker run.

    Returns
    -------
    callable
        ``(marker, text, level=1, margin=None) -> str``

    """

    def build(marker: str, text: str, level: int = 1, margin: str | None = None) -> str:
        style = f"mso-list:l0 level{level} lfo1"
        if margin is not None:
            style = f"margin-left:{margin};{style}"
        return f'<p style="{style}"><span style="mso-list:Ignore">{marker}</span>{text}</p>'

    return build
