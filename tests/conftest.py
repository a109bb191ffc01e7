"""Pytest configuration and shared fixtures for the pptx2html test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from pathlib import Path

import pytest
from utils import THEME_XML, create_chart_presentation, parse_fragment

from pptx2html.colors import ColorContext
from pptx2html.xmltree import parse_xml

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
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def theme():
    """Parsed theme part with the Office palette."""
    return parse_xml(THEME_XML)


@pytest.fixture
def ctx(theme) -> ColorContext:
    """Color context built from the Office theme and the default color map."""
    return ColorContext.from_parts(theme=theme)


@pytest.fixture
def empty_ctx() -> ColorContext:
    """Color context without a theme; scheme colors fall back to black."""
    return ColorContext()


@pytest.fixture
def fragment():
    """Parse a DrawingML fragment with the standard namespaces declared."""
    return parse_fragment


@pytest.fixture
def chart_pptx(tmp_path: Path) -> Path:
    """A saved presentation with one clustered column chart."""
    path = tmp_path / "chart.pptx"
    create_chart_presentation().save(str(path))
    return path
