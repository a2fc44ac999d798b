#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Pytest configuration and shared fixtures for the podmunge test suite.

This module provides shared fixtures, test configuration, and sample Perl
sources that are used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def simple_module() -> str:
    """Provide a module with Pod between code and after the last statement.

    Returns
    -------
    str
        Perl source; Pod starts on lines 3 and 14

    """
    return (
        "package Foo;\n"
        "\n"
        "=head1 NAME\n"
        "\n"
        "Foo\n"
        "\n"
        "=cut\n"
        "\n"
        "sub bar { 1 }\n"
        "\n"
        "1;\n"
        "__END__\n"
        "\n"
        "=head1 DESCRIPTION\n"
        "\n"
        "Bar\n"
    )


@pytest.fixture
def interleaved_module() -> str:
    """Provide a module whose only Pod sits between two statements.

    Returns
    -------
    str
        Perl source; Pod occupies lines 3 to 7, the last code is on line 9

    """
    return "my $x = 1;\n\n=head1 NAME\n\nHello\n\n=cut\n\nmy $y = 2;\n"


@pytest.fixture
def recorded_log() -> list:
    """Provide a list that doubles as a diagnostic sink via ``list.append``."""
    return []
