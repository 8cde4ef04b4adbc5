"""Shared pytest fixtures for tinyexpr tests."""

import pytest

from tinyexpr.core.config import ParserConfig


@pytest.fixture
def extended_config() -> ParserConfig:
    """Config with 0b binary literals enabled and warnings silenced."""
    return ParserConfig(extended=True, warn=False)


@pytest.fixture
def quiet_config() -> ParserConfig:
    """Default literal rules with warnings silenced."""
    return ParserConfig(warn=False)
