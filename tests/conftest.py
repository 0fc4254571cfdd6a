"""Pytest configuration for all tests."""

import pytest

from pxpr.logging import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Reset logging so a test that raised the level does not leak it."""
    configure_logging("warning")
    yield
