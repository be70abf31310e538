"""Shared pytest fixtures for sqlbrick unit tests."""
from __future__ import annotations

import pytest

from sqlbrick.settings import reset_settings


@pytest.fixture(autouse=True)
def _default_settings():
    """Every test starts and ends with the default settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def poison() -> str:
    return "<<<FAILURE "
