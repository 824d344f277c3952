"""Test configuration and fixtures."""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture(autouse=True)
def clean_retry_env(monkeypatch):
    """Keep RETRY_* variables from the outer environment out of tests."""
    for name in (
        "RETRY_MAX_ATTEMPTS",
        "RETRY_INTERVAL_MILLIS",
        "RETRY_BACKOFF_FACTOR",
        "RETRY_JITTER_MIN",
        "RETRY_JITTER_MAX",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def delay():
    """Instrumented delay primitive recording every requested duration."""
    return AsyncMock(return_value=None)
