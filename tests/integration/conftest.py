"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_DBENTO_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_DBENTO_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_DBENTO_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def api_key() -> str:
    key = os.environ.get("DATABENTO_API_KEY")
    if not key:
        pytest.skip("DATABENTO_API_KEY is not set")
    return key
