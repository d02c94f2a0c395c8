"""Shared fixtures for all tests."""

from collections.abc import Generator

import pytest

# Credential variables read by the test clients.
TEST_ENV_VARS = [
    "ITEMS_TOKEN",
    "EXAMPLE_TOKEN",
    "EXAMPLE_USER",
    "EXAMPLE_PASSWORD",
    "EXAMPLE_API_KEY",
]


@pytest.fixture(autouse=True)
def mock_env_clear(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear credential environment variables for every test.

    This ensures tests don't accidentally pick up real credentials from the environment.
    """
    for var in TEST_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
