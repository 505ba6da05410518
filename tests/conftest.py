"""PyTest configuration and shared test fixtures.

This module provides shared fixtures for the credentials provider, chain,
storage and CLI tests.
"""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import patch

import pytest
from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.constants import COSN_SECRET_ID_KEY, COSN_SECRET_KEY_KEY
from cosn_core.credentials.factory import register_builtin_providers
from cosn_core.credentials.registry import ProviderRegistry

_CREDENTIAL_ENV_VARS = (
    "COSN_SECRET_ID",
    "COSN_SECRET_KEY",
    "COSN_SESSION_TOKEN",
    "AWS_PROFILE",
    "AWS_REGION",
    "COSN_CREDENTIALS_AWS_PROFILE",
)


@pytest.fixture
def endpoint_uri() -> URL:
    """Endpoint URI of the test bucket."""
    return URL("cosn://examplebucket-1250000000")


@pytest.fixture
def configuration() -> Configuration:
    """An empty configuration source."""
    return Configuration()


@pytest.fixture
def static_configuration() -> Configuration:
    """A configuration holding a static key pair."""
    return Configuration({COSN_SECRET_ID_KEY: "K1", COSN_SECRET_KEY_KEY: "S1"})


@pytest.fixture
def registry() -> ProviderRegistry:
    """A fresh provider registry holding only the built-in providers."""
    registry = ProviderRegistry()
    register_builtin_providers(registry)
    return registry


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove credential related environment variables for the test."""
    env = {k: v for k, v in os.environ.items() if k not in _CREDENTIAL_ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


def pytest_configure(config: Any) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
