"""Credentials provider factory functions.

This module holds the process-wide provider registry, registers the built-in
providers, and provides the factory function that instantiates a provider by
name for a given endpoint and configuration.
"""

from yarl import URL

from cosn_core.configuration import Configuration

from .aws import SecretsManagerCredentialsProvider
from .base import CredentialsProvider
from .environment import EnvironmentVariableCredentialsProvider
from .registry import (
    ConstructionStrategy,
    ProviderRegistry,
    RegisteredProvider,
    type_name,
)
from .simple import SimpleCredentialsProvider

BUILTIN_PROVIDERS: dict[str, type] = {
    "simple": SimpleCredentialsProvider,
    "environment": EnvironmentVariableCredentialsProvider,
    "secrets_manager": SecretsManagerCredentialsProvider,
}


def register_builtin_providers(registry: ProviderRegistry) -> None:
    """Register the built-in providers under their alias and dotted name."""
    for alias, provider_type in BUILTIN_PROVIDERS.items():
        for name in (alias, type_name(provider_type)):
            registry.register(
                name, provider_type, ConstructionStrategy.URI_AND_CONFIGURATION
            )


_REGISTRY = ProviderRegistry()
register_builtin_providers(_REGISTRY)


def get_provider_registry() -> ProviderRegistry:
    """Return the process-wide provider registry."""
    return _REGISTRY


def register_credentials_provider(
    name: str,
    provider_type: type,
    strategy: ConstructionStrategy | None = None,
) -> RegisteredProvider:
    """Register a third-party credentials provider with the process-wide registry."""
    return _REGISTRY.register(name, provider_type, strategy)


def list_credentials_providers() -> list[str]:
    """List all registered credentials provider names."""
    return _REGISTRY.names()


def create_credentials_provider(
    provider_name: str,
    endpoint_uri: URL | str,
    configuration: Configuration,
    registry: ProviderRegistry | None = None,
) -> CredentialsProvider:
    """Create a credentials provider instance by name.

    Args:
        provider_name: Registered name or dotted path of the provider type.
        endpoint_uri: The storage endpoint the credentials are for.
        configuration: The configuration source.
        registry: Registry to look the name up in. Defaults to the
            process-wide registry.

    Returns:
        The instantiated provider.

    Raises:
        InstantiationError: If the type cannot be found, validated, or
            constructed.
    """
    entry = (registry or _REGISTRY).get(provider_name)
    return entry.create(URL(endpoint_uri), configuration)
