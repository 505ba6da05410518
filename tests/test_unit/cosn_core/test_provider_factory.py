"""Tests for the credentials provider factory functions."""

import pytest
from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.credentials import (
    EnvironmentVariableCredentialsProvider,
    SecretsManagerCredentialsProvider,
    SimpleCredentialsProvider,
    create_credentials_provider,
    get_provider_registry,
    list_credentials_providers,
    register_credentials_provider,
)
from cosn_core.credentials.base import Credentials
from cosn_core.credentials.registry import ProviderRegistry, type_name
from cosn_core.exceptions import ConfigurationTypeError


class StaticTestProvider:
    def __init__(self, endpoint_uri: URL, configuration: Configuration) -> None:
        self.endpoint_uri = endpoint_uri
        self.configuration = configuration

    def resolve(self) -> Credentials:
        return Credentials("K1", "S1")


class TestBuiltinProviders:
    """Test that the built-in providers are registered."""

    @pytest.mark.parametrize(
        ("name", "provider_type"),
        [
            ("simple", SimpleCredentialsProvider),
            ("environment", EnvironmentVariableCredentialsProvider),
            ("secrets_manager", SecretsManagerCredentialsProvider),
        ],
    )
    def test_alias_and_dotted_name(self, name: str, provider_type: type) -> None:
        """Test that each built-in is reachable by alias and by dotted name."""
        providers = list_credentials_providers()

        assert name in providers
        assert type_name(provider_type) in providers
        assert get_provider_registry().get(name).provider_type is provider_type

    def test_create_by_alias(
        self, endpoint_uri: URL, static_configuration: Configuration
    ) -> None:
        """Test creating a built-in provider by alias."""
        provider = create_credentials_provider(
            "simple", endpoint_uri, static_configuration
        )

        assert isinstance(provider, SimpleCredentialsProvider)
        assert provider.resolve() == Credentials("K1", "S1")

    def test_create_with_string_uri(self, static_configuration: Configuration) -> None:
        """Test that a string endpoint URI is converted to a URL."""
        provider = create_credentials_provider(
            type_name(SimpleCredentialsProvider),
            "cosn://bucket-1250000000",
            static_configuration,
        )

        assert provider.endpoint_uri == URL("cosn://bucket-1250000000")


class TestRegisterCredentialsProvider:
    """Test registering third-party providers."""

    def test_register_in_custom_registry(
        self, registry: ProviderRegistry, endpoint_uri: URL
    ) -> None:
        """Test that a private registry can be passed to the factory."""
        registry.register("static_test", StaticTestProvider)
        configuration = Configuration()

        provider = create_credentials_provider(
            "static_test", endpoint_uri, configuration, registry
        )

        assert isinstance(provider, StaticTestProvider)
        assert provider.configuration is configuration
        assert "static_test" not in list_credentials_providers()

    def test_register_in_process_registry(self, endpoint_uri: URL) -> None:
        """Test registering with the process-wide registry."""
        try:
            register_credentials_provider("static_test", StaticTestProvider)
            provider = create_credentials_provider(
                "static_test", endpoint_uri, Configuration()
            )
            assert isinstance(provider, StaticTestProvider)
        finally:
            get_provider_registry().unregister("static_test")

    def test_unknown_provider(self, endpoint_uri: URL) -> None:
        """Test that an unknown provider name fails."""
        with pytest.raises(ConfigurationTypeError):
            create_credentials_provider("nope", endpoint_uri, Configuration())
