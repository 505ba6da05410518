"""Tests for building the credentials provider chain from configuration."""

from unittest.mock import patch

import pytest
from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.constants import COSN_CREDENTIALS_PROVIDER
from cosn_core.credentials import (
    EnvironmentVariableCredentialsProvider,
    SimpleCredentialsProvider,
    create_credentials_provider_chain,
)
from cosn_core.credentials.base import BaseCredentialsProvider, Credentials
from cosn_core.credentials.builder import load_provider_names
from cosn_core.credentials.registry import ProviderRegistry, type_name
from cosn_core.exceptions import ConfigurationTypeError, InstantiationError


class RecordingProvider:
    def __init__(self, endpoint_uri: URL, configuration: Configuration) -> None:
        self.endpoint_uri = endpoint_uri
        self.configuration = configuration

    def resolve(self) -> Credentials:
        return Credentials("K3", "S3")


class ExplodingProvider:
    def __init__(self, configuration: Configuration) -> None:
        raise ValueError("missing region")

    def resolve(self) -> Credentials:
        return Credentials("K4", "S4")


class NotAProvider:
    def fetch(self) -> Credentials:
        return Credentials("K5", "S5")


class AbstractBuilderProvider(BaseCredentialsProvider):
    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration


class TestLoadProviderNames:
    """Test reading the configured provider names."""

    def test_unset(self, configuration: Configuration) -> None:
        """Test that an unset key yields no names."""
        assert load_provider_names(configuration) == []

    def test_comma_separated(self) -> None:
        """Test that names are trimmed and empty entries dropped."""
        configuration = Configuration(
            {COSN_CREDENTIALS_PROVIDER: " environment , ,simple "}
        )

        assert load_provider_names(configuration) == ["environment", "simple"]

    def test_malformed_value(self) -> None:
        """Test that a malformed value is an instantiation error."""
        configuration = Configuration({COSN_CREDENTIALS_PROVIDER: 42})

        with pytest.raises(InstantiationError) as excinfo:
            load_provider_names(configuration)

        assert str(excinfo.value).startswith(
            f"From option {COSN_CREDENTIALS_PROVIDER} "
        )


class TestCreateCredentialsProviderChain:
    """Test chain assembly for an endpoint."""

    def test_default_chain(
        self, endpoint_uri: URL, configuration: Configuration
    ) -> None:
        """Test that an unset key yields the simple then environment providers."""
        chain = create_credentials_provider_chain(endpoint_uri, configuration)

        assert [type(p) for p in chain.providers] == [
            SimpleCredentialsProvider,
            EnvironmentVariableCredentialsProvider,
        ]

    def test_blank_value_yields_default_chain(self, endpoint_uri: URL) -> None:
        """Test that a value with only separators is treated as unset."""
        configuration = Configuration({COSN_CREDENTIALS_PROVIDER: " , "})

        chain = create_credentials_provider_chain(endpoint_uri, configuration)

        assert len(chain) == 2

    def test_configured_order_is_preserved(
        self, endpoint_uri: URL, registry: ProviderRegistry
    ) -> None:
        """Test that providers appear in the configured order."""
        registry.register("recording", RecordingProvider)
        configuration = Configuration(
            {COSN_CREDENTIALS_PROVIDER: ["environment", "recording", "simple"]}
        )

        chain = create_credentials_provider_chain(
            endpoint_uri, configuration, registry
        )

        assert [type(p) for p in chain.providers] == [
            EnvironmentVariableCredentialsProvider,
            RecordingProvider,
            SimpleCredentialsProvider,
        ]

    def test_provider_receives_endpoint_and_configuration(
        self, registry: ProviderRegistry
    ) -> None:
        """Test that a two-argument provider gets the chain's inputs."""
        registry.register("recording", RecordingProvider)
        configuration = Configuration({COSN_CREDENTIALS_PROVIDER: "recording"})

        chain = create_credentials_provider_chain(
            "cosn://bucket-1250000000", configuration, registry
        )

        (provider,) = chain.providers
        assert provider.endpoint_uri == URL("cosn://bucket-1250000000")
        assert provider.configuration is configuration

    def test_unknown_provider_aborts(
        self, endpoint_uri: URL, registry: ProviderRegistry
    ) -> None:
        """Test that an unknown entry fails the whole build."""
        configuration = Configuration(
            {COSN_CREDENTIALS_PROVIDER: "simple,does_not_exist"}
        )

        with pytest.raises(ConfigurationTypeError):
            create_credentials_provider_chain(endpoint_uri, configuration, registry)

    @pytest.mark.parametrize(
        ("provider_type", "message"),
        [
            (NotAProvider, "is not a cos credential provider"),
            (AbstractBuilderProvider, "is abstract and therefore cannot be created"),
        ],
    )
    def test_unusable_dotted_provider_aborts(
        self,
        endpoint_uri: URL,
        registry: ProviderRegistry,
        provider_type: type,
        message: str,
    ) -> None:
        """Test that a dotted entry naming an unusable type fails the build."""
        name = type_name(provider_type)
        configuration = Configuration({COSN_CREDENTIALS_PROVIDER: f"simple,{name}"})
        chain = None

        with pytest.raises(ConfigurationTypeError) as excinfo:
            chain = create_credentials_provider_chain(
                endpoint_uri, configuration, registry
            )

        assert chain is None
        assert f"class {name} {message}" in str(excinfo.value)
        assert name not in registry

    def test_construction_failure_aborts(
        self, endpoint_uri: URL, registry: ProviderRegistry
    ) -> None:
        """Test that a provider that cannot be built fails the whole build."""
        registry.register("exploding", ExplodingProvider)
        configuration = Configuration(
            {COSN_CREDENTIALS_PROVIDER: "simple,exploding"}
        )

        with pytest.raises(InstantiationError) as excinfo:
            create_credentials_provider_chain(endpoint_uri, configuration, registry)

        assert "exploding instantiation exception" in str(excinfo.value)

    def test_default_chain_falls_back_to_environment(
        self, endpoint_uri: URL, configuration: Configuration
    ) -> None:
        """Test that the environment is used when the configuration is empty."""
        chain = create_credentials_provider_chain(endpoint_uri, configuration)

        with patch.dict(
            "os.environ", {"COSN_SECRET_ID": "K2", "COSN_SECRET_KEY": "S2"}
        ):
            credentials = chain.resolve()

        assert credentials == Credentials("K2", "S2")

    def test_default_chain_prefers_configuration(
        self, endpoint_uri: URL, static_configuration: Configuration
    ) -> None:
        """Test that configured keys win over environment variables."""
        chain = create_credentials_provider_chain(endpoint_uri, static_configuration)

        with patch.dict(
            "os.environ", {"COSN_SECRET_ID": "K2", "COSN_SECRET_KEY": "S2"}
        ):
            credentials = chain.resolve()

        assert credentials == Credentials("K1", "S1")
