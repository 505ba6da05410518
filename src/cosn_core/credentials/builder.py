"""Credentials provider chain builder.

This module builds the credentials provider chain for a storage endpoint from
the ``fs.cosn.credentials.provider`` configuration key.
"""

import structlog
from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.constants import COSN_CREDENTIALS_PROVIDER
from cosn_core.exceptions import ConfigurationError, InstantiationError

from .chain import CredentialsProviderChain
from .environment import EnvironmentVariableCredentialsProvider
from .factory import create_credentials_provider
from .registry import ProviderRegistry
from .simple import SimpleCredentialsProvider

# Get logger for this module
logger = structlog.get_logger(__name__)


def load_provider_names(
    configuration: Configuration, key: str = COSN_CREDENTIALS_PROVIDER
) -> list[str]:
    """Read the configured provider names.

    Raises:
        InstantiationError: If the configured value is malformed.
    """
    try:
        return configuration.get_trimmed_strings(key)
    except ConfigurationError as e:
        raise InstantiationError(f"From option {key} {e}") from e


def create_credentials_provider_chain(
    endpoint_uri: URL | str,
    configuration: Configuration,
    registry: ProviderRegistry | None = None,
) -> CredentialsProviderChain:
    """Build the credentials provider chain for a storage endpoint.

    With no providers configured the chain holds the configuration-backed
    provider followed by the environment variable provider. Otherwise each
    configured provider is instantiated in order; any failure aborts the build.

    Args:
        endpoint_uri: The storage endpoint the credentials are for.
        configuration: The configuration source.
        registry: Registry used to look up configured names. Defaults to the
            process-wide registry.

    Returns:
        The assembled chain.

    Raises:
        InstantiationError: If any configured provider cannot be created.
    """
    uri = URL(endpoint_uri)
    provider_names = load_provider_names(configuration)
    chain = CredentialsProviderChain()

    if not provider_names:
        chain.add(SimpleCredentialsProvider(uri, configuration))
        chain.add(EnvironmentVariableCredentialsProvider(uri, configuration))
        logger.debug("CREDENTIALS_CHAIN_DEFAULTS", endpoint=str(uri))
        return chain

    for name in provider_names:
        chain.add(create_credentials_provider(name, uri, configuration, registry))

    logger.debug(
        "CREDENTIALS_CHAIN_BUILT", endpoint=str(uri), providers=provider_names
    )
    return chain
