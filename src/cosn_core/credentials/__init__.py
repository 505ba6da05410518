"""Credentials providers and the provider chain."""

from .aws import SecretsManagerCredentialsProvider
from .base import BaseCredentialsProvider, Credentials, CredentialsProvider
from .builder import create_credentials_provider_chain
from .chain import CredentialsProviderChain
from .environment import EnvironmentVariableCredentialsProvider
from .factory import (
    create_credentials_provider,
    get_provider_registry,
    list_credentials_providers,
    register_credentials_provider,
)
from .registry import ConstructionStrategy, ProviderRegistry, RegisteredProvider
from .simple import SimpleCredentialsProvider

__all__ = [
    "BaseCredentialsProvider",
    "ConstructionStrategy",
    "Credentials",
    "CredentialsProvider",
    "CredentialsProviderChain",
    "EnvironmentVariableCredentialsProvider",
    "ProviderRegistry",
    "RegisteredProvider",
    "SecretsManagerCredentialsProvider",
    "SimpleCredentialsProvider",
    "create_credentials_provider",
    "create_credentials_provider_chain",
    "get_provider_registry",
    "list_credentials_providers",
    "register_credentials_provider",
]
