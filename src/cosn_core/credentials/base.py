"""Base credentials provider interface and credential value.

This module defines the Credentials value returned by resolution, the
CredentialsProvider protocol that all providers must implement, and a
BaseCredentialsProvider class that concrete providers can extend.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class Credentials:
    """Access credentials for a COS storage endpoint."""

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)

    def is_usable(self) -> bool:
        """Return True if both the key id and the secret are non-empty."""
        return bool(self.access_key_id) and bool(self.secret_access_key)


@runtime_checkable
class CredentialsProvider(Protocol):
    """Interface for credentials providers."""

    def resolve(self) -> Credentials:
        """Resolve credentials from this provider's construction-time state.

        Returns:
            The resolved credentials.

        Raises:
            ProviderDeclinedError: When the provider has no credentials to offer.
            Exception: Any other exception is treated as a provider failure.
        """
        ...


class BaseCredentialsProvider(ABC):
    """Base class providing common functionality for credentials providers.

    Subclasses implement ``resolve``. Subclasses that keep ``resolve`` abstract
    cannot be registered or instantiated by name.
    """

    @abstractmethod
    def resolve(self) -> Credentials:
        """Resolve credentials, or raise ProviderDeclinedError."""

    def clear(self) -> None:
        """Clear any cached credentials."""
        # Base implementation does nothing - subclasses should override if needed

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def is_credentials_provider_type(provider_type: type) -> bool:
    """Return True if ``provider_type`` structurally satisfies CredentialsProvider."""
    return isinstance(provider_type, type) and callable(
        getattr(provider_type, "resolve", None)
    )


def is_credentials_provider(provider: object) -> bool:
    """Return True if ``provider`` is an object with a callable ``resolve``."""
    return not isinstance(provider, type) and callable(
        getattr(provider, "resolve", None)
    )
