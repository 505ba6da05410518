"""Ordered credentials provider chain.

This module provides the CredentialsProviderChain class, which resolves
credentials by trying each of its providers in order and returning the first
usable result.
"""

from collections.abc import Iterable, Iterator

import structlog

from cosn_core.exceptions import NoCredentialsError, ProviderDeclinedError

from .base import Credentials, CredentialsProvider
from .registry import type_name

# Get logger for this module
logger = structlog.get_logger(__name__)


class CredentialsProviderChain:
    """Credentials provider that delegates to an ordered list of providers.

    Providers are tried strictly in insertion order and resolution stops at the
    first provider that yields usable credentials. Providers are only added
    while the chain is assembled; the chain adds no locking of its own and
    caches nothing, so every ``resolve`` call runs the providers again.
    """

    def __init__(self, providers: Iterable[CredentialsProvider] = ()) -> None:
        self._providers: list[CredentialsProvider] = list(providers)

    def add(self, provider: CredentialsProvider) -> None:
        """Append a provider to the end of the chain."""
        self._providers.append(provider)

    @property
    def providers(self) -> tuple[CredentialsProvider, ...]:
        return tuple(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[CredentialsProvider]:
        return iter(self._providers)

    def resolve(self) -> Credentials:
        """Resolve credentials from the first provider that has them.

        Returns:
            The credentials of the first provider that yields usable ones.

        Raises:
            NoCredentialsError: If every provider declined or failed. The error
                lists each provider's dotted type name and reason, in chain order.
        """
        reasons: list[tuple[str, str]] = []

        for provider in self._providers:
            provider_name = type_name(type(provider))
            logger.debug("CREDENTIALS_PROVIDER_TRYING", provider=provider_name)
            try:
                credentials = provider.resolve()
            except ProviderDeclinedError as e:
                logger.debug(
                    "CREDENTIALS_PROVIDER_DECLINED",
                    provider=provider_name,
                    reason=e.reason,
                )
                reasons.append((provider_name, e.reason))
                continue
            except Exception as e:
                logger.warning(
                    "CREDENTIALS_PROVIDER_FAILED",
                    provider=provider_name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                reasons.append((provider_name, f"{type(e).__name__}: {e}"))
                continue

            if not isinstance(credentials, Credentials) or not credentials.is_usable():
                logger.debug("CREDENTIALS_PROVIDER_EMPTY", provider=provider_name)
                reasons.append((provider_name, "returned no usable credentials"))
                continue

            logger.debug("CREDENTIALS_RESOLVED", provider=provider_name)
            return credentials

        logger.warning(
            "CREDENTIALS_NOT_RESOLVED",
            providers=[name for name, _ in reasons],
        )
        raise NoCredentialsError(reasons)

    def __repr__(self) -> str:
        return f"CredentialsProviderChain({self._providers!r})"
