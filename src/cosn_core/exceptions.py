"""Standardized exceptions for the COS credentials core module.

This module provides the exception hierarchy used by the credential providers,
the provider factory and chain, the configuration source and the storage
adapter. Callers only need to handle ``CredentialsError`` to catch every
credential resolution failure.
"""


class CosNError(Exception):
    """Base exception for all COS credentials errors."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """Initialize the error with a message and optional error code.

        Args:
            message: Human-readable error message.
            error_code: Optional error code for programmatic handling.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationError(CosNError):
    """Raised when a configuration value or file cannot be interpreted."""

    def __init__(self, message: str, key: str | None = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message describing the configuration issue.
            key: Optional configuration key that caused the error.
        """
        super().__init__(message, "CONFIG_ERROR")
        self.key = key


class CredentialsError(CosNError):
    """Raised when credentials cannot be obtained for a storage endpoint."""

    def __init__(self, message: str, error_code: str = "CREDENTIALS_ERROR") -> None:
        super().__init__(message, error_code)


class InstantiationError(CredentialsError):
    """Raised when a credentials provider cannot be created.

    This is a configuration or programming error and is not retryable.
    """

    def __init__(
        self,
        message: str,
        provider_type: str | None = None,
        error_code: str = "INSTANTIATION_ERROR",
    ) -> None:
        """Initialize instantiation error.

        Args:
            message: Error message describing the instantiation failure.
            provider_type: Optional name of the provider type being created.
            error_code: Error code for programmatic handling.
        """
        super().__init__(message, error_code)
        self.provider_type = provider_type


class ConfigurationTypeError(InstantiationError):
    """Raised when a provider type is unknown, abstract or not a provider."""

    def __init__(self, message: str, provider_type: str | None = None) -> None:
        super().__init__(message, provider_type, "CONFIGURATION_TYPE_ERROR")


class NoConstructionStrategyError(InstantiationError):
    """Raised when a provider type exposes no supported way to construct it."""

    def __init__(self, provider_type: str) -> None:
        """Initialize the error for the given provider type.

        Args:
            provider_type: Name of the provider type that could not be built.
        """
        super().__init__(
            f"{provider_type}: no supported construction strategy",
            provider_type,
            "NO_CONSTRUCTION_STRATEGY",
        )


class ProviderDeclinedError(CosNError):
    """Raised by a provider that has no credentials to offer.

    This is a signal to try the next provider rather than a failure.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason, "PROVIDER_DECLINED")
        self.reason = reason


class NoCredentialsError(CredentialsError):
    """Raised when every provider in a chain declined or failed."""

    def __init__(self, reasons: list[tuple[str, str]]) -> None:
        """Initialize the error from the per-provider reasons.

        Args:
            reasons: Ordered ``(provider type name, reason)`` pairs.
        """
        if reasons:
            details = "; ".join(f"{name}: {reason}" for name, reason in reasons)
        else:
            details = "the credentials provider chain is empty"
        super().__init__(
            f"No credentials available from the provider chain ({details})",
            "NO_CREDENTIALS",
        )
        self.reasons = reasons


class StorageError(CosNError):
    """Raised when storage operations fail."""

    def __init__(self, message: str, key: str | None = None) -> None:
        """Initialize storage error.

        Args:
            message: Error message describing the storage issue.
            key: Optional object key that caused the error.
        """
        super().__init__(message, "STORAGE_ERROR")
        self.key = key
