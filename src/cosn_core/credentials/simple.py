"""Configuration-backed credentials provider.

This module provides the SimpleCredentialsProvider class, which reads a fixed
secret id and secret key from the configuration source.
"""

from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.constants import (
    COSN_SECRET_ID_KEY,
    COSN_SECRET_KEY_KEY,
    COSN_SESSION_TOKEN_KEY,
)
from cosn_core.exceptions import ProviderDeclinedError

from .base import BaseCredentialsProvider, Credentials


class SimpleCredentialsProvider(BaseCredentialsProvider):
    """Credentials provider that reads a key pair from the configuration."""

    def __init__(self, endpoint_uri: URL, configuration: Configuration) -> None:
        """Initialize the provider from the configuration.

        Args:
            endpoint_uri: The storage endpoint the credentials are for.
            configuration: Configuration holding ``fs.cosn.userinfo.*`` keys.
        """
        self.endpoint_uri = endpoint_uri
        self._secret_id = configuration.get(COSN_SECRET_ID_KEY)
        self._secret_key = configuration.get(COSN_SECRET_KEY_KEY)
        self._session_token = configuration.get(COSN_SESSION_TOKEN_KEY) or None

    def resolve(self) -> Credentials:
        if not self._secret_id or not self._secret_key:
            raise ProviderDeclinedError(
                f"{COSN_SECRET_ID_KEY} and {COSN_SECRET_KEY_KEY} are not configured"
            )
        return Credentials(
            access_key_id=self._secret_id,
            secret_access_key=self._secret_key,
            session_token=self._session_token,
        )

    def __repr__(self) -> str:
        return f"SimpleCredentialsProvider(endpoint_uri={str(self.endpoint_uri)!r})"
