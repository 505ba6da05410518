"""Environment variable credentials provider.

This module provides the EnvironmentVariableCredentialsProvider class for
retrieving credentials from the COSN_SECRET_ID and COSN_SECRET_KEY environment
variables. The environment is read on every resolution, so changes made after
construction are picked up.
"""

import os
from collections.abc import Mapping

from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.constants import (
    COSN_SECRET_ID_ENV,
    COSN_SECRET_KEY_ENV,
    COSN_SESSION_TOKEN_ENV,
)
from cosn_core.exceptions import ProviderDeclinedError

from .base import BaseCredentialsProvider, Credentials


class EnvironmentVariableCredentialsProvider(BaseCredentialsProvider):
    """Credentials provider that fetches credentials from environment variables."""

    def __init__(
        self,
        endpoint_uri: URL,
        configuration: Configuration,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the environment credentials provider.

        Args:
            endpoint_uri: The storage endpoint the credentials are for.
            configuration: The configuration source (unused).
            environ: Environment to read from. Defaults to ``os.environ``.
        """
        self.endpoint_uri = endpoint_uri
        self._environ = environ if environ is not None else os.environ

    def resolve(self) -> Credentials:
        secret_id = self._environ.get(COSN_SECRET_ID_ENV)
        secret_key = self._environ.get(COSN_SECRET_KEY_ENV)

        if not secret_id or not secret_key:
            missing = [
                name
                for name, value in (
                    (COSN_SECRET_ID_ENV, secret_id),
                    (COSN_SECRET_KEY_ENV, secret_key),
                )
                if not value
            ]
            raise ProviderDeclinedError(
                f"Environment variable(s) {', '.join(missing)} not set"
            )

        return Credentials(
            access_key_id=secret_id,
            secret_access_key=secret_key,
            session_token=self._environ.get(COSN_SESSION_TOKEN_ENV) or None,
        )

    def __repr__(self) -> str:
        return (
            "EnvironmentVariableCredentialsProvider("
            f"endpoint_uri={str(self.endpoint_uri)!r})"
        )
