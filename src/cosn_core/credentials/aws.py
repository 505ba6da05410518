"""AWS Secrets Manager credentials provider.

This module provides the SecretsManagerCredentialsProvider class for retrieving
COS credentials stored as a JSON secret in AWS Secrets Manager.
"""

import json
import os
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError
from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.constants import (
    DEFAULT_REGION,
    SECRETS_MANAGER_ENDPOINT_URL_KEY,
    SECRETS_MANAGER_REGION_KEY,
    SECRETS_MANAGER_SECRET_NAME_KEY,
)
from cosn_core.exceptions import ProviderDeclinedError

from .base import BaseCredentialsProvider, Credentials

# Get logger for this module
logger = structlog.get_logger(__name__)

_SECRET_ID_FIELD = "secretId"
_SECRET_KEY_FIELD = "secretKey"
_SESSION_TOKEN_FIELD = "sessionToken"  # noqa: S105


class SecretsManagerCredentialsProvider(BaseCredentialsProvider):
    """Credentials provider that fetches credentials from AWS Secrets Manager.

    The secret is expected to be a JSON object with ``secretId`` and
    ``secretKey`` entries and an optional ``sessionToken``.
    """

    def __init__(self, endpoint_uri: URL, configuration: Configuration) -> None:
        """Initialize the Secrets Manager credentials provider.

        Args:
            endpoint_uri: The storage endpoint. Its host names the default secret.
            configuration: Configuration holding the secret name, region and
                optional endpoint URL.
        """
        self.endpoint_uri = endpoint_uri
        self.secret_name = (
            configuration.get(SECRETS_MANAGER_SECRET_NAME_KEY)
            or f"{endpoint_uri.host or 'default'}-cosn-credentials"
        )
        # Use AWS_REGION environment variable if region is not configured
        self.region = configuration.get(SECRETS_MANAGER_REGION_KEY) or os.getenv(
            "AWS_REGION", DEFAULT_REGION
        )
        self.endpoint_url = configuration.get(SECRETS_MANAGER_ENDPOINT_URL_KEY)
        self._credentials: Credentials | None = None

    def _create_client(self) -> Any:
        # Respect AWS profile overrides
        profile_name = os.getenv(
            "COSN_CREDENTIALS_AWS_PROFILE", os.getenv("AWS_PROFILE")
        )
        if profile_name:
            session = boto3.session.Session(profile_name=profile_name)
        else:
            session = boto3.session.Session()
        client_kwargs: dict[str, Any] = {
            "service_name": "secretsmanager",
            "region_name": self.region,
        }
        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url
        return session.client(**client_kwargs)

    def resolve(self) -> Credentials:
        if self._credentials is not None:
            return self._credentials

        client = self._create_client()
        try:
            response = client.get_secret_value(SecretId=self.secret_name)
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code == "ResourceNotFoundException":
                raise ProviderDeclinedError(
                    f"Secret '{self.secret_name}' not found"
                ) from e
            raise ValueError(  # noqa: TRY003
                f"AWS Secrets Manager error for secret '{self.secret_name}': {e}"
            ) from e
        except BotoCoreError as e:
            raise ValueError(  # noqa: TRY003
                f"Unable to reach AWS Secrets Manager: {e}"
            ) from e

        try:
            secret_data = json.loads(response["SecretString"])
        except (KeyError, json.JSONDecodeError) as e:
            raise ValueError(  # noqa: TRY003
                f"Secret '{self.secret_name}' not valid JSON"
            ) from e

        secret_id = secret_data.get(_SECRET_ID_FIELD)
        secret_key = secret_data.get(_SECRET_KEY_FIELD)
        if not isinstance(secret_id, str) or not isinstance(secret_key, str):
            raise ProviderDeclinedError(
                f"Secret '{self.secret_name}' has no "
                f"'{_SECRET_ID_FIELD}'/'{_SECRET_KEY_FIELD}' strings"
            )

        session_token = secret_data.get(_SESSION_TOKEN_FIELD)
        self._credentials = Credentials(
            access_key_id=secret_id,
            secret_access_key=secret_key,
            session_token=session_token if isinstance(session_token, str) else None,
        )
        logger.debug(
            "SECRETS_MANAGER_CREDENTIALS_LOADED",
            secret_name=self.secret_name,
            region=self.region,
        )
        return self._credentials

    def clear(self) -> None:
        """Clear the cached credentials."""
        self._credentials = None

    def __repr__(self) -> str:
        return f"SecretsManagerCredentialsProvider(secret_name={self.secret_name!r})"
