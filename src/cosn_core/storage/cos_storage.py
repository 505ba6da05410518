"""COS object storage implementation.

This module provides the CosNStorage class, a thin adapter over the S3
compatible COS API. Credentials are resolved through the credentials provider
chain when the connection is set up.
"""

import os
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError
from yarl import URL

from cosn_core.configuration import Configuration
from cosn_core.constants import (
    COS_MAX_LISTING_LENGTH,
    COSN_ENDPOINT_URL_KEY,
    COSN_REGION_KEY,
    DEFAULT_REGION,
)
from cosn_core.credentials import (
    CredentialsProviderChain,
    create_credentials_provider_chain,
)
from cosn_core.exceptions import StorageError

# Get logger for this module
logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ObjectStatus:
    """Status of a single object or common prefix in a listing."""

    key: str
    size: int = 0
    last_modified: datetime | None = None
    is_directory: bool = False


@dataclass
class CosNStorage:
    """COS storage connection for a single bucket."""

    endpoint_uri: URL | str
    configuration: Configuration
    region: str | None = None
    endpoint_url: str | None = None

    def __post_init__(self) -> None:
        """Build the credentials chain, resolve credentials and create the client."""
        self.endpoint_uri = URL(self.endpoint_uri)
        if not self.endpoint_uri.host:
            raise StorageError(  # noqa: TRY003
                f"Endpoint URI '{self.endpoint_uri}' does not name a bucket"
            )
        self.bucket_name: str = self.endpoint_uri.host

        if self.region is None:
            self.region = self.configuration.get(COSN_REGION_KEY) or os.getenv(
                "AWS_REGION", DEFAULT_REGION
            )
        if self.endpoint_url is None:
            self.endpoint_url = self.configuration.get(COSN_ENDPOINT_URL_KEY)

        self.credentials_provider: CredentialsProviderChain = (
            create_credentials_provider_chain(self.endpoint_uri, self.configuration)
        )
        credentials = self.credentials_provider.resolve()

        session = boto3.session.Session()
        client_kwargs: dict[str, Any] = {
            "region_name": self.region,
            "aws_access_key_id": credentials.access_key_id,
            "aws_secret_access_key": credentials.secret_access_key,
        }
        if credentials.session_token:
            client_kwargs["aws_session_token"] = credentials.session_token
        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url
        self.s3_client: Any = session.client("s3", **client_kwargs)

        logger.debug(
            "COS_STORAGE_CONNECTED",
            bucket=self.bucket_name,
            region=self.region,
            endpoint_url=self.endpoint_url,
        )

    def list_objects(
        self, prefix: str = "", *, recursive: bool = True
    ) -> Iterator[ObjectStatus]:
        """List objects under ``prefix``.

        Args:
            prefix: Key prefix to list.
            recursive: If False, only the direct children of ``prefix`` are
                listed and sub-prefixes are returned as directories.

        Yields:
            One ObjectStatus per object or common prefix.

        Raises:
            StorageError: If the listing request fails.
        """
        paginator = self.s3_client.get_paginator("list_objects_v2")
        request: dict[str, Any] = {"Bucket": self.bucket_name, "Prefix": prefix}
        if not recursive:
            request["Delimiter"] = "/"

        try:
            for page in paginator.paginate(
                **request, PaginationConfig={"PageSize": COS_MAX_LISTING_LENGTH}
            ):
                for common_prefix in page.get("CommonPrefixes", []):
                    yield ObjectStatus(key=common_prefix["Prefix"], is_directory=True)
                for item in page.get("Contents", []):
                    yield ObjectStatus(
                        key=item["Key"],
                        size=item.get("Size", 0),
                        last_modified=item.get("LastModified"),
                    )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(  # noqa: TRY003
                f"Failed to list 'cosn://{self.bucket_name}/{prefix}': {e}", prefix
            ) from e

    def delete(self, key: str) -> None:
        """Delete the object stored under ``key``.

        Raises:
            StorageError: If the delete request fails.
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(  # noqa: TRY003
                f"Failed to delete 'cosn://{self.bucket_name}/{key}': {e}", key
            ) from e
        logger.debug("COS_OBJECT_DELETED", bucket=self.bucket_name, key=key)
