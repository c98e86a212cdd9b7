"""S3 client management for s3schema."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, Protocol, runtime_checkable

from aiobotocore.client import AioBaseClient
from aiobotocore.session import get_session
from botocore.config import Config
from botocore.exceptions import ClientError

from s3schema.core.exceptions import S3ConnectionError, StorageError
from s3schema.core.settings import S3SchemaSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class S3ClientProtocol(Protocol):
    """The subset of the S3 API the schema store and ledger rely on."""

    async def get_object(self, Bucket: str, Key: str, **kwargs) -> dict[str, Any]:
        ...

    async def put_object(
        self, Bucket: str, Key: str, Body: bytes | str, **kwargs
    ) -> dict[str, Any]:
        ...

    async def delete_object(self, Bucket: str, Key: str, **kwargs) -> dict[str, Any]:
        ...

    async def list_objects_v2(self, Bucket: str, **kwargs) -> dict[str, Any]:
        ...


def adjust_endpoint_url(
    endpoint_url: str | None, bucket_name: str | None
) -> str | None:
    """Adjust endpoint URL for path-style addressing if needed.

    Args:
        endpoint_url: The S3 endpoint URL
        bucket_name: The S3 bucket name

    Returns:
        Adjusted endpoint URL or None
    """
    if not endpoint_url:
        return None
    if bucket_name and f"{bucket_name}." in endpoint_url:
        return endpoint_url.replace(f"{bucket_name}.", "")
    return endpoint_url


class S3ClientManager:
    """Creates aiobotocore S3 clients from s3schema settings."""

    def __init__(self, settings: S3SchemaSettings | None = None):
        self.settings = settings or S3SchemaSettings()
        self._session = None
        self._endpoint_url = adjust_endpoint_url(
            self.settings.aws_url, self.settings.aws_bucket_name
        )
        self._client_config = Config(
            s3={"addressing_style": "path"},
            retries={
                "max_attempts": self.settings.aws_retry_attempts,
                "mode": "standard",
            },
        )

    @asynccontextmanager
    async def get_async_client(self) -> AsyncGenerator[AioBaseClient, None]:
        """Get an async S3 client within a context manager.

        Yields:
            An aiobotocore S3 client

        Raises:
            S3ConnectionError: If client creation fails
        """
        if self._session is None:
            self._session = get_session()

        try:
            client_cm = self._session.create_client(
                "s3",
                region_name=self.settings.aws_default_region,
                aws_access_key_id=self.settings.aws_access_key_id,
                aws_secret_access_key=self.settings.aws_secret_access_key,
                endpoint_url=self._endpoint_url,
                config=self._client_config,
            )
            client = await client_cm.__aenter__()
        except Exception as e:
            raise S3ConnectionError(
                original_error=e,
                endpoint=self._endpoint_url,
            ) from e

        try:
            yield client
        finally:
            await client_cm.__aexit__(None, None, None)

    async def ensure_bucket_exists(self, client: S3ClientProtocol) -> None:
        """Create the configured bucket if it does not exist yet.

        Raises:
            StorageError: If the bucket check or creation fails
        """
        bucket = self.settings.require_bucket()
        try:
            await client.head_bucket(Bucket=bucket)
            return
        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code not in ("404", "NoSuchBucket"):
                raise StorageError(
                    f"Failed to check bucket '{bucket}': {e}",
                    operation="head_bucket",
                    original_error=e,
                ) from e

        logger.info(f"Creating bucket {bucket}")
        try:
            await client.create_bucket(Bucket=bucket)
        except ClientError as e:
            raise StorageError(
                f"Failed to create bucket '{bucket}': {e}",
                operation="create_bucket",
                original_error=e,
            ) from e
