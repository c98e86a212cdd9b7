"""S3-backed schema store.

Each collection definition is one JSON object under
``{base_path}_collections/{collection_id}.json``. A save is a single
``put_object``, so a collection is either fully updated or not at all.
"""

import json
import logging

from aiobotocore.client import AioBaseClient
from botocore.exceptions import ClientError

from s3schema.core.exceptions import NotFoundError, StorageError
from s3schema.schema.collection import Collection
from s3schema.store.base import SchemaStore
from s3schema.store.validation import validate_collection

logger = logging.getLogger(__name__)


class S3SchemaStore(SchemaStore):
    """Stores collection definitions as JSON objects in S3."""

    COLLECTIONS_PREFIX = "_collections/"

    def __init__(
        self,
        s3_client: AioBaseClient,
        bucket_name: str,
        base_path: str = "",
    ):
        """Initialize the store.

        Args:
            s3_client: The S3 client to use
            bucket_name: The S3 bucket name
            base_path: Key prefix for all schema objects
        """
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.base_path = base_path

    @property
    def prefix(self) -> str:
        return f"{self.base_path}{self.COLLECTIONS_PREFIX}"

    def _key(self, collection_id: str) -> str:
        return f"{self.prefix}{collection_id}.json"

    async def _load(self, key: str) -> Collection | None:
        """Load one definition, or None if the key does not exist."""
        try:
            response = await self.s3_client.get_object(
                Bucket=self.bucket_name,
                Key=key,
            )
            body = await response["Body"].read()
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchKey":
                return None
            raise StorageError(
                f"Failed to load collection: {e}",
                operation="get_object",
                key=key,
                original_error=e,
            ) from e

        try:
            data = json.loads(body.decode("utf-8"))
        except ValueError as e:
            raise StorageError(
                f"Collection object {key} is not valid JSON: {e}",
                operation="get_object",
                key=key,
                original_error=e,
            ) from e
        return Collection.from_dict(data)

    async def _list_keys(self) -> list[str]:
        keys = []
        continuation_token = None

        while True:
            params = {
                "Bucket": self.bucket_name,
                "Prefix": self.prefix,
                "MaxKeys": 100,
            }
            if continuation_token:
                params["ContinuationToken"] = continuation_token

            try:
                response = await self.s3_client.list_objects_v2(**params)
            except ClientError as e:
                raise StorageError(
                    f"Failed to list collections: {e}",
                    operation="list_objects_v2",
                    key=self.prefix,
                    original_error=e,
                ) from e

            for obj_summary in response.get("Contents", []):
                if obj_summary["Key"].endswith(".json"):
                    keys.append(obj_summary["Key"])

            if not response.get("IsTruncated", False):
                break

            continuation_token = response.get("NextContinuationToken")

        return keys

    async def find_collection(self, name_or_id: str) -> Collection:
        collection = await self._load(self._key(name_or_id))
        if collection is not None:
            return collection

        for collection in await self.list_collections():
            if collection.name == name_or_id:
                return collection

        raise NotFoundError("Collection", name_or_id)

    async def save_collection(self, collection: Collection) -> None:
        validate_collection(collection)
        key = self._key(collection.id)

        try:
            await self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=json.dumps(collection.to_dict()).encode("utf-8"),
                ContentType="application/json",
            )
        except ClientError as e:
            raise StorageError(
                f"Failed to save collection '{collection.name}': {e}",
                operation="put_object",
                key=key,
                original_error=e,
            ) from e

        logger.debug(f"Saved collection {collection.name} to s3://{self.bucket_name}/{key}")

    async def list_collections(self) -> list[Collection]:
        collections = []
        for key in await self._list_keys():
            collection = await self._load(key)
            if collection is not None:
                collections.append(collection)
        return sorted(collections, key=lambda c: c.name)

    async def delete_collection(self, name_or_id: str) -> None:
        collection = await self.find_collection(name_or_id)
        key = self._key(collection.id)

        try:
            await self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as e:
            raise StorageError(
                f"Failed to delete collection '{collection.name}': {e}",
                operation="delete_object",
                key=key,
                original_error=e,
            ) from e
