"""Ledgers recording which migrations have been applied to a store."""

import json
import logging
from abc import ABC, abstractmethod

from aiobotocore.client import AioBaseClient
from botocore.exceptions import ClientError

from s3schema.core.exceptions import StorageError
from s3schema.migrations.base import MigrationRecord

logger = logging.getLogger(__name__)


class MigrationLedger(ABC):
    """Abstract base class for applied-migration history."""

    @abstractmethod
    async def records(self) -> list[MigrationRecord]:
        """Return all records in the order they were applied."""
        pass

    @abstractmethod
    async def record_applied(self, record: MigrationRecord) -> None:
        """Add a record for a migration that was just applied."""
        pass

    @abstractmethod
    async def record_reverted(self, version: str) -> None:
        """Drop the record for a migration that was just rolled back."""
        pass

    async def applied_versions(self) -> list[str]:
        return [r.version for r in await self.records()]

    async def is_applied(self, version: str) -> bool:
        return version in await self.applied_versions()


class InMemoryLedger(MigrationLedger):
    """Ledger kept in process memory, mainly for tests."""

    def __init__(self):
        self._records: list[MigrationRecord] = []

    async def records(self) -> list[MigrationRecord]:
        return list(self._records)

    async def record_applied(self, record: MigrationRecord) -> None:
        self._records = [r for r in self._records if r.version != record.version]
        self._records.append(record)

    async def record_reverted(self, version: str) -> None:
        self._records = [r for r in self._records if r.version != version]


class S3Ledger(MigrationLedger):
    """Ledger stored as a single JSON document in S3.

    The document looks like ``{"records": [{"version": ..., ...}, ...]}``.
    A missing document means nothing has been applied yet.
    """

    HISTORY_KEY = "_system/migration_history.json"

    def __init__(
        self,
        s3_client: AioBaseClient,
        bucket_name: str,
        base_path: str = "",
    ):
        """Initialize the ledger.

        Args:
            s3_client: The S3 client to use
            bucket_name: The S3 bucket name
            base_path: Key prefix shared with the schema store
        """
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.key = f"{base_path}{self.HISTORY_KEY}"

    async def _load(self) -> dict:
        try:
            response = await self.s3_client.get_object(
                Bucket=self.bucket_name,
                Key=self.key,
            )
            body = await response["Body"].read()
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchKey":
                return {"records": []}
            raise StorageError(
                f"Failed to load migration history: {e}",
                operation="get_object",
                key=self.key,
                original_error=e,
            ) from e
        return json.loads(body.decode("utf-8"))

    async def _save(self, data: dict) -> None:
        try:
            await self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=self.key,
                Body=json.dumps(data).encode("utf-8"),
                ContentType="application/json",
            )
        except ClientError as e:
            raise StorageError(
                f"Failed to save migration history: {e}",
                operation="put_object",
                key=self.key,
                original_error=e,
            ) from e

    async def records(self) -> list[MigrationRecord]:
        data = await self._load()
        return [MigrationRecord.from_dict(r) for r in data.get("records", [])]

    async def record_applied(self, record: MigrationRecord) -> None:
        data = await self._load()
        data["records"] = [
            r for r in data.get("records", [])
            if r["version"] != record.version
        ]
        data["records"].append(record.to_dict())
        await self._save(data)

    async def record_reverted(self, version: str) -> None:
        data = await self._load()
        records = data.get("records", [])
        remaining = [r for r in records if r["version"] != version]
        if len(remaining) == len(records):
            logger.debug(f"No history record for {version}, nothing to remove")
            return
        data["records"] = remaining
        await self._save(data)
