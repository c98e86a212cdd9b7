"""Base classes for s3schema migrations."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from s3schema.core.exceptions import MigrationError
from s3schema.schema.collection import Collection

if TYPE_CHECKING:
    from s3schema.store.base import SchemaStore

logger = logging.getLogger(__name__)


@dataclass
class MigrationOperation(ABC):
    """Base class for migration operations.

    Operations are pure: they take a collection and return a changed copy,
    never touching the store themselves.
    """

    @abstractmethod
    def forward(self, collection: Collection) -> Collection:
        """Apply the forward transformation.

        Args:
            collection: The collection definition to transform

        Returns:
            Transformed copy of the collection
        """
        pass

    def reverse(self, collection: Collection) -> Collection:
        """Apply the reverse transformation (for rollback).

        Args:
            collection: The collection definition to transform

        Returns:
            Transformed copy of the collection

        Raises:
            NotImplementedError: If operation is not reversible
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} does not support rollback"
        )

    @property
    def can_reverse(self) -> bool:
        """Whether ``reverse`` has everything it needs from the constructor."""
        return True


@dataclass
class Migration:
    """A reversible, versioned change to one collection's schema.

    Attributes:
        version: Unique, increasing sort key (e.g. "1764960748")
        description: Human-readable description of the migration
        collection: Id (or name) of the collection this migration changes
        operations: List of operations to apply
        reversible: Whether this migration can be rolled back
    """

    version: str
    description: str
    collection: str
    operations: List[MigrationOperation] = field(default_factory=list)
    reversible: bool = True

    def __post_init__(self):
        if not self.reversible:
            return
        missing = [
            op.__class__.__name__ for op in self.operations if not op.can_reverse
        ]
        if missing:
            raise MigrationError(
                f"Migration {self.version} is reversible but "
                f"{', '.join(missing)} cannot be undone; pass the removed "
                "field definition or set reversible=False",
                version=self.version,
            )

    def forward(self, collection: Collection) -> Collection:
        """Run all operations in declared order on a copy of ``collection``."""
        result = collection.copy_deep()
        for op in self.operations:
            result = op.forward(result)
        return result

    def backward(self, collection: Collection) -> Collection:
        """Run all reverse operations in reverse order on a copy of ``collection``.

        Raises:
            MigrationError: If the migration is not reversible
        """
        if not self.reversible:
            raise MigrationError(
                f"Migration {self.version} is not reversible",
                version=self.version,
            )

        result = collection.copy_deep()
        for op in reversed(self.operations):
            result = op.reverse(result)
        return result

    async def apply(self, store: "SchemaStore") -> Collection:
        """Fetch the collection, transform it and save it in one go.

        Nothing is written unless every operation succeeds.

        Raises:
            NotFoundError: If the collection does not exist
            ConflictError: If a field being added already exists
            SchemaValidationError: If the store rejects the result
            StorageError: If saving fails
        """
        collection = await store.find_collection(self.collection)
        result = self.forward(collection)
        await store.save_collection(result)
        logger.info(
            f"Applied {self.version} to {result.name}: "
            f"{len(collection.fields)} -> {len(result.fields)} fields"
        )
        return result

    async def revert(self, store: "SchemaStore") -> Collection:
        """Undo this migration on the stored collection.

        Reverting a migration that never ran, or reverting twice, leaves
        the field list unchanged.

        Raises:
            NotFoundError: If the collection does not exist
            MigrationError: If the migration is not reversible
        """
        collection = await store.find_collection(self.collection)
        result = self.backward(collection)
        await store.save_collection(result)
        logger.info(
            f"Reverted {self.version} on {result.name}: "
            f"{len(collection.fields)} -> {len(result.fields)} fields"
        )
        return result


MigrationStep = Migration


@dataclass
class MigrationRecord:
    """Ledger entry for an applied migration."""

    version: str
    collection: str
    description: str
    applied_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "collection": self.collection,
            "description": self.description,
            "applied_at": self.applied_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MigrationRecord":
        """Create from dictionary."""
        return cls(
            version=data["version"],
            collection=data["collection"],
            description=data["description"],
            applied_at=datetime.fromisoformat(data["applied_at"]),
        )

    @classmethod
    def for_migration(cls, migration: Migration) -> "MigrationRecord":
        return cls(
            version=migration.version,
            collection=migration.collection,
            description=migration.description,
        )
