"""Base schema store interface for s3schema."""

from abc import ABC, abstractmethod

from s3schema.core.exceptions import ConflictError
from s3schema.schema.collection import Collection


class SchemaStore(ABC):
    """Abstract base class for collection definition stores.

    Collections handed out by a store are copies: changing them has no
    effect until they are passed to ``save_collection``.
    """

    @abstractmethod
    async def find_collection(self, name_or_id: str) -> Collection:
        """Look up a collection by id, falling back to its name.

        Args:
            name_or_id: Collection id or name

        Returns:
            A copy of the stored collection

        Raises:
            NotFoundError: If no collection matches
        """
        pass

    @abstractmethod
    async def save_collection(self, collection: Collection) -> None:
        """Validate and persist a collection definition.

        Args:
            collection: The collection to store, keyed by its id

        Raises:
            SchemaValidationError: If the definition is rejected
            StorageError: If persisting fails
        """
        pass

    @abstractmethod
    async def list_collections(self) -> list[Collection]:
        """Return all collections ordered by name."""
        pass

    @abstractmethod
    async def delete_collection(self, name_or_id: str) -> None:
        """Delete a collection.

        Raises:
            NotFoundError: If no collection matches
        """
        pass

    async def create_collection(self, collection: Collection) -> None:
        """Persist a new collection.

        Raises:
            ConflictError: If the id or name is already used
        """
        for existing in await self.list_collections():
            if existing.id == collection.id or existing.name == collection.name:
                raise ConflictError(
                    f"Collection '{collection.name}' ({collection.id}) already exists",
                    collection_id=existing.id,
                )
        await self.save_collection(collection)
