"""In-memory schema store."""

import json
import logging

from s3schema.core.exceptions import NotFoundError
from s3schema.schema.collection import Collection
from s3schema.store.base import SchemaStore
from s3schema.store.validation import validate_collection

logger = logging.getLogger(__name__)


class InMemorySchemaStore(SchemaStore):
    """Schema store keeping serialized collections in a dict.

    Collections are stored as JSON strings, so callers can never hold a
    reference into the stored state.
    """

    def __init__(self, collections: list[Collection] | None = None):
        self._collections: dict[str, str] = {}
        self.save_count = 0
        for collection in collections or []:
            self._collections[collection.id] = json.dumps(collection.to_dict())

    def _lookup(self, name_or_id: str) -> str | None:
        if name_or_id in self._collections:
            return name_or_id
        for collection_id, raw in self._collections.items():
            if json.loads(raw)["name"] == name_or_id:
                return collection_id
        return None

    async def find_collection(self, name_or_id: str) -> Collection:
        collection_id = self._lookup(name_or_id)
        if collection_id is None:
            raise NotFoundError("Collection", name_or_id)
        return Collection.from_dict(json.loads(self._collections[collection_id]))

    async def save_collection(self, collection: Collection) -> None:
        validate_collection(collection)
        self._collections[collection.id] = json.dumps(collection.to_dict())
        self.save_count += 1
        logger.debug(f"Saved collection {collection.name} ({collection.id})")

    async def list_collections(self) -> list[Collection]:
        collections = [
            Collection.from_dict(json.loads(raw))
            for raw in self._collections.values()
        ]
        return sorted(collections, key=lambda c: c.name)

    async def delete_collection(self, name_or_id: str) -> None:
        collection_id = self._lookup(name_or_id)
        if collection_id is None:
            raise NotFoundError("Collection", name_or_id)
        del self._collections[collection_id]

    def snapshot(self) -> dict[str, dict]:
        """Raw stored state, for test assertions."""
        return {k: json.loads(v) for k, v in self._collections.items()}
