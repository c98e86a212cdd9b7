"""Schema stores holding collection definitions."""

from s3schema.store.base import SchemaStore
from s3schema.store.memory import InMemorySchemaStore
from s3schema.store.s3 import S3SchemaStore
from s3schema.store.validation import validate_collection

__all__ = [
    "InMemorySchemaStore",
    "S3SchemaStore",
    "SchemaStore",
    "validate_collection",
]
