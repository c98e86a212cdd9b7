"""s3schema: collection schemas stored in S3, evolved by reversible migrations."""

__version__ = "0.1.0"

# Core components
from s3schema.core.client import S3ClientManager
from s3schema.core.exceptions import (
    ConfigurationError,
    ConflictError,
    MigrationError,
    NotFoundError,
    S3ConnectionError,
    S3SchemaError,
    SchemaValidationError,
    StorageError,
)
from s3schema.core.settings import S3SchemaSettings

# Schema components
from s3schema.schema import (
    AutodateField,
    BoolField,
    Collection,
    DateField,
    FieldList,
    FileField,
    NumberField,
    RelationField,
    SchemaField,
    SelectField,
    TextField,
    parse_field,
)

# Store components
from s3schema.store import (
    InMemorySchemaStore,
    S3SchemaStore,
    SchemaStore,
)

# Migration components
from s3schema.migrations import (
    AddField,
    InMemoryLedger,
    Migration,
    MigrationLedger,
    MigrationOperation,
    MigrationRecord,
    MigrationRunner,
    MigrationStep,
    RemoveField,
    RenameField,
    S3Ledger,
    UpdateCollection,
    add_fields,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "S3ClientManager",
    "S3SchemaSettings",
    "S3SchemaError",
    "NotFoundError",
    "ConflictError",
    "SchemaValidationError",
    "StorageError",
    "MigrationError",
    "ConfigurationError",
    "S3ConnectionError",
    # Schema
    "Collection",
    "FieldList",
    "SchemaField",
    "TextField",
    "NumberField",
    "BoolField",
    "DateField",
    "SelectField",
    "RelationField",
    "FileField",
    "AutodateField",
    "parse_field",
    # Stores
    "SchemaStore",
    "InMemorySchemaStore",
    "S3SchemaStore",
    # Migrations
    "Migration",
    "MigrationStep",
    "MigrationOperation",
    "MigrationRecord",
    "MigrationRunner",
    "MigrationLedger",
    "InMemoryLedger",
    "S3Ledger",
    "AddField",
    "RemoveField",
    "RenameField",
    "UpdateCollection",
    "add_fields",
]
