"""Migration system for s3schema.

A migration is a versioned, reversible change to one collection's field
list. Migrations are pure transformations of a collection definition; the
runner fetches the collection from a schema store, applies the change and
saves it back, recording each applied version in a ledger.
"""

from s3schema.migrations.base import (
    Migration,
    MigrationOperation,
    MigrationRecord,
    MigrationStep,
)
from s3schema.migrations.ledger import InMemoryLedger, MigrationLedger, S3Ledger
from s3schema.migrations.operations import (
    AddField,
    RemoveField,
    RenameField,
    UpdateCollection,
    add_fields,
)
from s3schema.migrations.runner import MigrationRunner

__all__ = [
    "AddField",
    "InMemoryLedger",
    "Migration",
    "MigrationLedger",
    "MigrationOperation",
    "MigrationRecord",
    "MigrationRunner",
    "MigrationStep",
    "RemoveField",
    "RenameField",
    "S3Ledger",
    "UpdateCollection",
    "add_fields",
]
