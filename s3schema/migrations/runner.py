"""Migration runner for s3schema."""

import importlib.util
import logging
import sys
from pathlib import Path
from typing import List

from s3schema.core.exceptions import MigrationError
from s3schema.migrations.base import Migration, MigrationRecord
from s3schema.migrations.ledger import MigrationLedger
from s3schema.store.base import SchemaStore

logger = logging.getLogger(__name__)


def version_key(version: str) -> tuple:
    """Sort key for versions: numeric versions numerically, then the rest as text."""
    if version.isdigit():
        return (0, int(version), "")
    return (1, 0, version)


class MigrationRunner:
    """Runs migrations against a schema store.

    This runner:
    - Loads migrations from Python files or programmatic registration
    - Tracks which migrations have been applied in a ledger
    - Applies pending migrations in ascending version order
    - Rolls back applied migrations in descending version order

    Callers must make sure only one runner works on a store at a time.
    """

    def __init__(
        self,
        store: SchemaStore,
        ledger: MigrationLedger,
        migrations_dir: Path | None = None,
    ):
        """Initialize the migration runner.

        Args:
            store: The schema store migrations are applied to
            ledger: Where applied migrations are recorded
            migrations_dir: Directory containing migration files
        """
        self.store = store
        self.ledger = ledger
        self.migrations_dir = Path(migrations_dir) if migrations_dir else None
        self._migrations: List[Migration] = []
        self._loaded = False

    def _load_migrations(self) -> None:
        """Load migrations from the migrations directory.

        Raises:
            MigrationError: If a migration file cannot be imported
        """
        if self._loaded:
            return
        self._loaded = True

        if not self.migrations_dir or not self.migrations_dir.exists():
            return

        for file_path in sorted(self.migrations_dir.glob("*.py")):
            if file_path.name.startswith("_"):
                continue

            module_name = f"s3schema_migration_{file_path.stem}"
            spec = importlib.util.spec_from_file_location(module_name, file_path)
            if not spec or not spec.loader:
                logger.warning(f"Skipping {file_path}: not a loadable module")
                continue

            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module

            try:
                spec.loader.exec_module(module)
            except Exception as e:
                del sys.modules[module_name]
                raise MigrationError(
                    f"Failed to load migration from {file_path}: {e}"
                ) from e

            found = 0
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if isinstance(attr, Migration):
                    self.register(attr)
                    found += 1

            logger.debug(f"Loaded {found} migration(s) from {file_path.name}")

    def register(self, migration: Migration) -> None:
        """Register a migration programmatically.

        Args:
            migration: The migration to register

        Raises:
            MigrationError: If another migration already uses the version
        """
        for existing in self._migrations:
            if existing.version == migration.version:
                if existing is migration:
                    return
                raise MigrationError(
                    f"Duplicate migration version '{migration.version}'",
                    version=migration.version,
                )
        self._migrations.append(migration)
        self._migrations.sort(key=lambda m: version_key(m.version))

    @property
    def migrations(self) -> List[Migration]:
        """All known migrations in ascending version order."""
        self._load_migrations()
        return list(self._migrations)

    def get_migration(self, version: str) -> Migration:
        for migration in self.migrations:
            if migration.version == version:
                return migration
        raise MigrationError(f"Migration '{version}' not found", version=version)

    async def is_applied(self, version: str) -> bool:
        return await self.ledger.is_applied(version)

    async def record_applied(self, migration: Migration) -> None:
        await self.ledger.record_applied(MigrationRecord.for_migration(migration))

    async def record_reverted(self, version: str) -> None:
        await self.ledger.record_reverted(version)

    async def list_pending_steps(self) -> List[Migration]:
        """Get migrations that haven't been applied, in the order they would run."""
        applied = set(await self.ledger.applied_versions())
        return [m for m in self.migrations if m.version not in applied]

    async def status(self) -> List[dict]:
        """Report every known migration and whether it has been applied."""
        applied = set(await self.ledger.applied_versions())
        return [
            {
                "version": m.version,
                "description": m.description,
                "collection": m.collection,
                "applied": m.version in applied,
            }
            for m in self.migrations
        ]

    async def run_pending(self, target: str | None = None) -> List[dict]:
        """Apply pending migrations in ascending order.

        Each migration is recorded only after it was saved. The first failure
        stops the run; migrations applied before it stay recorded.

        Args:
            target: Stop after this version (inclusive)

        Returns:
            List of results for each applied migration

        Raises:
            MigrationError: If ``target`` is not a known version
        """
        if target is not None:
            self.get_migration(target)

        results = []
        for migration in await self.list_pending_steps():
            if target is not None and version_key(migration.version) > version_key(target):
                break

            logger.info(f"Applying migration {migration.version}: {migration.description}")
            try:
                collection = await migration.apply(self.store)
            except Exception as e:
                logger.error(f"Migration {migration.version} failed: {e}")
                raise
            await self.record_applied(migration)

            results.append({
                "version": migration.version,
                "description": migration.description,
                "status": "applied",
                "fields": len(collection.fields),
            })

        return results

    async def rollback(self, version: str) -> dict:
        """Rollback a specific applied migration.

        Args:
            version: The version to rollback

        Returns:
            Dictionary with rollback results

        Raises:
            MigrationError: If migration not found, not reversible or not applied
        """
        migration = self.get_migration(version)

        if not migration.reversible:
            raise MigrationError(f"Migration '{version}' is not reversible", version=version)

        if not await self.is_applied(version):
            raise MigrationError(f"Migration '{version}' has not been applied", version=version)

        logger.info(f"Rolling back migration {version}: {migration.description}")
        collection = await migration.revert(self.store)
        await self.record_reverted(version)

        return {
            "version": version,
            "description": migration.description,
            "status": "rolled_back",
            "fields": len(collection.fields),
        }

    async def rollback_last(self, count: int = 1) -> List[dict]:
        """Rollback the ``count`` highest applied migrations, newest first."""
        applied = set(await self.ledger.applied_versions())
        to_revert = [m for m in reversed(self.migrations) if m.version in applied]

        results = []
        for migration in to_revert[:count]:
            results.append(await self.rollback(migration.version))
        return results
