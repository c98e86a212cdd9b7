"""s3schema CLI tool."""

import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import click

from s3schema.core.client import S3ClientManager
from s3schema.core.exceptions import ConfigurationError, S3SchemaError
from s3schema.core.settings import S3SchemaSettings
from s3schema.migrations.ledger import S3Ledger
from s3schema.migrations.runner import MigrationRunner
from s3schema.store.s3 import S3SchemaStore


def s3_options(func):
    """Connection options shared by every command that talks to S3."""
    options = [
        click.option("--bucket", help="S3 bucket name (default: AWS_BUCKET_NAME)"),
        click.option("--endpoint", help="S3 endpoint URL (for LocalStack)"),
        click.option("--base-path", help="S3 base path for schema data (default: S3_BASE_PATH)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _settings(bucket, endpoint, base_path, migrations_dir=None) -> S3SchemaSettings:
    settings = S3SchemaSettings()
    overrides = {
        "aws_bucket_name": bucket,
        "aws_url": endpoint,
        "s3_base_path": base_path,
        "migrations_dir": migrations_dir,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)
    try:
        settings.require_bucket()
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e
    return settings


@asynccontextmanager
async def _open_store(settings: S3SchemaSettings):
    """Yield a schema store and ledger connected to the configured bucket."""
    manager = S3ClientManager(settings)
    async with manager.get_async_client() as s3_client:
        await manager.ensure_bucket_exists(s3_client)
        store = S3SchemaStore(s3_client, settings.aws_bucket_name, settings.s3_base_path)
        ledger = S3Ledger(s3_client, settings.aws_bucket_name, settings.s3_base_path)
        yield store, ledger


def _migrations_dir(settings: S3SchemaSettings) -> Path:
    if settings.migrations_dir:
        return Path(settings.migrations_dir)
    from s3schema.tracks import MIGRATIONS_DIR

    return MIGRATIONS_DIR


def _run(coro) -> None:
    """Run a command coroutine, turning library errors into exit status 1."""
    try:
        asyncio.run(coro)
    except S3SchemaError as e:
        click.echo(f"❌ {e.message}", err=True)
        if e.hint:
            click.echo(f"   Hint: {e.hint}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """s3schema CLI - Manage collection schemas stored in S3."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
def version():
    """Show s3schema version."""
    from s3schema import __version__

    click.echo(f"s3schema version: {__version__}")


@cli.group()
def collections():
    """Inspect and bootstrap collection definitions."""
    pass


@collections.command("list")
@s3_options
def collections_list(bucket, endpoint, base_path):
    """List stored collections."""
    settings = _settings(bucket, endpoint, base_path)

    async def _list():
        async with _open_store(settings) as (store, _):
            found = await store.list_collections()
            if not found:
                click.echo("No collections found")
                return
            for collection in found:
                click.echo(
                    f"📋 {collection.name} ({collection.id}) - {len(collection.fields)} field(s)"
                )

    _run(_list())


@collections.command("show")
@click.argument("name_or_id")
@s3_options
@click.option("--json", "as_json", is_flag=True, help="Print the raw definition")
def collections_show(name_or_id, bucket, endpoint, base_path, as_json):
    """Show the fields of one collection."""
    settings = _settings(bucket, endpoint, base_path)

    async def _show():
        async with _open_store(settings) as (store, _):
            collection = await store.find_collection(name_or_id)

        if as_json:
            click.echo(json.dumps(collection.to_dict(), indent=2))
            return

        click.echo(f"📋 {collection.name} ({collection.id})")
        for index, f in enumerate(collection.fields):
            flags = [flag for flag in ("required", "hidden", "system") if getattr(f, flag)]
            suffix = f" [{', '.join(flags)}]" if flags else ""
            click.echo(f"  {index:>2}. {f.name}: {f.type} ({f.id}){suffix}")

    _run(_show())


@collections.command("bootstrap-tracks")
@s3_options
def collections_bootstrap_tracks(bucket, endpoint, base_path):
    """Create the base tracks collection the shipped migrations expect."""
    from s3schema.tracks import tracks_collection

    settings = _settings(bucket, endpoint, base_path)

    async def _bootstrap():
        async with _open_store(settings) as (store, _):
            collection = tracks_collection()
            await store.create_collection(collection)
            click.echo(f"✅ Created collection {collection.name} ({collection.id})")

    _run(_bootstrap())


# Migration commands group
@cli.group()
def migrate():
    """Schema migration commands."""
    pass


@migrate.command("run")
@s3_options
@click.option("--dir", "migrations_dir", help="Migrations directory")
@click.option("--target", help="Stop after this version")
def migrate_run(bucket, endpoint, base_path, migrations_dir, target):
    """Run pending migrations."""
    settings = _settings(bucket, endpoint, base_path, migrations_dir)

    async def _apply():
        async with _open_store(settings) as (store, ledger):
            runner = MigrationRunner(store, ledger, _migrations_dir(settings))
            results = await runner.run_pending(target=target)

            if not results:
                click.echo("✅ No pending migrations")
                return

            for r in results:
                click.echo(f"✓ {r['version']}: {r['description']}")

            click.echo(f"\n✅ Applied {len(results)} migration(s)")

    _run(_apply())


@migrate.command("status")
@s3_options
@click.option("--dir", "migrations_dir", help="Migrations directory")
def migrate_status(bucket, endpoint, base_path, migrations_dir):
    """Show migration status."""
    settings = _settings(bucket, endpoint, base_path, migrations_dir)

    async def _status():
        async with _open_store(settings) as (store, ledger):
            runner = MigrationRunner(store, ledger, _migrations_dir(settings))
            entries = await runner.status()

        click.echo("\n📋 Migration Status:\n")
        if not entries:
            click.echo("(no migrations found)")
            return
        for entry in entries:
            mark = "✓" if entry["applied"] else "○"
            click.echo(f"  {mark} {entry['version']}: {entry['description']}")

    _run(_status())


@migrate.command("rollback")
@click.argument("version")
@s3_options
@click.option("--dir", "migrations_dir", help="Migrations directory")
def migrate_rollback(version, bucket, endpoint, base_path, migrations_dir):
    """Rollback a specific migration."""
    settings = _settings(bucket, endpoint, base_path, migrations_dir)

    async def _rollback():
        async with _open_store(settings) as (store, ledger):
            runner = MigrationRunner(store, ledger, _migrations_dir(settings))
            result = await runner.rollback(version)
            click.echo(f"✓ Rolled back {result['version']}: {result['description']}")

    _run(_rollback())


@migrate.command("rollback-last")
@s3_options
@click.option("--dir", "migrations_dir", help="Migrations directory")
@click.option("--count", default=1, show_default=True, help="Number of migrations to roll back")
def migrate_rollback_last(bucket, endpoint, base_path, migrations_dir, count):
    """Rollback the most recently applied migrations."""
    settings = _settings(bucket, endpoint, base_path, migrations_dir)

    async def _rollback():
        async with _open_store(settings) as (store, ledger):
            runner = MigrationRunner(store, ledger, _migrations_dir(settings))
            results = await runner.rollback_last(count)

            if not results:
                click.echo("Nothing to roll back")
                return
            for r in results:
                click.echo(f"✓ Rolled back {r['version']}: {r['description']}")

    _run(_rollback())


if __name__ == "__main__":
    cli()
