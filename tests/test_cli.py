"""Tests for the s3schema CLI."""

from contextlib import asynccontextmanager

import pytest
from click.testing import CliRunner

from s3schema import cli as cli_module
from s3schema.cli import cli
from s3schema.testing import InMemoryS3

BUCKET_ARGS = ["--bucket", "test-bucket", "--base-path", "test/"]


@pytest.fixture
def fake_s3(monkeypatch):
    """Route the CLI's S3 client manager to one shared in-memory S3."""
    s3 = InMemoryS3()

    class FakeClientManager:
        def __init__(self, settings):
            self.settings = settings

        @asynccontextmanager
        async def get_async_client(self):
            yield s3

        async def ensure_bucket_exists(self, client):
            await client.create_bucket(Bucket=self.settings.aws_bucket_name)

    monkeypatch.setattr(cli_module, "S3ClientManager", FakeClientManager)
    monkeypatch.delenv("AWS_BUCKET_NAME", raising=False)
    return s3


def invoke(*args):
    return CliRunner().invoke(cli, list(args))


class TestCli:
    def test_version(self):
        result = invoke("version")

        assert result.exit_code == 0
        assert "s3schema version" in result.output

    def test_missing_bucket(self, fake_s3):
        result = invoke("collections", "list")

        assert result.exit_code == 2
        assert "AWS_BUCKET_NAME" in result.output

    def test_bootstrap_and_list(self, fake_s3):
        result = invoke("collections", "bootstrap-tracks", *BUCKET_ARGS)
        assert result.exit_code == 0, result.output

        result = invoke("collections", "list", *BUCKET_ARGS)

        assert result.exit_code == 0
        assert "tracks (pbc_327047008) - 5 field(s)" in result.output

    def test_bootstrap_twice_fails(self, fake_s3):
        invoke("collections", "bootstrap-tracks", *BUCKET_ARGS)

        result = invoke("collections", "bootstrap-tracks", *BUCKET_ARGS)

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_migrate_run_status_and_rollback(self, fake_s3):
        invoke("collections", "bootstrap-tracks", *BUCKET_ARGS)

        result = invoke("migrate", "run", *BUCKET_ARGS)
        assert result.exit_code == 0, result.output
        assert "Applied 2 migration(s)" in result.output

        result = invoke("migrate", "status", *BUCKET_ARGS)
        assert "✓ 1764960748" in result.output
        assert "✓ 1765112355" in result.output

        result = invoke("collections", "show", "tracks", *BUCKET_ARGS)
        assert "3. title: text (text724990059)" in result.output
        assert "6. duration: number (number2254405824)" in result.output

        result = invoke("migrate", "rollback-last", *BUCKET_ARGS)
        assert result.exit_code == 0
        assert "Rolled back 1765112355" in result.output

        result = invoke("migrate", "status", *BUCKET_ARGS)
        assert "○ 1765112355" in result.output

    def test_migrate_run_with_target(self, fake_s3):
        invoke("collections", "bootstrap-tracks", *BUCKET_ARGS)

        result = invoke("migrate", "run", *BUCKET_ARGS, "--target", "1764960748")

        assert "Applied 1 migration(s)" in result.output

    def test_migrate_without_collection(self, fake_s3):
        """Test a missing collection is reported with a hint and exit status 1."""
        result = invoke("migrate", "run", *BUCKET_ARGS)

        assert result.exit_code == 1
        assert "Collection 'pbc_327047008' not found" in result.output
        assert "Hint:" in result.output

    def test_rollback_not_applied(self, fake_s3):
        result = invoke("migrate", "rollback", "1764960748", *BUCKET_ARGS)

        assert result.exit_code == 1
        assert "has not been applied" in result.output
