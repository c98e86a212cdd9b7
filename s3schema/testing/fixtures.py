"""Pytest fixtures for s3schema testing.

To use these fixtures, add to your conftest.py:

    pytest_plugins = ["s3schema.testing.fixtures"]
"""

import pytest

from s3schema.core.settings import S3SchemaSettings
from s3schema.migrations.ledger import InMemoryLedger, S3Ledger
from s3schema.store.memory import InMemorySchemaStore
from s3schema.store.s3 import S3SchemaStore
from s3schema.testing.mocks import InMemoryS3
from s3schema.testing.utils import create_test_settings


@pytest.fixture
def s3schema_settings() -> S3SchemaSettings:
    """Provide test settings for s3schema."""
    return create_test_settings()


@pytest.fixture
def mock_s3() -> InMemoryS3:
    """Provide in-memory S3 mock."""
    s3 = InMemoryS3()
    yield s3
    s3.clear()


@pytest.fixture
def s3_test_bucket() -> str:
    return "test-bucket"


@pytest.fixture
def s3_base_path() -> str:
    return "test/"


@pytest.fixture
def memory_store() -> InMemorySchemaStore:
    """Provide an empty in-memory schema store."""
    return InMemorySchemaStore()


@pytest.fixture
def memory_ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def s3_store(mock_s3: InMemoryS3, s3_test_bucket: str, s3_base_path: str) -> S3SchemaStore:
    """Provide a schema store backed by the in-memory S3 mock."""
    return S3SchemaStore(mock_s3, s3_test_bucket, s3_base_path)


@pytest.fixture
def s3_ledger(mock_s3: InMemoryS3, s3_test_bucket: str, s3_base_path: str) -> S3Ledger:
    """Provide a migration ledger backed by the in-memory S3 mock."""
    return S3Ledger(mock_s3, s3_test_bucket, s3_base_path)
