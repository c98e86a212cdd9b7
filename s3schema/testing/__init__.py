"""Testing utilities for s3schema.

Usage in conftest.py:
    from s3schema.testing import InMemoryS3, mock_s3_client

    @pytest.fixture
    def s3_client():
        with mock_s3_client() as client:
            yield client

Or use provided fixtures directly:
    pytest_plugins = ["s3schema.testing.fixtures"]
"""

from s3schema.testing.mocks import InMemoryS3, mock_s3_client
from s3schema.testing.utils import create_test_settings

__all__ = [
    "InMemoryS3",
    "create_test_settings",
    "mock_s3_client",
]
