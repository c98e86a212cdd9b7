"""Testing utilities for s3schema."""

from s3schema.core.settings import S3SchemaSettings


def create_test_settings(
    bucket_name: str = "test-bucket",
    base_path: str = "test/",
    **overrides
) -> S3SchemaSettings:
    """Create s3schema settings for testing.

    Args:
        bucket_name: The S3 bucket name for tests
        base_path: The S3 base path for tests
        **overrides: Additional settings to override

    Returns:
        S3SchemaSettings instance configured for testing
    """
    return S3SchemaSettings(
        aws_bucket_name=bucket_name,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        aws_default_region="us-east-1",
        aws_url="http://localhost:4566",
        s3_base_path=base_path,
        debug=True,
        **overrides,
    )
