"""Settings for s3schema, loaded from the environment or a .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from s3schema.core.exceptions import ConfigurationError


class S3SchemaSettings(BaseSettings):
    """Connection and layout settings for the schema store.

    Attributes:
        aws_access_key_id: AWS access key (falls back to the default chain)
        aws_secret_access_key: AWS secret key
        aws_default_region: Region for the S3 client
        aws_bucket_name: Bucket holding collection definitions and history
        aws_url: Custom endpoint URL (LocalStack, MinIO)
        aws_retry_attempts: Max attempts for botocore's standard retry mode
        s3_base_path: Key prefix under which everything is stored
        migrations_dir: Directory the CLI loads migration files from
        debug: Enable debug logging
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_default_region: str = "us-east-1"
    aws_bucket_name: str | None = None
    aws_url: str | None = None
    aws_retry_attempts: int = 3

    s3_base_path: str = "s3schema/"
    migrations_dir: str | None = None
    debug: bool = False

    def require_bucket(self) -> str:
        """Return the bucket name or fail if it is not configured."""
        if not self.aws_bucket_name:
            raise ConfigurationError(missing_fields=["AWS_BUCKET_NAME"])
        return self.aws_bucket_name
