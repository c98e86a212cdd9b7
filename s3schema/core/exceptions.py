"""Custom exceptions for s3schema.

Every error carries a message and an optional hint so the CLI can tell
the operator what to do next.
"""


class S3SchemaError(Exception):
    """Base exception for all s3schema errors."""

    def __init__(self, message: str, hint: str | None = None):
        """Initialize the exception.

        Args:
            message: The error message
            hint: Optional hint for resolving the error
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class NotFoundError(S3SchemaError):
    """Raised when a collection (or migration) cannot be found."""

    def __init__(self, resource: str, identifier: str):
        """Initialize the not found error.

        Args:
            resource: Kind of thing that was looked up (e.g. 'Collection')
            identifier: The name or id used for the lookup
        """
        self.resource = resource
        self.identifier = identifier

        hint = None
        if resource.lower() == "collection":
            hint = (
                "Create the collection before running migrations against it, "
                "e.g. with `s3schema collections bootstrap-tracks`."
            )

        super().__init__(f"{resource} '{identifier}' not found", hint)


class ConflictError(S3SchemaError):
    """Raised when a field or collection id is already taken."""

    def __init__(
        self,
        message: str,
        collection_id: str | None = None,
        field_id: str | None = None,
    ):
        """Initialize the conflict error.

        Args:
            message: The error message
            collection_id: The collection involved
            field_id: The duplicated field id, if any
        """
        self.collection_id = collection_id
        self.field_id = field_id

        hint = None
        if field_id:
            hint = "The migration adding this field has most likely been applied already."

        super().__init__(message, hint)


class SchemaValidationError(S3SchemaError):
    """Raised when the store rejects a collection or field definition."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[str] | None = None,
    ):
        """Initialize the validation error.

        Args:
            message: The error message
            field: The field that failed validation
            errors: All individual problems found
        """
        self.field = field
        self.errors = errors or [message]

        hint = None
        if field:
            hint = f"Check the definition of field '{field}'."

        super().__init__(message, hint)


class StorageError(S3SchemaError):
    """Raised when persisting or loading schema data fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the storage error.

        Args:
            message: The error message
            operation: The S3 operation that failed (e.g., 'put_object')
            key: The S3 key involved in the operation
            original_error: The original exception
        """
        self.operation = operation
        self.key = key
        self.original_error = original_error

        hint = None
        if "NoSuchBucket" in message:
            hint = "The specified bucket does not exist."
        elif "AccessDenied" in message:
            hint = "Check your IAM permissions for this operation."

        super().__init__(message, hint)


class MigrationError(S3SchemaError):
    """Raised when the runner cannot apply or roll back a migration."""

    def __init__(self, message: str, version: str | None = None):
        """Initialize the migration error.

        Args:
            message: The error message
            version: The migration version involved
        """
        self.version = version
        super().__init__(message)


class ConfigurationError(S3SchemaError):
    """Raised when s3schema configuration is invalid."""

    def __init__(
        self,
        message: str | None = None,
        missing_fields: list[str] | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Custom error message
            missing_fields: List of missing configuration fields
        """
        self.missing_fields = missing_fields or []

        if missing_fields:
            fields_str = ", ".join(missing_fields)
            message = f"Missing required configuration: {fields_str}"
            hint = "Set these as environment variables, in your .env file, or pass them as CLI options."
        else:
            hint = "Check your s3schema configuration."

        super().__init__(message or "Invalid s3schema configuration", hint)


class S3ConnectionError(S3SchemaError):
    """Raised when there is an error connecting to S3."""

    def __init__(
        self,
        message: str | None = None,
        original_error: Exception | None = None,
        endpoint: str | None = None,
    ):
        """Initialize the connection error.

        Args:
            message: Custom error message (optional)
            original_error: The original exception that caused this error
            endpoint: The S3 endpoint URL being connected to
        """
        self.original_error = original_error
        self.endpoint = endpoint

        if message:
            final_message = message
            hint = None
        elif original_error:
            final_message, hint = self._format_error(original_error, endpoint)
        else:
            final_message = "Failed to connect to S3"
            hint = "Check your AWS credentials and network connection."

        super().__init__(final_message, hint)

    def _format_error(
        self, error: Exception, endpoint: str | None
    ) -> tuple[str, str | None]:
        """Format the error message based on the underlying error."""
        error_str = str(error)

        if "Could not connect" in error_str or "Connection refused" in error_str:
            if endpoint and "localhost" in endpoint:
                return (
                    f"Could not connect to S3 at {endpoint}",
                    "If using LocalStack, ensure it's running: docker run -d -p 4566:4566 localstack/localstack",
                )
            return (
                f"Could not connect to S3 at {endpoint or 'AWS'}",
                "Check your network connection and AWS endpoint configuration.",
            )

        if "InvalidAccessKeyId" in error_str:
            return (
                "Invalid AWS access key ID",
                "Check your AWS_ACCESS_KEY_ID environment variable.",
            )

        if "ExpiredToken" in error_str:
            return (
                "AWS credentials have expired",
                "Refresh your AWS credentials or generate new access keys.",
            )

        return (f"S3 connection error: {error}", None)
