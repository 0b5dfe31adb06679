"""Exception classes for json-validator operations."""


class JsonValidatorError(Exception):
    """Base exception for json-validator operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the path or setting that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class SchemaLoadError(JsonValidatorError):
    """Raised when a schema cannot be read, parsed, or compiled."""

    error_prefix = "Failed to load schema"


class ConfigurationError(JsonValidatorError):
    """Raised when run settings are invalid."""

    error_prefix = "Invalid configuration"


class DocumentError(JsonValidatorError):
    """Raised when a document cannot be turned into a JSON value."""

    error_prefix = "Invalid document"


class DocumentReadError(DocumentError):
    """Raised when a document cannot be read as UTF-8 text."""

    error_prefix = "Failed to read file"


class DocumentSyntaxError(DocumentError):
    """Raised when a document's content is not valid JSON."""

    error_prefix = "Invalid JSON syntax"
