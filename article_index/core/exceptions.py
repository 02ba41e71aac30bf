"""
Exception hierarchy for the article index.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ArticleIndexError(Exception):
    """Base exception for all article index errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    @property
    def detail(self) -> str | None:
        """Diagnostic detail string, None when no context was attached."""
        if not self.details:
            return None
        return ", ".join(f"{key}={value}" for key, value in self.details.items())


class ValidationError(ArticleIndexError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DimensionMismatchError(ArticleIndexError):
    """Raised when two vectors that must align have different lengths."""

    def __init__(
        self,
        expected: int,
        actual: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            expected: Length of the reference vector
            actual: Length of the offending vector
            details: Additional context
        """
        details = details or {}
        details["expected"] = expected
        details["actual"] = actual
        super().__init__(
            f"Vectors must have the same length: expected {expected}, got {actual}",
            details,
        )


class ExternalServiceError(ArticleIndexError):
    """Raised when the embedding provider or document store call fails."""

    def __init__(
        self,
        message: str,
        service: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize external service error.

        Args:
            message: Error message
            service: Failing collaborator (embedding_provider, document_store)
            operation: Operation that failed (embed, upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if service:
            details["service"] = service
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class NotFoundError(ArticleIndexError):
    """Raised when an id or title references no stored records."""

    def __init__(
        self,
        resource: str,
        key: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Kind of lookup (embedding, article)
            key: Id or title that matched nothing
            details: Additional context
        """
        details = details or {}
        details[resource] = key
        super().__init__(f"{resource.capitalize()} not found: {key}", details)


class IngestionError(ArticleIndexError):
    """Raised when an article ingestion aborts partway through."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        processing_time_ms: float = 0.0,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: Error message
            stage: Pipeline stage that failed (replace, chunk, embed, store)
            processing_time_ms: Elapsed time before the failure
            details: Additional context
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        self.stage = stage
        self.processing_time_ms = processing_time_ms
        super().__init__(message, details)
