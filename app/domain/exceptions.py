"""Domain exceptions.

All domain-level errors raised by the catalog services. The API layer maps
each of them to an HTTP status; nothing in the services retries on them.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidArgumentError(DomainError):
    """Raised when a caller-supplied argument is out of range.

    Used for pagination below 1 and unknown sort fields.
    """

    error_code = "INVALID_ARGUMENT"


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule.

    Also raised when a delete matched no rows.
    """

    error_code = "CONFLICT"


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, ids: list[str]) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Product", "Variant").
            ids: Identifiers that could not be resolved.
        """
        if len(ids) == 1:
            message = f"{entity_type} with ID {ids[0]} not found"
        else:
            message = f"{entity_type}s with IDs [{', '.join(ids)}] not found"
        super().__init__(
            message,
            details={"entity_type": entity_type, "ids": ids},
        )
        self.entity_type = entity_type
        self.ids = ids


class StoreFailureError(DomainError):
    """Raised when the persistence layer fails unexpectedly.

    The message is opaque; the original error is chained.
    """

    error_code = "STORE_FAILURE"

    def __init__(self, operation: str) -> None:
        """Initialize store failure error.

        Args:
            operation: Name of the catalog operation that failed.
        """
        super().__init__(
            "An internal storage error occurred",
            details={"operation": operation},
        )
        self.operation = operation
