"""Domain layer.

Errors raised by the catalog services when a business rule is broken.
"""

from app.domain.exceptions import (
    ConflictError,
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    StoreFailureError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "InvalidArgumentError",
    "NotFoundError",
    "StoreFailureError",
]
