"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Every error carries a machine-readable ``kind`` so route handlers can map
it to an HTTP status code without inspecting the class.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminator for domain failures."""
    NOT_FOUND = 'NOT_FOUND'
    UNAUTHORIZED = 'UNAUTHORIZED'
    VALIDATION_ERROR = 'VALIDATION_ERROR'


class DomainError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind
    default_message = 'Domain rule violated'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Referenced user or task does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = 'Resource not found'


class UnauthorizedError(DomainError):
    """Acting user is not the owner of the resource."""

    kind = ErrorKind.UNAUTHORIZED
    default_message = 'Unauthorized'


class ValidationError(DomainError):
    """Input violates a business validation rule."""

    kind = ErrorKind.VALIDATION_ERROR
    default_message = 'Validation failed'


class DuplicateError(Exception):
    """Store rejected a write on an existing unique key.

    Raised by repositories only. Services translate it into a DomainError.
    """
