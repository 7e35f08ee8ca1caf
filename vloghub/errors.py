"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_TOKEN = "INVALID_TOKEN"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when attempting to create or update a resource that would violate a uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. missing required fields)."""

    pass


class InvalidTokenError(DomainValidationError):
    """Raised when a password reset token never existed, has expired, or was already used."""

    pass


class UnauthorizedError(DomainError):
    """Raised when credentials or a bearer token are missing or invalid."""

    pass


class ForbiddenError(DomainError):
    """Raised when an authenticated caller may not act on a resource."""

    pass


class StoreError(Exception):
    """Raised when the underlying database fails to run a statement."""

    pass


class ConstraintViolationError(StoreError):
    """Raised when a statement violates a uniqueness or foreign-key constraint."""

    pass
