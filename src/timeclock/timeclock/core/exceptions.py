class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when the requested record does not exist."""


class ConflictError(DomainError):
    """Raised when the record changed state before our write landed."""
