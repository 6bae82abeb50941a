"""Custom exceptions for the LeadInk application."""


class LeadInkException(Exception):
    """Base exception for LeadInk application."""

    pass


class ValidationError(LeadInkException):
    """Raised when a payload fails validation before any write."""

    pass


class NotFoundError(LeadInkException):
    """Raised when a resource is not found."""

    pass


class ConflictError(LeadInkException):
    """Raised when a write would duplicate an existing record."""

    pass


class DatabaseError(LeadInkException):
    """Raised when a database operation fails."""

    pass


class ConfigurationError(LeadInkException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(LeadInkException):
    """Raised when the caller cannot be resolved to a principal with a role."""

    pass


class AuthorizationError(LeadInkException):
    """Raised when the caller's role does not permit the requested action."""

    pass
