"""Mapping of domain exceptions onto HTTP status codes and error codes."""

from __future__ import annotations

from app.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    LeadInkException,
    NotFoundError,
    ValidationError,
)
from app.orchestration.state_machine import InvalidTransitionError

# Ordered: subclasses before their parents.
_ERROR_MAP: tuple[tuple[type[LeadInkException], int, str], ...] = (
    (InvalidTransitionError, 409, "invalid_transition"),
    (ValidationError, 422, "validation_error"),
    (AuthenticationError, 401, "unauthenticated"),
    (AuthorizationError, 403, "forbidden"),
    (NotFoundError, 404, "not_found"),
    (ConflictError, 409, "conflict"),
    (DatabaseError, 500, "database_error"),
)


def map_error(exc: Exception) -> tuple[int, str]:
    for exc_type, status_code, error_code in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return status_code, error_code
    return 500, "internal_error"
