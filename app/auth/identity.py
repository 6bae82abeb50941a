"""Principal-to-role resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: UserRole
    full_name: str | None = None


def resolve_role(session: Session, user_id: str) -> UserRole | None:
    """Return the role for ``user_id`` or ``None`` when it cannot be resolved.

    Lookup failures are logged and reported as "no role"; callers treat that
    the same as an unauthenticated request.
    """
    principal = resolve_principal(session, user_id)
    return principal.role if principal is not None else None


def resolve_principal(session: Session, user_id: str) -> Principal | None:
    try:
        user = session.get(User, str(user_id))
    except SQLAlchemyError as exc:
        logger.error(
            "identity.role_lookup_failed",
            extra={"event": "identity.role_lookup_failed", "user_id": user_id, "error": str(exc)},
        )
        return None
    if user is None or user.role is None:
        logger.info("identity.no_role", extra={"event": "identity.no_role", "user_id": user_id})
        return None
    return Principal(user_id=user.id, role=UserRole(user.role), full_name=user.full_name)
