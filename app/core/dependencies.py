"""Dependency providers for API handlers."""

from __future__ import annotations

import logging
from collections.abc import Generator

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.auth.identity import Principal, resolve_principal
from app.auth.jwt import decode_jwt
from app.core.config import Config, get_config
from app.core.exceptions import AuthenticationError
from app.database.db import get_db

logger = logging.getLogger(__name__)


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise AuthenticationError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise AuthenticationError("Authorization header must use Bearer token.")
    return parts[1].strip()


def get_current_user(
    authorization: str | None = Header(default=None, alias="Authorization"),
    session: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> Principal:
    """Resolve the request principal; a principal without a role is unauthenticated."""
    token = extract_bearer_token(authorization)
    claims = decode_jwt(token=token, secret=settings.JWT_SECRET)
    user_id = claims.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid auth claims.")

    principal = resolve_principal(session, str(user_id))
    if principal is None:
        logger.warning("auth.no_role", extra={"event": "auth.no_role", "user_id": user_id})
        raise AuthenticationError("No role is assigned to this account.")
    return principal
