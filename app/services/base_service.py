"""Shared service base with session lifecycle and data-service error mapping."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseError, NotFoundError
from app.database import db as db_module

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseService:
    """Base class for services that operate on a SQLAlchemy session.

    Each public mutation stages all of its row changes on the session and calls
    :meth:`commit` exactly once, so multi-row writes land atomically.
    """

    def __init__(self, db: Session | None = None) -> None:
        self.db = db or db_module.SessionLocal()

    def commit(self, event: str, **context: Any) -> None:
        """Commit the current transaction; roll back and raise ``DatabaseError`` on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception(f"{event}_failed", extra={"event": f"{event}_failed", **context})
            raise DatabaseError(str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)) from exc

    def get_or_404(self, model: type[T], entity_id: str, label: str) -> T:
        row = self.db.get(model, entity_id)
        if row is None:
            raise NotFoundError(f"{label} not found: {entity_id}")
        return row

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()
