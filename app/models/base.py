"""Shared SQLAlchemy base and common mixins."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp helper."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base class for the LeadInk schema."""


class UpdatedAtMixin:
    """Last-modified timestamp maintained on every ORM flush."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


def enum_column_type(enum_cls: type, name: str) -> Enum:
    """Persist enum *values* (``"quote_made"``) rather than member names."""
    return Enum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members])
