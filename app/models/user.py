"""User model module."""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, UpdatedAtMixin, enum_column_type
from app.models.enums import UserRole
from app.utils.ids import new_id


class User(Base, UpdatedAtMixin):
    """Principal known to the identity provider; the role is assigned out-of-band."""

    __tablename__ = "users"
    __table_args__ = (Index("idx_users_role", "role"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(enum_column_type(UserRole, "user_role"), nullable=False)
