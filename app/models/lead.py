"""Lead model module."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, UpdatedAtMixin, enum_column_type, utcnow
from app.models.enums import LeadSource, LeadStatus, PropertyType
from app.utils.ids import new_id


class Lead(Base, UpdatedAtMixin):
    __tablename__ = "leads"
    __table_args__ = (
        Index("idx_leads_status", "status"),
        Index("idx_leads_created", "lead_created_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    property_type: Mapped[PropertyType] = mapped_column(
        enum_column_type(PropertyType, "property_type"), nullable=False
    )
    company: Mapped[str | None] = mapped_column(String(255))
    architect_name: Mapped[str | None] = mapped_column(String(255))
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    lead_found_through: Mapped[LeadSource] = mapped_column(
        enum_column_type(LeadSource, "lead_found_through"), nullable=False
    )
    status: Mapped[LeadStatus] = mapped_column(
        enum_column_type(LeadStatus, "lead_status"), default=LeadStatus.NEW, nullable=False
    )
    quote_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    quote_number: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    next_follow_up_date: Mapped[date | None] = mapped_column(Date)
    lead_created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    assignment = relationship(
        "LeadAssignment", back_populates="lead", uselist=False, cascade="all, delete-orphan"
    )
    quote_requests = relationship("QuoteRequest", back_populates="lead")
    order = relationship("Order", back_populates="lead", uselist=False)

    @property
    def assigned_user_id(self) -> str | None:
        return self.assignment.user_id if self.assignment is not None else None
