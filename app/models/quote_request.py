"""Quote request model module."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, UpdatedAtMixin, enum_column_type, utcnow
from app.models.enums import QuoteRequestStatus, QuoteType
from app.utils.ids import new_id


class QuoteRequest(Base, UpdatedAtMixin):
    __tablename__ = "quote_requests"
    __table_args__ = (
        Index("idx_quote_requests_status", "status"),
        Index("idx_quote_requests_lead", "lead_id"),
        Index("idx_quote_requests_sales_rep", "sales_rep_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    lead_id: Mapped[str] = mapped_column(ForeignKey("leads.id", ondelete="RESTRICT"), nullable=False)
    sales_rep_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    quote_maker_id: Mapped[str | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    requested_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    quoted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[QuoteRequestStatus] = mapped_column(
        enum_column_type(QuoteRequestStatus, "quote_request_status"),
        default=QuoteRequestStatus.PENDING,
        nullable=False,
    )
    quote_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    type: Mapped[QuoteType] = mapped_column(
        enum_column_type(QuoteType, "quote_type"), default=QuoteType.FRESH, nullable=False
    )

    lead = relationship("Lead", back_populates="quote_requests")
    sales_rep = relationship("User", foreign_keys=[sales_rep_id])
    quote_maker = relationship("User", foreign_keys=[quote_maker_id])
