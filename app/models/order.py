"""Order (deal) model module."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Computed, Date, ForeignKey, Index, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, UpdatedAtMixin, enum_column_type
from app.models.enums import OrderStatus
from app.utils.ids import new_id


class Order(Base, UpdatedAtMixin):
    """Financial record for a won lead.

    ``total_value`` is a generated column; the application reads it after a
    flush and never writes it.
    """

    __tablename__ = "orders"
    __table_args__ = (
        UniqueConstraint("lead_id", name="uq_orders_lead"),
        Index("idx_orders_sales_rep", "sales_rep_id"),
        Index("idx_orders_order_date", "order_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    lead_id: Mapped[str] = mapped_column(ForeignKey("leads.id", ondelete="RESTRICT"), nullable=False)
    sales_rep_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    amount_in: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    middleman_cut: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    total_value: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), Computed("amount_in + tax_amount + middleman_cut")
    )
    order_date: Mapped[date] = mapped_column(Date, default=date.today, nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        enum_column_type(OrderStatus, "order_status"), default=OrderStatus.PENDING, nullable=False
    )
    # Column name predates the spelling fix in the API.
    amount_received: Mapped[Decimal] = mapped_column("amount_recieved", Numeric(12, 2), default=0, nullable=False)
    final_size_date: Mapped[date | None] = mapped_column(Date)
    notes: Mapped[str | None] = mapped_column(Text)

    lead = relationship("Lead", back_populates="order")
    sales_rep = relationship("User")
