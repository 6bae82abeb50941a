"""Deal request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import OrderStatus
from app.schemas.common import LeadSummary, UserSummary

Amount = float | str | None


class DealCreateRequest(BaseModel):
    lead_id: str = Field(min_length=1)
    sales_rep_id: str | None = None
    amount_in: Amount = None
    tax_amount: Amount = None
    middleman_cut: Amount = None
    order_date: str | None = None
    final_size_date: str | None = None
    notes: str | None = Field(default=None, max_length=20000)


class DealUpdateRequest(BaseModel):
    amount_in: Amount = None
    tax_amount: Amount = None
    middleman_cut: Amount = None
    amount_received: Amount = None
    status: str | None = None
    notes: str | None = Field(default=None, max_length=20000)
    final_size_date: str | None = None
    order_date: str | None = None


class DealResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lead_id: str
    sales_rep_id: str
    amount_in: float
    tax_amount: float
    middleman_cut: float
    total_value: float | None = None
    amount_received: float
    order_date: date
    final_size_date: date | None = None
    status: OrderStatus
    notes: str | None = None
    lead: LeadSummary | None = None
    sales_rep: UserSummary | None = None
