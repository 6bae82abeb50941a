"""Quote request schemas for API contracts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import QuoteRequestStatus, QuoteType
from app.schemas.common import LeadSummary, UserSummary


class QuoteRequestSubmitRequest(BaseModel):
    quote_type: str = Field(default="fresh", max_length=20)


class QuoteRequestStartRequest(BaseModel):
    quote_number: str | None = Field(default=None, max_length=100)
    lead_id: str | None = None


class QuoteRequestCompleteRequest(BaseModel):
    quote_value: float | str | None = None
    quote_type: str | None = None
    lead_id: str | None = None


class QuoteRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    lead_id: str
    sales_rep_id: str
    quote_maker_id: str | None = None
    requested_at: datetime | None = None
    quoted_at: datetime | None = None
    status: QuoteRequestStatus
    quote_value: float = 0
    type: QuoteType
    lead: LeadSummary | None = None
    sales_rep: UserSummary | None = None
    quote_maker: UserSummary | None = None


class QuoteRequestListResponse(BaseModel):
    items: list[QuoteRequestResponse]
    counts: dict[str, int]
