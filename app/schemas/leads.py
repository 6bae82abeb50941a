"""Lead request/response schemas for API contracts.

Request fields are loosely typed; the lead service owns field validation so
form clients get one consistent error message.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import LeadSource, LeadStatus, PropertyType


class LeadWriteRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    address: str | None = Field(default=None, max_length=500)
    property_type: str | None = None
    company: str | None = Field(default=None, max_length=255)
    architect_name: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)
    lead_found_through: str | None = None
    status: str | None = None
    assigned_user_id: str | None = None
    notes: str | None = Field(default=None, max_length=20000)


class LeadCreateRequest(LeadWriteRequest):
    pass


class LeadUpdateRequest(LeadWriteRequest):
    quote_value: float | str | None = None
    next_follow_up_date: str | None = None


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    address: str
    property_type: PropertyType
    company: str | None = None
    architect_name: str | None = None
    phone_number: str
    lead_found_through: LeadSource
    status: LeadStatus
    quote_value: float = 0
    quote_number: str | None = None
    notes: str | None = None
    next_follow_up_date: date | None = None
    lead_created_date: datetime | None = None
    assigned_user_id: str | None = None


class LeadListResponse(BaseModel):
    items: list[LeadResponse]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_more: bool


class LeadAssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lead_id: str
    user_id: str
    assigned_at: datetime | None = None
