"""Common schema module."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from app.models.enums import PropertyType, UserRole


class ErrorEnvelope(BaseModel):
    status: str = "error"
    error_code: str
    detail: str


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    role: UserRole


class LeadSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    address: str
    property_type: PropertyType
