"""Dashboard and chart schemas."""

from __future__ import annotations

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    total_leads: int
    total_deals: int
    total_revenue: float
    conversion_rate: float


class NameValue(BaseModel):
    name: str
    value: float
