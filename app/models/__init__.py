"""SQLAlchemy model package for the sales-pipeline schema."""

from app.models.base import Base
from app.models.enums import (
    LeadSource,
    LeadStatus,
    OrderStatus,
    PropertyType,
    QuoteRequestStatus,
    QuoteType,
    UserRole,
)
from app.models.lead import Lead
from app.models.lead_assignment import LeadAssignment
from app.models.order import Order
from app.models.quote_request import QuoteRequest
from app.models.user import User

__all__ = [
    "Base",
    "Lead",
    "LeadAssignment",
    "LeadSource",
    "LeadStatus",
    "Order",
    "OrderStatus",
    "PropertyType",
    "QuoteRequest",
    "QuoteRequestStatus",
    "QuoteType",
    "User",
    "UserRole",
]
