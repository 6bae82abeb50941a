"""Canonical enum values for the sales-pipeline schema."""

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    SALES_MANAGER = "sales_manager"
    SALES_REP = "sales_rep"
    LEAD_ASSIGNER = "lead_assigner"
    QUOTE_MAKER = "quote_maker"
    VIEWER = "viewer"


class LeadStatus(str, enum.Enum):
    NEW = "new"
    QUOTE_MADE = "quote_made"
    NEGOTIATION = "negotiation"
    WON = "won"
    LOST = "lost"
    UNQUALIFIED = "unqualified"


class PropertyType(str, enum.Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class LeadSource(str, enum.Enum):
    SCANNER = "scanner"
    ADS = "ads"
    SOCIAL_MEDIA = "social_media"
    ORGANIC = "organic"
    SUNNY = "sunny"
    WORD_OF_MOUTH = "word_of_mouth"
    SOCIAL_MEDIA_ADS = "social_media_ads"
    ARCHITECT = "architect"


class QuoteRequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class QuoteType(str, enum.Enum):
    FRESH = "fresh"
    REVISAL = "revisal"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


CLOSED_LEAD_STATUSES = frozenset({LeadStatus.WON, LeadStatus.LOST})
SALES_ROLES = frozenset({UserRole.SALES_REP, UserRole.SALES_MANAGER})

# Display order of the lead board; lower sorts first.
LEAD_STATUS_ORDER: dict[LeadStatus, int] = {
    LeadStatus.NEW: 1,
    LeadStatus.QUOTE_MADE: 2,
    LeadStatus.NEGOTIATION: 3,
    LeadStatus.WON: 4,
    LeadStatus.LOST: 5,
    LeadStatus.UNQUALIFIED: 6,
}

QUOTE_REQUEST_STATUS_ORDER: dict[QuoteRequestStatus, int] = {
    QuoteRequestStatus.PENDING: 1,
    QuoteRequestStatus.ACTIVE: 2,
    QuoteRequestStatus.COMPLETED: 3,
}
