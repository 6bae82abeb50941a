"""Pydantic schema package for API contracts."""

from app.schemas.auth import PrincipalResponse, TokenClaims
from app.schemas.common import ErrorEnvelope, LeadSummary, UserSummary
from app.schemas.dashboard import DashboardSummary, NameValue
from app.schemas.deals import DealCreateRequest, DealResponse, DealUpdateRequest
from app.schemas.leads import (
    LeadAssignmentResponse,
    LeadCreateRequest,
    LeadListResponse,
    LeadResponse,
    LeadUpdateRequest,
)
from app.schemas.quote_requests import (
    QuoteRequestCompleteRequest,
    QuoteRequestListResponse,
    QuoteRequestResponse,
    QuoteRequestStartRequest,
    QuoteRequestSubmitRequest,
)

__all__ = [
    "DashboardSummary",
    "DealCreateRequest",
    "DealResponse",
    "DealUpdateRequest",
    "ErrorEnvelope",
    "LeadAssignmentResponse",
    "LeadCreateRequest",
    "LeadListResponse",
    "LeadResponse",
    "LeadSummary",
    "LeadUpdateRequest",
    "NameValue",
    "PrincipalResponse",
    "QuoteRequestCompleteRequest",
    "QuoteRequestListResponse",
    "QuoteRequestResponse",
    "QuoteRequestStartRequest",
    "QuoteRequestSubmitRequest",
    "TokenClaims",
    "UserSummary",
]
