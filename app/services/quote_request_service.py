"""Quote request workflow: submit, claim (start working), complete, and listing."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import aliased, joinedload

from app.auth.identity import Principal
from app.auth.rbac import require
from app.core.exceptions import AuthorizationError, ValidationError
from app.models import Lead, LeadAssignment, QuoteRequest
from app.models.base import utcnow
from app.models.enums import (
    QUOTE_REQUEST_STATUS_ORDER,
    LeadStatus,
    QuoteRequestStatus,
    QuoteType,
    UserRole,
)
from app.orchestration.state_machine import QUOTE_REQUEST_FLOW
from app.services.base_service import BaseService
from app.services.query_filters import (
    as_datetime_range,
    month_range,
    normalize_choice,
    ordinal_case,
    parse_month,
    parse_year,
    year_range,
)
from app.utils.validators import optional_text, parse_amount, parse_enum, sanitize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuoteRequestFilters:
    sales_person_id: str | None = None
    quote_type: str | None = None
    year: str | None = None
    month: str | None = None
    search: str | None = None


@dataclass
class QuoteRequestListing:
    items: list[QuoteRequest] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)


class QuoteRequestService(BaseService):
    """Service for the pending -> active -> completed quote lifecycle."""

    def submit(self, lead_id: str, quote_type: Any, actor: Principal) -> QuoteRequest:
        require(actor.role, "quote_request.submit")
        resolved_type = parse_enum(QuoteType, quote_type or QuoteType.FRESH, "quote_type")
        lead = self.get_or_404(Lead, lead_id, "Lead")

        assignment = self.db.scalar(select(LeadAssignment).where(LeadAssignment.lead_id == lead.id))
        if assignment is None:
            raise ValidationError(f"Lead {lead_id} has no assigned sales person; cannot request a quote.")
        if actor.role == UserRole.SALES_REP and assignment.user_id != actor.user_id:
            raise AuthorizationError(f"Lead {lead_id} is not assigned to you.")

        request = QuoteRequest(
            lead_id=lead.id,
            sales_rep_id=assignment.user_id,
            status=QuoteRequestStatus.PENDING,
            quote_value=0,
            type=resolved_type,
        )
        self.db.add(request)
        self.commit("quote_request.submit", lead_id=lead_id, actor_id=actor.user_id)
        self.db.refresh(request)

        logger.info(
            "quote_request.submitted",
            extra={"event": "quote_request.submitted", "quote_request_id": request.id, "lead_id": lead_id},
        )
        return request

    def start_working(
        self,
        quote_request_id: str,
        quote_number: Any,
        actor: Principal,
        lead_id: str | None = None,
    ) -> QuoteRequest:
        """Claim a pending request and stamp the quote number on its lead.

        Both rows are committed together; a failed commit rolls the session
        back so the request stays pending with no quote maker.
        """
        require(actor.role, "quote_request.claim")
        number = sanitize_text(quote_number, max_len=100)
        if not number:
            raise ValidationError("Quote number is required")

        request = self.get_or_404(QuoteRequest, quote_request_id, "Quote request")
        self._check_lead_pairing(request, lead_id)
        QUOTE_REQUEST_FLOW.assert_transition(request.status, QuoteRequestStatus.ACTIVE)
        lead = self.get_or_404(Lead, request.lead_id, "Lead")

        request.status = QuoteRequestStatus.ACTIVE
        request.quote_maker_id = actor.user_id
        lead.quote_number = number
        lead.status = LeadStatus.QUOTE_MADE

        self.commit("quote_request.claim", quote_request_id=quote_request_id, lead_id=lead.id)
        self.db.refresh(request)

        logger.info(
            "quote_request.claimed",
            extra={"event": "quote_request.claimed", "quote_request_id": request.id, "quote_maker_id": actor.user_id},
        )
        return request

    def complete(
        self,
        quote_request_id: str,
        quote_value: Any,
        actor: Principal,
        quote_type: Any = None,
        lead_id: str | None = None,
    ) -> QuoteRequest:
        require(actor.role, "quote_request.complete")
        value = parse_amount(quote_value, "quote_value", allow_zero=False)
        resolved_type = parse_enum(QuoteType, quote_type, "quote_type") if optional_text(quote_type) else None

        request = self.get_or_404(QuoteRequest, quote_request_id, "Quote request")
        self._check_lead_pairing(request, lead_id)
        QUOTE_REQUEST_FLOW.assert_transition(request.status, QuoteRequestStatus.COMPLETED)
        lead = self.get_or_404(Lead, request.lead_id, "Lead")

        request.status = QuoteRequestStatus.COMPLETED
        request.quote_value = value
        request.quoted_at = utcnow()
        request.quote_maker_id = actor.user_id
        if resolved_type is not None:
            request.type = resolved_type
        lead.quote_value = value
        lead.status = LeadStatus.QUOTE_MADE

        self.commit("quote_request.complete", quote_request_id=quote_request_id, lead_id=lead.id)
        self.db.refresh(request)

        logger.info(
            "quote_request.completed",
            extra={
                "event": "quote_request.completed",
                "quote_request_id": request.id,
                "lead_id": lead.id,
                "quote_value": str(value),
            },
        )
        return request

    def list_quote_requests(
        self,
        filters: QuoteRequestFilters,
        actor: Principal,
        today: date | None = None,
    ) -> QuoteRequestListing:
        require(actor.role, "quote_request.read")
        lead = aliased(Lead)
        query = (
            select(QuoteRequest)
            .join(lead, QuoteRequest.lead_id == lead.id)
            .options(
                joinedload(QuoteRequest.lead),
                joinedload(QuoteRequest.sales_rep),
                joinedload(QuoteRequest.quote_maker),
            )
        )

        sales_person_id = normalize_choice(filters.sales_person_id)
        if sales_person_id is not None:
            query = query.where(QuoteRequest.sales_rep_id == sales_person_id)

        quote_type = normalize_choice(filters.quote_type)
        if quote_type is not None:
            query = query.where(QuoteRequest.type == parse_enum(QuoteType, quote_type, "quote_type"))

        year, month = parse_year(filters.year), parse_month(filters.month)
        bounds = None
        if year is not None:
            bounds = month_range(year, month) if month is not None else year_range(year)
        elif month is not None:
            bounds = month_range((today or date.today()).year, month)
        if bounds is not None:
            start, end = as_datetime_range(bounds)
            effective_date = func.coalesce(QuoteRequest.quoted_at, QuoteRequest.requested_at)
            query = query.where(effective_date >= start, effective_date < end)

        term = sanitize_text(filters.search, max_len=200)
        if term:
            query = query.where(
                or_(lead.name.icontains(term, autoescape=True), lead.address.icontains(term, autoescape=True))
            )

        query = query.order_by(
            ordinal_case(QuoteRequest.status, QUOTE_REQUEST_STATUS_ORDER).asc(),
            QuoteRequest.requested_at.asc(),
            QuoteRequest.id.asc(),
        )
        rows = list(self.db.scalars(query).unique().all())

        tally = Counter(row.status for row in rows)
        counts = {status.value: tally.get(status, 0) for status in QuoteRequestStatus}
        return QuoteRequestListing(items=rows, counts=counts)

    @staticmethod
    def _check_lead_pairing(request: QuoteRequest, lead_id: str | None) -> None:
        if lead_id and lead_id != request.lead_id:
            raise ValidationError(f"Quote request {request.id} does not belong to lead {lead_id}.")
