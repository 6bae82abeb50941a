"""Quote request workflow endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.identity import Principal
from app.core.dependencies import get_current_user, get_db_session
from app.schemas.quote_requests import (
    QuoteRequestCompleteRequest,
    QuoteRequestListResponse,
    QuoteRequestResponse,
    QuoteRequestStartRequest,
)
from app.services.quote_request_service import QuoteRequestFilters, QuoteRequestService

router = APIRouter(prefix="/quote-requests", tags=["quote-requests"])


@router.get("")
def list_quote_requests(
    sales_person_id: str | None = Query(default=None),
    quote_type: str | None = Query(default=None),
    year: str | None = Query(default=None),
    month: str | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    filters = QuoteRequestFilters(
        sales_person_id=sales_person_id,
        quote_type=quote_type,
        year=year,
        month=month,
        search=search,
    )
    listing = QuoteRequestService(db).list_quote_requests(filters, principal)
    body = QuoteRequestListResponse(
        items=[QuoteRequestResponse.model_validate(row) for row in listing.items],
        counts=listing.counts,
    )
    return {"status": "ok", "data": body.model_dump(mode="json")}


@router.post("/{quote_request_id}/start")
def start_working(
    quote_request_id: str,
    payload: QuoteRequestStartRequest,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    request = QuoteRequestService(db).start_working(
        quote_request_id, payload.quote_number, principal, lead_id=payload.lead_id
    )
    return {"status": "ok", "data": QuoteRequestResponse.model_validate(request).model_dump(mode="json")}


@router.post("/{quote_request_id}/complete")
def complete(
    quote_request_id: str,
    payload: QuoteRequestCompleteRequest,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    request = QuoteRequestService(db).complete(
        quote_request_id,
        payload.quote_value,
        principal,
        quote_type=payload.quote_type,
        lead_id=payload.lead_id,
    )
    return {"status": "ok", "data": QuoteRequestResponse.model_validate(request).model_dump(mode="json")}
