"""Lead endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.auth.identity import Principal
from app.core.dependencies import get_current_user, get_db_session
from app.schemas.leads import (
    LeadAssignmentResponse,
    LeadCreateRequest,
    LeadListResponse,
    LeadResponse,
    LeadUpdateRequest,
)
from app.schemas.quote_requests import QuoteRequestResponse, QuoteRequestSubmitRequest
from app.services.lead_service import LeadFilters, LeadService
from app.services.quote_request_service import QuoteRequestService

router = APIRouter(prefix="/leads", tags=["leads"])


@router.get("")
def list_leads(
    sales_person_id: str | None = Query(default=None),
    lead_status: str | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=200),
    sort_by: str = Query(default="status"),
    sort_dir: str = Query(default="asc"),
    page: int = Query(default=1, ge=1),
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    filters = LeadFilters(
        sales_person_id=sales_person_id,
        status=lead_status,
        search=search,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    result = LeadService(db).list_leads(filters, principal, page=page)
    body = LeadListResponse(
        items=[LeadResponse.model_validate(lead) for lead in result.items],
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        total_pages=result.total_pages,
        has_more=result.has_more,
    )
    return {"status": "ok", "data": body.model_dump(mode="json")}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_lead(
    payload: LeadCreateRequest,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    lead = LeadService(db).create_lead(payload.model_dump(exclude_unset=True), principal)
    return {"status": "ok", "data": LeadResponse.model_validate(lead).model_dump(mode="json")}


@router.patch("/{lead_id}")
def update_lead(
    lead_id: str,
    payload: LeadUpdateRequest,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    lead = LeadService(db).update_lead(lead_id, payload.model_dump(exclude_unset=True), principal)
    return {"status": "ok", "data": LeadResponse.model_validate(lead).model_dump(mode="json")}


@router.get("/{lead_id}/assignment")
def get_lead_assignment(
    lead_id: str,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    assignment = LeadService(db).get_lead_assignment(lead_id, principal)
    data = LeadAssignmentResponse.model_validate(assignment).model_dump(mode="json") if assignment else None
    return {"status": "ok", "data": data}


@router.post("/{lead_id}/quote-requests", status_code=status.HTTP_201_CREATED)
def submit_quote_request(
    lead_id: str,
    payload: QuoteRequestSubmitRequest,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    request = QuoteRequestService(db).submit(lead_id, payload.quote_type, principal)
    return {"status": "ok", "data": QuoteRequestResponse.model_validate(request).model_dump(mode="json")}
