"""Deal (order) endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.auth.identity import Principal
from app.core.dependencies import get_current_user, get_db_session
from app.schemas.deals import DealCreateRequest, DealResponse, DealUpdateRequest
from app.services.deal_service import DealFilters, DealService

router = APIRouter(prefix="/deals", tags=["deals"])


@router.get("")
def list_deals(
    sales_person_id: str | None = Query(default=None),
    year: str | None = Query(default=None),
    month: str | None = Query(default=None),
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    filters = DealFilters(sales_person_id=sales_person_id, year=year, month=month)
    orders = DealService(db).list_deals(principal, filters)
    return {
        "status": "ok",
        "data": [DealResponse.model_validate(order).model_dump(mode="json") for order in orders],
    }


@router.get("/{order_id}")
def get_deal(
    order_id: str,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    order = DealService(db).get_deal(order_id, principal)
    return {"status": "ok", "data": DealResponse.model_validate(order).model_dump(mode="json")}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_deal(
    payload: DealCreateRequest,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    data = payload.model_dump(exclude_unset=True, exclude={"lead_id"})
    order = DealService(db).create_deal(payload.lead_id, data, principal)
    return {"status": "ok", "data": DealResponse.model_validate(order).model_dump(mode="json")}


@router.patch("/{order_id}")
def update_deal(
    order_id: str,
    payload: DealUpdateRequest,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    order = DealService(db).update_deal(order_id, payload.model_dump(exclude_unset=True), principal)
    return {"status": "ok", "data": DealResponse.model_validate(order).model_dump(mode="json")}
