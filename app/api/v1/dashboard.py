"""Dashboard summary and chart endpoints for API v1.

Chart parameters that fail to parse fall back to the current year or month
instead of returning an error.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.identity import Principal
from app.core.dependencies import get_current_user, get_db_session
from app.schemas.dashboard import DashboardSummary
from app.services.dashboard_service import DashboardService

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/summary")
def dashboard_summary(
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    summary = DashboardService(db).dashboard_summary(principal)
    return {"status": "ok", "data": DashboardSummary(**summary).model_dump()}


@router.get("/charts/monthly-orders")
def monthly_orders(
    year: str | None = Query(default=None),
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> list[dict]:
    return DashboardService(db).monthly_orders(principal, year)


@router.get("/charts/lead-source")
def lead_source(
    month: str | None = Query(default=None),
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> list[dict]:
    return DashboardService(db).lead_source_breakdown(principal, month)


@router.get("/charts/sales-person")
def sales_person(
    month: str | None = Query(default=None),
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> list[dict]:
    return DashboardService(db).sales_person_breakdown(principal, month)


@router.get("/charts/cash-flow")
def cash_flow(
    year: str | None = Query(default=None),
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> list[dict]:
    return DashboardService(db).cash_flow(principal, year)
