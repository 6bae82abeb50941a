"""User lookup endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.identity import Principal
from app.auth.rbac import require
from app.core.dependencies import get_current_user, get_db_session
from app.schemas.common import UserSummary
from app.services.lead_service import LeadService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/sales-people")
def list_sales_people(
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    require(principal.role, "users.read")
    users = LeadService(db).get_sales_users()
    return {
        "status": "ok",
        "data": [UserSummary.model_validate(user).model_dump(mode="json") for user in users],
    }


@router.get("/{user_id}/lead-assignments")
def list_lead_assignments(
    user_id: str,
    principal: Principal = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    lead_ids = LeadService(db).get_lead_assignments(user_id, principal)
    return {"status": "ok", "data": {"user_id": user_id, "lead_ids": lead_ids}}
