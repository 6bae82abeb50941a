"""Auth endpoints for API v1.

Tokens are issued by the identity provider; this API only verifies them.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.auth.identity import Principal
from app.core.dependencies import get_current_user
from app.schemas.auth import PrincipalResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=PrincipalResponse)
def me(principal: Principal = Depends(get_current_user)) -> PrincipalResponse:
    return PrincipalResponse(user_id=principal.user_id, role=principal.role.value, full_name=principal.full_name)
