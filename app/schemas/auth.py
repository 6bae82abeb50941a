"""Auth schema module."""

from __future__ import annotations

from pydantic import BaseModel


class TokenClaims(BaseModel):
    sub: str
    exp: int
    iat: int
    jti: str


class PrincipalResponse(BaseModel):
    user_id: str
    role: str
    full_name: str | None = None
