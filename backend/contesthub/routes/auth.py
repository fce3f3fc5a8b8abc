from __future__ import annotations
from fastapi import APIRouter
from contesthub.schemas.auth import TokenRequest, TokenResponse
from contesthub.security import issue_token

router = APIRouter(tags=["auth"])

@router.post("/jwt", response_model=TokenResponse)
async def create_token(payload: TokenRequest):
    return TokenResponse(token=issue_token(payload.email))
