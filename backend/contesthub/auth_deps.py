from __future__ import annotations
import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.db import get_session
from contesthub.security import decode_token
from contesthub.models.user import User
from contesthub.schemas.auth import Claims

ROLES = ("user", "creator", "admin")

security = HTTPBearer(auto_error=False)

def has_role(user: User | None, role: str) -> bool:
    return user is not None and user.role == role

async def get_claims(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> Claims:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized access")
    try:
        data = decode_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=403, detail="Forbidden access")
    return Claims(email=data["email"], iat=int(data["iat"]), exp=int(data["exp"]))

def require_role(role: str):
    """Dependency factory: the caller's stored role must equal ``role``.

    The user row is read on every request so role changes apply immediately.
    """
    if role not in ROLES:
        raise ValueError(f"unknown role {role!r}")

    async def _dep(
        claims: Claims = Depends(get_claims),
        session: AsyncSession = Depends(get_session),
    ) -> User:
        user = await session.scalar(select(User).where(User.email == claims.email))
        if not has_role(user, role):
            raise HTTPException(status_code=403, detail=f"Forbidden: {role} access only")
        return user

    return _dep

require_admin = require_role("admin")
