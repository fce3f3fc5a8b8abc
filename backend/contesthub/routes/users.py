from __future__ import annotations
from uuid import UUID
import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.db import get_session
from contesthub.auth_deps import get_claims, require_admin
from contesthub.models.user import User
from contesthub.models.contest import Contest
from contesthub.schemas.auth import Claims
from contesthub.schemas.common import MutationResult
from contesthub.schemas.contest import ContestPublic
from contesthub.schemas.user import (
    UserCreate, UserPublic, RegisterResult, RoleResponse, RoleUpdate, ProfileUpdate, UserStats,
)
from contesthub.services.users import find_by_email, register_user, role_for, user_stats

router = APIRouter(prefix="/users", tags=["users"])
log = structlog.get_logger()

@router.post("", status_code=201, response_model=RegisterResult)
async def register(payload: UserCreate, response: Response, session: AsyncSession = Depends(get_session)):
    user = await register_user(session, payload)
    if user is None:
        response.status_code = 200
        return RegisterResult(inserted_id=None, message="User already exists")
    log.info("user_registered", user_id=str(user.id))
    return RegisterResult(inserted_id=user.id)

@router.get("/role/{email}", response_model=RoleResponse)
async def get_role(email: str, session: AsyncSession = Depends(get_session)):
    return RoleResponse(role=await role_for(session, email))

@router.get("", response_model=list[UserPublic])
async def list_users(session: AsyncSession = Depends(get_session), admin: User = Depends(require_admin)):
    rows = (await session.execute(select(User).order_by(User.created_at.asc()))).scalars().all()
    return [UserPublic.model_validate(u) for u in rows]

@router.get("/me", response_model=UserPublic)
async def me(session: AsyncSession = Depends(get_session), claims: Claims = Depends(get_claims)):
    user = await find_by_email(session, claims.email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.model_validate(user)

@router.patch("/profile", response_model=MutationResult)
async def update_profile(
    payload: ProfileUpdate,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    user = await find_by_email(session, claims.email)
    if not user:
        return MutationResult(matched_count=0, modified_count=0)

    sent = payload.model_dump(exclude_unset=True)
    changes = {}
    # name/photo_url are only written when non-empty; bio may be cleared
    if sent.get("name"):
        changes["name"] = sent["name"]
    if sent.get("photo_url"):
        changes["photo_url"] = sent["photo_url"]
    if "bio" in sent:
        changes["bio"] = sent["bio"]

    modified = any(getattr(user, k) != v for k, v in changes.items())
    for k, v in changes.items():
        setattr(user, k, v)
    await session.commit()
    return MutationResult(matched_count=1, modified_count=int(modified))

@router.get("/stats", response_model=UserStats)
async def stats(session: AsyncSession = Depends(get_session), claims: Claims = Depends(get_claims)):
    return UserStats(**await user_stats(session, claims.email))

@router.get("/wins", response_model=list[ContestPublic])
async def wins(session: AsyncSession = Depends(get_session), claims: Claims = Depends(get_claims)):
    q = select(Contest).where(Contest.winner_user_email == claims.email).order_by(Contest.created_at.desc())
    rows = (await session.execute(q)).scalars().all()
    return [ContestPublic.model_validate(c) for c in rows]

@router.patch("/{user_id}/role", response_model=MutationResult)
async def set_role(
    user_id: UUID,
    payload: RoleUpdate,
    session: AsyncSession = Depends(get_session),
    admin: User = Depends(require_admin),
):
    user = await session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    modified = user.role != payload.role
    previous = user.role
    user.role = payload.role
    await session.commit()
    log.info("user_role_changed", user_id=str(user.id), old=previous, new=payload.role, by=admin.email)
    return MutationResult(matched_count=1, modified_count=int(modified))
