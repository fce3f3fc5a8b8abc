from __future__ import annotations
from uuid import UUID
import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.db import get_session
from contesthub.auth_deps import get_claims
from contesthub.models.contest import Contest
from contesthub.schemas.auth import Claims
from contesthub.schemas.common import MutationResult, DeleteResult
from contesthub.schemas.contest import ContestPublic, ContestUpdate
from contesthub.services.contests import CREATOR_EDITABLE, creator_scope

router = APIRouter(prefix="/creator", tags=["creator"])
log = structlog.get_logger()

@router.get("/contests", response_model=list[ContestPublic])
async def my_contests(session: AsyncSession = Depends(get_session), claims: Claims = Depends(get_claims)):
    q = select(Contest).where(Contest.creator_email == claims.email).order_by(Contest.created_at.desc())
    rows = (await session.execute(q)).scalars().all()
    return [ContestPublic.model_validate(c) for c in rows]

@router.patch("/contests/{contest_id}", response_model=MutationResult)
async def edit_contest(
    contest_id: UUID,
    payload: ContestUpdate,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    """Edit an own contest while it is pending. A non-matching contest is
    not an error: the result just reports zero matched rows."""
    values = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if k in CREATOR_EDITABLE}
    if values.get("name", "") is None:
        del values["name"]

    scope = creator_scope(contest_id, claims.email)
    matched = await session.scalar(select(func.count()).select_from(Contest).where(*scope)) or 0
    modified = 0
    if matched and values:
        res = await session.execute(
            update(Contest).where(*scope).values(**values).execution_options(synchronize_session="fetch")
        )
        modified = res.rowcount
        await session.commit()
    return MutationResult(matched_count=int(matched), modified_count=int(modified))

@router.delete("/contests/{contest_id}", response_model=DeleteResult)
async def delete_own_contest(
    contest_id: UUID,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    res = await session.execute(delete(Contest).where(*creator_scope(contest_id, claims.email)))
    if res.rowcount == 0:
        await session.rollback()
        raise HTTPException(
            status_code=400,
            detail="Only your own pending contests can be deleted or this contest no longer exists.",
        )
    await session.commit()
    log.info("contest_deleted", contest_id=str(contest_id), by=claims.email, scope="creator")
    return DeleteResult(deleted_count=res.rowcount)
