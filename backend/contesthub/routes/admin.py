from __future__ import annotations
from uuid import UUID
import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.config import settings
from contesthub.db import get_session
from contesthub.auth_deps import require_admin
from contesthub.models.contest import Contest
from contesthub.models.user import User
from contesthub.schemas.common import ContestStatus, MutationResult, DeleteResult
from contesthub.schemas.contest import ContestPage, ContestPublic, StatusUpdate
from contesthub.services.contests import paginate

router = APIRouter(prefix="/admin", tags=["admin"])
log = structlog.get_logger()

@router.get("/contests", response_model=ContestPage)
async def list_all_contests(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.admin_contests_page_size, ge=1, le=100),
    status: ContestStatus | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
    admin: User = Depends(require_admin),
):
    q = select(Contest)
    if status:
        q = q.where(Contest.status == status)
    q = q.order_by(Contest.created_at.desc(), Contest.id)
    result = await paginate(session, q, page=page, limit=limit)
    result["contests"] = [ContestPublic.model_validate(c) for c in result["contests"]]
    return result

@router.patch("/contests/{contest_id}/status", response_model=MutationResult)
async def set_contest_status(
    contest_id: UUID,
    payload: StatusUpdate,
    session: AsyncSession = Depends(get_session),
    admin: User = Depends(require_admin),
):
    contest = await session.get(Contest, contest_id)
    if not contest:
        raise HTTPException(status_code=404, detail="Contest not found")
    previous = contest.status
    contest.status = payload.status
    await session.commit()
    log.info("contest_status_changed", contest_id=str(contest.id), old=previous, new=payload.status, by=admin.email)
    return MutationResult(matched_count=1, modified_count=int(previous != payload.status))

@router.delete("/contests/{contest_id}", response_model=DeleteResult)
async def delete_contest(
    contest_id: UUID,
    session: AsyncSession = Depends(get_session),
    admin: User = Depends(require_admin),
):
    res = await session.execute(delete(Contest).where(Contest.id == contest_id))
    await session.commit()
    if res.rowcount:
        log.info("contest_deleted", contest_id=str(contest_id), by=admin.email, scope="admin")
    return DeleteResult(deleted_count=res.rowcount)
