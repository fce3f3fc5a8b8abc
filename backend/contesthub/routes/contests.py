from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from uuid import UUID
import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.config import settings
from contesthub.db import get_session
from contesthub.auth_deps import get_claims
from contesthub.models.contest import Contest
from contesthub.schemas.auth import Claims
from contesthub.schemas.contest import ContestCreate, ContestPublic, ContestPage, LeaderboardRow
from contesthub.services.contests import POPULAR_LIMIT, public_listing_query, paginate, leaderboard

router = APIRouter(prefix="/contests", tags=["contests"])
leaderboard_router = APIRouter(tags=["contests"])
log = structlog.get_logger()

@router.get("", response_model=ContestPage)
async def list_contests(
    search: str = Query(default=""),
    type: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.contests_page_size, ge=1, le=100),
    session: AsyncSession = Depends(get_session),
):
    q = public_listing_query(search, type).order_by(Contest.created_at.desc(), Contest.id)
    result = await paginate(session, q, page=page, limit=limit)
    result["contests"] = [ContestPublic.model_validate(c) for c in result["contests"]]
    return result

@router.get("/popular", response_model=list[ContestPublic])
async def popular_contests(session: AsyncSession = Depends(get_session)):
    q = (
        select(Contest)
        .where(Contest.status == "approved")
        .order_by(Contest.participation_count.desc(), Contest.created_at.desc())
        .limit(POPULAR_LIMIT)
    )
    rows = (await session.execute(q)).scalars().all()
    return [ContestPublic.model_validate(c) for c in rows]

@router.get("/{contest_id}", response_model=ContestPublic)
async def get_contest(contest_id: UUID, session: AsyncSession = Depends(get_session)):
    contest = await session.get(Contest, contest_id)
    if not contest:
        raise HTTPException(status_code=404, detail="Contest not found")
    return ContestPublic.model_validate(contest)

@router.post("", response_model=ContestPublic, status_code=201)
async def create_contest(
    payload: ContestCreate,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    contest = Contest(
        **payload.model_dump(),
        creator_email=claims.email,
        status="pending",
        participation_count=0,
        created_at=datetime.now(dt_tz.utc),
    )
    session.add(contest)
    await session.commit()
    await session.refresh(contest)
    log.info("contest_created", contest_id=str(contest.id), creator=claims.email)
    return ContestPublic.model_validate(contest)

@leaderboard_router.get("/leaderboard", response_model=list[LeaderboardRow])
async def get_leaderboard(session: AsyncSession = Depends(get_session)):
    return [LeaderboardRow(**row) for row in await leaderboard(session)]
