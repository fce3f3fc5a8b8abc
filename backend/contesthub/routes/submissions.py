from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from uuid import UUID
import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.db import get_session
from contesthub.auth_deps import get_claims
from contesthub.models.contest import Contest
from contesthub.models.submission import Submission
from contesthub.schemas.auth import Claims
from contesthub.schemas.common import MutationResult
from contesthub.schemas.submission import SubmissionCreate, SubmissionPublic, WinnerDeclare
from contesthub.services.payments import is_registered
from contesthub.services.winners import (
    declare_winner, ContestNotFound, NotContestOwner, WinnerAlreadyDeclared, SubmissionNotFound,
)

router = APIRouter(tags=["submissions"])
log = structlog.get_logger()

@router.post("/contests/{contest_id}/submissions", response_model=SubmissionPublic, status_code=201)
async def submit_entry(
    contest_id: UUID,
    payload: SubmissionCreate,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    if not payload.content.strip():
        raise HTTPException(status_code=400, detail="Submission content is required")
    contest = await session.get(Contest, contest_id)
    if not contest:
        raise HTTPException(status_code=404, detail="Contest not found")
    if not await is_registered(session, user_email=claims.email, contest_id=contest_id):
        raise HTTPException(status_code=403, detail="You must register for this contest before submitting")

    sub = Submission(
        contest_id=contest_id,
        user_email=claims.email,
        user_name=payload.user_name or claims.email,
        content=payload.content,
        submitted_at=datetime.now(dt_tz.utc),
        is_winner=False,
    )
    session.add(sub)
    await session.commit()
    await session.refresh(sub)
    log.info("submission_created", submission_id=str(sub.id), contest_id=str(contest_id))
    return SubmissionPublic.model_validate(sub)

@router.get("/creator/contests/{contest_id}/submissions", response_model=list[SubmissionPublic])
async def list_contest_submissions(
    contest_id: UUID,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    contest = await session.get(Contest, contest_id)
    if not contest:
        raise HTTPException(status_code=404, detail="Contest not found")
    if contest.creator_email != claims.email:
        raise HTTPException(status_code=403, detail="Forbidden: not your contest")
    q = select(Submission).where(Submission.contest_id == contest.id).order_by(Submission.submitted_at.desc())
    rows = (await session.execute(q)).scalars().all()
    return [SubmissionPublic.model_validate(s) for s in rows]

@router.patch("/creator/submissions/{submission_id}/winner", response_model=MutationResult)
async def mark_winner(
    submission_id: UUID,
    payload: WinnerDeclare,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    try:
        sub = await declare_winner(
            session,
            contest_id=payload.contest_id,
            submission_id=submission_id,
            creator_email=claims.email,
        )
    except ContestNotFound:
        raise HTTPException(status_code=404, detail="Contest not found")
    except NotContestOwner:
        raise HTTPException(status_code=403, detail="Forbidden: not your contest")
    except WinnerAlreadyDeclared:
        raise HTTPException(status_code=409, detail="Winner already declared for this contest")
    except SubmissionNotFound:
        raise HTTPException(status_code=404, detail="Submission not found")
    log.info("winner_declared", contest_id=str(payload.contest_id), submission_id=str(sub.id), winner=sub.user_email)
    # one submission row + one contest row
    return MutationResult(matched_count=2, modified_count=2)
