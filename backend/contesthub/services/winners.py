from __future__ import annotations
from uuid import UUID
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.models.contest import Contest
from contesthub.models.submission import Submission


class ContestNotFound(Exception):
    pass

class NotContestOwner(Exception):
    pass

class WinnerAlreadyDeclared(Exception):
    pass

class SubmissionNotFound(Exception):
    pass


async def declare_winner(
    session: AsyncSession,
    *,
    contest_id: UUID,
    submission_id: UUID,
    creator_email: str,
) -> Submission:
    """
    Mark one submission as the contest winner and copy the winner identity
    onto the contest, in a single transaction.

    The contest update only matches while no winner is set, so two racing
    calls cannot both succeed; the partial unique index on submissions
    backs this up.
    """
    contest = await session.get(Contest, contest_id)
    if not contest:
        raise ContestNotFound()
    if contest.creator_email != creator_email:
        raise NotContestOwner()
    if contest.winner_submission_id:
        raise WinnerAlreadyDeclared()

    sub = await session.scalar(
        select(Submission).where(Submission.id == submission_id, Submission.contest_id == contest_id)
    )
    if not sub:
        raise SubmissionNotFound()

    res = await session.execute(
        update(Contest)
        .where(Contest.id == contest_id, Contest.winner_submission_id.is_(None))
        .values(
            winner_submission_id=sub.id,
            winner_user_email=sub.user_email,
            winner_user_name=sub.user_name,
        )
        .execution_options(synchronize_session="fetch")
    )
    if res.rowcount == 0:
        await session.rollback()
        raise WinnerAlreadyDeclared()

    sub.is_winner = True
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise WinnerAlreadyDeclared()
    return sub
