from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.models.user import User
from contesthub.models.payment import Payment
from contesthub.models.submission import Submission
from contesthub.schemas.user import UserCreate


async def find_by_email(session: AsyncSession, email: str) -> User | None:
    return await session.scalar(select(User).where(User.email == email))


async def register_user(session: AsyncSession, payload: UserCreate) -> User | None:
    """
    Create the user if the email is new. Returns None when it already exists;
    an existing record (and its role) is never touched.
    """
    if await find_by_email(session, payload.email):
        return None
    user = User(
        email=payload.email,
        name=payload.name,
        photo_url=payload.photo_url,
        bio=payload.bio,
        role="user",
        role_preference=payload.role_preference,
        created_at=datetime.now(dt_tz.utc),
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        # concurrent registration of the same email
        await session.rollback()
        return None
    await session.refresh(user)
    return user


async def role_for(session: AsyncSession, email: str) -> str:
    user = await find_by_email(session, email)
    return user.role if user and user.role else "user"


async def user_stats(session: AsyncSession, email: str) -> dict[str, int]:
    participated = await session.scalar(
        select(func.count()).select_from(Payment)
        .where(Payment.user_email == email, Payment.payment_status == "paid")
    )
    wins = await session.scalar(
        select(func.count()).select_from(Submission)
        .where(Submission.user_email == email, Submission.is_winner.is_(True))
    )
    return {"participated": int(participated or 0), "wins": int(wins or 0)}
