from __future__ import annotations
from math import ceil
from typing import Any
from uuid import UUID
from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.models.contest import Contest
from contesthub.models.user import User

# Fields a creator may change while the contest is pending.
CREATOR_EDITABLE = (
    "name", "image", "description", "price", "prize_money",
    "task_instruction", "type", "deadline",
)

POPULAR_LIMIT = 6
LEADERBOARD_LIMIT = 5


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def public_listing_query(search: str | None = None, type_: str | None = None) -> Select:
    q = select(Contest).where(Contest.status == "approved")
    if search:
        q = q.where(Contest.name.ilike(f"%{_escape_like(search)}%", escape="\\"))
    if type_:
        q = q.where(Contest.type == type_)
    return q


def creator_scope(contest_id: UUID, email: str) -> tuple:
    """Rows a creator may still edit or delete: own and pending."""
    return (
        Contest.id == contest_id,
        Contest.creator_email == email,
        Contest.status == "pending",
    )


async def paginate(session: AsyncSession, q: Select, *, page: int, limit: int) -> dict[str, Any]:
    """Count the filtered set, then return one sorted slice of it.

    ``q`` must already carry its ORDER BY.
    """
    total = await session.scalar(
        select(func.count()).select_from(q.order_by(None).subquery())
    ) or 0
    rows = (await session.execute(q.offset((page - 1) * limit).limit(limit))).scalars().all()
    return {
        "contests": rows,
        "total": int(total),
        "page": page,
        "total_pages": ceil(total / limit),
    }


async def leaderboard(session: AsyncSession, limit: int = LEADERBOARD_LIMIT) -> list[dict[str, Any]]:
    wins = func.count(Contest.id).label("wins")
    total_prize = func.sum(func.coalesce(Contest.prize_money, 0)).label("total_prize")
    agg = (
        select(Contest.winner_user_email.label("email"), wins, total_prize)
        .where(Contest.winner_user_email.is_not(None))
        .group_by(Contest.winner_user_email)
        .subquery()
    )
    q = (
        select(agg.c.email, agg.c.wins, agg.c.total_prize, User.name, User.photo_url, User.role)
        .outerjoin(User, User.email == agg.c.email)
        .order_by(agg.c.wins.desc(), agg.c.total_prize.desc(), agg.c.email.asc())
        .limit(limit)
    )
    rows = (await session.execute(q)).all()
    return [
        {
            "email": email,
            "name": name or email,
            "photo_url": photo_url,
            "role": role,
            "wins": int(n),
            "total_prize": float(prize or 0),
        }
        for (email, n, prize, name, photo_url, role) in rows
    ]
