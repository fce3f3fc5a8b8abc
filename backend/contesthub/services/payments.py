from __future__ import annotations
from datetime import datetime, timezone as dt_tz
from uuid import UUID
import stripe
from sqlalchemy import select, update, exists
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.config import settings
from contesthub.models.contest import Contest
from contesthub.models.payment import Payment


class PaymentsNotConfigured(Exception):
    pass

class ContestNotFound(Exception):
    pass

class TransactionConflict(Exception):
    """transaction_id already recorded for a different user or contest."""


def to_minor_units(price) -> int:
    """Contest price (e.g. 25.00) -> integral cents (2500)."""
    return int(round(float(price) * 100))


def is_payable_price(price) -> bool:
    if isinstance(price, bool) or price is None:
        return False
    try:
        return float(price) > 0
    except (TypeError, ValueError):
        return False


def create_payment_intent(*, amount_cents: int, contest_id: UUID, user_email: str) -> str:
    """Ask Stripe for a PaymentIntent and hand back its client secret."""
    if not settings.stripe_secret_key:
        raise PaymentsNotConfigured()
    stripe.api_key = settings.stripe_secret_key
    intent = stripe.PaymentIntent.create(
        amount=amount_cents,
        currency=settings.payment_currency,
        payment_method_types=["card"],
        metadata={
            "contest_id": str(contest_id),
            "user_email": user_email,
        },
    )
    return intent["client_secret"]


async def is_registered(session: AsyncSession, *, user_email: str, contest_id: UUID) -> bool:
    found = await session.scalar(
        select(exists().where(
            Payment.user_email == user_email,
            Payment.contest_id == contest_id,
            Payment.payment_status == "paid",
        ))
    )
    return bool(found)


async def record_payment(
    session: AsyncSession,
    *,
    user_email: str,
    contest_id: UUID,
    amount: float,
    transaction_id: str,
) -> tuple[Payment, bool]:
    """
    Store a paid payment and bump the contest's participation_count.
    Both writes land in the caller's transaction (commit is up to the caller).
    Idempotent by transaction_id: returns (payment, created).
    """
    existing = await session.scalar(select(Payment).where(Payment.transaction_id == transaction_id))
    if existing:
        if existing.user_email != user_email or existing.contest_id != contest_id:
            raise TransactionConflict(transaction_id)
        return existing, False

    contest = await session.get(Contest, contest_id)
    if not contest:
        raise ContestNotFound()

    payment = Payment(
        user_email=user_email,
        contest_id=contest_id,
        amount=amount,
        transaction_id=transaction_id,
        payment_status="paid",
        paid_at=datetime.now(dt_tz.utc),
    )
    session.add(payment)
    await session.execute(
        update(Contest)
        .where(Contest.id == contest_id)
        .values(participation_count=Contest.participation_count + 1)
        .execution_options(synchronize_session="fetch")
    )
    return payment, True
