from __future__ import annotations
from uuid import UUID
import stripe
import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from contesthub.db import get_session
from contesthub.auth_deps import get_claims
from contesthub.models.contest import Contest
from contesthub.models.payment import Payment
from contesthub.schemas.auth import Claims
from contesthub.schemas.contest import ContestPublic
from contesthub.schemas.payment import (
    CreateIntentRequest, CreateIntentResponse, PaymentCreate, PaymentPublic, PaymentWithContest, RegistrationStatus,
)
from contesthub.services import payments as payment_service
from contesthub.services.payments import (
    ContestNotFound, PaymentsNotConfigured, TransactionConflict, is_payable_price, is_registered, record_payment, to_minor_units,
)

router = APIRouter(prefix="/payments", tags=["payments"])
log = structlog.get_logger()

@router.post("/create-intent", response_model=CreateIntentResponse)
async def create_intent(
    payload: CreateIntentRequest,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    contest = await session.get(Contest, payload.contest_id)
    if not contest:
        raise HTTPException(status_code=404, detail="Contest not found")
    if not is_payable_price(contest.price):
        raise HTTPException(status_code=400, detail="Invalid contest price")

    amount = to_minor_units(contest.price)
    try:
        secret = payment_service.create_payment_intent(
            amount_cents=amount, contest_id=contest.id, user_email=claims.email,
        )
    except PaymentsNotConfigured:
        raise HTTPException(status_code=500, detail="Stripe not configured")
    except stripe.StripeError as e:
        log.warning("payment_intent_failed", contest_id=str(contest.id), error=str(e))
        raise HTTPException(status_code=502, detail="Payment processor error")
    log.info("payment_intent_created", contest_id=str(contest.id), amount_cents=amount)
    return CreateIntentResponse(client_secret=secret)

@router.post("", response_model=PaymentPublic, status_code=201)
async def save_payment(
    payload: PaymentCreate,
    response: Response,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    try:
        payment, created = await record_payment(
            session,
            user_email=claims.email,
            contest_id=payload.contest_id,
            amount=payload.amount,
            transaction_id=payload.transaction_id,
        )
        if created:
            await session.commit()
    except ContestNotFound:
        raise HTTPException(status_code=404, detail="Contest not found")
    except TransactionConflict:
        raise HTTPException(status_code=409, detail="Transaction already recorded")
    except IntegrityError:
        # same transaction_id recorded concurrently
        await session.rollback()
        raise HTTPException(status_code=409, detail="Transaction already recorded")
    await session.refresh(payment)
    if created:
        log.info("payment_recorded", payment_id=str(payment.id), contest_id=str(payload.contest_id))
    else:
        response.status_code = 200
    return PaymentPublic.model_validate(payment)

@router.get("/my", response_model=list[PaymentWithContest])
async def my_payments(session: AsyncSession = Depends(get_session), claims: Claims = Depends(get_claims)):
    # inner join: payments for deleted contests drop out
    q = (
        select(Payment, Contest)
        .join(Contest, Contest.id == Payment.contest_id)
        .where(Payment.user_email == claims.email, Payment.payment_status == "paid")
        .order_by(Payment.paid_at.desc())
    )
    rows = (await session.execute(q)).all()
    return [
        PaymentWithContest(
            **PaymentPublic.model_validate(p).model_dump(),
            contest=ContestPublic.model_validate(c),
        )
        for (p, c) in rows
    ]

@router.get("/registered/{contest_id}", response_model=RegistrationStatus)
async def registration_status(
    contest_id: UUID,
    session: AsyncSession = Depends(get_session),
    claims: Claims = Depends(get_claims),
):
    return RegistrationStatus(registered=await is_registered(session, user_email=claims.email, contest_id=contest_id))
