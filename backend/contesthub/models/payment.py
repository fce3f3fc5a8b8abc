from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Numeric, DateTime, Uuid, func
from contesthub.db import Base

class Payment(Base):
    """
    A confirmed charge for one user entering one contest.
    Only the terminal "paid" state is stored.
    contest_id carries no foreign key: payments outlive deleted contests.
    Idempotency: transaction_id (processor payment_intent id) is unique.
    """
    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    contest_id: Mapped[uuid.UUID] = mapped_column(Uuid, index=True, nullable=False)

    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)  # e.g. pi_...
    payment_status: Mapped[str] = mapped_column(String(16), nullable=False, default="paid")

    paid_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
