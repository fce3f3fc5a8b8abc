from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Numeric, DateTime, Text, Uuid, CheckConstraint, func
from contesthub.db import Base

class Contest(Base):
    __tablename__ = "contests"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(160), nullable=False)
    image: Mapped[str | None] = mapped_column(Text())
    description: Mapped[str | None] = mapped_column(Text())
    price: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False))
    prize_money: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False))
    task_instruction: Mapped[str | None] = mapped_column(Text())
    type: Mapped[str | None] = mapped_column(String(64), index=True)
    deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    creator_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(16), index=True, nullable=False, default="pending")  # pending|approved|rejected
    participation_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Winner fields are written together, exactly once.
    winner_submission_id: Mapped[uuid.UUID | None] = mapped_column(Uuid)
    winner_user_email: Mapped[str | None] = mapped_column(String(255), index=True)
    winner_user_name: Mapped[str | None] = mapped_column(String(255))

    __table_args__ = (
        CheckConstraint("participation_count >= 0", name="ck_contests_participation_nonneg"),
    )
