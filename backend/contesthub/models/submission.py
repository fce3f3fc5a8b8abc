from __future__ import annotations
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Boolean, DateTime, ForeignKey, Index, Uuid, func, text
from contesthub.db import Base


class Submission(Base):
    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    contest_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("contests.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text(), nullable=False)

    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        # at most one winner per contest
        Index(
            "uq_submission_one_winner",
            "contest_id",
            unique=True,
            postgresql_where=text("is_winner"),
            sqlite_where=text("is_winner = 1"),
        ),
    )
