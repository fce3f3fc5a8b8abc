from __future__ import annotations
from pydantic import Field
from uuid import UUID
from datetime import datetime
from contesthub.schemas.common import ApiModel


class SubmissionCreate(ApiModel):
    content: str
    user_name: str | None = Field(default=None, max_length=255)


class SubmissionPublic(ApiModel):
    id: UUID
    contest_id: UUID
    user_email: str
    user_name: str
    content: str
    submitted_at: datetime
    is_winner: bool


class WinnerDeclare(ApiModel):
    contest_id: UUID
