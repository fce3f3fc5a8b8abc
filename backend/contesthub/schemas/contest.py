from __future__ import annotations
from pydantic import Field
from uuid import UUID
from datetime import datetime
from contesthub.schemas.common import ApiModel, ContestStatus, Role

class ContestCreate(ApiModel):
    # status, participation_count and winner fields are server-controlled
    name: str = Field(min_length=1, max_length=160)
    image: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    prize_money: float | None = Field(default=None, ge=0)
    task_instruction: str | None = None
    type: str | None = Field(default=None, max_length=64)
    deadline: datetime | None = None

class ContestUpdate(ApiModel):
    name: str | None = Field(default=None, min_length=1, max_length=160)
    image: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    prize_money: float | None = Field(default=None, ge=0)
    task_instruction: str | None = None
    type: str | None = Field(default=None, max_length=64)
    deadline: datetime | None = None

class ContestPublic(ApiModel):
    id: UUID
    name: str
    image: str | None = None
    description: str | None = None
    price: float | None = None
    prize_money: float | None = None
    task_instruction: str | None = None
    type: str | None = None
    deadline: datetime | None = None
    creator_email: str
    status: ContestStatus
    participation_count: int
    created_at: datetime
    winner_submission_id: UUID | None = None
    winner_user_email: str | None = None
    winner_user_name: str | None = None

class ContestPage(ApiModel):
    contests: list[ContestPublic]
    total: int
    page: int
    total_pages: int

class StatusUpdate(ApiModel):
    status: ContestStatus

class LeaderboardRow(ApiModel):
    email: str
    name: str
    photo_url: str | None = Field(default=None, alias="photoURL")
    role: Role | None = None
    wins: int
    total_prize: float
