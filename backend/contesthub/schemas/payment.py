from __future__ import annotations
from pydantic import Field
from uuid import UUID
from datetime import datetime
from contesthub.schemas.common import ApiModel
from contesthub.schemas.contest import ContestPublic

class CreateIntentRequest(ApiModel):
    contest_id: UUID

class CreateIntentResponse(ApiModel):
    client_secret: str

class PaymentCreate(ApiModel):
    contest_id: UUID
    amount: float = Field(ge=0)
    transaction_id: str = Field(min_length=1, max_length=128)

class PaymentPublic(ApiModel):
    id: UUID
    user_email: str
    contest_id: UUID
    amount: float
    transaction_id: str
    payment_status: str
    paid_at: datetime

class PaymentWithContest(PaymentPublic):
    contest: ContestPublic

class RegistrationStatus(ApiModel):
    registered: bool
